"""CLI commands for radioremote."""

from .config import config_group
from .run import run
from .remote import serial_group
from .spotify import spotify_group

__all__ = ["config_group", "run", "serial_group", "spotify_group"]
