"""Event types and observer protocols."""

from .events import ChannelSelected, RemoteEvent, VolumeChanged, VolumePressed
from .observers import RemoteObserver, StateObserver

__all__ = [
    # Events
    "ChannelSelected",
    "RemoteEvent",
    "VolumeChanged",
    "VolumePressed",
    # Observers
    "RemoteObserver",
    "StateObserver",
]
