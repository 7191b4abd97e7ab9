"""Data models for radioremote."""

from .config import AppConfig, SpotifyConfig
from .playback import (
    Channel,
    ChannelList,
    PlaybackContext,
    PlaybackDevice,
    PlaybackSnapshot,
    normalize_context_uri,
)

__all__ = [
    "AppConfig",
    "Channel",
    "ChannelList",
    "PlaybackContext",
    "PlaybackDevice",
    "PlaybackSnapshot",
    "SpotifyConfig",
    "normalize_context_uri",
]
