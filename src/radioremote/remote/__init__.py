"""Radio remote: serial wire codec, volume debouncing and the controller."""

from .codec import NO_CHANNEL, STATUS_READY, Command, Frame, decode, encode, encode_frame
from .controller import RemoteController
from .debouncer import VolumeDebouncer

__all__ = [
    "NO_CHANNEL",
    "STATUS_READY",
    "Command",
    "Frame",
    "RemoteController",
    "VolumeDebouncer",
    "decode",
    "encode",
    "encode_frame",
]
