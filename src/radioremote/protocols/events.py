"""Events raised by the radio remote.

Each event is its own frozen dataclass; ``RemoteEvent`` is the union of all
of them. Consumers dispatch with ``match``::

    match event:
        case VolumeChanged(amount=amount): ...
        case VolumePressed(): ...
        case ChannelSelected(channel=channel): ...
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class VolumePressed:
    """The volume knob was pushed."""


@dataclass(frozen=True)
class VolumeChanged:
    """The volume knob was turned; ``amount`` is the net change in percent."""

    amount: int


@dataclass(frozen=True)
class ChannelSelected:
    """A channel button was pressed (0-14 are channel slots, 15 means none)."""

    channel: int


RemoteEvent = VolumePressed | VolumeChanged | ChannelSelected
