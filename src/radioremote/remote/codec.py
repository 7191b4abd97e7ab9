"""
Wire codec for the radio remote's serial protocol.

Every message in either direction is a single byte::

    bit  7 6 5 4   3 2 1 0
         └──┬──┘   └──┬──┘
         command    value

Both nibbles are 4 bits wide, so values are 0-15. The format is total:
every byte decodes to *some* command/value pair, even if the command is
not one the remote knows about.

Commands
--------

- **SYSTEM_STATUS (0)**: liveness. We send ``READY (1)`` periodically.
- **VOLUME (1)**: inbound ``0`` = knob pressed, ``1`` = turned up,
  anything else = turned down. Outbound ``15`` is part of the error signal.
- **CHANNEL_SELECT (2)**: inbound = channel button pressed, outbound =
  light the indicator for that channel. ``15`` means "no channel".

Example::

    encode(Command.CHANNEL_SELECT, 3)  # 0x23
    decode(0x23)                       # Frame(command=2, value=3)
"""

from enum import IntEnum
from typing import NamedTuple

NIBBLE_MASK = 0x0F

# Reserved channel slot meaning "no channel currently active"
NO_CHANNEL = 15

# SYSTEM_STATUS values
STATUS_READY = 1

# VOLUME values
VOLUME_PRESSED = 0
VOLUME_UP = 1
VOLUME_ERROR = 15


class Command(IntEnum):
    """Command identifiers carried in the high nibble."""

    SYSTEM_STATUS = 0
    VOLUME = 1
    CHANNEL_SELECT = 2


class Frame(NamedTuple):
    """A decoded frame. ``command`` is a plain int since 3-15 are legal on the wire."""

    command: int
    value: int


def encode(command: int, value: int) -> int:
    """
    Pack a command and value into one byte.

    Both inputs are masked to 4 bits; out-of-range input is silently
    truncated rather than rejected.
    """
    return ((command & NIBBLE_MASK) << 4) | (value & NIBBLE_MASK)


def encode_frame(command: int, value: int) -> bytes:
    """Pack a command and value into the one-byte buffer written to the port."""
    return bytes([encode(command, value)])


def decode(byte: int) -> Frame:
    """Split a byte into its command and value nibbles."""
    return Frame(command=(byte >> 4) & NIBBLE_MASK, value=byte & NIBBLE_MASK)
