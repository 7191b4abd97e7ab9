"""Playback data models: channels, devices and playback snapshots."""

from pydantic import BaseModel, ConfigDict, Field

# Number of trailing ':'-separated components kept when comparing contexts
CONTEXT_KEY_COMPONENTS = 3


def normalize_context_uri(uri: str) -> str:
    """
    Reduce a context identifier to its comparable key.

    The Web API may report enriched identifiers (for example
    ``spotify:user:someone:playlist:abc``); only the last three components
    are kept.
    """
    parts = uri.split(":")
    return ":".join(parts[-CONTEXT_KEY_COMPONENTS:])


class Channel(BaseModel):
    """A playback context bound to one of the radio's channel slots."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Channel slot (0-based position in the channel list)")
    uri: str = Field(description="Spotify context URI as configured")

    @property
    def context_uri(self) -> str:
        """Full URI usable for starting playback."""
        if self.uri.startswith("spotify:"):
            return self.uri
        return f"spotify:{self.uri}"

    @property
    def resource_type(self) -> str:
        """Resource type (album, playlist, track, ...)."""
        return self.context_uri.split(":")[-2]

    @property
    def resource_id(self) -> str:
        """Spotify object ID."""
        return self.context_uri.split(":")[-1]


class ChannelList:
    """
    Ordered, immutable list of channels, fixed at startup.

    A channel matches a context key when the channel's (normalized)
    components equal the trailing components of the key, so both the full
    ``spotify:album:id`` form and the bare ``album:id`` form match.
    The first matching channel in list order wins.
    """

    def __init__(self, uris: list[str] | tuple[str, ...] = ()):
        self._channels = tuple(Channel(index=i, uri=uri) for i, uri in enumerate(uris))

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self):
        return iter(self._channels)

    def __getitem__(self, index: int) -> Channel:
        return self._channels[index]

    def __repr__(self) -> str:
        return f"ChannelList({[c.uri for c in self._channels]!r})"

    @property
    def uris(self) -> list[str]:
        """Configured URIs in channel order."""
        return [c.uri for c in self._channels]

    def get(self, index: int) -> Channel | None:
        """Return the channel in slot ``index`` or None if the slot is unused."""
        if 0 <= index < len(self._channels):
            return self._channels[index]
        return None

    def index_of(self, context_key: str) -> int | None:
        """
        Find the channel slot for a normalized context key.

        Returns:
            Index of the first matching channel, or None if nothing matches
        """
        key_parts = context_key.split(":")
        for channel in self._channels:
            channel_parts = normalize_context_uri(channel.uri).split(":")
            if len(channel_parts) < 2 or len(channel_parts) > len(key_parts):
                continue
            if key_parts[-len(channel_parts):] == channel_parts:
                return channel.index
        return None


class PlaybackDevice(BaseModel):
    """A Spotify Connect device as reported by the Web API."""

    id: str | None = None
    name: str = ""
    type: str | None = None
    is_active: bool = False
    volume_percent: int | None = None


class PlaybackContext(BaseModel):
    """The context (album, playlist, ...) that playback was started from."""

    uri: str | None = None
    type: str | None = None


class PlaybackSnapshot(BaseModel):
    """Point-in-time read of the remote playback state."""

    device: PlaybackDevice | None = None
    is_playing: bool = False
    context: PlaybackContext | None = None

    @property
    def device_id(self) -> str | None:
        """ID of the device playback is happening on."""
        return self.device.id if self.device else None

    @property
    def volume_percent(self) -> int | None:
        """Current volume of the active device."""
        return self.device.volume_percent if self.device else None

    @property
    def has_context(self) -> bool:
        """True when playback was started from a context."""
        return self.context is not None

    @property
    def context_uri(self) -> str | None:
        """URI of the current context, if any."""
        return self.context.uri if self.context else None
