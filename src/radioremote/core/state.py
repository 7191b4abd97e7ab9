"""Shared radio state owned by the orchestrator."""

import copy
from dataclasses import dataclass, field
from typing import Any, Literal

from radioremote.models import PlaybackSnapshot

AuthState = Literal["authorized", "unauthorized"]


@dataclass
class RadioState:
    """
    Everything UI clients need to render the radio.

    Mutated only by the orchestrator (under its state lock). Observers always
    receive a copy from snapshot(), never the live object.
    """

    auth_state: AuthState = "unauthorized"
    channels: list[str] = field(default_factory=list)
    # Metadata per channel URI, or "error" when the lookup failed
    channel_info: dict[str, dict[str, Any] | str] = field(default_factory=dict)
    playback_state: PlaybackSnapshot | None = None
    device_id: str | None = None
    indicator: int | None = None

    def snapshot(self) -> "RadioState":
        """Return a deep copy safe to hand to another thread."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for serialization to UI clients."""
        return {
            "auth_state": self.auth_state,
            "channels": list(self.channels),
            "channel_info": copy.deepcopy(self.channel_info),
            "playback_state": self.playback_state.model_dump() if self.playback_state else None,
            "device_id": self.device_id,
            "indicator": self.indicator,
        }
