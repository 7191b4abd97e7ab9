"""Application configuration model."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from radioremote.model_manager.persistence import read_config_file, write_config_file
from radioremote.remote.codec import NO_CHANNEL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".radioremote" / "config.json"

# Environment variables that override file values
ENV_DEVICE_NAME = "RADIOREMOTE_DEVICE_NAME"
ENV_SERIAL_PORT = "RADIOREMOTE_SERIAL_PORT"


class SpotifyConfig(BaseModel):
    """Spotify integration configuration."""

    client_id: str | None = Field(
        default=None,
        description="Spotify OAuth client ID from developer dashboard",
    )
    redirect_uri: str = Field(
        default="http://127.0.0.1:8888/callback",
        description="OAuth redirect URI (must match Spotify app settings)",
    )
    request_timeout: float = Field(
        default=5.0,
        description="Timeout for Spotify Web API requests (seconds)",
    )

    @property
    def is_configured(self) -> bool:
        """Check if Spotify credentials are configured."""
        return self.client_id is not None


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Playback
    device_name: str = Field(
        default="RetroRadio",
        description="Display name of the Spotify device the radio controls",
    )
    channels: list[str] = Field(
        default_factory=list,
        description=(
            "Ordered Spotify context URIs (album, playlist, ...) mapped to the "
            "radio's channel buttons. Position in the list is the channel number."
        ),
    )

    # Timing
    poll_interval_ms: int = Field(
        default=10000, gt=0, description="How often playback state and devices are polled (ms)"
    )
    debounce_ms: int = Field(
        default=500, gt=0, description="Quiet period before volume pulses are applied (ms)"
    )
    heartbeat_ms: int = Field(
        default=5000, gt=0, description="Interval of the READY status frame sent to the remote (ms)"
    )

    # Serial transport
    serial_port: str | None = Field(
        default=None,
        description="Serial port of the remote control (None = run without hardware)",
    )
    baud_rate: int = Field(default=115200, gt=0, description="Serial baud rate")

    # Spotify integration
    spotify: SpotifyConfig = Field(
        default_factory=SpotifyConfig,
        description="Spotify integration configuration",
    )

    @field_validator("channels")
    @classmethod
    def validate_channels(cls, channels: list[str]) -> list[str]:
        """Channel slots 0-14 are usable, slot 15 means 'no channel'."""
        if len(channels) > NO_CHANNEL:
            raise ValueError(f"at most {NO_CHANNEL} channels are supported, got {len(channels)}")
        for uri in channels:
            if not uri or not uri.strip():
                raise ValueError("channel URIs must not be empty")
        return channels

    def with_env_overrides(self) -> "AppConfig":
        """Return a copy with values taken from the environment where set."""
        updates = {}
        if device_name := os.environ.get(ENV_DEVICE_NAME):
            updates["device_name"] = device_name
        if serial_port := os.environ.get(ENV_SERIAL_PORT):
            updates["serial_port"] = serial_port

        if updates:
            logger.info(f"Applying environment overrides: {sorted(updates)}")
            return self.model_copy(update=updates)
        return self

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.radioremote/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        config = read_config_file(path, cls)
        if config is None:
            logger.info(f"No configuration at {path}, using defaults")
            return cls()
        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to file, keeping the previous one as .bak."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        write_config_file(self, path)
