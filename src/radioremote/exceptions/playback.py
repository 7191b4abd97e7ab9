"""Playback-related exceptions.

These wrap failures of the Spotify Web API:
- PlaybackError: Base class for playback API failures
- DeviceNotFoundError: A device-targeted call answered 404 (bound device is gone)
- PlaybackAuthError: No usable Spotify credentials
"""

from .base import RadioRemoteError


class PlaybackError(RadioRemoteError):
    """A playback API call failed."""

    default_recoverable = True

    def __init__(self, user_message: str, http_status: int | None = None, **kwargs):
        """
        Initialize playback error.

        Args:
            user_message: User-friendly error message
            http_status: HTTP status reported by the API (if any)
        """
        super().__init__(user_message, **kwargs)
        self.http_status = http_status


class DeviceNotFoundError(PlaybackError):
    """The targeted playback device no longer exists."""

    default_hint = (
        "Make sure the speaker is switched on and logged in to Spotify. "
        "Run 'radioremote spotify devices' to see available devices."
    )

    def __init__(self, device_id: str | None = None, original_error: str | None = None):
        """
        Initialize device-not-found error.

        Args:
            device_id: The device ID that vanished
            original_error: The original error message from the API
        """
        tech_msg = f"Playback device {device_id} not found"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__("Playback device not found.", http_status=404, technical_message=tech_msg)
        self.device_id = device_id


class PlaybackAuthError(PlaybackError):
    """Spotify authentication is missing or failed."""

    default_hint = "Run 'radioremote spotify auth' to log in to Spotify."
