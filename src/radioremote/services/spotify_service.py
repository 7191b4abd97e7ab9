"""Spotify integration service for controlling playback using Spotipy."""

import logging
from pathlib import Path
from typing import Any

import spotipy
from spotipy.oauth2 import SpotifyPKCE

from radioremote.exceptions import PlaybackAuthError, wrap_spotify_error
from radioremote.models import PlaybackDevice, PlaybackSnapshot, SpotifyConfig

logger = logging.getLogger(__name__)

# OAuth scopes required for playback control
SPOTIFY_SCOPES = " ".join([
    "user-read-playback-state",  # Devices and current playback
    "user-modify-playback-state",  # Play/pause/volume/shuffle/transfer
])


class SpotifyService:
    """
    Service for controlling Spotify playback using Spotipy.

    Uses the Spotify Web API with the OAuth 2.0 PKCE flow. Token refresh is
    handled by Spotipy's auth manager; this service only exposes the playback
    calls the radio needs and converts Spotipy failures into PlaybackError
    (DeviceNotFoundError for a 404 on a device-targeted call).

    Usage:
        service = SpotifyService(config.spotify)
        if not service.is_authenticated:
            service.authenticate()  # Opens browser for OAuth

        devices = service.list_devices()
        service.start_playback("spotify:album:xyz", device_id=devices[0].id)
    """

    def __init__(self, config: SpotifyConfig, cache_path: Path | None = None):
        """
        Initialize Spotify service.

        Args:
            config: Spotify configuration with client credentials
            cache_path: Optional path for token cache file. If None, uses
                       ~/.radioremote/.spotify_cache
        """
        self._config = config
        self._sp: spotipy.Spotify | None = None
        self._auth_manager: SpotifyPKCE | None = None

        if cache_path is None:
            cache_path = Path.home() / ".radioremote" / ".spotify_cache"
        self._cache_path = cache_path

        if self.is_configured:
            self._init_auth_manager()

    def _init_auth_manager(self) -> None:
        """Initialize the Spotipy PKCE auth manager."""
        if not self._config.client_id:
            return

        self._cache_path.parent.mkdir(parents=True, exist_ok=True)

        self._auth_manager = SpotifyPKCE(
            client_id=self._config.client_id,
            redirect_uri=self._config.redirect_uri,
            scope=SPOTIFY_SCOPES,
            cache_path=str(self._cache_path),
            open_browser=True,
        )

    def close(self) -> None:
        """Clean up resources."""
        self._sp = None
        self._auth_manager = None

    @property
    def is_configured(self) -> bool:
        """Check if Spotify client ID is configured."""
        return self._config.is_configured

    @property
    def is_authenticated(self) -> bool:
        """Check if we have a cached token (Spotipy refreshes it on use)."""
        if not self.is_configured or not self._auth_manager:
            return False

        return bool(self._auth_manager.get_cached_token())

    def authenticate(self) -> bool:
        """
        Start OAuth 2.0 PKCE authentication flow.

        Opens browser for user to authorize the application.

        Returns:
            True if authentication successful

        Raises:
            PlaybackAuthError: If authentication fails
        """
        if not self.is_configured:
            raise PlaybackAuthError("Spotify client_id not configured")

        if not self._auth_manager:
            self._init_auth_manager()

        if not self._auth_manager:
            raise PlaybackAuthError("Failed to initialize auth manager")

        try:
            logger.info("Opening browser for Spotify authentication...")
            token_info = self._auth_manager.get_access_token()
        except Exception as e:
            logger.error(f"Spotify authentication failed: {e}")
            raise PlaybackAuthError(f"Authentication failed: {e}") from e

        if not token_info:
            raise PlaybackAuthError("Failed to obtain access token")

        self._sp = self._create_client()
        logger.info("Spotify authentication successful")
        return True

    def _create_client(self) -> spotipy.Spotify:
        return spotipy.Spotify(
            auth_manager=self._auth_manager,
            requests_timeout=self._config.request_timeout,
        )

    def _ensure_client(self) -> spotipy.Spotify:
        """Ensure we have an authenticated Spotify client."""
        if self._sp:
            return self._sp

        if not self._auth_manager:
            raise PlaybackAuthError("Not configured - set spotify.client_id first")

        if not self._auth_manager.get_cached_token():
            raise PlaybackAuthError("Not authenticated - run 'radioremote spotify auth' first")

        self._sp = self._create_client()
        return self._sp

    # ------------------------------------------------------------------
    # Reads

    def list_devices(self) -> list[PlaybackDevice]:
        """
        Get available Spotify Connect devices.

        Raises:
            PlaybackError: If the request fails
        """
        sp = self._ensure_client()

        try:
            response = sp.devices() or {}
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, "list devices") from e

        return [PlaybackDevice.model_validate(d) for d in response.get("devices", [])]

    def get_playback_snapshot(self) -> PlaybackSnapshot | None:
        """
        Get the current playback state.

        Returns:
            Snapshot, or None if there is no active playback session
        """
        sp = self._ensure_client()

        try:
            state = sp.current_playback()
        except spotipy.SpotifyException as e:
            if e.http_status == 204:
                return None
            raise wrap_spotify_error(e, "get playback state") from e

        if not state:
            return None
        return PlaybackSnapshot.model_validate(state)

    def get_resource_info(self, uri: str) -> dict[str, Any] | None:
        """
        Look up metadata for a track, album or playlist URI.

        Returns:
            The API object, or None for resource types that can't be looked up
        """
        sp = self._ensure_client()

        parts = uri.split(":")
        if len(parts) < 2:
            return None
        resource_type, object_id = parts[-2], parts[-1]

        try:
            if resource_type == "track":
                return sp.track(object_id)
            if resource_type == "album":
                return sp.album(object_id)
            if resource_type == "playlist":
                return sp.playlist(object_id)
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, f"look up {uri}") from e

        logger.debug(f"No metadata lookup for resource type '{resource_type}'")
        return None

    # ------------------------------------------------------------------
    # Playback control

    def set_volume(self, percent: int, device_id: str | None = None) -> None:
        """Set the volume of the device (0-100)."""
        sp = self._ensure_client()

        try:
            sp.volume(percent, device_id=device_id)
            logger.info(f"Volume set to {percent}%")
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, "set volume", device_id) from e

    def pause(self, device_id: str | None = None) -> None:
        """Pause current playback."""
        sp = self._ensure_client()

        try:
            sp.pause_playback(device_id=device_id)
            logger.info("Playback paused")
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, "pause playback", device_id) from e

    def start_playback(self, context_uri: str, device_id: str | None = None) -> None:
        """Start playing a context (album, playlist, ...)."""
        sp = self._ensure_client()

        try:
            sp.start_playback(device_id=device_id, context_uri=context_uri)
            logger.info(f"Started playing: {context_uri}")
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, f"play {context_uri}", device_id) from e

    def set_shuffle(self, state: bool, device_id: str | None = None) -> None:
        """Turn shuffle on or off."""
        sp = self._ensure_client()

        try:
            sp.shuffle(state, device_id=device_id)
            logger.debug(f"Shuffle {'on' if state else 'off'}")
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, "set shuffle", device_id) from e

    def transfer_playback(self, device_id: str, play: bool) -> None:
        """Move playback to a device, optionally starting it."""
        sp = self._ensure_client()

        try:
            sp.transfer_playback(device_id, force_play=play)
            logger.info(f"Playback transferred to {device_id} (play={play})")
        except spotipy.SpotifyException as e:
            raise wrap_spotify_error(e, "transfer playback", device_id) from e

    def __enter__(self) -> "SpotifyService":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
