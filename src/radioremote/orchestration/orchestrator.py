"""
Application orchestrator for the radio remote.

This module wires the serial remote to the Spotify playback service:
hardware events become playback actions, and a poll loop keeps the channel
indicator and the shared RadioState in sync with what Spotify reports.
"""

import logging
import threading
from typing import Optional

from radioremote.core import PlaybackReconciler, RadioState
from radioremote.exceptions import (
    DeviceNotFoundError,
    PlaybackAuthError,
    PlaybackError,
    RadioRemoteError,
    handle_errors,
)
from radioremote.model_manager import StateObservers
from radioremote.models import AppConfig, ChannelList, PlaybackSnapshot
from radioremote.protocols import (
    ChannelSelected,
    RemoteEvent,
    StateObserver,
    VolumeChanged,
    VolumePressed,
)
from radioremote.remote import RemoteController
from radioremote.services import SpotifyService

logger = logging.getLogger(__name__)


class RadioOrchestrator:
    """
    Top-level orchestrator for the radio remote application.

    Coordinates:
    - The remote controller (serial hardware, volume debouncing, heartbeat)
    - The Spotify service (playback reads and commands)
    - The reconciler (channel indicator)
    - Shared state and its observers (UI clients)

    Architecture:
        RadioOrchestrator (this class)
        ├── Core State: RadioState (guarded by _state_lock)
        ├── Hardware: remote (RemoteController)
        ├── Services: spotify (SpotifyService), reconciler
        └── Observers: StateObserver implementations

    Threads:
        Remote events arrive on the serial reader thread (channel/volume
        buttons) or the debounce timer thread (volume changes). The poll
        loop runs on its own thread. Polls never overlap: one that starts
        while another is in flight is skipped.
    """

    def __init__(
        self,
        config: AppConfig,
        remote: Optional[RemoteController] = None,
        spotify: Optional[SpotifyService] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Application configuration
            remote: Remote controller to use (built from config if None)
            spotify: Spotify service to use (built from config if None)
        """
        self.config = config
        self.channels = ChannelList(config.channels)

        if remote is None:
            remote = RemoteController(
                config.serial_port,
                baud_rate=config.baud_rate,
                debounce_window=config.debounce_ms / 1000,
                heartbeat_interval=config.heartbeat_ms / 1000,
            )
        self.remote = remote
        self.spotify = spotify if spotify is not None else SpotifyService(config.spotify)
        self.reconciler = PlaybackReconciler(self.remote, self.channels, config.device_name)

        # Core state - owned by orchestrator
        self._state = RadioState(channels=self.channels.uris)
        self._state_lock = threading.Lock()

        self._poll_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._poll_thread: Optional[threading.Thread] = None
        self._running = False

        # Has its own lock; observers are notified outside _state_lock
        self._state_observers = StateObservers()

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: StateObserver) -> None:
        """Register an observer for state updates."""
        self._state_observers.register(observer)

    def unregister_observer(self, observer: StateObserver) -> None:
        """Unregister a state observer."""
        self._state_observers.unregister(observer)

    def _broadcast(self) -> None:
        with self._state_lock:
            state = self._state.snapshot()
        self._state_observers.notify(state)

    # =================================================================
    # Read-Only State Access
    # =================================================================

    @property
    def state(self) -> RadioState:
        """Copy of the current radio state."""
        with self._state_lock:
            return self._state.snapshot()

    @property
    def device_id(self) -> Optional[str]:
        """ID of the bound playback device, or None if it wasn't found."""
        with self._state_lock:
            return self._state.device_id

    @property
    def is_running(self) -> bool:
        return self._running

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self) -> None:
        """Start the remote, do an initial sync and start polling."""
        if self._running:
            logger.warning("Orchestrator is already running")
            return

        logger.info(f"Starting orchestrator for device '{self.config.device_name}'")
        self._running = True
        self._stop_event.clear()

        self.remote.register_observer(self)
        self.remote.start()

        if self._refresh_auth_state():
            self.update_channel_info()
        self.poll()

        self._poll_thread = threading.Thread(target=self._poll_loop, daemon=True)
        self._poll_thread.start()

    def stop(self) -> None:
        """Stop polling and release the remote."""
        if not self._running:
            return

        logger.info("Stopping orchestrator")
        self._running = False
        self._stop_event.set()

        if self._poll_thread and self._poll_thread.is_alive():
            self._poll_thread.join(timeout=2.0)
        self._poll_thread = None

        self.remote.unregister_observer(self)
        self.remote.stop()
        self.spotify.close()

    def run(self) -> None:
        """Run until interrupted (Ctrl+C) or stop() is called from another thread."""
        self.start()
        try:
            while not self._stop_event.wait(0.5):
                pass
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self.stop()

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()

    # =================================================================
    # Polling
    # =================================================================

    def _poll_loop(self) -> None:
        interval = self.config.poll_interval_ms / 1000
        while not self._stop_event.wait(interval):
            self.poll()

    def poll(self) -> bool:
        """
        Refresh playback state and the device binding once.

        Returns:
            False if the poll was skipped because another one is in flight
        """
        if not self._poll_lock.acquire(blocking=False):
            logger.debug("Previous poll still in flight, skipping")
            return False

        try:
            self._poll()
        finally:
            self._poll_lock.release()
        return True

    @handle_errors(operation_name="poll playback state", re_raise=False, log_level=logging.WARNING)
    def _poll(self) -> None:
        if not self.spotify.is_authenticated:
            self._set_auth_state("unauthorized")
            return

        try:
            if self.device_id is not None:
                try:
                    self.update_playback_state()
                except PlaybackAuthError:
                    raise
                except PlaybackError as e:
                    logger.warning(f"Could not read playback state: {e.technical_message}")
            self.find_device()
        except PlaybackAuthError as e:
            logger.warning(f"Spotify authorization lost: {e.technical_message}")
            self._set_auth_state("unauthorized")
            return

        self._set_auth_state("authorized")

    def update_playback_state(self) -> Optional[PlaybackSnapshot]:
        """
        Fetch the current playback state and reconcile the indicator.

        Raises:
            PlaybackError: If the playback state can't be read
        """
        snapshot = self.spotify.get_playback_snapshot()
        indicator = self.reconciler.reconcile(snapshot, self.device_id)

        with self._state_lock:
            self._state.playback_state = snapshot
            if indicator is not None:
                self._state.indicator = indicator
        self._broadcast()
        return snapshot

    def find_device(self) -> Optional[str]:
        """
        Look up the configured device among the available ones and bind it.

        Raises:
            PlaybackError: If the device list can't be read
        """
        device_id = self.reconciler.find_device(self.spotify.list_devices())

        with self._state_lock:
            previous = self._state.device_id
            self._state.device_id = device_id

        if device_id != previous:
            if device_id:
                logger.info(f"Bound to device '{self.config.device_name}' ({device_id})")
            else:
                logger.info(f"Device '{self.config.device_name}' is gone")
            self._broadcast()
        return device_id

    def update_channel_info(self) -> None:
        """Fetch metadata for every channel; failed lookups are stored as "error"."""
        info: dict[str, dict | str] = {}
        for channel in self.channels:
            try:
                result = self.spotify.get_resource_info(channel.context_uri)
            except RadioRemoteError as e:
                logger.warning(f"Could not load info for {channel.uri}: {e.technical_message}")
                result = None
            info[channel.uri] = result if result is not None else "error"

        with self._state_lock:
            self._state.channel_info = info
        self._broadcast()

    def _refresh_auth_state(self) -> bool:
        authorized = self.spotify.is_authenticated
        self._set_auth_state("authorized" if authorized else "unauthorized")
        if not authorized:
            logger.warning("Spotify is not authorized - run 'radioremote spotify auth'")
        return authorized

    def _set_auth_state(self, auth_state: str) -> None:
        with self._state_lock:
            if self._state.auth_state == auth_state:
                return
            self._state.auth_state = auth_state
        self._broadcast()

    # =================================================================
    # Remote Events (RemoteObserver)
    # =================================================================

    def on_remote_event(self, event: RemoteEvent) -> None:
        """Turn a remote event into a playback action."""
        match event:
            case VolumeChanged(amount=amount):
                self._on_volume_changed(amount)
            case VolumePressed():
                self._on_volume_pressed()
            case ChannelSelected(channel=channel):
                self._on_channel_selected(channel)
            case _:
                logger.warning(f"Unhandled remote event: {event}")

    @handle_errors(operation_name="change volume", re_raise=False)
    def _on_volume_changed(self, amount: int) -> None:
        if amount == 0:
            return

        device_id = self.device_id
        if device_id is None:
            self.remote.signal_error()
            return

        try:
            snapshot = self.update_playback_state()
            if snapshot is None or snapshot.device is None:
                logger.info("Nothing is playing, ignoring volume change")
                return
            if snapshot.device_id != device_id:
                logger.info(f"Playback is on another device ({snapshot.device.name})")
                self.remote.signal_error()
                return
            if snapshot.volume_percent is None:
                logger.info("Device does not report a volume")
                return

            volume = max(0, min(100, snapshot.volume_percent + amount))
            self.spotify.set_volume(volume, device_id)
        except PlaybackError as e:
            self._signal_if_not_found(e)
            return

        with self._state_lock:
            state = self._state.playback_state
            if state is not None and state.device is not None:
                device = state.device.model_copy(update={"volume_percent": volume})
                self._state.playback_state = state.model_copy(update={"device": device})
        self._broadcast()

    @handle_errors(operation_name="toggle playback", re_raise=False)
    def _on_volume_pressed(self) -> None:
        device_id = self.device_id
        if device_id is None:
            self.remote.signal_error()
            return

        try:
            snapshot = self.update_playback_state()
            if snapshot is not None and snapshot.is_playing:
                self.spotify.pause(device_id)
            else:
                self.spotify.set_shuffle(True, device_id)
                self.spotify.transfer_playback(device_id, play=True)
            self.update_playback_state()
        except PlaybackError as e:
            self._signal_if_not_found(e)

    @handle_errors(operation_name="select channel", re_raise=False)
    def _on_channel_selected(self, index: int) -> None:
        device_id = self.device_id
        channel = self.channels.get(index)
        if device_id is None or channel is None:
            if channel is None:
                logger.info(f"No channel configured in slot {index}")
            self.remote.signal_error()
            return

        logger.info(f"Channel {index} selected: {channel.context_uri}")
        try:
            self.spotify.transfer_playback(device_id, play=False)
            self.spotify.start_playback(channel.context_uri, device_id)
            self.spotify.set_shuffle(True, device_id)
            self.update_playback_state()
        except PlaybackError as e:
            self._signal_if_not_found(e)

    def _signal_if_not_found(self, error: PlaybackError) -> None:
        """Signal the remote when the bound device is gone, let every other failure propagate."""
        if not isinstance(error, DeviceNotFoundError):
            raise error
        logger.warning(f"Playback target not found: {error.technical_message}")
        self.remote.signal_error()
