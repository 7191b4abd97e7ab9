"""Radio remote controller with hot-plug support."""

import logging
import threading
from collections.abc import Callable
from typing import Optional

import serial
import serial.tools.list_ports

from radioremote.model_manager import RemoteEventObservers
from radioremote.protocols import (
    ChannelSelected,
    RemoteEvent,
    RemoteObserver,
    VolumeChanged,
    VolumePressed,
)

from .codec import (
    STATUS_READY,
    VOLUME_ERROR,
    VOLUME_PRESSED,
    VOLUME_UP,
    Command,
    decode,
    encode_frame,
)
from .debouncer import TimerFactory, VolumeDebouncer

logger = logging.getLogger(__name__)


class RemoteController:
    """
    Serial controller for the radio remote with hot-plug support.

    Owns the serial port: it is the only component that writes to it.
    Inbound bytes are decoded and turned into RemoteEvents for registered
    observers; volume pulses go through a VolumeDebouncer first. A READY
    status frame is sent every heartbeat interval regardless of other
    traffic. When the port disappears it is reopened automatically.

    Threads:
        - reader: opens/reopens the port and feeds inbound bytes to handle_byte()
        - heartbeat: sends SYSTEM_STATUS/READY every heartbeat interval
        - debounce timer: emits VolumeChanged after a burst of pulses

    Usage:
        with RemoteController("/dev/ttyUSB0") as remote:
            remote.register_observer(orchestrator)
            remote.send_command(Command.CHANNEL_SELECT, 3)
    """

    def __init__(
        self,
        port: Optional[str],
        baud_rate: int = 115200,
        debounce_window: float = 0.5,
        heartbeat_interval: float = 5.0,
        reconnect_interval: float = 2.0,
        read_timeout: float = 0.1,
        timer_factory: Optional[TimerFactory] = None,
    ):
        """
        Initialize the remote controller.

        Args:
            port: Serial port path, or None to run without hardware (all sends are dropped)
            baud_rate: Serial baud rate
            debounce_window: Quiet period before volume pulses are emitted (seconds)
            heartbeat_interval: Interval between READY status frames (seconds)
            reconnect_interval: How long to wait before reopening a lost port (seconds)
            read_timeout: Serial read timeout, bounds how quickly stop() returns (seconds)
            timer_factory: Timer primitive for the debouncer (defaults to threading.Timer)
        """
        self.port_name = port
        self.baud_rate = baud_rate
        self.heartbeat_interval = heartbeat_interval
        self.reconnect_interval = reconnect_interval
        self.read_timeout = read_timeout

        self._port: Optional[serial.Serial] = None
        self._port_lock = threading.Lock()
        self._running = False
        self._stop_event = threading.Event()
        self._reader_thread: Optional[threading.Thread] = None
        self._heartbeat_thread: Optional[threading.Thread] = None
        self._no_device_warned = False

        self._observers = RemoteEventObservers()
        self._on_connection_changed: Optional[Callable[[bool, Optional[str]], None]] = None
        self._debouncer = VolumeDebouncer(
            on_volume=self._on_volume_burst,
            window=debounce_window,
            timer_factory=timer_factory,
        )

    # ------------------------------------------------------------------
    # Observers

    def register_observer(self, observer: RemoteObserver) -> None:
        """Register an observer for remote events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: RemoteObserver) -> None:
        """Unregister a remote event observer."""
        self._observers.unregister(observer)

    def on_connection_changed(self, callback: Callable[[bool, Optional[str]], None]) -> None:
        """
        Register callback for connection state changes.

        Args:
            callback: Function that receives (is_connected: bool, port_name: Optional[str])
        """
        self._on_connection_changed = callback

    # ------------------------------------------------------------------
    # Lifecycle

    def start(self) -> None:
        """Start the reader and heartbeat threads."""
        if self._running:
            logger.warning("RemoteController is already running")
            return

        if self.port_name is None:
            logger.warning("No serial port configured - running without remote control")
            return

        self._running = True
        self._stop_event.clear()

        self._reader_thread = threading.Thread(target=self._read_loop, daemon=True)
        self._reader_thread.start()

        self._heartbeat_thread = threading.Thread(target=self._heartbeat_loop, daemon=True)
        self._heartbeat_thread.start()

        logger.info(f"RemoteController started on {self.port_name}")

    def stop(self) -> None:
        """Stop all threads and close the serial port."""
        self._running = False
        self._stop_event.set()
        self._debouncer.cancel()

        self._close_port()

        for thread in (self._reader_thread, self._heartbeat_thread):
            if thread and thread.is_alive():
                thread.join(timeout=1.0)

        logger.info("RemoteController stopped")

    @property
    def is_connected(self) -> bool:
        """Check if the serial port is currently open."""
        with self._port_lock:
            return self._port is not None and self._port.is_open

    @property
    def current_port(self) -> Optional[str]:
        """Get currently connected port name."""
        with self._port_lock:
            return self._port.port if self._port else None

    @staticmethod
    def list_ports() -> list[str]:
        """List serial ports available on this machine."""
        return [p.device for p in serial.tools.list_ports.comports()]

    # ------------------------------------------------------------------
    # Outbound

    def send_command(self, command: int, value: int) -> None:
        """
        Write one frame to the remote.

        Both fields are masked to 4 bits. Silently dropped when the port is
        not connected; the next heartbeat or command simply tries again.
        """
        frame = encode_frame(command, value)

        with self._port_lock:
            if self._port is None or not self._port.is_open:
                logger.debug(f"Remote not connected, dropping frame 0x{frame[0]:02x}")
                return

            try:
                self._port.write(frame)
                logger.debug(f"Sent frame 0x{frame[0]:02x} (command={command}, value={value})")
            except (serial.SerialException, OSError) as e:
                logger.warning(f"Failed to write to {self.port_name}: {e}")
                self._discard_port_locked()

    def signal_error(self) -> None:
        """Tell the remote an action could not be honored (deselect + error flash)."""
        logger.info("Signalling error to remote")
        self.send_command(Command.CHANNEL_SELECT, 0)
        self.send_command(Command.VOLUME, VOLUME_ERROR)

    # ------------------------------------------------------------------
    # Inbound

    def handle_byte(self, byte: int) -> None:
        """
        Decode one inbound byte and dispatch it.

        Never raises for a byte value: unknown commands are ignored.
        """
        frame = decode(byte)

        match frame.command:
            case Command.SYSTEM_STATUS:
                logger.debug(f"System status from remote: {frame.value}")
            case Command.VOLUME:
                if frame.value == VOLUME_PRESSED:
                    self._emit(VolumePressed())
                else:
                    # Only 1 means "up"; every other value counts as "down"
                    self._debouncer.on_pulse(frame.value == VOLUME_UP)
            case Command.CHANNEL_SELECT:
                self._emit(ChannelSelected(channel=frame.value))
            case _:
                logger.debug(f"Ignoring unknown command {frame.command} (value {frame.value})")

    def _on_volume_burst(self, amount: int) -> None:
        self._emit(VolumeChanged(amount=amount))

    def _emit(self, event: RemoteEvent) -> None:
        logger.debug(f"Remote event: {event}")
        self._observers.notify(event)

    # ------------------------------------------------------------------
    # Threads

    def _heartbeat_loop(self) -> None:
        """Send READY every heartbeat interval until stopped."""
        while not self._stop_event.wait(self.heartbeat_interval):
            self.send_command(Command.SYSTEM_STATUS, STATUS_READY)

    def _read_loop(self) -> None:
        """Keep the port open and feed inbound bytes to handle_byte()."""
        logger.debug(f"Starting serial reader for {self.port_name}")

        while self._running:
            with self._port_lock:
                port = self._port

            if port is None:
                if not self._open_port():
                    self._stop_event.wait(self.reconnect_interval)
                continue

            try:
                data = port.read(1)
            except (serial.SerialException, OSError, TypeError) as e:
                if self._running:
                    logger.warning(f"Remote disconnected: {self.port_name} ({e})")
                    self._close_port()
                continue

            for byte in data:
                try:
                    self.handle_byte(byte)
                except Exception as e:
                    logger.error(f"Error handling byte 0x{byte:02x}: {e}", exc_info=True)

    def _open_port(self) -> bool:
        """Try to open the configured port. Returns True on success."""
        try:
            port = serial.Serial(self.port_name, baudrate=self.baud_rate, timeout=self.read_timeout)
        except (serial.SerialException, OSError) as e:
            if not self._no_device_warned:
                logger.warning(f"Remote not available on {self.port_name}: {e}")
                self._no_device_warned = True
            return False

        with self._port_lock:
            # stop() may have run while the port was opening
            stopping = not self._running
            if not stopping:
                self._port = port

        if stopping:
            try:
                port.close()
            except Exception as e:
                logger.error(f"Error closing serial port: {e}")
            return False

        self._no_device_warned = False
        logger.info(f"Connected to remote on {self.port_name}")
        self._fire_connection_changed(True, self.port_name)
        return True

    def _close_port(self) -> None:
        with self._port_lock:
            was_open = self._port is not None
            self._discard_port_locked()
        if was_open:
            self._fire_connection_changed(False, None)

    def _discard_port_locked(self) -> None:
        """Close and forget the port. Must be called with _port_lock held."""
        if self._port is None:
            return
        try:
            self._port.close()
        except Exception as e:
            logger.error(f"Error closing serial port: {e}")
        self._port = None

    def _fire_connection_changed(self, connected: bool, port_name: Optional[str]) -> None:
        if not self._on_connection_changed:
            return
        try:
            self._on_connection_changed(connected, port_name)
        except Exception as e:
            logger.error(f"Error in connection callback: {e}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
