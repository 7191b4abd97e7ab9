"""Tests for the serial remote controller."""

import threading
import time
from unittest.mock import MagicMock, Mock, patch

import pytest
import serial

from radioremote.protocols import ChannelSelected, VolumeChanged, VolumePressed
from radioremote.remote import Command, RemoteController


class RecordingObserver:
    """RemoteObserver that remembers every event."""

    def __init__(self):
        self.events = []
        self.received = threading.Event()

    def on_remote_event(self, event):
        self.events.append(event)
        self.received.set()


def make_port(reads=()):
    """Mock serial port returning ``reads`` then idling like a read timeout."""
    pending = list(reads)
    port = MagicMock()
    port.is_open = True
    port.port = "/dev/ttyFAKE"

    def read(size=1):
        if pending:
            return pending.pop(0)
        time.sleep(0.01)
        return b""

    port.read.side_effect = read
    return port


@pytest.fixture
def controller(timer_factory):
    return RemoteController("/dev/ttyFAKE", timer_factory=timer_factory)


@pytest.fixture
def observer(controller):
    obs = RecordingObserver()
    controller.register_observer(obs)
    return obs


@pytest.mark.unit
class TestHandleByte:
    """Test decoding inbound bytes into events."""

    def test_volume_pressed(self, controller, observer):
        controller.handle_byte(0x10)
        assert observer.events == [VolumePressed()]

    def test_channel_selected(self, controller, observer):
        controller.handle_byte(0x23)
        assert observer.events == [ChannelSelected(channel=3)]

    def test_volume_pulses_are_debounced(self, controller, observer, timer_factory):
        controller.handle_byte(0x11)  # up
        controller.handle_byte(0x11)  # up
        controller.handle_byte(0x12)  # down
        assert observer.events == []

        timer_factory.last.fire()
        assert observer.events == [VolumeChanged(amount=5)]

    def test_any_value_other_than_one_turns_down(self, controller, observer, timer_factory):
        controller.handle_byte(0x13)
        controller.handle_byte(0x1F)
        timer_factory.last.fire()

        assert observer.events == [VolumeChanged(amount=-10)]

    def test_status_and_unknown_commands_are_ignored(self, controller, observer, timer_factory):
        controller.handle_byte(0x01)
        for command in range(3, 16):
            controller.handle_byte(command << 4 | 7)

        assert observer.events == []
        assert timer_factory.timers == []

    def test_every_byte_is_accepted(self, controller):
        for byte in range(256):
            controller.handle_byte(byte)

    def test_observer_errors_are_contained(self, controller):
        bad = Mock()
        bad.on_remote_event.side_effect = RuntimeError("boom")
        good = RecordingObserver()
        controller.register_observer(bad)
        controller.register_observer(good)

        controller.handle_byte(0x10)

        assert good.events == [VolumePressed()]


@pytest.mark.unit
class TestSendCommand:
    """Test outbound frames."""

    def test_send_writes_one_byte(self, controller):
        port = make_port()
        controller._port = port

        controller.send_command(Command.CHANNEL_SELECT, 4)

        port.write.assert_called_once_with(b"\x24")

    def test_send_masks_fields(self, controller):
        port = make_port()
        controller._port = port

        controller.send_command(Command.CHANNEL_SELECT, 0x1F)

        port.write.assert_called_once_with(b"\x2f")

    def test_send_without_port_is_dropped(self, controller):
        controller.send_command(Command.CHANNEL_SELECT, 4)  # must not raise
        assert controller.is_connected is False

    def test_write_failure_discards_port(self, controller):
        port = make_port()
        port.write.side_effect = serial.SerialException("unplugged")
        controller._port = port

        controller.send_command(Command.VOLUME, 15)

        port.close.assert_called_once()
        assert controller.is_connected is False

    def test_signal_error(self, controller):
        port = make_port()
        controller._port = port

        controller.signal_error()

        assert [c.args[0] for c in port.write.call_args_list] == [b"\x20", b"\x1f"]


@pytest.mark.unit
class TestLifecycle:
    """Test starting and stopping without hardware."""

    def test_start_without_port_is_noop(self):
        controller = RemoteController(None)
        controller.start()
        assert controller._reader_thread is None
        controller.stop()

    def test_port_opened_during_stop_is_closed(self):
        controller = RemoteController("/dev/ttyFAKE")
        controller._running = True
        port = make_port()

        def open_while_stopping(*args, **kwargs):
            # stop() runs on another thread while the port is opening
            controller._running = False
            return port

        with patch("radioremote.remote.controller.serial.Serial", side_effect=open_while_stopping):
            assert controller._open_port() is False

        port.close.assert_called_once()
        assert controller.is_connected is False
        assert controller.current_port is None

    @patch("radioremote.remote.controller.serial.tools.list_ports.comports")
    def test_list_ports(self, mock_comports):
        mock_comports.return_value = [Mock(device="/dev/ttyUSB0"), Mock(device="/dev/ttyACM0")]
        assert RemoteController.list_ports() == ["/dev/ttyUSB0", "/dev/ttyACM0"]


@pytest.mark.integration
class TestThreads:
    """Test the reader and heartbeat threads against a mocked port."""

    def test_reader_dispatches_inbound_bytes(self):
        port = make_port(reads=[b"\x25"])
        observer = RecordingObserver()

        with patch("radioremote.remote.controller.serial.Serial", return_value=port):
            controller = RemoteController("/dev/ttyFAKE", heartbeat_interval=10.0)
            controller.register_observer(observer)
            with controller:
                assert observer.received.wait(1.0)

        assert observer.events == [ChannelSelected(channel=5)]
        port.close.assert_called()

    def test_single_heartbeat_per_period(self):
        port = make_port()

        with patch("radioremote.remote.controller.serial.Serial", return_value=port):
            with RemoteController("/dev/ttyFAKE", heartbeat_interval=0.2):
                time.sleep(0.3)

        heartbeats = [c for c in port.write.call_args_list if c.args[0] == b"\x01"]
        assert len(heartbeats) == 1

    def test_reconnects_after_open_failure(self):
        port = make_port()
        changes = []
        connected = threading.Event()

        def on_change(is_connected, port_name):
            changes.append((is_connected, port_name))
            if is_connected:
                connected.set()

        attempts = []

        def open_port(*args, **kwargs):
            attempts.append(args)
            if len(attempts) == 1:
                raise serial.SerialException("not yet")
            return port

        with patch("radioremote.remote.controller.serial.Serial", side_effect=open_port):
            controller = RemoteController("/dev/ttyFAKE", reconnect_interval=0.01)
            controller.on_connection_changed(on_change)
            with controller:
                assert connected.wait(1.0)
                assert controller.is_connected
                assert controller.current_port == "/dev/ttyFAKE"

        assert changes[0] == (True, "/dev/ttyFAKE")
        assert changes[-1] == (False, None)
