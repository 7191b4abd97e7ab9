"""Tests for mapping playback state onto the channel indicator."""

from unittest.mock import call

import pytest

from radioremote.core import PlaybackReconciler
from radioremote.models import ChannelList, PlaybackDevice
from radioremote.remote import NO_CHANNEL, Command


@pytest.fixture
def reconciler(mock_remote):
    channels = ChannelList(["album:A", "playlist:B"])
    return PlaybackReconciler(mock_remote, channels, device_name="RetroRadio")


@pytest.mark.unit
class TestReconcile:
    """Test reconcile()."""

    def test_no_snapshot_sends_nothing(self, reconciler, mock_remote):
        assert reconciler.reconcile(None, "dev1") is None
        mock_remote.send_command.assert_not_called()

    def test_no_context_sends_nothing(self, reconciler, mock_remote, snapshot_factory):
        snapshot = snapshot_factory(context_uri=None)

        assert reconciler.reconcile(snapshot, "dev1") is None
        mock_remote.send_command.assert_not_called()

    def test_matching_context(self, reconciler, mock_remote, snapshot_factory):
        snapshot = snapshot_factory(device_id="dev1", context_uri="spotify:album:A")

        assert reconciler.reconcile(snapshot, "dev1") == 0
        mock_remote.send_command.assert_called_once_with(Command.CHANNEL_SELECT, 0)

    def test_second_channel(self, reconciler, mock_remote, snapshot_factory):
        snapshot = snapshot_factory(device_id="dev1", context_uri="spotify:playlist:B")

        assert reconciler.reconcile(snapshot, "dev1") == 1
        mock_remote.send_command.assert_called_once_with(Command.CHANNEL_SELECT, 1)

    def test_enriched_context_uri_is_normalized(self, reconciler, snapshot_factory):
        snapshot = snapshot_factory(context_uri="spotify:user:someone:playlist:B")

        assert reconciler.reconcile(snapshot, "dev1") == 1

    def test_device_mismatch(self, reconciler, mock_remote, snapshot_factory):
        snapshot = snapshot_factory(device_id="dev2", context_uri="spotify:album:A")

        assert reconciler.reconcile(snapshot, "dev1") == NO_CHANNEL
        mock_remote.send_command.assert_called_once_with(Command.CHANNEL_SELECT, NO_CHANNEL)

    def test_unbound_device_is_a_mismatch(self, reconciler, snapshot_factory):
        snapshot = snapshot_factory(device_id="dev1", context_uri="spotify:album:A")

        assert reconciler.reconcile(snapshot, None) == NO_CHANNEL

    def test_unknown_context_still_sends(self, reconciler, mock_remote, snapshot_factory):
        snapshot = snapshot_factory(context_uri="spotify:album:Z")

        assert reconciler.reconcile(snapshot, "dev1") == NO_CHANNEL
        mock_remote.send_command.assert_called_once_with(Command.CHANNEL_SELECT, NO_CHANNEL)

    def test_malformed_context_never_raises(self, reconciler, snapshot_factory):
        snapshot = snapshot_factory(context_uri="garbage")

        assert reconciler.reconcile(snapshot, "dev1") == NO_CHANNEL

    def test_first_match_wins(self, mock_remote, snapshot_factory):
        channels = ChannelList(["spotify:album:A", "album:A"])
        reconciler = PlaybackReconciler(mock_remote, channels, device_name="RetroRadio")

        assert reconciler.reconcile(snapshot_factory(context_uri="spotify:album:A"), "dev1") == 0


@pytest.mark.unit
class TestFindDevice:
    """Test find_device()."""

    def test_finds_device_by_name(self, reconciler, mock_remote):
        devices = [
            PlaybackDevice(id="phone", name="Phone"),
            PlaybackDevice(id="radio", name="RetroRadio"),
        ]

        assert reconciler.find_device(devices) == "radio"
        mock_remote.send_command.assert_not_called()

    def test_missing_device_clears_indicator(self, reconciler, mock_remote):
        devices = [PlaybackDevice(id="phone", name="Phone")]

        assert reconciler.find_device(devices) is None
        assert mock_remote.send_command.call_args_list == [call(Command.CHANNEL_SELECT, NO_CHANNEL)]

    def test_no_devices(self, reconciler, mock_remote):
        assert reconciler.find_device([]) is None
        mock_remote.send_command.assert_called_once_with(Command.CHANNEL_SELECT, NO_CHANNEL)

    def test_name_match_is_exact(self, reconciler):
        devices = [PlaybackDevice(id="x", name="retroradio")]
        assert reconciler.find_device(devices) is None
