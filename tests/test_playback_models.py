"""Tests for channel and playback models."""

import pytest
from pydantic import ValidationError

from radioremote.models import Channel, ChannelList, PlaybackSnapshot, normalize_context_uri


@pytest.mark.unit
class TestNormalizeContextUri:
    """Test context key normalization."""

    def test_keeps_last_three_components(self):
        assert normalize_context_uri("spotify:user:someone:playlist:abc") == "someone:playlist:abc"
        assert normalize_context_uri("spotify:album:A") == "spotify:album:A"

    def test_short_input_unchanged(self):
        assert normalize_context_uri("album:A") == "album:A"
        assert normalize_context_uri("garbage") == "garbage"


@pytest.mark.unit
class TestChannel:
    """Test Channel model."""

    def test_bare_uri_gets_prefix(self):
        channel = Channel(index=0, uri="album:A")
        assert channel.context_uri == "spotify:album:A"
        assert channel.resource_type == "album"
        assert channel.resource_id == "A"

    def test_full_uri_unchanged(self):
        channel = Channel(index=2, uri="spotify:playlist:B")
        assert channel.context_uri == "spotify:playlist:B"

    def test_frozen(self):
        channel = Channel(index=0, uri="album:A")
        with pytest.raises(ValidationError):
            channel.index = 1


@pytest.mark.unit
class TestChannelList:
    """Test ChannelList lookup."""

    def test_indices_follow_order(self):
        channels = ChannelList(["album:A", "playlist:B"])
        assert [c.index for c in channels] == [0, 1]
        assert channels.uris == ["album:A", "playlist:B"]
        assert len(channels) == 2

    def test_get(self):
        channels = ChannelList(["album:A"])
        assert channels.get(0).uri == "album:A"
        assert channels.get(1) is None
        assert channels.get(-1) is None

    def test_index_of_bare_and_full_forms(self):
        channels = ChannelList(["album:A", "spotify:playlist:B"])
        assert channels.index_of("spotify:album:A") == 0
        assert channels.index_of("album:A") == 0
        assert channels.index_of("spotify:playlist:B") == 1

    def test_index_of_no_partial_id_match(self):
        channels = ChannelList(["album:A"])
        assert channels.index_of("spotify:album:AA") is None
        assert channels.index_of("spotify:playlist:A") is None

    def test_single_component_channel_never_matches(self):
        channels = ChannelList(["A"])
        assert channels.index_of("spotify:album:A") is None


@pytest.mark.unit
class TestPlaybackSnapshot:
    """Test parsing Web API playback state."""

    def test_from_api_payload(self):
        snapshot = PlaybackSnapshot.model_validate({
            "device": {"id": "dev1", "name": "RetroRadio", "volume_percent": 40, "is_active": True},
            "is_playing": True,
            "context": {"uri": "spotify:album:A", "type": "album"},
            "item": {"name": "ignored"},
            "shuffle_state": True,
        })

        assert snapshot.device_id == "dev1"
        assert snapshot.volume_percent == 40
        assert snapshot.is_playing is True
        assert snapshot.has_context is True
        assert snapshot.context_uri == "spotify:album:A"

    def test_no_context(self):
        snapshot = PlaybackSnapshot.model_validate({"device": None, "is_playing": False, "context": None})

        assert snapshot.device_id is None
        assert snapshot.volume_percent is None
        assert snapshot.has_context is False
        assert snapshot.context_uri is None
