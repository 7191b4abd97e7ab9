"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from radioremote.models import PlaybackSnapshot


class FakeTimer:
    """Single-shot timer that only fires when the test says so."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback the way threading.Timer would after the interval."""
        if not self.cancelled:
            self.function()


class FakeTimerFactory:
    """Records every timer a debouncer creates."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def timer_factory():
    """Deterministic timer factory for debounce tests."""
    return FakeTimerFactory()


@pytest.fixture
def mock_remote():
    """Stand-in for RemoteController that records outbound frames."""
    return Mock()


def make_snapshot(
    device_id: str | None = "dev1",
    context_uri: str | None = "spotify:album:A",
    is_playing: bool = True,
    volume_percent: int | None = 50,
    device_name: str = "RetroRadio",
) -> PlaybackSnapshot:
    """Build a PlaybackSnapshot the way the Web API reports it."""
    data: dict = {"is_playing": is_playing}
    if device_id is not None:
        data["device"] = {
            "id": device_id,
            "name": device_name,
            "type": "Speaker",
            "is_active": True,
            "volume_percent": volume_percent,
        }
    if context_uri is not None:
        data["context"] = {"uri": context_uri, "type": context_uri.split(":")[-2]}
    return PlaybackSnapshot.model_validate(data)


@pytest.fixture
def snapshot_factory():
    """Factory for PlaybackSnapshot instances."""
    return make_snapshot
