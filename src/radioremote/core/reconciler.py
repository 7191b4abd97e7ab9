"""Map remote playback state onto the radio's channel indicator."""

import logging
from collections.abc import Iterable
from typing import Protocol

from radioremote.models import ChannelList, PlaybackDevice, PlaybackSnapshot, normalize_context_uri
from radioremote.remote import NO_CHANNEL, Command

logger = logging.getLogger(__name__)


class ChannelIndicator(Protocol):
    """Anything that can write a frame to the remote."""

    def send_command(self, command: int, value: int) -> None: ...


class PlaybackReconciler:
    """
    Decides which channel light the remote should show.

    Stateless between calls: the device binding is supplied by the caller on
    every reconcile(), the channel list is fixed at construction.
    """

    def __init__(self, remote: ChannelIndicator, channels: ChannelList, device_name: str):
        self._remote = remote
        self.channels = channels
        self.device_name = device_name

    def reconcile(self, snapshot: PlaybackSnapshot | None, device_id: str | None) -> int | None:
        """
        Update the channel indicator from a playback snapshot.

        Args:
            snapshot: Latest playback state, or None when nothing is playing
            device_id: ID of the bound device, or None if it wasn't found

        Returns:
            The indicator sent to the remote, or None when there was no
            context and nothing was sent
        """
        if snapshot is None or not snapshot.context_uri:
            logger.debug("No playback context, leaving indicator unchanged")
            return None

        key = normalize_context_uri(snapshot.context_uri)

        if snapshot.device_id != device_id:
            indicator = NO_CHANNEL
        else:
            index = self.channels.index_of(key)
            indicator = index if index is not None else NO_CHANNEL

        logger.debug(f"Context {key} on device {snapshot.device_id} -> indicator {indicator}")
        self._remote.send_command(Command.CHANNEL_SELECT, indicator)
        return indicator

    def find_device(self, devices: Iterable[PlaybackDevice]) -> str | None:
        """
        Find the configured device by display name.

        Clears the indicator when the device is not available.

        Returns:
            The device ID, or None if no device has the configured name
        """
        for device in devices:
            if device.name == self.device_name:
                return device.id

        logger.info(f"Device '{self.device_name}' not found")
        self._remote.send_command(Command.CHANNEL_SELECT, NO_CHANNEL)
        return None
