"""Observer protocol definitions.

- Remote observers: React to input from the radio remote
- State observers: React to changes of the shared radio state (UI push)
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from radioremote.core.state import RadioState

from .events import RemoteEvent


@runtime_checkable
class RemoteObserver(Protocol):
    """
    Observer that receives events from the radio remote.

    This protocol allows loose coupling between the remote controller and
    the logic that turns knob/button input into playback actions.
    """

    def on_remote_event(self, event: RemoteEvent) -> None:
        """
        Handle a remote event.

        Args:
            event: VolumePressed, VolumeChanged or ChannelSelected

        Note:
            Called from the serial reader thread (button events) or the
            debounce timer thread (volume changes). Implementations must be
            thread-safe.
        """
        ...


@runtime_checkable
class StateObserver(Protocol):
    """
    Observer that receives radio state updates.

    This is the push boundary towards UI clients: the transport that
    delivers the state to them lives outside this package.
    """

    def on_state_changed(self, state: "RadioState") -> None:
        """
        Handle a state update.

        Args:
            state: Snapshot copy of the shared radio state

        Threading:
            Called from the poll thread or a remote event thread, never
            while the orchestrator holds its state lock.
        """
        ...
