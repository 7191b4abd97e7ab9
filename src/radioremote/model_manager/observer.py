"""Observer lists for remote events and radio state.

The remote controller fans hardware events out to RemoteObservers and the
orchestrator pushes RadioState copies to StateObservers. Both lists are
mutated from the CLI thread and read from the serial, debounce and poll
threads, so registration is locked and callbacks run outside the lock.
"""

import logging
from threading import Lock
from typing import TYPE_CHECKING, Generic, TypeVar

from radioremote.protocols import RemoteEvent, RemoteObserver, StateObserver

if TYPE_CHECKING:
    from radioremote.core.state import RadioState

logger = logging.getLogger(__name__)

O = TypeVar("O")
P = TypeVar("P")


class ObserverManager(Generic[O, P]):
    """
    Thread-safe list of observers of type ``O`` receiving payloads of type ``P``.

    Subclasses set ``protocol`` (checked on registration) and implement
    ``_deliver``. A failing observer is logged and skipped; the rest still
    get the payload.
    """

    protocol: type
    kind = "observer"

    def __init__(self):
        self._observers: list[O] = []
        self._lock = Lock()

    def register(self, observer: O) -> None:
        """Add an observer. Registering the same observer twice is a no-op."""
        if not isinstance(observer, self.protocol):
            raise TypeError(f"{observer!r} does not implement {self.protocol.__name__}")

        with self._lock:
            if observer in self._observers:
                return
            self._observers.append(observer)
        logger.info(f"Registered {self.kind} observer: {observer}")

    def unregister(self, observer: O) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                logger.warning(f"Tried to unregister unknown {self.kind} observer: {observer}")
                return
        logger.debug(f"Unregistered {self.kind} observer: {observer}")

    def notify(self, payload: P) -> None:
        """Deliver ``payload`` to every registered observer."""
        with self._lock:
            observers = tuple(self._observers)

        for observer in observers:
            try:
                self._deliver(observer, payload)
            except Exception as e:
                logger.error(
                    f"{self.kind} observer {observer} failed on {type(payload).__name__}: {e}",
                    exc_info=True,
                )

    def _deliver(self, observer: O, payload: P) -> None:
        raise NotImplementedError

    def __contains__(self, observer: object) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)


class RemoteEventObservers(ObserverManager[RemoteObserver, RemoteEvent]):
    """Receivers of button presses and debounced volume changes."""

    protocol = RemoteObserver
    kind = "remote"

    def _deliver(self, observer: RemoteObserver, event: RemoteEvent) -> None:
        observer.on_remote_event(event)


class StateObservers(ObserverManager[StateObserver, "RadioState"]):
    """Receivers of RadioState copies (UI clients)."""

    protocol = StateObserver
    kind = "state"

    def _deliver(self, observer: StateObserver, state: "RadioState") -> None:
        observer.on_state_changed(state)
