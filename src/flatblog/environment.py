"""Location provider the client reads and subscribes to."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

LocationListener = Callable[[str], None]


@runtime_checkable
class Environment(Protocol):
    """Source of the current location and of navigation notifications."""

    def current_location(self) -> str: ...

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        """Register listener; returns a function that unregisters it."""
        ...


class MemoryEnvironment:
    """In-process navigation history. Listeners are notified synchronously."""

    def __init__(self, initial: str = "/") -> None:
        self._history: list[str] = [initial]
        self._listeners: list[LocationListener] = []

    def current_location(self) -> str:
        return self._history[-1]

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def navigate(self, location: str) -> None:
        self._history.append(location)
        self._notify(location)

    def back(self) -> None:
        if len(self._history) > 1:
            self._history.pop()
            self._notify(self._history[-1])

    def _notify(self, location: str) -> None:
        for listener in list(self._listeners):
            listener(location)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
