"""Ordered registry of servlet listeners"""

from collections.abc import Iterable, Iterator

from gqlservlet.core.logging import get_logger

from .base import ServletListener


logger = get_logger(__name__)


class ListenerRegistry:
    """Ordered set of listeners, invoked in registration order.

    Adding a listener that is already registered is a no-op, so each listener
    sees each request once.
    """

    def __init__(self, listeners: Iterable[ServletListener] | None = None) -> None:
        self._listeners: list[ServletListener] = []
        for listener in listeners or ():
            self.add(listener)

    def add(self, listener: ServletListener) -> None:
        """Register a listener at the end of the invocation order"""
        if listener in self._listeners:
            return
        self._listeners.append(listener)
        logger.debug("listener_registered", listener=repr(listener))

    def remove(self, listener: ServletListener) -> None:
        """Unregister a listener; unknown listeners are ignored"""
        if listener in self._listeners:
            self._listeners.remove(listener)
            logger.debug("listener_unregistered", listener=repr(listener))

    def extend(self, listeners: Iterable[ServletListener]) -> None:
        for listener in listeners:
            self.add(listener)

    def snapshot(self) -> list[ServletListener]:
        """Copy of the current listeners, safe to iterate while others register"""
        return list(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    def __iter__(self) -> Iterator[ServletListener]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"ListenerRegistry({self._listeners!r})"
