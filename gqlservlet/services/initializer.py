"""One-time lazy construction of the servlet configuration.

The initializer moves through two states, ``UNINITIALIZED`` and ``READY``.
The first :meth:`ConfigurationInitializer.ensure_initialized` call builds the
configuration and selects the request handler; both are published together as
one :class:`ReadyState`, so concurrent readers see either nothing or the
complete state. A lock around the build makes concurrent first requests build
exactly once.
"""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from gqlservlet.core.logging import get_logger
from gqlservlet.listeners.base import ServletListener
from gqlservlet.listeners.registry import ListenerRegistry

from .configuration import (
    ConfigurationSource,
    GraphQLConfiguration,
    build_configuration,
)
from .handlers import RequestHandler, RequestHandlerSelector


logger = get_logger(__name__)

SourceFactory = Callable[[ListenerRegistry], ConfigurationSource]


class LifecycleState(str, Enum):
    """Initialization state of a servlet"""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class ReadyState:
    """Built configuration together with the handler selected for it."""

    configuration: GraphQLConfiguration
    request_handler: RequestHandler


class ConfigurationInitializer:
    """Builds the configuration at most once and routes listener registration."""

    def __init__(
        self,
        source_factory: SourceFactory,
        listeners: Iterable[ServletListener] | None = None,
        selector: RequestHandlerSelector | None = None,
    ):
        """Initialize the initializer.

        Args:
            source_factory: Called once, with the pre-initialization listener
                registry, to obtain the construction source
            listeners: Listeners registered before initialization
            selector: Request handler selector
        """
        self._source_factory = source_factory
        self._pending_listeners = ListenerRegistry(listeners)
        self._selector = selector or RequestHandlerSelector()
        self._ready: ReadyState | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> LifecycleState:
        if self._ready is not None:
            return LifecycleState.READY
        return LifecycleState.UNINITIALIZED

    @property
    def ready_state(self) -> ReadyState | None:
        return self._ready

    def ensure_initialized(self) -> ReadyState:
        """Build configuration and handler on first call; return the ready state.

        Raises:
            ConfigurationError: If a required collaborator is missing. The
                initializer stays uninitialized and the next call retries.
        """
        ready = self._ready
        if ready is not None:
            return ready

        with self._lock:
            if self._ready is None:
                source = self._source_factory(self._pending_listeners)
                configuration = build_configuration(source)
                request_handler = self._selector.select(configuration)
                self._ready = ReadyState(configuration, request_handler)
                logger.info(
                    "graphql_configuration_initialized",
                    source=type(source).__name__,
                    request_handler=type(request_handler).__name__,
                    listener_count=len(configuration.listeners),
                )
            return self._ready

    def add_listener(self, listener: ServletListener) -> None:
        with self._lock:
            if self._ready is not None:
                self._ready.configuration.add(listener)
            else:
                self._pending_listeners.add(listener)

    def remove_listener(self, listener: ServletListener) -> None:
        with self._lock:
            if self._ready is not None:
                self._ready.configuration.remove(listener)
            else:
                self._pending_listeners.remove(listener)
