"""Servlet configuration and the two ways of building it.

A :class:`GraphQLConfiguration` is either supplied whole by the servlet (the
override source) or assembled from the servlet's four deprecated provider
methods plus the listeners registered before initialization (the legacy
source). :func:`build_configuration` turns either source into the
configuration; the override wins when a servlet offers both.
"""

import warnings
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Protocol

from gqlservlet.core.errors import ConfigurationError
from gqlservlet.core.logging import get_logger
from gqlservlet.execution.input import InvocationInputFactory
from gqlservlet.execution.invoker import QueryInvoker
from gqlservlet.execution.object_mapper import GraphQLObjectMapper
from gqlservlet.listeners.base import ServletListener
from gqlservlet.listeners.registry import ListenerRegistry

from .cache import ResponseCacheManager


logger = get_logger(__name__)

_REQUIRED_COLLABORATORS = ("invocation_input_factory", "query_invoker", "object_mapper")


@dataclass(frozen=True)
class GraphQLConfiguration:
    """Immutable servlet configuration.

    Only the listener registry changes after construction, through
    :meth:`add` and :meth:`remove`.

    Raises:
        ConfigurationError: If a required collaborator is None
    """

    invocation_input_factory: InvocationInputFactory
    query_invoker: QueryInvoker
    object_mapper: GraphQLObjectMapper
    async_servlet_mode: bool = True
    response_cache_manager: ResponseCacheManager | None = None
    listeners: ListenerRegistry = field(default_factory=ListenerRegistry)

    def __post_init__(self) -> None:
        missing = [
            name for name in _REQUIRED_COLLABORATORS if getattr(self, name) is None
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required GraphQL collaborators: {', '.join(missing)}",
                details={"missing": missing},
            )

    @classmethod
    def with_input_factory(
        cls, invocation_input_factory: InvocationInputFactory
    ) -> "ConfigurationBuilder":
        """Start building a configuration around an invocation input factory."""
        return ConfigurationBuilder(invocation_input_factory)

    def add(self, listener: ServletListener) -> None:
        self.listeners.add(listener)

    def remove(self, listener: ServletListener) -> None:
        self.listeners.remove(listener)

    def get_listeners(self) -> list[ServletListener]:
        return self.listeners.snapshot()


class ConfigurationBuilder:
    """Fluent builder for :class:`GraphQLConfiguration`.

    Invoker and object mapper default to the graphql-core backed
    implementations.
    """

    def __init__(self, invocation_input_factory: InvocationInputFactory):
        self._invocation_input_factory = invocation_input_factory
        self._query_invoker: QueryInvoker | None = QueryInvoker()
        self._object_mapper: GraphQLObjectMapper | None = GraphQLObjectMapper()
        self._async_servlet_mode = True
        self._response_cache_manager: ResponseCacheManager | None = None
        self._listeners: list[ServletListener] = []

    def with_query_invoker(
        self, query_invoker: QueryInvoker | None
    ) -> "ConfigurationBuilder":
        self._query_invoker = query_invoker
        return self

    def with_object_mapper(
        self, object_mapper: GraphQLObjectMapper | None
    ) -> "ConfigurationBuilder":
        self._object_mapper = object_mapper
        return self

    def with_async_servlet_mode(
        self, async_servlet_mode: bool
    ) -> "ConfigurationBuilder":
        self._async_servlet_mode = async_servlet_mode
        return self

    def with_response_cache_manager(
        self, response_cache_manager: ResponseCacheManager | None
    ) -> "ConfigurationBuilder":
        self._response_cache_manager = response_cache_manager
        return self

    def with_listeners(
        self, listeners: Iterable[ServletListener] | None
    ) -> "ConfigurationBuilder":
        if listeners is not None:
            self._listeners.extend(listeners)
        return self

    def build(self) -> GraphQLConfiguration:
        return GraphQLConfiguration(
            invocation_input_factory=self._invocation_input_factory,
            query_invoker=self._query_invoker,  # type: ignore[arg-type]
            object_mapper=self._object_mapper,  # type: ignore[arg-type]
            async_servlet_mode=self._async_servlet_mode,
            response_cache_manager=self._response_cache_manager,
            listeners=ListenerRegistry(self._listeners),
        )


# === Construction sources ===


class LegacyProviders(Protocol):
    """The deprecated per-collaborator provider methods of a servlet."""

    def get_query_invoker(self) -> QueryInvoker | None: ...

    def get_invocation_input_factory(self) -> InvocationInputFactory | None: ...

    def get_object_mapper(self) -> GraphQLObjectMapper | None: ...

    def is_async_servlet_mode(self) -> bool: ...


@dataclass(frozen=True)
class OverrideSource:
    """A complete configuration supplied by the servlet."""

    configuration: GraphQLConfiguration
    listeners: ListenerRegistry


@dataclass(frozen=True)
class LegacyProvidersSource:
    """Configuration assembled from deprecated provider methods."""

    providers: LegacyProviders
    listeners: ListenerRegistry


ConfigurationSource = OverrideSource | LegacyProvidersSource


def resolve_configuration_source(
    override: GraphQLConfiguration | None,
    providers: LegacyProviders,
    listeners: ListenerRegistry,
) -> ConfigurationSource:
    """Pick the construction source; an override always wins."""
    if override is not None:
        return OverrideSource(configuration=override, listeners=listeners)
    return LegacyProvidersSource(providers=providers, listeners=listeners)


def build_configuration(source: ConfigurationSource) -> GraphQLConfiguration:
    """Build the configuration for a construction source.

    The pre-initialization listeners are consumed, never duplicated: the legacy
    source hands its registry to the configuration as-is, the override source
    gets a copy of the override with them appended after its own listeners.
    The override object itself is left unchanged.

    Raises:
        ConfigurationError: If a required collaborator is missing
    """
    if isinstance(source, OverrideSource):
        configuration = source.configuration
        return replace(
            configuration,
            listeners=ListenerRegistry(
                [*configuration.get_listeners(), *source.listeners]
            ),
        )

    warnings.warn(
        "Configuring a servlet through get_query_invoker/get_invocation_input_factory/"
        "get_object_mapper/is_async_servlet_mode is deprecated; "
        "override get_configuration() instead",
        DeprecationWarning,
        stacklevel=3,
    )
    providers = source.providers
    logger.debug("legacy_configuration_providers_used", servlet=repr(providers))
    input_factory = providers.get_invocation_input_factory()
    return GraphQLConfiguration(
        invocation_input_factory=input_factory,  # type: ignore[arg-type]
        query_invoker=providers.get_query_invoker(),  # type: ignore[arg-type]
        object_mapper=providers.get_object_mapper(),  # type: ignore[arg-type]
        async_servlet_mode=bool(providers.is_async_servlet_mode()),
        listeners=source.listeners,
    )
