"""GraphQL servlet facade.

:class:`AbstractGraphQLHttpServlet` ties the pieces together: lazy
configuration, listener registration, request dispatch for GET and POST, and
the management surface (:class:`GraphQLMBean`). Subclasses configure it either
by overriding :meth:`~AbstractGraphQLHttpServlet.get_configuration` or, the
deprecated way, by overriding the four individual provider methods.
:class:`GraphQLHttpServlet` is the ready-made subclass taking a configuration.
"""

from collections.abc import Iterable
from typing import Protocol

from gqlservlet.core.logging import get_logger
from gqlservlet.execution.input import InvocationInputFactory
from gqlservlet.execution.invoker import QueryInvoker
from gqlservlet.execution.object_mapper import GraphQLObjectMapper
from gqlservlet.listeners.base import ServletListener
from gqlservlet.listeners.registry import ListenerRegistry

from .configuration import (
    ConfigurationSource,
    GraphQLConfiguration,
    resolve_configuration_source,
)
from .dispatcher import RequestDispatcher
from .http import ServletRequest, ServletResponse
from .initializer import ConfigurationInitializer, LifecycleState, ReadyState
from .query_executor import QueryExecutor


logger = get_logger(__name__)


class GraphQLMBean(Protocol):
    """Management surface, independent of the HTTP path."""

    def get_queries(self) -> list[str]: ...

    def get_mutations(self) -> list[str]: ...

    def execute_query(self, query: str) -> str: ...


class AbstractGraphQLHttpServlet:
    """Base servlet routing GET and POST requests to the dispatcher."""

    def __init__(self, listeners: Iterable[ServletListener] | None = None):
        self._initializer = ConfigurationInitializer(
            self._configuration_source, listeners
        )
        self._dispatcher = RequestDispatcher(self._initializer)
        self._query_executor = QueryExecutor(self._initializer)

    # === Configuration sources ===

    def get_configuration(self) -> GraphQLConfiguration | None:
        """Override to supply the complete configuration."""
        return None

    def get_query_invoker(self) -> QueryInvoker | None:
        """Deprecated: override :meth:`get_configuration` instead."""
        return None

    def get_invocation_input_factory(self) -> InvocationInputFactory | None:
        """Deprecated: override :meth:`get_configuration` instead."""
        return None

    def get_object_mapper(self) -> GraphQLObjectMapper | None:
        """Deprecated: override :meth:`get_configuration` instead."""
        return None

    def is_async_servlet_mode(self) -> bool:
        """Deprecated: override :meth:`get_configuration` instead."""
        return False

    def _configuration_source(self, listeners: ListenerRegistry) -> ConfigurationSource:
        return resolve_configuration_source(self.get_configuration(), self, listeners)

    # === Lifecycle ===

    def init(self) -> ReadyState:
        """Build the configuration if needed; safe to call on every request."""
        return self._initializer.ensure_initialized()

    @property
    def state(self) -> LifecycleState:
        return self._initializer.state

    @property
    def configuration(self) -> GraphQLConfiguration:
        return self.init().configuration

    def add_listener(self, listener: ServletListener) -> None:
        self._initializer.add_listener(listener)

    def remove_listener(self, listener: ServletListener) -> None:
        self._initializer.remove_listener(listener)

    # === Management surface ===

    def get_queries(self) -> list[str]:
        provider = self.configuration.invocation_input_factory.schema_provider
        return provider.get_query_field_names()

    def get_mutations(self) -> list[str]:
        provider = self.configuration.invocation_input_factory.schema_provider
        return provider.get_mutation_field_names()

    def execute_query(self, query: str) -> str:
        return self._query_executor.execute_query(query)

    # === HTTP entry points ===

    def do_get(self, request: ServletRequest, response: ServletResponse) -> None:
        self._dispatcher.dispatch(request, response)

    def do_post(self, request: ServletRequest, response: ServletResponse) -> None:
        self._dispatcher.dispatch(request, response)

    def service(self, request: ServletRequest, response: ServletResponse) -> None:
        """Route a request by HTTP method; anything but GET and POST gets 405."""
        if request.method == "GET":
            self.do_get(request, response)
        elif request.method == "POST":
            self.do_post(request, response)
        else:
            logger.info(
                "graphql_method_not_allowed", method=request.method, path=request.path
            )
            response.status_code = 405
            response.headers["allow"] = "GET, POST"
            response.write(
                GraphQLObjectMapper().serialize_error_as_json(
                    f"Method {request.method} not allowed"
                )
            )


class GraphQLHttpServlet(AbstractGraphQLHttpServlet):
    """Servlet configured with a complete :class:`GraphQLConfiguration`."""

    def __init__(
        self,
        configuration: GraphQLConfiguration,
        listeners: Iterable[ServletListener] | None = None,
    ):
        self._configuration = configuration
        super().__init__(listeners)

    def get_configuration(self) -> GraphQLConfiguration:
        return self._configuration
