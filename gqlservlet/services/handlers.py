"""HTTP request handling strategies and their selection.

Two strategies exist: :class:`HttpRequestHandler` executes every request
directly, :class:`CachingHttpRequestHandler` consults a response cache first.
:class:`RequestHandlerSelector` picks one per configuration.
"""

from typing import TYPE_CHECKING, Protocol

from gqlservlet.core.errors import BadRequestError, HandlerExecutionError
from gqlservlet.core.logging import get_logger
from gqlservlet.execution.input import SingleInvocationInput
from gqlservlet.execution.invoker import ExecutionOutcome

from .cache import CachedResponse, ResponseCacheManager
from .http import ServletRequest, ServletResponse


if TYPE_CHECKING:
    from .configuration import GraphQLConfiguration


logger = get_logger(__name__)


class RequestHandler(Protocol):
    """Strategy executing one servlet request and writing its response."""

    def handle(self, request: ServletRequest, response: ServletResponse) -> None: ...


class HttpRequestHandler:
    """Reads, executes and writes a GraphQL request directly.

    On failure the error response is written first and the error re-raised, so
    the dispatcher can notify listeners about it.
    """

    def __init__(self, configuration: "GraphQLConfiguration"):
        self.configuration = configuration

    def handle(self, request: ServletRequest, response: ServletResponse) -> None:
        """Handle a GET or POST GraphQL request.

        Raises:
            BadRequestError: The request is not a readable GraphQL request (400 written)
            HandlerExecutionError: Execution failed unexpectedly (500 written)
        """
        object_mapper = self.configuration.object_mapper
        try:
            graphql_request = object_mapper.read_graphql_request(request)
            invocation_input = self.configuration.invocation_input_factory.create(
                graphql_request, request
            )
            self.execute(invocation_input, request, response)
        except BadRequestError as e:
            response.status_code = e.status_code
            response.write(object_mapper.serialize_error_as_json(e.message))
            logger.info(
                "graphql_bad_request",
                error=e.message,
                method=request.method,
                path=request.path,
            )
            raise
        except Exception as e:
            response.status_code = 500
            response.write(
                object_mapper.serialize_error_as_json("Internal server error")
            )
            logger.error(
                "graphql_request_handling_failed",
                error=str(e),
                method=request.method,
                path=request.path,
                exc_info=e,
            )
            raise HandlerExecutionError(str(e) or "Cannot handle http request") from e

    def execute(
        self,
        invocation_input: SingleInvocationInput,
        request: ServletRequest,
        response: ServletResponse,
    ) -> None:
        outcome = self.configuration.query_invoker.query(invocation_input)
        self.write_result(outcome, response)

    def write_result(
        self, outcome: ExecutionOutcome, response: ServletResponse
    ) -> None:
        object_mapper = self.configuration.object_mapper
        response.status_code = 200
        response.write(object_mapper.serialize_result_as_json(outcome.result))


class CachingHttpRequestHandler(HttpRequestHandler):
    """Direct handler that replays cached responses when the cache allows.

    Cache failures never fail the request: a broken read is treated as a miss,
    a broken write is dropped.
    """

    def __init__(self, configuration: "GraphQLConfiguration"):
        super().__init__(configuration)
        if configuration.response_cache_manager is None:
            raise ValueError(
                "CachingHttpRequestHandler requires a response_cache_manager"
            )
        self.cache_manager: ResponseCacheManager = configuration.response_cache_manager

    def execute(
        self,
        invocation_input: SingleInvocationInput,
        request: ServletRequest,
        response: ServletResponse,
    ) -> None:
        cacheable = self._is_cacheable(request, invocation_input)
        if cacheable:
            cached = self._read_cache(request, invocation_input)
            if cached is not None:
                logger.debug("response_cache_hit", path=request.path)
                cached.write_to(response)
                return

        outcome = self.configuration.query_invoker.query(invocation_input)
        self.write_result(outcome, response)

        if cacheable and not outcome.has_errors:
            self._write_cache(
                request, invocation_input, CachedResponse.of_response(response)
            )

    def _is_cacheable(
        self, request: ServletRequest, invocation_input: SingleInvocationInput
    ) -> bool:
        try:
            return bool(self.cache_manager.is_cacheable(request, invocation_input))
        except Exception as e:
            logger.warning("response_cache_check_failed", error=str(e), exc_info=e)
            return False

    def _read_cache(
        self, request: ServletRequest, invocation_input: SingleInvocationInput
    ) -> CachedResponse | None:
        try:
            return self.cache_manager.get(request, invocation_input)
        except Exception as e:
            logger.warning(
                "response_cache_read_failed",
                error=str(e),
                exc_info=e,
            )
            return None

    def _write_cache(
        self,
        request: ServletRequest,
        invocation_input: SingleInvocationInput,
        cached_response: CachedResponse,
    ) -> None:
        try:
            self.cache_manager.put(request, invocation_input, cached_response)
        except Exception as e:
            logger.warning(
                "response_cache_write_failed",
                error=str(e),
                exc_info=e,
            )


class HttpRequestHandlerFactory:
    """Creates the direct request handler for a configuration."""

    @staticmethod
    def create(configuration: "GraphQLConfiguration") -> RequestHandler:
        return HttpRequestHandler(configuration)


class RequestHandlerSelector:
    """Chooses the request handling strategy for a configuration."""

    def __init__(
        self, factory: type[HttpRequestHandlerFactory] = HttpRequestHandlerFactory
    ):
        self._factory = factory

    def select(self, configuration: "GraphQLConfiguration") -> RequestHandler:
        """Caching handler iff a response cache manager is configured."""
        if configuration.response_cache_manager is not None:
            return CachingHttpRequestHandler(configuration)
        return self._factory.create(configuration)
