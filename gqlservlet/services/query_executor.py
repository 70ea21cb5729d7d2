"""Synchronous convenience execution of a bare query string.

Meant for management and introspection tooling, not production traffic: the
result is always a string, either the serialized result or the failure
message (empty when the failure carries none).
"""

from gqlservlet.core.errors import QueryExecutionError
from gqlservlet.core.isolation import invoke_isolated
from gqlservlet.execution.request import GraphQLRequest

from .initializer import ConfigurationInitializer


class QueryExecutor:
    """Executes query text through the configured invoker and object mapper."""

    def __init__(self, initializer: ConfigurationInitializer):
        self._initializer = initializer

    def execute_query(self, query: str) -> str:
        """Execute ``query`` and return the JSON result, or the failure message."""
        result = invoke_isolated(
            self._execute,
            query,
            target=query,
            phase="execute_query",
            error_cls=QueryExecutionError,
            event="query_execution_failed",
            log_level="warning",
        )
        if result.error is not None:
            return result.error.message
        return result.value or ""

    def _execute(self, query: str) -> str:
        configuration = self._initializer.ensure_initialized().configuration
        invocation_input = configuration.invocation_input_factory.create(
            GraphQLRequest.query_only(query)
        )
        outcome = configuration.query_invoker.query(invocation_input)
        return configuration.object_mapper.serialize_result_as_json(outcome.result)
