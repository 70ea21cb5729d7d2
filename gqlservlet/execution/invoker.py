"""Query invoker backed by graphql-core."""

from dataclasses import dataclass

from graphql import ExecutionResult, graphql_sync

from gqlservlet.core.logging import get_logger

from .input import SingleInvocationInput


logger = get_logger(__name__)


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of running one invocation input."""

    result: ExecutionResult

    @property
    def has_errors(self) -> bool:
        return bool(self.result.errors)


class QueryInvoker:
    """Executes prepared invocation inputs synchronously on the calling thread."""

    def query(self, invocation_input: SingleInvocationInput) -> ExecutionOutcome:
        request = invocation_input.request
        result = graphql_sync(
            invocation_input.schema,
            request.query,
            root_value=invocation_input.root_value,
            context_value=invocation_input.context_value,
            variable_values=request.variables or None,
            operation_name=request.operation_name,
        )
        if result.errors:
            logger.debug(
                "graphql_execution_errors",
                operation_name=request.operation_name,
                error_count=len(result.errors),
            )
        return ExecutionOutcome(result=result)
