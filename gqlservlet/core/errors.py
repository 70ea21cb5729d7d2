"""Custom exceptions for the GraphQL servlet adapter."""

from typing import Any


class GraphQLServletError(Exception):
    """Base exception for gqlservlet errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "internal_server_error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(GraphQLServletError):
    """A required collaborator is missing, or settings could not be loaded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="configuration_error",
            status_code=500,
            details=details,
        )


class ListenerHookError(GraphQLServletError):
    """A listener or callback hook raised.

    Always caught at the call site; carries the hook target and phase so the
    log line identifies which listener misbehaved.
    """

    def __init__(
        self,
        message: str,
        target: Any = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_type="listener_hook_error",
            status_code=500,
            details={"target": repr(target), "phase": phase},
        )
        self.target = target
        self.phase = phase


class HandlerExecutionError(GraphQLServletError):
    """The request handler failed after writing its error response."""

    def __init__(
        self,
        message: str = "Cannot handle http request",
        error_type: str = "handler_execution_error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_type=error_type,
            status_code=status_code,
            details=details,
        )


class BadRequestError(HandlerExecutionError):
    """The inbound request could not be read as a GraphQL request (400)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="bad_request_error",
            status_code=400,
            details=details,
        )


class QueryExecutionError(GraphQLServletError):
    """Failure on the convenience query path; converted to a string, never raised."""

    def __init__(self, message: str, target: Any = None, phase: str | None = None):
        super().__init__(
            message=message,
            error_type="query_execution_error",
            status_code=500,
            details={"phase": phase},
        )
        self.target = target
        self.phase = phase


__all__ = [
    "BadRequestError",
    "ConfigurationError",
    "GraphQLServletError",
    "HandlerExecutionError",
    "ListenerHookError",
    "QueryExecutionError",
]
