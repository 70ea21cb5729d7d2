"""Core primitives shared across gqlservlet: errors, logging and hook isolation."""

from .errors import (
    BadRequestError,
    ConfigurationError,
    GraphQLServletError,
    HandlerExecutionError,
    ListenerHookError,
    QueryExecutionError,
)
from .isolation import IsolatedResult, invoke_isolated


__all__ = [
    "BadRequestError",
    "ConfigurationError",
    "GraphQLServletError",
    "HandlerExecutionError",
    "IsolatedResult",
    "ListenerHookError",
    "QueryExecutionError",
    "invoke_isolated",
]
