"""Isolated invocation of user-supplied hooks.

Listener hooks and the convenience query path must never let an exception
escape into the caller. :func:`invoke_isolated` runs a callable, logs any
failure together with the identity of what failed, and hands back an
:class:`IsolatedResult` instead of raising.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import GraphQLServletError, ListenerHookError
from .logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class IsolatedResult(Generic[T]):
    """Outcome of an isolated call: either a value or the wrapped failure.

    ``value`` is None both when the call returned None and when it failed;
    check ``ok`` or ``error`` to tell the two apart.
    """

    value: T | None = None
    error: GraphQLServletError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def invoke_isolated(
    fn: Callable[..., T],
    *args: Any,
    target: Any = None,
    phase: str | None = None,
    error_cls: type[GraphQLServletError] = ListenerHookError,
    event: str = "listener_hook_failed",
    log_level: str = "error",
) -> IsolatedResult[T]:
    """Call ``fn(*args)`` and contain any exception it raises.

    Args:
        fn: Callable to run
        *args: Positional arguments for ``fn``
        target: Object the call belongs to (listener, callback, ...), logged on failure
        phase: Hook phase name, e.g. ``on_request``
        error_cls: Error type the failure is wrapped in; must accept
            ``(message, target=..., phase=...)``
        event: Log event name used on failure
        log_level: structlog method used on failure

    Returns:
        IsolatedResult holding the return value, or the wrapped error
    """
    try:
        return IsolatedResult(value=fn(*args))
    except Exception as e:
        error = error_cls(str(e), target=target, phase=phase)  # type: ignore[call-arg]
        error.__cause__ = e
        getattr(logger, log_level)(
            event,
            target=repr(target),
            phase=phase,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=e,
        )
        return IsolatedResult(error=error)


__all__ = ["IsolatedResult", "invoke_isolated"]
