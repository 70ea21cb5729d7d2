"""Listener and per-request callback base classes.

A :class:`ServletListener` observes every request the servlet dispatches. Its
``on_request`` hook may return a :class:`RequestCallback`, which then receives
exactly one of ``on_success`` / ``on_error`` followed by ``on_finally`` for
that request. All hooks default to no-ops so implementations only override
what they need.
"""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from gqlservlet.services.http import ServletRequest, ServletResponse


class RequestCallback:
    """Per-request continuation returned by :meth:`ServletListener.on_request`."""

    def on_success(
        self, request: "ServletRequest", response: "ServletResponse"
    ) -> None:
        """Called after the request handler returned normally."""

    def on_error(
        self,
        request: "ServletRequest",
        response: "ServletResponse",
        error: Exception,
    ) -> None:
        """Called after the request handler raised ``error``."""

    def on_finally(
        self, request: "ServletRequest", response: "ServletResponse"
    ) -> None:
        """Called last, whatever the outcome of the request."""


class ServletListener:
    """Observer of the servlet request lifecycle."""

    def on_request(
        self, request: "ServletRequest", response: "ServletResponse"
    ) -> RequestCallback | None:
        """Called before the request is handled.

        Returns:
            A callback to be notified about this request's outcome, or None
        """
        return None


__all__ = ["RequestCallback", "ServletListener"]
