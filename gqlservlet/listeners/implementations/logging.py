"""Structured request logging listener."""

import time
from typing import TYPE_CHECKING, Any

import structlog

from ..base import RequestCallback, ServletListener


if TYPE_CHECKING:
    from gqlservlet.services.http import ServletRequest, ServletResponse


class _RequestLogCallback(RequestCallback):
    def __init__(self, logger: Any, started_at: float) -> None:
        self._logger = logger
        self._started_at = started_at

    def _duration_ms(self) -> float:
        return round((time.perf_counter() - self._started_at) * 1000, 3)

    def on_success(
        self, request: "ServletRequest", response: "ServletResponse"
    ) -> None:
        self._logger.info(
            "graphql_request_completed",
            status_code=response.status_code,
            duration_ms=self._duration_ms(),
        )

    def on_error(
        self,
        request: "ServletRequest",
        response: "ServletResponse",
        error: Exception,
    ) -> None:
        self._logger.warning(
            "graphql_request_failed",
            status_code=response.status_code,
            error=str(error),
            error_type=type(error).__name__,
            duration_ms=self._duration_ms(),
        )

    def on_finally(
        self, request: "ServletRequest", response: "ServletResponse"
    ) -> None:
        self._logger.debug("graphql_request_finished", duration_ms=self._duration_ms())


class RequestLoggingListener(ServletListener):
    """Structured logging for every dispatched request"""

    def __init__(self, logger: Any | None = None):
        """Initialize logging listener.

        Args:
            logger: Optional structlog logger instance. If None, creates a new one.
        """
        self.logger = logger or structlog.get_logger(__name__)

    def on_request(
        self, request: "ServletRequest", response: "ServletResponse"
    ) -> RequestCallback:
        """Log the request start and return a callback timing its outcome.

        Args:
            request: Inbound servlet request
            response: Response the handler will write into
        """
        bound = self.logger.bind(method=request.method, path=request.path)
        bound.debug("graphql_request_started", content_type=request.content_type)
        return _RequestLogCallback(bound, time.perf_counter())
