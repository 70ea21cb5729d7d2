"""Request dispatch with isolated listener notification.

For each request the dispatcher:

1. makes sure the configuration is built,
2. calls every listener's ``on_request`` in registration order and keeps the
   callbacks they return,
3. runs the request handler, then ``on_success`` or ``on_error`` on every
   callback,
4. always finishes with ``on_finally`` on every callback.

Listener and callback failures are logged and contained; a handler failure is
logged and reported to the callbacks but not re-raised, since the handler has
already written the error response.
"""

from typing import Any

from gqlservlet.core.isolation import invoke_isolated
from gqlservlet.core.logging import get_logger
from gqlservlet.listeners.base import RequestCallback
from gqlservlet.listeners.registry import ListenerRegistry

from .http import ServletRequest, ServletResponse
from .initializer import ConfigurationInitializer


logger = get_logger(__name__)


def _call_hook(target: Any, phase: str, *args: Any) -> Any:
    return getattr(target, phase)(*args)


class RequestDispatcher:
    """Runs one servlet request through listeners and the selected handler."""

    def __init__(self, initializer: ConfigurationInitializer):
        self._initializer = initializer

    def dispatch(self, request: ServletRequest, response: ServletResponse) -> None:
        """Dispatch a request.

        Raises:
            ConfigurationError: If the configuration cannot be built
        """
        ready = self._initializer.ensure_initialized()
        callbacks: list[RequestCallback] = []
        try:
            self._run_listeners(
                ready.configuration.listeners, request, response, callbacks
            )
            try:
                ready.request_handler.handle(request, response)
            except Exception as e:
                logger.error(
                    "graphql_request_error",
                    error=str(e),
                    error_type=type(e).__name__,
                    method=request.method,
                    path=request.path,
                    exc_info=e,
                )
                self._run_callbacks(callbacks, "on_error", request, response, e)
            else:
                self._run_callbacks(callbacks, "on_success", request, response)
        finally:
            self._run_callbacks(callbacks, "on_finally", request, response)

    def _run_listeners(
        self,
        listeners: ListenerRegistry,
        request: ServletRequest,
        response: ServletResponse,
        callbacks: list[RequestCallback],
    ) -> None:
        # Collected in place so callbacks gathered so far still get on_finally
        for listener in listeners:
            result = invoke_isolated(
                _call_hook,
                listener,
                "on_request",
                request,
                response,
                target=listener,
                phase="on_request",
            )
            if result.value is not None:
                callbacks.append(result.value)

    def _run_callbacks(
        self, callbacks: list[RequestCallback], phase: str, *args: Any
    ) -> None:
        for callback in callbacks:
            invoke_isolated(
                _call_hook, callback, phase, *args, target=callback, phase=phase
            )
