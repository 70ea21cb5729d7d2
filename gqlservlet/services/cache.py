"""Response cache contract used by the caching request handler.

Storage is up to the implementer; the servlet only needs to ask whether a
request may be cached, read a cached response and store a new one.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .http import JSON_CONTENT_TYPE, ServletRequest, ServletResponse


if TYPE_CHECKING:
    from gqlservlet.execution.input import SingleInvocationInput


@dataclass(frozen=True)
class CachedResponse:
    """A response body captured for replay."""

    body: bytes
    status_code: int = 200
    content_type: str = JSON_CONTENT_TYPE

    @classmethod
    def of_response(cls, response: ServletResponse) -> "CachedResponse":
        return cls(
            body=response.body,
            status_code=response.status_code,
            content_type=response.content_type or JSON_CONTENT_TYPE,
        )

    def write_to(self, response: ServletResponse) -> None:
        response.status_code = self.status_code
        response.write(self.body, content_type=self.content_type)


@runtime_checkable
class ResponseCacheManager(Protocol):
    """Protocol for response cache backends."""

    def is_cacheable(
        self, request: ServletRequest, invocation_input: "SingleInvocationInput"
    ) -> bool:
        """Whether this response may be read from or stored in the cache."""
        ...

    def get(
        self, request: ServletRequest, invocation_input: "SingleInvocationInput"
    ) -> CachedResponse | None:
        """Return the cached response, or None on a miss."""
        ...

    def put(
        self,
        request: ServletRequest,
        invocation_input: "SingleInvocationInput",
        cached_response: CachedResponse,
    ) -> None:
        """Store a response for later requests."""
        ...


__all__ = ["CachedResponse", "ResponseCacheManager"]
