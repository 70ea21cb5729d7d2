"""Transport-neutral request and response objects.

The dispatcher, handlers and listeners only see these; the FastAPI layer
converts Starlette requests into :class:`ServletRequest` and turns the filled
:class:`ServletResponse` back into a Starlette response.
"""

from dataclasses import dataclass, field


JSON_CONTENT_TYPE = "application/json"
GRAPHQL_CONTENT_TYPE = "application/graphql"


@dataclass
class ServletRequest:
    """Inbound HTTP request as seen by the servlet."""

    method: str
    path: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = {k.lower(): v for k, v in self.headers.items()}

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)

    @property
    def content_type(self) -> str:
        """Media type without parameters, lower-cased; empty when absent."""
        raw = self.headers.get("content-type", "")
        return raw.split(";", 1)[0].strip().lower()


@dataclass
class ServletResponse:
    """Mutable response the request handler writes into."""

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def write(
        self, content: str | bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        self.body = content.encode("utf-8") if isinstance(content, str) else content
        self.headers["content-type"] = content_type

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")
