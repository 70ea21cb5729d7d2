"""Build a ready-to-serve servlet from settings and an SDL schema file."""

from collections.abc import Iterable
from pathlib import Path

from graphql import GraphQLError

from gqlservlet.config.settings import Settings
from gqlservlet.core.errors import ConfigurationError
from gqlservlet.core.logging import get_logger
from gqlservlet.execution.input import GraphQLSchemaProvider, InvocationInputFactory
from gqlservlet.listeners.base import ServletListener
from gqlservlet.listeners.implementations import RequestLoggingListener
from gqlservlet.services.configuration import GraphQLConfiguration
from gqlservlet.services.servlet import GraphQLHttpServlet


logger = get_logger(__name__)


def load_schema_provider(schema_path: Path | str | None) -> GraphQLSchemaProvider:
    """Read an SDL file into a schema provider.

    Raises:
        ConfigurationError: If no path is given, or the file is unreadable or invalid
    """
    if schema_path is None:
        raise ConfigurationError(
            "No GraphQL schema configured; set execution.schema_path or pass --schema"
        )
    path = Path(schema_path)
    try:
        sdl = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read schema file {path}: {e}") from e
    try:
        provider = GraphQLSchemaProvider.from_sdl(sdl)
    except (GraphQLError, TypeError) as e:
        raise ConfigurationError(f"Invalid GraphQL schema in {path}: {e}") from e
    logger.debug("schema_loaded", path=str(path))
    return provider


def create_servlet(
    settings: Settings,
    schema_path: Path | str | None = None,
    listeners: Iterable[ServletListener] | None = None,
) -> GraphQLHttpServlet:
    """Create a servlet for the schema at ``schema_path`` (or the configured one).

    A :class:`RequestLoggingListener` is always registered first.
    """
    provider = load_schema_provider(schema_path or settings.execution.schema_path)
    configuration = (
        GraphQLConfiguration.with_input_factory(InvocationInputFactory(provider))
        .with_async_servlet_mode(settings.execution.async_servlet_mode)
        .with_listeners([RequestLoggingListener()])
        .build()
    )
    return GraphQLHttpServlet(configuration, listeners=listeners)
