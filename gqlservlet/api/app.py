"""FastAPI application factory for the gqlservlet HTTP adapter."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from structlog import get_logger

from gqlservlet import __version__
from gqlservlet.api.middleware.errors import setup_error_handlers
from gqlservlet.api.routes.graphql import create_graphql_router
from gqlservlet.api.routes.health import router as health_router
from gqlservlet.api.routes.management import router as management_router
from gqlservlet.config.settings import Settings, get_settings
from gqlservlet.services.servlet import AbstractGraphQLHttpServlet


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: log startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "server_start",
        url=settings.server_url,
        servlet_state=app.state.servlet.state.value,
    )
    yield
    logger.info("server_stop")


def create_app(
    servlet: AbstractGraphQLHttpServlet, settings: Settings | None = None
) -> FastAPI:
    """Create the FastAPI application serving ``servlet``.

    Args:
        servlet: Servlet handling GraphQL requests
        settings: Application settings; the cached process settings by default

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="gqlservlet",
        description="GraphQL over HTTP with lifecycle listeners",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.servlet = servlet
    app.state.settings = settings

    setup_error_handlers(app)

    app.include_router(health_router)
    app.include_router(create_graphql_router(settings.server.graphql_path))
    if settings.server.management_enabled:
        app.include_router(management_router)

    logger.debug(
        "app_created",
        graphql_path=settings.server.graphql_path,
        management_enabled=settings.server.management_enabled,
    )
    return app
