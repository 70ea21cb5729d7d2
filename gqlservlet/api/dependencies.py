"""Shared dependencies for the gqlservlet API."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from gqlservlet.config.settings import Settings
from gqlservlet.core.logging import get_logger
from gqlservlet.services.servlet import AbstractGraphQLHttpServlet


logger = get_logger(__name__)


def get_servlet(request: Request) -> AbstractGraphQLHttpServlet:
    """Get the servlet mounted on the application."""
    servlet: AbstractGraphQLHttpServlet | None = getattr(
        request.app.state, "servlet", None
    )
    if servlet is None:
        logger.error("servlet_missing_on_app_state")
        raise HTTPException(status_code=503, detail="GraphQL servlet not initialized")
    return servlet


def get_cached_settings(request: Request) -> Settings:
    """Get settings from app state."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return settings


ServletDep = Annotated[AbstractGraphQLHttpServlet, Depends(get_servlet)]
SettingsDep = Annotated[Settings, Depends(get_cached_settings)]
