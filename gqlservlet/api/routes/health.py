"""Health check endpoints for the gqlservlet API."""

from typing import Any

from fastapi import APIRouter, Response

from gqlservlet import __version__
from gqlservlet.core.logging import get_logger

from ..dependencies import ServletDep


router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/health/live")
async def liveness_probe(response: Response) -> dict[str, Any]:
    """Liveness probe: the application process is running."""
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"

    logger.debug("liveness_probe_request")

    return {
        "status": "pass",
        "version": __version__,
        "output": "Application process is running",
    }


@router.get("/health/ready")
async def readiness_probe(response: Response, servlet: ServletDep) -> dict[str, Any]:
    """Readiness probe: reports whether the servlet configuration is built."""
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"

    return {
        "status": "pass",
        "version": __version__,
        "servlet_state": servlet.state.value,
    }
