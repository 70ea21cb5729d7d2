"""Error handling for the gqlservlet API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import get_logger

from gqlservlet.core.errors import GraphQLServletError


logger = get_logger(__name__)


def setup_error_handlers(app: FastAPI) -> None:
    """Setup error handlers for the FastAPI application.

    Only errors escaping the servlet reach these handlers: a configuration
    that cannot be built, or a failure outside dispatch. Handler errors are
    already written into the GraphQL response by the servlet itself.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(GraphQLServletError)
    async def servlet_error_handler(
        request: Request, exc: GraphQLServletError
    ) -> JSONResponse:
        logger.error(
            exc.error_type,
            error_message=exc.message,
            status_code=exc.status_code,
            request_method=request.method,
            request_url=str(request.url.path),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": exc.error_type,
                    "message": exc.message,
                }
            },
        )

    logger.debug("error_handlers_setup_completed")
