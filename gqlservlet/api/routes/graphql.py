"""GraphQL HTTP endpoint: GET and POST both dispatch through the servlet."""

from fastapi import APIRouter, Request, Response
from starlette.concurrency import run_in_threadpool

from gqlservlet.core.logging import get_logger
from gqlservlet.services.http import ServletRequest, ServletResponse

from ..dependencies import ServletDep


logger = get_logger(__name__)


async def to_servlet_request(request: Request) -> ServletRequest:
    """Convert a Starlette request into a servlet request."""
    return ServletRequest(
        method=request.method,
        path=request.url.path,
        headers=dict(request.headers),
        query_params=dict(request.query_params),
        body=await request.body(),
    )


def to_response(servlet_response: ServletResponse) -> Response:
    return Response(
        content=servlet_response.body,
        status_code=servlet_response.status_code,
        headers=servlet_response.headers,
    )


def create_graphql_router(path: str = "/graphql") -> APIRouter:
    """Create the router serving GraphQL at ``path``.

    With ``async_servlet_mode`` the synchronous dispatch runs on Starlette's
    threadpool; otherwise it runs inline on the event loop and blocks it
    until the request finishes.
    """
    router = APIRouter(tags=["graphql"])

    @router.api_route(path, methods=["GET", "POST"])
    async def graphql_endpoint(request: Request, servlet: ServletDep) -> Response:
        servlet_request = await to_servlet_request(request)
        servlet_response = ServletResponse()

        if servlet.init().configuration.async_servlet_mode:
            await run_in_threadpool(servlet.service, servlet_request, servlet_response)
        else:
            servlet.service(servlet_request, servlet_response)

        return to_response(servlet_response)

    return router
