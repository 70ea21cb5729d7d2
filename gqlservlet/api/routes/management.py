"""Management endpoints exposing schema introspection and ad-hoc queries."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from gqlservlet.core.logging import get_logger

from ..dependencies import ServletDep


router = APIRouter(prefix="/management", tags=["management"])
logger = get_logger(__name__)


class ExecuteQueryRequest(BaseModel):
    query: str = Field(description="GraphQL document to execute")


class ExecuteQueryResponse(BaseModel):
    result: str = Field(description="Serialized result, or the failure message")


@router.get("/queries")
async def list_queries(servlet: ServletDep) -> dict[str, Any]:
    """List the query field names of the served schema."""
    return {"queries": servlet.get_queries()}


@router.get("/mutations")
async def list_mutations(servlet: ServletDep) -> dict[str, Any]:
    """List the mutation field names of the served schema."""
    return {"mutations": servlet.get_mutations()}


@router.post("/execute")
async def execute_query(
    payload: ExecuteQueryRequest, servlet: ServletDep
) -> ExecuteQueryResponse:
    """Execute a bare query; failures come back as the result text."""
    logger.debug("management_execute_query")
    result = await run_in_threadpool(servlet.execute_query, payload.query)
    return ExecuteQueryResponse(result=result)
