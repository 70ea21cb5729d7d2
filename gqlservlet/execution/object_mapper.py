"""JSON reading and writing of GraphQL requests and results."""

import json
from typing import Any

from graphql import ExecutionResult
from pydantic import ValidationError

from gqlservlet.core.errors import BadRequestError
from gqlservlet.services.http import GRAPHQL_CONTENT_TYPE, ServletRequest

from .request import GraphQLRequest


class GraphQLObjectMapper:
    """Converts between HTTP payloads and GraphQL requests/results."""

    def __init__(self, indent: int | None = None):
        self.indent = indent

    def serialize_result_as_json(self, result: ExecutionResult) -> str:
        """Serialize an execution result to the GraphQL-over-HTTP JSON shape."""
        return json.dumps(result.formatted, indent=self.indent)

    def serialize_error_as_json(self, message: str) -> str:
        return json.dumps({"errors": [{"message": message}]}, indent=self.indent)

    def read_graphql_request(self, request: ServletRequest) -> GraphQLRequest:
        """Read a GraphQL request from a GET or POST servlet request.

        Raises:
            BadRequestError: If the request does not carry a readable GraphQL request
        """
        if request.method == "GET":
            return self._read_get(request)
        if request.method == "POST":
            return self._read_post(request)
        raise BadRequestError(f"Unsupported HTTP method: {request.method}")

    def _read_get(self, request: ServletRequest) -> GraphQLRequest:
        params = request.query_params
        if not params.get("query"):
            raise BadRequestError("Missing 'query' parameter")
        return self._build_request(
            {
                "query": params["query"],
                "variables": self._parse_variables(params.get("variables")),
                "operationName": params.get("operationName") or None,
            }
        )

    def _read_post(self, request: ServletRequest) -> GraphQLRequest:
        if request.content_type == GRAPHQL_CONTENT_TYPE:
            try:
                query = request.body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise BadRequestError(f"Request body is not valid UTF-8: {e}") from e
            if not query.strip():
                raise BadRequestError("Empty GraphQL document")
            return GraphQLRequest.query_only(query)

        try:
            payload = json.loads(request.body or b"null")
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BadRequestError(f"Request body is not valid JSON: {e}") from e

        if isinstance(payload, list):
            raise BadRequestError("Batched GraphQL requests are not supported")
        if not isinstance(payload, dict):
            raise BadRequestError("Request body must be a JSON object")

        payload = dict(payload)
        payload["variables"] = self._parse_variables(payload.get("variables"))
        return self._build_request(payload)

    def _parse_variables(self, raw: Any) -> dict[str, Any]:
        if raw is None or raw == "":
            return {}
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise BadRequestError(f"'variables' is not valid JSON: {e}") from e
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise BadRequestError("'variables' must be a JSON object")
        return raw

    def _build_request(self, payload: dict[str, Any]) -> GraphQLRequest:
        try:
            return GraphQLRequest.model_validate(payload)
        except ValidationError as e:
            errors = e.errors(
                include_url=False, include_context=False, include_input=False
            )
            raise BadRequestError(
                "Invalid GraphQL request", details={"errors": errors}
            ) from e
