"""Tests for reading GraphQL requests and writing results."""

import json

import pytest
from graphql import ExecutionResult, GraphQLError

from gqlservlet.core.errors import BadRequestError
from gqlservlet.execution.object_mapper import GraphQLObjectMapper
from gqlservlet.execution.request import GraphQLRequest
from gqlservlet.services.http import ServletRequest


@pytest.fixture
def mapper() -> GraphQLObjectMapper:
    return GraphQLObjectMapper()


@pytest.mark.unit
class TestReadGetRequest:
    """GET requests carry the request in query parameters."""

    def test_query_variables_and_operation_name(self, mapper) -> None:
        request = ServletRequest(
            method="GET",
            query_params={
                "query": "query Hi($n: String) { hello(name: $n) }",
                "variables": '{"n": "Ada"}',
                "operationName": "Hi",
            },
        )

        graphql_request = mapper.read_graphql_request(request)

        assert graphql_request.query.startswith("query Hi")
        assert graphql_request.variables == {"n": "Ada"}
        assert graphql_request.operation_name == "Hi"

    def test_missing_query_is_bad_request(self, mapper) -> None:
        with pytest.raises(BadRequestError, match="Missing 'query'"):
            mapper.read_graphql_request(ServletRequest(method="GET"))

    def test_invalid_variables_json_is_bad_request(self, mapper) -> None:
        request = ServletRequest(
            method="GET", query_params={"query": "{ hello }", "variables": "{nope"}
        )
        with pytest.raises(BadRequestError, match="'variables' is not valid JSON"):
            mapper.read_graphql_request(request)

    def test_empty_variables_and_operation_name(self, mapper) -> None:
        request = ServletRequest(
            method="GET",
            query_params={"query": "{ hello }", "variables": "", "operationName": ""},
        )

        graphql_request = mapper.read_graphql_request(request)

        assert graphql_request.variables == {}
        assert graphql_request.operation_name is None


@pytest.mark.unit
class TestReadPostRequest:
    """POST requests carry JSON or a raw GraphQL document."""

    def test_json_body(self, mapper) -> None:
        body = {"query": "{ hello }", "variables": None, "operationName": None}
        request = ServletRequest(
            method="POST",
            headers={"Content-Type": "application/json"},
            body=json.dumps(body).encode(),
        )

        graphql_request = mapper.read_graphql_request(request)

        assert graphql_request == GraphQLRequest.query_only("{ hello }")

    def test_variables_as_json_string(self, mapper) -> None:
        body = {"query": "{ hello }", "variables": '{"a": 1}'}
        request = ServletRequest(method="POST", body=json.dumps(body).encode())

        assert mapper.read_graphql_request(request).variables == {"a": 1}

    def test_application_graphql_body(self, mapper) -> None:
        request = ServletRequest(
            method="POST",
            headers={"content-type": "application/graphql; charset=utf-8"},
            body=b"{ greeting }",
        )

        graphql_request = mapper.read_graphql_request(request)

        assert graphql_request.query == "{ greeting }"
        assert graphql_request.variables == {}

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            (b"{not json", "not valid JSON"),
            (b"", "must be a JSON object"),
            (b'"just a string"', "must be a JSON object"),
            (b'[{"query": "{ hello }"}]', "Batched GraphQL requests are not supported"),
            (b'{"variables": {}}', "Invalid GraphQL request"),
            (b'{"query": "{ hello }", "variables": [1]}', "must be a JSON object"),
        ],
    )
    def test_bad_bodies(self, mapper, body: bytes, message: str) -> None:
        request = ServletRequest(method="POST", body=body)
        with pytest.raises(BadRequestError, match=message):
            mapper.read_graphql_request(request)

    def test_empty_graphql_document(self, mapper) -> None:
        request = ServletRequest(
            method="POST", headers={"content-type": "application/graphql"}, body=b"  "
        )
        with pytest.raises(BadRequestError, match="Empty GraphQL document"):
            mapper.read_graphql_request(request)

    def test_invalid_utf8_graphql_document(self, mapper) -> None:
        request = ServletRequest(
            method="POST",
            headers={"content-type": "application/graphql"},
            body=b"{ hello \xff }",
        )
        with pytest.raises(BadRequestError, match="not valid UTF-8"):
            mapper.read_graphql_request(request)

    def test_unsupported_method(self, mapper) -> None:
        with pytest.raises(BadRequestError, match="Unsupported HTTP method: PUT"):
            mapper.read_graphql_request(ServletRequest(method="PUT"))


@pytest.mark.unit
class TestSerialization:
    """Results serialize to the GraphQL-over-HTTP JSON shape."""

    def test_data_only(self, mapper) -> None:
        text = mapper.serialize_result_as_json(ExecutionResult(data={"hello": "hi"}))
        assert json.loads(text) == {"data": {"hello": "hi"}}

    def test_errors_included(self, mapper) -> None:
        result = ExecutionResult(data=None, errors=[GraphQLError("bad field")])
        payload = json.loads(mapper.serialize_result_as_json(result))
        assert payload["data"] is None
        assert payload["errors"][0]["message"] == "bad field"

    def test_error_payload(self, mapper) -> None:
        payload = json.loads(mapper.serialize_error_as_json("nope"))
        assert payload == {"errors": [{"message": "nope"}]}
