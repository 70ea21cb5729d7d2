"""Tests for the synchronous convenience query path."""

import json

import pytest
from structlog.testing import capture_logs

from gqlservlet.core.errors import ConfigurationError
from gqlservlet.execution.invoker import QueryInvoker
from gqlservlet.services.configuration import GraphQLConfiguration
from gqlservlet.services.servlet import AbstractGraphQLHttpServlet, GraphQLHttpServlet


class SilentFailureInvoker(QueryInvoker):
    def query(self, invocation_input):
        raise RuntimeError()


class NoConfigurationServlet(AbstractGraphQLHttpServlet):
    def get_configuration(self):
        raise ConfigurationError("schema unavailable")


@pytest.mark.unit
class TestExecuteQuery:
    """execute_query always returns a string and never raises."""

    def test_typename(self, servlet) -> None:
        result = json.loads(servlet.execute_query("{ __typename }"))
        assert result == {"data": {"__typename": "Query"}}

    def test_field_resolution(self, servlet) -> None:
        result = json.loads(servlet.execute_query("{ hello greeting }"))
        assert result == {"data": {"hello": "Hello, world!", "greeting": "hi"}}

    def test_invalid_query_reports_errors(self, servlet) -> None:
        result = servlet.execute_query("{ doesNotExist }")

        assert result
        assert "doesNotExist" in json.loads(result)["errors"][0]["message"]

    def test_syntax_error_reports_errors(self, servlet) -> None:
        result = servlet.execute_query("{")
        assert json.loads(result)["errors"]

    def test_failure_without_message_is_empty_string(self, input_factory) -> None:
        configuration = (
            GraphQLConfiguration.with_input_factory(input_factory)
            .with_query_invoker(SilentFailureInvoker())
            .build()
        )

        with capture_logs() as logs:
            result = GraphQLHttpServlet(configuration).execute_query("{ hello }")

        assert result == ""
        failures = [log for log in logs if log["event"] == "query_execution_failed"]
        assert failures[0]["log_level"] == "warning"
        assert failures[0]["target"] == "'{ hello }'"

    def test_initialization_failure_returns_message(self) -> None:
        servlet = NoConfigurationServlet()
        assert servlet.execute_query("{ hello }") == "schema unavailable"

    def test_does_not_notify_listeners(
        self, servlet, make_listener, event_log
    ) -> None:
        servlet.add_listener(make_listener("a"))

        servlet.execute_query("{ hello }")

        assert event_log == []
