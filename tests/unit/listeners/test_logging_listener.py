"""Tests for the request logging listener."""

import pytest
from structlog.testing import capture_logs

from gqlservlet.listeners.implementations import RequestLoggingListener
from gqlservlet.services.http import ServletRequest, ServletResponse


@pytest.fixture
def request_and_response() -> tuple[ServletRequest, ServletResponse]:
    request = ServletRequest(
        method="post",
        path="/graphql",
        headers={"Content-Type": "application/json; charset=utf-8"},
    )
    return request, ServletResponse()


@pytest.mark.unit
class TestRequestLoggingListener:
    """Test the events logged across a request."""

    def test_success_flow(self, request_and_response) -> None:
        request, response = request_and_response
        listener = RequestLoggingListener()

        with capture_logs() as logs:
            callback = listener.on_request(request, response)
            callback.on_success(request, response)
            callback.on_finally(request, response)

        events = [entry["event"] for entry in logs]
        assert events == [
            "graphql_request_started",
            "graphql_request_completed",
            "graphql_request_finished",
        ]
        assert logs[0]["method"] == "POST"
        assert logs[0]["path"] == "/graphql"
        assert logs[0]["content_type"] == "application/json"
        assert logs[1]["status_code"] == 200
        assert logs[1]["duration_ms"] >= 0

    def test_error_flow(self, request_and_response) -> None:
        request, response = request_and_response
        response.status_code = 500
        listener = RequestLoggingListener()

        with capture_logs() as logs:
            callback = listener.on_request(request, response)
            callback.on_error(request, response, RuntimeError("bad"))

        failed = logs[-1]
        assert failed["event"] == "graphql_request_failed"
        assert failed["log_level"] == "warning"
        assert failed["error"] == "bad"
        assert failed["error_type"] == "RuntimeError"
        assert failed["status_code"] == 500
