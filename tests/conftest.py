"""Shared test fixtures and configuration for gqlservlet tests.

Fixtures use the real graphql-core engine against a small in-memory schema;
listeners record every hook call into a shared event log so tests can assert
on exact ordering.
"""

import json
from collections.abc import Callable, Iterable
from typing import Any

import pytest

from gqlservlet.core.logging import setup_logging
from gqlservlet.execution.input import GraphQLSchemaProvider, InvocationInputFactory
from gqlservlet.listeners.base import RequestCallback, ServletListener
from gqlservlet.services.configuration import GraphQLConfiguration
from gqlservlet.services.http import ServletRequest, ServletResponse
from gqlservlet.services.servlet import GraphQLHttpServlet


SCHEMA_SDL = """
type Query {
    hello(name: String): String
    greeting: String
    boom: String
}

type Mutation {
    setGreeting(text: String!): String
}
"""


class Root:
    """Root value resolving the test schema's top-level fields."""

    def __init__(self) -> None:
        self.greeting = "hi"

    def hello(self, info: Any, name: str | None = None) -> str:
        return f"Hello, {name or 'world'}!"

    def boom(self, info: Any) -> str:
        raise ValueError("resolver exploded")

    def setGreeting(self, info: Any, text: str) -> str:  # noqa: N802
        self.greeting = text
        return text


class RecordingCallback(RequestCallback):
    """Callback appending ``<name>:<phase>`` to the event log."""

    def __init__(self, name: str, log: list[str], fail_on: Iterable[str] = ()):
        self.name = name
        self.log = log
        self.fail_on = set(fail_on)
        self.errors: list[Exception] = []

    def _record(self, phase: str) -> None:
        self.log.append(f"{self.name}:{phase}")
        if phase in self.fail_on:
            raise RuntimeError(f"{self.name} failed in {phase}")

    def on_success(self, request: ServletRequest, response: ServletResponse) -> None:
        self._record("on_success")

    def on_error(
        self, request: ServletRequest, response: ServletResponse, error: Exception
    ) -> None:
        self.errors.append(error)
        self._record("on_error")

    def on_finally(self, request: ServletRequest, response: ServletResponse) -> None:
        self._record("on_finally")

    def __repr__(self) -> str:
        return f"RecordingCallback({self.name!r})"


class RecordingListener(ServletListener):
    """Listener recording ``<name>:on_request`` and returning a RecordingCallback."""

    def __init__(
        self,
        name: str,
        log: list[str],
        fail_on: Iterable[str] = (),
        returns_callback: bool = True,
    ):
        self.name = name
        self.log = log
        self.fail_on = set(fail_on)
        self.returns_callback = returns_callback
        self.callbacks: list[RecordingCallback] = []

    def on_request(
        self, request: ServletRequest, response: ServletResponse
    ) -> RequestCallback | None:
        self.log.append(f"{self.name}:on_request")
        if "on_request" in self.fail_on:
            raise RuntimeError(f"{self.name} failed in on_request")
        if not self.returns_callback:
            return None
        callback = RecordingCallback(self.name, self.log, self.fail_on)
        self.callbacks.append(callback)
        return callback

    def __repr__(self) -> str:
        return f"RecordingListener({self.name!r})"


def pytest_configure(config: pytest.Config) -> None:
    """Configure logging the same way the application does."""
    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.fixture
def schema_provider() -> GraphQLSchemaProvider:
    return GraphQLSchemaProvider.from_sdl(SCHEMA_SDL)


@pytest.fixture
def input_factory(schema_provider: GraphQLSchemaProvider) -> InvocationInputFactory:
    return InvocationInputFactory(schema_provider, root_value=Root())


@pytest.fixture
def configuration(input_factory: InvocationInputFactory) -> GraphQLConfiguration:
    return (
        GraphQLConfiguration.with_input_factory(input_factory)
        .with_async_servlet_mode(False)
        .build()
    )


@pytest.fixture
def servlet(configuration: GraphQLConfiguration) -> GraphQLHttpServlet:
    return GraphQLHttpServlet(configuration)


@pytest.fixture
def event_log() -> list[str]:
    return []


@pytest.fixture
def make_listener(event_log: list[str]) -> Callable[..., RecordingListener]:
    """Factory for listeners sharing the test's event log."""

    def _make(
        name: str, fail_on: Iterable[str] = (), returns_callback: bool = True
    ) -> RecordingListener:
        return RecordingListener(name, event_log, fail_on, returns_callback)

    return _make


@pytest.fixture
def make_post() -> Callable[..., ServletRequest]:
    """Factory for JSON POST servlet requests."""

    def _make(
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> ServletRequest:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        if operation_name is not None:
            payload["operationName"] = operation_name
        return ServletRequest(
            method="POST",
            path="/graphql",
            headers={"Content-Type": "application/json"},
            body=json.dumps(payload).encode("utf-8"),
        )

    return _make
