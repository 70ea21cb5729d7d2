"""Tests for the gqlservlet command line."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs
from typer.testing import CliRunner

from gqlservlet import __version__
from gqlservlet.cli.main import app


SDL = """
type Query {
    ping: String
    version: String
}

type Mutation {
    reset: Boolean
}
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "schema.graphql"
    path.write_text(SDL, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep log lines out of the captured command output."""
    with patch("gqlservlet.cli.main.setup_logging"), capture_logs():
        yield


@pytest.mark.unit
class TestCli:
    """Test the CLI commands."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_query(self, runner: CliRunner, schema_file: Path) -> None:
        result = runner.invoke(
            app, ["query", "{ __typename }", "--schema", str(schema_file)]
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"data": {"__typename": "Query"}}

    def test_query_resolves_null_without_root(
        self, runner: CliRunner, schema_file: Path
    ) -> None:
        result = runner.invoke(app, ["query", "{ ping }", "-s", str(schema_file)])

        assert json.loads(result.output) == {"data": {"ping": None}}

    def test_fields(self, runner: CliRunner, schema_file: Path) -> None:
        result = runner.invoke(app, ["fields", "--schema", str(schema_file)])

        assert result.exit_code == 0
        for name in ("ping", "version", "reset"):
            assert name in result.output

    def test_schema_from_config_file(
        self, runner: CliRunner, schema_file: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "gqlservlet.toml"
        config.write_text(
            f'[execution]\nschema_path = "{schema_file.as_posix()}"\n',
            encoding="utf-8",
        )

        result = runner.invoke(app, ["--config", str(config), "fields"])

        assert result.exit_code == 0
        assert "ping" in result.output

    def test_missing_schema(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GQLSERVLET_EXECUTION__SCHEMA_PATH", raising=False)

        result = runner.invoke(app, ["query", "{ ping }"])

        assert result.exit_code == 1
        assert "No GraphQL schema configured" in result.output

    def test_invalid_schema(self, runner: CliRunner, tmp_path: Path) -> None:
        bad = tmp_path / "bad.graphql"
        bad.write_text("type Query {", encoding="utf-8")

        result = runner.invoke(app, ["fields", "--schema", str(bad)])

        assert result.exit_code == 1
        assert "Invalid GraphQL schema" in result.output

    def test_serve(self, runner: CliRunner, schema_file: Path) -> None:
        with patch("gqlservlet.cli.main.uvicorn.run") as run:
            result = runner.invoke(
                app,
                ["serve", "--schema", str(schema_file), "--port", "9123"],
            )

        assert result.exit_code == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 9123
        assert run.call_args.kwargs["host"] == "127.0.0.1"
