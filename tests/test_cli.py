from __future__ import annotations

from typing import Any, cast

import pytest
from typer.testing import CliRunner

from conftest import FakeSecretsServer
from secretdesk.cli import _version_callback, app
from secretdesk.config import Settings
from secretdesk.engine.backend_api import BackendAPI

runner = CliRunner()


@pytest.fixture
def cli_server(monkeypatch, settings: Settings) -> FakeSecretsServer:
    server = FakeSecretsServer()

    def _open_backend() -> BackendAPI:
        server.closed = False
        api = BackendAPI(settings)
        api._session = cast(Any, server)
        return api

    monkeypatch.setattr("secretdesk.cli.secrets.open_backend", _open_backend)
    return server


def test_cli_app_help_and_version() -> None:
    help_result = runner.invoke(app, ["--help"])
    assert help_result.exit_code == 0
    assert "secrets" in help_result.stdout
    assert "workflows" in help_result.stdout

    version_result = runner.invoke(app, ["--version"])
    assert version_result.exit_code == 0
    assert "secretdesk" in version_result.stdout


def test_version_callback_noop_when_false() -> None:
    assert _version_callback(False) is None


def test_set_creates_secret_from_prompted_value(cli_server: FakeSecretsServer) -> None:
    result = runner.invoke(app, ["secrets", "set", "db-pass"], input="s3cr3t\n")

    assert result.exit_code == 0, result.stdout
    assert "Saved secret" in result.stdout
    assert cli_server.store == {(None, "db-pass"): "s3cr3t"}
    assert "s3cr3t" not in result.stdout


def test_set_updates_existing_workflow_secret(cli_server: FakeSecretsServer) -> None:
    cli_server.store[("billing", "api-key")] = "old"

    result = runner.invoke(
        app, ["secrets", "set", "api-key", "--workflow", "billing", "--value", "new"]
    )

    assert result.exit_code == 0, result.stdout
    assert cli_server.store == {("billing", "api-key"): "new"}
    assert [call["method"] for call in cli_server.calls] == ["GET", "GET", "PUT"]


def test_set_rejects_blank_value_without_request(cli_server: FakeSecretsServer) -> None:
    result = runner.invoke(app, ["secrets", "set", "db-pass", "--value", "   "])

    assert result.exit_code == 1
    assert "Value is required" in result.stdout
    assert cli_server.count("PUT") == 0


def test_list_shows_rows_for_scope(cli_server: FakeSecretsServer) -> None:
    cli_server.store[("billing", "api-key")] = "v"
    cli_server.store[(None, "db-pass")] = "v"

    result = runner.invoke(app, ["secrets", "list", "-w", "billing"])

    assert result.exit_code == 0, result.stdout
    assert "api-key" in result.stdout
    assert "db-pass" not in result.stdout
    assert "1 results" in result.stdout


def test_list_reports_request_failure(cli_server: FakeSecretsServer) -> None:
    cli_server.fail_next("GET", 500, {"message": "boom"})

    result = runner.invoke(app, ["secrets", "list"])

    assert result.exit_code == 1
    assert "boom" in result.stdout


def test_get_masks_value_unless_revealed(cli_server: FakeSecretsServer) -> None:
    cli_server.store[(None, "db-pass")] = "s3cr3t"

    masked = runner.invoke(app, ["secrets", "get", "db-pass"])
    assert masked.exit_code == 0, masked.stdout
    assert "s3cr3t" not in masked.stdout
    assert "********" in masked.stdout

    revealed = runner.invoke(app, ["secrets", "get", "db-pass", "--reveal"])
    assert "s3cr3t" in revealed.stdout


def test_get_missing_secret_exits_nonzero(cli_server: FakeSecretsServer) -> None:
    result = runner.invoke(app, ["secrets", "get", "nope"])

    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_get_blank_name_exits_nonzero(cli_server: FakeSecretsServer) -> None:
    result = runner.invoke(app, ["secrets", "get", ""])

    assert result.exit_code == 1
    assert "Secret name is required" in result.stdout
    assert cli_server.calls == []

def test_delete_cancelled_at_prompt_keeps_secret(cli_server: FakeSecretsServer) -> None:
    cli_server.store[(None, "db-pass")] = "v"

    result = runner.invoke(app, ["secrets", "delete", "db-pass"], input="n\n")

    assert result.exit_code == 0, result.stdout
    assert "Cancelled" in result.stdout
    assert cli_server.store == {(None, "db-pass"): "v"}
    assert cli_server.count("DELETE") == 0


def test_delete_confirmed_removes_only_that_scope(cli_server: FakeSecretsServer) -> None:
    cli_server.store[(None, "api-key")] = "g"
    cli_server.store[("billing", "api-key")] = "b"

    result = runner.invoke(app, ["secrets", "delete", "api-key"], input="y\n")

    assert result.exit_code == 0, result.stdout
    assert "Deleted secret" in result.stdout
    assert cli_server.store == {("billing", "api-key"): "b"}


def test_delete_missing_secret_fails(cli_server: FakeSecretsServer) -> None:
    result = runner.invoke(app, ["secrets", "delete", "nope", "--yes"])

    assert result.exit_code == 1
    assert cli_server.count("DELETE") == 0


def test_workflows_lists_catalog(cli_server: FakeSecretsServer) -> None:
    cli_server.workflows = {"shipping": [], "billing": []}

    result = runner.invoke(app, ["workflows"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.index("billing") < result.stdout.index("shipping")
    assert "2 workflows" in result.stdout
