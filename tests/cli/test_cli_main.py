"""
Tests for the envregistry CLI.

This module tests the show, get, check and export commands against real
configuration files written to a temporary directory.
"""

import json

import pytest

from envregistry.cli.exit_codes import EXIT_CONFIG_ERROR, EXIT_ERROR
from envregistry.cli.main import app


class TestShow:
    """Tests for the show command."""

    def test_show_json(self, typer_test_client, json_source):
        result = typer_test_client.invoke(app, ["show", str(json_source), "--json"])

        assert result.exit_code == 0
        dotmap = json.loads(result.stdout)
        assert dotmap["db.host"] == "localhost"
        assert dotmap["app.debug"] is False

    def test_show_table_lists_keys(self, typer_test_client, json_source):
        result = typer_test_client.invoke(app, ["show", str(json_source)])

        assert result.exit_code == 0
        assert "db.port" in result.output
        assert "5432" in result.output

    def test_show_missing_file(self, typer_test_client, tmp_path):
        result = typer_test_client.invoke(app, ["show", str(tmp_path / "absent.json")])

        assert result.exit_code == EXIT_ERROR
        assert "file not found" in result.output


class TestGet:
    """Tests for the get command."""

    def test_get_scalar(self, typer_test_client, json_source):
        result = typer_test_client.invoke(app, ["get", str(json_source), "db.port"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "5432"

    def test_get_subtree_as_json(self, typer_test_client, json_source):
        result = typer_test_client.invoke(app, ["get", str(json_source), "app"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"debug": False, "name": "billing"}

    def test_get_default(self, typer_test_client, json_source):
        result = typer_test_client.invoke(
            app, ["get", str(json_source), "db.user", "--default", "postgres"]
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == "postgres"

    def test_get_missing_key(self, typer_test_client, json_source):
        result = typer_test_client.invoke(app, ["get", str(json_source), "db.user"])

        assert result.exit_code == EXIT_ERROR
        assert "db.user" in result.output


class TestCheck:
    """Tests for the check command."""

    def test_check_passes(self, typer_test_client, json_source):
        result = typer_test_client.invoke(
            app, ["check", str(json_source), "-r", "db.host", "-r", "app.name"]
        )

        assert result.exit_code == 0
        assert "all 2 required variables present" in result.output

    def test_check_reports_every_missing_key(self, typer_test_client, json_source):
        result = typer_test_client.invoke(
            app,
            ["check", str(json_source), "-r", "db.host", "-r", "db.user", "-r", "db.password"],
        )

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "db.user" in result.output
        assert "db.password" in result.output
        assert "2 of 3 required variables missing" in result.output

    def test_check_unreadable_source(self, typer_test_client, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")

        result = typer_test_client.invoke(app, ["check", str(path), "-r", "a"])

        assert result.exit_code == EXIT_ERROR


class TestExport:
    """Tests for the export command."""

    def test_export_lines(self, typer_test_client, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"db": {"host": "localhost", "opts": {"ssl": True}}, "name": "my app"}))

        result = typer_test_client.invoke(app, ["export", str(path), "--prefix", "SVC_"])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert "SVC_db.host=localhost" in lines
        assert "SVC_db.opts.ssl=true" in lines
        assert "SVC_name='my app'" in lines

    def test_export_default_prefix(self, typer_test_client, tmp_path):
        path = tmp_path / ".env"
        path.write_text("db.host=localhost\n")

        result = typer_test_client.invoke(app, ["export", str(path)])

        assert result.exit_code == 0
        assert result.stdout.strip() == "APP_db.host=localhost"


def test_no_args_shows_help(typer_test_client):
    result = typer_test_client.invoke(app, [])

    assert "show" in result.output
    assert "check" in result.output


@pytest.mark.parametrize("level", ["DEBUG", "error"])
def test_log_level_option(typer_test_client, json_source, level):
    result = typer_test_client.invoke(
        app, ["--log-level", level, "get", str(json_source), "db.host"]
    )

    assert result.exit_code == 0
    assert "localhost" in result.stdout


def test_invalid_log_level_is_usage_error(typer_test_client, json_source):
    result = typer_test_client.invoke(
        app, ["--log-level", "bogus", "get", str(json_source), "db.host"]
    )

    assert result.exit_code == 2
    assert "bogus" in result.output


def test_undecodable_source_exits_with_error(typer_test_client, tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"a": "\xff"}')

    result = typer_test_client.invoke(app, ["show", str(path)])

    assert result.exit_code == EXIT_ERROR
    assert not isinstance(result.exception, UnicodeDecodeError)
