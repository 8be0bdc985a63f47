"""Unit tests for the geobridge command line."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from geobridge.__main__ import cli


@pytest.fixture
def config_dir(tmp_path):
    with patch("geobridge.settings.config_manager.platformdirs.user_config_dir", return_value=str(tmp_path)):
        yield tmp_path


@pytest.fixture
def runner():
    return CliRunner()


def test_locate_dummy_succeeds(runner):
    result = runner.invoke(cli, ["locate", "--dummy"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"status": "success", "result": {"latitude": 52.52, "longitude": 13.405}}


def test_locate_unknown_method(runner):
    result = runner.invoke(cli, ["locate", "--dummy", "--method", "watchPosition"])
    assert result.exit_code == 1
    assert json.loads(result.output) == {"status": "not_implemented"}


def test_locate_denied_permission(runner, config_dir, monkeypatch):
    monkeypatch.setenv("GEOBRIDGE_PERMISSION_PROMPT", "deny")
    result = runner.invoke(cli, ["locate"])
    assert result.exit_code == 1
    assert json.loads(result.output)["code"] == "PERMISSION_DENIED"

    status = runner.invoke(cli, ["permission", "status"])
    assert status.output.strip() == "denied"


def test_locate_granted_uses_passive_position(runner, config_dir, monkeypatch):
    monkeypatch.setenv("GEOBRIDGE_GPS_ENABLED", "false")
    monkeypatch.setenv("GEOBRIDGE_PASSIVE_LATITUDE", "10.5")
    monkeypatch.setenv("GEOBRIDGE_PASSIVE_LONGITUDE", "20.5")
    runner.invoke(cli, ["permission", "grant"])

    with patch("geobridge.location.providers.NetworkProvider.last_known_fix", return_value=None):
        result = runner.invoke(cli, ["locate"])

    assert result.exit_code == 0
    assert json.loads(result.output)["result"] == {"latitude": 10.5, "longitude": 20.5}


def test_permission_commands(runner, config_dir):
    assert runner.invoke(cli, ["permission", "status"]).output.strip() == "undetermined"
    runner.invoke(cli, ["permission", "grant"])
    assert runner.invoke(cli, ["permission", "status"]).output.strip() == "granted"
    runner.invoke(cli, ["permission", "deny"])
    assert runner.invoke(cli, ["permission", "status"]).output.strip() == "denied"
    runner.invoke(cli, ["permission", "reset"])
    assert runner.invoke(cli, ["permission", "status"]).output.strip() == "undetermined"


def test_serve_dummy(runner):
    calls = '{"id": 1, "method": "getCurrentLocation"}\n{"id": 2, "method": "nope"}\n'
    result = runner.invoke(cli, ["serve", "--dummy"], input=calls)
    assert result.exit_code == 0
    replies = [json.loads(line) for line in result.output.splitlines()]
    assert replies == [
        {"id": 1, "status": "success", "result": {"latitude": 52.52, "longitude": 13.405}},
        {"id": 2, "status": "not_implemented"},
    ]


def test_serve_non_interactive_denial(runner, config_dir, monkeypatch):
    monkeypatch.setenv("GEOBRIDGE_PERMISSION_PROMPT", "deny")
    calls = '{"id": 1, "method": "getCurrentLocation"}\n{"id": 2, "method": "getCurrentLocation"}\n'
    result = runner.invoke(cli, ["serve"], input=calls)
    assert result.exit_code == 0
    replies = [json.loads(line) for line in result.output.splitlines()]
    assert [(r["id"], r["code"]) for r in replies] == [(1, "PERMISSION_DENIED"), (2, "PERMISSION_DENIED")]
