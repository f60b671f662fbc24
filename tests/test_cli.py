"""Tests for the command-line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

from nats_health_check.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "nhc.yaml"
    path.write_text(yaml.safe_dump({
        "vitals": {"server_name": "nats-1", "require_tls": True},
        "cluster": {"expected_peers": 3},
    }))
    return str(path)


class TestCheckCommand:
    """Tests for ``nhc check``."""

    def test_account_critical(self, runner, tmp_path, config_file):
        snapshot = tmp_path / "account.yaml"
        snapshot.write_text("memory: {used: 960, limit: 1024}\n")

        result = runner.invoke(main, ["check", "account", "-c", config_file, "--snapshot", str(snapshot)])
        assert result.exit_code == 2
        assert result.output.startswith("account CRITICAL Crit:93% memory")
        assert "memory_pct=93%;75;90" in result.output

    def test_cluster_ok_json(self, runner, tmp_path, config_file):
        snapshot = tmp_path / "cluster.yaml"
        snapshot.write_text(yaml.safe_dump({
            "leader": "nats-1",
            "replicas": [
                {"name": "nats-2", "current": True, "active": "10ms"},
                {"name": "nats-3", "current": True, "active": "10ms"},
            ],
        }))

        result = runner.invoke(
            main, ["check", "cluster", "-c", config_file, "--snapshot", str(snapshot), "--format", "json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "OK"
        assert "peers=3;3;3" in data["perf_data"]

    def test_check_error_is_critical(self, runner, tmp_path, config_file):
        snapshot = tmp_path / "vitals.yaml"
        snapshot.write_text("name: nats-2\nnow: 2024-06-01T12:00:00Z\n")

        result = runner.invoke(main, ["check", "vitals", "-c", config_file, "--snapshot", str(snapshot)])
        assert result.exit_code == 2
        assert "result from nats-2" in result.output

    def test_malformed_snapshot_is_critical(self, runner, tmp_path, config_file):
        snapshot = tmp_path / "cluster.yaml"
        snapshot.write_text("leader: nats-1\nreplicas: [{current: true}]\n")

        result = runner.invoke(main, ["check", "cluster", "-c", config_file, "--snapshot", str(snapshot)])
        assert result.exit_code == 2
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "cluster CRITICAL Crit:invalid cluster snapshot: missing 'name'" in result.output

    def test_table_output(self, runner, tmp_path, config_file):
        snapshot = tmp_path / "vitals.yaml"
        snapshot.write_text("name: nats-1\ntls_required: true\n")

        result = runner.invoke(
            main, ["check", "vitals", "-c", config_file, "--snapshot", str(snapshot), "--format", "table"],
        )
        assert result.exit_code == 0
        assert "TLS required" in result.output

    def test_message_needs_snapshot(self, runner, config_file):
        result = runner.invoke(main, ["check", "message", "-c", config_file])
        assert result.exit_code != 0
        assert "needs --snapshot" in result.output


class TestInitCommand:
    """Tests for ``nhc init``."""

    def test_creates_config(self, runner, tmp_path):
        path = tmp_path / "nhc.yaml"
        result = runner.invoke(main, ["init", "-o", str(path)])
        assert result.exit_code == 0
        assert path.exists()

    def test_refuses_overwrite(self, runner, tmp_path):
        path = tmp_path / "nhc.yaml"
        path.write_text("{}")
        result = runner.invoke(main, ["init", "-o", str(path)])
        assert result.exit_code == 1
