"""End-to-end tests for the command line interface."""

import json

from typer.testing import CliRunner

from schema_insight import __version__
from schema_insight.cli import app

runner = CliRunner()


class TestAnalyzeCommand:
    def test_rich_output(self, schema_dir):
        result = runner.invoke(app, ["analyze", str(schema_dir)])
        assert result.exit_code == 0, result.output
        assert "Schema Insight" in result.output
        assert "Maturity score" in result.output

    def test_json_output(self, schema_dir):
        result = runner.invoke(app, ["analyze", str(schema_dir), "--json", "--quiet"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout[result.stdout.index("{"):])
        assert data["projectMetrics"]["totalSchemas"] == 3
        assert data["referenceGraph"]["metrics"]["edgeCount"] == 2
        assert 0 <= data["maturityScore"] <= 100

    def test_threshold_out_of_range(self, schema_dir):
        result = runner.invoke(app, ["analyze", str(schema_dir), "--threshold", "1.5"])
        assert result.exit_code != 0

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing")])
        assert result.exit_code != 0

    def test_config_file(self, schema_dir, tmp_path):
        config = tmp_path / "settings.toml"
        config.write_text("[thresholds]\nnot_a_threshold = 1\n")
        result = runner.invoke(app, ["analyze", str(schema_dir), "--config", str(config)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_json_error_payload(self, schema_dir, tmp_path):
        config = tmp_path / "settings.toml"
        config.write_text("cache_max_entries = -1\n")
        result = runner.invoke(
            app, ["analyze", str(schema_dir), "--json", "--quiet", "--config", str(config)]
        )
        assert result.exit_code == 1
        payload, _ = json.JSONDecoder().raw_decode(result.stdout[result.stdout.index("{"):])
        assert payload["error"]["type"] == "InvalidConfigError"

    def test_log_file(self, schema_dir, tmp_path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app, ["analyze", str(schema_dir), "--verbose", "--log-file", str(log_file)]
        )
        assert result.exit_code == 0, result.output
        assert "Analysis complete" in log_file.read_text()


class TestFieldsCommand:
    def test_lists_fields(self, schema_dir):
        result = runner.invoke(app, ["fields", str(schema_dir)])
        assert result.exit_code == 0, result.output
        assert "street" in result.output

    def test_conflicts_only(self, schema_dir):
        result = runner.invoke(app, ["fields", str(schema_dir), "--conflicts-only"])
        assert result.exit_code == 0, result.output
        assert "No conflicting fields." in result.output


class TestGraphCommand:
    def test_graph(self, schema_dir):
        result = runner.invoke(app, ["graph", str(schema_dir)])
        assert result.exit_code == 0, result.output
        assert "customer" in result.output


class TestMainCallback:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "analyze" in result.output
