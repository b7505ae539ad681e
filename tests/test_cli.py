"""Tests for the importmap command-line interface."""

import json

import pytest
from click.testing import CliRunner
from importmap_resolver.cli import cli

VALID_MAP = {
    "imports": {
        "react": "https://esm.sh/react@18",
        "react/": "https://esm.sh/react@18/",
    },
    "scopes": {
        "/admin/": {"react": "https://cdn.com/react-admin.js"},
    },
}

INVALID_MAP = {"imports": {"": "https://invalid.com", "test": ""}}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def valid_map_file(tmp_path):
    path = tmp_path / "importmap.json"
    path.write_text(json.dumps(VALID_MAP), encoding="utf-8")
    return path


@pytest.fixture
def invalid_map_file(tmp_path):
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps(INVALID_MAP), encoding="utf-8")
    return path


class TestValidateCommand:
    def test_valid_map(self, runner, valid_map_file):
        result = runner.invoke(cli, ["validate", str(valid_map_file)])
        assert result.exit_code == 0
        assert "Import map is valid" in result.output

    def test_invalid_map(self, runner, invalid_map_file):
        result = runner.invoke(cli, ["validate", str(invalid_map_file)])
        assert result.exit_code == 1
        assert "Import map is invalid (2 error(s))" in result.output

    def test_json_output(self, runner, invalid_map_file):
        result = runner.invoke(cli, ["validate", str(invalid_map_file), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {
            "valid": False,
            "errors": [
                "Import specifier cannot be empty.",
                'Import address for "test" cannot be empty.',
            ],
        }

    def test_json_output_valid(self, runner, valid_map_file):
        result = runner.invoke(cli, ["validate", "--json", str(valid_map_file)])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"valid": True, "errors": []}

    def test_reads_stdin(self, runner):
        result = runner.invoke(cli, ["validate", "-"], input=json.dumps(VALID_MAP))
        assert result.exit_code == 0
        assert "Import map is valid" in result.output

    def test_yaml_file(self, runner, tmp_path):
        path = tmp_path / "importmap.yaml"
        path.write_text("imports:\n  react: https://esm.sh/react@18\n", encoding="utf-8")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 0

    def test_non_object_map(self, runner, tmp_path):
        path = tmp_path / "importmap.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(cli, ["validate", "--json", str(path)])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["errors"] == [
            "Import map must be a plain object (not a class instance, list, set, etc.)."
        ]

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 2
        assert "Cannot read import map file" in result.output

    def test_malformed_file(self, runner, tmp_path):
        path = tmp_path / "importmap.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 2
        assert "Failed to parse import map" in result.output

    def test_log_level_option(self, runner, valid_map_file):
        result = runner.invoke(cli, ["--log-level", "debug", "validate", str(valid_map_file)])
        assert result.exit_code == 0

    def test_bad_log_level(self, runner, valid_map_file):
        result = runner.invoke(cli, ["--log-level", "loud", "validate", str(valid_map_file)])
        assert result.exit_code == 2


class TestResolveCommand:
    def test_resolves_specifiers(self, runner, valid_map_file):
        result = runner.invoke(cli, ["resolve", str(valid_map_file), "react", "react/jsx-runtime"])
        assert result.exit_code == 0
        assert "react -> https://esm.sh/react@18" in result.output
        assert "react/jsx-runtime -> https://esm.sh/react@18/jsx-runtime" in result.output

    def test_unresolved_specifier(self, runner, valid_map_file):
        result = runner.invoke(cli, ["resolve", str(valid_map_file), "vue"])
        assert result.exit_code == 0
        assert "vue -> (unresolved)" in result.output

    def test_importer_selects_scope(self, runner, valid_map_file):
        result = runner.invoke(
            cli, ["resolve", str(valid_map_file), "react", "--importer", "/admin/dashboard.js"]
        )
        assert result.exit_code == 0
        assert "react -> https://cdn.com/react-admin.js" in result.output

    def test_relative_specifier(self, runner, valid_map_file):
        result = runner.invoke(cli, ["resolve", str(valid_map_file), "./utils.js", "--importer", "/app/main.js"])
        assert result.exit_code == 0
        assert "./utils.js -> /app/utils.js" in result.output

    def test_json_output(self, runner, valid_map_file):
        result = runner.invoke(cli, ["resolve", "--json", str(valid_map_file), "react", "vue", "/x.js"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "react": "https://esm.sh/react@18",
            "vue": None,
            "/x.js": "/x.js",
        }

    def test_invalid_map(self, runner, invalid_map_file):
        result = runner.invoke(cli, ["resolve", str(invalid_map_file), "test"])
        assert result.exit_code == 1
        assert "Import map is invalid (2 error(s))" in result.output

    def test_requires_specifier(self, runner, valid_map_file):
        result = runner.invoke(cli, ["resolve", str(valid_map_file)])
        assert result.exit_code == 2
