"""Tests for the `ngarch analyze` command."""

import json

import pytest
from typer.testing import CliRunner

from ngarch import __version__
from ngarch.cli import app

runner = CliRunner()

MODULES = [
    {"name": "AppModule", "type": "Feature", "dependencies": ["CoreModule", "@ngrx/store"]},
    {"name": "CoreModule", "type": "Core", "dependencies": ["SharedModule"]},
    {"name": "SharedModule", "type": "Shared", "dependencies": []},
]


@pytest.fixture
def records_file(tmp_path):
    path = tmp_path / "modules.json"
    path.write_text(json.dumps(MODULES))
    return path


@pytest.fixture
def violating_file(tmp_path):
    path = tmp_path / "violating.json"
    path.write_text(
        json.dumps(
            [
                {"name": "CoreModule", "type": "Core", "dependencies": ["OrdersModule"]},
                {"name": "OrdersModule", "type": "Feature", "dependencies": ["CoreModule"]},
            ]
        )
    )
    return path


class TestAnalyzeCommand:
    def test_json_to_stdout(self, records_file):
        result = runner.invoke(app, ["analyze", str(records_file)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [m["name"] for m in data["modules"]] == ["AppModule", "CoreModule", "SharedModule"]
        assert data["dependency_violations"] == []
        assert data["circular_dependencies"] == []
        assert data["metrics"]["total_modules"] == 3
        assert data["metrics"]["max_dependency_depth"] == 2

    def test_output_file(self, records_file, tmp_path):
        out = tmp_path / "report.json"
        result = runner.invoke(app, ["analyze", str(records_file), "--output", str(out)])
        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["metrics"]["external_dependencies"] == 1

    def test_output_is_reproducible(self, records_file, tmp_path):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        runner.invoke(app, ["analyze", str(records_file), "-o", str(first)])
        runner.invoke(app, ["analyze", str(records_file), "-o", str(second)])
        assert first.read_bytes() == second.read_bytes()

    def test_findings_without_flag_exit_zero(self, violating_file):
        result = runner.invoke(app, ["analyze", str(violating_file)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["dependency_violations"][0]["violation_type"] == "CoreDependsOnFeature"
        assert data["circular_dependencies"] == [["CoreModule", "OrdersModule"]]

    def test_fail_on_violations(self, violating_file):
        result = runner.invoke(app, ["analyze", str(violating_file), "--fail-on-violations"])
        assert result.exit_code == 1

    def test_fail_on_violations_clean(self, records_file):
        result = runner.invoke(app, ["analyze", str(records_file), "--fail-on-violations"])
        assert result.exit_code == 0

    def test_malformed_records(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"type": "Core"}]))
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 2

    def test_undecodable_records_exit_as_error(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"name": "A\xff"}]')
        result = runner.invoke(app, ["analyze", str(path), "--fail-on-violations"])
        assert result.exit_code == 2
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_log_file(self, records_file, tmp_path):
        log_path = tmp_path / "ngarch.log"
        result = runner.invoke(
            app, ["analyze", str(records_file), "-v", "--log-file", str(log_path)]
        )
        assert result.exit_code == 0
        assert "Architecture analysis complete" in log_path.read_text()

    def test_strict_duplicate_names(self, tmp_path):
        path = tmp_path / "dupes.json"
        path.write_text(json.dumps([{"name": "A"}, {"name": "A"}]))
        assert runner.invoke(app, ["analyze", str(path)]).exit_code == 0
        assert runner.invoke(app, ["analyze", str(path), "--strict"]).exit_code == 2

    def test_missing_records_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])
        assert result.exit_code != 0

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
