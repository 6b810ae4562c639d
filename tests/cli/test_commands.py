"""Tests for the crabscore CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from crabscore import __version__, pipeline
from crabscore.cli import app
from crabscore.cli._display import BAR_WIDTH, score_bar
from crabscore.pipeline import ScoreRun
from crabscore.report.generator import REPORT_CSRD, REPORT_HTML, REPORT_JSON
from crabscore.scanning.complexity import ProjectComplexity
from crabscore.scoring import BonusItem
from crabscore.score import Environment

runner = CliRunner()


@pytest.fixture(autouse=True)
def fixed_environment(monkeypatch):
    monkeypatch.setattr(
        pipeline, "detect_environment", lambda timeout=10.0: Environment(os="TestOS", rust_version="unknown")
    )


@pytest.fixture
def recorded_runs(monkeypatch, sample_score):
    """Replace the scoring pipeline in the score command; record its arguments."""
    calls = []

    def fake_run_score(path, bin_name=None, config=None):
        calls.append({"path": path, "bin_name": bin_name, "config": config})
        return ScoreRun(
            score=sample_score,
            complexity=ProjectComplexity(file_count=3, total_lines=420, function_count=12, dependency_count=2),
            static_only=True,
            bonus_breakdown=[BonusItem("Compact Project Bonus", 1.0)],
        )

    monkeypatch.setattr("crabscore.cli.score.run_score", fake_run_score)
    return calls


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"CrabScore CLI {__version__}" in result.output


class TestScoreCommand:
    """Test ``crabscore score``."""

    def test_json_output(self, single_file):
        result = runner.invoke(app, ["score", str(single_file), "--json"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        score = report["score"]
        assert score["certification"] == "Certified"
        assert score["bonuses"] == 15.0
        assert score["metadata"]["project_name"] == "main"
        assert score["metadata"]["profile"] == "WebServices"
        assert score["metadata"]["measurements"]["iterations"] == 0

    def test_json_with_profile(self, single_file):
        result = runner.invoke(app, ["score", str(single_file), "--json", "--profile", "iot-embedded"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["score"]["metadata"]["profile"] == "IotEmbedded"

    def test_json_with_metrics(self, single_file):
        result = runner.invoke(app, ["score", str(single_file), "--json", "--metrics"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["score"]["metadata"]["project_name"] == "main"
        metrics = report["metrics"]
        assert metrics["static_only"] is True
        assert metrics["complexity"]["total_lines"] == 50
        assert metrics["cost"]["infrastructure"]["cloud_compute_usd"] == pytest.approx(11.0)
        assert metrics["performance"]["scalability"]["degradation_curve"] == []

    def test_json_without_metrics(self, single_file):
        result = runner.invoke(app, ["score", str(single_file), "--json"])
        assert "metrics" not in json.loads(result.stdout)

    def test_rich_display(self, single_file):
        result = runner.invoke(app, ["score", str(single_file)])
        assert result.exit_code == 0, result.output
        assert "CrabScore Report" in result.output
        assert "Mode: Static Analysis Only" in result.output
        assert "Overall Score" in result.output
        assert "[Certified]" in result.output
        assert "Small Project Bonus" in result.output
        assert "Zero Dependencies" in result.output
        assert "Lines: 50" in result.output

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["score", str(tmp_path / "absent"), "--json"])
        assert result.exit_code == 1
        assert "Invalid path" in result.output

    def test_unknown_profile(self, single_file):
        result = runner.invoke(app, ["score", str(single_file), "--profile", "bogus"])
        assert result.exit_code == 1
        assert "Invalid configuration for profile" in result.output

    def test_parse_error_exits(self, tmp_path):
        (tmp_path / "broken.rs").write_text("fn main( {\n")
        result = runner.invoke(app, ["score", str(tmp_path), "--json"])
        assert result.exit_code == 1
        assert "Failed to parse rust file" in result.output

    def test_bin_forwarded(self, recorded_runs, tmp_path):
        result = runner.invoke(app, ["score", str(tmp_path), "--bin", "server", "--json"])
        assert result.exit_code == 0, result.output
        assert recorded_runs[0]["bin_name"] == "server"
        assert recorded_runs[0]["path"] == tmp_path

    def test_profile_overrides_weights_table(self, recorded_runs, tmp_path):
        (tmp_path / "crabscore.toml").write_text(
            "[weights]\nperformance = 0.1\nenergy = 0.1\ncost = 0.8\n"
        )
        runner.invoke(app, ["score", str(tmp_path), "--profile", "gaming", "--json"])
        config = recorded_runs[0]["config"]
        assert config.custom_weights is None
        assert config.profile == "gaming"

    def test_weights_table_used(self, recorded_runs, tmp_path):
        (tmp_path / "crabscore.toml").write_text(
            "[weights]\nperformance = 0.1\nenergy = 0.1\ncost = 0.8\n"
        )
        runner.invoke(app, ["score", str(tmp_path), "--json"])
        assert recorded_runs[0]["config"].custom_weights == {"performance": 0.1, "energy": 0.1, "cost": 0.8}

    def test_display_of_recorded_run(self, recorded_runs, tmp_path):
        result = runner.invoke(app, ["score", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "[Verified]" in result.output
        assert "Compact Project Bonus (+1.0)" in result.output
        assert "Dependencies: 2" in result.output


class TestVerbosityFlags:
    """Test the global -v/-q options."""

    @pytest.mark.parametrize(
        "flags,expected",
        [([], "normal"), (["-v"], "verbose"), (["-vv"], "debug"), (["-q"], "quiet")],
    )
    def test_flags_reach_config(self, recorded_runs, tmp_path, flags, expected):
        result = runner.invoke(app, [*flags, "score", str(tmp_path), "--json"])
        assert result.exit_code == 0, result.output
        assert recorded_runs[0]["config"].verbosity == expected

    def test_environment_verbosity(self, recorded_runs, tmp_path, monkeypatch):
        monkeypatch.setenv("CRABSCORE_VERBOSITY", "verbose")
        runner.invoke(app, ["score", str(tmp_path), "--json"])
        assert recorded_runs[0]["config"].verbosity == "verbose"

    def test_flag_beats_environment(self, recorded_runs, tmp_path, monkeypatch):
        monkeypatch.setenv("CRABSCORE_VERBOSITY", "verbose")
        runner.invoke(app, ["-q", "score", str(tmp_path), "--json"])
        assert recorded_runs[0]["config"].verbosity == "quiet"


class TestReportCommand:
    """Test ``crabscore report``."""

    def test_writes_files(self, single_file, tmp_path):
        out = tmp_path / "reports"
        result = runner.invoke(app, ["report", str(single_file), "--output-dir", str(out)])
        assert result.exit_code == 0, result.output
        assert "Reports written to" in result.output
        report = json.loads((out / REPORT_JSON).read_text())
        assert report["score"]["metadata"]["project_name"] == "main"
        assert (out / REPORT_HTML).read_text().startswith("<!DOCTYPE html>")
        csrd = json.loads((out / REPORT_CSRD).read_text())
        assert csrd["overall"] == report["score"]["overall"]

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["report", str(tmp_path / "absent"), "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert not (tmp_path / REPORT_JSON).exists()

    def test_serve(self, single_file, monkeypatch):
        pytest.importorskip("starlette")
        pytest.importorskip("uvicorn")
        served = {}

        def fake_run(asgi_app, host, port, log_level):
            served.update(app=asgi_app, host=host, port=port, log_level=log_level)

        monkeypatch.setattr("uvicorn.run", fake_run)
        result = runner.invoke(app, ["report", str(single_file), "--serve", "--port", "9001"])
        assert result.exit_code == 0, result.output
        assert served["host"] == "127.0.0.1"
        assert served["port"] == 9001
        assert served["log_level"] == "warning"
        assert "http://127.0.0.1:9001" in result.output

    def test_serve_missing_dependencies(self, single_file, monkeypatch):
        def missing():
            raise ImportError("Missing serve dependencies: uvicorn. Install with: pip install crabscore[serve]")

        monkeypatch.setattr("crabscore.server._check_deps", missing)
        result = runner.invoke(app, ["report", str(single_file), "--serve"])
        assert result.exit_code == 1
        assert "pip install crabscore[serve]" in result.output

    def test_port_range(self, single_file):
        result = runner.invoke(app, ["report", str(single_file), "--serve", "--port", "0"])
        assert result.exit_code == 2


class TestScoreBar:
    """Test the breakdown bar rendering."""

    def test_full(self):
        assert score_bar("Cost", 100.0).plain.endswith("█" * BAR_WIDTH)

    def test_half(self):
        text = score_bar("Energy", 50.0).plain
        assert text.count("█") == 10
        assert text.count("░") == 10
        assert "50/100" in text

    def test_saturates(self):
        assert score_bar("Perf", 250.0).plain.count("█") == BAR_WIDTH
        assert score_bar("Perf", -5.0).plain.count("█") == 0
