"""Shared test fixtures for CrabScore."""

import os
import stat
from pathlib import Path

import pytest

from crabscore.metrics import SafetyMetrics
from crabscore.profiles import IndustryProfile
from crabscore.score import (
    Certification,
    CrabScore,
    Environment,
    MeasurementSummary,
    ScoreMetadata,
)

SAMPLE_MAIN = """\
//! Crate docs
/// Adds numbers
fn add(a: i32, b: i32) -> i32 {
    a + b
}

mod util;

#[cfg(test)]
mod tests {
    #[test]
    fn it_adds() {}
}
"""


def fifty_line_source() -> str:
    """50 lines: 1 doc line, 2 functions, the rest comments."""
    lines = ["/// Entry point", "fn main() {}", "fn helper() {}"]
    lines += [f"// line {i}" for i in range(len(lines), 50)]
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep ~/.crabscore.toml and CRABSCORE_* settings out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("CRABSCORE_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def cargo_project(tmp_path):
    """Minimal Cargo project: manifest with two dependencies and src/main.rs."""
    root = tmp_path / "demo"
    (root / "src").mkdir(parents=True)
    (root / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "0.3.1"\n\n'
        '[dependencies]\nserde = "1"\nrand = "0.8"\n'
    )
    (root / "src" / "main.rs").write_text(SAMPLE_MAIN)
    return root


@pytest.fixture
def single_file(tmp_path):
    """The 50-line single-file project."""
    path = tmp_path / "main.rs"
    path.write_text(fifty_line_source())
    return path


@pytest.fixture
def sample_score():
    """A fully populated score with a fixed timestamp."""
    from datetime import datetime, timezone

    return CrabScore(
        overall=72.5,
        performance=61.25,
        energy=49.504950495049506,
        cost=93.0,
        bonuses=15.0,
        certification=Certification.VERIFIED,
        timestamp=datetime(2025, 3, 1, 12, 30, 15, 123456, tzinfo=timezone.utc),
        metadata=ScoreMetadata(
            project_name="demo",
            version="0.3.1",
            profile=IndustryProfile.GAMING,
            measurements=MeasurementSummary(
                duration_secs=1.75,
                iterations=5,
                environment=Environment(
                    os="Linux", cpu="x86_64", memory_gb=15.5, rust_version="rustc 1.80.0"
                ),
            ),
        ),
    )


@pytest.fixture
def clean_safety():
    return SafetyMetrics()


@pytest.fixture
def make_script():
    """Factory for executable /bin/sh scripts (POSIX only)."""
    if os.name != "posix":
        pytest.skip("needs POSIX execute bits and /bin/sh")

    def _make(path: Path, body: str) -> Path:
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
