"""One end-to-end scoring run.

Control flow:
    1. Complexity analysis (always)
    2. Binary resolution
    3a. Artifact found: benchmark, energy monitor, safety analysis, cost file
    3b. No artifact: estimates from complexity, safety analysis
    4. Scoring with profile weights and bonuses

Failures while acquiring measurements degrade to zeroed or estimated metrics.
Failures in static analysis abort the run.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from .benchmark import BenchmarkOptions, BenchmarkRunner
from .binary_discovery import find_or_build_binary, is_cargo_project
from .config import ScoreConfig
from .environment import detect_environment
from .estimation import estimate_cost, estimate_energy, estimate_performance
from .exceptions import FileAccessError, InvalidPathError, MeasurementError
from .logging_config import get_logger
from .metrics import CostMetrics, EnergyMetrics, PerformanceMetrics, SafetyMetrics
from .providers import CostProvider, EnergyMonitor, NullMonitor, StaticCostProvider
from .scanning import ProjectComplexity, analyze_project_complexity, analyze_safety
from .scanning.complexity import load_manifest
from .score import CrabScore, MeasurementSummary
from .scoring import BonusItem, ScoringEngine, bonus_breakdown

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScoreRun:
    """Everything one run produced, for display and reporting."""

    score: CrabScore
    complexity: ProjectComplexity
    static_only: bool
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    energy: EnergyMetrics = field(default_factory=EnergyMetrics)
    cost: CostMetrics = field(default_factory=CostMetrics)
    safety: SafetyMetrics = field(default_factory=SafetyMetrics)
    binary: Optional[Path] = None
    bonus_breakdown: list[BonusItem] = field(default_factory=list)

    def metrics_dict(self) -> dict:
        """Raw inputs behind the score, in the JSON report form."""
        return {
            "static_only": self.static_only,
            "binary": str(self.binary) if self.binary else None,
            "complexity": asdict(self.complexity),
            "performance": self.performance.to_dict(),
            "energy": self.energy.to_dict(),
            "cost": self.cost.to_dict(),
            "safety": self.safety.to_dict(),
            "bonuses": [{"name": item.name, "points": item.points} for item in self.bonus_breakdown],
        }


def project_identity(path: Path) -> tuple[str, str]:
    """Package name and version from ``Cargo.toml``, else the path's name."""
    root = path if path.is_dir() else path.parent
    fallback = path.resolve().name if path.is_dir() else path.stem
    manifest = load_manifest(root) or {}
    package = manifest.get("package")
    if not isinstance(package, dict):
        return fallback, ""
    name = package.get("name")
    version = package.get("version")
    return (
        name if isinstance(name, str) else fallback,
        version if isinstance(version, str) else "",
    )


def _measure(
    binary: Path,
    path: Path,
    config: ScoreConfig,
    energy_monitor: EnergyMonitor,
    cost_provider: CostProvider,
) -> tuple[PerformanceMetrics, EnergyMetrics, SafetyMetrics, CostMetrics]:
    runner = BenchmarkRunner(
        BenchmarkOptions(
            warmup=config.warmup_iterations,
            iterations=config.measured_iterations,
            args=tuple(config.benchmark_args),
        ),
        timeout=config.run_timeout_seconds,
    )
    try:
        performance = runner.benchmark(binary)
    except MeasurementError as e:
        logger.error("Performance benchmark failed: %s", e)
        performance = PerformanceMetrics()

    energy = energy_monitor.collect()

    analysis_root = path if path.is_dir() else path.parent
    safety = analyze_safety(analysis_root)

    try:
        cost = cost_provider.collect(analysis_root)
    except FileAccessError as e:
        logger.warning("Cost provider returned no data - using defaults (%s)", e.reason)
        cost = CostMetrics()

    return performance, energy, safety, cost


def _estimate(
    path: Path, complexity: ProjectComplexity
) -> tuple[PerformanceMetrics, EnergyMetrics, SafetyMetrics, CostMetrics]:
    return (
        estimate_performance(complexity),
        estimate_energy(complexity),
        analyze_safety(path),
        estimate_cost(complexity),
    )


def run_score(
    path: Path | str,
    bin_name: Optional[str] = None,
    config: Optional[ScoreConfig] = None,
    energy_monitor: Optional[EnergyMonitor] = None,
    cost_provider: Optional[CostProvider] = None,
) -> ScoreRun:
    """Score the project, source file or executable at *path*.

    Args:
        path: Project directory, single ``.rs`` file or executable
        bin_name: Cargo bin target or path to an executable to benchmark
        config: Resolved configuration (defaults if omitted)
        energy_monitor: Energy backend (default: :class:`NullMonitor`)
        cost_provider: Cost backend (default: ``StaticCostProvider(config.cost_file)``)

    Raises:
        InvalidPathError: If *path* does not exist
        AnalysisError: If a source file cannot be read or parsed for safety analysis
        CostDataError: If the cost file is not valid JSON
    """
    config = config or ScoreConfig()
    path = Path(path)
    if not path.exists():
        raise InvalidPathError(path, "Path does not exist")

    started = time.perf_counter()

    complexity = analyze_project_complexity(path)
    logger.info(
        "Analyzed %s: %d files, %d lines, %d functions",
        path,
        complexity.file_count,
        complexity.total_lines,
        complexity.function_count,
    )

    binary = find_or_build_binary(
        path,
        bin_name,
        cargo_project=is_cargo_project(path),
        build_timeout=config.build_timeout_seconds,
    )

    if binary is not None:
        logger.info("Found executable %s for benchmarking", binary)
        performance, energy, safety, cost = _measure(
            binary,
            path,
            config,
            energy_monitor or NullMonitor(),
            cost_provider or StaticCostProvider(config.cost_file),
        )
        iterations = config.measured_iterations
    else:
        logger.info("No executable found - using static analysis only")
        performance, energy, safety, cost = _estimate(path, complexity)
        iterations = 0

    engine = ScoringEngine(config.resolve_profile())
    score = engine.calculate_score(performance, energy, cost, safety, complexity)

    name, version = project_identity(path)
    score = score.with_metadata(
        project_name=name,
        version=version,
        measurements=MeasurementSummary(
            duration_secs=time.perf_counter() - started,
            iterations=iterations,
            environment=detect_environment(config.run_timeout_seconds),
        ),
    )

    return ScoreRun(
        score=score,
        complexity=complexity,
        static_only=binary is None,
        performance=performance,
        energy=energy,
        cost=cost,
        safety=safety,
        binary=binary,
        bonus_breakdown=bonus_breakdown(complexity),
    )
