"""Performance, energy, cost and safety metrics for CrabScore.

Every group is a frozen value object whose numeric fields default to zero
independently; nothing here cross-validates fields. ``to_dict``
renders a group in the JSON-compatible report form.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Tuple


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LatencyMetrics:
    """Latency measurements in milliseconds."""

    p50_ms: float = 0.0
    p95_ms: float = 0.0
    p99_ms: float = 0.0
    cold_start_ms: float = 0.0
    ttfb_ms: float = 0.0


@dataclass(frozen=True)
class ThroughputMetrics:
    requests_per_second: float = 0.0
    mb_per_second: float = 0.0
    concurrent_connections: int = 0
    queue_depth: float = 0.0


@dataclass(frozen=True)
class ResourceMetrics:
    """Resource usage. ``cpu_efficiency`` and ``cache_hit_rate`` are in [0, 1]."""

    cpu_efficiency: float = 0.0
    memory_bandwidth_gb_s: float = 0.0
    io_operations_per_sec: float = 0.0
    cache_hit_rate: float = 0.0


@dataclass(frozen=True)
class ScalabilityMetrics:
    """Scaling behaviour under concurrency.

    ``degradation_curve`` is an ordered sequence of
    ``(concurrency_level, performance_ratio)`` pairs.
    """

    linear_scaling_factor: float = 1.0
    degradation_curve: Tuple[Tuple[int, float], ...] = ()
    bottleneck_score: float = 0.0
    elasticity_coefficient: float = 0.0


@dataclass(frozen=True)
class PerformanceMetrics:
    latency: LatencyMetrics = field(default_factory=LatencyMetrics)
    throughput: ThroughputMetrics = field(default_factory=ThroughputMetrics)
    resource_usage: ResourceMetrics = field(default_factory=ResourceMetrics)
    scalability: ScalabilityMetrics = field(default_factory=ScalabilityMetrics)

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PowerConsumption:
    average_watts: float = 0.0
    peak_watts: float = 0.0
    idle_watts: float = 0.0
    joules_per_operation: float = 0.0


@dataclass(frozen=True)
class CarbonEfficiency:
    """Carbon footprint; ``renewable_percentage`` is a fraction in [0, 1]."""

    co2_per_operation: float = 0.0
    carbon_intensity: float = 0.0
    renewable_percentage: float = 0.0


@dataclass(frozen=True)
class HardwareLifecycle:
    thermal_efficiency: float = 0.0
    component_stress: float = 0.0
    expected_lifespan_years: float = 0.0


@dataclass(frozen=True)
class AlgorithmEfficiency:
    """Complexity labels (e.g. ``"O(n)"``) plus observed coefficients."""

    time_complexity: str = ""
    space_complexity: str = ""
    actual_time_coefficient: float = 0.0
    actual_space_coefficient: float = 0.0


@dataclass(frozen=True)
class EnergyMetrics:
    direct_consumption: PowerConsumption = field(default_factory=PowerConsumption)
    carbon_efficiency: CarbonEfficiency = field(default_factory=CarbonEfficiency)
    hardware_lifecycle: HardwareLifecycle = field(default_factory=HardwareLifecycle)
    algorithmic_efficiency: AlgorithmEfficiency = field(default_factory=AlgorithmEfficiency)

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Cost
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InfrastructureCosts:
    """Monthly infrastructure spend in USD."""

    cloud_compute_usd: float = 0.0
    storage_usd: float = 0.0
    network_egress_usd: float = 0.0
    cost_per_million_ops: float = 0.0


@dataclass(frozen=True)
class OperationalCosts:
    """Operations; ``overhead_percentage`` is a fraction in [0, 1]."""

    mttr_minutes: float = 0.0
    incidents_per_month: float = 0.0
    overhead_percentage: float = 0.0
    monitoring_usd: float = 0.0


@dataclass(frozen=True)
class DevelopmentCosts:
    loc: int = 0
    cyclomatic_complexity: float = 0.0
    code_churn: float = 0.0
    onboarding_days: float = 0.0


@dataclass(frozen=True)
class BusinessImpact:
    revenue_per_100ms_latency: float = 0.0
    csat_score: float = 0.0
    sla_compliance: float = 0.0
    competitive_advantage: float = 0.0


@dataclass(frozen=True)
class CostMetrics:
    infrastructure: InfrastructureCosts = field(default_factory=InfrastructureCosts)
    operations: OperationalCosts = field(default_factory=OperationalCosts)
    development: DevelopmentCosts = field(default_factory=DevelopmentCosts)
    business_impact: BusinessImpact = field(default_factory=BusinessImpact)

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Safety
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SafetyMetrics:
    """Static-analysis safety signals.

    Attributes:
        unsafe_blocks: Number of ``unsafe`` block expressions in the tree
        clippy_warnings: Reserved for a linter integration; always 0 today
        avg_cyclomatic: Mean McCabe complexity over top-level functions
    """

    unsafe_blocks: int = 0
    clippy_warnings: int = 0
    avg_cyclomatic: float = 1.0

    def to_dict(self) -> dict:
        return asdict(self)
