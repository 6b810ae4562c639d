"""Combine metric groups into a CrabScore.

Each axis maps its metrics onto 0-100 with saturating curves of the form
``100 / (1 + x / k)``, averages the sub-scores and clamps. The overall score
is the profile-weighted sum of the axes plus bonuses, and is not clamped.
"""

from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger
from ..metrics import CostMetrics, EnergyMetrics, PerformanceMetrics, SafetyMetrics
from ..profiles import DEFAULT_PROFILE, Profile, resolve_weights
from ..scanning.complexity import ProjectComplexity
from ..score import CrabScore, ScoreMetadata
from .bonus import certify, complexity_bonus, safety_bonus

logger = get_logger(__name__)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(value, high))


def performance_score(metrics: PerformanceMetrics) -> float:
    """Average of latency (p95), throughput and CPU-efficiency sub-scores."""
    p95 = max(metrics.latency.p95_ms, 1.0)
    latency = (1.0 / (1.0 + p95 / 100.0)) * 100.0

    tps = metrics.throughput.requests_per_second
    throughput = (tps / (tps + 1000.0)) * 100.0

    resource = 100.0 * min(metrics.resource_usage.cpu_efficiency, 1.0)

    return _clamp((latency + throughput + resource) / 3.0)


def energy_score(metrics: EnergyMetrics) -> float:
    """Average of power-draw and renewable-share sub-scores."""
    watts = max(metrics.direct_consumption.average_watts, 1.0)
    power = 100.0 / (1.0 + watts / 100.0)
    renewable = metrics.carbon_efficiency.renewable_percentage * 100.0
    return _clamp((power + renewable) / 2.0)


def cost_score(metrics: CostMetrics) -> float:
    """Average of cloud-spend and operational-overhead sub-scores.

    Negative spend or overhead reads as zero.
    """
    cloud = max(metrics.infrastructure.cloud_compute_usd, 0.0)
    overhead = max(metrics.operations.overhead_percentage, 0.0)
    infra = 100.0 / (1.0 + cloud / 1000.0)
    ops = 100.0 / (1.0 + overhead)
    return _clamp((infra + ops) / 2.0)


class ScoringEngine:
    """Stateless scorer bound to one profile.

    Usage::

        engine = ScoringEngine(IndustryProfile.GAMING)
        score = engine.calculate_score(perf, energy, cost, safety, complexity)
    """

    def __init__(self, profile: Profile = DEFAULT_PROFILE):
        self.profile = profile

    def calculate_score(
        self,
        performance: PerformanceMetrics,
        energy: EnergyMetrics,
        cost: CostMetrics,
        safety: SafetyMetrics,
        complexity: Optional[ProjectComplexity] = None,
    ) -> CrabScore:
        """Score one set of metrics.

        Without *complexity* no complexity bonus is applied.
        """
        weights = resolve_weights(self.profile)

        perf = performance_score(performance)
        enrg = energy_score(energy)
        cst = cost_score(cost)

        bonuses = safety_bonus(safety)
        overall = (
            perf * weights.performance + enrg * weights.energy + cst * weights.cost + bonuses
        )

        if complexity is not None:
            extra = complexity_bonus(complexity)
            bonuses += extra
            overall += extra

        certification = certify(overall)
        logger.debug(
            "Scored perf=%.2f energy=%.2f cost=%.2f bonuses=%.1f overall=%.2f (%s)",
            perf,
            enrg,
            cst,
            bonuses,
            overall,
            certification.value,
        )

        return CrabScore(
            overall=overall,
            performance=perf,
            energy=enrg,
            cost=cst,
            bonuses=bonuses,
            certification=certification,
            metadata=ScoreMetadata(profile=self.profile),
        )
