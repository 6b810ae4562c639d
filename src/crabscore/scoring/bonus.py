"""Bonus points awarded on top of the weighted axis scores.

The safety bonus rewards clean static-analysis results; the complexity bonus
rewards small, documented, tested projects with few dependencies. Both are
worth at most 10 points.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..metrics import SafetyMetrics
from ..scanning.complexity import ProjectComplexity
from ..score import Certification

MAX_COMPLEXITY_BONUS = 10.0

CERTIFIED_THRESHOLD = 85.0
VERIFIED_THRESHOLD = 70.0

MAX_SAFE_CYCLOMATIC = 10.0


@dataclass(frozen=True)
class BonusItem:
    """One earned complexity bonus, for display."""

    name: str
    points: float


def safety_bonus(safety: SafetyMetrics) -> float:
    bonus = 0.0
    if safety.unsafe_blocks == 0:
        bonus += 4.0
    if safety.clippy_warnings == 0:
        bonus += 3.0
    if safety.avg_cyclomatic <= MAX_SAFE_CYCLOMATIC:
        bonus += 3.0
    return bonus


def bonus_breakdown(complexity: ProjectComplexity) -> list[BonusItem]:
    """Every complexity bonus tier *complexity* earns, highest tier per group.

    Points here are uncapped; :func:`complexity_bonus` applies the cap.
    """
    items: list[BonusItem] = []

    if complexity.total_lines < 100:
        items.append(BonusItem("Small Project Bonus", 2.0))
    elif complexity.total_lines < 500:
        items.append(BonusItem("Compact Project Bonus", 1.0))

    doc = complexity.doc_coverage
    if doc > 0.2:
        items.append(BonusItem("Excellent Documentation", 2.0))
    elif doc > 0.1:
        items.append(BonusItem("Good Documentation", 1.0))

    tests = complexity.test_coverage
    if tests > 0.8:
        items.append(BonusItem("Excellent Tests", 3.0))
    elif tests > 0.5:
        items.append(BonusItem("Good Test Coverage", 2.0))
    elif tests > 0.2:
        items.append(BonusItem("Basic Test Coverage", 1.0))

    deps = complexity.dependency_count
    if deps == 0:
        items.append(BonusItem("Zero Dependencies", 3.0))
    elif deps < 5:
        items.append(BonusItem("Minimal Dependencies", 2.0))
    elif deps < 10:
        items.append(BonusItem("Reasonable Dependencies", 1.0))

    return items


def complexity_bonus(complexity: ProjectComplexity) -> float:
    """Sum of earned complexity bonuses, capped at 10."""
    return min(sum(item.points for item in bonus_breakdown(complexity)), MAX_COMPLEXITY_BONUS)


def certify(overall: float) -> Certification:
    """Map a final overall score to its certification tier."""
    if overall >= CERTIFIED_THRESHOLD:
        return Certification.CERTIFIED
    if overall >= VERIFIED_THRESHOLD:
        return Certification.VERIFIED
    return Certification.NONE
