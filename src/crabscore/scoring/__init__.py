"""Scoring engine and bonus rules."""

from .bonus import BonusItem, bonus_breakdown, certify, complexity_bonus, safety_bonus
from .engine import ScoringEngine, cost_score, energy_score, performance_score

__all__ = [
    "ScoringEngine",
    "BonusItem",
    "bonus_breakdown",
    "certify",
    "complexity_bonus",
    "safety_bonus",
    "performance_score",
    "energy_score",
    "cost_score",
]
