"""
CrabScore - composite efficiency scoring for Rust projects

Scores a project on performance, energy and cost, adds safety and
project-complexity bonuses, and maps the result onto a certification tier.
Projects without a runnable artifact are scored from static estimates.
"""

__version__ = "0.1.0"

from .pipeline import ScoreRun, run_score
from .profiles import CustomProfile, IndustryProfile, ProfileWeights
from .score import Certification, CrabScore
from .scoring import ScoringEngine

__all__ = [
    "run_score",  # Main entry point
    "ScoreRun",
    "ScoringEngine",  # Scoring pre-collected metrics
    "CrabScore",
    "Certification",
    "IndustryProfile",
    "CustomProfile",
    "ProfileWeights",
]
