"""Source scanning: complexity heuristics and syntax-tree safety analysis."""

from .complexity import ProjectComplexity, analyze_project_complexity
from .safety import analyze_safety

__all__ = [
    "ProjectComplexity",
    "analyze_project_complexity",
    "analyze_safety",
]
