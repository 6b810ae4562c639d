"""Exception hierarchy for CrabScore."""

from .analysis import AnalysisError, FileAccessError, ParsingError
from .base import CrabScoreError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError
from .measurement import CommandError, CostDataError, MeasurementError

__all__ = [
    "CrabScoreError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "MeasurementError",
    "CommandError",
    "CostDataError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
]
