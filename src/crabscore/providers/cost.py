"""Cost data providers.

A provider turns some external source of spend figures into
:class:`CostMetrics`. The bundled :class:`StaticCostProvider` reads a JSON
document with four optional groups::

    {
      "infrastructure": {"cloud_compute_usd": 120.0, ...},
      "operations": {"overhead_percentage": 0.15, ...},
      "development": {"loc": 4200, ...},
      "business_impact": {"csat_score": 85.0, ...}
    }

Every leaf is independently optional; a missing or wrongly-typed leaf reads
as zero.
"""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping, Type, TypeVar

from ..exceptions import CostDataError, FileAccessError
from ..logging_config import get_logger
from ..metrics import (
    BusinessImpact,
    CostMetrics,
    DevelopmentCosts,
    InfrastructureCosts,
    OperationalCosts,
)

logger = get_logger(__name__)

T = TypeVar("T")


class CostProvider(ABC):
    """Source of cost metrics for a project."""

    @abstractmethod
    def collect(self, project_root: Path) -> CostMetrics:
        """Collect cost metrics for the project at *project_root*."""


def _number(value: Any) -> float:
    # bool is an int subclass but never a cost figure
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


def _group(cls: Type[T], data: Any) -> T:
    if not isinstance(data, Mapping):
        return cls()
    values = {}
    for f in fields(cls):  # type: ignore[arg-type]
        raw = data.get(f.name)
        values[f.name] = _count(raw) if f.type in (int, "int") else _number(raw)
    return cls(**values)


def parse_cost_document(document: Any) -> CostMetrics:
    """Build :class:`CostMetrics` from decoded JSON; never raises."""
    if not isinstance(document, Mapping):
        return CostMetrics()
    return CostMetrics(
        infrastructure=_group(InfrastructureCosts, document.get("infrastructure")),
        operations=_group(OperationalCosts, document.get("operations")),
        development=_group(DevelopmentCosts, document.get("development")),
        business_impact=_group(BusinessImpact, document.get("business_impact")),
    )


class StaticCostProvider(CostProvider):
    """Cost figures from a user-maintained JSON file.

    Relative *file_path* values resolve against the project root passed to
    :meth:`collect`.
    """

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path)

    def resolve(self, project_root: Path) -> Path:
        if self.file_path.is_absolute():
            return self.file_path
        return project_root / self.file_path

    def collect(self, project_root: Path) -> CostMetrics:
        """Read and parse the cost file.

        Raises:
            FileAccessError: If the file is missing or unreadable
            CostDataError: If the file is not valid JSON
        """
        path = self.resolve(project_root)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, f"Cannot read cost data: {e}")

        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise CostDataError(path, str(e))

        logger.debug("Loaded cost data from %s", path)
        return parse_cost_document(document)
