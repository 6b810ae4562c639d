"""The CrabScore result object and its metadata."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from functools import total_ordering
from typing import Any, Mapping

from .profiles import DEFAULT_PROFILE, Profile, profile_from_json, profile_to_json


@total_ordering
class Certification(Enum):
    """Ordered certification tiers.

    ``ELITE``, ``PIONEER`` and ``SUSTAINABLE`` are defined for report
    compatibility but no scoring rule assigns them.
    """

    NONE = "None"
    VERIFIED = "Verified"
    CERTIFIED = "Certified"
    ELITE = "Elite"
    PIONEER = "Pioneer"
    SUSTAINABLE = "Sustainable"

    @property
    def rank(self) -> int:
        return list(Certification).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Certification):
            return NotImplemented
        return self.rank < other.rank


@dataclass(frozen=True)
class Environment:
    """Host the measurements were taken on."""

    os: str = ""
    cpu: str = ""
    memory_gb: float = 0.0
    rust_version: str = ""


@dataclass(frozen=True)
class MeasurementSummary:
    duration_secs: float = 0.0
    iterations: int = 0
    environment: Environment = field(default_factory=Environment)


@dataclass(frozen=True)
class ScoreMetadata:
    project_name: str = ""
    version: str = ""
    profile: Profile = DEFAULT_PROFILE
    measurements: MeasurementSummary = field(default_factory=MeasurementSummary)


@dataclass(frozen=True)
class CrabScore:
    """A complete assessment for one project.

    Attributes:
        overall: Weighted axes plus all bonuses
        performance: Performance axis score (0-100)
        energy: Energy axis score (0-100)
        cost: Cost axis score (0-100)
        bonuses: Safety bonus plus complexity bonus (each capped at 10)
        certification: Tier derived from ``overall``
        timestamp: When the score was calculated (UTC)
        metadata: Profile, project and environment details
    """

    overall: float
    performance: float
    energy: float
    cost: float
    bonuses: float
    certification: Certification
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: ScoreMetadata = field(default_factory=ScoreMetadata)

    def with_metadata(self, **changes: Any) -> "CrabScore":
        """Return a copy with metadata fields replaced."""
        return replace(self, metadata=replace(self.metadata, **changes))

    def to_dict(self) -> dict:
        meta = self.metadata
        measurements = meta.measurements
        env = measurements.environment
        return {
            "overall": self.overall,
            "performance": self.performance,
            "energy": self.energy,
            "cost": self.cost,
            "bonuses": self.bonuses,
            "certification": self.certification.value,
            "timestamp": self.timestamp.isoformat(),
            "metadata": {
                "project_name": meta.project_name,
                "version": meta.version,
                "profile": profile_to_json(meta.profile),
                "measurements": {
                    "duration_secs": measurements.duration_secs,
                    "iterations": measurements.iterations,
                    "environment": {
                        "os": env.os,
                        "cpu": env.cpu,
                        "memory_gb": env.memory_gb,
                        "rust_version": env.rust_version,
                    },
                },
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CrabScore":
        meta = data.get("metadata", {})
        measurements = meta.get("measurements", {})
        env = measurements.get("environment", {})
        return cls(
            overall=data["overall"],
            performance=data["performance"],
            energy=data["energy"],
            cost=data["cost"],
            bonuses=data["bonuses"],
            certification=Certification(data["certification"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            metadata=ScoreMetadata(
                project_name=meta.get("project_name", ""),
                version=meta.get("version", ""),
                profile=profile_from_json(meta.get("profile", DEFAULT_PROFILE.value)),
                measurements=MeasurementSummary(
                    duration_secs=measurements.get("duration_secs", 0.0),
                    iterations=measurements.get("iterations", 0),
                    environment=Environment(
                        os=env.get("os", ""),
                        cpu=env.get("cpu", ""),
                        memory_gb=env.get("memory_gb", 0.0),
                        rust_version=env.get("rust_version", ""),
                    ),
                ),
            ),
        )
