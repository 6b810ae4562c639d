"""Industry profiles and axis weights for CrabScore.

A profile is either one of the closed :class:`IndustryProfile` presets or a
:class:`CustomProfile` carrying explicit weights. The sum-to-one invariant is
checked once, when :class:`ProfileWeights` is constructed; resolving weights
for a profile is then a total pure mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

WEIGHT_EPSILON = 1e-4


@dataclass(frozen=True, eq=False)
class ProfileWeights:
    """Weights for the performance, energy and cost axes.

    Raises:
        ValueError: If any weight is outside [0, 1] or the weights do not sum
            to 1.0 within ``WEIGHT_EPSILON``.
    """

    performance: float = 0.4
    energy: float = 0.3
    cost: float = 0.3

    def __post_init__(self) -> None:
        for name in ("performance", "energy", "cost"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} weight must be between 0.0 and 1.0, got {value}")
        total = self.performance + self.energy + self.cost
        if abs(total - 1.0) >= WEIGHT_EPSILON:
            raise ValueError(f"Weights must sum to 1.0, got {total}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProfileWeights):
            return NotImplemented
        return (
            abs(self.performance - other.performance) < WEIGHT_EPSILON
            and abs(self.energy - other.energy) < WEIGHT_EPSILON
            and abs(self.cost - other.cost) < WEIGHT_EPSILON
        )

    def __hash__(self) -> int:
        # Tolerant equality is not transitive, so no field-derived hash is consistent with it
        return hash(ProfileWeights)

    def to_dict(self) -> dict[str, float]:
        return {"performance": self.performance, "energy": self.energy, "cost": self.cost}


class IndustryProfile(Enum):
    """Named presets. Values are the serialized tags."""

    WEB_SERVICES = "WebServices"
    IOT_EMBEDDED = "IotEmbedded"
    FINANCIAL = "Financial"
    GAMING = "Gaming"
    ENTERPRISE = "Enterprise"


@dataclass(frozen=True)
class CustomProfile:
    """Open profile variant with caller-chosen weights."""

    weights: ProfileWeights


Profile = Union[IndustryProfile, CustomProfile]

DEFAULT_PROFILE: Profile = IndustryProfile.WEB_SERVICES

_PRESET_WEIGHTS = {
    IndustryProfile.WEB_SERVICES: (0.4, 0.3, 0.3),
    IndustryProfile.IOT_EMBEDDED: (0.2, 0.6, 0.2),
    IndustryProfile.FINANCIAL: (0.5, 0.2, 0.3),
    IndustryProfile.GAMING: (0.6, 0.2, 0.2),
    IndustryProfile.ENTERPRISE: (0.3, 0.3, 0.4),
}


def resolve_weights(profile: Profile) -> ProfileWeights:
    """Return the axis weights for *profile*."""
    if isinstance(profile, CustomProfile):
        return profile.weights
    performance, energy, cost = _PRESET_WEIGHTS[profile]
    return ProfileWeights(performance=performance, energy=energy, cost=cost)


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").replace(" ", "").lower()


def parse_profile(name: str) -> IndustryProfile:
    """Look up a preset by name, e.g. ``web_services``, ``web-services`` or ``WebServices``.

    Raises:
        ValueError: If *name* matches no preset.
    """
    wanted = _normalize(name)
    for member in IndustryProfile:
        if wanted in (_normalize(member.name), _normalize(member.value)):
            return member
    choices = ", ".join(m.name.lower() for m in IndustryProfile)
    raise ValueError(f"Unknown profile '{name}' (expected one of: {choices})")


def profile_to_json(profile: Profile) -> Any:
    """Serialize a profile: presets as their tag, custom as ``{"Custom": weights}``."""
    if isinstance(profile, CustomProfile):
        return {"Custom": profile.weights.to_dict()}
    return profile.value


def profile_from_json(data: Any) -> Profile:
    """Inverse of :func:`profile_to_json`."""
    if isinstance(data, dict) and "Custom" in data:
        return CustomProfile(weights=ProfileWeights(**data["Custom"]))
    return IndustryProfile(data)
