"""External measurement collaborators: cost data and energy sensors."""

from .cost import CostProvider, StaticCostProvider, parse_cost_document
from .energy import EnergyMonitor, NullMonitor

__all__ = [
    "CostProvider",
    "StaticCostProvider",
    "parse_cost_document",
    "EnergyMonitor",
    "NullMonitor",
]
