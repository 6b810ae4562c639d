"""Energy monitors.

Platform sensor backends plug in behind :class:`EnergyMonitor`. Only the
portable :class:`NullMonitor` ships today.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..metrics import EnergyMetrics


class EnergyMonitor(ABC):
    """Samples power and carbon figures for the current host."""

    @abstractmethod
    def collect(self) -> EnergyMetrics:
        """Return the latest energy measurements."""


class NullMonitor(EnergyMonitor):
    """Monitor for hosts without a supported sensor; reports all zeros."""

    def collect(self) -> EnergyMetrics:
        return EnergyMetrics()
