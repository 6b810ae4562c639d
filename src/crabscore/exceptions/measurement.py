"""Measurement-acquisition exceptions: subprocesses and cost data."""

from pathlib import Path
from typing import Optional, Sequence

from .base import CrabScoreError


class MeasurementError(CrabScoreError):
    """Raised when a measurement cannot be collected."""

    pass


class CommandError(MeasurementError):
    """Raised when an external command cannot be run to completion."""

    def __init__(self, command: Sequence[str], reason: str, status: Optional[int] = None):
        details = {"command": " ".join(str(c) for c in command), "reason": reason}
        if status is not None:
            details["status"] = str(status)
        super().__init__(f"Command '{command[0]}' failed", details=details)
        self.command = list(command)
        self.reason = reason
        self.status = status


class CostDataError(CrabScoreError):
    """Raised when a cost data file is not valid JSON."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Malformed cost data: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason
