"""Static-analysis exceptions: file access and parsing."""

from pathlib import Path

from .base import CrabScoreError


class AnalysisError(CrabScoreError):
    """Base class for static-analysis errors.

    These are fatal: a source tree that cannot be read or parsed makes the
    safety bonus meaningless, so no estimate is substituted.
    """

    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed into a syntax tree."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
