"""
Diagnostic data model - AVA fault code severities.
"""

from enum import Enum

from pydantic import BaseModel


class DiagnosticSeverity(str, Enum):
    """Severity of a diagnostic trouble code."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def parse(cls, value: object) -> "DiagnosticSeverity":
        """Unknown or missing severities are treated as info."""
        try:
            return cls(value)
        except ValueError:
            return cls.INFO


class SeverityCounts(BaseModel):
    """Number of diagnostics at each severity."""

    critical: int = 0
    warning: int = 0
    info: int = 0

    @property
    def total(self) -> int:
        return self.critical + self.warning + self.info
