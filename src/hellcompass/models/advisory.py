"""Advisory messages surfaced to the UI layer."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from hellcompass.models._base import CompassBaseModel


class Severity(StrEnum):
    ERROR = "error"
    """Blocking: the affected computation path is disabled."""
    WARNING = "warning"
    """Non-blocking: output is annotated but still produced."""


class Advisory(CompassBaseModel):
    key: str
    message: str
    severity: Severity = Severity.ERROR
    raised_at: datetime
    expires_at: datetime | None = None

    @property
    def blocking(self) -> bool:
        return self.severity == Severity.ERROR
