"""User-visible notice models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class NoticeLevel(Enum):
    """Severity of a notice shown to the user."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notice:
    """A message surfaced to the user (the mobile app showed these as alerts)."""
    title: str
    message: str
    level: NoticeLevel = NoticeLevel.INFO
    timestamp: datetime = field(default_factory=datetime.now)
