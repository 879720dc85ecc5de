from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    """Transient, fire-and-forget notice shown to the admin user."""

    severity: Severity
    title: str
    description: str = ""
