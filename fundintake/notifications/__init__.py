from fundintake.notifications.base import BaseNotifier
from fundintake.notifications.log_notifier import LogNotifier
from fundintake.notifications.models import Severity, Toast

__all__ = ["BaseNotifier", "LogNotifier", "Severity", "Toast"]
