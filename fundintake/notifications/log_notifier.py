from fundintake.logging.logger import Log
from fundintake.notifications.base import BaseNotifier
from fundintake.notifications.models import Severity, Toast


class LogNotifier(BaseNotifier):
    """Writes toasts to the application log; used by the CLI."""

    def notify(self, toast: Toast) -> None:
        message = f"{toast.title}: {toast.description}" if toast.description else toast.title
        if toast.severity is Severity.ERROR:
            Log.error(message)
        elif toast.severity is Severity.WARNING:
            Log.warning(message)
        else:
            Log.info(message)
