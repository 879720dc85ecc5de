from abc import ABC, abstractmethod

from fundintake.notifications.models import Severity, Toast


class BaseNotifier(ABC):
    """Contract for delivering transient notifications. Delivery is best effort."""

    @abstractmethod
    def notify(self, toast: Toast) -> None:
        """Show ``toast``. Implementations must not raise."""

    def success(self, title: str, description: str = "") -> None:
        self.notify(Toast(Severity.SUCCESS, title, description))

    def warning(self, title: str, description: str = "") -> None:
        self.notify(Toast(Severity.WARNING, title, description))

    def error(self, title: str, description: str = "") -> None:
        self.notify(Toast(Severity.ERROR, title, description))
