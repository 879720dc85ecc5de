import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from fundintake.notifications.base import BaseNotifier
from fundintake.notifications.models import Toast

MEMO_LINES = (
    "Investment Amount: $50,000",
    "Instrument: SAFE (Post-Money)",
    "Completed on January 5, 2025",
)


def _pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for index, lines in enumerate(pages):
        if index:
            c.showPage()
        for offset, line in enumerate(lines):
            c.drawString(72, 720 - offset * 20, line)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def memo_text() -> str:
    return "\n".join(MEMO_LINES)


@pytest.fixture()
def memo_pdf_bytes() -> bytes:
    """Single-page PDF holding the three-line investment memo."""
    return _pdf([list(MEMO_LINES)])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return _pdf([["Company Name: Acme Robotics"], ["Investment Amount: $25,000"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a blank page and no text layer."""
    return _pdf([[]])


@pytest.fixture()
def diligence_text() -> str:
    return (
        "Company Legal Name: Acme Robotics, Inc.\n"
        "Company headquarters location: 500 Market Street, San Francisco, CA 94105\n"
        "\n"
        "Current Founder 1:\n"
        "First name: Jane\n"
        "Last name: Doe\n"
        "Role: CEO & Co-founder\n"
        "Email: Jane@Acme.com\n"
        "LinkedIn: https://www.linkedin.com/in/janedoe\n"
        "\n"
        "Current Founder 2:\n"
        "First name: Omar\n"
        "Last name: Haddad\n"
        "Role: Founder and CTO\n"
        "Email: omar@acme.com\n"
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


class RecordingNotifier(BaseNotifier):
    """Keeps every toast in memory, in delivery order."""

    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)

    def titles(self) -> list[str]:
        return [toast.title for toast in self.toasts]


@pytest.fixture()
def make_notifier() -> type[RecordingNotifier]:
    return RecordingNotifier
