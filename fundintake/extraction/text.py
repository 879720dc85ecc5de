"""Tokenizer helpers for pasted text.

Pasted memos come from browsers, PDFs and spreadsheets, so line breaks,
spacing and label punctuation are unreliable. These helpers normalize the
blob once and then locate values by label instead of by position.
"""

import re
import unicodedata
from collections.abc import Iterable, Iterator

import icu  # type: ignore[import-untyped]

_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_HORIZONTAL_SPACE_RE = re.compile("[ \t\u00a0\u2007\u202f]+")
_LABEL_SEPARATOR = r"[ \t]*(?:[:\-–—|][ \t]*)?"

_SLUG_TRANSFORM = "Any-Latin; Latin-ASCII; Lower"
_slug_transliterator: icu.Transliterator | None = None


def normalize_text(raw: str) -> str:
    """Unify newlines and spacing, drop invisible characters, trim each line."""
    text = unicodedata.normalize("NFC", raw)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _INVISIBLE_RE.sub("", text)
    lines = [_HORIZONTAL_SPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def label_pattern(labels: Iterable[str]) -> str:
    """Regex alternation for label phrases, tolerant of spacing and hyphens."""
    parts = []
    for label in labels:
        words = [re.escape(word) for word in re.split(r"[\s\-]+", label) if word]
        parts.append(r"[\s\-]*".join(words))
    return "(?:" + "|".join(parts) + ")"


def _label_prefix(labels: Iterable[str]) -> str:
    """A label at the start of a line, or anywhere when followed by a colon."""
    label = label_pattern(labels) + r"(?!\w)"
    return r"(?:^" + label + _LABEL_SEPARATOR + r"|\b" + label + r"[ \t]*:[ \t]*)"


def iter_labeled(text: str, labels: Iterable[str], value: str = r"([^\n]+)") -> Iterator[str]:
    """Yield every value that follows one of ``labels``, in document order.

    The value may sit on the same line (``Label: value``) or on the next
    line (``Label\\nvalue``), the way copied tables paste.
    """
    pattern = re.compile(
        _label_prefix(labels) + r"\n?[ \t]*" + value,
        re.IGNORECASE | re.MULTILINE,
    )
    for match in pattern.finditer(text):
        captured = match.group(1).strip()
        if captured:
            yield captured


def find_labeled(text: str, labels: Iterable[str], value: str = r"([^\n]+)") -> str | None:
    return next(iter_labeled(text, labels, value), None)


def find_block(text: str, labels: Iterable[str], stop_labels: Iterable[str] = ()) -> str | None:
    """Return the multi-line block after a label, ending at a blank line or a stop label."""
    stops = list(stop_labels)
    terminator = r"\n[ \t]*\n"
    if stops:
        terminator += r"|\n[ \t]*" + label_pattern(stops) + r"\b"
    pattern = re.compile(
        _label_prefix(labels) + r"\n?"
        + r"([\s\S]+?)(?=" + terminator + r"|\Z)",
        re.IGNORECASE | re.MULTILINE,
    )
    match = pattern.search(text)
    if match is None:
        return None
    block = match.group(1).strip()
    return block or None


def collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def title_case(value: str) -> str:
    """``SAN FRANCISCO`` -> ``San Francisco``; leaves mixed-case input alone."""
    if value != value.upper():
        return value
    return re.sub(r"[A-Za-z]+('[A-Za-z]+)?", lambda m: m.group(0).capitalize(), value.lower())


def transliterate_ascii(value: str) -> str:
    """Lower-case ASCII rendering of any script via ICU."""
    global _slug_transliterator  # noqa: PLW0603
    if _slug_transliterator is None:
        _slug_transliterator = icu.Transliterator.createInstance(_SLUG_TRANSFORM)
    return _slug_transliterator.transliterate(value)


def slugify(value: str) -> str:
    slug = transliterate_ascii(value)
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
