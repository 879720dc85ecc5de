"""Offline street-address grammar.

Recognized shapes (commas optional before the state):

    STREET, CITY, ST ZIP[, COUNTRY]
    STREET CITY, ST ZIP [COUNTRY]
    STREET CITY ST ZIP

When street and city share one comma-separated part, the city starts after
the last street suffix, unit designator or numbered token.
"""

import re
from dataclasses import dataclass

from fundintake.extraction.text import collapse_whitespace, title_case
from fundintake.extraction.vocabulary import US_STATE_CODES, country_code, state_code

_POSTAL = r"\d{5}(?:-\d{4})?|[A-Za-z]\d[A-Za-z] ?\d[A-Za-z]\d"
_STATE_ZIP_RE = re.compile(
    r"^(?P<state>[A-Za-z][A-Za-z .]*?)\s+(?P<zip>" + _POSTAL + r")"
    r"(?:\s+(?P<country>[A-Za-z][A-Za-z .]*))?$"
)
_NO_COMMA_RE = re.compile(
    r"^(?P<rest>.+?)\s+(?P<tail>[A-Za-z]{2}\s+(?:" + _POSTAL + r")(?:\s+[A-Za-z]{2,3})?)$"
)
_US_ZIP_RE = re.compile(r"^\d{5}(?:-\d{4})?$")
_CA_POSTAL_RE = re.compile(r"^[A-Za-z]\d[A-Za-z] ?\d[A-Za-z]\d$")

STREET_SUFFIXES = frozenset({
    "aly", "alley", "ave", "avenue", "blvd", "boulevard", "broadway", "cir",
    "circle", "ct", "court", "dr", "drive", "expy", "fwy", "hwy", "highway",
    "ln", "lane", "loop", "pkwy", "parkway", "pl", "place", "plz", "plaza",
    "rd", "road", "row", "sq", "square", "st", "street", "ter", "terrace",
    "trl", "trail", "way",
})
UNIT_DESIGNATORS = frozenset({
    "apt", "bldg", "building", "dept", "fl", "floor", "rm", "room", "ste",
    "suite", "unit",
})

CONFIDENCE_STRUCTURED = 0.6
CONFIDENCE_HEURISTIC = 0.4


@dataclass(frozen=True)
class ParsedAddress:
    line1: str
    city: str
    state: str
    zip: str
    country: str
    confidence: float


def parse_address(raw: str) -> ParsedAddress | None:
    """Segment ``raw`` into street, city, state and postal code, or return None."""
    text = collapse_whitespace(raw).strip(" ,")
    if not text:
        return None

    parts = [part.strip() for part in text.split(",") if part.strip()]
    if len(parts) == 1:
        no_comma = _NO_COMMA_RE.match(parts[0])
        if no_comma is None:
            return None
        parts = [no_comma.group("rest"), no_comma.group("tail")]

    trailing_country = ""
    if len(parts) >= 3 and not _STATE_ZIP_RE.match(parts[-1]):
        trailing_country = country_code(parts[-1]) or ""
        if trailing_country:
            parts = parts[:-1]

    state_zip = _STATE_ZIP_RE.match(parts[-1])
    if state_zip is None:
        return None
    postal = state_zip.group("zip").upper()
    state = _resolve_state(state_zip.group("state"), postal)
    if state is None:
        return None

    if len(parts) >= 3:
        line1 = parts[0]
        city = ", ".join(parts[1:-1])
        confidence = CONFIDENCE_STRUCTURED
    else:
        split = split_street_and_city(parts[0])
        if split is None:
            return None
        line1, city = split
        confidence = CONFIDENCE_HEURISTIC

    if not line1 or not city:
        return None

    inline_country = state_zip.group("country") or ""
    country = (
        (country_code(inline_country) if inline_country else None)
        or trailing_country
        or _infer_country(state, postal)
    )
    return ParsedAddress(
        line1=line1,
        city=title_case(city),
        state=state,
        zip=postal,
        country=country,
        confidence=confidence,
    )


def split_street_and_city(segment: str) -> tuple[str, str] | None:
    tokens = segment.split()
    if len(tokens) < 2:
        return None
    boundary = 0
    index = 0
    while index < len(tokens):
        word = tokens[index].lower().strip(".,")
        if word in UNIT_DESIGNATORS:
            boundary = index + 2
            index += 2
            continue
        if word in STREET_SUFFIXES or any(ch.isdigit() for ch in word) or word.startswith("#"):
            boundary = index + 1
        index += 1
    if boundary == 0 or boundary >= len(tokens):
        boundary = len(tokens) - 1
    return " ".join(tokens[:boundary]), " ".join(tokens[boundary:])


def _resolve_state(raw_state: str, postal: str) -> str | None:
    state = state_code(raw_state)
    if state:
        return state
    cleaned = raw_state.strip()
    if _CA_POSTAL_RE.match(postal) and len(cleaned) == 2 and cleaned.isalpha():
        return cleaned.upper()
    return None


def _infer_country(state: str, postal: str) -> str:
    if _US_ZIP_RE.match(postal) and state in US_STATE_CODES:
        return "US"
    if _CA_POSTAL_RE.match(postal):
        return "CA"
    return ""
