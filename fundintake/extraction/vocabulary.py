"""Fixed vocabularies for enum-like fields.

Every classifier returns ``None`` for text outside its vocabulary instead of
falling back to a default value.
"""

import re
from functools import lru_cache

import icu  # type: ignore[import-untyped]

from fundintake.extraction.models import FounderRole, IncorporationType, Instrument, Stage

_INCORPORATION_RULES: list[tuple[re.Pattern[str], IncorporationType]] = [
    (re.compile(r"benefit|\bb[\s-]?corp|\bpbc\b", re.IGNORECASE), IncorporationType.BCORP),
    (re.compile(r"\bc[\s-]*corp(?:oration)?\b", re.IGNORECASE), IncorporationType.C_CORP),
    (re.compile(r"\bs[\s-]*corp(?:oration)?\b", re.IGNORECASE), IncorporationType.S_CORP),
    (re.compile(r"\bl\.?l\.?c\b", re.IGNORECASE), IncorporationType.LLC),
    (re.compile(r"\bgmbh\b", re.IGNORECASE), IncorporationType.GMBH),
    (re.compile(r"\bltd\b|\blimited\b", re.IGNORECASE), IncorporationType.LTD),
    (re.compile(r"\bplc\b", re.IGNORECASE), IncorporationType.PLC),
]

_COUNTRY_ALIASES = {
    "us": "US",
    "usa": "US",
    "united states of america": "US",
    "america": "US",
    "uk": "GB",
    "great britain": "GB",
    "england": "GB",
    "scotland": "GB",
    "wales": "GB",
    "korea": "KR",
    "republic of korea": "KR",
    "uae": "AE",
    "czechia": "CZ",
    "czech republic": "CZ",
    "holland": "NL",
    "the netherlands": "NL",
}

US_STATES = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT", "delaware": "DE",
    "district of columbia": "DC", "florida": "FL", "georgia": "GA", "hawaii": "HI",
    "idaho": "ID", "illinois": "IL", "indiana": "IN", "iowa": "IA",
    "kansas": "KS", "kentucky": "KY", "louisiana": "LA", "maine": "ME",
    "maryland": "MD", "massachusetts": "MA", "michigan": "MI", "minnesota": "MN",
    "mississippi": "MS", "missouri": "MO", "montana": "MT", "nebraska": "NE",
    "nevada": "NV", "new hampshire": "NH", "new jersey": "NJ", "new mexico": "NM",
    "new york": "NY", "north carolina": "NC", "north dakota": "ND", "ohio": "OH",
    "oklahoma": "OK", "oregon": "OR", "pennsylvania": "PA", "rhode island": "RI",
    "south carolina": "SC", "south dakota": "SD", "tennessee": "TN", "texas": "TX",
    "utah": "UT", "vermont": "VT", "virginia": "VA", "washington": "WA",
    "west virginia": "WV", "wisconsin": "WI", "wyoming": "WY", "puerto rico": "PR",
}
US_STATE_CODES = frozenset(US_STATES.values())


def classify_instrument(text: str) -> Instrument | None:
    lowered = text.lower()
    if "safe" in lowered and "post" in lowered:
        return Instrument.SAFE_POST
    if "safe" in lowered and "pre" in lowered:
        return Instrument.SAFE_PRE
    if "convertible" in lowered or re.search(r"\bnote\b", lowered):
        return Instrument.CONVERTIBLE_NOTE
    if re.search(r"\bequity\b|\bpriced\b|\bpreferred\b", lowered):
        return Instrument.EQUITY
    return None


def classify_stage(text: str) -> Stage | None:
    lowered = re.sub(r"[\s\-]+", "_", text.lower())
    if "pre_seed" in lowered or "preseed" in lowered:
        return Stage.PRE_SEED
    if "series_a" in lowered:
        return Stage.SERIES_A
    if "series_b" in lowered:
        return Stage.SERIES_B
    if "seed" in lowered:
        return Stage.SEED
    return None


def classify_incorporation(text: str) -> IncorporationType | None:
    for pattern, kind in _INCORPORATION_RULES:
        if pattern.search(text):
            return kind
    return None


def classify_founder_role(text: str) -> FounderRole | None:
    lowered = text.lower()
    if re.search(r"co[\s-]?founder", lowered):
        return FounderRole.COFOUNDER
    if "founder" in lowered:
        return FounderRole.FOUNDER
    return None


def country_code(text: str) -> str | None:
    """Resolve a country name, alias or ISO alpha-2 code to the alpha-2 code."""
    cleaned = re.sub(r"\s+", " ", text).strip()
    if not cleaned:
        return None
    key = cleaned.lower().replace(".", "")
    alias = _COUNTRY_ALIASES.get(key)
    if alias:
        return alias
    names = _country_names()
    if len(key) == 2 and key.isalpha():
        code = key.upper()
        return code if code in names.values() else None
    return names.get(key)


def state_code(text: str) -> str | None:
    cleaned = re.sub(r"\s+", " ", text).strip().rstrip(".")
    if cleaned.upper() in US_STATE_CODES:
        return cleaned.upper()
    return US_STATES.get(cleaned.lower())


@lru_cache(maxsize=1)
def _country_names() -> dict[str, str]:
    """English display name (lower-cased) -> ISO alpha-2, built from ICU data."""
    english = icu.Locale.getEnglish()
    names: dict[str, str] = {}
    for code in icu.Locale.getISOCountries():
        display = icu.Locale("", code).getDisplayCountry(english)
        if display and display != code:
            names[str(display).lower()] = str(code)
    return names
