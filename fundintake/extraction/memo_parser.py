"""Quick-paste parser for AngelList-style investment memos."""

import re

from fundintake.extraction.coercion import (
    parse_calendar_date,
    parse_money,
    parse_percent,
    parse_yes_no,
)
from fundintake.extraction.engine import ExtractionEngine
from fundintake.extraction.matchers import (
    FieldRule,
    block,
    labeled,
    non_empty,
    regex,
    when_field_in,
)
from fundintake.extraction.models import ExtractionResult, FieldName, Instrument
from fundintake.extraction.text import collapse_whitespace, slugify
from fundintake.extraction.vocabulary import (
    classify_incorporation,
    classify_instrument,
    classify_stage,
    country_code,
)

SECTION_LABELS = (
    "Investment Amount",
    "Investing in",
    "Instrument",
    "Round Size",
    "Round",
    "Conversion Cap",
    "Valuation Cap",
    "Discount",
    "Post-Money Valuation",
    "Pro-rata rights",
    "Country of Incorporation",
    "Type of Incorporation",
    "Reason for Investing",
    "Notable Co-Investors",
    "Founders",
    "Company Details",
    "Description",
)

_ORGANISATION_RE = re.compile(
    r"capital|ventures|partners|fund|investments?|group|llc|corp", re.IGNORECASE
)
_NO_VALUE = {"", "-", "—", "–", "none", "n/a", "na"}

_SAFE_OR_NOTE = (Instrument.SAFE_POST, Instrument.SAFE_PRE, Instrument.CONVERTIBLE_NOTE)


def _company_name(raw: str) -> str | None:
    name = collapse_whitespace(raw).rstrip(".:;,")
    return name or None


def _company_slug(raw: str) -> str | None:
    name = _company_name(raw)
    if name is None:
        return None
    return slugify(name) or None


def _co_investors(raw: str) -> str | None:
    if raw.strip().lower() in _NO_VALUE:
        return None
    names = [
        line.strip()
        for line in raw.split("\n")
        if len(line.strip()) >= 4
        and (" " in line.strip() or _ORGANISATION_RE.search(line))
    ]
    return ", ".join(names) or None


def _first_founder(raw: str) -> str | None:
    first = re.split(r",|;|\band\b|&", raw, maxsplit=1)[0]
    first = re.sub(r"\([^)]*\)", "", first)
    name = collapse_whitespace(first)
    if name.lower() in _NO_VALUE or not re.search(r"[A-Za-z]", name):
        return None
    return name


def _paragraph(raw: str) -> str | None:
    text = raw.strip()
    return text or None


MEMO_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        FieldName.NAME,
        (
            regex(r"Investment in\s+([^\n]+)", _company_name),
            labeled(["Company Name"], _company_name),
        ),
    ),
    FieldRule(
        FieldName.SLUG,
        (
            regex(r"Investment in\s+([^\n]+)", _company_slug),
            labeled(["Company Name"], _company_slug),
        ),
    ),
    FieldRule(
        FieldName.INVESTMENT_DATE,
        (
            regex(r"Completed on\s+([^\n]+)", parse_calendar_date),
            labeled(
                ["Investment Date", "Closing Date", "Close Date", "Date of Investment"],
                parse_calendar_date,
            ),
        ),
    ),
    FieldRule(
        FieldName.INVESTMENT_AMOUNT,
        (labeled(["Investment Amount", "Amount Invested", "Check Size"], parse_money),),
    ),
    FieldRule(
        FieldName.INSTRUMENT,
        (
            labeled(
                ["Investing in", "Instrument Type", "Instrument", "Security Type"],
                classify_instrument,
            ),
        ),
    ),
    FieldRule(
        FieldName.ROUND_SIZE,
        (labeled(["Round Size", "Total Round Size", "Raise Amount"], parse_money),),
    ),
    FieldRule(
        FieldName.STAGE_AT_INVESTMENT,
        (
            labeled(["Stage at Investment", "Stage"], classify_stage),
            regex(
                r"^[ \t]*Round\b(?![ \t\-]*Size)[ \t]*[:\-]?[ \t]*\n?[ \t]*([^\n]+)",
                classify_stage,
                flags=re.IGNORECASE | re.MULTILINE,
            ),
        ),
    ),
    FieldRule(
        FieldName.CONVERSION_CAP,
        (labeled(["Conversion Cap", "Valuation Cap"], parse_money),),
        condition=when_field_in(FieldName.INSTRUMENT, _SAFE_OR_NOTE),
    ),
    FieldRule(
        FieldName.DISCOUNT_PERCENT,
        (labeled(["Discount Rate", "Discount"], parse_percent),),
        condition=when_field_in(FieldName.INSTRUMENT, _SAFE_OR_NOTE),
    ),
    FieldRule(
        FieldName.POST_MONEY_VALUATION,
        (labeled(["Post-Money Valuation", "Post-Money"], parse_money),),
        condition=when_field_in(FieldName.INSTRUMENT, (Instrument.EQUITY,)),
    ),
    FieldRule(
        FieldName.HAS_PRO_RATA_RIGHTS,
        (
            regex(r"Pro[\s\-]*rata(?:\s+rights?)?[^?\n]*\?\s*(Yes|No)\b", parse_yes_no),
            labeled(["Pro-rata rights", "Pro-rata"], parse_yes_no),
        ),
    ),
    FieldRule(
        FieldName.COUNTRY_OF_INCORP,
        (labeled(["Country of Incorporation", "Incorporation Country"], country_code),),
    ),
    FieldRule(
        FieldName.INCORPORATION_TYPE,
        (
            labeled(
                ["Type of Incorporation", "Incorporation Type", "Entity Type"],
                classify_incorporation,
            ),
        ),
    ),
    FieldRule(
        FieldName.REASON_FOR_INVESTING,
        (
            block(
                ["Reason for Investing", "Investment Rationale"],
                non_empty(_paragraph),
                stop=SECTION_LABELS,
            ),
        ),
    ),
    FieldRule(
        FieldName.CO_INVESTORS,
        (
            block(
                ["Notable Co-Investors", "Co-Investors"],
                _co_investors,
                stop=SECTION_LABELS,
            ),
        ),
    ),
    FieldRule(
        FieldName.FOUNDER_NAME,
        (labeled(["Founders", "Founder"], _first_founder),),
    ),
    FieldRule(
        FieldName.DESCRIPTION,
        (
            block(
                ["Company Description", "Description"],
                non_empty(_paragraph),
                stop=SECTION_LABELS,
            ),
        ),
    ),
)


class InvestmentMemoParser:
    """Synchronous quick-paste parser for investment memos."""

    def __init__(self) -> None:
        self._engine = ExtractionEngine(MEMO_RULES, name="memo_parser")

    def parse(self, text: object) -> ExtractionResult:
        return self._engine.run(text)
