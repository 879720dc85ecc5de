"""Quick-paste parser for founder diligence notes.

Diligence notes carry the company legal name, a headquarters address and
numbered founder blocks::

    Company Legal Name: Acme Robotics, Inc.
    Company headquarters location: 500 Market Street, San Francisco, CA 94105

    Current Founder 1:
    First name: Jane
    Last name: Doe
    Role: CEO & Co-founder
    Email: jane@acme.com

The address is handed to the address normalization chain, which may call a
geocoder, so ``parse`` is a coroutine.
"""

import re
from typing import Any

from fundintake.address.models import AddressNormalizationResult, NormalizationMethod
from fundintake.address.normalizer import AddressNormalizer
from fundintake.extraction.engine import ExtractionEngine
from fundintake.extraction.matchers import FieldRule, labeled
from fundintake.extraction.models import (
    MAX_FOUNDERS,
    ExtractionResult,
    FieldName,
    FounderRecord,
)
from fundintake.extraction.text import (
    collapse_whitespace,
    find_block,
    find_labeled,
    normalize_text,
    title_case,
)
from fundintake.extraction.vocabulary import classify_founder_role
from fundintake.logging.logger import Log

_FOUNDER_HEADER_RE = re.compile(
    r"^(?:Current\s+)?(?:Co-?)?Founder\s*#?\s*\d+\b[ \t]*:?[ \t]*(?P<inline>[^\n]*)$",
    re.IGNORECASE | re.MULTILINE,
)
_FULL_NAME_RE = re.compile(r"^(?:Full\s+)?Name[ \t]*:[ \t]*([^\n]+)$", re.IGNORECASE | re.MULTILINE)
_EMAIL_RE = re.compile(r"[\w.+\-]+@[\w\-]+(?:\.[\w\-]+)+")
_LINKEDIN_RE = re.compile(r"(?:https?://)?(?:[\w\-]+\.)?linkedin\.com/[^\s,;)]+", re.IGNORECASE)

HQ_LABELS = (
    "Company headquarters location",
    "Headquarters Address",
    "Headquarters Location",
    "Headquarters",
    "HQ Address",
    "HQ Location",
)
LEGAL_NAME_LABELS = ("Company Legal Name", "Legal Entity Name", "Legal Name")
_STOP_LABELS = (*HQ_LABELS, *LEGAL_NAME_LABELS, "Current Founder", "Founder", "Co-Founder")

HQ_TEXT_FIELDS = {
    FieldName.HQ_ADDRESS_LINE_1: "line1",
    FieldName.HQ_CITY: "city",
    FieldName.HQ_STATE: "state",
    FieldName.HQ_ZIP_CODE: "zip",
    FieldName.HQ_COUNTRY: "country",
}


def _legal_name(raw: str) -> str | None:
    name = collapse_whitespace(raw).rstrip(",;:")
    return name or None


def _founder_blocks(text: str) -> list[tuple[str, str]]:
    """Split ``text`` into ``(inline header text, block body)`` pairs."""
    headers = list(_FOUNDER_HEADER_RE.finditer(text))
    blocks = []
    for index, header in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(text)
        blocks.append((header.group("inline").strip(), text[header.end():end]))
    return blocks


def _founder_from_block(inline: str, body: str) -> FounderRecord | None:
    first = find_labeled(body, ["First Name", "Given Name"]) or ""
    last = find_labeled(body, ["Last Name", "Surname", "Family Name"]) or ""
    if not first and not last:
        full = _FULL_NAME_RE.search(body)
        full_name = full.group(1) if full else inline
        parts = collapse_whitespace(full_name).split(" ", 1)
        first = parts[0] if parts else ""
        last = parts[1] if len(parts) > 1 else ""

    title = find_labeled(body, ["Role", "Title", "Position"]) or ""
    email_match = _EMAIL_RE.search(find_labeled(body, ["Email", "E-mail"]) or body)
    linkedin_match = _LINKEDIN_RE.search(find_labeled(body, ["LinkedIn"]) or body)
    bio = find_block(body, ["Bio", "Background", "About"], _STOP_LABELS) or ""

    record = FounderRecord(
        first_name=title_case(collapse_whitespace(first)),
        last_name=title_case(collapse_whitespace(last)),
        title=collapse_whitespace(title),
        email=email_match.group(0).lower() if email_match else "",
        linkedin_url=linkedin_match.group(0) if linkedin_match else "",
        role=classify_founder_role(title) if title else None,
        bio=collapse_whitespace(bio),
    )
    if not (record.name or record.email):
        return None
    return record


def _founders(text: str) -> tuple[FounderRecord, ...] | None:
    founders = [
        record
        for record in (_founder_from_block(inline, body) for inline, body in _founder_blocks(text))
        if record is not None
    ]
    if len(founders) > MAX_FOUNDERS:
        Log.warning(
            f"Diligence note lists {len(founders)} founders, "
            f"keeping the first {MAX_FOUNDERS}",
            dropped=len(founders) - MAX_FOUNDERS,
        )
        founders = founders[:MAX_FOUNDERS]
    return tuple(founders) or None


DILIGENCE_RULES: tuple[FieldRule, ...] = (
    FieldRule(FieldName.LEGAL_NAME, (labeled(LEGAL_NAME_LABELS, _legal_name),)),
    FieldRule(FieldName.FOUNDERS, (_founders,)),
)


class FounderDiligenceParser:
    """Asynchronous quick-paste parser for founder diligence notes."""

    def __init__(self, address_normalizer: AddressNormalizer) -> None:
        self._address_normalizer = address_normalizer
        self._engine = ExtractionEngine(DILIGENCE_RULES, name="diligence_parser")

    async def parse(self, text: object) -> ExtractionResult:
        if not isinstance(text, str) or not text.strip():
            Log.info("diligence_parser: empty or non-text input, nothing to parse")
            return ExtractionResult(
                failed_to_parse=frozenset(
                    [*(rule.field for rule in DILIGENCE_RULES), *HQ_TEXT_FIELDS]
                )
            )

        result = self._engine.run(text)
        fields: dict[FieldName, Any] = dict(result.fields)
        parsed = set(result.successfully_parsed)
        failed = set(result.failed_to_parse)

        raw_address = self._find_address(text)
        address = None
        if raw_address is None:
            failed.update(HQ_TEXT_FIELDS)
        else:
            address = await self._normalize(raw_address)
            if address is None:
                failed.update(HQ_TEXT_FIELDS)
            else:
                self._apply_address(address, fields, parsed, failed)

        return ExtractionResult(
            fields=fields,
            successfully_parsed=frozenset(parsed),
            failed_to_parse=frozenset(failed),
            address_normalization=address,
        )

    async def aclose(self) -> None:
        await self._address_normalizer.aclose()

    @staticmethod
    def _find_address(text: str) -> str | None:
        block = find_block(normalize_text(text), HQ_LABELS, _STOP_LABELS)
        if block is None:
            return None
        return ", ".join(line.strip(" ,") for line in block.split("\n") if line.strip(" ,"))

    async def _normalize(self, raw_address: str) -> AddressNormalizationResult | None:
        try:
            return await self._address_normalizer.normalize(raw_address)
        except Exception as exc:  # noqa: BLE001
            Log.error(f"diligence_parser: address normalization failed: {exc!r}")
            return None

    @staticmethod
    def _apply_address(
        address: AddressNormalizationResult,
        fields: dict[FieldName, Any],
        parsed: set[FieldName],
        failed: set[FieldName],
    ) -> None:
        for name, attribute in HQ_TEXT_FIELDS.items():
            value = getattr(address.fields, attribute)
            if value:
                fields[name] = value
                parsed.add(name)
            else:
                failed.add(name)

        if address.method is NormalizationMethod.GEOCODER:
            for name, value in (
                (FieldName.HQ_LATITUDE, address.fields.latitude),
                (FieldName.HQ_LONGITUDE, address.fields.longitude),
            ):
                if value is None:
                    failed.add(name)
                else:
                    fields[name] = value
                    parsed.add(name)
