from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from fundintake.address.models import AddressNormalizationResult

MAX_FOUNDERS = 3


class FieldName(str, Enum):
    """Form fields the quick-paste parsers know how to fill."""

    # Investment memo
    NAME = "name"
    SLUG = "slug"
    INVESTMENT_DATE = "investment_date"
    INVESTMENT_AMOUNT = "investment_amount"
    INSTRUMENT = "instrument"
    ROUND_SIZE = "round_size_usd"
    STAGE_AT_INVESTMENT = "stage_at_investment"
    CONVERSION_CAP = "conversion_cap_usd"
    DISCOUNT_PERCENT = "discount_percent"
    POST_MONEY_VALUATION = "post_money_valuation"
    HAS_PRO_RATA_RIGHTS = "has_pro_rata_rights"
    COUNTRY_OF_INCORP = "country_of_incorp"
    INCORPORATION_TYPE = "incorporation_type"
    REASON_FOR_INVESTING = "reason_for_investing"
    CO_INVESTORS = "co_investors"
    FOUNDER_NAME = "founder_name"
    DESCRIPTION = "description_raw"

    # Founder diligence
    LEGAL_NAME = "legal_name"
    HQ_ADDRESS_LINE_1 = "hq_address_line_1"
    HQ_CITY = "hq_city"
    HQ_STATE = "hq_state"
    HQ_ZIP_CODE = "hq_zip_code"
    HQ_COUNTRY = "hq_country"
    HQ_LATITUDE = "hq_latitude"
    HQ_LONGITUDE = "hq_longitude"
    FOUNDERS = "founders"


class Instrument(str, Enum):
    SAFE_POST = "safe_post"
    SAFE_PRE = "safe_pre"
    CONVERTIBLE_NOTE = "convertible_note"
    EQUITY = "equity"


class Stage(str, Enum):
    PRE_SEED = "pre_seed"
    SEED = "seed"
    SERIES_A = "series_a"
    SERIES_B = "series_b"


class IncorporationType(str, Enum):
    C_CORP = "c_corp"
    S_CORP = "s_corp"
    LLC = "llc"
    BCORP = "bcorp"
    GMBH = "gmbh"
    LTD = "ltd"
    PLC = "plc"


class FounderRole(str, Enum):
    FOUNDER = "founder"
    COFOUNDER = "cofounder"


@dataclass(frozen=True)
class FounderRecord:
    """A founder found in a diligence blob. Unresolved parts stay empty."""

    first_name: str = ""
    last_name: str = ""
    title: str = ""
    email: str = ""
    linkedin_url: str = ""
    role: FounderRole | None = None
    bio: str = ""

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_form_value(self) -> dict[str, str]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "title": self.title,
            "email": self.email,
            "linkedin_url": self.linkedin_url,
            "role": self.role.value if self.role else "",
            "bio": self.bio,
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Output of one quick-paste parse.

    ``fields`` only holds values for names in ``successfully_parsed``; every
    attempted field lands in exactly one of the two sets.
    """

    fields: Mapping[FieldName, Any] = field(default_factory=dict)
    successfully_parsed: frozenset[FieldName] = frozenset()
    failed_to_parse: frozenset[FieldName] = frozenset()
    address_normalization: AddressNormalizationResult | None = None

    def __post_init__(self) -> None:
        overlap = self.successfully_parsed & self.failed_to_parse
        if overlap:
            raise ValueError(f"Fields both parsed and failed: {sorted(f.value for f in overlap)}")
        missing = self.successfully_parsed - set(self.fields)
        if missing:
            raise ValueError(f"Parsed fields without values: {sorted(f.value for f in missing)}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def attempted(self) -> frozenset[FieldName]:
        return self.successfully_parsed | self.failed_to_parse

    def form_values(self) -> dict[str, Any]:
        """Plain field-name -> value mapping ready to apply to a form."""
        values: dict[str, Any] = {}
        for name, value in self.fields.items():
            if name is FieldName.FOUNDERS:
                values[name.value] = [founder.to_form_value() for founder in value]
            elif isinstance(value, Enum):
                values[name.value] = value.value
            else:
                values[name.value] = value
        return values
