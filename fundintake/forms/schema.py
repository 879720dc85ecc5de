"""Submit-time validation for the investment wizard."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fundintake.extraction.models import (
    MAX_FOUNDERS,
    FounderRole,
    IncorporationType,
    Instrument,
    Stage,
)

_SAFE_OR_NOTE = frozenset({Instrument.SAFE_POST, Instrument.SAFE_PRE, Instrument.CONVERTIBLE_NOTE})


def _empty_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class FounderForm(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    first_name: str = Field(min_length=1)
    last_name: str = ""
    title: str = ""
    email: str = Field(default="", pattern=r"^$|^[^@\s]+@[^@\s]+\.[^@\s]+$")
    linkedin_url: str = ""
    role: FounderRole | None = None
    bio: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def blank_role_to_none(cls, value: Any) -> Any:
        return _empty_to_none(value)


class InvestmentForm(BaseModel):
    """All steps of the investment wizard, as submitted."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=1)
    slug: str = Field(pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    investment_date: date | None = None
    investment_amount: Decimal = Field(gt=0)
    instrument: Instrument
    round_size_usd: Decimal | None = Field(default=None, gt=0)
    stage_at_investment: Stage | None = None
    conversion_cap_usd: Decimal | None = Field(default=None, gt=0)
    discount_percent: Decimal | None = Field(default=None, ge=0, le=100)
    post_money_valuation: Decimal | None = Field(default=None, gt=0)
    has_pro_rata_rights: bool = False
    country_of_incorp: str | None = Field(default=None, pattern=r"^[A-Z]{2}$")
    incorporation_type: IncorporationType | None = None
    reason_for_investing: str = ""
    co_investors: str = ""
    founder_name: str = ""
    description_raw: str = ""

    legal_name: str = ""
    hq_address_line_1: str = ""
    hq_city: str = ""
    hq_state: str = ""
    hq_zip_code: str = ""
    hq_country: str = ""
    hq_latitude: float | None = Field(default=None, ge=-90, le=90)
    hq_longitude: float | None = Field(default=None, ge=-180, le=180)
    founders: list[FounderForm] = Field(default_factory=list, max_length=MAX_FOUNDERS)

    @field_validator(
        "investment_date",
        "round_size_usd",
        "stage_at_investment",
        "conversion_cap_usd",
        "discount_percent",
        "post_money_valuation",
        "country_of_incorp",
        "incorporation_type",
        "hq_latitude",
        "hq_longitude",
        mode="before",
    )
    @classmethod
    def blank_optionals_to_none(cls, value: Any) -> Any:
        return _empty_to_none(value)

    @model_validator(mode="after")
    def terms_match_instrument(self) -> "InvestmentForm":
        if self.instrument not in _SAFE_OR_NOTE:
            if self.conversion_cap_usd is not None or self.discount_percent is not None:
                raise ValueError("conversion cap and discount apply only to SAFEs and notes")
        if self.instrument is not Instrument.EQUITY and self.post_money_valuation is not None:
            raise ValueError("post-money valuation applies only to equity rounds")
        return self
