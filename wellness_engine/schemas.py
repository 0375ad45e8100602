"""Pydantic schema for wellness check input

Form fields arrive as camelCase JSON with untrusted values. Every numeric field
is coerced to a non-negative number (0 when absent or unparseable) and every
categorical field to its enum (None when absent or unrecognised), so building a
WellnessInput never fails on bad values.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from wellness_engine.domain.categories import (
    CreditHistory,
    EmergencyFund,
    EmploymentType,
    ProtectionLevel,
    SurplusLevel,
    parse_category,
)
from wellness_engine.utils.number_utils import to_flag, to_non_negative_float, to_non_negative_int

DEFAULT_AGE = 35

# Upper bounds on free-text figures; larger values are clamped
MAX_AMOUNT = 1e12
MAX_INTEREST_RATE = 100.0
MAX_TERM_YEARS = 50

_CATEGORY_FIELDS = {
    "employment": EmploymentType,
    "credit": CreditHistory,
    "surplus": SurplusLevel,
    "emergency": EmergencyFund,
    "life": ProtectionLevel,
    "income": ProtectionLevel,
    "critical": ProtectionLevel,
}


class WellnessInput(BaseModel):
    """Request body for a wellness check"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # Scored answers
    employment: Optional[EmploymentType] = None
    credit: Optional[CreditHistory] = None
    surplus: Optional[SurplusLevel] = None
    emergency: Optional[EmergencyFund] = Field(None, description="Legacy emergency-fund answer")
    life: Optional[ProtectionLevel] = None
    income: Optional[ProtectionLevel] = Field(None, description="Income protection cover")
    critical: Optional[ProtectionLevel] = None

    # Property
    property_value: float = 0.0
    deposit: float = 0.0

    # Personal
    age: int = DEFAULT_AGE
    smoker: bool = False

    # Household finances (monthly, net)
    monthly_income: float = 0.0
    partner_income: float = 0.0
    accessible_savings: float = 0.0
    monthly_essentials: float = 0.0
    perception_months: float = 0.0

    # Employer benefits
    employer_sick_pay: bool = False
    sick_pay_duration: int = Field(0, description="Months of full employer sick pay")
    employer_death_in_service: bool = False

    # Income protection policy
    ip_monthly_benefit: float = 0.0
    ip_deferred_period: int = Field(0, description="Months before benefit starts")
    ip_benefit_period: str = ""

    # Mortgage eligibility metrics
    gross_annual_income: float = 0.0
    partner_gross_annual_income: float = 0.0
    total_monthly_commitments: float = 0.0
    mortgage_term: int = Field(0, description="Years; 0 means lender default")
    interest_rate: float = Field(0.0, description="Annual %; 0 means default rate")
    mortgage_amount: float = 0.0

    @field_validator(*_CATEGORY_FIELDS, mode="before")
    @classmethod
    def coerce_category(cls, value: Any, info: ValidationInfo) -> Any:
        return parse_category(_CATEGORY_FIELDS[info.field_name], value)

    @field_validator(
        "property_value",
        "deposit",
        "monthly_income",
        "partner_income",
        "accessible_savings",
        "monthly_essentials",
        "perception_months",
        "ip_monthly_benefit",
        "gross_annual_income",
        "partner_gross_annual_income",
        "total_monthly_commitments",
        "mortgage_amount",
        mode="before",
    )
    @classmethod
    def coerce_amount(cls, value: Any) -> float:
        return min(to_non_negative_float(value), MAX_AMOUNT)

    @field_validator("interest_rate", mode="before")
    @classmethod
    def coerce_interest_rate(cls, value: Any) -> float:
        return min(to_non_negative_float(value), MAX_INTEREST_RATE)

    @field_validator("sick_pay_duration", "ip_deferred_period", mode="before")
    @classmethod
    def coerce_whole_number(cls, value: Any) -> int:
        return to_non_negative_int(value)

    @field_validator("mortgage_term", mode="before")
    @classmethod
    def coerce_term(cls, value: Any) -> int:
        return min(to_non_negative_int(value), MAX_TERM_YEARS)

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, value: Any) -> int:
        return to_non_negative_int(value) or DEFAULT_AGE

    @field_validator("smoker", "employer_sick_pay", "employer_death_in_service", mode="before")
    @classmethod
    def coerce_flag(cls, value: Any) -> bool:
        return to_flag(value)

    @field_validator("ip_benefit_period", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()
