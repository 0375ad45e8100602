"""Reference data schemas: UK benefit benchmarks and actuarial risk tables

Both are static configuration supplied by the caller. They are reviewed on a
six-month cadence and live as JSON files next to the package so they can be
updated without touching scoring logic.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UKBenchmarks(BaseModel):
    """UK averages and state benefit rates used for comparison and runway maths"""

    model_config = ConfigDict(frozen=True)

    last_reviewed: str = ""

    # Deadline-to-breadline research
    average_deadline_days: int = Field(..., ge=0)
    average_savings: float = Field(..., ge=0)
    average_debt: float = Field(..., ge=0)
    target_deadline_days: int = Field(..., ge=0)

    # Statutory Sick Pay (PAYE employees only)
    ssp_weekly: float = Field(..., ge=0)
    ssp_monthly: float = Field(..., ge=0)
    ssp_max_weeks: int = Field(..., ge=0)

    # New Style ESA
    esa_weekly_assessment: float = Field(..., ge=0)
    esa_monthly_assessment: float = Field(..., ge=0)
    esa_weekly_support_group: float = Field(..., ge=0)
    esa_monthly_support_group: float = Field(..., ge=0)
    esa_assessment_weeks: int = Field(..., ge=0)

    # Universal Credit monthly allowances
    uc_single: float = Field(..., ge=0)
    uc_couple: float = Field(..., ge=0)
    uc_lcwra: float = Field(..., ge=0)


class SplitProbability(BaseModel):
    """Percentage probability split by smoking status"""

    model_config = ConfigDict(frozen=True)

    non_smoker: float = Field(..., ge=0, le=100)
    smoker: float = Field(..., ge=0, le=100)


class AgeBracket(BaseModel):
    """Probabilities of a claim event during the mortgage term for one age band"""

    model_config = ConfigDict(frozen=True)

    bracket: str
    min_age: int = Field(..., ge=0)
    max_age: int = Field(..., ge=0)
    death: SplitProbability
    critical_illness: SplitProbability
    long_term_absence: float = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def check_age_order(self) -> "AgeBracket":
        if self.min_age > self.max_age:
            raise ValueError(f"bracket {self.bracket}: min_age exceeds max_age")
        return self


class SeverityBand(BaseModel):
    """One severity band; `below` is the exclusive upper bound (None = open-ended)"""

    model_config = ConfigDict(frozen=True)

    below: Optional[float] = None
    label: str
    colour: str


class SeverityThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: SeverityBand
    medium: SeverityBand
    high: SeverityBand
    very_high: SeverityBand

    @model_validator(mode="after")
    def check_bounds(self) -> "SeverityThresholds":
        bounds = [self.low.below, self.medium.below, self.high.below]
        if any(b is None for b in bounds):
            raise ValueError("low, medium and high bands need an upper bound")
        if not bounds[0] <= bounds[1] <= bounds[2]:
            raise ValueError("severity bounds must be ascending")
        return self


class RiskTable(BaseModel):
    """Age/smoker bracketed risk probabilities with per-type severity thresholds"""

    model_config = ConfigDict(frozen=True)

    mortgage_term_years: int = Field(25, gt=0)
    default_age_bracket: str
    age_brackets: Tuple[AgeBracket, ...] = Field(..., min_length=1)
    risk_category_thresholds: Dict[str, SeverityThresholds]

    @model_validator(mode="after")
    def check_references(self) -> "RiskTable":
        names = {b.bracket for b in self.age_brackets}
        if self.default_age_bracket not in names:
            raise ValueError(f"default_age_bracket {self.default_age_bracket!r} is not a defined bracket")
        if "death" not in self.risk_category_thresholds:
            raise ValueError("risk_category_thresholds must define 'death'")
        return self

    def get_bracket(self, name: str) -> AgeBracket:
        for bracket in self.age_brackets:
            if bracket.bracket == name:
                return bracket
        raise KeyError(name)
