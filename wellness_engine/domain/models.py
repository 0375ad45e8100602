"""Domain models - immutable dataclasses produced by the scoring engine"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from wellness_engine.domain.categories import (
    BenefitType,
    DTITier,
    LTITier,
    RiskLevel,
    RunwayStatus,
)
from wellness_engine.domain.reference import UKBenchmarks


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of input validation"""

    is_valid: bool
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GrossIncome:
    """Gross income for one applicant and where it came from"""

    gross_annual: float
    gross_monthly: float
    source: str  # "provided" | "estimated" | "unavailable"
    is_estimated: bool


@dataclass(frozen=True)
class RatioResult:
    """Common shape of LTI and DTI results; ratio/score are None when unavailable"""

    ratio: Optional[float]
    score: Optional[int]
    tier: str
    description: str
    max_score: int
    ratio_formatted: Optional[str]

    @property
    def is_available(self) -> bool:
        return self.score is not None


@dataclass(frozen=True)
class LTIResult(RatioResult):
    tier: LTITier
    fca_cap: float = 4.5


@dataclass(frozen=True)
class DTIResult(RatioResult):
    tier: DTITier
    stress_tested_ratio: Optional[float] = None
    stress_tested_formatted: Optional[str] = None
    estimated_mortgage_payment: int = 0
    stress_tested_payment: int = 0
    monthly_commitments: int = 0
    total_monthly_debt: int = 0
    rate_used: float = 0.0
    stress_rate: float = 6.5
    term_used: int = 25


@dataclass(frozen=True)
class StateBenefit:
    """State benefit that replaces income during incapacity"""

    type: BenefitType
    monthly_amount: float
    weekly_rate: float
    label: str
    max_weeks: Optional[int]
    description: str
    eligible: bool = True
    note: Optional[str] = None


@dataclass(frozen=True)
class RunwayResult:
    """How long accessible savings last if earned income stops"""

    days: int
    months: float
    status: RunwayStatus
    vs_uk_average: int
    vs_target: int
    message: Optional[str] = None


@dataclass(frozen=True)
class WaterfallEntry:
    """One month of the income-replacement projection"""

    month: int
    income: int
    source: str
    shortfall: int
    cumulative_shortfall: int


@dataclass(frozen=True)
class PerceptionGap:
    """User's runway estimate compared with the simulated runway"""

    estimated_days: float
    actual_days: int
    gap: float
    ratio: float
    underestimated: bool
    message: str


@dataclass(frozen=True)
class RiskCategory:
    level: RiskLevel
    colour: str
    label: str


@dataclass(frozen=True)
class RiskProbabilities:
    """Percentage chance of each event during the mortgage term"""

    death: float
    critical_illness: float
    long_term_absence: float
    age_bracket: str
    smoking_status: str


@dataclass(frozen=True)
class FormattedRisks:
    death: str
    critical_illness: str
    long_term_absence: str


@dataclass(frozen=True)
class RiskCategories:
    death: RiskCategory
    critical_illness: RiskCategory
    long_term_absence: RiskCategory


@dataclass(frozen=True)
class RiskAssessment:
    probabilities: RiskProbabilities
    formatted: FormattedRisks
    categories: RiskCategories
    summary: str


@dataclass(frozen=True)
class PillarScores:
    """Points (or percentages) for each of the four pillars"""

    mortgage_eligibility: int = 0
    affordability_budget: int = 0
    financial_resilience: int = 0
    protection_readiness: int = 0

    @property
    def total(self) -> int:
        return (
            self.mortgage_eligibility
            + self.affordability_budget
            + self.financial_resilience
            + self.protection_readiness
        )


@dataclass(frozen=True)
class ComponentScore:
    value: Optional[str]
    score: int
    max_score: int


@dataclass(frozen=True)
class DepositScore:
    value: float
    property_value: float
    ltv: float
    score: int
    max_score: int


@dataclass(frozen=True)
class EmergencyScore:
    value: Optional[str]  # legacy category answer, if given
    score: int
    max_score: int
    basis: str  # "runway" | "category" | "none"


@dataclass(frozen=True)
class ProtectionScore:
    life: ComponentScore
    income: ComponentScore
    critical: ComponentScore
    total_score: int
    max_score: int


@dataclass(frozen=True)
class Breakdown:
    """Per-component scores behind the pillar totals"""

    employment: ComponentScore
    credit: ComponentScore
    lti: LTIResult
    dti: DTIResult
    deposit: DepositScore
    surplus: ComponentScore
    emergency: EmergencyScore
    protection: ProtectionScore


@dataclass(frozen=True)
class Household:
    monthly_income: float
    monthly_essentials: float
    accessible_savings: float
    monthly_surplus: float


@dataclass(frozen=True)
class SickPayBenefit:
    exists: bool
    duration: int
    description: str


@dataclass(frozen=True)
class DeathInServiceBenefit:
    exists: bool
    description: str


@dataclass(frozen=True)
class EmployerBenefits:
    sick_pay: SickPayBenefit
    death_in_service: DeathInServiceBenefit


@dataclass(frozen=True)
class IncomeProtectionCover:
    """Income protection policy as described by the user"""

    active: bool
    monthly_benefit: float
    deferred_months: int
    benefit_period: str


@dataclass(frozen=True)
class LTVSummary:
    ratio: float
    formatted: str
    tier: str


@dataclass(frozen=True)
class GrossIncomeSummary:
    total: float
    applicant1: GrossIncome
    applicant2: Optional[GrossIncome]
    is_estimated: bool


@dataclass(frozen=True)
class MortgageMetrics:
    lti: LTIResult
    dti: DTIResult
    ltv: LTVSummary
    gross_income: GrossIncomeSummary
    loan_amount: float
    max_possible_score: int


@dataclass(frozen=True)
class ScoringResult:
    """Complete output of one wellness check"""

    score: int
    raw_score: int
    category: str
    interpretation: str
    pillar_scores: PillarScores
    pillar_percentages: PillarScores
    breakdown: Breakdown
    strengths: Tuple[str, ...]
    improvements: Tuple[str, ...]
    runway: RunwayResult
    perception_gap: PerceptionGap
    waterfall: Tuple[WaterfallEntry, ...]
    risk_assessment: RiskAssessment
    household: Household
    employer_benefits: EmployerBenefits
    state_benefit: StateBenefit
    income_protection: IncomeProtectionCover
    benchmarks: UKBenchmarks
    mortgage_metrics: MortgageMetrics

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for JSON responses and report storage"""
        data = asdict(self)
        data["benchmarks"] = self.benchmarks.model_dump()
        return data
