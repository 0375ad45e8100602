"""Wellness scoring engine - mortgage readiness across four pillars

Pillars and their maximum points:
1. Mortgage Eligibility (35): employment 10, credit 7, LTI 10, DTI 8
2. Affordability & Budget (30): deposit/LTV 10, monthly surplus 20
3. Financial Resilience (10): emergency fund coverage
4. Protection Readiness (15): life, income and critical illness cover, 5 each

The maximum raw score is 90, reduced by 10 when LTI cannot be calculated and
by 8 when DTI cannot, so missing mortgage metrics do not count against the
user. The final score scales raw points onto 0-100.
"""

from typing import Any, List, Mapping, Optional, Union

from wellness_engine.domain.benefits import get_state_benefit
from wellness_engine.domain.categories import (
    CreditHistory,
    EmergencyFund,
    EmploymentType,
    ProtectionLevel,
    SurplusLevel,
    parse_category,
)
from wellness_engine.domain.income import resolve_gross_income
from wellness_engine.domain.models import (
    Breakdown,
    ComponentScore,
    DeathInServiceBenefit,
    DepositScore,
    EmergencyScore,
    EmployerBenefits,
    GrossIncomeSummary,
    Household,
    IncomeProtectionCover,
    LTVSummary,
    MortgageMetrics,
    PillarScores,
    ProtectionScore,
    ScoringResult,
    SickPayBenefit,
    ValidationResult,
)
from wellness_engine.domain.perception import DEFAULT_ESTIMATE_MONTHS, calculate_perception_gap
from wellness_engine.domain.ratios import DTI_MAX_POINTS, LTI_MAX_POINTS, calculate_dti, calculate_lti
from wellness_engine.domain.reference import RiskTable, UKBenchmarks
from wellness_engine.domain.risk import get_complete_risk_assessment
from wellness_engine.domain.runway import simulate_runway
from wellness_engine.domain.waterfall import generate_income_waterfall
from wellness_engine.schemas import WellnessInput
from wellness_engine.utils.number_utils import parse_number, round_half_up

TOTAL_MAX_SCORE = 90

EMPLOYMENT_MAX_POINTS = 10
CREDIT_MAX_POINTS = 7
DEPOSIT_MAX_POINTS = 10
SURPLUS_MAX_POINTS = 20
EMERGENCY_MAX_POINTS = 10
PROTECTION_MAX_POINTS = 15

# Pillar 1 maximum before LTI/DTI are added (employment + credit)
ELIGIBILITY_BASE_MAX_POINTS = EMPLOYMENT_MAX_POINTS + CREDIT_MAX_POINTS
AFFORDABILITY_MAX_POINTS = DEPOSIT_MAX_POINTS + SURPLUS_MAX_POINTS

MAX_STRENGTHS = 4
MAX_IMPROVEMENTS = 4


def score_employment(employment: Optional[EmploymentType]) -> int:
    if employment is EmploymentType.PAYE_ESTABLISHED:
        return 10
    elif employment in (EmploymentType.PAYE_RECENT, EmploymentType.SELF_EMPLOYED_ESTABLISHED):
        return 8
    elif employment is EmploymentType.CONTRACTOR:
        return 7
    elif employment is EmploymentType.SELF_EMPLOYED_RECENT:
        return 4
    elif employment is EmploymentType.IRREGULAR:
        return 3
    return 0


def score_credit(credit: Optional[CreditHistory]) -> int:
    if credit is CreditHistory.CLEAN:
        return 7
    elif credit is CreditHistory.MINOR:
        return 5
    elif credit is CreditHistory.RECENT:
        return 2
    elif credit is CreditHistory.SEVERE:
        return 1
    return 0


def score_surplus(surplus: Optional[SurplusLevel]) -> int:
    if surplus is SurplusLevel.SURPLUS:
        return 20
    elif surplus is SurplusLevel.BREAKEVEN:
        return 12
    elif surplus is SurplusLevel.OCCASIONAL:
        return 6
    return 0


def score_emergency_category(emergency: Optional[EmergencyFund]) -> int:
    if emergency is EmergencyFund.SIX_PLUS:
        return 10
    elif emergency is EmergencyFund.THREE_TO_SIX:
        return 7
    elif emergency is EmergencyFund.ONE_TO_THREE:
        return 4
    return 0


def score_runway_months(months: float) -> int:
    """Emergency fund points from simulated runway: 6+ months 10, 3+ 7, 1+ 4"""
    if months >= 6:
        return 10
    elif months >= 3:
        return 7
    elif months >= 1:
        return 4
    return 0


def score_protection(level: Optional[ProtectionLevel]) -> int:
    if level is ProtectionLevel.FULL:
        return 5
    elif level is ProtectionLevel.PARTIAL:
        return 3
    return 0


def calculate_ltv(property_value: float, deposit: float) -> float:
    """Loan-to-value percentage; 100 when there is no property value"""
    if property_value <= 0:
        return 100.0
    return (property_value - deposit) * 100 / property_value


def determine_deposit_tier(ltv: float) -> tuple[int, str, Optional[str]]:
    """
    Map LTV to deposit points. Bounds are inclusive (90% LTV is still 6 points).

    Returns: (points, tier, strength label or None when it needs improving)
    """
    if ltv <= 75:
        return 10, "excellent", "Strong deposit"
    elif ltv <= 85:
        return 8, "good", "Solid deposit"
    elif ltv <= 90:
        return 6, "fair", None
    else:
        return 3, "high", None


def determine_score_category(score: int) -> tuple[str, str]:
    """Returns: (category, interpretation)"""
    if score >= 80:
        return (
            "Mortgage-Ready & Financially Resilient",
            "You appear to be in a strong position for a mortgage application.",
        )
    elif score >= 65:
        return (
            "On Track with Minor Improvements",
            "You're broadly on track, with a few areas to focus on.",
        )
    elif score >= 50:
        return (
            "Mortgage Possible with Planning",
            "A mortgage may be achievable with some planning and improvements.",
        )
    else:
        return (
            "Preparation Recommended",
            "Some focused steps could significantly improve your position.",
        )


def _percentage(points: int, max_points: int) -> int:
    return round_half_up(points / max_points * 100) if max_points > 0 else 0


def _enum_value(member: Any) -> Optional[str]:
    return member.value if member is not None else None


def calculate(
    data: Union[WellnessInput, Mapping[str, Any]],
    risk_table: RiskTable,
    benchmarks: UKBenchmarks,
) -> ScoringResult:
    """
    Main entry point: score a wellness check.

    Assumes validate() has passed. Malformed numbers are treated as absent
    rather than raising, so partial input still yields a consistent result.
    """
    inp = data if isinstance(data, WellnessInput) else WellnessInput.model_validate(data)

    strengths: List[str] = []
    improvements: List[str] = []

    state_benefit = get_state_benefit(inp.employment, benchmarks)
    has_income_protection = inp.income in (ProtectionLevel.FULL, ProtectionLevel.PARTIAL)

    # Runway first: the resilience pillar depends on it
    runway = simulate_runway(
        inp.accessible_savings,
        inp.monthly_essentials,
        state_benefit,
        benchmarks,
        ip_monthly_benefit=inp.ip_monthly_benefit,
        ip_deferred_months=inp.ip_deferred_period,
        has_income_protection=has_income_protection,
    )

    # PILLAR 1: Mortgage Eligibility
    employment_score = score_employment(inp.employment)
    if employment_score >= 8:
        strengths.append("Stable income")
    else:
        improvements.append("Employment stability")

    credit_score = score_credit(inp.credit)
    if credit_score >= 5:
        strengths.append("Good credit profile")
    else:
        improvements.append("Credit history")

    applicant_income = resolve_gross_income(inp.gross_annual_income, inp.monthly_income)
    total_gross_annual = applicant_income.gross_annual
    partner_income = None
    if inp.partner_gross_annual_income > 0 or inp.partner_income > 0:
        partner_income = resolve_gross_income(inp.partner_gross_annual_income, inp.partner_income)
        total_gross_annual += partner_income.gross_annual

    if inp.mortgage_amount > 0:
        loan_amount = inp.mortgage_amount
    else:
        loan_amount = max(0.0, inp.property_value - inp.deposit)

    max_possible_score = TOTAL_MAX_SCORE
    eligibility_max = ELIGIBILITY_BASE_MAX_POINTS
    eligibility_score = employment_score + credit_score

    lti = calculate_lti(loan_amount, total_gross_annual)
    if lti.score is not None:
        eligibility_score += lti.score
        eligibility_max += LTI_MAX_POINTS
        if lti.score >= 8:
            strengths.append("Healthy loan-to-income ratio")
        elif lti.score <= 3:
            improvements.append("Loan-to-income ratio")
    else:
        max_possible_score -= LTI_MAX_POINTS

    dti = calculate_dti(
        loan_amount,
        total_gross_annual / 12,
        inp.total_monthly_commitments,
        inp.mortgage_term,
        inp.interest_rate,
    )
    if dti.score is not None:
        eligibility_score += dti.score
        eligibility_max += DTI_MAX_POINTS
        if dti.score >= 6:
            strengths.append("Comfortable debt-to-income ratio")
        elif dti.score <= 3:
            improvements.append("Debt-to-income ratio")
    else:
        max_possible_score -= DTI_MAX_POINTS

    # PILLAR 2: Affordability & Budget
    ltv = calculate_ltv(inp.property_value, inp.deposit)
    deposit_score, ltv_tier, deposit_strength = determine_deposit_tier(ltv)
    if deposit_strength:
        strengths.append(deposit_strength)
    else:
        improvements.append("Deposit size")

    surplus_score = score_surplus(inp.surplus)
    if surplus_score >= 12:
        strengths.append("Good budget control")
    else:
        improvements.append("Monthly budget")

    # PILLAR 3: Financial Resilience
    # Precedence: the emergency-fund answer when given, then the simulated
    # runway when savings and essentials are both present, then nothing.
    if inp.emergency is not None:
        emergency_score = score_emergency_category(inp.emergency)
        emergency_basis = "category"
    elif inp.accessible_savings > 0 and inp.monthly_essentials > 0:
        emergency_score = score_runway_months(runway.months)
        emergency_basis = "runway"
    else:
        emergency_score = 0
        emergency_basis = "none"

    if emergency_score >= 7:
        strengths.append("Emergency savings")
    else:
        improvements.append("Emergency fund")

    # PILLAR 4: Protection Readiness
    life_score = score_protection(inp.life)
    income_score = score_protection(inp.income)
    critical_score = score_protection(inp.critical)
    protection_total = life_score + income_score + critical_score

    if protection_total >= 10:
        strengths.append("Good protection")
    else:
        improvements.append("Income protection")

    pillar_scores = PillarScores(
        mortgage_eligibility=eligibility_score,
        affordability_budget=deposit_score + surplus_score,
        financial_resilience=emergency_score,
        protection_readiness=protection_total,
    )
    raw_score = pillar_scores.total

    final_score = min(round_half_up(raw_score / max_possible_score * 100), 100)
    category, interpretation = determine_score_category(final_score)

    pillar_percentages = PillarScores(
        mortgage_eligibility=_percentage(pillar_scores.mortgage_eligibility, eligibility_max),
        affordability_budget=_percentage(pillar_scores.affordability_budget, AFFORDABILITY_MAX_POINTS),
        financial_resilience=_percentage(pillar_scores.financial_resilience, EMERGENCY_MAX_POINTS),
        protection_readiness=_percentage(pillar_scores.protection_readiness, PROTECTION_MAX_POINTS),
    )

    # Enhanced metrics
    perception_gap = calculate_perception_gap(
        inp.perception_months or DEFAULT_ESTIMATE_MONTHS,
        runway.days,
    )

    sick_pay_months = inp.sick_pay_duration
    waterfall = generate_income_waterfall(
        inp.monthly_income,
        inp.monthly_essentials,
        state_benefit,
        has_employer_sick_pay=inp.employer_sick_pay,
        employer_sick_pay_months=sick_pay_months,
        ip_monthly_benefit=inp.ip_monthly_benefit,
        ip_deferred_months=inp.ip_deferred_period,
        has_income_protection=has_income_protection,
    )

    risk_assessment = get_complete_risk_assessment(inp.age, inp.smoker, risk_table)

    household_income = inp.monthly_income + inp.partner_income

    if inp.employer_sick_pay:
        plural = "s" if sick_pay_months != 1 else ""
        sick_pay_description = f"Full pay for {sick_pay_months} month{plural}"
    else:
        sick_pay_description = f"{state_benefit.type.value} only"

    breakdown = Breakdown(
        employment=ComponentScore(_enum_value(inp.employment), employment_score, EMPLOYMENT_MAX_POINTS),
        credit=ComponentScore(_enum_value(inp.credit), credit_score, CREDIT_MAX_POINTS),
        lti=lti,
        dti=dti,
        deposit=DepositScore(
            value=inp.deposit,
            property_value=inp.property_value,
            ltv=ltv,
            score=deposit_score,
            max_score=DEPOSIT_MAX_POINTS,
        ),
        surplus=ComponentScore(_enum_value(inp.surplus), surplus_score, SURPLUS_MAX_POINTS),
        emergency=EmergencyScore(
            value=_enum_value(inp.emergency),
            score=emergency_score,
            max_score=EMERGENCY_MAX_POINTS,
            basis=emergency_basis,
        ),
        protection=ProtectionScore(
            life=ComponentScore(_enum_value(inp.life), life_score, 5),
            income=ComponentScore(_enum_value(inp.income), income_score, 5),
            critical=ComponentScore(_enum_value(inp.critical), critical_score, 5),
            total_score=protection_total,
            max_score=PROTECTION_MAX_POINTS,
        ),
    )

    return ScoringResult(
        score=final_score,
        raw_score=raw_score,
        category=category,
        interpretation=interpretation,
        pillar_scores=pillar_scores,
        pillar_percentages=pillar_percentages,
        breakdown=breakdown,
        strengths=tuple(strengths[:MAX_STRENGTHS]),
        improvements=tuple(improvements[:MAX_IMPROVEMENTS]),
        runway=runway,
        perception_gap=perception_gap,
        waterfall=tuple(waterfall),
        risk_assessment=risk_assessment,
        household=Household(
            monthly_income=household_income,
            monthly_essentials=inp.monthly_essentials,
            accessible_savings=inp.accessible_savings,
            monthly_surplus=household_income - inp.monthly_essentials,
        ),
        employer_benefits=EmployerBenefits(
            sick_pay=SickPayBenefit(
                exists=inp.employer_sick_pay,
                duration=sick_pay_months,
                description=sick_pay_description,
            ),
            death_in_service=DeathInServiceBenefit(
                exists=inp.employer_death_in_service,
                description="Available" if inp.employer_death_in_service else "Not available",
            ),
        ),
        state_benefit=state_benefit,
        income_protection=IncomeProtectionCover(
            active=has_income_protection and inp.ip_monthly_benefit > 0,
            monthly_benefit=inp.ip_monthly_benefit,
            deferred_months=inp.ip_deferred_period,
            benefit_period=inp.ip_benefit_period,
        ),
        benchmarks=benchmarks,
        mortgage_metrics=MortgageMetrics(
            lti=lti,
            dti=dti,
            ltv=LTVSummary(ratio=ltv, formatted=f"{ltv:.1f}%", tier=ltv_tier),
            gross_income=GrossIncomeSummary(
                total=total_gross_annual,
                applicant1=applicant_income,
                applicant2=partner_income,
                is_estimated=applicant_income.is_estimated
                or (partner_income is not None and partner_income.is_estimated),
            ),
            loan_amount=loan_amount,
            max_possible_score=max_possible_score,
        ),
    )


_REQUIRED_FIELDS = (
    # (camelCase key, snake_case key, label, enum)
    ("employment", "employment", "Employment status", EmploymentType),
    ("credit", "credit", "Credit history", CreditHistory),
    ("surplus", "surplus", "Monthly surplus information", SurplusLevel),
    ("life", "life", "Life insurance information", ProtectionLevel),
    ("income", "income", "Income protection information", ProtectionLevel),
    ("critical", "critical", "Critical illness cover information", ProtectionLevel),
)


def _lookup(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake)


def validate(data: Mapping[str, Any]) -> ValidationResult:
    """
    Check raw input before scoring. Never raises; problems come back as messages.

    Requirements:
    - employment, credit, surplus, life, income and critical are present and
      recognised answers (the legacy emergency answer is optional)
    - property value and deposit, when supplied, are non-negative numbers
    - deposit does not exceed property value
    """
    errors: List[str] = []

    for camel, snake, label, enum_cls in _REQUIRED_FIELDS:
        value = _lookup(data, camel, snake)
        if value is None or value == "":
            errors.append(f"{label} is required")
        elif parse_category(enum_cls, value) is None:
            errors.append(f"{label} has an unrecognised value")

    emergency = _lookup(data, "emergency", "emergency")
    if emergency not in (None, "") and parse_category(EmergencyFund, emergency) is None:
        errors.append("Emergency fund information has an unrecognised value")

    property_raw = _lookup(data, "propertyValue", "property_value")
    deposit_raw = _lookup(data, "deposit", "deposit")
    property_value = parse_number(property_raw)
    deposit = parse_number(deposit_raw)

    if property_raw not in (None, "") and (property_value is None or property_value < 0):
        errors.append("Property value must be a valid positive number")

    if deposit_raw not in (None, "") and (deposit is None or deposit < 0):
        errors.append("Deposit must be a valid positive number")

    if property_value and deposit and deposit > property_value:
        errors.append("Deposit cannot exceed property value")

    return ValidationResult(is_valid=not errors, errors=tuple(errors))
