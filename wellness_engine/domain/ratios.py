"""Loan-to-Income and Debt-to-Income evaluation"""

import math

from wellness_engine.domain.categories import DTITier, LTITier
from wellness_engine.domain.models import DTIResult, LTIResult
from wellness_engine.utils.number_utils import round_half_up

LTI_MAX_POINTS = 10
DTI_MAX_POINTS = 8

# Regulatory loan-to-income cap on most residential lending
FCA_LTI_CAP = 4.5

DEFAULT_INTEREST_RATE = 4.5  # annual %, used when the user gives no rate
STRESS_TEST_RATE = 6.5  # annual %, disclosed only, never scored
DEFAULT_TERM_YEARS = 25

# Below this monthly rate the annuity formula loses precision
_MIN_MONTHLY_RATE = 1e-9


def monthly_payment(principal: float, annual_rate: float, term_years: int) -> float:
    """
    Fixed-rate repayment mortgage payment.

    P = L * r * (1 + r)^n / ((1 + r)^n - 1), with r the monthly rate and n the
    number of monthly payments. A zero rate degrades to straight-line L / n.
    When (1 + r)^n overflows the payment has converged on interest-only L * r.
    """
    if principal <= 0:
        return 0.0

    num_payments = max(1, int(term_years) * 12)
    monthly_rate = annual_rate / 100 / 12

    if monthly_rate < _MIN_MONTHLY_RATE:
        return principal / num_payments

    try:
        growth = (1 + monthly_rate) ** num_payments
    except OverflowError:
        growth = math.inf
    if math.isinf(growth):
        return principal * monthly_rate
    return principal * (monthly_rate * growth) / (growth - 1)


def determine_lti_tier(ratio: float) -> tuple[int, LTITier, str]:
    """
    Map LTI ratio (years of gross income) to points.

    Bands are half-open [lower, upper):
    - < 3.5: 10 points, excellent
    - < 4.0: 8 points, good
    - < 4.5: 6 points, acceptable (regulatory cap)
    - < 5.0: 3 points, stretched
    - else:  1 point, difficult

    Returns: (points, tier, description)
    """
    if ratio < 3.5:
        return 10, LTITier.EXCELLENT, "Well within typical lender limits"
    elif ratio < 4.0:
        return 8, LTITier.GOOD, "Within standard lending criteria"
    elif ratio < 4.5:
        return 6, LTITier.ACCEPTABLE, "Approaching the 4.5x regulatory limit"
    elif ratio < 5.0:
        return 3, LTITier.STRETCHED, "Above 4.5x - limited lender choice"
    else:
        return 1, LTITier.DIFFICULT, "Well above typical lending limits"


def determine_dti_tier(ratio: float) -> tuple[int, DTITier, str]:
    """
    Map DTI percentage (monthly debt over gross monthly income) to points.

    - < 25%: 8 points, excellent
    - < 35%: 6 points, good
    - < 45%: 3 points, stretched
    - else:  1 point, high

    Returns: (points, tier, description)
    """
    if ratio < 25:
        return 8, DTITier.EXCELLENT, "Low debt commitments relative to income"
    elif ratio < 35:
        return 6, DTITier.GOOD, "Manageable debt commitments"
    elif ratio < 45:
        return 3, DTITier.STRETCHED, "Debt commitments may limit borrowing"
    else:
        return 1, DTITier.HIGH, "High debt commitments relative to income"


def calculate_lti(loan_amount: float, gross_annual_income: float) -> LTIResult:
    """Loan-to-Income ratio and score; unavailable when either side is missing"""
    if gross_annual_income <= 0 or loan_amount <= 0:
        return LTIResult(
            ratio=None,
            score=None,
            tier=LTITier.UNAVAILABLE,
            description="Insufficient data to calculate LTI",
            max_score=LTI_MAX_POINTS,
            ratio_formatted=None,
            fca_cap=FCA_LTI_CAP,
        )

    ratio = loan_amount / gross_annual_income
    points, tier, description = determine_lti_tier(ratio)

    return LTIResult(
        ratio=round(ratio, 2),
        score=points,
        tier=tier,
        description=description,
        max_score=LTI_MAX_POINTS,
        ratio_formatted=f"{ratio:.1f}x",
        fca_cap=FCA_LTI_CAP,
    )


def calculate_dti(
    mortgage_amount: float,
    gross_monthly_income: float,
    monthly_commitments: float = 0.0,
    term_years: int = DEFAULT_TERM_YEARS,
    interest_rate: float = 0.0,
) -> DTIResult:
    """
    Debt-to-Income ratio and score.

    The mortgage payment is estimated at the user's rate (default 4.5%) and
    again at the stress-test rate. Only the user-rate ratio is scored.
    Unavailable when there is no income, or neither a mortgage nor other
    commitments to assess.
    """
    if gross_monthly_income <= 0 or (mortgage_amount <= 0 and monthly_commitments <= 0):
        return DTIResult(
            ratio=None,
            score=None,
            tier=DTITier.UNAVAILABLE,
            description="Insufficient data to calculate DTI",
            max_score=DTI_MAX_POINTS,
            ratio_formatted=None,
            stress_rate=STRESS_TEST_RATE,
            term_used=DEFAULT_TERM_YEARS,
        )

    rate = interest_rate if interest_rate > 0 else DEFAULT_INTEREST_RATE
    term = term_years if term_years > 0 else DEFAULT_TERM_YEARS

    mortgage_payment = monthly_payment(mortgage_amount, rate, term)
    stress_payment = monthly_payment(mortgage_amount, STRESS_TEST_RATE, term)

    total_monthly_debt = mortgage_payment + monthly_commitments
    ratio = total_monthly_debt / gross_monthly_income * 100
    stress_ratio = (stress_payment + monthly_commitments) / gross_monthly_income * 100

    points, tier, description = determine_dti_tier(ratio)

    return DTIResult(
        ratio=round(ratio, 1),
        score=points,
        tier=tier,
        description=description,
        max_score=DTI_MAX_POINTS,
        ratio_formatted=f"{ratio:.1f}%",
        stress_tested_ratio=round(stress_ratio, 1),
        stress_tested_formatted=f"{stress_ratio:.1f}%",
        estimated_mortgage_payment=round_half_up(mortgage_payment),
        stress_tested_payment=round_half_up(stress_payment),
        monthly_commitments=round_half_up(monthly_commitments),
        total_monthly_debt=round_half_up(total_monthly_debt),
        rate_used=rate,
        stress_rate=STRESS_TEST_RATE,
        term_used=term,
    )
