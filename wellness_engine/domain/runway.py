"""Financial runway simulation ("deadline to breadline")"""

from wellness_engine.domain.categories import RunwayStatus
from wellness_engine.domain.models import RunwayResult, StateBenefit
from wellness_engine.domain.reference import UKBenchmarks

DAYS_PER_MONTH = 30.44
CALCULATION_CAP_MONTHS = 120  # 10 years

# Returned when replacement income covers essentials
INFINITE_RUNWAY_DAYS = 999
INFINITE_RUNWAY_MONTHS = 99.9


def determine_runway_status(days: int) -> RunwayStatus:
    """
    Bucket runway length:
    - >= 90 days: strong
    - >= 60 days: good
    - >= 30 days: moderate
    - otherwise:  critical
    """
    if days >= 90:
        return RunwayStatus.STRONG
    elif days >= 60:
        return RunwayStatus.GOOD
    elif days >= 30:
        return RunwayStatus.MODERATE
    else:
        return RunwayStatus.CRITICAL


def simulate_runway(
    savings: float,
    monthly_essentials: float,
    state_benefit: StateBenefit,
    benchmarks: UKBenchmarks,
    ip_monthly_benefit: float = 0.0,
    ip_deferred_months: int = 0,
    has_income_protection: bool = False,
) -> RunwayResult:
    """
    Burn accessible savings month by month against essential outgoings.

    Each month the state benefit (plus income protection once its deferred
    period has elapsed) offsets essentials; the remainder comes out of
    savings. Two distinct terminal cases:

    - Income covers essentials in some month: savings are never depleted and
      the 999-day sentinel is returned immediately.
    - Savings run out (or the 120-month cap is hit): months burned are
      converted to days at 30.44 days per month.

    Savings or essentials of zero mean there is nothing to simulate.
    """
    if savings <= 0 or monthly_essentials <= 0:
        return RunwayResult(
            days=0,
            months=0.0,
            status=RunwayStatus.CRITICAL,
            vs_uk_average=-benchmarks.average_deadline_days,
            vs_target=-benchmarks.target_deadline_days,
            message="Insufficient data to calculate runway",
        )

    ip_active = has_income_protection and ip_monthly_benefit > 0

    remaining_savings = savings
    months_passed = 0

    while remaining_savings > 0 and months_passed < CALCULATION_CAP_MONTHS:
        monthly_income = state_benefit.monthly_amount
        if ip_active and months_passed >= ip_deferred_months:
            monthly_income += ip_monthly_benefit

        shortfall = monthly_essentials - monthly_income
        if shortfall <= 0:
            return RunwayResult(
                days=INFINITE_RUNWAY_DAYS,
                months=INFINITE_RUNWAY_MONTHS,
                status=RunwayStatus.STRONG,
                vs_uk_average=INFINITE_RUNWAY_DAYS - benchmarks.average_deadline_days,
                vs_target=INFINITE_RUNWAY_DAYS - benchmarks.target_deadline_days,
                message="Income covers essentials - savings not depleted",
            )

        remaining_savings -= shortfall
        months_passed += 1

    days = round(months_passed * DAYS_PER_MONTH)

    return RunwayResult(
        days=days,
        months=round(float(months_passed), 1),
        status=determine_runway_status(days),
        vs_uk_average=days - benchmarks.average_deadline_days,
        vs_target=days - benchmarks.target_deadline_days,
    )
