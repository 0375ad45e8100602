"""Six-month income waterfall projection"""

from typing import List

from wellness_engine.domain.models import StateBenefit, WaterfallEntry
from wellness_engine.utils.number_utils import round_half_up

PROJECTION_MONTHS = 6


def generate_income_waterfall(
    monthly_income: float,
    monthly_essentials: float,
    state_benefit: StateBenefit,
    has_employer_sick_pay: bool = False,
    employer_sick_pay_months: int = 0,
    ip_monthly_benefit: float = 0.0,
    ip_deferred_months: int = 0,
    has_income_protection: bool = False,
) -> List[WaterfallEntry]:
    """
    Project income for the first six months of incapacity.

    Periods:
    1. Full pay while employer sick pay lasts (only if the employer offers it)
    2. State benefit (SSP or ESA) afterwards, plus income protection for
       months after its deferred period

    Example (essentials £1,500, SSP only):
        month 1: income 535, shortfall 965, cumulative 965
        month 2: income 535, shortfall 965, cumulative 1930
    """
    sick_pay_months = employer_sick_pay_months if has_employer_sick_pay else 0
    ip_active = has_income_protection and ip_monthly_benefit > 0

    entries = []
    cumulative_shortfall = 0.0

    for month in range(1, PROJECTION_MONTHS + 1):
        if month <= sick_pay_months:
            income = monthly_income
            sources = ["Employer sick pay"]
        else:
            income = state_benefit.monthly_amount
            sources = [state_benefit.type.value]
            if ip_active and month > ip_deferred_months:
                income += ip_monthly_benefit
                sources.append("Income Protection")

        rounded_income = round_half_up(income)
        shortfall = max(0.0, monthly_essentials - rounded_income)
        cumulative_shortfall += shortfall

        entries.append(
            WaterfallEntry(
                month=month,
                income=rounded_income,
                source=" + ".join(sources),
                shortfall=round_half_up(shortfall),
                cumulative_shortfall=round_half_up(cumulative_shortfall),
            )
        )

    return entries
