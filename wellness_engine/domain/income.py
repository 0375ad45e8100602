"""Gross income resolution for affordability ratios"""

from wellness_engine.domain.models import GrossIncome
from wellness_engine.utils.number_utils import round_half_up

# Net-to-gross uplift. Deliberately low so an estimated gross understates
# income and the derived LTI/DTI err on the worse side.
NET_TO_GROSS_MULTIPLIER = 1.3


def resolve_gross_income(gross_annual: float, net_monthly: float) -> GrossIncome:
    """
    Resolve gross annual income from the best available source.

    Priority:
    1. Explicit gross annual figure
    2. Estimate from net monthly take-home pay
    3. Unavailable (zeroed)
    """
    if gross_annual > 0:
        return GrossIncome(
            gross_annual=gross_annual,
            gross_monthly=gross_annual / 12,
            source="provided",
            is_estimated=False,
        )

    if net_monthly > 0:
        estimated = float(round_half_up(net_monthly * 12 * NET_TO_GROSS_MULTIPLIER))
        return GrossIncome(
            gross_annual=estimated,
            gross_monthly=estimated / 12,
            source="estimated",
            is_estimated=True,
        )

    return GrossIncome(gross_annual=0.0, gross_monthly=0.0, source="unavailable", is_estimated=False)
