"""Perception gap: how the user's runway estimate compares with reality"""

from wellness_engine.domain.models import PerceptionGap
from wellness_engine.domain.runway import DAYS_PER_MONTH

DEFAULT_ESTIMATE_MONTHS = 3.0
TOLERANCE_DAYS = 30


def calculate_perception_gap(estimated_months: float, actual_days: int) -> PerceptionGap:
    """Compare an estimate in months against the simulated runway in days"""
    estimated_days = estimated_months * DAYS_PER_MONTH
    gap = actual_days - estimated_days
    ratio = actual_days / estimated_days if estimated_days > 0 else 0.0

    if gap > TOLERANCE_DAYS:
        message = (
            "You're actually in a better position than you thought - "
            f"{round(abs(gap))} days more runway than estimated."
        )
    elif gap < -TOLERANCE_DAYS:
        message = (
            "Your savings would cover less time than you estimated - "
            f"{round(abs(gap))} days less than you thought."
        )
    else:
        message = "Your estimate was quite close to reality."

    return PerceptionGap(
        estimated_days=estimated_days,
        actual_days=actual_days,
        gap=gap,
        ratio=ratio,
        underestimated=gap > 0,
        message=message,
    )
