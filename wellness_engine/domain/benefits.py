"""State benefit entitlement during incapacity"""

from typing import Optional

from wellness_engine.domain.categories import BenefitType, EmploymentType
from wellness_engine.domain.models import StateBenefit
from wellness_engine.domain.reference import UKBenchmarks


def get_state_benefit(employment: Optional[EmploymentType], benchmarks: UKBenchmarks) -> StateBenefit:
    """
    Determine which state benefit replaces income for an employment type.

    - PAYE employees and contractors: Statutory Sick Pay
    - Self-employed: no SSP; New Style ESA if NI contributions were paid
    - Irregular or unknown: ESA as the conservative assumption
    """
    if employment in (
        EmploymentType.PAYE_ESTABLISHED,
        EmploymentType.PAYE_RECENT,
        EmploymentType.CONTRACTOR,
    ):
        return StateBenefit(
            type=BenefitType.SSP,
            monthly_amount=benchmarks.ssp_monthly,
            weekly_rate=benchmarks.ssp_weekly,
            label="Statutory Sick Pay (SSP)",
            max_weeks=benchmarks.ssp_max_weeks,
            description=(
                f"£{benchmarks.ssp_weekly:g}/week (£{benchmarks.ssp_monthly:g}/month) "
                f"for up to {benchmarks.ssp_max_weeks} weeks"
            ),
        )

    if employment in (EmploymentType.SELF_EMPLOYED_ESTABLISHED, EmploymentType.SELF_EMPLOYED_RECENT):
        return StateBenefit(
            type=BenefitType.ESA,
            monthly_amount=benchmarks.esa_monthly_assessment,
            weekly_rate=benchmarks.esa_weekly_assessment,
            label="New Style ESA (estimated)",
            max_weeks=None,
            description=(
                f"£{benchmarks.esa_weekly_assessment:g}/week (£{benchmarks.esa_monthly_assessment:g}/month) "
                "during assessment phase, subject to NI contributions"
            ),
            note=(
                "Self-employed are not eligible for SSP. New Style ESA is available "
                "if Class 2 NI contributions have been paid."
            ),
        )

    return StateBenefit(
        type=BenefitType.ESA,
        monthly_amount=benchmarks.esa_monthly_assessment,
        weekly_rate=benchmarks.esa_weekly_assessment,
        label="New Style ESA (estimated)",
        max_weeks=None,
        description=(
            f"£{benchmarks.esa_weekly_assessment:g}/week (£{benchmarks.esa_monthly_assessment:g}/month) "
            "subject to NI contributions"
        ),
        note="Eligibility depends on your National Insurance contribution record.",
    )
