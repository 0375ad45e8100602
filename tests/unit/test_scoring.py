"""Unit tests for pillar scoring and input validation"""

import json
from itertools import product

import pytest

from wellness_engine.domain.categories import DTITier, LTITier, RunwayStatus
from wellness_engine.domain.runway import simulate_runway
from wellness_engine.domain.scoring import (
    calculate,
    calculate_ltv,
    determine_deposit_tier,
    determine_score_category,
    score_runway_months,
    validate,
)
from wellness_engine.domain.waterfall import generate_income_waterfall
from wellness_engine.schemas import WellnessInput


def test_strong_applicant_score(strong_applicant, risk_table, benchmarks):
    """Test complete scoring flow for a well-prepared applicant"""
    result = calculate(strong_applicant, risk_table, benchmarks)

    assert result.breakdown.lti.tier == LTITier.GOOD
    assert result.breakdown.lti.score == 8
    assert result.breakdown.dti.tier == DTITier.GOOD
    assert result.breakdown.dti.score == 6
    assert result.breakdown.deposit.score == 10
    assert result.breakdown.emergency.score == 10
    assert result.breakdown.emergency.basis == "runway"

    assert result.raw_score == 86
    assert result.mortgage_metrics.max_possible_score == 90
    assert result.score == 96  # 86 / 90 = 95.6%
    assert result.category == "Mortgage-Ready & Financially Resilient"

    assert result.strengths == (
        "Stable income",
        "Good credit profile",
        "Healthy loan-to-income ratio",
        "Comfortable debt-to-income ratio",
    )
    assert result.improvements == ()


def test_pillar_scores_sum_to_raw_score(strong_applicant, risk_table, benchmarks):
    result = calculate(strong_applicant, risk_table, benchmarks)

    assert result.pillar_scores.mortgage_eligibility == 31
    assert result.pillar_scores.affordability_budget == 30
    assert result.pillar_scores.financial_resilience == 10
    assert result.pillar_scores.protection_readiness == 15
    assert result.pillar_scores.total == result.raw_score


def test_pillar_percentages(strong_applicant, risk_table, benchmarks):
    result = calculate(strong_applicant, risk_table, benchmarks)

    assert result.pillar_percentages.mortgage_eligibility == 89  # 31 / 35
    assert result.pillar_percentages.affordability_budget == 100
    assert result.pillar_percentages.financial_resilience == 100
    assert result.pillar_percentages.protection_readiness == 100


def test_max_score_shrinks_without_ratios(minimal_applicant, risk_table, benchmarks):
    """No income or loan: LTI (-10) and DTI (-8) drop out of the maximum"""
    result = calculate(minimal_applicant, risk_table, benchmarks)

    assert result.breakdown.lti.ratio is None
    assert result.breakdown.lti.score is None
    assert result.breakdown.lti.tier == LTITier.UNAVAILABLE
    assert result.breakdown.dti.score is None
    assert result.mortgage_metrics.max_possible_score == 72

    # employment 10 + credit 7 + deposit 3 (no property = 100% LTV) + surplus 20
    assert result.raw_score == 40
    assert result.score == 56
    assert result.category == "Mortgage Possible with Planning"
    assert result.pillar_percentages.mortgage_eligibility == 100  # 17 / 17


def test_max_score_without_lti_only(minimal_applicant, risk_table, benchmarks):
    """Commitments but no loan: DTI is scored, LTI is not"""
    payload = {**minimal_applicant, "grossAnnualIncome": 60000, "totalMonthlyCommitments": 500}
    result = calculate(payload, risk_table, benchmarks)

    assert result.breakdown.lti.score is None
    assert result.breakdown.dti.ratio == 10.0
    assert result.breakdown.dti.score == 8
    assert result.mortgage_metrics.max_possible_score == 80


def test_ltv_exactly_ninety_scores_six(minimal_applicant, risk_table, benchmarks):
    payload = {**minimal_applicant, "propertyValue": 300000, "deposit": 30000}
    result = calculate(payload, risk_table, benchmarks)

    assert result.breakdown.deposit.ltv == 90.0
    assert result.breakdown.deposit.score == 6
    assert result.mortgage_metrics.ltv.formatted == "90.0%"
    assert "Deposit size" in result.improvements


def test_deposit_tiers():
    assert determine_deposit_tier(75.0) == (10, "excellent", "Strong deposit")
    assert determine_deposit_tier(80.0) == (8, "good", "Solid deposit")
    assert determine_deposit_tier(85.0)[0] == 8
    assert determine_deposit_tier(90.0)[0] == 6
    assert determine_deposit_tier(90.5) == (3, "high", None)
    assert calculate_ltv(0, 10000) == 100.0


def test_no_protection_and_no_emergency_fund(minimal_applicant, risk_table, benchmarks):
    """Both weak pillars score zero and surface as improvements"""
    payload = {
        **minimal_applicant,
        "propertyValue": 250000,
        "deposit": 50000,
        "emergency": "under1",
        "monthlyEssentials": 1500,
    }
    result = calculate(payload, risk_table, benchmarks)

    assert result.breakdown.emergency.score == 0
    assert result.breakdown.emergency.basis == "category"
    assert result.breakdown.protection.total_score == 0
    assert result.pillar_scores.financial_resilience == 0
    assert result.pillar_scores.protection_readiness == 0
    assert "Emergency fund" in result.improvements
    assert "Income protection" in result.improvements
    assert "Emergency savings" not in result.strengths
    assert "Good protection" not in result.strengths


def test_emergency_answer_takes_precedence_over_runway(minimal_applicant, risk_table, benchmarks):
    payload = {
        **minimal_applicant,
        "emergency": "6plus",
        "accessibleSavings": 500,
        "monthlyEssentials": 1500,
    }
    result = calculate(payload, risk_table, benchmarks)

    # £500 against a £965/month shortfall lasts one month: 4 points on runway alone
    assert result.runway.months == 1.0
    assert result.breakdown.emergency.basis == "category"
    assert result.breakdown.emergency.score == 10
    assert result.breakdown.emergency.value == "6plus"
    assert "Emergency savings" in result.strengths


def test_runway_used_when_emergency_answer_missing(minimal_applicant, risk_table, benchmarks):
    payload = {**minimal_applicant, "accessibleSavings": 5000, "monthlyEssentials": 1500}
    result = calculate(payload, risk_table, benchmarks)

    assert result.runway.months == 6.0
    assert result.breakdown.emergency.basis == "runway"
    assert result.breakdown.emergency.score == 10
    assert result.breakdown.emergency.value is None


def test_legacy_emergency_answer_used_without_savings(minimal_applicant, risk_table, benchmarks):
    result = calculate({**minimal_applicant, "emergency": "3-6"}, risk_table, benchmarks)

    assert result.breakdown.emergency.basis == "category"
    assert result.breakdown.emergency.score == 7
    assert "Emergency savings" in result.strengths


def test_runway_month_bands():
    assert score_runway_months(99.9) == 10
    assert score_runway_months(6.0) == 10
    assert score_runway_months(3.0) == 7
    assert score_runway_months(1.0) == 4
    assert score_runway_months(0.0) == 0


def test_score_categories():
    assert determine_score_category(80)[0] == "Mortgage-Ready & Financially Resilient"
    assert determine_score_category(79)[0] == "On Track with Minor Improvements"
    assert determine_score_category(65)[0] == "On Track with Minor Improvements"
    assert determine_score_category(50)[0] == "Mortgage Possible with Planning"
    assert determine_score_category(49)[0] == "Preparation Recommended"


def test_lists_are_capped_at_four(risk_table, benchmarks):
    """Weak answers everywhere produce more than four improvements"""
    payload = {
        "employment": "irregular",
        "credit": "severe",
        "surplus": "reliant",
        "life": "none",
        "income": "none",
        "critical": "none",
        "propertyValue": 200000,
        "deposit": 5000,
        "grossAnnualIncome": 30000,
        "totalMonthlyCommitments": 900,
    }
    result = calculate(payload, risk_table, benchmarks)

    assert result.breakdown.lti.tier == LTITier.DIFFICULT
    assert len(result.improvements) == 4
    assert result.improvements == (
        "Employment stability",
        "Credit history",
        "Loan-to-income ratio",
        "Debt-to-income ratio",
    )
    assert result.strengths == ()
    assert result.category == "Preparation Recommended"


def test_partner_income_is_added(minimal_applicant, risk_table, benchmarks):
    payload = {
        **minimal_applicant,
        "propertyValue": 400000,
        "deposit": 40000,
        "grossAnnualIncome": 50000,
        "partnerIncome": 2500,  # net monthly, estimated to £39,000 gross
        "monthlyIncome": 3000,
    }
    result = calculate(payload, risk_table, benchmarks)
    gross = result.mortgage_metrics.gross_income

    assert gross.applicant1.source == "provided"
    assert gross.applicant2.source == "estimated"
    assert gross.total == 89000
    assert gross.is_estimated is True
    assert result.household.monthly_income == 5500
    assert result.breakdown.lti.ratio == pytest.approx(360000 / 89000, abs=0.005)


def test_explicit_mortgage_amount_overrides_property_minus_deposit(minimal_applicant, risk_table, benchmarks):
    payload = {
        **minimal_applicant,
        "propertyValue": 300000,
        "deposit": 60000,
        "mortgageAmount": 200000,
        "grossAnnualIncome": 50000,
    }
    result = calculate(payload, risk_table, benchmarks)

    assert result.mortgage_metrics.loan_amount == 200000
    assert result.breakdown.lti.ratio == 4.0
    assert result.breakdown.lti.score == 6


def test_malformed_numbers_degrade_to_zero(risk_table, benchmarks):
    payload = {
        "employment": "paye-12",
        "credit": "clean",
        "surplus": "breakeven",
        "life": "partial",
        "income": "partial",
        "critical": "none",
        "propertyValue": "lots",
        "deposit": None,
        "grossAnnualIncome": "n/a",
        "monthlyIncome": float("nan"),
        "accessibleSavings": "-500",
        "monthlyEssentials": {"rent": 900},
        "age": "thirty",
        "mortgageTerm": "",
    }
    result = calculate(payload, risk_table, benchmarks)

    assert result.breakdown.lti.is_available is False
    assert result.breakdown.dti.is_available is False
    assert result.runway.message == "Insufficient data to calculate runway"
    assert result.risk_assessment.probabilities.age_bracket == "30-39"  # default age 35
    assert 0 <= result.score <= 100


def test_employer_benefit_summary(strong_applicant, risk_table, benchmarks):
    payload = {**strong_applicant, "employerSickPay": "yes", "sickPayDuration": "1", "employerDeathInService": "yes"}
    result = calculate(payload, risk_table, benchmarks)

    assert result.employer_benefits.sick_pay.description == "Full pay for 1 month"
    assert result.employer_benefits.death_in_service.description == "Available"

    result = calculate(strong_applicant, risk_table, benchmarks)
    assert result.employer_benefits.sick_pay.exists is False
    assert result.employer_benefits.sick_pay.description == "SSP only"
    assert result.employer_benefits.death_in_service.description == "Not available"


def test_household_figures(strong_applicant, risk_table, benchmarks):
    result = calculate({**strong_applicant, "partnerIncome": "1000"}, risk_table, benchmarks)

    assert result.household.monthly_income == 4500
    assert result.household.monthly_essentials == 1500
    assert result.household.accessible_savings == 20000
    assert result.household.monthly_surplus == 3000


@pytest.mark.parametrize(
    "employment,surplus,protection,savings",
    list(product(["paye-12", "self-under", "irregular"], ["surplus", "reliant"], ["full", "none"], [0, 800, 50000])),
)
def test_score_bounds_hold(employment, surplus, protection, savings, risk_table, benchmarks):
    payload = {
        "employment": employment,
        "credit": "minor",
        "surplus": surplus,
        "life": protection,
        "income": protection,
        "critical": protection,
        "propertyValue": 250000,
        "deposit": 25000,
        "monthlyIncome": 2800,
        "accessibleSavings": savings,
        "monthlyEssentials": 1600,
        "ipMonthlyBenefit": 1200,
    }
    result = calculate(payload, risk_table, benchmarks)

    assert 0 <= result.score <= 100
    assert result.raw_score <= result.mortgage_metrics.max_possible_score
    assert result.pillar_scores.total == result.raw_score


def test_recalculation_from_household_is_deterministic(strong_applicant, risk_table, benchmarks):
    """Household figures fed back through the simulators reproduce the result"""
    payload = {**strong_applicant, "accessibleSavings": "7000", "employerSickPay": "yes", "sickPayDuration": "2"}
    result = calculate(payload, risk_table, benchmarks)

    runway = simulate_runway(
        result.household.accessible_savings,
        result.household.monthly_essentials,
        result.state_benefit,
        benchmarks,
    )
    waterfall = generate_income_waterfall(
        result.household.monthly_income,
        result.household.monthly_essentials,
        result.state_benefit,
        has_employer_sick_pay=result.employer_benefits.sick_pay.exists,
        employer_sick_pay_months=result.employer_benefits.sick_pay.duration,
    )

    assert runway == result.runway
    assert tuple(waterfall) == result.waterfall
    assert calculate(payload, risk_table, benchmarks) == result


def test_accepts_parsed_input(strong_applicant, risk_table, benchmarks):
    parsed = WellnessInput.model_validate(strong_applicant)
    assert calculate(parsed, risk_table, benchmarks) == calculate(strong_applicant, risk_table, benchmarks)


def test_result_serializes_to_json(strong_applicant, risk_table, benchmarks):
    data = calculate(strong_applicant, risk_table, benchmarks).to_dict()

    assert data["benchmarks"]["ssp_monthly"] == 535
    assert data["runway"]["status"] == RunwayStatus.STRONG
    assert len(data["waterfall"]) == 6
    assert json.loads(json.dumps(data))["breakdown"]["lti"]["tier"] == "good"


def test_validate_accepts_complete_input(strong_applicant):
    result = validate(strong_applicant)

    assert result.is_valid is True
    assert result.errors == ()


def test_validate_reports_missing_required_fields():
    result = validate({})

    assert result.is_valid is False
    assert result.errors == (
        "Employment status is required",
        "Credit history is required",
        "Monthly surplus information is required",
        "Life insurance information is required",
        "Income protection information is required",
        "Critical illness cover information is required",
    )


def test_validate_numeric_fields(minimal_applicant):
    result = validate({**minimal_applicant, "propertyValue": "abc", "deposit": -10})

    assert "Property value must be a valid positive number" in result.errors
    assert "Deposit must be a valid positive number" in result.errors


def test_validate_deposit_cannot_exceed_property_value(minimal_applicant):
    result = validate({**minimal_applicant, "propertyValue": "200000", "deposit": "250000"})

    assert result.errors == ("Deposit cannot exceed property value",)


def test_validate_rejects_unknown_categories(minimal_applicant):
    result = validate({**minimal_applicant, "employment": "astronaut", "emergency": "lots"})

    assert result.errors == (
        "Employment status has an unrecognised value",
        "Emergency fund information has an unrecognised value",
    )


def test_validate_accepts_snake_case_keys():
    payload = {
        "employment": "self-2",
        "credit": "minor",
        "surplus": "breakeven",
        "life": "partial",
        "income": "none",
        "critical": "none",
        "property_value": 100000,
        "deposit": 150000,
    }
    assert validate(payload).errors == ("Deposit cannot exceed property value",)


@pytest.mark.parametrize(
    "extreme",
    [
        {"interestRate": "20000"},
        {"mortgageTerm": "20000"},
        {"monthlyIncome": "2e307", "grossAnnualIncome": ""},
    ],
)
def test_extreme_figures_still_score(extreme, minimal_applicant, risk_table, benchmarks):
    payload = {
        **minimal_applicant,
        "propertyValue": "300000",
        "deposit": "60000",
        "grossAnnualIncome": "60000",
        **extreme,
    }
    assert validate(payload).is_valid

    result = calculate(payload, risk_table, benchmarks)

    assert result.breakdown.lti.is_available
    assert result.breakdown.dti.is_available
    assert 0 <= result.score <= 100
