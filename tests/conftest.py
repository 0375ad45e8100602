"""Pytest fixtures for testing"""

import pytest

from wellness_engine.domain.reference import RiskTable, UKBenchmarks
from wellness_engine.infrastructure.reference_data import load_benchmarks, load_risk_table
from wellness_engine.service import WellnessService


@pytest.fixture(scope="session")
def benchmarks() -> UKBenchmarks:
    """Bundled UK benchmark set (SSP £535/month, ESA £399/month)"""
    return load_benchmarks()


@pytest.fixture(scope="session")
def risk_table() -> RiskTable:
    return load_risk_table()


@pytest.fixture
def service(risk_table: RiskTable, benchmarks: UKBenchmarks) -> WellnessService:
    return WellnessService(risk_table=risk_table, benchmarks=benchmarks)


@pytest.fixture
def strong_applicant() -> dict:
    """
    Form payload for a well-prepared PAYE applicant.

    - LTV 75% (10 pts), LTI 3.75x (8 pts), DTI ~30% with £250 commitments (6 pts)
    - £20k savings against £1.5k essentials: 21 months of runway (10 pts)
    - Full cover on all three protection questions (15 pts)
    """
    return {
        "employment": "paye-12",
        "credit": "clean",
        "surplus": "surplus",
        "life": "full",
        "income": "full",
        "critical": "full",
        "propertyValue": "300000",
        "deposit": "75000",
        "grossAnnualIncome": "60000",
        "totalMonthlyCommitments": "250",
        "monthlyIncome": "3500",
        "accessibleSavings": "20000",
        "monthlyEssentials": "1500",
        "age": "35",
        "smoker": "no",
        "perceptionMonths": "6",
    }


@pytest.fixture
def minimal_applicant() -> dict:
    """Only the required answers; no property, income or savings figures"""
    return {
        "employment": "paye-12",
        "credit": "clean",
        "surplus": "surplus",
        "life": "none",
        "income": "none",
        "critical": "none",
    }
