"""Risk probability lookup by age and smoking status"""

from wellness_engine.domain.categories import RiskLevel
from wellness_engine.domain.models import (
    FormattedRisks,
    RiskAssessment,
    RiskCategories,
    RiskCategory,
    RiskProbabilities,
)
from wellness_engine.domain.reference import RiskTable


def calculate_risk_probabilities(age: int, is_smoker: bool, table: RiskTable) -> RiskProbabilities:
    """Select the age bracket (inclusive bounds) and pick smoker/non-smoker figures"""
    bracket = table.get_bracket(table.default_age_bracket)
    for candidate in table.age_brackets:
        if candidate.min_age <= age <= candidate.max_age:
            bracket = candidate
            break

    if is_smoker:
        death = bracket.death.smoker
        critical_illness = bracket.critical_illness.smoker
    else:
        death = bracket.death.non_smoker
        critical_illness = bracket.critical_illness.non_smoker

    return RiskProbabilities(
        death=death,
        critical_illness=critical_illness,
        long_term_absence=bracket.long_term_absence,
        age_bracket=bracket.bracket,
        smoking_status="Smoker" if is_smoker else "Non-smoker",
    )


def get_risk_category(probability: float, risk_type: str, table: RiskTable) -> RiskCategory:
    """Severity tier for a probability; unknown risk types use the death thresholds"""
    thresholds = table.risk_category_thresholds.get(risk_type) or table.risk_category_thresholds["death"]

    if probability < thresholds.low.below:
        return RiskCategory(level=RiskLevel.LOW, colour=thresholds.low.colour, label=thresholds.low.label)
    elif probability < thresholds.medium.below:
        return RiskCategory(level=RiskLevel.MEDIUM, colour=thresholds.medium.colour, label=thresholds.medium.label)
    elif probability < thresholds.high.below:
        return RiskCategory(level=RiskLevel.HIGH, colour=thresholds.high.colour, label=thresholds.high.label)
    else:
        return RiskCategory(
            level=RiskLevel.VERY_HIGH,
            colour=thresholds.very_high.colour,
            label=thresholds.very_high.label,
        )


def format_risk_probability(probability: float) -> str:
    """1.5 -> "1.5%", 15.4 -> "15%" """
    if probability < 10:
        return f"{probability:.1f}%"
    return f"{int(probability + 0.5)}%"


def get_complete_risk_assessment(age: int, is_smoker: bool, table: RiskTable) -> RiskAssessment:
    probabilities = calculate_risk_probabilities(age, is_smoker, table)

    return RiskAssessment(
        probabilities=probabilities,
        formatted=FormattedRisks(
            death=format_risk_probability(probabilities.death),
            critical_illness=format_risk_probability(probabilities.critical_illness),
            long_term_absence=format_risk_probability(probabilities.long_term_absence),
        ),
        categories=RiskCategories(
            death=get_risk_category(probabilities.death, "death", table),
            critical_illness=get_risk_category(probabilities.critical_illness, "critical_illness", table),
            long_term_absence=get_risk_category(probabilities.long_term_absence, "long_term_absence", table),
        ),
        summary=(
            f"Based on your age ({age}) and smoking status ({probabilities.smoking_status}), "
            f"during a typical {table.mortgage_term_years}-year mortgage term, statistical data suggests:"
        ),
    )
