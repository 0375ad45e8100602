"""Wellness check service - validation, scoring, metrics and logging in one call"""

import logging
import time
from typing import Any, Mapping, Optional

from wellness_engine.config import Settings, settings
from wellness_engine.domain.exceptions import InvalidWellnessInputError
from wellness_engine.domain.models import ScoringResult
from wellness_engine.domain.reference import RiskTable, UKBenchmarks
from wellness_engine.domain.scoring import calculate, validate
from wellness_engine.infrastructure.observability.logging import log_assessment, setup_logging
from wellness_engine.infrastructure.observability.metrics import record_assessment, record_rejection
from wellness_engine.infrastructure.reference_data import load_benchmarks, load_risk_table

logger = logging.getLogger(__name__)


def ltv_bracket(ltv: float) -> str:
    """Coarse LTV band for anonymised analytics"""
    if ltv <= 75:
        return "<= 75%"
    elif ltv <= 85:
        return "75-85%"
    elif ltv <= 90:
        return "85-90%"
    return "> 90%"


class WellnessService:
    """Scores wellness checks against reference data loaded once up front"""

    def __init__(self, risk_table: RiskTable, benchmarks: UKBenchmarks):
        self.risk_table = risk_table
        self.benchmarks = benchmarks

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "WellnessService":
        """Build a service from the configured (or bundled) reference files and set up logging"""
        setup_logging(config.log_level)
        return cls(
            risk_table=load_risk_table(config.risk_table_path or None),
            benchmarks=load_benchmarks(config.benchmarks_path or None),
        )

    def assess(self, payload: Mapping[str, Any], request_id: Optional[str] = None) -> ScoringResult:
        """
        Validate and score one wellness check.

        Flow:
        1. Validate raw input; reject with the full list of messages
        2. Run the scoring engine
        3. Record metrics and an anonymised log line

        Raises:
            InvalidWellnessInputError: input failed validation
        """
        start_time = time.time()

        validation = validate(payload)
        if not validation.is_valid:
            record_rejection()
            logger.warning(
                "Wellness input rejected",
                extra={"request_id": request_id, "errors": list(validation.errors)},
            )
            raise InvalidWellnessInputError(list(validation.errors))

        result = calculate(payload, self.risk_table, self.benchmarks)

        duration_ms = (time.time() - start_time) * 1000
        record_assessment(result)
        log_assessment(
            request_id=request_id,
            score=result.score,
            category=result.category,
            lti_available=result.mortgage_metrics.lti.is_available,
            dti_available=result.mortgage_metrics.dti.is_available,
            income_estimated=result.mortgage_metrics.gross_income.is_estimated,
            runway_days=result.runway.days,
            ltv_bracket=ltv_bracket(result.breakdown.deposit.ltv),
            duration_ms=duration_ms,
        )

        return result
