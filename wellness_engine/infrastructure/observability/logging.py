"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from wellness_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_assessment(
    request_id: Optional[str],
    score: int,
    category: str,
    lti_available: bool,
    dti_available: bool,
    income_estimated: bool,
    runway_days: int,
    ltv_bracket: str,
    duration_ms: float,
) -> None:
    """Log anonymised assessment outcome for analysis"""
    logging.getLogger("wellness_engine.assessment").info(
        "Assessment completed",
        extra={
            "request_id": request_id,
            "step": "assessment_complete",
            "score": score,
            "category": category,
            "lti_available": lti_available,
            "dti_available": dti_available,
            "income_estimated": income_estimated,
            "runway_days": runway_days,
            "ltv_bracket": ltv_bracket,
            "duration_ms": duration_ms,
        },
    )
