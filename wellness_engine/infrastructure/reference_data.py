"""Loading of bundled (or overridden) reference data files"""

import json
import logging
from pathlib import Path
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from wellness_engine.domain.exceptions import ReferenceDataError
from wellness_engine.domain.reference import RiskTable, UKBenchmarks

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
RISK_TABLE_FILE = DATA_DIR / "risk_tables.json"
BENCHMARKS_FILE = DATA_DIR / "benchmarks.json"

M = TypeVar("M", bound=BaseModel)


def _load(path: Path, model: Type[M]) -> M:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ReferenceDataError(f"Cannot read reference data {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ReferenceDataError(f"Reference data {path} is not valid JSON: {e}") from e

    try:
        loaded = model.model_validate(raw)
    except ValidationError as e:
        raise ReferenceDataError(f"Reference data {path} failed validation: {e}") from e

    logger.info("Reference data loaded", extra={"path": str(path), "model": model.__name__})
    return loaded


def load_risk_table(path: str | Path | None = None) -> RiskTable:
    """Load the age/smoker risk table; defaults to the bundled file"""
    return _load(Path(path) if path else RISK_TABLE_FILE, RiskTable)


def load_benchmarks(path: str | Path | None = None) -> UKBenchmarks:
    """Load UK benefit rates and runway benchmarks; defaults to the bundled file"""
    return _load(Path(path) if path else BENCHMARKS_FILE, UKBenchmarks)
