"""Closed sets of form answers and result tiers"""

from enum import Enum
from typing import Any, Optional, Type, TypeVar


class EmploymentType(str, Enum):
    PAYE_ESTABLISHED = "paye-12"  # PAYE, 12+ months in role
    PAYE_RECENT = "paye-under"
    SELF_EMPLOYED_ESTABLISHED = "self-2"  # 2+ years of accounts
    SELF_EMPLOYED_RECENT = "self-under"
    CONTRACTOR = "contractor"
    IRREGULAR = "irregular"


class CreditHistory(str, Enum):
    CLEAN = "clean"
    MINOR = "minor"
    RECENT = "recent"
    SEVERE = "severe"


class SurplusLevel(str, Enum):
    SURPLUS = "surplus"
    BREAKEVEN = "breakeven"
    OCCASIONAL = "occasional"
    RELIANT = "reliant"


class EmergencyFund(str, Enum):
    """Legacy emergency-fund answer, superseded by savings + essentials"""

    SIX_PLUS = "6plus"
    THREE_TO_SIX = "3-6"
    ONE_TO_THREE = "1-3"
    UNDER_ONE = "under1"


class ProtectionLevel(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


class BenefitType(str, Enum):
    SSP = "SSP"
    ESA = "ESA"


class RunwayStatus(str, Enum):
    CRITICAL = "critical"
    MODERATE = "moderate"
    GOOD = "good"
    STRONG = "strong"


class LTITier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    STRETCHED = "stretched"
    DIFFICULT = "difficult"
    UNAVAILABLE = "unavailable"


class DTITier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    STRETCHED = "stretched"
    HIGH = "high"
    UNAVAILABLE = "unavailable"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


E = TypeVar("E", bound=Enum)


def parse_category(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Map a raw form answer onto enum_cls, or None when absent or unrecognised"""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip())
    except ValueError:
        return None
