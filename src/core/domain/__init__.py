"""
Domain models and value objects.

Contains validation entities: reference cases of the MathLib facade
and accuracy reports of the ULP error meter.
"""

from src.core.domain.accuracy import AccuracyReport
from src.core.domain.reference_case import (
    NAMED_CONSTANTS,
    CaseOutcome,
    ErrorKind,
    ReferenceCase,
    parse_value,
)

__all__ = [
    # Reference cases
    "NAMED_CONSTANTS",
    "CaseOutcome",
    "ErrorKind",
    "ReferenceCase",
    "parse_value",
    # Accuracy
    "AccuracyReport",
]
