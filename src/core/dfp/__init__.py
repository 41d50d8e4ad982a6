"""
DFP — Десятичный оракул повышенной точности

Используется только слоем валидации для измерения ошибки ядра в ULP.
"""

from src.core.dfp import dfp_math
from src.core.dfp.dfp import (
    Dfp,
    DfpClass,
    DfpField,
    DfpFieldMismatchError,
    RoundingMode,
)

__all__ = [
    "Dfp",
    "DfpClass",
    "DfpField",
    "DfpFieldMismatchError",
    "RoundingMode",
    "dfp_math",
]
