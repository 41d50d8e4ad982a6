"""
Core math modules

Математические примитивы расширенной точности:
- ieee754: битовые операции binary64/binary32 (next_after, scalb, ulp, copy_sign)
- exact_arithmetic: целочисленная арифметика с контролем переполнения
- fastmath: корректно округлённое ядро трансцендентных функций
- backends: сменные реализации (FASTMATH, MATH)
- mathlib: фасад с таблицей громких/тихих ошибок и выбором бэкенда
- precision: сравнения с допуском в ULP и округление до знака

Фасад импортируется явно (from src.core.math import mathlib): при
импорте он читает конфигурацию из окружения.
"""

# Errors
from src.core.math.errors import (
    MathArithmeticError,
    MathDomainError,
    MathOverflowError,
    MathZeroDivisionError,
)

# Backends
from src.core.math.backends import (
    FastMathLibrary,
    MathLibrary,
    MathLibraryType,
    StdMathLibrary,
    create_math_library,
)

# Config
from src.core.math.config import MathLibConfig

__all__ = [
    # Errors
    "MathArithmeticError",
    "MathDomainError",
    "MathOverflowError",
    "MathZeroDivisionError",
    # Backends
    "FastMathLibrary",
    "MathLibrary",
    "MathLibraryType",
    "StdMathLibrary",
    "create_math_library",
    # Config
    "MathLibConfig",
]
