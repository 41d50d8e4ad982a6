"""
Exact Arithmetic — Точная целочисленная арифметика с контролем переполнения

Python int не переполняется, поэтому ширина (32-битный "int" или 64-битный
"long") задаётся явно параметром bits. Любой результат вне диапазона
выбранной ширины поднимает MathOverflowError вместо молчаливого
заворачивания.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат всегда в диапазоне [MIN, MAX] выбранной ширины
2. floor_div/floor_mod используют округление к -inf (не усечение):
   floor_div(12, -5) == -3, floor_mod(12, -5) == -3
3. Делитель 0 → MathZeroDivisionError; floor_div(MIN, -1) → MathOverflowError
"""

from typing import Final

from src.core.math.errors import MathOverflowError, MathZeroDivisionError


# =============================================================================
# ДИАПАЗОНЫ
# =============================================================================

INT_MIN: Final[int] = -(1 << 31)
INT_MAX: Final[int] = (1 << 31) - 1
LONG_MIN: Final[int] = -(1 << 63)
LONG_MAX: Final[int] = (1 << 63) - 1

_BOUNDS: Final[dict[int, tuple[int, int]]] = {
    32: (INT_MIN, INT_MAX),
    64: (LONG_MIN, LONG_MAX),
}


def _bounds(bits: int) -> tuple[int, int]:
    try:
        return _BOUNDS[bits]
    except KeyError:
        raise ValueError(f"bits must be 32 or 64, got {bits}") from None


def _check_operands(bits: int, *operands: int) -> tuple[int, int]:
    low, high = _bounds(bits)
    for operand in operands:
        if not low <= operand <= high:
            raise ValueError(f"operand {operand} is not a {bits}-bit integer")
    return low, high


def _checked(result: int, bits: int, operation: str) -> int:
    low, high = _bounds(bits)
    if not low <= result <= high:
        raise MathOverflowError(f"{bits}-bit overflow in {operation}")
    return result


# =============================================================================
# ТОЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def add_exact(a: int, b: int, *, bits: int = 64) -> int:
    """
    Сумма a + b без переполнения.

    Args:
        a: Первое слагаемое
        b: Второе слагаемое
        bits: Ширина целого (32 или 64)

    Returns:
        a + b

    Raises:
        MathOverflowError: Если сумма не помещается в bits бит
        ValueError: Если операнд вне диапазона ширины

    Examples:
        >>> add_exact(1, 2)
        3
        >>> add_exact(LONG_MAX, LONG_MAX)
        Traceback (most recent call last):
        ...
        src.core.math.errors.MathOverflowError: 64-bit overflow in add_exact(a, b)
    """
    _check_operands(bits, a, b)
    return _checked(a + b, bits, "add_exact(a, b)")


def subtract_exact(a: int, b: int, *, bits: int = 64) -> int:
    """Разность a - b без переполнения (MathOverflowError иначе)."""
    _check_operands(bits, a, b)
    return _checked(a - b, bits, "subtract_exact(a, b)")


def multiply_exact(a: int, b: int, *, bits: int = 64) -> int:
    """
    Произведение a * b без переполнения.

    Examples:
        >>> multiply_exact(INT_MAX, INT_MAX, bits=32)
        Traceback (most recent call last):
        ...
        src.core.math.errors.MathOverflowError: 32-bit overflow in multiply_exact(a, b)
    """
    _check_operands(bits, a, b)
    return _checked(a * b, bits, "multiply_exact(a, b)")


def increment_exact(a: int, *, bits: int = 64) -> int:
    """a + 1 без переполнения."""
    _check_operands(bits, a)
    return _checked(a + 1, bits, "increment_exact(a)")


def decrement_exact(a: int, *, bits: int = 64) -> int:
    """a - 1 без переполнения."""
    _check_operands(bits, a)
    return _checked(a - 1, bits, "decrement_exact(a)")


def negate_exact(a: int, *, bits: int = 64) -> int:
    """-a без переполнения (-MIN не представимо)."""
    _check_operands(bits, a)
    return _checked(-a, bits, "negate_exact(a)")


def to_int_exact(value: int) -> int:
    """
    Сужение 64-битного значения до 32 бит.

    Raises:
        MathOverflowError: Если value вне [INT_MIN, INT_MAX]
    """
    _check_operands(64, value)
    return _checked(value, 32, "to_int_exact(value)")


# =============================================================================
# FLOOR-ДЕЛЕНИЕ
# =============================================================================


def floor_div(a: int, b: int, *, bits: int = 64) -> int:
    """
    Частное с округлением к -inf.

    Args:
        a: Делимое
        b: Делитель
        bits: Ширина целого (32 или 64)

    Returns:
        floor(a / b)

    Raises:
        MathZeroDivisionError: Если b == 0
        MathOverflowError: Если a == MIN и b == -1

    Examples:
        >>> floor_div(12, 5), floor_div(12, -5), floor_div(-12, 5)
        (2, -3, -3)
    """
    _check_operands(bits, a, b)
    if b == 0:
        raise MathZeroDivisionError("floor_div(a, b) with b = 0 is not defined.")
    return _checked(a // b, bits, "floor_div(a, b)")


def floor_mod(a: int, b: int, *, bits: int = 64) -> int:
    """
    Остаток floor-деления: a - floor_div(a, b) * b, знак совпадает с b.

    Raises:
        MathZeroDivisionError: Если b == 0

    Examples:
        >>> floor_mod(12, 5), floor_mod(12, -5), floor_mod(-12, 5)
        (2, -3, 3)
    """
    _check_operands(bits, a, b)
    if b == 0:
        raise MathZeroDivisionError("floor_mod(a, b) with b = 0 is not defined.")
    return a % b
