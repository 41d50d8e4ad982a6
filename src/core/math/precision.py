"""
Precision — Сравнения с учётом машинной точности и округление

Утилиты для сравнения double с допуском:
- Абсолютный допуск (eps) и допуск в ULP (max_ulps)
- Относительный допуск
- Трёхзначное сравнение с допуском
- Округление до заданного числа знаков через decimal-режимы округления

Порядковое расстояние в ULP считается по монотонной целочисленной
нумерации решётки double, в которой +0.0 и -0.0 совпадают.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN не равен ничему, кроме явных *_including_nan вариантов
2. equals(x, y) всегда истинно для соседних double (1 ULP)
3. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Final

from src.core.math.ieee754 import double_to_bits


# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Машинный эпсилон округления: 2^-53 (половина ulp(1.0))
EPSILON: Final[float] = 2.0**-53

# Минимальное нормализованное число, 1/SAFE_MIN не переполняется
SAFE_MIN: Final[float] = 2.0**-1022

# Допуск по умолчанию для сравнений double
DOUBLE_COMPARISON_EPSILON: Final[float] = 1.0e-14

_SIGN_BIT: Final[int] = 1 << 63


# =============================================================================
# РАССТОЯНИЕ В ULP
# =============================================================================


def _ordinal(value: float) -> int:
    bits = double_to_bits(value)
    if bits & _SIGN_BIT:
        return -(bits & ~_SIGN_BIT)
    return bits


def ulp_distance(x: float, y: float) -> int:
    """
    Число шагов решётки double между x и y.

    Examples:
        >>> ulp_distance(1.0, 1.0000000000000002)
        1
        >>> ulp_distance(-0.0, 0.0)
        0
    """
    if math.isnan(x) or math.isnan(y):
        raise ValueError("ulp distance is not defined for NaN")
    return abs(_ordinal(x) - _ordinal(y))


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def equals_ulps(x: float, y: float, max_ulps: int = 1) -> bool:
    """
    Равенство с точностью до max_ulps шагов решётки.

    Args:
        x: Первое значение
        y: Второе значение
        max_ulps: Допустимое число промежуточных double + 1

    Returns:
        False если хотя бы одно значение NaN
    """
    if math.isnan(x) or math.isnan(y):
        return False
    return ulp_distance(x, y) <= max_ulps


def equals(x: float, y: float, eps: float = 0.0) -> bool:
    """
    Равенство с абсолютным допуском eps либо в пределах 1 ULP.

    Examples:
        >>> equals(1.0, 1.0 + 1e-16)
        True
        >>> equals(1.0, 1.001, 1e-2)
        True
        >>> equals(math.nan, math.nan)
        False
    """
    return equals_ulps(x, y, 1) or abs(y - x) <= eps


def equals_including_nan(x: float, y: float, eps: float = 0.0) -> bool:
    """Как equals, но два NaN считаются равными."""
    if math.isnan(x) or math.isnan(y):
        return math.isnan(x) and math.isnan(y)
    return equals(x, y, eps)


def equals_with_relative_tolerance(x: float, y: float, eps: float) -> bool:
    """
    Равенство с относительным допуском: |x - y| / max(|x|, |y|) <= eps.

    Examples:
        >>> equals_with_relative_tolerance(1e10, 1e10 + 1.0, 1e-9)
        True
    """
    if equals_ulps(x, y, 1):
        return True
    absolute_max = max(abs(x), abs(y))
    relative_difference = abs((x - y) / absolute_max)
    return relative_difference <= eps


def compare_to(x: float, y: float, eps: float = DOUBLE_COMPARISON_EPSILON) -> int:
    """
    Трёхзначное сравнение с допуском.

    Returns:
        0 если equals(x, y, eps), -1 если x < y, +1 иначе
    """
    if equals(x, y, eps):
        return 0
    if x < y:
        return -1
    return 1


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_to_scale(x: float, scale: int, rounding: str = ROUND_HALF_UP) -> float:
    """
    Округление до scale десятичных знаков после запятой.

    Округление выполняется над точным десятичным представлением x,
    поэтому 2.675 (хранится как 2.67499999...) округляется к 2.67.

    Args:
        x: Округляемое значение
        scale: Число знаков после запятой (может быть отрицательным)
        rounding: Режим округления модуля decimal

    Returns:
        Ближайшее к округлённому десятичному значению double;
        NaN и ±inf возвращаются без изменений

    Examples:
        >>> round_to_scale(1.23456789, 2)
        1.23
        >>> round_to_scale(1250.0, -2)
        1300.0
    """
    if not math.isfinite(x):
        return x
    exact = Decimal(x)
    # Точность контекста покрывает все цифры до разряда quantize
    context = Context(prec=max(1, exact.adjusted() + scale + 2), rounding=rounding)
    rounded = exact.quantize(Decimal(1).scaleb(-scale), context=context)
    return math.copysign(float(rounded), x)


def representable_delta(x: float, original_delta: float) -> float:
    """
    Ближайшее к original_delta приращение, точно представимое относительно x.

    Returns:
        (x + original_delta) - x
    """
    return (x + original_delta) - x
