"""
Math Backends — Сменные реализации трансцендентных функций

Два встроенных бэкенда:
- FASTMATH: корректно округлённое ядро fastmath (по умолчанию)
- MATH: платформенная libm через модуль math; исключения Python
  (ValueError, OverflowError) переводятся обратно в значения IEEE

Бэкенд определяет только трансцендентные и гиперболические функции.
Битовые операции, точная целочисленная арифметика и округления
от бэкенда не зависят.

Пользовательский бэкенд — любой объект, удовлетворяющий протоколу
MathLibrary (структурная типизация).
"""

import math
from enum import Enum
from typing import Protocol, runtime_checkable

from src.core.math import fastmath
from src.core.math.ieee754 import NAN


# =============================================================================
# ENUMS
# =============================================================================


class MathLibraryType(str, Enum):
    """
    Тип встроенного бэкенда.

    FASTMATH: корректно округлённое ядро
    MATH: платформенная libm
    """

    FASTMATH = "FASTMATH"
    MATH = "MATH"


# =============================================================================
# PROTOCOL
# =============================================================================


@runtime_checkable
class MathLibrary(Protocol):
    """Контракт бэкенда: тихие функции IEEE над double."""

    name: str

    def sqrt(self, x: float) -> float: ...
    def cbrt(self, x: float) -> float: ...
    def exp(self, x: float) -> float: ...
    def expm1(self, x: float) -> float: ...
    def log(self, x: float) -> float: ...
    def log10(self, x: float) -> float: ...
    def log1p(self, x: float) -> float: ...
    def log_base(self, base: float, x: float) -> float: ...
    def pow(self, x: float, y: float) -> float: ...
    def sin(self, x: float) -> float: ...
    def cos(self, x: float) -> float: ...
    def tan(self, x: float) -> float: ...
    def asin(self, x: float) -> float: ...
    def acos(self, x: float) -> float: ...
    def atan(self, x: float) -> float: ...
    def atan2(self, y: float, x: float) -> float: ...
    def sinh(self, x: float) -> float: ...
    def cosh(self, x: float) -> float: ...
    def tanh(self, x: float) -> float: ...
    def asinh(self, x: float) -> float: ...
    def acosh(self, x: float) -> float: ...
    def atanh(self, x: float) -> float: ...
    def hypot(self, x: float, y: float) -> float: ...
    def sin_and_cos(self, x: float) -> tuple[float, float]: ...
    def sinh_and_cosh(self, x: float) -> tuple[float, float]: ...


# =============================================================================
# FASTMATH
# =============================================================================


class FastMathLibrary:
    """Бэкенд на корректно округлённом ядре fastmath."""

    name = MathLibraryType.FASTMATH.value

    sqrt = staticmethod(fastmath.sqrt)
    cbrt = staticmethod(fastmath.cbrt)
    exp = staticmethod(fastmath.exp)
    expm1 = staticmethod(fastmath.expm1)
    log = staticmethod(fastmath.log)
    log10 = staticmethod(fastmath.log10)
    log1p = staticmethod(fastmath.log1p)
    log_base = staticmethod(fastmath.log_base)
    pow = staticmethod(fastmath.pow)
    sin = staticmethod(fastmath.sin)
    cos = staticmethod(fastmath.cos)
    tan = staticmethod(fastmath.tan)
    asin = staticmethod(fastmath.asin)
    acos = staticmethod(fastmath.acos)
    atan = staticmethod(fastmath.atan)
    atan2 = staticmethod(fastmath.atan2)
    sinh = staticmethod(fastmath.sinh)
    cosh = staticmethod(fastmath.cosh)
    tanh = staticmethod(fastmath.tanh)
    asinh = staticmethod(fastmath.asinh)
    acosh = staticmethod(fastmath.acosh)
    atanh = staticmethod(fastmath.atanh)
    hypot = staticmethod(fastmath.hypot)
    sin_and_cos = staticmethod(fastmath.sin_and_cos)
    sinh_and_cosh = staticmethod(fastmath.sinh_and_cosh)

    def __repr__(self) -> str:
        return "FastMathLibrary()"


# =============================================================================
# PLATFORM LIBM
# =============================================================================


class StdMathLibrary:
    """
    Бэкенд на платформенной libm (модуль math).

    Модуль math бросает ValueError вне области определения и OverflowError
    при переполнении; здесь они переводятся в NaN и ±inf соответственно.
    """

    name = MathLibraryType.MATH.value

    @staticmethod
    def sqrt(x: float) -> float:
        if x < 0.0:
            return NAN
        return math.sqrt(x)

    @staticmethod
    def cbrt(x: float) -> float:
        return math.cbrt(x)

    @staticmethod
    def exp(x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError:
            return math.inf

    @staticmethod
    def expm1(x: float) -> float:
        try:
            return math.expm1(x)
        except OverflowError:
            return math.inf

    @staticmethod
    def log(x: float) -> float:
        if x == 0.0:
            return -math.inf
        if x < 0.0:
            return NAN
        return math.log(x)

    @staticmethod
    def log10(x: float) -> float:
        if x == 0.0:
            return -math.inf
        if x < 0.0:
            return NAN
        return math.log10(x)

    @staticmethod
    def log1p(x: float) -> float:
        if x == -1.0:
            return -math.inf
        if x < -1.0:
            return NAN
        return math.log1p(x)

    @staticmethod
    def log_base(base: float, x: float) -> float:
        return fastmath.log_quotient(StdMathLibrary.log(x), StdMathLibrary.log(base))

    @staticmethod
    def pow(x: float, y: float) -> float:
        special = fastmath.pow_special_value(x, y)
        if special is not None:
            return special
        try:
            return math.pow(x, y)
        except OverflowError:
            negative = x < 0.0 and math.pow(-1.0, y) < 0.0
            return -math.inf if negative else math.inf

    @staticmethod
    def sin(x: float) -> float:
        if math.isinf(x):
            return NAN
        return math.sin(x)

    @staticmethod
    def cos(x: float) -> float:
        if math.isinf(x):
            return NAN
        return math.cos(x)

    @staticmethod
    def tan(x: float) -> float:
        if math.isinf(x):
            return NAN
        return math.tan(x)

    @staticmethod
    def asin(x: float) -> float:
        if abs(x) > 1.0:
            return NAN
        return math.asin(x)

    @staticmethod
    def acos(x: float) -> float:
        if abs(x) > 1.0:
            return NAN
        return math.acos(x)

    @staticmethod
    def atan(x: float) -> float:
        return math.atan(x)

    @staticmethod
    def atan2(y: float, x: float) -> float:
        return math.atan2(y, x)

    @staticmethod
    def sinh(x: float) -> float:
        try:
            return math.sinh(x)
        except OverflowError:
            return math.copysign(math.inf, x)

    @staticmethod
    def cosh(x: float) -> float:
        try:
            return math.cosh(x)
        except OverflowError:
            return math.inf

    @staticmethod
    def tanh(x: float) -> float:
        return math.tanh(x)

    @staticmethod
    def asinh(x: float) -> float:
        return math.asinh(x)

    @staticmethod
    def acosh(x: float) -> float:
        if x < 1.0:
            return NAN
        return math.acosh(x)

    @staticmethod
    def atanh(x: float) -> float:
        if abs(x) == 1.0:
            return math.copysign(math.inf, x)
        if abs(x) > 1.0:
            return NAN
        return math.atanh(x)

    @staticmethod
    def hypot(x: float, y: float) -> float:
        return math.hypot(x, y)

    @staticmethod
    def sin_and_cos(x: float) -> tuple[float, float]:
        return StdMathLibrary.sin(x), StdMathLibrary.cos(x)

    @staticmethod
    def sinh_and_cosh(x: float) -> tuple[float, float]:
        return StdMathLibrary.sinh(x), StdMathLibrary.cosh(x)

    def __repr__(self) -> str:
        return "StdMathLibrary()"


# =============================================================================
# FACTORY
# =============================================================================

_BUILTIN_LIBRARIES: dict[MathLibraryType, type] = {
    MathLibraryType.FASTMATH: FastMathLibrary,
    MathLibraryType.MATH: StdMathLibrary,
}


def create_math_library(kind: "MathLibraryType | str | MathLibrary") -> MathLibrary:
    """
    Создание бэкенда по типу, имени или готовому объекту.

    Args:
        kind: MathLibraryType, его строковое имя (регистр не важен)
            или объект, удовлетворяющий протоколу MathLibrary

    Returns:
        Экземпляр бэкенда

    Raises:
        ValueError: Если имя не соответствует встроенному бэкенду
        TypeError: Если объект не удовлетворяет протоколу MathLibrary

    Examples:
        >>> create_math_library("fastmath")
        FastMathLibrary()
        >>> create_math_library(MathLibraryType.MATH)
        StdMathLibrary()
    """
    if isinstance(kind, str):
        try:
            kind = MathLibraryType(kind.upper())
        except ValueError:
            valid = ", ".join(member.value for member in MathLibraryType)
            raise ValueError(f"Unknown math library '{kind}', expected one of: {valid}") from None
        return _BUILTIN_LIBRARIES[kind]()

    if isinstance(kind, MathLibrary):
        return kind

    raise TypeError(f"{type(kind).__name__} does not implement the MathLibrary protocol")
