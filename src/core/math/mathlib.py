"""
MathLib — Фасад математических примитивов со сменным бэкендом

Единая точка вызова для всех примитивов. Трансцендентные функции
делегируются активному бэкенду (FASTMATH по умолчанию, MATH — libm),
перед делегированием фасад применяет таблицу ошибок:

- "Тихие" операции (NaN проходит насквозь): minimum/maximum, sinh/cosh/tanh,
  expm1, asin/acos с NaN, floor/ceil, next_after/next_up/next_down, copy_sign
- "Громкие" операции (MathDomainError): NaN на входе log/exp/sin/atan/atan2/...,
  аргумент вне области, pow с NaN/отрицательным основанием и дробным
  показателем, signum(NaN), divide на ±0 или с NaN

Выбор бэкенда:
- set_math_library(kind): процессный default под блокировкой; вызывается
  один раз до конкурентного использования
- use_math_library(kind): переопределение в пределах текущего потока или
  asyncio-задачи через contextvars; другие потоки его не видят
- Default при импорте берётся из MathLibConfig.from_env()

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Таблица ошибок задана явно для каждой операции, а не общим правилом
2. pow(x, ±0) == 1.0 для любого x, pow(1, y) == 1.0 для любого y
3. divide(4.0, 3.0) == 4.0 / 3.0; делитель ±0 всегда отвергается
4. Битовые и целочисленные операции не зависят от бэкенда
"""

import math
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Final, Iterator

from src.core.logging_config import get_logger
from src.core.math import fastmath, ieee754
from src.core.math.backends import MathLibrary, MathLibraryType, create_math_library
from src.core.math.config import MathLibConfig
from src.core.math.errors import (
    MathDomainError,
    MathZeroDivisionError,
    nan_input,
    out_of_domain,
)
from src.core.math.exact_arithmetic import (
    INT_MAX,
    INT_MIN,
    LONG_MAX,
    LONG_MIN,
    add_exact,
    decrement_exact,
    floor_div,
    floor_mod,
    increment_exact,
    multiply_exact,
    negate_exact,
    subtract_exact,
    to_int_exact,
)
from src.core.math.ieee754 import (
    DOUBLE_MAX_VALUE,
    DOUBLE_MIN_NORMAL,
    DOUBLE_MIN_VALUE,
    FLOAT_MAX_VALUE,
    FLOAT_MIN_NORMAL,
    FLOAT_MIN_VALUE,
    copy_sign,
    copy_sign_float,
    get_exponent,
    get_exponent_float,
    maximum,
    maximum_float,
    minimum,
    minimum_float,
    next_after,
    next_after_float,
    next_down,
    next_down_float,
    next_up,
    next_up_float,
    to_float32,
)

__all__ = [
    # Константы
    "PI",
    "E",
    "CONFIG",
    "DOUBLE_MAX_VALUE",
    "DOUBLE_MIN_NORMAL",
    "DOUBLE_MIN_VALUE",
    "FLOAT_MAX_VALUE",
    "FLOAT_MIN_NORMAL",
    "FLOAT_MIN_VALUE",
    "INT_MAX",
    "INT_MIN",
    "LONG_MAX",
    "LONG_MIN",
    # Выбор бэкенда
    "MathLibraryType",
    "set_math_library",
    "get_math_library",
    "use_math_library",
    # Экспонента, логарифмы, степени
    "sqrt",
    "cbrt",
    "exp",
    "expm1",
    "log",
    "log10",
    "log1p",
    "log_base",
    "pow",
    "hypot",
    # Тригонометрия
    "sin",
    "cos",
    "tan",
    "sin_and_cos",
    "asin",
    "acos",
    "atan",
    "atan2",
    "to_radians",
    "to_degrees",
    # Гиперболические функции
    "sinh",
    "cosh",
    "tanh",
    "sinh_and_cosh",
    "asinh",
    "acosh",
    "atanh",
    # Арифметика и округление
    "ieee_remainder",
    "divide",
    "fabs",
    "floor",
    "ceil",
    "rint",
    "round_to_long",
    # Битовые операции
    "ulp",
    "ulp_float",
    "scalb",
    "scalb_float",
    "signum",
    "signum_float",
    "copy_sign",
    "copy_sign_float",
    "get_exponent",
    "get_exponent_float",
    "maximum",
    "maximum_float",
    "minimum",
    "minimum_float",
    "next_after",
    "next_after_float",
    "next_down",
    "next_down_float",
    "next_up",
    "next_up_float",
    "to_float32",
    # Точная целочисленная арифметика
    "add_exact",
    "subtract_exact",
    "multiply_exact",
    "increment_exact",
    "decrement_exact",
    "negate_exact",
    "to_int_exact",
    "floor_div",
    "floor_mod",
]

logger = get_logger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

PI: Final[float] = fastmath.PI
E: Final[float] = fastmath.E

# Конфигурация читается один раз при импорте
CONFIG: Final[MathLibConfig] = MathLibConfig.from_env()


# =============================================================================
# ВЫБОР БЭКЕНДА
# =============================================================================

_library_lock = threading.Lock()
_default_library: MathLibrary = create_math_library(CONFIG.library)
_library_override: ContextVar[MathLibrary | None] = ContextVar(
    "math_library_override", default=None
)


def set_math_library(kind: "MathLibraryType | str | MathLibrary") -> MathLibrary:
    """
    Установка процессного бэкенда по умолчанию.

    Args:
        kind: Тип, имя или объект бэкенда

    Returns:
        Установленный бэкенд

    Raises:
        ValueError: Если имя бэкенда неизвестно
    """
    global _default_library
    library = create_math_library(kind)
    with _library_lock:
        previous = _default_library
        _default_library = library
    logger.info("Math library set to %s (was %s)", library.name, previous.name)
    return library


def get_math_library() -> MathLibrary:
    """Бэкенд, действующий в текущем контексте."""
    override = _library_override.get()
    if override is not None:
        return override
    return _default_library


@contextmanager
def use_math_library(kind: "MathLibraryType | str | MathLibrary") -> Iterator[MathLibrary]:
    """
    Временное переопределение бэкенда для текущего потока/задачи.

    Examples:
        >>> with use_math_library("MATH"):
        ...     get_math_library().name
        'MATH'
    """
    library = create_math_library(kind)
    token = _library_override.set(library)
    logger.debug("Math library overridden with %s in current context", library.name)
    try:
        yield library
    finally:
        _library_override.reset(token)


# =============================================================================
# GUARDS
# =============================================================================


def _reject_nan(operation: str, *values: float) -> None:
    for value in values:
        if isinstance(value, float) and math.isnan(value):
            raise nan_input(operation)


# =============================================================================
# КОРНИ, ЭКСПОНЕНТА, ЛОГАРИФМЫ
# =============================================================================


def sqrt(x: float) -> float:
    """Квадратный корень; NaN и x < 0 → MathDomainError."""
    _reject_nan("sqrt(x)", x)
    if x < 0.0:
        raise out_of_domain("sqrt(x)", "x < 0")
    return get_math_library().sqrt(x)


def cbrt(x: float) -> float:
    """Кубический корень; NaN → MathDomainError."""
    _reject_nan("cbrt(x)", x)
    return get_math_library().cbrt(x)


def exp(x: float) -> float:
    """Экспонента; NaN → MathDomainError."""
    _reject_nan("exp(x)", x)
    return get_math_library().exp(x)


def expm1(x: float) -> float:
    """e^x - 1; NaN → NaN."""
    return get_math_library().expm1(x)


def log(x: float) -> float:
    """Натуральный логарифм; NaN и x < 0 → MathDomainError, log(±0) == -inf."""
    _reject_nan("log(x)", x)
    if x < 0.0:
        raise out_of_domain("log(x)", "x < 0")
    return get_math_library().log(x)


def log10(x: float) -> float:
    """Десятичный логарифм; NaN и x < 0 → MathDomainError."""
    _reject_nan("log10(x)", x)
    if x < 0.0:
        raise out_of_domain("log10(x)", "x < 0")
    return get_math_library().log10(x)


def log1p(x: float) -> float:
    """log(1 + x); NaN и x < -1 → MathDomainError."""
    _reject_nan("log1p(x)", x)
    if x < -1.0:
        raise out_of_domain("log1p(x)", "x < -1")
    return get_math_library().log1p(x)


def log_base(base: float, x: float) -> float:
    """
    Логарифм x по основанию base.

    Raises:
        MathDomainError: NaN, отрицательный аргумент или неопределённая
            форма (log_base(0, 0), log_base(1, 1), ∞/∞)
    """
    _reject_nan("log(base, x)", base, x)
    if base < 0.0:
        raise out_of_domain("log(base, x)", "base < 0")
    if x < 0.0:
        raise out_of_domain("log(base, x)", "x < 0")
    return get_math_library().log_base(base, x)


def pow(x: float, y: float | int) -> float:
    """
    x^y с таблицей ошибок фасада.

    Таблица (в порядке проверки):
    1. y == ±0 → 1.0, в том числе для NaN x
    2. x == 1 → 1.0, в том числе для NaN и ±inf y
    3. NaN в любом аргументе → MathDomainError
    4. x == -1 и y == ±inf → MathDomainError
    5. Конечный x < 0 и конечный нецелый y → MathDomainError
    6. Иначе делегирование бэкенду (полная таблица IEEE)

    Examples:
        >>> pow(math.nan, 0.0)
        1.0
        >>> pow(1.0, math.nan)
        1.0
    """
    if y == 0:
        return 1.0
    if x == 1.0:
        return 1.0
    _reject_nan("pow(x, y)", x, y)
    y_is_float = isinstance(y, float)
    if x == -1.0 and y_is_float and math.isinf(y):
        raise out_of_domain("pow(x, y)", "x = -1 and y = ±inf")
    if (
        x < 0.0
        and math.isfinite(x)
        and y_is_float
        and math.isfinite(y)
        and not ieee754.is_mathematical_integer(y)
    ):
        raise out_of_domain("pow(x, y)", "x < 0 and non-integer y")
    return get_math_library().pow(x, y)


# =============================================================================
# ТРИГОНОМЕТРИЯ
# =============================================================================


def _reject_nan_or_infinite(operation: str, x: float) -> None:
    _reject_nan(operation, x)
    if math.isinf(x):
        raise out_of_domain(operation, "x = ±inf")


def sin(x: float) -> float:
    """Синус; NaN и ±inf → MathDomainError."""
    _reject_nan_or_infinite("sin(x)", x)
    return get_math_library().sin(x)


def cos(x: float) -> float:
    """Косинус; NaN и ±inf → MathDomainError."""
    _reject_nan_or_infinite("cos(x)", x)
    return get_math_library().cos(x)


def tan(x: float) -> float:
    """Тангенс; NaN и ±inf → MathDomainError."""
    _reject_nan_or_infinite("tan(x)", x)
    return get_math_library().tan(x)


def sin_and_cos(x: float) -> tuple[float, float]:
    """(sin x, cos x); NaN и ±inf → MathDomainError."""
    _reject_nan_or_infinite("sinAndCos(x)", x)
    return get_math_library().sin_and_cos(x)


def asin(x: float) -> float:
    """Арксинус; NaN → NaN, |x| > 1 → MathDomainError."""
    if abs(x) > 1.0:
        raise out_of_domain("asin(x)", "|x| > 1")
    return get_math_library().asin(x)


def acos(x: float) -> float:
    """Арккосинус; NaN → NaN, |x| > 1 → MathDomainError."""
    if abs(x) > 1.0:
        raise out_of_domain("acos(x)", "|x| > 1")
    return get_math_library().acos(x)


def atan(x: float) -> float:
    """Арктангенс; NaN → MathDomainError."""
    _reject_nan("atan(x)", x)
    return get_math_library().atan(x)


def atan2(y: float, x: float) -> float:
    """Угол точки (x, y); NaN в любом аргументе → MathDomainError."""
    _reject_nan("atan2(y, x)", y, x)
    return get_math_library().atan2(y, x)


# =============================================================================
# ГИПЕРБОЛИЧЕСКИЕ ФУНКЦИИ
# =============================================================================


def sinh(x: float) -> float:
    """Гиперболический синус; NaN → NaN."""
    return get_math_library().sinh(x)


def cosh(x: float) -> float:
    """Гиперболический косинус; NaN → NaN."""
    return get_math_library().cosh(x)


def tanh(x: float) -> float:
    """Гиперболический тангенс; NaN → NaN."""
    return get_math_library().tanh(x)


def sinh_and_cosh(x: float) -> tuple[float, float]:
    """(sinh x, cosh x); NaN → (NaN, NaN)."""
    return get_math_library().sinh_and_cosh(x)


def asinh(x: float) -> float:
    """Обратный гиперболический синус; NaN → MathDomainError."""
    _reject_nan("asinh(x)", x)
    return get_math_library().asinh(x)


def acosh(x: float) -> float:
    """Обратный гиперболический косинус; NaN и x < 1 → MathDomainError."""
    _reject_nan("acosh(x)", x)
    if x < 1.0:
        raise out_of_domain("acosh(x)", "x < 1")
    return get_math_library().acosh(x)


def atanh(x: float) -> float:
    """Обратный гиперболический тангенс; NaN и |x| > 1 → MathDomainError."""
    _reject_nan("atanh(x)", x)
    if abs(x) > 1.0:
        raise out_of_domain("atanh(x)", "|x| > 1")
    return get_math_library().atanh(x)


# =============================================================================
# ПРОЧИЕ ОПЕРАЦИИ
# =============================================================================


def hypot(x: float, y: float) -> float:
    """sqrt(x² + y²); NaN → MathDomainError."""
    _reject_nan("hypot(x, y)", x, y)
    return get_math_library().hypot(x, y)


def ieee_remainder(x: float, y: float) -> float:
    """
    Остаток IEEE-754.

    Raises:
        MathDomainError: Если результат NaN (NaN на входе, x == ±inf, y == ±0)
    """
    result = fastmath.ieee_remainder(x, y)
    if math.isnan(result):
        raise MathDomainError("IEEEremainder(x, y) result is NaN.")
    return result


def divide(x: float, y: float) -> float:
    """
    Строгое деление: x / y без молчаливых ±inf/NaN от нулевого делителя.

    Raises:
        MathDomainError: Если x или y NaN
        MathZeroDivisionError: Если y == ±0

    Examples:
        >>> divide(4.0, 3.0) == 4.0 / 3.0
        True
    """
    _reject_nan("divide(x, y)", x, y)
    if y == 0.0:
        raise MathZeroDivisionError("divide(x, y) with y = 0 is not defined.")
    return x / y


def fabs(x: float) -> float:
    """Модуль; NaN → MathDomainError."""
    _reject_nan("abs(x)", x)
    return fastmath.fabs(x)


def floor(x: float) -> float:
    """Наибольшее целое <= x; NaN → NaN."""
    return fastmath.floor(x)


def ceil(x: float) -> float:
    """Наименьшее целое >= x; NaN → NaN."""
    return fastmath.ceil(x)


def rint(x: float) -> float:
    """Ближайшее целое (ties-to-even); NaN → MathDomainError."""
    _reject_nan("rint(x)", x)
    return fastmath.rint(x)


def round_to_long(x: float) -> int:
    """floor(x + 0.5) как long; NaN → MathDomainError."""
    _reject_nan("round(x)", x)
    return fastmath.round_to_long(x)


def to_radians(x: float) -> float:
    """Градусы → радианы; NaN → MathDomainError."""
    _reject_nan("toRadians(x)", x)
    return fastmath.to_radians(x)


def to_degrees(x: float) -> float:
    """Радианы → градусы; NaN → MathDomainError."""
    _reject_nan("toDegrees(x)", x)
    return fastmath.to_degrees(x)


def ulp(x: float) -> float:
    """ulp(x) для double; NaN → MathDomainError."""
    _reject_nan("ulp(x)", x)
    return ieee754.ulp(x)


def ulp_float(x: float) -> float:
    """ulp(x) для binary32; NaN → MathDomainError."""
    _reject_nan("ulp(x)", x)
    return ieee754.ulp_float(x)


def scalb(x: float, scale: int) -> float:
    """x·2^scale для double; NaN → MathDomainError."""
    _reject_nan("scalb(x, n)", x)
    return ieee754.scalb(x, scale)


def scalb_float(x: float, scale: int) -> float:
    """x·2^scale для binary32; NaN → MathDomainError."""
    _reject_nan("scalb(x, n)", x)
    return ieee754.scalb_float(x, scale)


def signum(x: float) -> float:
    """Знак числа; NaN → MathDomainError."""
    _reject_nan("signum(x)", x)
    return ieee754.signum(x)


def signum_float(x: float) -> float:
    """Знак числа binary32; NaN → MathDomainError."""
    _reject_nan("signum(x)", x)
    return ieee754.signum_float(x)
