"""
FastMath — Ядро расширенных математических примитивов

Корректно округлённые реализации трансцендентных функций для binary64.
Каждая функция вычисляет результат с запасом точности и округляет его
к ближайшему double ровно один раз:
- Экспонента и логарифмы: модуль decimal (40 значащих цифр + компенсация
  сокращения для expm1/log1p/sinh/tanh/asinh/atanh)
- Тригонометрия и обратная тригонометрия: двоичная фиксированная точка
  на целых Python (200 дробных бит), точная редукция аргумента по π/2
  для любых конечных аргументов
- pow с целым показателем, cbrt: точные целочисленные вычисления
  с финальным округлением делением int/int

Ядро "тихое" в смысле IEEE: NaN проходит насквозь, аргументы вне области
дают NaN. Исключения поднимают только log/log10/log1p/sqrt/acosh/atanh
вне области определения и log_base на неопределённых формах.
Таблицы громких/тихих ошибок применяет фасад (mathlib).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Особые значения pow и atan2 заданы явными таблицами ветвлений
2. ±0 сохраняет знак в sin, tan, asin, atan, sinh, tanh, asinh, atanh, cbrt
3. tanh(x) == ±1.0 точно при |x| > 20
4. exp(-745.1332191019411) == MIN_VALUE, exp(-745.1332191019412) == 0.0
5. Результаты детерминированы и не зависят от платформенной libm
"""

import math
from decimal import ROUND_HALF_EVEN, Context, Decimal
from functools import lru_cache
from typing import Final

from src.core.math.errors import MathDomainError, nan_input, out_of_domain
from src.core.math.ieee754 import NAN, is_mathematical_integer


# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Значащие цифры decimal для семейства exp/log
DECIMAL_DIGITS: Final[int] = 40

# Дробные биты фиксированной точки для тригонометрии
FIXED_POINT_BITS: Final[int] = 200

# Запас бит π: редукция аргумента порядка 2^1024 с точностью FIXED_POINT_BITS
_PI_BITS: Final[int] = 1400

# Ниже этого порога f(x) округляется к x (или к 1.0 для cos/cosh):
# поправка x³/6 меньше четверти ulp
TINY_ARGUMENT: Final[float] = 2.0**-27

# Ниже этого порога exp(x) == 1.0, а expm1(x) и log1p(x) == x
NEGLIGIBLE_ARGUMENT: Final[float] = 2.0**-54

# Границы переполнения и исчезновения порядка для exp
EXP_OVERFLOW_BOUND: Final[float] = 710.0
EXP_UNDERFLOW_BOUND: Final[float] = -746.0

# expm1(x) округляется к -1.0 при x < -40
EXPM1_SATURATION_BOUND: Final[float] = -40.0

# sinh/cosh переполняются при |x| > 711
HYPERBOLIC_OVERFLOW_BOUND: Final[float] = 711.0

# tanh насыщается до ±1.0 за этой границей
TANH_SATURATION_BOUND: Final[float] = 20.0

# Граница точного пути pow с целым показателем
EXACT_POW_EXPONENT_LIMIT: Final[int] = 1024


# =============================================================================
# DECIMAL-КОНТЕКСТ
# =============================================================================


def _context(digits: int = DECIMAL_DIGITS) -> Context:
    # Ловушки отключены: переполнение даёт Infinity, исчезновение порядка 0
    return Context(prec=digits, rounding=ROUND_HALF_EVEN, traps=[])


def _cancellation_digits(value: float) -> int:
    """Число десятичных порядков, теряемых при вычитании 1 из 1 + O(value)."""
    return max(0, -Decimal(value).adjusted())


# =============================================================================
# ФИКСИРОВАННАЯ ТОЧКА
# =============================================================================


def _split(value: float) -> tuple[int, int]:
    """value = mantissa·2^exponent с 53-битной знаковой целой мантиссой."""
    fraction, exponent = math.frexp(value)
    return int(fraction * (1 << 53)), exponent - 53


def _to_fixed(value: float) -> int:
    """floor(value·2^FIXED_POINT_BITS); точно при |value| >= 2^-147."""
    mantissa, exponent = _split(value)
    shift = exponent + FIXED_POINT_BITS
    if shift >= 0:
        return mantissa << shift
    return mantissa >> -shift


def _from_fixed(value: int) -> float:
    # int / int округляется корректно (ties-to-even)
    return value / (1 << FIXED_POINT_BITS)


def _arctan_reciprocal(n: int, bits: int) -> int:
    """atan(1/n)·2^bits рядом Грегори."""
    power = (1 << bits) // n
    square = n * n
    total = 0
    k = 1
    sign = 1
    while power:
        total += sign * (power // k)
        power //= square
        k += 2
        sign = -sign
    return total


@lru_cache(maxsize=1)
def _pi_scaled() -> int:
    """π·2^_PI_BITS по формуле Мэчина."""
    guard = 32
    bits = _PI_BITS + guard
    pi = 4 * (4 * _arctan_reciprocal(5, bits) - _arctan_reciprocal(239, bits))
    return pi >> guard


def _pi_fixed(bits: int = FIXED_POINT_BITS) -> int:
    """π·2^bits для bits <= _PI_BITS."""
    return _pi_scaled() >> (_PI_BITS - bits)


def _half_pi_fixed() -> int:
    return _pi_fixed(FIXED_POINT_BITS - 1)


# =============================================================================
# КОНСТАНТЫ (корректно округлённые)
# =============================================================================

PI: Final[float] = _from_fixed(_pi_fixed())
HALF_PI: Final[float] = _from_fixed(_half_pi_fixed())
QUARTER_PI: Final[float] = _from_fixed(_pi_fixed(FIXED_POINT_BITS - 2))
THREE_QUARTER_PI: Final[float] = _from_fixed(3 * _pi_fixed(FIXED_POINT_BITS - 2))
E: Final[float] = float(_context().exp(Decimal(1)))


# =============================================================================
# КВАДРАТНЫЙ И КУБИЧЕСКИЙ КОРНИ
# =============================================================================


def sqrt(x: float) -> float:
    """
    Квадратный корень (IEEE-754 корректно округлён).

    Raises:
        MathDomainError: Если x < 0
    """
    if x < 0.0:
        raise out_of_domain("sqrt(x)", "x < 0")
    return math.sqrt(x)


def _integer_cube_root(n: int) -> int:
    """floor(n^(1/3)) методом Ньютона с начальным приближением сверху."""
    root = 1 << ((n.bit_length() + 2) // 3)
    while True:
        candidate = (2 * root + n // (root * root)) // 3
        if candidate >= root:
            return root
        root = candidate


def cbrt(x: float) -> float:
    """
    Кубический корень, корректно округлённый.

    Мантисса сдвигается так, чтобы порядок делился на 3, а целый корень
    имел не менее 60 бит; неточность корня учитывается sticky-битом.

    Examples:
        >>> cbrt(27.0)
        3.0
        >>> cbrt(-8.0)
        -2.0
    """
    if x == 0.0 or not math.isfinite(x):
        return x

    mantissa, exponent = _split(abs(x))
    shift = 180 + (exponent - 180) % 3
    scaled = mantissa << shift
    root = _integer_cube_root(scaled)
    sticky = 1 if root * root * root != scaled else 0
    magnitude = math.ldexp(float(2 * root + sticky), (exponent - shift) // 3 - 1)
    return math.copysign(magnitude, x)


# =============================================================================
# ЭКСПОНЕНТА И ЛОГАРИФМЫ
# =============================================================================


def exp(x: float) -> float:
    """
    Экспонента e^x.

    Returns:
        NaN для NaN, +inf при x > 710, 0.0 при x < -746 (включая -inf)

    Examples:
        >>> exp(0.0)
        1.0
        >>> exp(-745.1332191019411)
        5e-324
    """
    if math.isnan(x):
        return NAN
    if x > EXP_OVERFLOW_BOUND:
        return math.inf
    if x < EXP_UNDERFLOW_BOUND:
        return 0.0
    if abs(x) < NEGLIGIBLE_ARGUMENT:
        return 1.0
    return float(_context().exp(Decimal(x)))


def expm1(x: float) -> float:
    """
    e^x - 1 без потери точности вблизи нуля.

    Returns:
        NaN для NaN, +inf при переполнении, -1.0 для x < -40
    """
    if math.isnan(x):
        return NAN
    if x > EXP_OVERFLOW_BOUND:
        return math.inf
    if x < EXPM1_SATURATION_BOUND:
        return -1.0
    if abs(x) < NEGLIGIBLE_ARGUMENT:
        return x
    context = _context(DECIMAL_DIGITS + _cancellation_digits(x))
    return float(context.subtract(context.exp(Decimal(x)), 1))


def log(x: float) -> float:
    """
    Натуральный логарифм.

    Returns:
        -inf для ±0, +inf для +inf

    Raises:
        MathDomainError: Если x NaN или x < 0

    Examples:
        >>> log(1.0)
        0.0
        >>> log(5e-324)
        -744.4400719213812
    """
    if math.isnan(x):
        raise nan_input("log(x)")
    if x < 0.0:
        raise out_of_domain("log(x)", "x < 0")
    if x == 0.0:
        return -math.inf
    if math.isinf(x):
        return math.inf
    if x == 1.0:
        return 0.0
    return float(_context().ln(Decimal(x)))


def log10(x: float) -> float:
    """
    Десятичный логарифм; точен на степенях 10.

    Raises:
        MathDomainError: Если x NaN или x < 0
    """
    if math.isnan(x):
        raise nan_input("log10(x)")
    if x < 0.0:
        raise out_of_domain("log10(x)", "x < 0")
    if x == 0.0:
        return -math.inf
    if math.isinf(x):
        return math.inf
    return float(_context().log10(Decimal(x)))


def log1p(x: float) -> float:
    """
    log(1 + x) без потери точности вблизи нуля.

    Returns:
        -inf для x == -1, +inf для +inf

    Raises:
        MathDomainError: Если x NaN или x < -1
    """
    if math.isnan(x):
        raise nan_input("log1p(x)")
    if x < -1.0:
        raise out_of_domain("log1p(x)", "x < -1")
    if x == -1.0:
        return -math.inf
    if math.isinf(x):
        return math.inf
    if abs(x) < NEGLIGIBLE_ARGUMENT:
        return x
    context = _context(DECIMAL_DIGITS + _cancellation_digits(x))
    return float(context.ln(context.add(1, Decimal(x))))


def log_quotient(numerator: float, denominator: float) -> float:
    """
    Частное логарифмов log(x)/log(base) с отказом на неопределённых формах.

    Args:
        numerator: log(x)
        denominator: log(base)

    Returns:
        ±inf при denominator == 0 и ненулевом numerator,
        иначе numerator / denominator

    Raises:
        MathDomainError: Для форм ∞/∞ и 0/0
    """
    if math.isinf(numerator) and math.isinf(denominator):
        raise MathDomainError("log(base, x) is indeterminate: both logarithms are infinite.")
    if denominator == 0.0:
        if numerator == 0.0:
            raise MathDomainError("log(base, x) is indeterminate: log(1)/log(1).")
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def log_base(base: float, x: float) -> float:
    """
    Логарифм x по основанию base.

    Examples:
        >>> log_base(2.0, 8.0)
        3.0
        >>> log_base(10.0, 0.0)
        -inf

    Raises:
        MathDomainError: NaN или отрицательный аргумент; log_base(0, 0),
            log_base(1, 1) и другие неопределённые формы
    """
    numerator = log(x)
    denominator = log(base)
    if (
        math.isfinite(numerator)
        and math.isfinite(denominator)
        and numerator != 0.0
        and denominator != 0.0
    ):
        context = _context()
        return float(context.divide(context.ln(Decimal(x)), context.ln(Decimal(base))))
    return log_quotient(numerator, denominator)


# =============================================================================
# POW
# =============================================================================


def _is_integral(y: float | int) -> bool:
    return isinstance(y, int) or is_mathematical_integer(y)


def _is_odd_integer(y: float | int) -> bool:
    if isinstance(y, int):
        return y % 2 == 1
    # Все double с модулем >= 2^53 чётны
    return is_mathematical_integer(y) and abs(y) < 2.0**53 and int(y) % 2 == 1


def pow_special_value(x: float, y: float | int) -> float | None:
    """
    Значение pow(x, y) из таблицы особых случаев.

    Таблица (в порядке проверки):
    1. y == ±0 → 1.0 для любого x, включая NaN
    2. x == 1 → 1.0 для любого y, включая NaN и ±inf
    3. NaN в любом аргументе → NaN
    4. y == ±inf: |x| == 1 → 1.0; |x| > 1 → +inf/0; |x| < 1 → 0/+inf
    5. x == ±0: знак результата по нечётности целого y
    6. x == ±inf: знак результата по нечётности целого y
    7. Конечный x < 0 и нецелый y → NaN

    Args:
        x: Основание
        y: Показатель (float или точный int)

    Returns:
        Значение из таблицы или None для общего случая
        (x конечен и ненулевой, y конечен и ненулевой)
    """
    if y == 0:
        return 1.0
    if x == 1.0:
        return 1.0
    y_is_float = isinstance(y, float)
    if math.isnan(x) or (y_is_float and math.isnan(y)):
        return NAN

    if y_is_float and math.isinf(y):
        magnitude = abs(x)
        if magnitude == 1.0:
            return 1.0
        if (magnitude > 1.0) == (y > 0):
            return math.inf
        return 0.0

    if x == 0.0:
        odd = _is_odd_integer(y)
        if y > 0:
            return x if odd else 0.0
        return math.copysign(math.inf, x) if odd else math.inf

    if math.isinf(x):
        odd = _is_odd_integer(y)
        if x > 0:
            return math.inf if y > 0 else 0.0
        if y > 0:
            return -math.inf if odd else math.inf
        return -0.0 if odd else 0.0

    if x < 0.0 and not _is_integral(y):
        return NAN
    return None


def _pow_integer(base: float, exponent: int) -> float:
    """Точное base^exponent для base > 0, округлённое один раз."""
    mantissa, shift = _split(base)
    trailing = (mantissa & -mantissa).bit_length() - 1
    mantissa >>= trailing
    shift += trailing

    numerator = mantissa ** abs(exponent)
    scale = shift * abs(exponent)
    try:
        if exponent > 0:
            if scale >= 0:
                return float(numerator << scale)
            return numerator / (1 << -scale)
        if scale <= 0:
            return (1 << -scale) / numerator
        return 1 / (numerator << scale)
    except OverflowError:
        return math.inf


def pow(x: float, y: float | int) -> float:
    """
    x^y по полной таблице особых значений IEEE.

    Целый показатель с |y| <= 1024 вычисляется точно (рациональное число
    округляется один раз). Показатель типа int точен и за пределами 2^53,
    поэтому чётность не теряется.

    Examples:
        >>> pow(2.0, 10)
        1024.0
        >>> pow(-2.0, 3.0)
        -8.0
        >>> pow(math.nan, 0.0)
        1.0
        >>> pow(-8.0, 1.0 / 3.0)
        nan
    """
    special = pow_special_value(x, y)
    if special is not None:
        return special

    negative = x < 0.0 and _is_odd_integer(y)
    base = abs(x)
    if _is_integral(y) and abs(y) <= EXACT_POW_EXPONENT_LIMIT:
        magnitude = _pow_integer(base, int(y))
    else:
        magnitude = float(_context().power(Decimal(base), Decimal(y)))
    return -magnitude if negative else magnitude


# =============================================================================
# ТРИГОНОМЕТРИЯ
# =============================================================================


def _reduce_half_pi(x: float) -> tuple[int, int]:
    """
    Редукция x по модулю π/2.

    Returns:
        (квадрант 0..3, остаток в фиксированной точке из [-π/4, π/4])
    """
    mantissa, exponent = _split(x)
    precision = FIXED_POINT_BITS + max(0, exponent + 53) + 64
    scaled = mantissa << (exponent + precision)
    half_pi = _pi_fixed(precision - 1)
    quotient = (2 * scaled + half_pi) // (2 * half_pi)
    remainder = scaled - quotient * half_pi
    return quotient % 4, remainder >> (precision - FIXED_POINT_BITS)


def _sin_cos_fixed(r: int) -> tuple[int, int]:
    """(sin r, cos r) в фиксированной точке для |r| <= π/4."""
    negative = r < 0
    r = abs(r)
    square = (r * r) >> FIXED_POINT_BITS

    sine = term = r
    k = 1
    sign = -1
    while term:
        term = ((term * square) >> FIXED_POINT_BITS) // ((k + 1) * (k + 2))
        sine += sign * term
        sign = -sign
        k += 2

    cosine = term = 1 << FIXED_POINT_BITS
    k = 0
    sign = -1
    while term:
        term = ((term * square) >> FIXED_POINT_BITS) // ((k + 1) * (k + 2))
        cosine += sign * term
        sign = -sign
        k += 2

    return (-sine if negative else sine), cosine


def _rotate(quadrant: int, sine: int, cosine: int) -> tuple[int, int]:
    if quadrant == 0:
        return sine, cosine
    if quadrant == 1:
        return cosine, -sine
    if quadrant == 2:
        return -sine, -cosine
    return -cosine, sine


def sin_and_cos(x: float) -> tuple[float, float]:
    """
    Одновременное вычисление (sin x, cos x) с одной редукцией аргумента.

    Returns:
        (NaN, NaN) для NaN и ±inf
    """
    if not math.isfinite(x):
        return NAN, NAN
    if abs(x) < TINY_ARGUMENT:
        return x, 1.0
    quadrant, remainder = _reduce_half_pi(x)
    sine, cosine = _rotate(quadrant, *_sin_cos_fixed(remainder))
    return _from_fixed(sine), _from_fixed(cosine)


def sin(x: float) -> float:
    """Синус; sin(±0) == ±0, sin(±inf) == NaN."""
    return sin_and_cos(x)[0]


def cos(x: float) -> float:
    """Косинус; cos(±inf) == NaN."""
    return sin_and_cos(x)[1]


def tan(x: float) -> float:
    """Тангенс; tan(±0) == ±0, tan(±inf) == NaN."""
    if not math.isfinite(x):
        return NAN
    if abs(x) < TINY_ARGUMENT:
        return x
    quadrant, remainder = _reduce_half_pi(x)
    sine, cosine = _sin_cos_fixed(remainder)
    if quadrant % 2 == 0:
        return sine / cosine
    return -cosine / sine


# =============================================================================
# ОБРАТНАЯ ТРИГОНОМЕТРИЯ
# =============================================================================


def _atan_fixed(t: int) -> int:
    """atan(t) в фиксированной точке для 0 <= t <= 1."""
    one = 1 << FIXED_POINT_BITS
    halvings = 0
    # atan(t) = 2·atan(t / (1 + sqrt(1 + t²)))
    while t > one >> 4:
        t = (t << FIXED_POINT_BITS) // (one + math.isqrt(one * one + t * t))
        halvings += 1

    square = (t * t) >> FIXED_POINT_BITS
    total = power = t
    k = 3
    sign = -1
    while power:
        power = (power * square) >> FIXED_POINT_BITS
        total += sign * (power // k)
        sign = -sign
        k += 2
    return total << halvings


def _asin_fixed(a: int) -> int:
    """asin(a) в фиксированной точке для 0 <= a < 1."""
    one = 1 << FIXED_POINT_BITS
    c = math.isqrt(one * one - a * a)
    if a <= c:
        return _atan_fixed((a << FIXED_POINT_BITS) // c)
    return _half_pi_fixed() - _atan_fixed((c << FIXED_POINT_BITS) // a)


def atan(x: float) -> float:
    """
    Арктангенс; atan(±0) == ±0, atan(±inf) == ±π/2.
    """
    if math.isnan(x):
        return NAN
    if math.isinf(x):
        return math.copysign(HALF_PI, x)
    if abs(x) < TINY_ARGUMENT:
        return x
    magnitude = abs(x)
    if magnitude <= 1.0:
        angle = _atan_fixed(_to_fixed(magnitude))
    else:
        angle = _half_pi_fixed() - _atan_fixed((1 << (2 * FIXED_POINT_BITS)) // _to_fixed(magnitude))
    return math.copysign(_from_fixed(angle), x)


def asin(x: float) -> float:
    """
    Арксинус на [-1, 1].

    Returns:
        NaN для NaN и |x| > 1; точные ±π/2 на границах; asin(±0) == ±0
    """
    if math.isnan(x) or abs(x) > 1.0:
        return NAN
    if abs(x) < TINY_ARGUMENT:
        return x
    if abs(x) == 1.0:
        return math.copysign(HALF_PI, x)
    return math.copysign(_from_fixed(_asin_fixed(_to_fixed(abs(x)))), x)


def acos(x: float) -> float:
    """
    Арккосинус на [-1, 1].

    Returns:
        NaN для NaN и |x| > 1; acos(1) == 0.0, acos(-1) == π, acos(0) == π/2
    """
    if math.isnan(x) or abs(x) > 1.0:
        return NAN
    if x == 1.0:
        return 0.0
    if x == -1.0:
        return PI
    angle = _asin_fixed(_to_fixed(abs(x)))
    if x >= 0.0:
        return _from_fixed(_half_pi_fixed() - angle)
    return _from_fixed(_half_pi_fixed() + angle)


def _fixed_ratio(numerator: float, denominator: float) -> int:
    """floor(numerator/denominator·2^FIXED_POINT_BITS) для положительных конечных."""
    top, top_exponent = _split(numerator)
    bottom, bottom_exponent = _split(denominator)
    shift = top_exponent - bottom_exponent + FIXED_POINT_BITS
    if shift >= 0:
        return (top << shift) // bottom
    return top // (bottom << -shift)


def atan2(y: float, x: float) -> float:
    """
    Угол точки (x, y) по полной таблице особых значений.

    Таблица:
    - NaN в любом аргументе → NaN
    - y == ±0: x > 0 или x == +0 → ±0; x < 0 или x == -0 → ±π
    - x == ±0 при y != 0 → ±π/2
    - y == ±inf: x == +inf → ±π/4; x == -inf → ±3π/4; конечный x → ±π/2
    - x == +inf при конечном y → ±0; x == -inf → ±π
    - Иначе арктангенс с учётом квадранта

    Examples:
        >>> atan2(0.0, -0.0)
        3.141592653589793
        >>> atan2(-0.0, -0.0)
        -3.141592653589793
    """
    if math.isnan(x) or math.isnan(y):
        return NAN

    if y == 0.0:
        if x > 0.0 or (x == 0.0 and math.copysign(1.0, x) > 0):
            return y
        return math.copysign(PI, y)

    if x == 0.0:
        return math.copysign(HALF_PI, y)

    if math.isinf(y):
        if math.isinf(x):
            return math.copysign(QUARTER_PI if x > 0 else THREE_QUARTER_PI, y)
        return math.copysign(HALF_PI, y)

    if math.isinf(x):
        return math.copysign(0.0 if x > 0 else PI, y)

    rise = abs(y)
    run = abs(x)
    if x > 0.0 and math.frexp(rise)[1] - math.frexp(run)[1] < -60:
        # atan(t) округляется так же, как t
        return math.copysign(rise / run, y)

    if rise <= run:
        angle = _atan_fixed(_fixed_ratio(rise, run))
    else:
        angle = _half_pi_fixed() - _atan_fixed(_fixed_ratio(run, rise))
    if x < 0.0:
        angle = _pi_fixed() - angle
    return math.copysign(_from_fixed(angle), y)


# =============================================================================
# ГИПЕРБОЛИЧЕСКИЕ ФУНКЦИИ
# =============================================================================


def sinh(x: float) -> float:
    """Гиперболический синус; NaN → NaN без исключения."""
    if x == 0.0 or not math.isfinite(x):
        return x
    if abs(x) < TINY_ARGUMENT:
        return x
    if abs(x) > HYPERBOLIC_OVERFLOW_BOUND:
        return math.copysign(math.inf, x)
    context = _context(DECIMAL_DIGITS + _cancellation_digits(x))
    growth = context.exp(Decimal(x))
    return float(context.divide(context.subtract(growth, context.divide(1, growth)), 2))


def cosh(x: float) -> float:
    """Гиперболический косинус; NaN → NaN, ±inf → +inf."""
    if math.isnan(x):
        return NAN
    if abs(x) > HYPERBOLIC_OVERFLOW_BOUND:
        return math.inf
    if abs(x) < TINY_ARGUMENT:
        return 1.0
    context = _context()
    growth = context.exp(Decimal(x))
    return float(context.divide(context.add(growth, context.divide(1, growth)), 2))


def sinh_and_cosh(x: float) -> tuple[float, float]:
    """Одновременное вычисление (sinh x, cosh x)."""
    return sinh(x), cosh(x)


def tanh(x: float) -> float:
    """
    Гиперболический тангенс.

    Returns:
        NaN для NaN; точно ±1.0 при |x| > 20; tanh(±0) == ±0
    """
    if math.isnan(x):
        return NAN
    if abs(x) > TANH_SATURATION_BOUND:
        return math.copysign(1.0, x)
    if abs(x) < TINY_ARGUMENT:
        return x
    context = _context(DECIMAL_DIGITS + _cancellation_digits(x))
    growth = context.exp(context.multiply(2, Decimal(x)))
    return float(context.divide(context.subtract(growth, 1), context.add(growth, 1)))


def asinh(x: float) -> float:
    """Обратный гиперболический синус, нечётная функция."""
    if x == 0.0 or not math.isfinite(x):
        return x
    if abs(x) < TINY_ARGUMENT:
        return x
    context = _context(DECIMAL_DIGITS + _cancellation_digits(x))
    magnitude = Decimal(abs(x))
    radicand = context.add(context.multiply(magnitude, magnitude), 1)
    value = context.ln(context.add(magnitude, context.sqrt(radicand)))
    return math.copysign(float(value), x)


def acosh(x: float) -> float:
    """
    Обратный гиперболический косинус на [1, +inf).

    Raises:
        MathDomainError: Если x < 1
    """
    if math.isnan(x):
        return NAN
    if x < 1.0:
        raise out_of_domain("acosh(x)", "x < 1")
    if x == 1.0:
        return 0.0
    if math.isinf(x):
        return math.inf
    context = _context(DECIMAL_DIGITS + 20)
    value = Decimal(x)
    radicand = context.multiply(context.subtract(value, 1), context.add(value, 1))
    return float(context.ln(context.add(value, context.sqrt(radicand))))


def atanh(x: float) -> float:
    """
    Обратный гиперболический тангенс на [-1, 1].

    Returns:
        ±inf для x == ±1; atanh(±0) == ±0

    Raises:
        MathDomainError: Если |x| > 1
    """
    if math.isnan(x):
        return NAN
    if abs(x) > 1.0:
        raise out_of_domain("atanh(x)", "|x| > 1")
    if abs(x) == 1.0:
        return math.copysign(math.inf, x)
    if abs(x) < TINY_ARGUMENT:
        return x
    context = _context(DECIMAL_DIGITS + _cancellation_digits(x))
    magnitude = Decimal(abs(x))
    ratio = context.divide(context.add(1, magnitude), context.subtract(1, magnitude))
    return math.copysign(float(context.divide(context.ln(ratio), 2)), x)


# =============================================================================
# ПРОЧИЕ ОПЕРАЦИИ
# =============================================================================


def hypot(x: float, y: float) -> float:
    """sqrt(x² + y²) без промежуточного переполнения; ±inf побеждает NaN."""
    return math.hypot(x, y)


def ieee_remainder(x: float, y: float) -> float:
    """
    Остаток IEEE-754: x - n·y, где n — ближайшее к x/y целое (ties-to-even).

    Returns:
        NaN для NaN, бесконечного x или нулевого y; x для бесконечного y
    """
    if math.isnan(x) or math.isnan(y) or math.isinf(x) or y == 0.0:
        return NAN
    if math.isinf(y):
        return x
    return math.remainder(x, y)


def to_radians(x: float) -> float:
    """Градусы → радианы с единственным округлением x·π/180."""
    if x == 0.0 or not math.isfinite(x):
        return x
    mantissa, exponent = _split(x)
    numerator = mantissa * _pi_fixed()
    denominator = 180 << FIXED_POINT_BITS
    if exponent >= 0:
        numerator <<= exponent
    else:
        denominator <<= -exponent
    return numerator / denominator


def to_degrees(x: float) -> float:
    """Радианы → градусы с единственным округлением x·180/π."""
    if x == 0.0 or not math.isfinite(x):
        return x
    mantissa, exponent = _split(x)
    numerator = mantissa * (180 << FIXED_POINT_BITS)
    denominator = _pi_fixed()
    if exponent >= 0:
        numerator <<= exponent
    else:
        denominator <<= -exponent
    try:
        return numerator / denominator
    except OverflowError:
        return math.copysign(math.inf, x)


def fabs(x: float) -> float:
    """Модуль числа; fabs(-0.0) == 0.0."""
    return abs(x)


def floor(x: float) -> float:
    """Наибольшее целое <= x; NaN, ±inf и ±0 без изменений."""
    if x == 0.0 or not math.isfinite(x) or abs(x) >= 2.0**52:
        return x
    return float(math.floor(x))


def ceil(x: float) -> float:
    """Наименьшее целое >= x; ceil(-0.5) == -0.0."""
    if x == 0.0 or not math.isfinite(x) or abs(x) >= 2.0**52:
        return x
    return math.copysign(float(math.ceil(x)), x)


def rint(x: float) -> float:
    """Ближайшее целое, половины к чётному; знак нуля сохраняется."""
    if x == 0.0 or not math.isfinite(x) or abs(x) >= 2.0**52:
        return x
    return math.copysign(float(round(x)), x)


def round_to_long(x: float) -> int:
    """
    floor(x + 0.5) как 64-битное целое с насыщением.

    Returns:
        0 для NaN; LONG_MIN/LONG_MAX за пределами диапазона

    Examples:
        >>> round_to_long(2.5), round_to_long(-2.5), round_to_long(0.49999999999999994)
        (3, -2, 0)
    """
    long_min = -(1 << 63)
    long_max = (1 << 63) - 1
    if math.isnan(x):
        return 0
    if x >= 2.0**63:
        return long_max
    if x <= -(2.0**63):
        return long_min
    result = math.floor(x)
    if x - result >= 0.5:
        result += 1
    return max(long_min, min(long_max, result))
