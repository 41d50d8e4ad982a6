"""
DfpMath — Трансцендентные функции оракула

Функции над Dfp: exp, log, pow, sin, cos, tan, atan, asin, acos, sqrt.
Каждая вычисляется на точности поля + GUARD_DIGITS рядами из
decimal_series и округляется к полю один раз.

Специальные значения:
- NaN на входе → NaN (кроме pow с нулевым показателем)
- Вне области определения (log(x < 0), asin(|x| > 1), sin(±inf)) → NaN
- log(±0) → -inf, exp(-inf) → 0, atan(±inf) → ±π/2
- Знак нуля сохраняется там, где функция нечётна (sin, tan, atan, asin)
"""

from decimal import Decimal

from src.core.dfp import decimal_series
from src.core.dfp.dfp import Dfp, DfpField, DfpFieldMismatchError

# Порог перехода pow от целочисленного возведения к exp(y·ln x)
_INTEGER_POWER_LIMIT = 100_000_000


def _working_digits(field: DfpField) -> int:
    return field.digits + decimal_series.GUARD_DIGITS


def _nan(field: DfpField) -> Dfp:
    return field.new_dfp("NaN")


def _infinity(field: DfpField, negative: bool = False) -> Dfp:
    return field.new_dfp("-Infinity" if negative else "Infinity")


# =============================================================================
# EXP / LOG
# =============================================================================


def exp(x: Dfp) -> Dfp:
    """e^x."""
    if x.is_nan():
        return x
    if x.is_infinite():
        return x.field.zero if x.strictly_negative() else x
    return x.field.new_dfp(decimal_series.exp(x.value, _working_digits(x.field)))


def log(x: Dfp) -> Dfp:
    """Натуральный логарифм; log(±0) == -inf, log(x < 0) == NaN."""
    field = x.field
    if x.is_nan():
        return x
    if x.is_zero():
        return _infinity(field, negative=True)
    if x.strictly_negative():
        return _nan(field)
    if x.is_infinite():
        return x
    return field.new_dfp(decimal_series.ln(x.value, _working_digits(field)))


def _is_odd_integer(y: Dfp) -> bool:
    if not y.value.is_finite() or y.value != y.value.to_integral_value():
        return False
    return int(y.value) % 2 == 1


def pow(x: Dfp, y: "Dfp | int") -> Dfp:
    """
    x^y по таблице специальных значений.

    Таблица (в порядке проверки):
    1. y == 0 → 1
    2. y == 1 → x (NaN → NaN)
    3. NaN в любом аргументе → NaN
    4. x == ±0: знак результата -0/-inf только для нечётного целого y
    5. |x| != 1, y == ±inf → inf или 0 по сравнению |x| с 1 и знаку y
    6. |x| == 1, y == ±inf → NaN
    7. x == ±inf → inf или 0, знак по чётности y
    8. x < 0, нецелый y → NaN

    Args:
        x: Основание
        y: Показатель (Dfp того же поля или int)

    Raises:
        DfpFieldMismatchError: Если x и y из разных полей
    """
    field = x.field
    if isinstance(y, Dfp):
        if y.field != field:
            raise DfpFieldMismatchError(field, y.field)
    else:
        y = field.new_dfp(y)

    zero = field.zero
    if y.is_zero():
        return field.one
    if y == field.one:
        return x
    if x.is_nan() or y.is_nan():
        return _nan(field)

    y_positive = y.strictly_positive()
    if x.is_zero():
        if x.value.is_signed() and _is_odd_integer(y):
            return zero.negate() if y_positive else _infinity(field, negative=True)
        return zero if y_positive else _infinity(field)

    invert = x.strictly_negative()
    base = x.abs()

    if y.is_infinite():
        if base == field.one:
            return _nan(field)
        if base.greater_than(field.one) == y_positive:
            return _infinity(field)
        return zero

    if base.is_infinite():
        if invert and _is_odd_integer(y):
            return _infinity(field, negative=True) if y_positive else zero.negate()
        return _infinity(field) if y_positive else zero

    is_integer = y.value == y.value.to_integral_value()
    if invert and not is_integer:
        return _nan(field)

    work = _working_digits(field)
    if is_integer and abs(y.value) < _INTEGER_POWER_LIMIT:
        exponent = int(y.value)
        context = decimal_series.working_context(work + len(str(abs(exponent))))
        result = context.power(base.value, exponent)
    else:
        result = _pow_by_logarithm(base.value, y.value, work)

    if invert and _is_odd_integer(y):
        result = result.copy_negate()
    return field.new_dfp(result)


def _pow_by_logarithm(base: Decimal, exponent: Decimal, work: int) -> Decimal:
    # Ошибка ln умножается на |y·ln x|: точность расширяется на его порядок
    context = decimal_series.working_context(work)
    estimate = context.multiply(exponent, decimal_series.ln(base, work))
    extra = max(0, estimate.adjusted() + 1) if estimate else 0
    wide = decimal_series.working_context(work + extra)
    product = wide.multiply(exponent, decimal_series.ln(base, work + extra))
    return decimal_series.exp(product, work)


# =============================================================================
# TRIGONOMETRY
# =============================================================================


def sin(x: Dfp) -> Dfp:
    if x.is_nan() or x.is_infinite():
        return _nan(x.field)
    if x.is_zero():
        return x
    sine, _ = decimal_series.sin_cos(x.value, _working_digits(x.field))
    return x.field.new_dfp(sine)


def cos(x: Dfp) -> Dfp:
    if x.is_nan() or x.is_infinite():
        return _nan(x.field)
    _, cosine = decimal_series.sin_cos(x.value, _working_digits(x.field))
    return x.field.new_dfp(cosine)


def tan(x: Dfp) -> Dfp:
    if x.is_nan() or x.is_infinite():
        return _nan(x.field)
    if x.is_zero():
        return x
    work = _working_digits(x.field)
    sine, cosine = decimal_series.sin_cos(x.value, work)
    return x.field.new_dfp(decimal_series.working_context(work).divide(sine, cosine))


def atan(x: Dfp) -> Dfp:
    """Арктангенс; atan(±inf) == ±π/2."""
    field = x.field
    if x.is_nan() or x.is_zero():
        return x
    work = _working_digits(field)
    if x.is_infinite():
        half_pi = decimal_series.working_context(work).divide(decimal_series.pi(work), 2)
        return field.new_dfp(half_pi.copy_sign(x.value))
    return field.new_dfp(decimal_series.atan(x.value, work))


def asin(x: Dfp) -> Dfp:
    """Арксинус; |x| > 1 → NaN."""
    field = x.field
    if x.is_nan() or x.is_zero():
        return x
    if abs(x.value) > 1:
        return _nan(field)
    return field.new_dfp(decimal_series.asin(x.value, _working_digits(field)))


def acos(x: Dfp) -> Dfp:
    """Арккосинус; |x| > 1 → NaN."""
    field = x.field
    if x.is_nan():
        return x
    if abs(x.value) > 1:
        return _nan(field)
    return field.new_dfp(decimal_series.acos(x.value, _working_digits(field)))


def sqrt(x: Dfp) -> Dfp:
    return x.sqrt()
