"""
Decimal Series — Ряды и редукция аргумента над Decimal

Внутренний вычислительный слой оракула DFP. Каждая функция принимает
конечный Decimal и рабочую точность prec (значащие цифры), считает в
собственном контексте с запасом цифр и возвращает результат с
точностью не хуже prec. Специальные значения (NaN, ±inf, знак нуля)
обрабатываются вызывающим кодом в dfp_math.

Алгоритмы:
- pi: формула Мэчина 16·atan(1/5) - 4·atan(1/239)
- ln2 = 2·atanh(1/3), ln10 = 3·ln2 + 2·atanh(1/9)
- exp: x = k·ln2 + r, |r| <= ln2/2, ряд Тейлора для exp(r)
- ln: x = m·10^e·2^j, 1 <= m < 2, ln(m) = 2·atanh((m-1)/(m+1))
- sin/cos: редукция по модулю π/2 с расширением точности на порядок x
- atan: дополнение до π/2 при |x| > 1 и удвоение угла до |x| <= 0.1

Модуль не использует decimal.Decimal.ln/exp: оракул не должен зависеть
от тех же библиотечных функций, которые он проверяет.
"""

from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_EVEN, Context, Decimal, localcontext
from functools import lru_cache
from typing import Final

# =============================================================================
# CONSTANTS
# =============================================================================

# Запас цифр сверх точности поля для всех вычислений оракула
GUARD_DIGITS: Final[int] = 10

# Дополнительные цифры на редукцию тригонометрического аргумента
REDUCTION_GUARD_DIGITS: Final[int] = 20

# Порог удвоения угла для ряда atan
ATAN_SERIES_BOUND: Final[Decimal] = Decimal("0.1")

_ZERO: Final[Decimal] = Decimal(0)
_ONE: Final[Decimal] = Decimal(1)
_TWO: Final[Decimal] = Decimal(2)
_HALF: Final[Decimal] = Decimal("0.5")


def working_context(prec: int) -> Context:
    """
    Рабочий контекст: ROUND_HALF_EVEN, максимальный диапазон порядков,
    без ловушек (переполнение → Infinity, недопустимая операция → NaN).
    """
    return Context(
        prec=prec,
        rounding=ROUND_HALF_EVEN,
        Emin=MIN_EMIN,
        Emax=MAX_EMAX,
        traps=[],
    )


def _tolerance(prec: int) -> Decimal:
    return Decimal(1).scaleb(-(prec + 2))


# =============================================================================
# CONSTANTS AT PRECISION
# =============================================================================


def _arctan_reciprocal(n: int, prec: int) -> Decimal:
    """atan(1/n) для целого n >= 2."""
    with localcontext(working_context(prec)):
        x = _ONE / n
        x_squared = _ONE / (n * n)
        eps = _tolerance(prec)
        total = x
        term = x
        k = 1
        subtract = True
        while True:
            term *= x_squared
            k += 2
            contrib = term / k
            if contrib < eps:
                break
            total = total - contrib if subtract else total + contrib
            subtract = not subtract
        return total


def _atanh_series(u: Decimal, prec: int) -> Decimal:
    """atanh(u) рядом u + u³/3 + u⁵/5 + ... для |u| <= 1/3."""
    with localcontext(working_context(prec)):
        if u == 0:
            return u
        u_squared = u * u
        eps = _tolerance(prec)
        total = u
        term = u
        k = 1
        while True:
            term *= u_squared
            k += 2
            contrib = term / k
            if abs(contrib) <= eps * abs(total):
                break
            total += contrib
        return total


@lru_cache(maxsize=64)
def pi(prec: int) -> Decimal:
    """π с точностью prec значащих цифр."""
    work = prec + 5
    with localcontext(working_context(work)):
        value = 16 * _arctan_reciprocal(5, work) - 4 * _arctan_reciprocal(239, work)
    return working_context(prec).plus(value)


@lru_cache(maxsize=64)
def ln2(prec: int) -> Decimal:
    """ln(2) = 2·atanh(1/3)."""
    work = prec + 5
    with localcontext(working_context(work)):
        value = 2 * _atanh_series(_ONE / 3, work)
    return working_context(prec).plus(value)


@lru_cache(maxsize=64)
def ln10(prec: int) -> Decimal:
    """ln(10) = 3·ln(2) + ln(1.25), ln(1.25) = 2·atanh(1/9)."""
    work = prec + 5
    with localcontext(working_context(work)):
        value = 3 * ln2(work) + 2 * _atanh_series(_ONE / 9, work)
    return working_context(prec).plus(value)


# =============================================================================
# EXP / LN
# =============================================================================


def exp(x: Decimal, prec: int) -> Decimal:
    """
    e^x для конечного x.

    Рабочая точность расширяется на число цифр целой части x, чтобы
    абсолютная ошибка редуцированного аргумента r оставалась ниже 10^-prec.
    """
    work = prec + max(0, x.adjusted() + 1) + 5
    with localcontext(working_context(work)):
        if x == 0:
            return _ONE
        log2 = ln2(work)
        k = (x / log2).to_integral_value()
        r = x - k * log2

        eps = _tolerance(work)
        total = _ONE
        term = _ONE
        n = 0
        while True:
            n += 1
            term = term * r / n
            total += term
            if abs(term) <= eps:
                break

        result = total * _TWO ** int(k)
    return working_context(prec).plus(result)


def ln(x: Decimal, prec: int) -> Decimal:
    """Натуральный логарифм конечного x > 0."""
    work = prec + 5
    with localcontext(working_context(work)):
        if x == 1:
            return _ZERO

        decimal_exponent = 0
        m = x
        if not _HALF <= x < _TWO:
            decimal_exponent = x.adjusted()
            m = x.scaleb(-decimal_exponent)

        binary_exponent = 0
        while m >= _TWO:
            m /= 2
            binary_exponent += 1

        result = 2 * _atanh_series((m - 1) / (m + 1), work)
        if binary_exponent:
            result += binary_exponent * ln2(work)
        if decimal_exponent:
            result += decimal_exponent * ln10(work)
    return working_context(prec).plus(result)


# =============================================================================
# TRIGONOMETRY
# =============================================================================


def _sin_cos_series(r: Decimal, prec: int) -> tuple[Decimal, Decimal]:
    """(sin r, cos r) рядами Тейлора для |r| <= π/4."""
    with localcontext(working_context(prec)):
        eps = _tolerance(prec)
        r_squared = r * r

        sine = r
        term = r
        n = 1
        while True:
            term = -term * r_squared / ((n + 1) * (n + 2))
            n += 2
            if abs(term) <= eps * abs(sine):
                break
            sine += term

        cosine = _ONE
        term = _ONE
        n = 0
        while True:
            term = -term * r_squared / ((n + 1) * (n + 2))
            n += 2
            if abs(term) <= eps:
                break
            cosine += term
        return sine, cosine


def sin_cos(x: Decimal, prec: int) -> tuple[Decimal, Decimal]:
    """
    (sin x, cos x) для конечного x.

    Редукция x = q·(π/2) + r ведётся с точностью prec + порядок x +
    REDUCTION_GUARD_DIGITS, поэтому r сохраняет prec значащих цифр
    даже вблизи кратных π.
    """
    work = prec + max(0, x.adjusted() + 1) + REDUCTION_GUARD_DIGITS
    with localcontext(working_context(work)):
        half_pi = pi(work) / 2
        q = (x / half_pi).to_integral_value()
        r = x - q * half_pi
        sine, cosine = _sin_cos_series(r, work)

        quadrant = int(q) % 4
        if quadrant == 1:
            sine, cosine = cosine, -sine
        elif quadrant == 2:
            sine, cosine = -sine, -cosine
        elif quadrant == 3:
            sine, cosine = -cosine, sine

    context = working_context(prec)
    return context.plus(sine), context.plus(cosine)


def atan(x: Decimal, prec: int) -> Decimal:
    """Арктангенс конечного x."""
    work = prec + 5
    with localcontext(working_context(work)):
        if x == 0:
            return x
        a = abs(x)
        complement = a > 1
        if complement:
            a = _ONE / a

        doublings = 0
        while a > ATAN_SERIES_BOUND:
            a = a / (1 + (1 + a * a).sqrt())
            doublings += 1

        eps = _tolerance(work)
        a_squared = a * a
        total = a
        term = a
        k = 1
        while True:
            term = -term * a_squared
            k += 2
            contrib = term / k
            if abs(contrib) <= eps * abs(total):
                break
            total += contrib

        total *= 2**doublings
        if complement:
            total = pi(work) / 2 - total
        result = -total if x < 0 else total
    return working_context(prec).plus(result)


def asin(x: Decimal, prec: int) -> Decimal:
    """Арксинус для |x| <= 1: atan(x / sqrt((1 - x)(1 + x)))."""
    work = prec + 5
    with localcontext(working_context(work)):
        if abs(x) == 1:
            result = pi(work) / 2
            return working_context(prec).plus(result if x > 0 else -result)
        ratio = x / ((1 - x) * (1 + x)).sqrt()
    return atan(ratio, prec)


def acos(x: Decimal, prec: int) -> Decimal:
    """Арккосинус для |x| <= 1: 2·atan(sqrt((1 - x)/(1 + x)))."""
    work = prec + 5
    with localcontext(working_context(work)):
        if x == -1:
            return working_context(prec).plus(pi(work))
        if x == 1:
            return _ZERO
        ratio = ((1 - x) / (1 + x)).sqrt()
        result = 2 * atan(ratio, work)
    return working_context(prec).plus(result)
