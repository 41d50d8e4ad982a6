"""
IEEE-754 — Битовые примитивы binary64/binary32

Операции над представлением чисел с плавающей точкой:
- Преобразования значение ⟷ битовый шаблон (64/32 бита)
- Соседи по решётке: next_after, next_up, next_down
- Масштабирование scalb с единственным корректным округлением
- ulp, get_exponent, copy_sign, signum
- NaN-пропагирующие minimum/maximum

Значения binary32 ("float") представлены обычными Python float, которые
точно представимы в binary32. Округление double → binary32 выполняет
to_float32 (ties-to-even, переполнение ровно на пороге округления).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Порядок решётки: -inf < -MAX < ... < -MIN < -0.0 < +0.0 < MIN < ... < MAX < +inf
2. next_after с NaN возвращает NaN и НИКОГДА не бросает исключение
3. scalb вычисляет x·2ⁿ точно и округляет один раз (overflow → ±inf,
   underflow → субнормали или ±0)
4. minimum/maximum: NaN всегда побеждает, -0.0 < +0.0
"""

import math
import struct
from typing import Final


# =============================================================================
# КОНСТАНТЫ binary64
# =============================================================================

# Максимальное конечное double: (2 - 2^-52)·2^1023
DOUBLE_MAX_VALUE: Final[float] = 1.7976931348623157e308

# Минимальное нормализованное double: 2^-1022
DOUBLE_MIN_NORMAL: Final[float] = 2.2250738585072014e-308

# Минимальное положительное субнормальное double: 2^-1074
DOUBLE_MIN_VALUE: Final[float] = 5e-324

POSITIVE_INFINITY: Final[float] = math.inf
NEGATIVE_INFINITY: Final[float] = -math.inf
NAN: Final[float] = math.nan

# Число бит мантиссы (без скрытой единицы) и смещение экспоненты
DOUBLE_SIGNIFICAND_BITS: Final[int] = 52
DOUBLE_EXPONENT_BIAS: Final[int] = 1023


# =============================================================================
# КОНСТАНТЫ binary32
# =============================================================================

# Максимальное конечное float: (2 - 2^-23)·2^127
FLOAT_MAX_VALUE: Final[float] = 3.4028234663852886e38

# Минимальное нормализованное float: 2^-126
FLOAT_MIN_NORMAL: Final[float] = 1.1754943508222875e-38

# Минимальное положительное субнормальное float: 2^-149
FLOAT_MIN_VALUE: Final[float] = 1.401298464324817e-45

FLOAT_SIGNIFICAND_BITS: Final[int] = 23
FLOAT_EXPONENT_BIAS: Final[int] = 127

# Граница сдвига для scalb: за её пределами результат гарантированно
# переполняется или обнуляется (2·(1023 + 1074) с запасом)
SCALB_EXPONENT_LIMIT: Final[int] = 2200

_SIGN_BIT_64: Final[int] = 1 << 63
_SIGN_BIT_32: Final[int] = 1 << 31


# =============================================================================
# БИТОВЫЕ ПРЕОБРАЗОВАНИЯ
# =============================================================================


def double_to_bits(value: float) -> int:
    """
    Битовый шаблон binary64 как беззнаковое 64-битное целое.

    Examples:
        >>> hex(double_to_bits(1.0))
        '0x3ff0000000000000'
        >>> hex(double_to_bits(-0.0))
        '0x8000000000000000'
    """
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def bits_to_double(bits: int) -> float:
    """Значение binary64 по беззнаковому 64-битному шаблону."""
    return struct.unpack("<d", struct.pack("<Q", bits & 0xFFFFFFFFFFFFFFFF))[0]


def to_float32(value: float) -> float:
    """
    Округление double до ближайшего binary32 (ties-to-even).

    Значения не меньше порога округления 2^128 - 2^103 переполняются в ±inf.

    Examples:
        >>> to_float32(0.1)
        0.10000000149011612
        >>> to_float32(1e39)
        inf
    """
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def float_to_bits(value: float) -> int:
    """
    Битовый шаблон binary32 как беззнаковое 32-битное целое.

    Аргумент предварительно округляется до binary32.
    """
    return struct.unpack("<I", struct.pack("<f", to_float32(value)))[0]


def bits_to_float(bits: int) -> float:
    """Значение binary32 по беззнаковому 32-битному шаблону."""
    return struct.unpack("<f", struct.pack("<I", bits & 0xFFFFFFFF))[0]


# =============================================================================
# СОСЕДИ ПО РЕШЁТКЕ
# =============================================================================


def next_after(start: float, direction: float) -> float:
    """
    Соседнее с start значение binary64 в сторону direction.

    Args:
        start: Исходное значение
        direction: Направление движения

    Returns:
        - NaN если хотя бы один аргумент NaN (без исключения)
        - direction если start == direction (в т.ч. ±0 с разными знаками)
        - ±MIN_VALUE для шага от нуля
        - ±MAX_VALUE для шага от бесконечности, ±inf для шага от ±MAX_VALUE

    Examples:
        >>> next_after(1.0, 2.0)
        1.0000000000000002
        >>> next_after(DOUBLE_MIN_VALUE, -1.0)
        0.0
        >>> next_after(math.inf, 0.0) == DOUBLE_MAX_VALUE
        True
    """
    if math.isnan(start) or math.isnan(direction):
        return NAN
    if start == direction:
        return direction
    if start == 0.0:
        return math.copysign(DOUBLE_MIN_VALUE, direction)

    bits = double_to_bits(start)
    # Модуль растёт, когда направление лежит дальше от нуля на той же стороне
    if (direction > start) == (start > 0.0):
        bits += 1
    else:
        bits -= 1
    return bits_to_double(bits)


def next_up(value: float) -> float:
    """Ближайшее double, большее value (next_after(value, +inf))."""
    return next_after(value, POSITIVE_INFINITY)


def next_down(value: float) -> float:
    """Ближайшее double, меньшее value (next_after(value, -inf))."""
    return next_after(value, NEGATIVE_INFINITY)


def next_after_float(start: float, direction: float) -> float:
    """
    Соседнее с start значение binary32 в сторону direction.

    Направление задаётся double, поэтому типы аргументов различаются:
    сравнение выполняется в binary64, шаг делается по решётке binary32.

    Examples:
        >>> next_after_float(1.0, 1.0)
        1.0
        >>> next_after_float(1.0, 2.0)
        1.0000001192092896
    """
    if math.isnan(start) or math.isnan(direction):
        return NAN
    start = to_float32(start)
    if start == direction:
        return to_float32(direction)
    if start == 0.0:
        return math.copysign(FLOAT_MIN_VALUE, direction)

    bits = float_to_bits(start)
    if (direction > start) == (start > 0.0):
        bits += 1
    else:
        bits -= 1
    return bits_to_float(bits)


def next_up_float(value: float) -> float:
    """Ближайшее binary32, большее value."""
    return next_after_float(value, POSITIVE_INFINITY)


def next_down_float(value: float) -> float:
    """Ближайшее binary32, меньшее value."""
    return next_after_float(value, NEGATIVE_INFINITY)


# =============================================================================
# ЭКСПОНЕНТА И ULP
# =============================================================================


def get_exponent(value: float) -> int:
    """
    Несмещённая экспонента binary64.

    Returns:
        1024 для NaN и ±inf, -1023 для нуля и субнормалей
    """
    return ((double_to_bits(value) >> DOUBLE_SIGNIFICAND_BITS) & 0x7FF) - DOUBLE_EXPONENT_BIAS


def get_exponent_float(value: float) -> int:
    """
    Несмещённая экспонента binary32.

    Returns:
        128 для NaN и ±inf, -127 для нуля и субнормалей
    """
    return ((float_to_bits(value) >> FLOAT_SIGNIFICAND_BITS) & 0xFF) - FLOAT_EXPONENT_BIAS


def ulp(value: float) -> float:
    """
    Размер единицы последнего разряда (unit in the last place) для double.

    Returns:
        - NaN для NaN, +inf для ±inf
        - MIN_VALUE для нуля и субнормалей
        - 2^(e-52) для нормализованных чисел с экспонентой e

    Examples:
        >>> ulp(1.0)
        2.220446049250313e-16
        >>> ulp(DOUBLE_MAX_VALUE) == 2.0 ** 971
        True
    """
    if math.isnan(value):
        return NAN
    if math.isinf(value):
        return POSITIVE_INFINITY
    exponent = get_exponent(value)
    if exponent < -1022:
        return DOUBLE_MIN_VALUE
    return math.ldexp(1.0, exponent - DOUBLE_SIGNIFICAND_BITS)


def ulp_float(value: float) -> float:
    """Размер единицы последнего разряда для binary32."""
    if math.isnan(value):
        return NAN
    if math.isinf(value):
        return POSITIVE_INFINITY
    exponent = get_exponent_float(value)
    if exponent < -126:
        return FLOAT_MIN_VALUE
    return math.ldexp(1.0, exponent - FLOAT_SIGNIFICAND_BITS)


# =============================================================================
# МАСШТАБИРОВАНИЕ
# =============================================================================


def scalb(value: float, scale: int) -> float:
    """
    value·2^scale с единственным корректным округлением.

    Произведение вычисляется точно в целых числах, затем округляется
    к ближайшему double (ties-to-even). Допустим любой int scale,
    включая ±(2^31 - 1).

    Args:
        value: Масштабируемое значение
        scale: Степень двойки

    Returns:
        Округлённое произведение; ±inf при переполнении, субнормаль
        или ±0 при исчезновении порядка. NaN, ±inf и ±0 возвращаются
        без изменений.

    Examples:
        >>> scalb(DOUBLE_MIN_VALUE, 2098)
        inf
        >>> scalb(DOUBLE_MAX_VALUE, -2098) == DOUBLE_MIN_VALUE
        True
    """
    if value == 0.0 or not math.isfinite(value):
        return value

    scale = max(-SCALB_EXPONENT_LIMIT, min(SCALB_EXPONENT_LIMIT, scale))
    fraction, exponent = math.frexp(abs(value))
    mantissa = int(fraction * (1 << 53))
    shift = exponent - 53 + scale

    if shift >= 0:
        try:
            magnitude = float(mantissa << shift)
        except OverflowError:
            magnitude = POSITIVE_INFINITY
    else:
        # Целочисленное деление корректно округляет, включая субнормали
        magnitude = mantissa / (1 << -shift)

    return math.copysign(magnitude, value)


def scalb_float(value: float, scale: int) -> float:
    """
    value·2^scale для binary32 с единственным округлением.

    Мантисса binary32 помещается в binary64, поэтому промежуточный double
    точен во всём диапазоне, где результат binary32 ненулевой.

    Examples:
        >>> scalb_float(FLOAT_MIN_VALUE, 276)
        1.7014118346046923e+38
        >>> scalb_float(FLOAT_MAX_VALUE, -277) == FLOAT_MIN_VALUE
        True
    """
    return to_float32(scalb(to_float32(value), scale))


# =============================================================================
# ЗНАК
# =============================================================================


def copy_sign(magnitude: float, sign: float) -> float:
    """
    Модуль magnitude со знаком sign.

    Знак NaN считается положительным, 0.0 положителен, -0.0 отрицателен.
    Никогда не бросает исключений.

    Examples:
        >>> copy_sign(1.0, 0.0)
        1.0
        >>> copy_sign(1.0, -0.0)
        -1.0
        >>> copy_sign(-2.0, math.nan)
        2.0
    """
    if math.isnan(sign):
        sign = 1.0
    return math.copysign(magnitude, sign)


def copy_sign_float(magnitude: float, sign: float) -> float:
    """copy_sign для binary32."""
    return to_float32(copy_sign(magnitude, sign))


def signum(value: float) -> float:
    """
    Знак числа: -1.0, +1.0 или сам ноль (со своим знаком).

    На уровне ядра NaN возвращается без исключения; фасад делает
    эту операцию громкой.
    """
    if math.isnan(value) or value == 0.0:
        return value
    return math.copysign(1.0, value)


def signum_float(value: float) -> float:
    """signum для binary32."""
    return to_float32(signum(value))


# =============================================================================
# MINIMUM / MAXIMUM
# =============================================================================


def minimum(a: float, b: float) -> float:
    """
    Минимум с пропагацией NaN.

    В отличие от IEEE minNum, NaN всегда побеждает. Для равных нулей
    -0.0 считается меньше +0.0.

    Examples:
        >>> minimum(1.0, math.nan)
        nan
        >>> minimum(0.0, -0.0)
        -0.0
    """
    if math.isnan(a) or math.isnan(b):
        return NAN
    if a == b == 0.0:
        return a if math.copysign(1.0, a) < 0 else b
    return a if a <= b else b


def maximum(a: float, b: float) -> float:
    """
    Максимум с пропагацией NaN; для равных нулей +0.0 больше -0.0.

    Examples:
        >>> maximum(-0.0, 0.0)
        0.0
    """
    if math.isnan(a) or math.isnan(b):
        return NAN
    if a == b == 0.0:
        return a if math.copysign(1.0, a) > 0 else b
    return a if a >= b else b


def minimum_float(a: float, b: float) -> float:
    """minimum для binary32."""
    return to_float32(minimum(a, b))


def maximum_float(a: float, b: float) -> float:
    """maximum для binary32."""
    return to_float32(maximum(a, b))


def is_mathematical_integer(value: float) -> bool:
    """True если value конечно и не имеет дробной части."""
    return math.isfinite(value) and value == math.floor(value)
