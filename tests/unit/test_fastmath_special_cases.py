"""
Tests for FastMath kernel special values

Проверяет:
- Корректно округлённые константы (PI, E, HALF_PI, QUARTER_PI)
- Особые значения exp/expm1/log/log10/log1p/log_base
- Полную таблицу pow, включая точный целый показатель
- Тригонометрию на ±0, ±inf и больших аргументах
- Полную таблицу atan2
- Гиперболические функции (насыщение tanh, знак нуля)
- cbrt, ieee_remainder, to_radians/to_degrees, floor/ceil/rint/round_to_long
- Отказы ядра (MathDomainError) на log вне области
"""

import math

import pytest

from src.core.math import fastmath
from src.core.math.errors import MathDomainError
from src.core.math.ieee754 import DOUBLE_MAX_VALUE, DOUBLE_MIN_VALUE


def is_negative_zero(value: float) -> bool:
    return value == 0.0 and math.copysign(1.0, value) < 0


def is_positive_zero(value: float) -> bool:
    return value == 0.0 and math.copysign(1.0, value) > 0


# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты корректно округлённых констант"""

    def test_pi_and_e(self) -> None:
        """Совпадение с константами math"""
        assert fastmath.PI == math.pi
        assert fastmath.E == math.e

    def test_fractions_of_pi(self) -> None:
        """π/2 и π/4 точны делением на степень двойки"""
        assert fastmath.HALF_PI == math.pi / 2
        assert fastmath.QUARTER_PI == math.pi / 4
        assert fastmath.THREE_QUARTER_PI == 3 * math.pi / 4


# =============================================================================
# ТЕСТЫ ЭКСПОНЕНТЫ И ЛОГАРИФМОВ
# =============================================================================


class TestExp:
    """Тесты для exp и expm1"""

    def test_exact_points(self) -> None:
        """exp(±0) == 1"""
        assert fastmath.exp(0.0) == 1.0
        assert fastmath.exp(-0.0) == 1.0
        assert fastmath.exp(1.0) == math.e

    def test_underflow_boundary(self) -> None:
        """Граница исчезновения порядка"""
        assert fastmath.exp(-745.1332191019411) == DOUBLE_MIN_VALUE
        assert fastmath.exp(-745.1332191019412) == 0.0

    def test_overflow(self) -> None:
        """Переполнение даёт +inf"""
        assert fastmath.exp(710.0) == math.inf
        assert fastmath.exp(709.0) < math.inf
        assert fastmath.exp(math.inf) == math.inf
        assert fastmath.exp(-math.inf) == 0.0

    def test_nan_is_quiet(self) -> None:
        """Ядро пропускает NaN"""
        assert math.isnan(fastmath.exp(math.nan))
        assert math.isnan(fastmath.expm1(math.nan))

    def test_expm1_small_and_saturated(self) -> None:
        """expm1 точен вблизи нуля и насыщается к -1"""
        assert fastmath.expm1(1e-20) == 1e-20
        assert is_negative_zero(fastmath.expm1(-0.0))
        assert fastmath.expm1(-50.0) == -1.0
        assert fastmath.expm1(-math.inf) == -1.0


class TestLog:
    """Тесты для log, log10, log1p, log_base"""

    def test_exact_points(self) -> None:
        """Точные значения"""
        assert fastmath.log(1.0) == 0.0
        assert fastmath.log(math.e) == 1.0
        assert fastmath.log10(1000.0) == 3.0
        assert fastmath.log10(1e-300) == -300.0

    def test_zero_and_infinity(self) -> None:
        """log(±0) == -inf, log(inf) == inf"""
        assert fastmath.log(0.0) == -math.inf
        assert fastmath.log(-0.0) == -math.inf
        assert fastmath.log(math.inf) == math.inf
        assert fastmath.log10(0.0) == -math.inf

    def test_domain_errors(self) -> None:
        """Отрицательный аргумент и NaN"""
        with pytest.raises(MathDomainError):
            fastmath.log(-1.0)
        with pytest.raises(MathDomainError):
            fastmath.log(math.nan)
        with pytest.raises(MathDomainError):
            fastmath.log10(-math.inf)
        with pytest.raises(MathDomainError):
            fastmath.log1p(-2.0)

    def test_log1p(self) -> None:
        """log1p точен вблизи нуля"""
        assert fastmath.log1p(1e-20) == 1e-20
        assert is_negative_zero(fastmath.log1p(-0.0))
        assert fastmath.log1p(-1.0) == -math.inf
        assert fastmath.log1p(math.inf) == math.inf

    def test_log_base(self) -> None:
        """Логарифм по основанию"""
        assert fastmath.log_base(2.0, 8.0) == 3.0
        assert fastmath.log_base(10.0, 0.0) == -math.inf
        assert fastmath.log_base(1.0, 2.0) == math.inf
        assert is_negative_zero(fastmath.log_base(0.0, 2.0))

    def test_log_base_indeterminate(self) -> None:
        """Неопределённые формы ∞/∞ и 0/0"""
        with pytest.raises(MathDomainError, match="indeterminate"):
            fastmath.log_base(0.0, 0.0)
        with pytest.raises(MathDomainError, match="indeterminate"):
            fastmath.log_base(1.0, 1.0)


# =============================================================================
# ТЕСТЫ POW
# =============================================================================


class TestPow:
    """Тесты для полной таблицы pow"""

    def test_zero_exponent_and_unit_base(self) -> None:
        """y == ±0 и x == 1 побеждают NaN"""
        assert fastmath.pow(math.nan, 0.0) == 1.0
        assert fastmath.pow(math.nan, -0.0) == 1.0
        assert fastmath.pow(1.0, math.nan) == 1.0
        assert fastmath.pow(1.0, math.inf) == 1.0

    def test_nan(self) -> None:
        """NaN в остальных случаях"""
        assert math.isnan(fastmath.pow(math.nan, 1.0))
        assert math.isnan(fastmath.pow(2.0, math.nan))

    def test_infinite_exponent(self) -> None:
        """y == ±inf"""
        assert fastmath.pow(2.0, math.inf) == math.inf
        assert fastmath.pow(2.0, -math.inf) == 0.0
        assert fastmath.pow(0.5, math.inf) == 0.0
        assert fastmath.pow(0.5, -math.inf) == math.inf
        assert fastmath.pow(-1.0, math.inf) == 1.0

    def test_zero_base(self) -> None:
        """x == ±0: знак по нечётности целого y"""
        assert is_negative_zero(fastmath.pow(-0.0, 3.0))
        assert is_positive_zero(fastmath.pow(-0.0, 2.0))
        assert is_positive_zero(fastmath.pow(-0.0, 0.5))
        assert fastmath.pow(-0.0, -1.0) == -math.inf
        assert fastmath.pow(-0.0, -2.0) == math.inf
        assert fastmath.pow(0.0, -1.0) == math.inf

    def test_infinite_base(self) -> None:
        """x == ±inf: знак по нечётности целого y"""
        assert fastmath.pow(math.inf, 0.5) == math.inf
        assert is_positive_zero(fastmath.pow(math.inf, -0.5))
        assert fastmath.pow(-math.inf, 3.0) == -math.inf
        assert fastmath.pow(-math.inf, 2.0) == math.inf
        assert is_negative_zero(fastmath.pow(-math.inf, -3.0))
        assert is_positive_zero(fastmath.pow(-math.inf, -2.0))

    def test_negative_base(self) -> None:
        """Отрицательное основание"""
        assert fastmath.pow(-2.0, 3.0) == -8.0
        assert fastmath.pow(-2.0, 2.0) == 4.0
        assert math.isnan(fastmath.pow(-8.0, 1.0 / 3.0))

    def test_integer_exponent_is_exact(self) -> None:
        """Целый показатель вычисляется точно"""
        assert fastmath.pow(2.0, 10) == 1024.0
        assert fastmath.pow(10.0, 22) == 1e22
        assert fastmath.pow(10.0, -5) == 1e-5
        assert fastmath.pow(2.0, -1074.0) == DOUBLE_MIN_VALUE
        assert fastmath.pow(2.0, 1024.0) == math.inf

    def test_large_odd_int_exponent_keeps_parity(self) -> None:
        """Показатель int за пределами 2^53 сохраняет нечётность"""
        assert fastmath.pow(-1.0, 2**60 + 1) == -1.0
        assert fastmath.pow(-1.0, 2**60) == 1.0

    def test_fractional_exponent(self) -> None:
        """Дробный показатель"""
        assert fastmath.pow(2.0, 0.5) == math.sqrt(2.0)
        assert fastmath.pow(4.0, 0.5) == 2.0


# =============================================================================
# ТЕСТЫ ТРИГОНОМЕТРИИ
# =============================================================================


class TestTrigonometry:
    """Тесты для sin/cos/tan и sin_and_cos"""

    def test_signed_zero(self) -> None:
        """Знак нуля сохраняется"""
        assert is_negative_zero(fastmath.sin(-0.0))
        assert is_negative_zero(fastmath.tan(-0.0))
        assert fastmath.cos(-0.0) == 1.0

    def test_infinity_and_nan(self) -> None:
        """Ядро возвращает NaN"""
        assert math.isnan(fastmath.sin(math.inf))
        assert math.isnan(fastmath.cos(-math.inf))
        assert math.isnan(fastmath.tan(math.nan))
        sine, cosine = fastmath.sin_and_cos(math.inf)
        assert math.isnan(sine) and math.isnan(cosine)

    def test_known_values(self) -> None:
        """Известные значения"""
        assert fastmath.cos(math.pi) == -1.0
        assert fastmath.sin(math.pi) == 1.2246467991473532e-16

    def test_large_argument_reduction(self) -> None:
        """Точная редукция для огромного аргумента"""
        assert fastmath.sin(1e22) == -0.8522008497671888
        assert fastmath.sin(DOUBLE_MAX_VALUE) == 0.004961954789184062

    def test_sin_and_cos_consistent(self) -> None:
        """sin_and_cos совпадает с раздельными вызовами"""
        for x in (0.1, 1.0, 2.5, -7.0, 100.0):
            assert fastmath.sin_and_cos(x) == (fastmath.sin(x), fastmath.cos(x))

    def test_tiny_argument(self) -> None:
        """sin(x) == x, cos(x) == 1 для крошечных x"""
        assert fastmath.sin(1e-300) == 1e-300
        assert fastmath.cos(1e-300) == 1.0


class TestInverseTrigonometry:
    """Тесты для asin/acos/atan"""

    def test_asin_bounds(self) -> None:
        """Границы области определения"""
        assert fastmath.asin(1.0) == math.pi / 2
        assert fastmath.asin(-1.0) == -math.pi / 2
        assert is_negative_zero(fastmath.asin(-0.0))
        assert math.isnan(fastmath.asin(1.5))

    def test_acos_bounds(self) -> None:
        """acos(1) == 0, acos(-1) == π, acos(0) == π/2"""
        assert fastmath.acos(1.0) == 0.0
        assert fastmath.acos(-1.0) == math.pi
        assert fastmath.acos(0.0) == math.pi / 2
        assert fastmath.acos(-0.0) == math.pi / 2
        assert math.isnan(fastmath.acos(-1.5))

    def test_atan(self) -> None:
        """atan(±inf) == ±π/2, atan(1) == π/4"""
        assert fastmath.atan(math.inf) == math.pi / 2
        assert fastmath.atan(-math.inf) == -math.pi / 2
        assert fastmath.atan(1.0) == math.pi / 4
        assert is_negative_zero(fastmath.atan(-0.0))
        assert math.isnan(fastmath.atan(math.nan))


class TestAtan2:
    """Тесты для полной таблицы atan2"""

    @pytest.mark.parametrize(
        "y,x,expected",
        [
            (0.0, 1.0, 0.0),
            (0.0, -0.0, math.pi),
            (-0.0, -0.0, -math.pi),
            (0.0, -1.0, math.pi),
            (1.0, 0.0, math.pi / 2),
            (-1.0, -0.0, -math.pi / 2),
            (math.inf, math.inf, math.pi / 4),
            (math.inf, -math.inf, 3 * math.pi / 4),
            (-math.inf, math.inf, -math.pi / 4),
            (math.inf, 1.0, math.pi / 2),
            (1.0, -math.inf, math.pi),
            (1.0, 1.0, math.pi / 4),
            (1.0, -1.0, 3 * math.pi / 4),
        ],
    )
    def test_table(self, y: float, x: float, expected: float) -> None:
        """Значения таблицы"""
        assert fastmath.atan2(y, x) == expected

    def test_signed_zero_results(self) -> None:
        """Ноль сохраняет знак y"""
        assert is_negative_zero(fastmath.atan2(-0.0, 1.0))
        assert is_negative_zero(fastmath.atan2(-1.0, math.inf))
        assert is_positive_zero(fastmath.atan2(0.0, 0.0))

    def test_nan(self) -> None:
        """NaN в любом аргументе"""
        assert math.isnan(fastmath.atan2(math.nan, 1.0))
        assert math.isnan(fastmath.atan2(1.0, math.nan))

    def test_tiny_ratio(self) -> None:
        """Крошечное отношение y/x возвращается без потерь"""
        assert fastmath.atan2(1e-300, 1.0) == 1e-300


# =============================================================================
# ТЕСТЫ ГИПЕРБОЛИЧЕСКИХ ФУНКЦИЙ
# =============================================================================


class TestHyperbolic:
    """Тесты для sinh/cosh/tanh и обратных функций"""

    def test_signed_zero(self) -> None:
        """Знак нуля сохраняется в нечётных функциях"""
        assert is_negative_zero(fastmath.sinh(-0.0))
        assert is_negative_zero(fastmath.tanh(-0.0))
        assert is_negative_zero(fastmath.asinh(-0.0))
        assert is_negative_zero(fastmath.atanh(-0.0))
        assert fastmath.cosh(-0.0) == 1.0

    def test_tanh_saturation(self) -> None:
        """tanh == ±1 точно при |x| > 20"""
        assert fastmath.tanh(20.5) == 1.0
        assert fastmath.tanh(-25.0) == -1.0
        assert fastmath.tanh(math.inf) == 1.0

    def test_overflow(self) -> None:
        """Переполнение sinh/cosh"""
        assert fastmath.sinh(1000.0) == math.inf
        assert fastmath.sinh(-1000.0) == -math.inf
        assert fastmath.cosh(-1000.0) == math.inf
        assert fastmath.sinh(710.0) < math.inf

    def test_nan_is_quiet(self) -> None:
        """NaN проходит насквозь"""
        assert math.isnan(fastmath.sinh(math.nan))
        assert math.isnan(fastmath.cosh(math.nan))
        assert math.isnan(fastmath.tanh(math.nan))
        assert math.isnan(fastmath.acosh(math.nan))

    def test_inverse_boundaries(self) -> None:
        """Границы обратных функций"""
        assert fastmath.acosh(1.0) == 0.0
        assert fastmath.acosh(math.inf) == math.inf
        assert fastmath.atanh(1.0) == math.inf
        assert fastmath.atanh(-1.0) == -math.inf
        assert fastmath.asinh(-math.inf) == -math.inf

    def test_inverse_domain_errors(self) -> None:
        """acosh(x < 1) и atanh(|x| > 1)"""
        with pytest.raises(MathDomainError):
            fastmath.acosh(0.5)
        with pytest.raises(MathDomainError):
            fastmath.atanh(1.5)

    def test_sinh_and_cosh(self) -> None:
        """Совместное вычисление"""
        assert fastmath.sinh_and_cosh(1.0) == (fastmath.sinh(1.0), fastmath.cosh(1.0))


# =============================================================================
# ТЕСТЫ ПРОЧИХ ОПЕРАЦИЙ
# =============================================================================


class TestMiscellaneous:
    """Тесты для cbrt, remainder, преобразования углов и округлений"""

    def test_cbrt(self) -> None:
        """Точные кубические корни и знак"""
        assert fastmath.cbrt(27.0) == 3.0
        assert fastmath.cbrt(-8.0) == -2.0
        assert fastmath.cbrt(2.0**-300) == 2.0**-100
        assert fastmath.cbrt(0.125) == 0.5
        assert is_negative_zero(fastmath.cbrt(-0.0))
        assert fastmath.cbrt(-math.inf) == -math.inf

    def test_sqrt(self) -> None:
        """sqrt ядра отказывает на отрицательных"""
        assert fastmath.sqrt(2.0) == math.sqrt(2.0)
        with pytest.raises(MathDomainError):
            fastmath.sqrt(-1.0)

    def test_ieee_remainder(self) -> None:
        """Остаток к ближайшему, половины к чётному"""
        assert fastmath.ieee_remainder(5.0, 2.0) == 1.0
        assert fastmath.ieee_remainder(7.0, 2.0) == -1.0
        assert fastmath.ieee_remainder(3.0, math.inf) == 3.0
        assert math.isnan(fastmath.ieee_remainder(math.inf, 2.0))
        assert math.isnan(fastmath.ieee_remainder(1.0, 0.0))

    def test_angle_conversion(self) -> None:
        """Градусы и радианы"""
        assert fastmath.to_radians(180.0) == math.pi
        assert fastmath.to_degrees(math.pi) == 180.0
        assert is_negative_zero(fastmath.to_radians(-0.0))
        assert fastmath.to_degrees(DOUBLE_MAX_VALUE) == math.inf

    def test_floor_ceil(self) -> None:
        """floor/ceil и знак нуля"""
        assert fastmath.floor(-0.5) == -1.0
        assert is_negative_zero(fastmath.ceil(-0.5))
        assert fastmath.ceil(1.2) == 2.0
        assert math.isnan(fastmath.floor(math.nan))

    def test_rint(self) -> None:
        """Половины к чётному"""
        assert fastmath.rint(2.5) == 2.0
        assert fastmath.rint(3.5) == 4.0
        assert is_negative_zero(fastmath.rint(-0.4))

    def test_round_to_long(self) -> None:
        """floor(x + 0.5) с насыщением"""
        assert fastmath.round_to_long(2.5) == 3
        assert fastmath.round_to_long(-2.5) == -2
        assert fastmath.round_to_long(0.49999999999999994) == 0
        assert fastmath.round_to_long(math.nan) == 0
        assert fastmath.round_to_long(1e300) == 2**63 - 1
        assert fastmath.round_to_long(-math.inf) == -(2**63)

    def test_fabs(self) -> None:
        """fabs(-0.0) == 0.0"""
        assert is_positive_zero(fastmath.fabs(-0.0))
