"""
Tests for Exact Arithmetic

Проверяет:
- add/subtract/multiply/increment/decrement/negate_exact для 32 и 64 бит
- to_int_exact (сужение long → int)
- floor_div/floor_mod с округлением к -inf
- Деление на ноль и переполнение floor_div(MIN, -1)
- Отказ на операндах вне диапазона ширины
"""

import pytest

from src.core.math.errors import MathArithmeticError, MathOverflowError, MathZeroDivisionError
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


# =============================================================================
# ТЕСТЫ ТОЧНЫХ ОПЕРАЦИЙ
# =============================================================================


class TestAddSubtract:
    """Тесты для add_exact и subtract_exact"""

    def test_regular_values(self) -> None:
        """Обычные значения"""
        assert add_exact(1, 2) == 3
        assert subtract_exact(5, 7) == -2

    def test_int_overflow(self) -> None:
        """32-битное переполнение"""
        with pytest.raises(MathOverflowError):
            add_exact(INT_MAX, 1, bits=32)
        with pytest.raises(MathOverflowError):
            subtract_exact(INT_MIN, 1, bits=32)
        with pytest.raises(MathOverflowError):
            subtract_exact(0, INT_MIN, bits=32)

    def test_same_values_fit_in_long(self) -> None:
        """Те же значения помещаются в 64 бита"""
        assert add_exact(INT_MAX, 1) == 2147483648
        assert subtract_exact(0, INT_MIN) == 2147483648

    def test_long_overflow(self) -> None:
        """64-битное переполнение"""
        with pytest.raises(MathOverflowError):
            add_exact(LONG_MAX, LONG_MAX)
        with pytest.raises(MathOverflowError):
            add_exact(LONG_MIN, -1)
        with pytest.raises(MathOverflowError):
            subtract_exact(LONG_MIN, 1)

    def test_boundaries_reachable(self) -> None:
        """Границы диапазона достижимы без ошибки"""
        assert add_exact(LONG_MAX - 1, 1) == LONG_MAX
        assert subtract_exact(INT_MIN + 1, 1, bits=32) == INT_MIN

    def test_overflow_is_arithmetic_error(self) -> None:
        """MathOverflowError перехватывается как ArithmeticError и OverflowError"""
        with pytest.raises(ArithmeticError):
            add_exact(LONG_MAX, 1)
        with pytest.raises(OverflowError):
            add_exact(LONG_MAX, 1)


class TestMultiplyNegate:
    """Тесты для multiply_exact, negate_exact, increment/decrement_exact"""

    def test_multiply(self) -> None:
        """Произведение и переполнение"""
        assert multiply_exact(INT_MAX, INT_MAX) == 4611686014132420609
        with pytest.raises(MathOverflowError):
            multiply_exact(INT_MAX, INT_MAX, bits=32)
        with pytest.raises(MathOverflowError):
            multiply_exact(LONG_MIN, -1)

    def test_negate(self) -> None:
        """-MIN не представимо"""
        assert negate_exact(INT_MAX, bits=32) == -INT_MAX
        with pytest.raises(MathOverflowError):
            negate_exact(INT_MIN, bits=32)
        with pytest.raises(MathOverflowError):
            negate_exact(LONG_MIN)

    def test_increment_decrement(self) -> None:
        """Инкремент и декремент на границах"""
        assert increment_exact(41) == 42
        assert decrement_exact(0, bits=32) == -1
        with pytest.raises(MathOverflowError):
            increment_exact(INT_MAX, bits=32)
        with pytest.raises(MathOverflowError):
            decrement_exact(LONG_MIN)


class TestToIntExact:
    """Тесты для to_int_exact"""

    def test_fits(self) -> None:
        """Значения в диапазоне int"""
        assert to_int_exact(-5) == -5
        assert to_int_exact(INT_MIN) == INT_MIN

    def test_overflow(self) -> None:
        """Значения вне диапазона int"""
        with pytest.raises(MathOverflowError):
            to_int_exact(INT_MAX + 1)
        with pytest.raises(MathOverflowError):
            to_int_exact(LONG_MAX)


class TestOperandValidation:
    """Тесты проверки ширины и операндов"""

    def test_operand_out_of_width(self) -> None:
        """Операнд вне диапазона ширины отвергается"""
        with pytest.raises(ValueError, match="32-bit"):
            add_exact(INT_MAX + 1, 0, bits=32)

    def test_unknown_width(self) -> None:
        """Допустимы только 32 и 64 бита"""
        with pytest.raises(ValueError, match="bits must be 32 or 64"):
            add_exact(1, 1, bits=16)


# =============================================================================
# ТЕСТЫ FLOOR-ДЕЛЕНИЯ
# =============================================================================


class TestFloorDivMod:
    """Тесты для floor_div и floor_mod"""

    @pytest.mark.parametrize(
        "a,b,quotient,remainder",
        [
            (12, 5, 2, 2),
            (12, -5, -3, -3),
            (-12, 5, -3, 3),
            (-12, -5, 2, -2),
            (10, 5, 2, 0),
        ],
    )
    def test_rounds_toward_negative_infinity(
        self, a: int, b: int, quotient: int, remainder: int
    ) -> None:
        """Частное округляется к -inf, остаток имеет знак делителя"""
        assert floor_div(a, b) == quotient
        assert floor_mod(a, b) == remainder
        assert floor_div(a, b) * b + floor_mod(a, b) == a

    def test_zero_divisor(self) -> None:
        """Делитель 0"""
        with pytest.raises(MathZeroDivisionError):
            floor_div(1, 0)
        with pytest.raises(MathZeroDivisionError):
            floor_mod(1, 0, bits=32)

    def test_zero_division_is_zero_division_error(self) -> None:
        """MathZeroDivisionError совместим со встроенным ZeroDivisionError"""
        with pytest.raises(ZeroDivisionError):
            floor_div(1, 0)
        with pytest.raises(MathArithmeticError):
            floor_mod(1, 0)

    def test_min_divided_by_minus_one(self) -> None:
        """floor_div(MIN, -1) переполняется"""
        with pytest.raises(MathOverflowError):
            floor_div(LONG_MIN, -1)
        with pytest.raises(MathOverflowError):
            floor_div(INT_MIN, -1, bits=32)

    def test_min_mod_minus_one(self) -> None:
        """floor_mod(MIN, -1) == 0"""
        assert floor_mod(LONG_MIN, -1) == 0
