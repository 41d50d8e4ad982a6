"""
Dfp — Десятичная арифметика повышенной точности

Оракул для проверки точности численного ядра. DfpField задаёт число
значащих десятичных цифр и режим округления; Dfp — неизменяемое
значение этого поля поверх decimal.Decimal.

Семантика специальных значений IEEE:
- x / ±0 → ±inf, 0/0 → NaN, sqrt(-1) → NaN, inf - inf → NaN
- NaN не равен ничему, включая себя; упорядочивающие сравнения с NaN → False
- Знак нуля сохраняется при создании и смене знака

Поля не смешиваются: арифметика и упорядочивание значений разных полей
бросают DfpFieldMismatchError. Перенос значения в другое поле —
явный вызов field.new_dfp(value) с повторным округлением.

Все объекты неизменяемы и безопасны для совместного использования
потоками: каждая операция создаёт собственный decimal.Context.
"""

import decimal
from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation, localcontext
from enum import Enum, IntEnum
from functools import cached_property
from typing import Final, Union

from src.core.dfp import decimal_series
from src.core.math.exact_arithmetic import INT_MAX, INT_MIN

# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления поля (значения совпадают с константами decimal)."""

    ROUND_DOWN = decimal.ROUND_DOWN
    ROUND_UP = decimal.ROUND_UP
    ROUND_HALF_UP = decimal.ROUND_HALF_UP
    ROUND_HALF_DOWN = decimal.ROUND_HALF_DOWN
    ROUND_HALF_EVEN = decimal.ROUND_HALF_EVEN
    ROUND_CEIL = decimal.ROUND_CEILING
    ROUND_FLOOR = decimal.ROUND_FLOOR


class DfpClass(IntEnum):
    """Класс значения Dfp."""

    FINITE = 0
    INFINITE = 1
    SNAN = 2
    QNAN = 3


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DfpFieldMismatchError(ValueError):
    """Операция над значениями разных полей Dfp."""

    def __init__(self, left: "DfpField", right: "DfpField") -> None:
        super().__init__(
            f"Dfp field mismatch: {left.digits} digits vs {right.digits} digits"
        )
        self.left = left
        self.right = right


# Парсинг строк должен падать на синтаксических ошибках
_PARSING_CONTEXT: Final[Context] = Context(traps=[InvalidOperation])

DfpOperand = Union["Dfp", int]


# =============================================================================
# FIELD
# =============================================================================


@dataclass(frozen=True)
class DfpField:
    """
    Фабрика значений Dfp с фиксированной точностью.

    Attributes:
        digits: Число значащих десятичных цифр (>= 1)
        rounding_mode: Режим округления арифметики поля

    Examples:
        >>> field = DfpField(40)
        >>> str(field.new_dfp("1") / field.new_dfp(3))[:8]
        '0.333333'
    """

    digits: int
    rounding_mode: RoundingMode = RoundingMode.ROUND_HALF_EVEN

    def __post_init__(self) -> None:
        if isinstance(self.digits, bool) or not isinstance(self.digits, int):
            raise TypeError(f"digits must be int, got {type(self.digits).__name__}")
        if self.digits < 1:
            raise ValueError(f"digits must be >= 1, got {self.digits}")

    def context(self, extra_digits: int = 0) -> Context:
        """Новый decimal-контекст поля без ловушек."""
        return Context(
            prec=self.digits + extra_digits,
            rounding=self.rounding_mode.value,
            traps=[],
        )

    def new_dfp(self, value: "Dfp | Decimal | int | float | str") -> "Dfp":
        """
        Создание значения поля с однократным округлением.

        Args:
            value: int, float (переводится точно, затем округляется),
                десятичная строка ("1.5e-3", "NaN", "Infinity", "-0"),
                Decimal или Dfp (в том числе другого поля)

        Returns:
            Dfp этого поля

        Raises:
            ValueError: Если строка не является десятичным литералом
            TypeError: Если тип значения не поддерживается
        """
        context = self.context()
        if isinstance(value, Dfp):
            if value.field == self:
                return value
            return Dfp(self, context.create_decimal(value.value))
        if isinstance(value, Decimal):
            return Dfp(self, context.create_decimal(value))
        if isinstance(value, bool):
            raise TypeError("bool is not a Dfp value")
        if isinstance(value, int):
            return Dfp(self, context.create_decimal(value))
        if isinstance(value, float):
            return Dfp(self, context.create_decimal_from_float(value))
        if isinstance(value, str):
            try:
                with localcontext(_PARSING_CONTEXT):
                    parsed = Decimal(value.strip())
            except InvalidOperation:
                raise ValueError(f"Invalid Dfp literal: {value!r}") from None
            return Dfp(self, context.create_decimal(parsed))
        raise TypeError(f"Cannot create Dfp from {type(value).__name__}")

    def _constant(self, value: Decimal) -> "Dfp":
        return Dfp(self, self.context().create_decimal(value))

    @property
    def _work(self) -> int:
        return self.digits + decimal_series.GUARD_DIGITS

    # -------------------------------------------------------------------------
    # Кешируемые константы
    # -------------------------------------------------------------------------

    @cached_property
    def zero(self) -> "Dfp":
        return self.new_dfp(0)

    @cached_property
    def one(self) -> "Dfp":
        return self.new_dfp(1)

    @cached_property
    def two(self) -> "Dfp":
        return self.new_dfp(2)

    @cached_property
    def pi(self) -> "Dfp":
        return self._constant(decimal_series.pi(self._work))

    @cached_property
    def e(self) -> "Dfp":
        return self._constant(decimal_series.exp(Decimal(1), self._work))

    @cached_property
    def ln2(self) -> "Dfp":
        return self._constant(decimal_series.ln2(self._work))

    @cached_property
    def ln5(self) -> "Dfp":
        work = self._work
        return self._constant(
            decimal_series.working_context(work).subtract(
                decimal_series.ln10(work), decimal_series.ln2(work)
            )
        )

    @cached_property
    def ln10(self) -> "Dfp":
        return self._constant(decimal_series.ln10(self._work))

    @cached_property
    def sqr2(self) -> "Dfp":
        return self._constant(decimal_series.working_context(self._work).sqrt(Decimal(2)))

    @cached_property
    def sqr2_reciprocal(self) -> "Dfp":
        context = decimal_series.working_context(self._work)
        return self._constant(context.divide(context.sqrt(Decimal(2)), 2))

    @cached_property
    def sqr3(self) -> "Dfp":
        return self._constant(decimal_series.working_context(self._work).sqrt(Decimal(3)))


# =============================================================================
# VALUE
# =============================================================================


@dataclass(frozen=True, eq=False)
class Dfp:
    """
    Неизменяемое десятичное значение поля DfpField.

    Создаётся через DfpField.new_dfp; прямой конструктор не округляет value.

    Attributes:
        field: Поле (точность и режим округления)
        value: Значение decimal.Decimal
    """

    field: DfpField
    value: Decimal

    # -------------------------------------------------------------------------
    # Внутренние помощники
    # -------------------------------------------------------------------------

    def _operand(self, other: DfpOperand) -> Decimal:
        if isinstance(other, Dfp):
            if other.field != self.field:
                raise DfpFieldMismatchError(self.field, other.field)
            return other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.field.context().create_decimal(other)
        raise TypeError(f"Unsupported Dfp operand: {type(other).__name__}")

    def _new(self, value: Decimal) -> "Dfp":
        return Dfp(self.field, value)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: DfpOperand) -> "Dfp":
        return self._new(self.field.context().add(self.value, self._operand(other)))

    def subtract(self, other: DfpOperand) -> "Dfp":
        return self._new(self.field.context().subtract(self.value, self._operand(other)))

    def multiply(self, other: DfpOperand) -> "Dfp":
        return self._new(self.field.context().multiply(self.value, self._operand(other)))

    def divide(self, other: DfpOperand) -> "Dfp":
        """Деление; x/±0 → ±inf, 0/0 → NaN."""
        return self._new(self.field.context().divide(self.value, self._operand(other)))

    def negate(self) -> "Dfp":
        return self._new(self.value.copy_negate())

    def abs(self) -> "Dfp":
        return self._new(self.value.copy_abs())

    def reciprocal(self) -> "Dfp":
        return self.field.one.divide(self)

    def sqrt(self) -> "Dfp":
        """Корректно округлённый корень; sqrt(-0) == -0, sqrt(x < 0) → NaN."""
        return self._new(self.field.context().sqrt(self.value))

    def remainder(self, other: DfpOperand) -> "Dfp":
        """
        Остаток IEEE: self - n·other, n — ближайшее к self/other целое
        (половины к чётному).

        Частное вычисляется точно: точность расширяется на разность
        порядков операндов.
        """
        divisor = self._operand(other)
        extra = 0
        if self.value.is_finite() and divisor.is_finite() and divisor and self.value:
            extra = max(0, self.value.adjusted() - divisor.adjusted() + 2)
        remainder = self.field.context(extra).remainder_near(self.value, divisor)
        return self._new(self.field.context().create_decimal(remainder))

    def rint(self) -> "Dfp":
        """Округление к целому в режиме поля."""
        return self._new(self.field.context().to_integral_value(self.value))

    def floor(self) -> "Dfp":
        return self._new(self.value.to_integral_value(rounding=decimal.ROUND_FLOOR))

    def ceil(self) -> "Dfp":
        return self._new(self.value.to_integral_value(rounding=decimal.ROUND_CEILING))

    def next_after(self, direction: "Dfp") -> "Dfp":
        """Соседнее значение поля в направлении direction."""
        return self._new(self.field.context().next_toward(self.value, self._operand(direction)))

    def copysign(self, sign: "Dfp") -> "Dfp":
        return self._new(self.value.copy_sign(self._operand(sign)))

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_nan(self) -> bool:
        return self.value.is_nan()

    def is_infinite(self) -> bool:
        return self.value.is_infinite()

    def is_zero(self) -> bool:
        return self.value.is_zero()

    def negative_or_null(self) -> bool:
        """True для x <= 0, включая -0 и -inf."""
        return not self.is_nan() and (self.value.is_signed() or self.is_zero())

    def positive_or_null(self) -> bool:
        """True для x >= 0, включая +0 и +inf."""
        return not self.is_nan() and (not self.value.is_signed() or self.is_zero())

    def strictly_negative(self) -> bool:
        return not self.is_nan() and not self.is_zero() and self.value.is_signed()

    def strictly_positive(self) -> bool:
        return not self.is_nan() and not self.is_zero() and not self.value.is_signed()

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def classify(self) -> DfpClass:
        if self.value.is_snan():
            return DfpClass.SNAN
        if self.value.is_qnan():
            return DfpClass.QNAN
        if self.value.is_infinite():
            return DfpClass.INFINITE
        return DfpClass.FINITE

    def int_value(self) -> int:
        """
        Округление к целому в режиме поля с насыщением до int32.

        NaN → 0, ±inf → INT_MAX/INT_MIN.
        """
        if self.is_nan():
            return 0
        if self.is_infinite():
            return INT_MIN if self.value.is_signed() else INT_MAX
        rounded = int(self.field.context().to_integral_value(self.value))
        return max(INT_MIN, min(INT_MAX, rounded))

    def log10_floor(self) -> int:
        """
        Порядок старшей цифры: floor(log10(|x|)).

        Raises:
            ValueError: Для нуля, NaN и бесконечности
        """
        if not self.value.is_finite() or self.is_zero():
            raise ValueError(f"log10_floor is undefined for {self.value}")
        return self.value.adjusted()

    def to_double(self) -> float:
        """Корректно округлённое значение IEEE-754 double."""
        return float(self.value)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def _ordered(self, other: DfpOperand) -> Decimal | None:
        operand = self._operand(other)
        if self.is_nan() or operand.is_nan():
            return None
        return operand

    def less_than(self, other: DfpOperand) -> bool:
        operand = self._ordered(other)
        return operand is not None and self.value < operand

    def greater_than(self, other: DfpOperand) -> bool:
        operand = self._ordered(other)
        return operand is not None and self.value > operand

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dfp):
            if other.field != self.field:
                return False
        elif not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        operand = self._ordered(other)
        return operand is not None and self.value == operand

    def __hash__(self) -> int:
        # Decimal не хэширует sNaN; NaN не равен ничему
        if self.is_nan():
            return hash((self.field, DfpClass.QNAN))
        return hash((self.field, self.value))

    def __lt__(self, other: DfpOperand) -> bool:
        return self.less_than(other)

    def __gt__(self, other: DfpOperand) -> bool:
        return self.greater_than(other)

    def __le__(self, other: DfpOperand) -> bool:
        operand = self._ordered(other)
        return operand is not None and self.value <= operand

    def __ge__(self, other: DfpOperand) -> bool:
        operand = self._ordered(other)
        return operand is not None and self.value >= operand

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: DfpOperand) -> "Dfp":
        return self.add(other)

    def __radd__(self, other: int) -> "Dfp":
        return self.add(other)

    def __sub__(self, other: DfpOperand) -> "Dfp":
        return self.subtract(other)

    def __rsub__(self, other: int) -> "Dfp":
        return self.field.new_dfp(other).subtract(self)

    def __mul__(self, other: DfpOperand) -> "Dfp":
        return self.multiply(other)

    def __rmul__(self, other: int) -> "Dfp":
        return self.multiply(other)

    def __truediv__(self, other: DfpOperand) -> "Dfp":
        return self.divide(other)

    def __rtruediv__(self, other: int) -> "Dfp":
        return self.field.new_dfp(other).divide(self)

    def __neg__(self) -> "Dfp":
        return self.negate()

    def __abs__(self) -> "Dfp":
        return self.abs()

    def __float__(self) -> float:
        return self.to_double()

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Dfp('{self.value}', digits={self.field.digits})"
