"""
ReferenceCase — Эталонный случай для проверки фасада MathLib

Immutable Pydantic модели эталонной таблицы: вызов функции фасада с
заданными аргументами и ожидаемый результат либо ожидаемая ошибка.
Соответствует схеме contracts/schema/reference_cases.json.

Значения аргументов и результатов записываются токенами:
- Десятичный литерал: "1.5", "-2.5e-300"
- Шестнадцатеричный литерал: "0x1p-1074", "-0x1.fffffffffffffp1023"
- Специальные значения: "NaN", "Infinity", "-Infinity", "-0.0"
- Именованные константы с необязательным "-": "MAX_VALUE", "-PI", ...
- Целое JSON-число — для аргументов int/long
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.math import fastmath
from src.core.math.errors import MathDomainError, MathOverflowError, MathZeroDivisionError
from src.core.math.exact_arithmetic import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN
from src.core.math.ieee754 import (
    DOUBLE_MAX_VALUE,
    DOUBLE_MIN_NORMAL,
    DOUBLE_MIN_VALUE,
    FLOAT_MAX_VALUE,
    FLOAT_MIN_VALUE,
)

# =============================================================================
# VALUE TOKENS
# =============================================================================

NAMED_CONSTANTS: Final[dict[str, float | int]] = {
    "MAX_VALUE": DOUBLE_MAX_VALUE,
    "MIN_VALUE": DOUBLE_MIN_VALUE,
    "MIN_NORMAL": DOUBLE_MIN_NORMAL,
    "FLOAT_MAX_VALUE": FLOAT_MAX_VALUE,
    "FLOAT_MIN_VALUE": FLOAT_MIN_VALUE,
    "INT_MAX": INT_MAX,
    "INT_MIN": INT_MIN,
    "LONG_MAX": LONG_MAX,
    "LONG_MIN": LONG_MIN,
    "PI": fastmath.PI,
    "HALF_PI": fastmath.HALF_PI,
    "QUARTER_PI": fastmath.QUARTER_PI,
    "THREE_QUARTER_PI": fastmath.THREE_QUARTER_PI,
}

ValueToken = str | int


def parse_value(token: ValueToken) -> float | int:
    """
    Разбор токена значения.

    Args:
        token: Строковый токен или целое число

    Returns:
        float для строковых токенов (кроме целых констант), int для целых

    Raises:
        ValueError: Если токен не распознан

    Examples:
        >>> parse_value("-0x1p-1074")
        -5e-324
        >>> parse_value("-INT_MIN")
        2147483648
    """
    if isinstance(token, bool):
        raise ValueError(f"Boolean is not a value token: {token!r}")
    if isinstance(token, int):
        return token

    text = token.strip()
    negative = text.startswith("-")
    name = text[1:] if negative else text
    if name in NAMED_CONSTANTS:
        value = NAMED_CONSTANTS[name]
        return -value if negative else value

    try:
        if name.lower().startswith("0x"):
            return float.fromhex(text)
        return float(text)
    except ValueError:
        raise ValueError(f"Unrecognized value token: {token!r}") from None


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Ожидаемый вид ошибки фасада."""

    DOMAIN = "domain"
    OVERFLOW = "overflow"
    ZERO_DIVISION = "zero_division"

    @property
    def exception_type(self) -> type[ArithmeticError]:
        return _ERROR_TYPES[self]


_ERROR_TYPES: Final[dict[ErrorKind, type[ArithmeticError]]] = {
    ErrorKind.DOMAIN: MathDomainError,
    ErrorKind.OVERFLOW: MathOverflowError,
    ErrorKind.ZERO_DIVISION: MathZeroDivisionError,
}


# =============================================================================
# MODELS
# =============================================================================


class ReferenceCase(BaseModel):
    """
    Эталонный случай: вызов function(*args, **kwargs).

    Ровно одно из полей expected/raises задано.

    bit_exact=True сравнивает биты результата (знак нуля значим);
    иначе допускается отклонение tolerance ULP от ожидаемого значения.
    NaN совпадает с NaN в обоих режимах.
    """

    function: str = Field(
        ..., min_length=1, pattern=r"^[a-z_][a-z0-9_]*$", description="Имя функции фасада"
    )
    args: tuple[ValueToken, ...] = Field(default=(), description="Позиционные аргументы")
    kwargs: dict[str, ValueToken] = Field(default_factory=dict, description="Именованные аргументы")
    expected: ValueToken | None = Field(None, description="Ожидаемый результат")
    raises: ErrorKind | None = Field(
        None, validate_default=True, description="Ожидаемый вид ошибки"
    )
    bit_exact: bool = Field(True, description="Побитовое сравнение результата")
    tolerance: float = Field(0.0, ge=0, description="Допуск в ULP ожидаемого значения")
    description: str | None = Field(None, description="Пояснение к случаю")

    model_config = {"frozen": True}

    @field_validator("args")
    @classmethod
    def validate_args(cls, v: tuple[ValueToken, ...]) -> tuple[ValueToken, ...]:
        """Все аргументы должны быть распознаваемыми токенами"""
        for token in v:
            parse_value(token)
        return v

    @field_validator("kwargs")
    @classmethod
    def validate_kwargs(cls, v: dict[str, ValueToken]) -> dict[str, ValueToken]:
        for token in v.values():
            parse_value(token)
        return v

    @field_validator("expected")
    @classmethod
    def validate_expected(cls, v: ValueToken | None) -> ValueToken | None:
        if v is not None:
            parse_value(v)
        return v

    @field_validator("raises")
    @classmethod
    def validate_outcome_exclusive(cls, v: ErrorKind | None, info) -> ErrorKind | None:
        """Проверка, что задано ровно одно из expected/raises"""
        expected = info.data.get("expected")
        if v is None and expected is None:
            raise ValueError("either expected or raises must be set")
        if v is not None and expected is not None:
            raise ValueError("expected and raises are mutually exclusive")
        return v

    def parsed_args(self) -> tuple[float | int, ...]:
        return tuple(parse_value(token) for token in self.args)

    def parsed_kwargs(self) -> dict[str, float | int]:
        return {name: parse_value(token) for name, token in self.kwargs.items()}

    def parsed_expected(self) -> float | int | None:
        return None if self.expected is None else parse_value(self.expected)

    def label(self) -> str:
        """Читаемая запись вызова, например pow(0.0, -1.0)."""
        rendered = [str(token) for token in self.args]
        rendered += [f"{name}={token}" for name, token in self.kwargs.items()]
        return f"{self.function}({', '.join(rendered)})"


class CaseOutcome(BaseModel):
    """
    Результат воспроизведения эталонного случая.

    actual — repr фактического результата (None при ошибке),
    error — имя класса и сообщение пойманного исключения.
    """

    case: ReferenceCase = Field(..., description="Эталонный случай")
    passed: bool = Field(..., description="Случай пройден")
    actual: str | None = Field(None, description="Фактический результат")
    error: str | None = Field(None, description="Фактическая ошибка")

    model_config = {"frozen": True}
