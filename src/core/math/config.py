"""
MathLib Config — Конфигурация математического ядра

Неизменяемая конфигурация, читаемая один раз при импорте фасада
(write once, read many). Источник значений: переменные окружения.

Переменные окружения:
- CORE_MATH_LIBRARY: бэкенд по умолчанию (FASTMATH | MATH)
- CORE_MATH_ORACLE_DIGITS: точность оракула DFP в значащих цифрах
- CORE_MATH_TRIALS: число случайных испытаний при измерении точности
- CORE_MATH_MAX_ERROR_ULP: бюджет ошибки в ULP по умолчанию
"""

import os
from dataclasses import dataclass
from typing import Final, Mapping

from src.core.math.backends import MathLibraryType


# =============================================================================
# CONSTANTS
# =============================================================================

ENV_LIBRARY: Final[str] = "CORE_MATH_LIBRARY"
ENV_ORACLE_DIGITS: Final[str] = "CORE_MATH_ORACLE_DIGITS"
ENV_TRIALS: Final[str] = "CORE_MATH_TRIALS"
ENV_MAX_ERROR_ULP: Final[str] = "CORE_MATH_MAX_ERROR_ULP"

# Точность оракула: 40 цифр дают ошибку оракула ~1e-24 ULP double
DEFAULT_ORACLE_DIGITS: Final[int] = 40

DEFAULT_TRIALS: Final[int] = 1000

# Бюджет для корректно округлённых функций: 0.5 ULP + запас
DEFAULT_MAX_ERROR_ULP: Final[float] = 0.51


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class MathLibConfig:
    """
    Конфигурация математического ядра.

    Attributes:
        library: Бэкенд фасада по умолчанию
        oracle_digits: Значащие цифры поля DFP для измерения точности
        default_trials: Число испытаний UlpErrorMeter по умолчанию
        max_error_ulp: Бюджет ошибки по умолчанию (ULP)
    """

    library: MathLibraryType = MathLibraryType.FASTMATH
    oracle_digits: int = DEFAULT_ORACLE_DIGITS
    default_trials: int = DEFAULT_TRIALS
    max_error_ulp: float = DEFAULT_MAX_ERROR_ULP

    def __post_init__(self) -> None:
        if self.oracle_digits < 1:
            raise ValueError(f"oracle_digits must be >= 1, got {self.oracle_digits}")
        if self.default_trials < 1:
            raise ValueError(f"default_trials must be >= 1, got {self.default_trials}")
        if not self.max_error_ulp > 0:
            raise ValueError(f"max_error_ulp must be positive, got {self.max_error_ulp}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MathLibConfig":
        """
        Загрузка конфигурации из переменных окружения.

        Отсутствующие переменные получают значения по умолчанию.

        Args:
            environ: Источник переменных (default: os.environ)

        Returns:
            MathLibConfig

        Raises:
            ValueError: Если значение переменной невалидно (сообщение
                содержит имя переменной)
        """
        env = os.environ if environ is None else environ

        library_name = env.get(ENV_LIBRARY, MathLibraryType.FASTMATH.value)
        try:
            library = MathLibraryType(library_name.strip().upper())
        except ValueError:
            raise ValueError(f"{ENV_LIBRARY}: unknown math library '{library_name}'") from None

        return cls(
            library=library,
            oracle_digits=_parse(env, ENV_ORACLE_DIGITS, int, DEFAULT_ORACLE_DIGITS),
            default_trials=_parse(env, ENV_TRIALS, int, DEFAULT_TRIALS),
            max_error_ulp=_parse(env, ENV_MAX_ERROR_ULP, float, DEFAULT_MAX_ERROR_ULP),
        )


def _parse(env: Mapping[str, str], name: str, kind: type, default):
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name}: cannot parse {raw!r} as {kind.__name__}") from None
