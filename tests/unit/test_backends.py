"""
Tests for Math Backends

Проверяет:
- create_math_library по типу, имени (без учёта регистра) и объекту
- Отказ на неизвестном имени и объекте без протокола MathLibrary
- FastMathLibrary делегирует ядру fastmath
- StdMathLibrary переводит исключения модуля math в значения IEEE
"""

import math

import pytest

from src.core.math import fastmath
from src.core.math.backends import (
    FastMathLibrary,
    MathLibrary,
    MathLibraryType,
    StdMathLibrary,
    create_math_library,
)


class HalfLibrary(FastMathLibrary):
    """Пользовательский бэкенд: sqrt возвращает половину аргумента."""

    name = "HALF"

    @staticmethod
    def sqrt(x: float) -> float:
        return x / 2


# =============================================================================
# ТЕСТЫ ФАБРИКИ
# =============================================================================


class TestCreateMathLibrary:
    """Тесты для create_math_library"""

    def test_by_type(self) -> None:
        """Создание по MathLibraryType"""
        assert isinstance(create_math_library(MathLibraryType.FASTMATH), FastMathLibrary)
        assert isinstance(create_math_library(MathLibraryType.MATH), StdMathLibrary)

    def test_by_name_case_insensitive(self) -> None:
        """Имя без учёта регистра"""
        assert isinstance(create_math_library("fastmath"), FastMathLibrary)
        assert isinstance(create_math_library("Math"), StdMathLibrary)

    def test_unknown_name(self) -> None:
        """Неизвестное имя"""
        with pytest.raises(ValueError, match="Unknown math library 'GPU'"):
            create_math_library("GPU")

    def test_custom_object(self) -> None:
        """Объект с протоколом возвращается как есть"""
        library = HalfLibrary()
        assert isinstance(library, MathLibrary)
        assert create_math_library(library) is library

    def test_object_without_protocol(self) -> None:
        """Объект без протокола отвергается"""
        with pytest.raises(TypeError, match="does not implement the MathLibrary protocol"):
            create_math_library(object())

    def test_repr(self) -> None:
        """repr бэкендов"""
        assert repr(create_math_library("FASTMATH")) == "FastMathLibrary()"
        assert repr(create_math_library("MATH")) == "StdMathLibrary()"


# =============================================================================
# ТЕСТЫ БЭКЕНДОВ
# =============================================================================


class TestFastMathLibrary:
    """Тесты для FastMathLibrary"""

    def test_delegates_to_kernel(self) -> None:
        """Функции совпадают с ядром"""
        library = FastMathLibrary()
        assert library.name == "FASTMATH"
        assert library.exp(1.0) == fastmath.exp(1.0)
        assert library.atan2(1.0, -1.0) == fastmath.atan2(1.0, -1.0)
        assert library.sin_and_cos(0.5) == fastmath.sin_and_cos(0.5)


class TestStdMathLibrary:
    """Тесты для StdMathLibrary"""

    def test_name(self) -> None:
        """Имя бэкенда"""
        assert StdMathLibrary().name == "MATH"

    def test_overflow_to_infinity(self) -> None:
        """OverflowError модуля math переводится в ±inf"""
        library = StdMathLibrary()
        assert library.exp(1000.0) == math.inf
        assert library.expm1(1000.0) == math.inf
        assert library.pow(10.0, 400.0) == math.inf
        assert library.pow(-10.0, 401.0) == -math.inf

    def test_domain_to_nan(self) -> None:
        """ValueError модуля math переводится в NaN"""
        library = StdMathLibrary()
        assert math.isnan(library.log(-1.0))
        assert math.isnan(library.log1p(-2.0))
        assert math.isnan(library.sin(math.inf))

    def test_log_of_zero(self) -> None:
        """log(±0) == -inf"""
        library = StdMathLibrary()
        assert library.log(0.0) == -math.inf
        assert library.log10(-0.0) == -math.inf
        assert library.log1p(-1.0) == -math.inf

    def test_pow_special_values_shared(self) -> None:
        """Таблица особых значений pow общая с ядром"""
        library = StdMathLibrary()
        assert library.pow(math.nan, 0.0) == 1.0
        assert library.pow(1.0, math.nan) == 1.0
        assert library.pow(-0.0, -1.0) == -math.inf

    def test_log_base(self) -> None:
        """log_base через частное логарифмов"""
        library = StdMathLibrary()
        assert library.log_base(10.0, 0.0) == -math.inf
        assert abs(library.log_base(2.0, 8.0) - 3.0) <= 4.0 * 2.0**-51
