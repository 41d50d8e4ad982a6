"""
Tests for ULP Error Meter

Проверяет:
- ulp_of (инверсия младшего бита)
- ulp_error: знак, специальные значения, точность поля оракула
- Sampler'ы: диапазоны и детерминизм
- UlpErrorMeter: детерминированные отчёты, превышение бюджета,
  значения по умолчанию из MathLibConfig, логирование
"""

import logging
import math
import random

import pytest
from pydantic import ValidationError

from src.core.dfp import DfpField, dfp_math
from src.core.domain import AccuracyReport
from src.core.math import fastmath
from src.core.math.config import MathLibConfig
from src.core.math.ieee754 import DOUBLE_MIN_VALUE, next_up
from src.validation import (
    UlpErrorMeter,
    combined_sampler,
    log_uniform_sampler,
    ulp_error,
    ulp_of,
    uniform_sampler,
)


@pytest.fixture
def field() -> DfpField:
    return DfpField(40)


# =============================================================================
# ТЕСТЫ ULP
# =============================================================================


class TestUlpOf:
    """Тесты для ulp_of"""

    def test_regular_values(self) -> None:
        """ulp нормализованных значений"""
        assert ulp_of(1.0) == 2.0**-52
        assert ulp_of(3.0) == 2.0**-51
        assert ulp_of(-1.0) == 2.0**-52

    def test_zero(self) -> None:
        """ulp нуля — наименьшая субнормаль"""
        assert ulp_of(0.0) == DOUBLE_MIN_VALUE


class TestUlpError:
    """Тесты для ulp_error"""

    def test_exact_match(self, field: DfpField) -> None:
        """Совпадение с оракулом даёт 0"""
        assert ulp_error(1.5, field.new_dfp("1.5")) == 0.0

    def test_one_ulp_signed(self, field: DfpField) -> None:
        """Ошибка знаковая и измеряется в ULP"""
        exact = field.new_dfp(1.0)
        assert ulp_error(next_up(1.0), exact) == 1.0
        assert ulp_error(3.0 - 2.0**-51, field.new_dfp(3.0)) == -1.0

    def test_rounding_error_of_third(self, field: DfpField) -> None:
        """1/3 в double отличается от точного значения меньше чем на 0.5 ULP"""
        error = ulp_error(1.0 / 3.0, field.one / 3)
        assert 0.0 < abs(error) < 0.5

    def test_special_values(self, field: DfpField) -> None:
        """NaN и бесконечности"""
        assert ulp_error(math.nan, field.new_dfp("NaN")) == 0.0
        assert ulp_error(math.inf, field.new_dfp("Infinity")) == 0.0
        assert ulp_error(1.0, field.new_dfp("NaN")) == math.inf
        assert ulp_error(math.inf, field.new_dfp(1)) == math.inf
        assert ulp_error(-math.inf, field.new_dfp("Infinity")) == math.inf


# =============================================================================
# ТЕСТЫ SAMPLER'ОВ
# =============================================================================


class TestSamplers:
    """Тесты генераторов аргументов"""

    def test_uniform_range(self) -> None:
        """Равномерный sampler остаётся в диапазоне"""
        sampler = uniform_sampler(-2.0, 3.0)
        rng = random.Random(1)
        for _ in range(100):
            (value,) = sampler(rng)
            assert -2.0 <= value <= 3.0

    def test_log_uniform_range(self) -> None:
        """Лог-равномерный sampler: [2^min, 2^(max+1))"""
        sampler = log_uniform_sampler(-10, 10)
        rng = random.Random(2)
        for _ in range(100):
            (value,) = sampler(rng)
            assert 2.0**-10 <= value < 2.0**11

    def test_log_uniform_signed(self) -> None:
        """Знаковый sampler выдаёт значения обоих знаков"""
        sampler = log_uniform_sampler(0, 1, signed=True)
        rng = random.Random(3)
        values = [sampler(rng)[0] for _ in range(100)]
        assert any(value < 0 for value in values)
        assert any(value > 0 for value in values)

    def test_combined(self) -> None:
        """Склейка аргументов в порядке sampler'ов"""
        sampler = combined_sampler(uniform_sampler(0.0, 1.0), uniform_sampler(10.0, 11.0))
        x, y = sampler(random.Random(4))
        assert 0.0 <= x <= 1.0
        assert 10.0 <= y <= 11.0

    def test_deterministic(self) -> None:
        """Одинаковый seed — одинаковые аргументы"""
        sampler = log_uniform_sampler(-5, 5, signed=True)
        first_rng = random.Random(7)
        second_rng = random.Random(7)
        first = [sampler(first_rng) for _ in range(10)]
        second = [sampler(second_rng) for _ in range(10)]
        assert first == second


# =============================================================================
# ТЕСТЫ ИЗМЕРИТЕЛЯ
# =============================================================================


class TestUlpErrorMeter:
    """Тесты для UlpErrorMeter"""

    def test_report_fields(self, field: DfpField) -> None:
        """Отчёт содержит имя, число испытаний и бюджет"""
        meter = UlpErrorMeter(field=field, seed=1, config=MathLibConfig())
        report = meter.measure(
            "exp", fastmath.exp, dfp_math.exp, uniform_sampler(-1.0, 1.0), trials=20
        )
        assert isinstance(report, AccuracyReport)
        assert report.function == "exp"
        assert report.trials == 20
        assert report.budget_ulp == 0.51
        assert report.within_budget
        assert len(report.worst_input) == 1

    def test_deterministic_reports(self, field: DfpField) -> None:
        """Одинаковый seed даёт одинаковый отчёт"""
        config = MathLibConfig()
        first = UlpErrorMeter(field=field, seed=5, config=config).measure(
            "sin", fastmath.sin, dfp_math.sin, uniform_sampler(-3.0, 3.0), trials=15
        )
        second = UlpErrorMeter(field=field, seed=5, config=config).measure(
            "sin", fastmath.sin, dfp_math.sin, uniform_sampler(-3.0, 3.0), trials=15
        )
        assert first == second

    def test_over_budget(self, field: DfpField) -> None:
        """Искажённая функция превышает бюджет"""
        meter = UlpErrorMeter(field=field, seed=2, config=MathLibConfig())

        def biased_exp(x: float) -> float:
            return fastmath.exp(x) * (1.0 + 2.0**-48)

        report = meter.measure(
            "biased_exp", biased_exp, dfp_math.exp, uniform_sampler(-1.0, 1.0), trials=10
        )
        assert not report.within_budget
        assert report.max_error_ulp > 4.0
        assert "OVER BUDGET" in report.summary()

    def test_defaults_from_config(self) -> None:
        """Поле, число испытаний и бюджет берутся из конфигурации"""
        config = MathLibConfig(oracle_digits=30, default_trials=7, max_error_ulp=2.0)
        meter = UlpErrorMeter(config=config)
        assert meter.field == DfpField(30)
        report = meter.measure("sqrt", fastmath.sqrt, dfp_math.sqrt, uniform_sampler(0.0, 4.0))
        assert report.trials == 7
        assert report.budget_ulp == 2.0

    def test_measure_against_reference(self, field: DfpField) -> None:
        """Сравнение с эталонной функцией над double"""
        meter = UlpErrorMeter(field=field, seed=3, config=MathLibConfig())
        report = meter.measure_against(
            "hypot", fastmath.hypot, math.hypot, uniform_sampler(-5.0, 5.0), trials=10
        )
        assert report.max_error_ulp == 0.0

    def test_logs_summary(self, field: DfpField, caplog: pytest.LogCaptureFixture) -> None:
        """Итог пишется в лог: INFO в бюджете, WARNING сверх бюджета"""
        meter = UlpErrorMeter(field=field, seed=4, config=MathLibConfig())
        with caplog.at_level(logging.INFO, logger="src.validation.ulp_meter"):
            meter.measure("exp", fastmath.exp, dfp_math.exp, uniform_sampler(0.0, 1.0), trials=3)
            meter.measure(
                "bad", lambda x: x + 1.0, dfp_math.exp, uniform_sampler(1.0, 2.0), trials=3
            )

        levels = {record.levelno for record in caplog.records}
        assert logging.INFO in levels
        assert logging.WARNING in levels
        assert any("OVER BUDGET" in record.getMessage() for record in caplog.records)


class TestAccuracyReport:
    """Тесты модели AccuracyReport"""

    def test_inconsistent_flag_rejected(self) -> None:
        """within_budget должен соответствовать ошибке и бюджету"""
        with pytest.raises(ValidationError, match="contradicts"):
            AccuracyReport(
                function="exp",
                trials=1,
                max_error_ulp=2.0,
                budget_ulp=0.51,
                within_budget=True,
            )

    def test_frozen(self) -> None:
        """Отчёт неизменяем"""
        report = AccuracyReport(
            function="exp", trials=1, max_error_ulp=0.1, budget_ulp=0.51, within_budget=True
        )
        with pytest.raises(ValidationError):
            report.trials = 2

    def test_summary(self) -> None:
        """Строка для лога"""
        report = AccuracyReport(
            function="log", trials=10, max_error_ulp=0.25, budget_ulp=0.51, within_budget=True
        )
        assert report.summary() == "log: max error 0.250 ulp (budget 0.51 ulp, 10 trials) OK"
