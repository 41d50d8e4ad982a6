"""
ULP Error Meter — Измерение ошибки функций в ULP против оракула DFP

Техника измерения:
1. Аргументы генерируются sampler'ом из random.Random(seed)
2. Проверяемая функция считает результат в double
3. Оракул считает тот же результат в поле DfpField повышенной точности
4. Ошибка = (tested - exact) / ulp(exact), где ulp(ref) = |ref - сосед(ref)|,
   сосед получается инверсией младшего бита мантиссы

Детерминизм: одинаковый seed даёт одинаковую последовательность
аргументов и одинаковый отчёт.
"""

import math
import random
from typing import Callable, Sequence

from src.core.dfp import Dfp, DfpField
from src.core.domain.accuracy import AccuracyReport
from src.core.logging_config import get_logger
from src.core.math.config import MathLibConfig
from src.core.math.ieee754 import bits_to_double, double_to_bits

logger = get_logger(__name__)

Sampler = Callable[[random.Random], Sequence[float]]


# =============================================================================
# ULP
# =============================================================================


def ulp_of(value: float) -> float:
    """
    Расстояние от value до double с инвертированным младшим битом.

    Examples:
        >>> ulp_of(1.0)
        2.220446049250313e-16
        >>> ulp_of(0.0)
        5e-324
    """
    neighbour = bits_to_double(double_to_bits(value) ^ 1)
    return abs(value - neighbour)


def ulp_error(tested: float, exact: Dfp) -> float:
    """
    Знаковая ошибка tested относительно exact в ULP округлённого exact.

    Разность и деление выполняются в точности поля exact.

    Args:
        tested: Результат проверяемой функции
        exact: Значение оракула

    Returns:
        (tested - exact) / ulp(exact); 0.0 при совпадении NaN/бесконечностей,
        inf при несовпадении специальных значений
    """
    reference = exact.to_double()
    if math.isnan(tested) or math.isnan(reference):
        return 0.0 if math.isnan(tested) and math.isnan(reference) else math.inf
    if math.isinf(tested) or math.isinf(reference):
        return 0.0 if tested == reference else math.inf

    field = exact.field
    difference = field.new_dfp(tested).subtract(exact)
    return difference.divide(field.new_dfp(ulp_of(reference))).to_double()


# =============================================================================
# SAMPLERS
# =============================================================================


def uniform_sampler(low: float, high: float) -> Sampler:
    """Один аргумент, равномерно на [low, high]."""
    return lambda rng: (rng.uniform(low, high),)


def log_uniform_sampler(min_exponent: int, max_exponent: int, signed: bool = False) -> Sampler:
    """
    Один аргумент (1 + u)·2^k, k равномерно на [min_exponent, max_exponent].

    Args:
        signed: Случайный знак аргумента
    """

    def sample(rng: random.Random) -> tuple[float]:
        value = math.ldexp(1.0 + rng.random(), rng.randint(min_exponent, max_exponent))
        if signed and rng.random() < 0.5:
            value = -value
        return (value,)

    return sample


def combined_sampler(*samplers: Sampler) -> Sampler:
    """Склейка аргументов нескольких sampler'ов (в порядке перечисления)."""

    def sample(rng: random.Random) -> tuple[float, ...]:
        values: list[float] = []
        for sampler in samplers:
            values.extend(sampler(rng))
        return tuple(values)

    return sample


# =============================================================================
# METER
# =============================================================================


class UlpErrorMeter:
    """
    Измеритель точности функций double против оракула DFP.

    Args:
        field: Поле оракула (default: DfpField(config.oracle_digits))
        seed: Seed генератора аргументов
        config: Конфигурация (default: MathLibConfig.from_env())

    Examples:
        >>> meter = UlpErrorMeter(seed=42)
        >>> report = meter.measure(
        ...     "exp", fastmath.exp, dfp_math.exp, uniform_sampler(-700, 700), trials=100
        ... )
        >>> report.within_budget
        True
    """

    def __init__(
        self,
        field: DfpField | None = None,
        seed: int = 0,
        config: MathLibConfig | None = None,
    ):
        self.config = config if config is not None else MathLibConfig.from_env()
        self.field = field if field is not None else DfpField(self.config.oracle_digits)
        self.seed = seed

    def measure(
        self,
        name: str,
        tested: Callable[..., float],
        oracle: Callable[..., Dfp],
        sampler: Sampler,
        trials: int | None = None,
        budget_ulp: float | None = None,
    ) -> AccuracyReport:
        """
        Измерение ошибки tested против оракула DFP.

        Args:
            name: Имя функции для отчёта
            tested: Проверяемая функция над double
            oracle: Функция над Dfp (аргументы переводятся в поле точно)
            sampler: Генератор аргументов
            trials: Число испытаний (default: config.default_trials)
            budget_ulp: Бюджет ошибки (default: config.max_error_ulp)

        Returns:
            AccuracyReport
        """

        def exact_error(args: Sequence[float]) -> float:
            exact = oracle(*(self.field.new_dfp(arg) for arg in args))
            return ulp_error(tested(*args), exact)

        return self._run(name, exact_error, sampler, trials, budget_ulp)

    def measure_against(
        self,
        name: str,
        tested: Callable[..., float],
        reference: Callable[..., float],
        sampler: Sampler,
        trials: int | None = None,
        budget_ulp: float | None = None,
    ) -> AccuracyReport:
        """
        Измерение ошибки tested против эталонной функции над double.

        Используется для функций без оракула DFP (гиперболические) и для
        проверок обращения, например sinh(asinh(x)) против x.
        """

        def reference_error(args: Sequence[float]) -> float:
            return ulp_error(tested(*args), self.field.new_dfp(reference(*args)))

        return self._run(name, reference_error, sampler, trials, budget_ulp)

    def _run(
        self,
        name: str,
        error_of: Callable[[Sequence[float]], float],
        sampler: Sampler,
        trials: int | None,
        budget_ulp: float | None,
    ) -> AccuracyReport:
        trials = trials if trials is not None else self.config.default_trials
        budget_ulp = budget_ulp if budget_ulp is not None else self.config.max_error_ulp
        rng = random.Random(self.seed)

        worst_error = 0.0
        worst_input: tuple[float, ...] = ()
        for _ in range(trials):
            args = tuple(sampler(rng))
            error = abs(error_of(args))
            if error > worst_error or not worst_input:
                worst_error = error
                worst_input = args

        report = AccuracyReport(
            function=name,
            trials=trials,
            max_error_ulp=worst_error,
            budget_ulp=budget_ulp,
            worst_input=worst_input,
            within_budget=worst_error <= budget_ulp,
        )
        if report.within_budget:
            logger.info(report.summary())
        else:
            logger.warning("%s, worst input %s", report.summary(), worst_input)
        return report
