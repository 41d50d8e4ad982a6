"""
Reference Cases — Воспроизведение эталонных таблиц против фасада MathLib

Таблицы лежат в contracts/reference/*.json. Загрузка в два шага:
1. Валидация JSON против contracts/schema/reference_cases.json (jsonschema)
2. Разбор случаев в Pydantic модели ReferenceCase

Сравнение результата:
- NaN совпадает с NaN
- bit_exact: сравнение битов double (знак нуля значим)
- иначе: |actual - expected| <= tolerance · ulp(expected)
- Ожидаемая ошибка совпадает, если исключение — экземпляр класса ErrorKind
"""

import json
import math
from pathlib import Path
from types import ModuleType
from typing import Any

from src.core.contracts import REFERENCE_DIR, validate_reference_cases
from src.core.domain.reference_case import CaseOutcome, ReferenceCase
from src.core.logging_config import get_logger
from src.core.math import mathlib
from src.core.math.ieee754 import double_to_bits, ulp

logger = get_logger(__name__)


def reference_files() -> list[Path]:
    """Все эталонные таблицы проекта, отсортированные по имени."""
    return sorted(REFERENCE_DIR.glob("*.json"))


def _resolve(source: str | Path) -> Path:
    path = Path(source)
    if path.suffix == ".json" and path.exists():
        return path
    return REFERENCE_DIR / f"{path.stem}.json"


def load_reference_cases(source: str | Path) -> list[ReferenceCase]:
    """
    Загрузка эталонной таблицы.

    Args:
        source: Путь к JSON-файлу или имя таблицы в contracts/reference
            (например, 'pow')

    Returns:
        Список эталонных случаев в порядке файла

    Raises:
        FileNotFoundError: Если таблица не найдена
        jsonschema.ValidationError: Если файл не соответствует схеме
        pydantic.ValidationError: Если токен значения не распознан
    """
    path = _resolve(source)
    if not path.exists():
        raise FileNotFoundError(f"Reference table not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_reference_cases(data)
    return [ReferenceCase.model_validate(case) for case in data["cases"]]


def _matches(actual: Any, case: ReferenceCase) -> bool:
    expected = case.parsed_expected()
    if isinstance(actual, bool):
        return False
    if isinstance(expected, int) and isinstance(actual, int):
        return actual == expected

    actual = float(actual)
    expected = float(expected)
    if math.isnan(expected) or math.isnan(actual):
        return math.isnan(expected) and math.isnan(actual)
    if case.bit_exact:
        return double_to_bits(actual) == double_to_bits(expected)
    if actual == expected:
        return True
    if math.isinf(actual) or math.isinf(expected):
        return False
    return abs(actual - expected) <= case.tolerance * ulp(expected)


def replay_case(case: ReferenceCase, module: ModuleType = mathlib) -> CaseOutcome:
    """
    Вызов функции фасада и сравнение с ожиданием.

    Args:
        case: Эталонный случай
        module: Модуль с функциями (default: фасад mathlib)

    Returns:
        CaseOutcome

    Raises:
        AttributeError: Если функции нет в модуле
    """
    function = getattr(module, case.function)
    try:
        actual = function(*case.parsed_args(), **case.parsed_kwargs())
    except ArithmeticError as exc:
        passed = case.raises is not None and isinstance(exc, case.raises.exception_type)
        return CaseOutcome(case=case, passed=passed, error=f"{type(exc).__name__}: {exc}")

    if case.raises is not None:
        return CaseOutcome(case=case, passed=False, actual=repr(actual))
    return CaseOutcome(case=case, passed=_matches(actual, case), actual=repr(actual))


def replay_file(source: str | Path, module: ModuleType = mathlib) -> list[CaseOutcome]:
    """
    Воспроизведение всей таблицы.

    Провалы логируются на уровне DEBUG, итог — на уровне INFO.
    """
    outcomes = [replay_case(case, module) for case in load_reference_cases(source)]
    failures = [outcome for outcome in outcomes if not outcome.passed]
    for outcome in failures:
        logger.debug(
            "Reference case failed: %s expected %s, got %s",
            outcome.case.label(),
            outcome.case.raises.value if outcome.case.raises else outcome.case.expected,
            outcome.error or outcome.actual,
        )
    logger.info(
        "Replayed %s: %d cases, %d failed", Path(source).stem, len(outcomes), len(failures)
    )
    return outcomes
