"""
JSON Schema Contract Validators

Валидация JSON-файлов эталонных таблиц против формальной JSON Schema
до их разбора в Pydantic модели. Использует библиотеку jsonschema
(Draft 2020-12).

Схемы (contracts/schema/):
- reference_cases.json — таблица эталонных случаев фасада MathLib
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# Корень проекта: 4 уровня вверх от этого файла
CONTRACTS_DIR: Final[Path] = Path(__file__).parent.parent.parent.parent / "contracts"
SCHEMA_DIR: Final[Path] = CONTRACTS_DIR / "schema"
REFERENCE_DIR: Final[Path] = CONTRACTS_DIR / "reference"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем.

    Каждая схема проходит meta-validation при первой загрузке.
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._schema_dir = schema_dir
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'reference_cases')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class ReferenceCasesValidator(ContractValidator):
    """Валидатор таблицы эталонных случаев."""

    def __init__(self):
        super().__init__("reference_cases")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_reference_cases(data: Dict[str, Any]) -> None:
    """
    Валидация таблицы эталонных случаев.

    Args:
        data: Содержимое JSON-файла таблицы

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ReferenceCasesValidator().validate(data)
