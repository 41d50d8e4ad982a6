"""
Contract Validation Module

Валидация JSON-таблиц эталонных случаев против JSON Schema.
"""

from .validators import (
    CONTRACTS_DIR,
    REFERENCE_DIR,
    SCHEMA_DIR,
    ContractValidator,
    ReferenceCasesValidator,
    SchemaLoader,
    validate_reference_cases,
)

__all__ = [
    # Paths
    "CONTRACTS_DIR",
    "REFERENCE_DIR",
    "SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ReferenceCasesValidator",
    # Functions
    "validate_reference_cases",
]
