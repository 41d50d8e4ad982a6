"""
Validation layer: измерение точности в ULP и эталонные таблицы фасада.
"""

from src.validation.reference_cases import (
    load_reference_cases,
    reference_files,
    replay_case,
    replay_file,
)
from src.validation.ulp_meter import (
    UlpErrorMeter,
    combined_sampler,
    log_uniform_sampler,
    ulp_error,
    ulp_of,
    uniform_sampler,
)

__all__ = [
    # ULP meter
    "UlpErrorMeter",
    "ulp_of",
    "ulp_error",
    "uniform_sampler",
    "log_uniform_sampler",
    "combined_sampler",
    # Reference cases
    "load_reference_cases",
    "reference_files",
    "replay_case",
    "replay_file",
]
