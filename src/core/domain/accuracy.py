"""
AccuracyReport — Итог измерения точности функции в ULP

Immutable Pydantic модель, которую возвращает UlpErrorMeter.
"""

from pydantic import BaseModel, Field, field_validator


class AccuracyReport(BaseModel):
    """
    Результат серии случайных испытаний одной функции.

    max_error_ulp — наибольшая ошибка |tested - oracle| в ULP эталона;
    worst_input — аргументы, на которых она достигнута.
    """

    function: str = Field(..., min_length=1, description="Имя проверяемой функции")
    trials: int = Field(..., ge=1, description="Число испытаний")
    max_error_ulp: float = Field(..., ge=0, description="Максимальная ошибка (ULP)")
    budget_ulp: float = Field(..., gt=0, description="Допустимая ошибка (ULP)")
    worst_input: tuple[float, ...] = Field(default=(), description="Аргументы худшего случая")
    within_budget: bool = Field(..., description="max_error_ulp <= budget_ulp")

    model_config = {"frozen": True}

    @field_validator("within_budget")
    @classmethod
    def validate_within_budget(cls, v: bool, info) -> bool:
        """Проверка согласованности флага с ошибкой и бюджетом"""
        if "max_error_ulp" in info.data and "budget_ulp" in info.data:
            actual = info.data["max_error_ulp"] <= info.data["budget_ulp"]
            if v != actual:
                raise ValueError(
                    f"within_budget={v} contradicts max_error_ulp="
                    f"{info.data['max_error_ulp']} and budget_ulp={info.data['budget_ulp']}"
                )
        return v

    def summary(self) -> str:
        """Одна строка для лога."""
        status = "OK" if self.within_budget else "OVER BUDGET"
        return (
            f"{self.function}: max error {self.max_error_ulp:.3f} ulp "
            f"(budget {self.budget_ulp} ulp, {self.trials} trials) {status}"
        )
