"""
Math Errors — Иерархия исключений математического ядра

Все сбои ядра являются ArithmeticError, поэтому вызывающий код может
перехватить их единым `except ArithmeticError`. Внутри иерархии различимы
три вида:
- MathDomainError: NaN на входе "громкой" операции, аргумент вне области
  определения, неопределённая форма (0/0, ∞/∞)
- MathOverflowError: результат точной целочисленной операции не помещается
  в 32/64 бита
- MathZeroDivisionError: деление на ±0 в divide, floor_div/floor_mod по нулю

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ядро не делает повторов и локального восстановления
2. Ошибка поднимается синхронно непосредственному вызывающему
3. Сообщение называет операцию и значение аргумента
"""


class MathArithmeticError(ArithmeticError):
    """Базовое исключение математического ядра."""


class MathDomainError(MathArithmeticError):
    """
    Аргумент вне области определения или NaN на входе "громкой" операции.

    Examples:
        log(-1.0), sqrt(-2.0), asin(1.5), atan2(NaN, 1.0), signum(NaN)
    """


class MathOverflowError(MathArithmeticError, OverflowError):
    """Результат точной целочисленной операции вне диапазона int/long."""


class MathZeroDivisionError(MathDomainError, ZeroDivisionError):
    """Деление на ноль в "строгом" делении или floor-арифметике."""


# =============================================================================
# ФАБРИКИ СООБЩЕНИЙ
# =============================================================================


def nan_input(operation: str) -> MathDomainError:
    """
    Ошибка "NaN на входе" для громкой операции.

    Args:
        operation: Сигнатура операции (например, 'log(x)')

    Returns:
        MathDomainError с единообразным сообщением
    """
    return MathDomainError(f"Input of {operation} is NaN.")


def out_of_domain(operation: str, condition: str) -> MathDomainError:
    """
    Ошибка "аргумент вне области определения".

    Args:
        operation: Сигнатура операции (например, 'acosh(x)')
        condition: Нарушенное условие (например, 'x < 1')

    Returns:
        MathDomainError с единообразным сообщением
    """
    return MathDomainError(f"{operation} with {condition} is not defined.")
