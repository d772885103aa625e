"""
utils/error_handling.py

Иерархия ошибок движка и обработка ошибок на границах API.

Ни одна ошибка не выходит к вызывающему UI-коду: доска отвечает
False/Blocked, фоновая сессия превращает сбой поиска в вердикт.
"""

from typing import Callable, Any
from functools import wraps

from .logging import get_logger


class SolverError(Exception):
    """Базовое исключение движка."""
    pass


class InvalidBoardError(SolverError):
    """Доска не удовлетворяет предусловиям (например, не помещается в 64 бита)."""
    pass


class InvalidTopologyError(SolverError):
    """Некорректная раскладка пользовательской топологии."""
    pass


def handle_errors(default_return: Any = None, log_error: bool = True):
    """
    Декоратор для обработки ошибок.

    Args:
        default_return: значение по умолчанию при ошибке
        log_error: логировать ли ошибку
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SolverError as e:
                if log_error:
                    get_logger().error(f"{func.__name__}: {str(e)}")
                return default_return
            except Exception as e:
                if log_error:
                    get_logger().error(
                        f"{func.__name__}: Неожиданная ошибка: {str(e)}",
                        exc_info=True
                    )
                return default_return
        return wrapper
    return decorator


def safe_call(func: Callable, *args, default: Any = None, **kwargs) -> Any:
    """
    Безопасный вызов с логированием ошибок.

    Returns:
        Результат func или default
    """
    try:
        return func(*args, **kwargs)
    except SolverError as e:
        get_logger().error(f"Ошибка в {func.__name__}: {str(e)}")
        return default
    except Exception as e:
        get_logger().error(
            f"Неожиданная ошибка в {func.__name__}: {str(e)}",
            exc_info=True
        )
        return default
