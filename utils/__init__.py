"""
utils - Сквозные сервисы: логирование, ошибки, мониторинг.
"""

from .logging import get_logger, setup_file_logging, SolverLogger
from .error_handling import (
    SolverError, InvalidBoardError, InvalidTopologyError,
    handle_errors, safe_call
)
from .monitoring import PerformanceMonitor, get_monitor

__all__ = [
    'get_logger', 'setup_file_logging', 'SolverLogger',
    'SolverError', 'InvalidBoardError', 'InvalidTopologyError',
    'handle_errors', 'safe_call',
    'PerformanceMonitor', 'get_monitor',
]
