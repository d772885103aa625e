"""
solvers - Поиск решений Peg Solitaire

Экспортирует:
- BacktrackingSolver: поиск с возвратом и кэшем тупиков
- DeadStateCache: потокобезопасный кэш нерешаемых состояний
- SearchSession: фоновая сессия поиска подсказки с отменой
"""

from .base import BaseSolver, SolverStats
from .dead_cache import DeadStateCache
from .backtracking import BacktrackingSolver
from .session import SearchSession

__all__ = [
    'BaseSolver',
    'SolverStats',
    'DeadStateCache',
    'BacktrackingSolver',
    'SearchSession',
]
