"""
solvers/base.py

Базовый класс для решателей.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from dataclasses import dataclass

from core.board import BoardState
from core.utils import Move
from utils.logging import get_logger


@dataclass
class SolverStats:
    """Статистика работы решателя (накапливается между вызовами)."""
    nodes_visited: int = 0
    nodes_pruned: int = 0
    max_depth: int = 0
    time_elapsed: float = 0.0
    solution_length: int = 0

    def __str__(self) -> str:
        return (
            f"Nodes: {self.nodes_visited}, "
            f"Pruned: {self.nodes_pruned}, "
            f"Depth: {self.max_depth}, "
            f"Time: {self.time_elapsed:.3f}s"
        )


class BaseSolver(ABC):
    """
    Базовый класс решателя.

    Решатели работают только с собственными копиями доски:
    переданная доска не изменяется.
    """

    def __init__(self, use_symmetry: bool = True, verbose: bool = False):
        self.use_symmetry = use_symmetry
        self.verbose = verbose
        self.stats = SolverStats()

    @abstractmethod
    def solve(self, board: BoardState) -> Optional[List[Move]]:
        """
        Решает головоломку.

        Args:
            board: начальная позиция

        Returns:
            Список ходов (from, jumped, to) или None
        """
        pass

    def reset_stats(self) -> None:
        self.stats = SolverStats()

    def _log(self, message: str) -> None:
        """Пишет в лог, если verbose=True."""
        if self.verbose:
            get_logger().info(f"[{self.__class__.__name__}] {message}")
