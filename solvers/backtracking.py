"""
solvers/backtracking.py

Поиск с возвратом по одной доске с кэшем тупиковых состояний.

Ходы применяются и откатываются на месте (BoardState.applied),
состояния склеиваются по каноническому отпечатку с учётом симметрий
топологии. Поиск можно прервать флагом отмены.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from .base import BaseSolver
from .dead_cache import DeadStateCache
from analysis.symmetry import Symmetry, canonical_id, symmetry_group, to_bits
from core.board import BoardState
from core.topology import Topology
from core.utils import Move


def _never_cancelled() -> bool:
    return False


class BacktrackingSolver(BaseSolver):
    """
    DFS с мемоизацией нерешаемых состояний.

    Особенности:
    - В кэш попадают только полностью исследованные состояния
    - Прерванная ветка ничего не записывает
    - Кэш можно разделять между решателями и сессиями
    """

    def __init__(self, cache: Optional[DeadStateCache] = None,
                 should_cancel: Optional[Callable[[], bool]] = None,
                 use_symmetry: bool = True, verbose: bool = False):
        super().__init__(use_symmetry, verbose)
        self.cache = cache if cache is not None else DeadStateCache()
        self.should_cancel = should_cancel or _never_cancelled
        self._groups: Dict[Topology, Tuple[Symmetry, ...]] = {}

    # =====================================================
    # Публичные операции
    # =====================================================

    def is_solvable(self, board: BoardState) -> bool:
        """
        Достижима ли победа из позиции. Доска не изменяется.

        При отмене возвращает False; вызывающий код должен сам
        проверить флаг и не считать такой ответ вердиктом.
        """
        start = time.perf_counter()
        result = self._is_solvable(board)
        self.stats.time_elapsed += time.perf_counter() - start
        return result

    def find_winning_move(self, board: BoardState) -> Optional[Move]:
        """Первый (в порядке list_moves) ход, после которого позиция решаема."""
        start = time.perf_counter()
        moves = self._winning_moves(board, first_only=True)
        self.stats.time_elapsed += time.perf_counter() - start
        return moves[0] if moves else None

    def find_winning_moves(self, board: BoardState) -> List[Move]:
        """Все ходы, сохраняющие решаемость."""
        start = time.perf_counter()
        moves = self._winning_moves(board, first_only=False)
        self.stats.time_elapsed += time.perf_counter() - start
        return moves

    def solve(self, board: BoardState) -> Optional[List[Move]]:
        """Полное решение: цепочка выигрышных ходов до победы."""
        start = time.perf_counter()
        self._log(f"Starting search ({board.topology.name}, pegs={board.peg_count()})")

        work = board.clone()
        path: List[Move] = []
        while not work.is_winning_state():
            move = self._first_winning_move(work)
            if move is None:
                path = None
                break
            work.perform_move(move)
            path.append(move)

        self.stats.time_elapsed += time.perf_counter() - start
        if path is not None:
            self.stats.solution_length = len(path)
        self._log(f"Done: {self.stats}")
        return path

    # =====================================================
    # Поиск
    # =====================================================

    def _first_winning_move(self, board: BoardState) -> Optional[Move]:
        moves = self._winning_moves(board, first_only=True)
        return moves[0] if moves else None

    def _winning_moves(self, board: BoardState, first_only: bool) -> List[Move]:
        result = []
        for move in board.list_moves():
            if self.should_cancel():
                return []
            probe = board.clone()
            if probe.perform_move(move) and self._is_solvable(probe):
                result.append(move)
                if first_only:
                    break
        return result

    def _is_solvable(self, board: BoardState) -> bool:
        if self.should_cancel():
            return False
        work = board.clone()
        work.history.clear()
        return self._search(work, 0)

    def _search(self, board: BoardState, depth: int) -> bool:
        if self.should_cancel():
            return False

        self.stats.nodes_visited += 1
        self.stats.max_depth = max(self.stats.max_depth, depth)

        if board.is_winning_state():
            return True

        key = self._get_key(board)
        if key in self.cache:
            self.stats.nodes_pruned += 1
            return False

        moves = board.list_moves()
        if not moves:
            self.cache.add(key)
            return False

        for move in moves:
            if self.should_cancel():
                return False
            with board.applied(move) as ok:
                if ok and self._search(board, depth + 1):
                    return True

        # Состояние исследовано не полностью
        if self.should_cancel():
            return False

        self.cache.add(key)
        return False

    def _get_key(self, board: BoardState) -> Tuple[str, int]:
        """Ключ кэша: (топология, канонический отпечаток)."""
        topology = board.topology
        if not self.use_symmetry:
            return topology.name, to_bits(board, 0, False)
        group = self._groups.get(topology)
        if group is None:
            group = symmetry_group(topology)
            self._groups[topology] = group
        return topology.name, canonical_id(board, group)
