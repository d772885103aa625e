"""
core/board.py

Изменяемое состояние доски: сетка клеток, счётчик колышков, история ходов.

Доска не бросает исключений на некорректный ввод: позиция вне
топологии читается как Blocked, недопустимый ход возвращает False.
"""

import random
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from .endgame import generate_endgame
from .topology import DEFAULT_TOPOLOGY, Topology, TopologyLike, get_topology
from .utils import Cell, Move, Position
from utils.logging import get_logger

Grid = Tuple[Tuple[Cell, ...], ...]

# (ход, состояния from/jumped/to до хода)
HistoryEntry = Tuple[Move, Tuple[Cell, Cell, Cell]]


def _coerce_move(move) -> Optional[Move]:
    """Ход из любой тройки пар координат; None, если формат не подходит."""
    try:
        positions = tuple(tuple(p) for p in move)
    except TypeError:
        return None
    if len(positions) != 3:
        return None
    for pos in positions:
        if len(pos) != 2 or not all(isinstance(v, int) for v in pos):
            return None
    return Move(*positions)


class BoardState:
    """
    Доска одной топологии.

    Хранит плотную сетку по ограничивающему прямоугольнику; клетки
    вне формы помечены Blocked и не меняются никогда. Счётчик
    колышков поддерживается инкрементально.
    """
    __slots__ = ('topology', 'rows', 'cols', 'start_position', 'grid',
                 'history', '_peg_count', '_rng')

    def __init__(self, topology: TopologyLike = DEFAULT_TOPOLOGY,
                 rng: Optional[random.Random] = None):
        self._rng = rng
        self.initialize(topology)

    def initialize(self, topology: TopologyLike) -> None:
        """Сбрасывает сетку, счётчик, историю и целевую клетку по таблице раскладок."""
        self._load(topology)

        if self.topology.endgame:
            generate_endgame(self, rng=self._rng)

    def _load(self, topology: TopologyLike) -> None:
        self.topology: Topology = get_topology(topology)
        self.rows = self.topology.rows
        self.cols = self.topology.cols
        self.start_position: Position = self.topology.start
        self.grid: List[List[Cell]] = self.topology.initial_cells()
        self.history: List[HistoryEntry] = []
        self._peg_count = self.count_cells(Cell.PEG)

    def reset(self) -> None:
        """Новая партия на той же топологии."""
        self.initialize(self.topology)

    @classmethod
    def from_snapshot(cls, topology: TopologyLike, grid) -> 'BoardState':
        """
        Восстанавливает доску из снимка сетки.

        Клетки снимка, противоречащие форме топологии, и неизвестные
        значения пропускаются с предупреждением. Не упомянутые в снимке
        клетки берутся из начальной раскладки (эндшпиль не генерируется).
        История пустая.
        """
        board = object.__new__(cls)
        board._rng = None
        board._load(topology)
        for r, row in enumerate(grid):
            for c, cell in enumerate(row):
                pos = (r, c)
                if isinstance(cell, str):
                    try:
                        cell = Cell.from_symbol(cell)
                    except ValueError as e:
                        get_logger().warning(f"from_snapshot: {pos}: {e}")
                        continue
                if board.cell_at(pos) != cell:
                    board.set_cell(pos, cell)
        board.history.clear()
        return board

    # =====================================================
    # Клетки
    # =====================================================

    def is_valid_position(self, pos: Position) -> bool:
        return self.topology.contains(pos)

    def cell_at(self, pos: Position) -> Cell:
        """Состояние клетки; вне топологии всегда Blocked."""
        if not self.topology.contains(pos):
            return Cell.BLOCKED
        r, c = pos
        return self.grid[r][c]

    def set_cell(self, pos: Position, cell: Cell) -> bool:
        """
        Меняет клетку и корректирует счётчик колышков.

        Некорректная позиция или попытка изменить форму доски
        (Blocked ↔ игровая клетка) не выполняется, пишется предупреждение.
        """
        if not isinstance(cell, Cell):
            get_logger().warning(f"set_cell: недопустимое значение клетки {cell!r}")
            return False
        if not self.topology.contains(pos):
            get_logger().warning(f"set_cell: позиция {pos} вне доски {self.topology.name}")
            return False
        old = self.cell_at(pos)
        if old == cell:
            return True
        if Cell.BLOCKED in (old, cell):
            get_logger().warning(f"set_cell: клетка {pos} не может стать {cell.name} из {old.name}")
            return False
        self._write(pos, cell)
        return True

    def _write(self, pos: Position, cell: Cell) -> None:
        r, c = pos
        old = self.grid[r][c]
        self.grid[r][c] = cell
        if old is Cell.PEG and cell is not Cell.PEG:
            self._peg_count -= 1
        elif old is not Cell.PEG and cell is Cell.PEG:
            self._peg_count += 1

    def peg_count(self) -> int:
        """Количество колышков за O(1)."""
        return self._peg_count

    def count_cells(self, cell: Cell) -> int:
        """Полный подсчёт клеток заданного состояния."""
        return sum(row.count(cell) for row in self.grid)

    # =====================================================
    # Ходы
    # =====================================================

    @property
    def anti_peg(self) -> bool:
        return self.topology.anti_peg

    def _jumped_state(self) -> Cell:
        # В anti-peg прыгают через пустую клетку
        return Cell.EMPTY if self.topology.anti_peg else Cell.PEG

    def _iter_moves(self) -> Iterator[Move]:
        jumped_state = self._jumped_state()
        directions = self.topology.directions
        for r in range(self.rows):
            for c in range(self.cols):
                if self.grid[r][c] is not Cell.PEG:
                    continue
                for (jdr, jdc), (tdr, tdc) in directions:
                    jumped = (r + jdr, c + jdc)
                    to_pos = (r + tdr, c + tdc)
                    if self.cell_at(jumped) is jumped_state and self.cell_at(to_pos) is Cell.EMPTY:
                        yield Move((r, c), jumped, to_pos)

    def list_moves(self) -> List[Move]:
        """
        Все допустимые ходы.

        Порядок: построчно по клетке from, затем по таблице направлений.
        Решатель возвращает первый выигрышный ход в этом порядке.
        """
        return list(self._iter_moves())

    def moves_from(self, pos: Position) -> List[Move]:
        """Допустимые ходы колышка в клетке pos."""
        return [move for move in self._iter_moves() if move.from_pos == tuple(pos)]

    def _matches_direction(self, move: Move) -> bool:
        fr, fc = move.from_pos
        for (jdr, jdc), (tdr, tdc) in self.topology.directions:
            if move.jumped == (fr + jdr, fc + jdc) and move.to_pos == (fr + tdr, fc + tdc):
                return True
        return False

    def is_legal(self, move: Move) -> bool:
        """Проверка хода по текущему состоянию и таблице направлений."""
        return (
            self.cell_at(move.from_pos) is Cell.PEG and
            self.cell_at(move.jumped) is self._jumped_state() and
            self.cell_at(move.to_pos) is Cell.EMPTY and
            self._matches_direction(move)
        )

    def perform_move(self, move) -> bool:
        """
        Выполняет ход, если он допустим сейчас.

        Returns:
            False и доска без изменений, если ход недопустим
        """
        coerced = _coerce_move(move)
        if coerced is None or not self.is_legal(coerced):
            get_logger().debug(f"perform_move: недопустимый ход {move!r}")
            return False
        move = coerced

        pre_image = (self.cell_at(move.from_pos), self.cell_at(move.jumped), self.cell_at(move.to_pos))
        self.history.append((move, pre_image))

        self._write(move.from_pos, Cell.EMPTY)
        if self.topology.anti_peg:
            self._write(move.jumped, Cell.PEG)
        else:
            self._write(move.jumped, Cell.EMPTY)
        self._write(move.to_pos, Cell.PEG)
        return True

    def undo_last_move(self) -> bool:
        """Откатывает последний ход. False, если история пуста."""
        if not self.history:
            return False
        move, (from_cell, jumped_cell, to_cell) = self.history.pop()
        self._write(move.to_pos, to_cell)
        self._write(move.jumped, jumped_cell)
        self._write(move.from_pos, from_cell)
        return True

    @contextmanager
    def applied(self, move: Move) -> Iterator[bool]:
        """
        Ход на время блока with: откат гарантирован на любом выходе.

        Usage:
            with board.applied(move) as ok:
                if ok:
                    ...
        """
        ok = self.perform_move(move)
        try:
            yield ok
        finally:
            if ok:
                self.undo_last_move()

    # =====================================================
    # Конец партии
    # =====================================================

    def is_terminal(self) -> bool:
        """Ходов больше нет."""
        return next(self._iter_moves(), None) is None

    def is_winning_state(self) -> bool:
        """
        Обычный режим: остался один колышек, и он в целевой клетке.
        Anti-peg: ходов нет, пустая клетка ровно одна, и это целевая клетка.
        """
        if self.topology.anti_peg:
            if not self.is_terminal():
                return False
            return (self.count_cells(Cell.EMPTY) == 1 and
                    self.cell_at(self.start_position) is Cell.EMPTY)
        return self._peg_count == 1 and self.cell_at(self.start_position) is Cell.PEG

    # =====================================================
    # Копии и представления
    # =====================================================

    def clone(self) -> 'BoardState':
        """Независимая копия (сетка и история копируются)."""
        board = object.__new__(type(self))
        board.topology = self.topology
        board.rows = self.rows
        board.cols = self.cols
        board.start_position = self.start_position
        board.grid = [row[:] for row in self.grid]
        board.history = list(self.history)
        board._peg_count = self._peg_count
        board._rng = self._rng
        return board

    def snapshot(self) -> Grid:
        """Неизменяемый снимок сетки."""
        return tuple(tuple(row) for row in self.grid)

    def to_matrix(self) -> List[List[str]]:
        """Матрица символов (●/○/▫)."""
        return [[cell.symbol for cell in row] for row in self.grid]

    def to_string(self) -> str:
        """Текстовое представление, клетки вне доски заменены пробелами."""
        lines = []
        for row in self.grid:
            line = ""
            for cell in row:
                line += "  " if cell is Cell.BLOCKED else f"{cell.symbol} "
            lines.append(line.rstrip())
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.topology == other.topology and self.grid == other.grid

    __hash__ = None

    def __repr__(self) -> str:
        return f"BoardState({self.topology.name}, {self._peg_count} pegs)"
