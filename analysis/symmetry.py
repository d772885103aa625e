"""
analysis/symmetry.py

Симметрии доски и канонический 64-битный отпечаток состояния.

Бит с индексом исходной позиции (построчно) берётся из клетки
в преобразованной позиции. Перебор 4 поворотов × 2 отражений даёт
8 битовых образов, которые показала бы физически повёрнутая доска.
"""

from typing import List, Sequence, Tuple

from core.board import BoardState
from core.topology import MAX_FINGERPRINT_BITS, Topology
from core.utils import Cell, Position
from utils.error_handling import InvalidBoardError

# (число поворотов по часовой, отражение)
Symmetry = Tuple[int, bool]

# Порядок: сначала без отражения, затем с отражением
ALL_SYMMETRIES: Tuple[Symmetry, ...] = tuple(
    (rotations, flip) for flip in (False, True) for rotations in range(4)
)


def transform(pos: Position, rotations: int, flip: bool,
              rows: int, cols: int) -> Position:
    """
    Отражение по горизонтали (col' = cols-1-col), затем повороты на 90°
    по часовой: (row, col) → (col, rows-1-row).
    """
    r, c = pos
    if flip:
        c = cols - 1 - c
    for _ in range(rotations):
        r, c = c, rows - 1 - r
    return r, c


def to_bits(board: BoardState, rotations: int, flip: bool) -> int:
    """Битовый образ доски для одной симметрии: 1 = колышек."""
    rows, cols = board.rows, board.cols
    if rows * cols > MAX_FINGERPRINT_BITS:
        raise InvalidBoardError(
            f"Доска {rows}x{cols} не помещается в {MAX_FINGERPRINT_BITS} бит"
        )
    result = 0
    bit_index = 0
    for r in range(rows):
        for c in range(cols):
            if board.cell_at(transform((r, c), rotations, flip, rows, cols)) is Cell.PEG:
                result |= 1 << bit_index
            bit_index += 1
    return result


def all_state_ids(board: BoardState,
                  symmetries: Sequence[Symmetry] = ALL_SYMMETRIES) -> List[int]:
    """Отпечатки состояния по всем заданным симметриям."""
    return [to_bits(board, rotations, flip) for rotations, flip in symmetries]


def canonical_id(board: BoardState,
                 symmetries: Sequence[Symmetry] = ALL_SYMMETRIES) -> int:
    """
    Канонический отпечаток: минимум по симметриям.

    Симметричные друг другу состояния дают одинаковый отпечаток.
    """
    return min(all_state_ids(board, symmetries))


def transform_board(board: BoardState, rotations: int, flip: bool) -> BoardState:
    """
    Новая доска той же топологии, клетки которой взяты через transform.

    Имеет смысл для симметрий из symmetry_group(board.topology).
    """
    grid = tuple(
        tuple(board.cell_at(transform((r, c), rotations, flip, board.rows, board.cols))
              for c in range(board.cols))
        for r in range(board.rows)
    )
    return BoardState.from_snapshot(board.topology, grid)


def _maps_directions(topology: Topology, rotations: int, flip: bool) -> bool:
    directions = set(topology.directions)
    for (jdr, jdc), (tdr, tdc) in topology.directions:
        if flip:
            jdc, tdc = -jdc, -tdc
        for _ in range(rotations):
            jdr, jdc = jdc, -jdr
            tdr, tdc = tdc, -tdr
        if ((jdr, jdc), (tdr, tdc)) not in directions:
            return False
    return True


def symmetry_group(topology: Topology) -> Tuple[Symmetry, ...]:
    """
    Симметрии, сохраняющие форму доски, целевую клетку и таблицу направлений.

    Только по ним можно склеивать состояния в кэше: иначе два
    разных по сути состояния получат один отпечаток.
    """
    rows, cols = topology.rows, topology.cols
    group = []
    for rotations, flip in ALL_SYMMETRIES:
        if transform(topology.start, rotations, flip, rows, cols) != topology.start:
            continue
        if not _maps_directions(topology, rotations, flip):
            continue
        if all(topology.is_playable((r, c)) ==
               topology.is_playable(transform((r, c), rotations, flip, rows, cols))
               for r in range(rows) for c in range(cols)):
            group.append((rotations, flip))
    return tuple(group)
