"""
peg_io/parser.py

Парсинг текстового описания позиции поверх выбранной топологии.
"""

import re
from typing import List

from core.board import BoardState
from core.topology import TopologyLike, get_topology
from core.utils import Cell, Position, index_to_pos, pos_to_index
from utils.error_handling import InvalidBoardError


def _parse_cells(spec: str) -> List[Position]:
    cells = []
    for pos in spec.split(','):
        pos = pos.strip()
        if not pos:
            continue
        if not re.fullmatch(r'[A-Za-z]\d+', pos):
            raise ValueError(f"Неверная клетка: {pos!r}")
        cells.append(pos_to_index(pos))
    return cells


def parse_position(text: str, topology: TopologyLike = None) -> BoardState:
    """
    Парсит позицию и раскладывает её на доске топологии.

    Формат: size=7x7 pegs=C1,D1,... empty=D4

    Клетки доски, не упомянутые ни в pegs, ни в empty, становятся
    пустыми. Endgame-доска заполняется только из описания.

    Args:
        text: строка с описанием
        topology: тег или дескриптор топологии (по умолчанию английская)

    Returns:
        BoardState с пустой историей

    Raises:
        ValueError: текст не соответствует формату
        InvalidBoardError: размер или клетки не совпадают с формой доски
    """
    size_match = re.search(r'size=(\d+)x(\d+)', text)
    pegs_match = re.search(r'pegs=([\w,]*)', text)
    empty_match = re.search(r'empty=([\w,]*)', text)

    if not size_match or not pegs_match:
        raise ValueError(
            "Неверный формат. Ожидается: size=NxM pegs=A1,A2,... empty=D4"
        )

    topo = get_topology(topology)
    rows, cols = int(size_match.group(1)), int(size_match.group(2))
    if (rows, cols) != (topo.rows, topo.cols):
        raise InvalidBoardError(
            f"Размер {rows}x{cols} не совпадает с доской {topo.name} "
            f"({topo.rows}x{topo.cols})"
        )

    grid = [[Cell.EMPTY if topo.is_playable((r, c)) else Cell.BLOCKED
             for c in range(cols)] for r in range(rows)]

    empty = _parse_cells(empty_match.group(1)) if empty_match else []
    for state, cells in ((Cell.PEG, _parse_cells(pegs_match.group(1))), (Cell.EMPTY, empty)):
        for r, c in cells:
            if not topo.is_playable((r, c)):
                raise InvalidBoardError(
                    f"Клетка {index_to_pos(r, c)} вне доски {topo.name}"
                )
            grid[r][c] = state

    return BoardState.from_snapshot(topo, grid)


def format_position(board: BoardState) -> str:
    """Обратное к parse_position: позиция в текстовом формате."""
    pegs, empty = [], []
    for r in range(board.rows):
        for c in range(board.cols):
            cell = board.cell_at((r, c))
            if cell is Cell.PEG:
                pegs.append(index_to_pos(r, c))
            elif cell is Cell.EMPTY:
                empty.append(index_to_pos(r, c))
    return f"size={board.rows}x{board.cols} pegs={','.join(pegs)} empty={','.join(empty)}"
