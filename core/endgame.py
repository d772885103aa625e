"""
core/endgame.py

Генерация эндшпиля: от целевого состояния (один колышек в целевой клетке)
делаем случайные обратные ходы ○○● → ●●○.

Позиция решаема по построению: обратные ходы, сыгранные в прямом
порядке, возвращают доску к цели.
"""

import random
from typing import List, Optional

from .utils import Cell, Move
from utils.logging import get_logger

ENDGAME_MIN_MOVES = 8
ENDGAME_EXTRA_MOVES = 8


def reverse_moves(board) -> List[Move]:
    """
    Прямые ходы, которые могли привести к текущей позиции.

    Для колышка P и направления (jumped, landing) ход начинается в
    F = P - landing и перепрыгивает J = F + jumped; F и J должны быть пусты.
    """
    moves = []
    for r in range(board.rows):
        for c in range(board.cols):
            if board.cell_at((r, c)) is not Cell.PEG:
                continue
            for (jdr, jdc), (tdr, tdc) in board.topology.directions:
                from_pos = (r - tdr, c - tdc)
                jumped = (from_pos[0] + jdr, from_pos[1] + jdc)
                if board.cell_at(from_pos) is Cell.EMPTY and board.cell_at(jumped) is Cell.EMPTY:
                    moves.append(Move(from_pos, jumped, (r, c)))
    return moves


def unplay(board, move: Move) -> None:
    """Обратный ход: колышки в from и jumped, дырка в to."""
    board.set_cell(move.to_pos, Cell.EMPTY)
    board.set_cell(move.jumped, Cell.PEG)
    board.set_cell(move.from_pos, Cell.PEG)


def generate_endgame(board, rng: Optional[random.Random] = None,
                     depth: Optional[int] = None) -> int:
    """
    Превращает целевое состояние доски в решаемый эндшпиль.

    Args:
        board: доска в целевом состоянии
        rng: генератор случайных чисел (для воспроизводимости)
        depth: число обратных ходов (по умолчанию 8..15)

    Returns:
        Количество сделанных обратных ходов
    """
    rng = rng or random.Random()
    if depth is None:
        depth = ENDGAME_MIN_MOVES + rng.randrange(ENDGAME_EXTRA_MOVES)

    played = 0
    for _ in range(depth):
        candidates = reverse_moves(board)
        if not candidates:
            break
        unplay(board, rng.choice(candidates))
        played += 1

    board.history.clear()
    get_logger().debug(f"Эндшпиль: {played} обратных ходов, {board.peg_count()} колышков")
    return played
