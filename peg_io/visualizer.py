"""
peg_io/visualizer.py

Визуализация доски и решений.
"""

from typing import List, Optional

from core.board import BoardState
from core.utils import Cell, Move


def display_board(board: BoardState) -> str:
    """
    Форматирует доску с заголовками столбцов и номерами строк.

    Args:
        board: доска

    Returns:
        Строка для вывода
    """
    header = "   " + " ".join(chr(c + ord('A')) for c in range(board.cols))
    lines = [header]

    for r in range(board.rows):
        cells = []
        for c in range(board.cols):
            cell = board.cell_at((r, c))
            cells.append(" " if cell is Cell.BLOCKED else cell.symbol)
        lines.append(f"{r + 1:<2} " + " ".join(cells).rstrip())

    return "\n".join(lines)


def format_hint(move: Optional[Move], is_dead_game: bool) -> str:
    """Текст подсказки по результату сессии поиска."""
    if is_dead_game:
        return "❌ Тупик: из этой позиции победы нет"
    if move is None:
        return "✅ Позиция уже выиграна"
    return f"💡 Подсказка: {move}"


def format_solution(moves: Optional[List[Move]]) -> str:
    """
    Форматирует список ходов для вывода.

    Args:
        moves: список ходов или None

    Returns:
        Форматированная строка
    """
    if moves is None:
        return "❌ Решение не найдено"

    lines = [f"✅ Найдено решение за {len(moves)} ходов:"]
    for i, move in enumerate(moves, 1):
        lines.append(f"  {i:2}. {move}")

    return "\n".join(lines)
