"""
core/utils.py

Общие типы и константы движка: клетки, позиции, ходы, нотация.
"""

from enum import Enum
from typing import NamedTuple, Tuple

Position = Tuple[int, int]

# Символы для отображения
PEG_SYMBOL = '●'        # Колышек
HOLE_SYMBOL = '○'       # Пустое место (можно прыгнуть)
BLOCKED_SYMBOL = '▫'    # Недоступная клетка


class Cell(Enum):
    """Состояние клетки доски. Значение: символ для отображения."""
    EMPTY = HOLE_SYMBOL
    PEG = PEG_SYMBOL
    BLOCKED = BLOCKED_SYMBOL

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Cell':
        for cell in cls:
            if cell.value == symbol:
                return cell
        raise ValueError(f"Неизвестный символ клетки: {symbol!r}")


class Move(NamedTuple):
    """Ход (from, jumped, to). Значение без ссылки на доску."""
    from_pos: Position
    jumped: Position
    to_pos: Position

    def __str__(self) -> str:
        return f"{index_to_pos(*self.from_pos)} → {index_to_pos(*self.to_pos)}"


def index_to_pos(row: int, col: int) -> str:
    """Индекс (row, col) → шахматная нотация (A1, B2, ...)."""
    return f"{chr(col + ord('A'))}{row + 1}"


def pos_to_index(pos: str) -> Position:
    """Шахматная нотация → индекс."""
    col = ord(pos[0].upper()) - ord('A')
    row = int(pos[1:]) - 1
    return row, col
