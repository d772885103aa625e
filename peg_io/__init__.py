"""
peg_io - Ввод/вывод для Peg Solitaire

Экспортирует:
- Парсинг и запись текстовой позиции
- Визуализация доски, подсказок и решений
"""

from .parser import parse_position, format_position
from .visualizer import display_board, format_hint, format_solution

__all__ = [
    'parse_position',
    'format_position',
    'display_board',
    'format_hint',
    'format_solution',
]
