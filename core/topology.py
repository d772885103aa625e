"""
core/topology.py

Топологии досок: форма, таблица направлений прыжков, режим игры.

Каждая топология описывается неизменяемым дескриптором. BoardState параметризуется
дескриптором вместо иерархии классов досок.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .utils import Cell, Position
from utils.error_handling import InvalidTopologyError
from utils.logging import get_logger

# (смещение перепрыгиваемой клетки, смещение клетки приземления)
Direction = Tuple[Position, Position]

MAX_FINGERPRINT_BITS = 64

# Ортогональная сетка: вверх, вниз, влево, вправо
ORTHOGONAL_DIRECTIONS: Tuple[Direction, ...] = (
    ((-1, 0), (-2, 0)),
    ((1, 0), (2, 0)),
    ((0, -1), (0, -2)),
    ((0, 1), (0, 2)),
)

# Треугольная сетка: 2 горизонтальных, 2 диагонали вверх, 2 диагонали вниз
TRIANGULAR_DIRECTIONS: Tuple[Direction, ...] = (
    ((0, -1), (0, -2)),
    ((0, 1), (0, 2)),
    ((-1, -1), (-2, -2)),
    ((-1, 0), (-2, 0)),
    ((1, 0), (2, 0)),
    ((1, 1), (2, 2)),
)

# Звезда: ортогональные + диагональные прыжки
EIGHT_WAY_DIRECTIONS: Tuple[Direction, ...] = ORTHOGONAL_DIRECTIONS + (
    ((-1, -1), (-2, -2)),
    ((-1, 1), (-2, 2)),
    ((1, -1), (2, -2)),
    ((1, 1), (2, 2)),
)


class TopologyTag(str, Enum):
    """Встроенные варианты досок."""
    ENGLISH = 'english'
    EUROPEAN = 'european'
    CROSS = 'cross'
    DIAMOND = 'diamond'
    SQUARE = 'square'
    ANTI_PEG = 'anti_peg'
    ENDGAME = 'endgame'
    TRIANGULAR = 'triangular'
    STAR = 'star'


@dataclass(frozen=True)
class Topology:
    """
    Дескриптор топологии.

    layout: строки символов клеток (● колышек, ○ дырка, ▫ вне доски),
    задаёт ограничивающий прямоугольник и начальную расстановку.
    start: клетка, где должен остаться последний колышек
    (или последняя дырка в режиме anti-peg).
    """
    name: str
    layout: Tuple[str, ...]
    start: Position
    directions: Tuple[Direction, ...] = ORTHOGONAL_DIRECTIONS
    anti_peg: bool = False
    triangular: bool = False
    endgame: bool = False
    rows: int = field(init=False)
    cols: int = field(init=False)

    def __post_init__(self) -> None:
        layout = tuple(self.layout)
        if not layout or not layout[0]:
            raise InvalidTopologyError(f"{self.name}: пустая раскладка")
        cols = len(layout[0])
        if any(len(row) != cols for row in layout):
            raise InvalidTopologyError(f"{self.name}: строки раскладки разной длины")
        symbols = {cell.symbol for cell in Cell}
        for row in layout:
            bad = set(row) - symbols
            if bad:
                raise InvalidTopologyError(f"{self.name}: неизвестные символы {sorted(bad)}")
        if len(layout) * cols > MAX_FINGERPRINT_BITS:
            raise InvalidTopologyError(
                f"{self.name}: {len(layout)}x{cols} не помещается в {MAX_FINGERPRINT_BITS} бит"
            )
        object.__setattr__(self, 'layout', layout)
        object.__setattr__(self, 'directions', tuple(self.directions))
        object.__setattr__(self, 'start', tuple(self.start))
        object.__setattr__(self, 'rows', len(layout))
        object.__setattr__(self, 'cols', cols)
        if not self.is_playable(self.start):
            raise InvalidTopologyError(f"{self.name}: стартовая клетка {self.start} вне доски")

    @classmethod
    def from_layout(cls, name: str, layout: Sequence[str], start: Position,
                    directions: Sequence[Direction] = ORTHOGONAL_DIRECTIONS,
                    anti_peg: bool = False, triangular: bool = False) -> 'Topology':
        """Создаёт пользовательскую топологию из раскладки."""
        return cls(name=name, layout=tuple(layout), start=tuple(start),
                   directions=tuple(directions), anti_peg=anti_peg,
                   triangular=triangular)

    def contains(self, pos: Position) -> bool:
        """Попадает ли позиция в допустимую область топологии."""
        r, c = pos
        if not (0 <= r < self.rows and 0 <= c < self.cols):
            return False
        if self.triangular:
            return c <= r
        return True

    def is_playable(self, pos: Position) -> bool:
        """Клетка принадлежит форме доски (не Blocked)."""
        if not self.contains(pos):
            return False
        r, c = pos
        return self.layout[r][c] != Cell.BLOCKED.symbol

    def initial_cells(self) -> List[List[Cell]]:
        """Начальная сетка клеток по раскладке."""
        grid = []
        for r in range(self.rows):
            row = []
            for c in range(self.cols):
                if self.contains((r, c)):
                    row.append(Cell.from_symbol(self.layout[r][c]))
                else:
                    row.append(Cell.BLOCKED)
            grid.append(row)
        return grid

    def __str__(self) -> str:
        return self.name


# =====================================================
# Встроенные раскладки
# =====================================================

_ENGLISH_LAYOUT = (
    '▫▫●●●▫▫',
    '▫▫●●●▫▫',
    '●●●●●●●',
    '●●●○●●●',
    '●●●●●●●',
    '▫▫●●●▫▫',
    '▫▫●●●▫▫',
)

_EUROPEAN_LAYOUT = (
    '▫▫●●●▫▫',
    '▫●●●●●▫',
    '●●●●●●●',
    '●●●○●●●',
    '●●●●●●●',
    '▫●●●●●▫',
    '▫▫●●●▫▫',
)

# Классическая задача «Крест»: 6 колышков на английской доске
_CROSS_LAYOUT = (
    '▫▫○○○▫▫',
    '▫▫○●○▫▫',
    '○○●●●○○',
    '○○○●○○○',
    '○○○●○○○',
    '▫▫○○○▫▫',
    '▫▫○○○▫▫',
)

_DIAMOND_LAYOUT = (
    '▫▫▫●▫▫▫',
    '▫▫●●●▫▫',
    '▫●●●●●▫',
    '●●●○●●●',
    '●●●●●●●',
    '▫●●●●●▫',
    '▫▫●●●▫▫',
    '▫▫▫●▫▫▫',
)

_SQUARE_LAYOUT = (
    '●●●●●●',
    '●●●●●●',
    '●●●○●●',
    '●●●●●●',
    '●●●●●●',
    '●●●●●●',
)

# Anti-peg: английская форма, колышек только в центре
_ANTI_PEG_LAYOUT = (
    '▫▫○○○▫▫',
    '▫▫○○○▫▫',
    '○○○○○○○',
    '○○○●○○○',
    '○○○○○○○',
    '▫▫○○○▫▫',
    '▫▫○○○▫▫',
)

_TRIANGULAR_LAYOUT = (
    '○▫▫▫▫',
    '●●▫▫▫',
    '●●●▫▫',
    '●●●●▫',
    '●●●●●',
)

_STAR_LAYOUT = (
    '▫▫●▫▫',
    '▫●●●▫',
    '●●○●●',
    '▫●●●▫',
    '▫▫●▫▫',
)

TOPOLOGIES: Dict[TopologyTag, Topology] = {
    TopologyTag.ENGLISH: Topology('english', _ENGLISH_LAYOUT, (3, 3)),
    TopologyTag.EUROPEAN: Topology('european', _EUROPEAN_LAYOUT, (3, 3)),
    TopologyTag.CROSS: Topology('cross', _CROSS_LAYOUT, (3, 3)),
    TopologyTag.DIAMOND: Topology('diamond', _DIAMOND_LAYOUT, (3, 3)),
    TopologyTag.SQUARE: Topology('square', _SQUARE_LAYOUT, (2, 3)),
    TopologyTag.ANTI_PEG: Topology('anti_peg', _ANTI_PEG_LAYOUT, (3, 3), anti_peg=True),
    # Стартовая расстановка генерируется в core/endgame.py
    TopologyTag.ENDGAME: Topology('endgame', _ANTI_PEG_LAYOUT, (3, 3), endgame=True),
    TopologyTag.TRIANGULAR: Topology('triangular', _TRIANGULAR_LAYOUT, (0, 0),
                                     directions=TRIANGULAR_DIRECTIONS, triangular=True),
    TopologyTag.STAR: Topology('star', _STAR_LAYOUT, (2, 2), directions=EIGHT_WAY_DIRECTIONS),
}

DEFAULT_TOPOLOGY = TopologyTag.ENGLISH

TopologyLike = Union[Topology, TopologyTag, str]


def get_topology(tag: Optional[TopologyLike]) -> Topology:
    """
    Возвращает дескриптор по тегу.

    Неизвестный тег не является ошибкой: пишется предупреждение
    и возвращается топология по умолчанию (английская доска).
    """
    if isinstance(tag, Topology):
        return tag
    try:
        key = TopologyTag(tag.lower() if isinstance(tag, str) else tag)
    except ValueError:
        get_logger().warning(
            f"Неизвестный тип доски {tag!r}, используется {DEFAULT_TOPOLOGY.value}"
        )
        key = DEFAULT_TOPOLOGY
    return TOPOLOGIES[key]


def list_topologies() -> List[str]:
    """Имена встроенных топологий."""
    return [tag.value for tag in TopologyTag]
