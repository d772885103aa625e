"""
core - Ядро движка Peg Solitaire

Модель доски, топологии и базовые типы.
"""

from .board import BoardState
from .endgame import generate_endgame, reverse_moves
from .topology import (
    Topology, TopologyTag, TOPOLOGIES, DEFAULT_TOPOLOGY,
    ORTHOGONAL_DIRECTIONS, TRIANGULAR_DIRECTIONS, EIGHT_WAY_DIRECTIONS,
    get_topology, list_topologies
)
from .utils import (
    Cell, Move, Position, PEG_SYMBOL, HOLE_SYMBOL, BLOCKED_SYMBOL,
    index_to_pos, pos_to_index
)

__all__ = [
    'BoardState', 'generate_endgame', 'reverse_moves',
    'Topology', 'TopologyTag', 'TOPOLOGIES', 'DEFAULT_TOPOLOGY',
    'ORTHOGONAL_DIRECTIONS', 'TRIANGULAR_DIRECTIONS', 'EIGHT_WAY_DIRECTIONS',
    'get_topology', 'list_topologies',
    'Cell', 'Move', 'Position', 'PEG_SYMBOL', 'HOLE_SYMBOL', 'BLOCKED_SYMBOL',
    'index_to_pos', 'pos_to_index'
]
