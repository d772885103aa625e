"""
tests/test_topology.py

Тесты таблицы топологий и пользовательских раскладок.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from core import (
    BoardState, Cell, Move, Topology, TopologyTag,
    EIGHT_WAY_DIRECTIONS, get_topology, list_topologies
)
from utils.error_handling import InvalidTopologyError


@pytest.mark.parametrize("tag,size,start,pegs", [
    ('english', (7, 7), (3, 3), 32),
    ('european', (7, 7), (3, 3), 36),
    ('cross', (7, 7), (3, 3), 6),
    ('diamond', (8, 7), (3, 3), 31),
    ('square', (6, 6), (2, 3), 35),
    ('anti_peg', (7, 7), (3, 3), 1),
    ('triangular', (5, 5), (0, 0), 14),
    ('star', (5, 5), (2, 2), 12),
])
def test_builtin_topologies(tag, size, start, pegs):
    """Тест: размеры, целевая клетка и начальное число колышков."""
    board = BoardState(tag)

    assert board.topology.name == tag
    assert (board.rows, board.cols) == size
    assert board.start_position == start
    assert board.peg_count() == pegs
    assert board.peg_count() == board.count_cells(Cell.PEG)


def test_list_topologies():
    names = list_topologies()
    assert len(names) == 9
    assert names[0] == 'english'
    assert 'endgame' in names


def test_get_topology_accepts_tags_and_strings():
    english = get_topology(TopologyTag.ENGLISH)
    assert get_topology('english') is english
    assert get_topology('ENGLISH') is english
    assert get_topology(english) is english


def test_unknown_topology_falls_back_to_english():
    """Тест: неизвестный тег не ошибка, используется английская доска."""
    assert get_topology('hexagonal').name == 'english'
    assert get_topology(None).name == 'english'
    assert BoardState('no-such-board').peg_count() == 32


def test_triangular_geometry():
    """Тест: верхний треугольник вне доски, ходы в 6 направлениях."""
    board = BoardState('triangular')

    assert board.cell_at((0, 1)) is Cell.BLOCKED
    assert board.cell_at((4, 4)) is Cell.PEG
    assert board.list_moves() == [
        Move((2, 0), (1, 0), (0, 0)),
        Move((2, 2), (1, 1), (0, 0)),
    ]


def test_star_uses_diagonal_jumps():
    layout = ('●▫▫', '▫●▫', '▫▫○')
    eight_way = Topology.from_layout('diag', layout, (2, 2), directions=EIGHT_WAY_DIRECTIONS)
    orthogonal = Topology.from_layout('ortho', layout, (2, 2))

    assert BoardState(eight_way).list_moves() == [Move((0, 0), (1, 1), (2, 2))]
    assert BoardState(orthogonal).list_moves() == []
    assert get_topology('star').directions == EIGHT_WAY_DIRECTIONS


def test_cross_classic_solution():
    """Тест: известное решение «Креста» за 5 ходов."""
    board = BoardState('cross')
    solution = [
        Move((2, 3), (2, 2), (2, 1)),
        Move((4, 3), (3, 3), (2, 3)),
        Move((2, 4), (2, 3), (2, 2)),
        Move((2, 1), (2, 2), (2, 3)),
        Move((1, 3), (2, 3), (3, 3)),
    ]
    for move in solution:
        assert board.perform_move(move), f"Ход {move} должен быть допустим"

    assert board.is_winning_state()


def test_custom_layout():
    topology = Topology.from_layout('micro', ('●●○●',), (0, 1))
    board = BoardState(topology)

    assert (board.rows, board.cols) == (1, 4)
    assert board.peg_count() == 3
    assert board.list_moves() == [Move((0, 0), (0, 1), (0, 2))]


@pytest.mark.parametrize("layout,start", [
    ((), (0, 0)),
    (('●●', '●'), (0, 0)),
    (('●x',), (0, 0)),
    (('▫●',), (0, 0)),
    (('●' * 8,) * 9, (0, 0)),
])
def test_invalid_layouts(layout, start):
    """Тест: пустая, рваная, с чужими символами, старт вне доски, больше 64 клеток."""
    with pytest.raises(InvalidTopologyError):
        Topology.from_layout('bad', layout, start)
