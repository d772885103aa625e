"""
tests/test_board.py

Тесты модели доски: ходы, откат, anti-peg, снимки, эндшпиль.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random
import pytest

from core import BoardState, Cell, Move, Topology, TOPOLOGIES, TopologyTag, generate_endgame
from solvers import BacktrackingSolver


ENGLISH_OPENING = [
    Move((1, 3), (2, 3), (3, 3)),
    Move((3, 1), (3, 2), (3, 3)),
    Move((3, 5), (3, 4), (3, 3)),
    Move((5, 3), (4, 3), (3, 3)),
]


def test_english_start():
    """Тест: 32 колышка, пустой центр, углы вне доски."""
    board = BoardState('english')

    assert board.peg_count() == 32
    assert board.peg_count() == board.count_cells(Cell.PEG)
    assert board.cell_at((3, 3)) is Cell.EMPTY
    assert board.cell_at((0, 0)) is Cell.BLOCKED
    assert board.start_position == (3, 3)
    assert board.history == []


def test_list_moves_order():
    """Тест: ходы перечисляются построчно по клетке from."""
    board = BoardState('english')
    assert board.list_moves() == ENGLISH_OPENING


def test_moves_from():
    board = BoardState('english')
    assert board.moves_from((1, 3)) == [ENGLISH_OPENING[0]]
    assert board.moves_from((0, 3)) == []


def test_perform_and_undo_restore_state():
    """Тест: ход + откат возвращают сетку, счётчик и историю."""
    board = BoardState('english')
    before = board.snapshot()

    assert board.perform_move(ENGLISH_OPENING[0]) is True
    assert board.peg_count() == 31
    assert board.cell_at((1, 3)) is Cell.EMPTY
    assert board.cell_at((2, 3)) is Cell.EMPTY
    assert board.cell_at((3, 3)) is Cell.PEG
    assert len(board.history) == 1

    assert board.undo_last_move() is True
    assert board.snapshot() == before
    assert board.peg_count() == 32
    assert board.history == []


def test_undo_on_empty_history():
    board = BoardState('english')
    assert board.undo_last_move() is False


def test_perform_move_accepts_plain_tuples():
    board = BoardState('english')
    assert board.perform_move(((1, 3), (2, 3), (3, 3))) is True
    assert board.history[0][0] == ENGLISH_OPENING[0]


@pytest.mark.parametrize("move", [
    Move((0, 0), (0, 1), (0, 2)),     # from вне доски
    Move((0, 3), (1, 3), (2, 3)),     # to занят
    Move((5, 3), (2, 3), (3, 3)),     # не совпадает с направлением
    Move((3, 3), (3, 4), (3, 5)),     # from пуст
])
def test_illegal_move_leaves_board_unchanged(move):
    """Тест: недопустимый ход возвращает False и ничего не меняет."""
    board = BoardState('english')
    before = board.snapshot()

    assert board.perform_move(move) is False
    assert board.snapshot() == before
    assert board.peg_count() == 32
    assert board.history == []


def test_cell_at_outside_is_blocked():
    board = BoardState('english')
    assert board.cell_at((-1, 3)) is Cell.BLOCKED
    assert board.cell_at((3, 7)) is Cell.BLOCKED
    assert board.cell_at((10, 10)) is Cell.BLOCKED
    assert not board.is_valid_position((10, 10))
    assert board.is_valid_position((0, 0))


def test_set_cell_keeps_shape():
    """Тест: set_cell не меняет форму доски и следит за счётчиком."""
    board = BoardState('english')

    assert board.set_cell((9, 9), Cell.PEG) is False
    assert board.set_cell((0, 0), Cell.PEG) is False
    assert board.set_cell((0, 3), Cell.BLOCKED) is False
    assert board.peg_count() == 32

    assert board.set_cell((0, 3), Cell.EMPTY) is True
    assert board.peg_count() == 31
    assert board.set_cell((3, 3), Cell.PEG) is True
    assert board.peg_count() == 32


def test_applied_rolls_back_on_exception():
    board = BoardState('english')
    before = board.snapshot()

    with pytest.raises(RuntimeError):
        with board.applied(ENGLISH_OPENING[1]) as ok:
            assert ok
            assert board.peg_count() == 31
            raise RuntimeError("boom")

    assert board.snapshot() == before


def test_applied_with_illegal_move():
    board = BoardState('english')
    with board.applied(Move((0, 0), (0, 1), (0, 2))) as ok:
        assert ok is False
    assert board.peg_count() == 32


def test_anti_peg_move_fills_jumped_cell():
    """Тест: в anti-peg прыгают через пустую клетку и она заполняется."""
    board = BoardState('anti_peg')
    assert board.peg_count() == 1
    assert not board.is_winning_state()

    move = Move((3, 3), (2, 3), (1, 3))
    assert move in board.list_moves()
    assert board.perform_move(move)

    assert board.cell_at((3, 3)) is Cell.EMPTY
    assert board.cell_at((2, 3)) is Cell.PEG
    assert board.cell_at((1, 3)) is Cell.PEG
    assert board.peg_count() == 2

    board.undo_last_move()
    assert board.peg_count() == 1
    assert board.cell_at((3, 3)) is Cell.PEG


def test_anti_peg_cannot_jump_over_peg():
    board = BoardState('anti_peg')
    board.perform_move(Move((3, 3), (2, 3), (1, 3)))
    # (1,3) -> (3,3) через занятую (2,3)
    assert board.perform_move(Move((1, 3), (2, 3), (3, 3))) is False


def test_winning_state():
    """Тест: победа только с одним колышком в целевой клетке."""
    board = BoardState('english')
    for r in range(board.rows):
        for c in range(board.cols):
            if board.cell_at((r, c)) is Cell.PEG:
                board.set_cell((r, c), Cell.EMPTY)

    board.set_cell((3, 3), Cell.PEG)
    assert board.is_winning_state()
    assert board.is_terminal()

    board.set_cell((3, 3), Cell.EMPTY)
    board.set_cell((0, 2), Cell.PEG)
    assert not board.is_winning_state()


def test_clone_is_independent():
    board = BoardState('english')
    copy = board.clone()
    copy.perform_move(ENGLISH_OPENING[0])

    assert board.peg_count() == 32
    assert board.history == []
    assert copy.peg_count() == 31
    assert copy != board


def test_snapshot_roundtrip():
    board = BoardState('english')
    board.perform_move(ENGLISH_OPENING[2])

    restored = BoardState.from_snapshot('english', board.snapshot())
    assert restored == board
    assert restored.peg_count() == 31
    assert restored.history == []


def test_from_snapshot_accepts_symbols():
    board = BoardState('english')
    restored = BoardState.from_snapshot('english', board.to_matrix())
    assert restored == board


def test_to_string_hides_blocked_cells():
    lines = BoardState('english').to_string().split("\n")
    assert len(lines) == 7
    assert lines[0].strip() == "● ● ●"
    assert "○" in lines[3]


def test_reset():
    board = BoardState('english')
    board.perform_move(ENGLISH_OPENING[0])
    board.reset()
    assert board.peg_count() == 32
    assert board.history == []


# =====================================================
# Эндшпиль
# =====================================================

def test_generate_endgame_from_single_peg():
    """Тест: каждый обратный ход добавляет ровно один колышек."""
    layout = TOPOLOGIES[TopologyTag.ANTI_PEG].layout
    board = BoardState(Topology.from_layout('lone', layout, (3, 3)))
    assert board.peg_count() == 1

    played = generate_endgame(board, rng=random.Random(0), depth=3)

    assert played == 3
    assert board.peg_count() == 4
    assert board.history == []
    assert BacktrackingSolver().is_solvable(board)


def test_endgame_board_is_solvable():
    board = BoardState('endgame', rng=random.Random(42))

    assert 2 <= board.peg_count() <= 16
    assert board.history == []
    assert BacktrackingSolver().is_solvable(board)


def test_endgame_is_reproducible_with_seed():
    first = BoardState('endgame', rng=random.Random(7))
    second = BoardState('endgame', rng=random.Random(7))
    assert first == second


@pytest.mark.parametrize("move", ENGLISH_OPENING)
def test_each_opening_move_removes_one_peg(move):
    board = BoardState('english')
    assert board.perform_move(move)
    assert board.peg_count() == 31
    assert board.cell_at(move.jumped) is Cell.EMPTY
    assert board.count_cells(Cell.EMPTY) == 2


@pytest.mark.parametrize("tag", [
    'english', 'european', 'cross', 'diamond', 'square',
    'anti_peg', 'endgame', 'triangular', 'star',
])
def test_random_play_keeps_peg_count_and_undo_law(tag):
    """Тест: случайные ходы и откаты не ломают счётчик, откат восстанавливает сетку."""
    rng = random.Random(tag)
    board = BoardState(tag, rng=rng)
    snapshots = [board.snapshot()]

    for _ in range(60):
        moves = board.list_moves()
        if moves and (len(snapshots) == 1 or rng.random() < 0.7):
            assert board.perform_move(rng.choice(moves))
            snapshots.append(board.snapshot())
        elif board.history:
            assert board.undo_last_move()
            snapshots.pop()
            assert board.snapshot() == snapshots[-1]
        assert board.peg_count() == board.count_cells(Cell.PEG)

    while board.history:
        board.undo_last_move()
    assert board.snapshot() == snapshots[0]


# =====================================================
# Некорректный ввод
# =====================================================

def test_from_snapshot_skips_unknown_values():
    """Тест: неизвестный символ или чужое значение в снимке пропускаются."""
    grid = [list(row) for row in BoardState('english').to_matrix()]
    grid[3][3] = 'X'
    grid[0][2] = 5

    board = BoardState.from_snapshot('english', grid)

    assert board.cell_at((3, 3)) is Cell.EMPTY
    assert board.cell_at((0, 2)) is Cell.PEG
    assert all(isinstance(cell, Cell) for row in board.grid for cell in row)
    assert board.peg_count() == board.count_cells(Cell.PEG) == 32


@pytest.mark.parametrize("value", [5, None, 'PEG', True])
def test_set_cell_rejects_non_cell_values(value):
    board = BoardState('english')

    assert board.set_cell((3, 3), value) is False
    assert board.cell_at((3, 3)) is Cell.EMPTY
    assert board.peg_count() == 32


@pytest.mark.parametrize("move", [
    None,
    ((1, 3), (3, 3)),
    ((1, 3), None, (3, 3)),
    (1, 2, 3),
    ((1, 3, 0), (2, 3), (3, 3)),
    (('a', 3), (2, 3), (3, 3)),
])
def test_malformed_move_returns_false(move):
    """Тест: ход неверного формата не бросает исключение."""
    board = BoardState('english')

    assert board.perform_move(move) is False
    assert board.peg_count() == 32
    assert board.history == []


def test_from_snapshot_does_not_generate_endgame():
    """Тест: клетки вне снимка берутся из раскладки, а не из случайного эндшпиля."""
    board = BoardState.from_snapshot('endgame', [])

    assert board.peg_count() == 1
    assert board.cell_at((3, 3)) is Cell.PEG

    played = BoardState('endgame', rng=random.Random(3))
    assert BoardState.from_snapshot('endgame', played.snapshot()) == played
