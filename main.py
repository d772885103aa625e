#!/usr/bin/env python3
"""
main.py

Точка входа для движка Peg Solitaire.

Использование:
    python main.py                                   # подсказка на английской доске
    python main.py --board european --solve          # полное решение
    python main.py --position "size=7x7 pegs=... empty=D4"
"""

import sys
import argparse
import logging
import random
import time

from core import BoardState, list_topologies
from peg_io import parse_position, display_board, format_hint, format_solution
from solvers import BacktrackingSolver, SearchSession
from utils.error_handling import SolverError
from utils.logging import get_logger, setup_file_logging
from utils.monitoring import get_monitor


def build_board(args) -> BoardState:
    """Доска из аргументов: текстовая позиция или стартовая расстановка."""
    if args.position:
        return parse_position(args.position, args.board)
    rng = random.Random(args.seed) if args.seed is not None else None
    return BoardState(args.board, rng=rng)


def run_hint(board: BoardState, timeout: float, verbose: bool = False) -> int:
    """Фоновая сессия поиска подсказки с отменой по таймауту."""
    outcome = {}

    def on_result(move, is_dead_game):
        outcome['result'] = (move, is_dead_game)

    def on_cancelled():
        outcome['cancelled'] = True

    with SearchSession(on_result, on_cancelled, verbose=verbose) as session:
        session.start(board.topology, board.snapshot())
        if not session.wait(timeout):
            session.request_cancel()
            session.wait()

    if outcome.get('cancelled'):
        print(f"\n⏹ Поиск отменён (таймаут {timeout:.1f}с)")
        return 2

    move, is_dead_game = outcome['result']
    print(f"\n{format_hint(move, is_dead_game)}")
    if session.last_stats is not None:
        print(f"📊 {session.last_stats}")
    return 1 if is_dead_game else 0


def run_solve(board: BoardState, timeout: float, verbose: bool = False) -> int:
    """Полное решение в текущем потоке с ограничением по времени."""
    deadline = time.monotonic() + timeout
    solver = BacktrackingSolver(should_cancel=lambda: time.monotonic() > deadline,
                                verbose=verbose)
    result = solver.solve(board)

    if result is None and time.monotonic() > deadline:
        print(f"\n⏹ Поиск отменён (таймаут {timeout:.1f}с)")
        return 2

    print(f"\n{format_solution(result)}")
    print(f"\n⏱ Время: {solver.stats.time_elapsed:.3f}с")
    return 0 if result is not None else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Peg Solitaire Engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  python main.py                           # подсказка, английская доска
  python main.py --board cross --solve     # решение задачи «Крест»
  python main.py --board endgame --seed 7  # случайный эндшпиль
        """
    )
    parser.add_argument(
        '--board', '-b', choices=list_topologies(),
        default='english', help='Тип доски (default: english)'
    )
    parser.add_argument(
        '--position', '-p',
        help='Позиция в формате: size=7x7 pegs=A1,A2,... empty=D4'
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--hint', action='store_true', help='Одна подсказка (по умолчанию)')
    mode.add_argument('--solve', action='store_true', help='Полное решение')
    parser.add_argument(
        '--timeout', '-t', type=float, default=60.0,
        help='Ограничение времени поиска в секундах (default: 60)'
    )
    parser.add_argument('--seed', type=int, help='Seed генератора эндшпиля')
    parser.add_argument('--verbose', '-v', action='store_true', help='Подробный лог')
    parser.add_argument('--log-file', help='Дублировать лог в файл')

    args = parser.parse_args(argv)

    logger = get_logger()
    if args.verbose:
        logger.set_level(logging.DEBUG)
    if args.log_file:
        setup_file_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)

    print("=" * 50)
    print("🎯 Peg Solitaire Engine")
    print("=" * 50)

    try:
        board = build_board(args)
    except (ValueError, SolverError) as e:
        print(f"❌ Ошибка: {e}")
        return 1

    print(f"\nДоска: {board.topology.name} ({board.peg_count()} колышков)")
    print(display_board(board))

    if args.solve:
        code = run_solve(board, args.timeout, args.verbose)
    else:
        code = run_hint(board, args.timeout, args.verbose)

    if args.verbose:
        get_monitor().log_stats()
    return code


if __name__ == "__main__":
    sys.exit(main())
