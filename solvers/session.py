"""
solvers/session.py

Фоновая сессия поиска подсказки.

Поиск идёт в отдельном потоке над копией снимка доски. Результат
приходит ровно одним обратным вызовом: on_result(move, is_dead_game)
или on_cancelled(). Коллбэки вызываются из рабочего потока; перенос
в UI-поток делает вызывающий код.
"""

import threading
from typing import Callable, Optional, Tuple

from .backtracking import BacktrackingSolver
from .base import SolverStats
from .dead_cache import DeadStateCache
from core.board import BoardState
from core.topology import TopologyLike
from core.utils import Move
from utils.error_handling import handle_errors, safe_call
from utils.logging import get_logger
from utils.monitoring import get_monitor

ResultCallback = Callable[[Optional[Move], bool], None]
CancelCallback = Callable[[], None]


class SearchSession:
    """
    Одна фоновая задача поиска за раз.

    Рабочий поток демонический и не останавливается при удалении
    объекта: вызывающий код обязан вызвать close() (отмена и ожидание
    потока) или использовать сессию как контекстный менеджер.

    Usage:
        with SearchSession(on_result, on_cancelled) as session:
            session.start('english', board.snapshot())
            ...
    """

    def __init__(self, on_result: ResultCallback, on_cancelled: CancelCallback,
                 cache: Optional[DeadStateCache] = None, verbose: bool = False):
        """
        Args:
            on_result: вызывается с (ход или None, признак тупика)
            on_cancelled: вызывается, если поиск был отменён
            cache: общий кэш тупиков (None: новый кэш на каждый start())
            verbose: подробный лог решателя
        """
        self.on_result = on_result
        self.on_cancelled = on_cancelled
        self.cache = cache
        self.verbose = verbose
        self.last_stats: Optional[SolverStats] = None

        self._cancel_event = threading.Event()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self.logger = get_logger()

    def start(self, topology: TopologyLike, grid) -> bool:
        """
        Запускает поиск и сразу возвращает управление.

        Returns:
            False, если поиск уже идёт (новый не запускается)
            или снимок не удалось разобрать
        """
        with self._lock:
            if self._running:
                self.logger.warning("SearchSession: поиск уже выполняется")
                return False

            board = safe_call(BoardState.from_snapshot, topology, grid)
            if board is None:
                self.logger.warning("SearchSession: некорректный снимок доски, поиск не запущен")
                return False
            cache = self.cache if self.cache is not None else DeadStateCache()

            self._cancel_event.clear()
            self._running = True
            self._thread = threading.Thread(
                target=self._run, args=(board, cache),
                name=f"search-{board.topology.name}", daemon=True
            )
            self._thread.start()
            return True

    def request_cancel(self) -> None:
        """Просит текущий поиск остановиться. Без активного поиска ничего не делает."""
        self._cancel_event.set()

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Ждёт завершения рабочего потока.

        Returns:
            True, если поток завершён
        """
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def close(self) -> None:
        """Отменяет поиск и дожидается потока."""
        self.request_cancel()
        self.wait()

    def __enter__(self) -> 'SearchSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =====================================================
    # Рабочий поток
    # =====================================================

    def _run(self, board: BoardState, cache: DeadStateCache) -> None:
        monitor = get_monitor()
        solver = BacktrackingSolver(cache=cache, should_cancel=self._cancel_event.is_set,
                                    verbose=self.verbose)

        with monitor.timed(f"search.{board.topology.name}"):
            move, is_dead_game = self._search(solver, board)

        self.last_stats = solver.stats
        cancelled = self._cancel_event.is_set()

        with self._lock:
            self._running = False

        if cancelled:
            monitor.increment_counter("search.cancelled")
            self.logger.debug(f"Поиск отменён ({board.topology.name})")
            safe_call(self.on_cancelled)
            return

        if is_dead_game:
            monitor.increment_counter("search.dead")
            self.logger.info(f"Тупиковая позиция ({board.topology.name}, pegs={board.peg_count()})")
        else:
            monitor.increment_counter("search.hint")
        safe_call(self.on_result, move, is_dead_game)

    @handle_errors(default_return=(None, True))
    def _search(self, solver: BacktrackingSolver,
                board: BoardState) -> Tuple[Optional[Move], bool]:
        """(подсказка, тупик). Сбой поиска считается тупиком."""
        if not solver.is_solvable(board):
            return None, True
        return solver.find_winning_move(board), False
