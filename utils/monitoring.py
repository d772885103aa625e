"""
utils/monitoring.py

Мониторинг фоновых поисков: время и исходы.
"""

import threading
import time
from typing import Dict, List, Any, Optional
from collections import defaultdict
from contextlib import contextmanager

from .logging import get_logger


class PerformanceMonitor:
    """Монитор производительности. Потокобезопасен: пишут рабочие потоки сессий."""

    def __init__(self):
        self.metrics: Dict[str, List[float]] = defaultdict(list)
        self.counters: Dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()
        self.logger = get_logger()

    def record_time(self, operation: str, elapsed: float):
        """
        Записывает время выполнения операции.

        Args:
            operation: имя операции
            elapsed: время в секундах
        """
        with self._lock:
            self.metrics[operation].append(elapsed)

    def increment_counter(self, counter: str, value: int = 1):
        with self._lock:
            self.counters[counter] += value

    @contextmanager
    def timed(self, operation: str):
        """Контекстный менеджер: замеряет блок и записывает время."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_time(operation, time.perf_counter() - start)

    def get_stats(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """
        Возвращает статистику.

        Args:
            operation: имя операции (если None, возвращает общую статистику)
        """
        with self._lock:
            if operation:
                times = list(self.metrics.get(operation, []))
                if not times:
                    return {}
                return {
                    'operation': operation,
                    'count': len(times),
                    'total': sum(times),
                    'average': sum(times) / len(times),
                    'min': min(times),
                    'max': max(times),
                    'last': times[-1],
                }
            operations = list(self.metrics)
            counters = dict(self.counters)

        return {
            'operations': {op: self.get_stats(op) for op in operations},
            'counters': counters,
            'total_operations': sum(stats['count'] for stats in
                                    (self.get_stats(op) for op in operations) if stats),
        }

    def log_stats(self):
        """Пишет сводку в лог."""
        stats = self.get_stats()
        for op, op_stats in stats['operations'].items():
            self.logger.info(f"{op}: {op_stats['count']} раз, среднее {op_stats['average']:.3f}s")
        for counter, value in stats['counters'].items():
            self.logger.info(f"{counter}: {value}")

    def reset(self):
        """Сбрасывает все метрики."""
        with self._lock:
            self.metrics.clear()
            self.counters.clear()


# Глобальный монитор
_monitor: Optional[PerformanceMonitor] = None


def get_monitor() -> PerformanceMonitor:
    """Возвращает глобальный монитор."""
    global _monitor
    if _monitor is None:
        _monitor = PerformanceMonitor()
    return _monitor
