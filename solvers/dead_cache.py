"""
solvers/dead_cache.py

Кэш тупиковых состояний: отпечатки позиций, из которых нет решения.

Записи только добавляются. Ключ: (имя топологии, канонический отпечаток),
поэтому один кэш можно делить между сессиями разных досок.
"""

import threading
from typing import Set, Tuple

DeadKey = Tuple[str, int]


class DeadStateCache:
    """Потокобезопасное монотонное множество тупиковых состояний."""

    def __init__(self):
        self._keys: Set[DeadKey] = set()
        self._lock = threading.Lock()

    def add(self, key: DeadKey) -> None:
        with self._lock:
            self._keys.add(key)

    def __contains__(self, key: DeadKey) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def __repr__(self) -> str:
        return f"DeadStateCache({len(self)} states)"
