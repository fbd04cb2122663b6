"""
Explicit dataset cache owned by the data layer.

The cache is an object with a defined lifecycle (init, invalidate, get_or_load) that
callers create and inject; nothing here is module-level state. Loaders are plain
zero-argument callables, so the cache does not know how a dataset is produced.

Examples:
    >>> cache = DatasetCache()
    >>> calls = []
    >>> def load():
    ...     calls.append(1)
    ...     return [1, 2, 3]
    >>> cache.get_or_load("nums", load), cache.get_or_load("nums", load), len(calls)
    ([1, 2, 3], [1, 2, 3], 1)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

__all__ = ["DatasetCache"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatasetCache:
    """Named, lazily loaded datasets.

    A failing loader leaves no entry behind, so the next get_or_load retries.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._loads = 0

    def init(self) -> None:
        """Start (or restart) the cache lifecycle with no entries."""
        self._entries = {}
        self._loads = 0

    def invalidate(self, name: str | None = None) -> None:
        """Drop one entry, or every entry when name is None."""
        if name is None:
            self._entries.clear()
            logger.debug("dataset cache cleared")
        elif self._entries.pop(name, None) is not None:
            logger.debug("dataset %r invalidated", name)

    def get_or_load(self, name: str, loader: Callable[[], T]) -> T:
        if name in self._entries:
            return self._entries[name]
        value = loader()
        self._entries[name] = value
        self._loads += 1
        logger.info("dataset %r loaded", name)
        return value

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def loads(self) -> int:
        """Number of loader calls since init()."""
        return self._loads
