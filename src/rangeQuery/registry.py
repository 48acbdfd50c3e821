"""Memoised sparse table construction for repeatedly queried static arrays."""

import logging
import operator
from collections.abc import Iterable
from threading import RLock

from cachetools import LRUCache
from cachetools.keys import hashkey

from .config import get_settings
from .operations import Operation
from .sparse_table import SparseTable

logger = logging.getLogger(__name__)

_TABLE_LOCK = RLock()
_table_cache: LRUCache | None = None


def _current_cache() -> LRUCache:
    """
    Return the table cache sized from ``settings.table.cache_maxsize``.

    A changed size replaces the cache, dropping its tables. Caller must hold ``_TABLE_LOCK``.
    """
    global _table_cache

    maxsize = get_settings().table.cache_maxsize
    if _table_cache is None or _table_cache.maxsize != maxsize:
        if _table_cache is not None:
            logger.info("Resizing table cache %d -> %d", _table_cache.maxsize, maxsize)
        _table_cache = LRUCache(maxsize=maxsize)
    return _table_cache


def get_table(values: Iterable[int], operation: Operation | str) -> SparseTable:
    """
    Return a table for ``values`` and ``operation``, building it at most once.

    Tables are immutable, so the cached instance is shared between callers and threads.
    Builds run outside the cache lock; when two threads race on the same key, the first
    stored table wins and both callers receive it.

    Raises:
        ValueError: If ``values`` is empty or the operation name is unknown
        TypeError: If ``values`` is not iterable or holds non-integers
    """
    values = tuple(operator.index(value) for value in values)
    operation = Operation(operation)
    key = hashkey(values, operation)

    with _TABLE_LOCK:
        table = _current_cache().get(key)
    if table is not None:
        return table

    logger.debug("Table cache miss for %s over %d values", operation.value, len(values))
    table = SparseTable(values, operation)
    with _TABLE_LOCK:
        return _current_cache().setdefault(key, table)


def cached_table_count() -> int:
    """Number of tables currently held by the cache."""
    with _TABLE_LOCK:
        return len(_current_cache())


def clear_table_cache() -> None:
    """Drop every cached table."""
    with _TABLE_LOCK:
        _current_cache().clear()
    logger.debug("Table cache cleared")
