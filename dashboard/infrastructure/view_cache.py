"""View Cache — in-process read-through cache of rendered listing views.

Invariants:
    - Entries are grouped by view key (e.g. "/dashboard/invoices")
    - invalidate(view_key) drops every entry under that key and bumps the
      view's generation; get() after invalidate() is always a miss
    - put() with a generation older than the view's current one is discarded,
      so a render that started before a mutation never lands after it
    - Entries expire ttl_seconds after they were stored
    - At most max_entries variants per view; least recently used go first

Design Decisions:
    - One instance per process, built from Settings in api/dependencies.py
    - Thread-safe dict access via a lock; values are treated as immutable
"""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, Hashable

logger = logging.getLogger(__name__)

_MISSING = object()


class RenderedViewCache:
    """Cached payloads keyed by (view_key, variant)."""

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, OrderedDict[Hashable, tuple[float, Any]]] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def generation(self, view_key: str) -> int:
        """Token to pass back to put(); changes on every invalidate()."""
        with self._lock:
            return self._generations.get(view_key, 0)

    def get(self, view_key: str, variant: Hashable, default: Any = None) -> Any:
        with self._lock:
            variants = self._entries.get(view_key)
            entry = variants.get(variant, _MISSING) if variants else _MISSING
            if entry is _MISSING:
                return default
            expires_at, value = entry
            if self._clock() >= expires_at:
                del variants[variant]
                return default
            variants.move_to_end(variant)
            return value

    def put(
        self, view_key: str, variant: Hashable, value: Any,
        generation: int | None = None,
    ) -> bool:
        """Store value; False when an invalidation happened since `generation`."""
        with self._lock:
            if generation is not None and generation != self._generations.get(view_key, 0):
                return False
            variants = self._entries.setdefault(view_key, OrderedDict())
            variants[variant] = (self._clock() + self.ttl_seconds, value)
            variants.move_to_end(variant)
            while len(variants) > self.max_entries:
                variants.popitem(last=False)
            return True

    def invalidate(self, view_key: str) -> None:
        with self._lock:
            dropped = self._entries.pop(view_key, None)
            self._generations[view_key] = self._generations.get(view_key, 0) + 1
        logger.debug(
            f"Invalidated {len(dropped or {})} cached variant(s)",
            extra={"view_key": view_key},
        )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(variants) for variants in self._entries.values())
