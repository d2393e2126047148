"""Background layout computation with memoization per graph content.

The engine itself keeps no state between calls; this collaborator runs it
on a worker thread and caches one future per distinct input.
"""

import hashlib
import json
import logging
import threading
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from strata.config import LayoutConfig
from strata.graph import Item
from strata.layout import Result, compute_layout

logger = logging.getLogger(__name__)


def graph_key(items: Iterable[Item], config: LayoutConfig | None = None) -> str:
    """Content hash of items and layout parameters.

    Item order and prerequisite order are part of the key: ties in the
    layering keep input order, so reordered items may lay out differently.
    Repeated prerequisites collapse as they do in Graph.
    """
    canonical = [
        (item.id, list(dict.fromkeys(item.prerequisites or ())), item.rank)
        for item in items
    ]
    payload = json.dumps({
        "items": canonical,
        "layout": (config or LayoutConfig()).model_dump(),
    }, sort_keys=True)
    return hashlib.sha256(payload.encode("utf8")).hexdigest()


class LayoutService:
    """Runs layouts off the caller's thread, at most once per distinct graph."""

    def __init__(self, config: LayoutConfig | None = None, max_workers: int = 1):
        self.config = config or LayoutConfig()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="strata")
        self._cache: dict[str, Future] = {}
        self._lock = threading.Lock()

    def submit(self, items: Iterable[Item]) -> Future:
        """
        Schedule a layout, or return the pending/finished one for the same graph.

        The returned future resolves to a Result, or raises the error the
        engine raised. Failed layouts stay cached: the engine is
        deterministic, so running it again would fail the same way.
        """
        items = list(items)
        key = graph_key(items, self.config)
        with self._lock:
            future = self._cache.get(key)
            if future is None:
                logger.debug("Scheduling layout %s for %d items", key[:12], len(items))
                future = self._executor.submit(compute_layout, items, self.config)
                self._cache[key] = future
        return future

    def layout(self, items: Iterable[Item], timeout: float | None = None) -> Result:
        """Block until the layout of items is available.

        Raises:
            concurrent.futures.TimeoutError: If timeout elapses first. The
                computation keeps running and stays cached.
        """
        return self.submit(items).result(timeout=timeout)

    def invalidate(self, items: Iterable[Item] | None = None) -> None:
        """Forget the cached layout of items, or every cached layout."""
        with self._lock:
            if items is None:
                self._cache.clear()
            else:
                self._cache.pop(graph_key(items, self.config), None)

    def __contains__(self, items: Iterable[Item]) -> bool:
        with self._lock:
            return graph_key(items, self.config) in self._cache

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "LayoutService":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
