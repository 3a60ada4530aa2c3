import threading
import time
from datetime import datetime

from disk_search.config import CONFIG, resolve_index_path
from disk_search.indexer.store import IndexStore
from disk_search.indexer.walker import build_index
from disk_search.search.engine import search
from disk_search.utils.logger import get_logger

logger = get_logger("Service")


class FileSearchService:
    """Holds the current FileIndex and answers name queries against it.

    The first query loads the persisted index, or builds and persists one if
    none exists. Afterwards the index stays in memory until refresh() swaps
    in a newer one.
    """

    def __init__(self, config=None, store=None):
        self.config = config or CONFIG
        self.store = store or IndexStore(resolve_index_path(self.config))
        self._current = None
        self._last_refresh = None
        self._lock = threading.Lock()
        self._first_use_lock = threading.Lock()

    def search_files(self, query):
        """Return (name, path) pairs whose name stem contains query."""
        start_time = time.perf_counter()
        index = self.current_index()
        results = search(query, index, self.config["minimum_score"])
        duration = time.perf_counter() - start_time
        logger.info(f"Search completed in {duration:.3f}s with {len(results)} results")
        return results

    def current_index(self):
        with self._lock:
            if self._current is not None:
                return self._current

        with self._first_use_lock:
            # Another caller may have finished while we waited.
            with self._lock:
                if self._current is not None:
                    return self._current

            if self.store.exists():
                logger.info("Loading existing index...")
                index = self.store.load()
            else:
                logger.info("Creating new index...")
                index = self._build()
                self.store.save(index)

            with self._lock:
                # A refresh may have published a newer index meanwhile.
                if self._current is None:
                    self._current = index
                return self._current

    def refresh(self):
        """Rebuild the index, persist it, then make it current."""
        index = self._build()
        self.store.save(index)
        with self._lock:
            self._current = index
            self._last_refresh = datetime.now()
        return index

    def stats(self):
        with self._lock:
            current = self._current
            last_refresh = self._last_refresh
        return {
            "entries": len(current) if current is not None else None,
            "index_path": str(self.store.index_path),
            "last_refresh": last_refresh.isoformat() if last_refresh else None,
        }

    def _build(self):
        return build_index(self.config["root_folder"], self.config["skip_directory"])


_default_service = None
_default_service_lock = threading.Lock()


def get_default_service():
    global _default_service
    with _default_service_lock:
        if _default_service is None:
            _default_service = FileSearchService()
        return _default_service


def search_files(query):
    """Search the default index, building or loading it on first use."""
    return get_default_service().search_files(query)
