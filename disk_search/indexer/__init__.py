"""
Indexer module for disk_search.
Handles directory traversal, index persistence and periodic refresh.
"""

from .file_index import FileIndex
from .scheduler import RefreshScheduler
from .store import IndexStore, index_exists, load_index, save_index
from .walker import build_index

__all__ = [
    "FileIndex",
    "IndexStore",
    "RefreshScheduler",
    "build_index",
    "index_exists",
    "load_index",
    "save_index",
]
