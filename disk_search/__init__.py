"""
disk_search: a background file name indexer with substring search.
"""

from .errors import DiskSearchError, IndexStoreError
from .service import FileSearchService, search_files

__version__ = "1.0.0"

__all__ = ["DiskSearchError", "FileSearchService", "IndexStoreError", "search_files"]
