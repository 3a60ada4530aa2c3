"""
Search module for disk_search.
Scores queries against the names held in a FileIndex.
"""

from .engine import file_stem, score_filename, search

__all__ = ["file_stem", "score_filename", "search"]
