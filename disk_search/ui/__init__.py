"""
User interface module for disk_search.
"""

from .gui import SearchWindow

__all__ = ["SearchWindow"]
