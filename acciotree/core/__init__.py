"""Core components of AccioTree.

This package contains the search engine and the pieces it is built from:
the pending-directory queue, the entry classifier and the adapter
abstraction the engine reads the tree through.
"""

from .queue import PathQueue
from .adapter import DirectoryAdapter
from .classifier import (
    EntryKind,
    classify_entry,
    compose_path,
    is_self_or_parent,
    names_equal,
)
from .searcher import BreadthFirstSearcher, SearchStats

__all__ = [
    "PathQueue",
    "DirectoryAdapter",
    "EntryKind",
    "classify_entry",
    "compose_path",
    "is_self_or_parent",
    "names_equal",
    "BreadthFirstSearcher",
    "SearchStats",
]
