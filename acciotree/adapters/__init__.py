"""Adapters for AccioTree.

Provides concrete adapter implementations for searching different trees.
"""

from .filesystem import FileSystemAdapter

__all__ = [
    'FileSystemAdapter',
]
