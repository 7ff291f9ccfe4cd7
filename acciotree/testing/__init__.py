"""Testing utilities for AccioTree consumers."""

from .fixtures import InMemoryAdapter, Symlink, create_test_tree

__all__ = ["InMemoryAdapter", "Symlink", "create_test_tree"]
