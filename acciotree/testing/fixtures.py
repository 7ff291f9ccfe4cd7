"""Test fixtures for AccioTree consumers.

These fixtures let test suites drive BreadthFirstSearcher over an
in-memory tree, including failures that are hard to provoke on a real
filesystem (vanishing entries, permission errors as root, read errors
half way through a listing).
"""

import errno
import os
import stat
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..core.adapter import DirectoryAdapter


class Symlink:
    """Marks a symbolic link inside an InMemoryAdapter tree."""

    def __init__(self, target: str):
        self.target = target

    def __repr__(self) -> str:
        return f"Symlink({self.target!r})"


def _stat_result(mode: int) -> os.stat_result:
    return os.stat_result((mode, 0, 0, 1, 0, 0, 0, 0, 0, 0))


class InMemoryAdapter(DirectoryAdapter):
    """Adapter over a nested dict.

    Keys are entry names. A dict value is a directory, a Symlink value is
    a link, anything else (usually None) is a regular file. Listing order
    is dict insertion order.

    Example:
        adapter = InMemoryAdapter({
            "a.txt": None,
            "sub": {"a.txt": None, "b.txt": None},
        })
        searcher = BreadthFirstSearcher(adapter)
        assert searcher.find_first("/", "a.txt") == "/a.txt"
    """

    def __init__(self,
                 tree: Dict,
                 root: str = "/",
                 dot_entries: bool = False):
        """Initialize the adapter.

        Args:
            tree: Nested dict describing the tree below ``root``
            root: Path the top of ``tree`` lives at
            dot_entries: List '.' and '..' first in every directory, the
                way readdir does
        """
        self.tree = tree
        self.root = root
        self.dot_entries = dot_entries
        self.open_errors: Dict[str, OSError] = {}
        self.read_errors: Dict[str, OSError] = {}
        self.lstat_errors: Dict[str, OSError] = {}
        self.opened: List[str] = []
        self.closed: List[str] = []
        self.lstat_calls: List[str] = []

    # Failure injection

    def fail_open(self, path: str, error: OSError) -> None:
        self.open_errors[path] = error

    def fail_read(self, path: str, error: OSError) -> None:
        """Raise ``error`` after the first entry of ``path`` has been read."""
        self.read_errors[path] = error

    def fail_lstat(self, path: str, error: OSError) -> None:
        self.lstat_errors[path] = error

    @property
    def open_handles(self) -> int:
        return len(self.opened) - len(self.closed)

    # DirectoryAdapter interface

    @contextmanager
    def open_directory(self, path: str) -> Iterator[Iterator[str]]:
        if path in self.open_errors:
            raise self.open_errors[path]
        node = self._lookup(path)
        if not isinstance(node, dict):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)

        self.opened.append(path)
        try:
            yield self._names(path, node)
        finally:
            self.closed.append(path)

    def lstat(self, path: str) -> os.stat_result:
        self.lstat_calls.append(path)
        if path in self.lstat_errors:
            raise self.lstat_errors[path]
        name = path.rstrip("/").rsplit("/", 1)[-1]
        if name in (".", ".."):
            return _stat_result(stat.S_IFDIR | 0o755)
        node = self._lookup(path)
        if isinstance(node, dict):
            return _stat_result(stat.S_IFDIR | 0o755)
        if isinstance(node, Symlink):
            return _stat_result(stat.S_IFLNK | 0o777)
        return _stat_result(stat.S_IFREG | 0o644)

    # Helpers

    def _names(self, path: str, node: Dict) -> Iterator[str]:
        if self.dot_entries:
            yield "."
            yield ".."
        for i, name in enumerate(node):
            if i == 1 and path in self.read_errors:
                raise self.read_errors[path]
            yield name

    def _lookup(self, path: str) -> Optional[object]:
        root = self.root.rstrip("/")
        if path.rstrip("/") == root:
            return self.tree
        if not path.startswith(root + "/"):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

        node = self.tree
        for part in path[len(root) + 1:].split("/"):
            if not part:
                continue
            if not isinstance(node, dict):
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
            if part not in node:
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
            node = node[part]
        return node


def create_test_tree(base_dir: Path, tree: Dict) -> None:
    """Create a directory structure on disk from a nested dict.

    Dict values become directories, Symlink values become symbolic links,
    anything else becomes a small text file.

    Args:
        base_dir: Existing directory to create the tree in
        tree: Nested dict in the same format InMemoryAdapter accepts
    """
    for name, value in tree.items():
        path = base_dir / name
        if isinstance(value, dict):
            path.mkdir()
            create_test_tree(path, value)
        elif isinstance(value, Symlink):
            os.symlink(value.target, path)
        else:
            path.write_text(f"content of {name}")
