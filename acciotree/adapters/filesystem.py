"""Filesystem adapter for AccioTree.

Lists directories with os.scandir and inspects entries with os.lstat, so
symbolic links are classified as links and never traversed.
"""

import os
from contextlib import contextmanager
from typing import Iterator, Union

from ..core.adapter import DirectoryAdapter

PathLike = Union[str, bytes]


class FileSystemAdapter(DirectoryAdapter):
    """Adapter for searching the local filesystem.

    Entry names are produced in the order the operating system lists them;
    they are not sorted. ``.`` and ``..`` are never produced by os.scandir,
    the classifier still guards against them for other adapters.
    """

    @contextmanager
    def open_directory(self, path: PathLike) -> Iterator[Iterator[PathLike]]:
        """Open ``path`` with os.scandir and yield its entry names.

        The scandir handle is closed when the context exits, including
        when the caller stops reading early.
        """
        with os.scandir(path) as entries:
            yield (entry.name for entry in entries)

    def lstat(self, path: PathLike) -> os.stat_result:
        """Status of ``path`` without following symlinks."""
        return os.lstat(path)

    def resolve_path(self, path: PathLike) -> PathLike:
        """Canonicalize a root path, following symlinks in it.

        A missing path is returned in absolute form rather than rejected;
        the search reports it when it tries to open it.
        """
        return os.path.realpath(path)
