"""DirectoryAdapter abstraction for AccioTree.

The adapter is the only part of the search that touches the filesystem.
The searcher asks it to list a directory and to look up the status of a
single path; everything else (ordering, classification, error routing)
happens in the core. Swapping the adapter lets tests drive the searcher
over an in-memory tree.
"""

import os
from abc import ABC, abstractmethod
from typing import ContextManager, Iterator, Union

PathLike = Union[str, bytes]


class DirectoryAdapter(ABC):
    """Abstract access to a directory tree.

    Implementations must raise OSError subclasses for failures, never
    return sentinel values: the searcher hands those exceptions to the
    active ErrorPolicy.
    """

    @abstractmethod
    def open_directory(self, path: PathLike) -> ContextManager[Iterator[PathLike]]:
        """Open a directory for listing.

        The returned context manager yields an iterator of entry names in
        the order the underlying listing produces them. Leaving the
        context releases the listing handle, whether or not the iterator
        was exhausted.

        Args:
            path: Directory to list

        Returns:
            Context manager yielding an iterator of child names

        Raises:
            OSError: If the directory cannot be opened. Reading the
                iterator may also raise OSError.
        """
        pass

    @abstractmethod
    def lstat(self, path: PathLike) -> os.stat_result:
        """Get the status of a path without following a trailing symlink.

        Args:
            path: Path to inspect

        Returns:
            Status object; only ``st_mode`` is required by the searcher

        Raises:
            OSError: If the status lookup fails
        """
        pass

    def resolve_path(self, path: PathLike) -> PathLike:
        """Canonicalize a root path before searching.

        Default implementation returns the path unchanged.
        Adapters backed by a real filesystem override this.
        """
        return path
