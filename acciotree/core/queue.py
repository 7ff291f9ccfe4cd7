"""FIFO queue of directories waiting to be expanded.

The queue is created per search and owned by the searcher that created it.
Nothing here is module-level state, so two searches never share pending work.
"""

from collections import deque
from typing import Deque, Iterator, Optional, Union

PathLike = Union[str, bytes]


class PathQueue:
    """First-in, first-out container of pending directory paths.

    No duplicate suppression is performed: a directory reachable twice
    (hard links, bind mounts) is queued twice.
    """

    def __init__(self):
        self._items: Deque[PathLike] = deque()

    def enqueue(self, path: PathLike) -> None:
        """Append a path to the tail of the queue.

        Args:
            path: Directory path to expand later

        Raises:
            MemoryError: If the queue cannot grow. The queue is left unchanged.
        """
        self._items.append(path)

    def dequeue(self) -> Optional[PathLike]:
        """Remove and return the head of the queue.

        Returns:
            The oldest pending path, or None if the queue is empty
        """
        if not self._items:
            return None
        return self._items.popleft()

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> int:
        """Drop every pending path without expanding it.

        Returns:
            Number of paths that were discarded
        """
        discarded = len(self._items)
        self._items.clear()
        return discarded

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[PathLike]:
        """Iterate pending paths head to tail without removing them."""
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"PathQueue(pending={len(self._items)})"
