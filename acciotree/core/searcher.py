"""Breadth-first search engine for AccioTree.

The searcher drains a PathQueue of pending directories. Each dequeued
directory is listed through the adapter, every child is classified, and
subdirectories are queued behind everything already pending, so all
entries at depth N are seen before any entry at depth N+1.
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

from ..error_policies import (
    ENQUEUE,
    LSTAT,
    OPEN_DIRECTORY,
    READ_DIRECTORY,
    ErrorKind,
    ErrorPolicy,
    FatalSearchError,
    default_policy,
)
from .adapter import DirectoryAdapter
from .classifier import EntryKind, classify_entry, compose_path
from .queue import PathQueue

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes]


@dataclass
class SearchStats:
    """Counters for a single search."""

    directories_expanded: int = 0
    directories_skipped: int = 0
    entries_examined: int = 0
    entries_skipped: int = 0
    matches: int = 0
    listings_truncated: int = 0  # Expanded, but reading stopped early
    abandoned: int = 0  # Queued directories never expanded

    def summary(self) -> str:
        return (f"{self.matches} match(es), "
                f"{self.directories_expanded} directories searched, "
                f"{self.entries_examined} entries examined, "
                f"{self.directories_skipped} directories and "
                f"{self.entries_skipped} entries skipped, "
                f"{self.listings_truncated} listings cut short")


class BreadthFirstSearcher:
    """Finds entries by exact name, breadth-first.

    A searcher keeps no per-search state besides ``stats`` and the
    records of its default policy; the queue and
    any open directory handles live only for the duration of one call, so
    the same searcher can be reused, and two searchers never interfere.

    Example:
        >>> searcher = BreadthFirstSearcher(FileSystemAdapter())
        >>> searcher.find_first("/etc", "hosts")
        '/etc/hosts'
    """

    def __init__(self, adapter: DirectoryAdapter, policy: Optional[ErrorPolicy] = None):
        """Initialize the searcher.

        Args:
            adapter: Adapter used to list directories and look up entries
            policy: Error policy. When omitted, a fresh
                SkipPermissionDeniedPolicy is created for every search, so its
                records describe the latest search only. A policy passed in
                here keeps accumulating records across searches.
        """
        self.adapter = adapter
        self._owns_policy = policy is None
        self.policy = policy or default_policy()
        self.stats = SearchStats()

    def iter_matches(self, root: PathLike, target: PathLike) -> Iterator[PathLike]:
        """Yield every path under ``root`` whose name equals ``target``.

        Paths are yielded in discovery order: breadth-first, then listing
        order within a directory. Closing the generator early releases the
        open listing and drops the pending queue.

        Args:
            root: Directory to start from
            target: Entry name to look for

        Yields:
            Matching paths, same type (str or bytes) as ``root``

        Raises:
            FatalSearchError: If the error policy aborts the search, or
                memory runs out while queueing directories
        """
        self.stats = SearchStats()
        if self._owns_policy:
            self.policy = default_policy()
        queue = PathQueue()
        current = root
        try:
            self._enqueue(queue, root)
            while True:
                current = queue.dequeue()
                if current is None:
                    break
                yield from self._expand(queue, current, target)
        except MemoryError as error:
            raise FatalSearchError(current, ErrorKind.ALLOCATION_FAILURE, error) from error
        finally:
            self.stats.abandoned = queue.clear()
            if self.stats.abandoned:
                logger.debug("Discarded %d pending directories", self.stats.abandoned)

    def find_first(self, root: PathLike, target: PathLike) -> Optional[PathLike]:
        """Return the first match in breadth-first order.

        The search stops at the first match; the rest of the queue and the
        current listing are abandoned.

        Returns:
            The matching path, or None if nothing under ``root`` matches
        """
        matches = self.iter_matches(root, target)
        try:
            return next(matches, None)
        finally:
            matches.close()

    def find_all(self,
                 root: PathLike,
                 target: PathLike,
                 on_match: Optional[Callable[[PathLike], None]] = None) -> int:
        """Report every match as it is found.

        Args:
            root: Directory to start from
            target: Entry name to look for
            on_match: Called once per match, in discovery order

        Returns:
            Number of matches; 0 means not found
        """
        count = 0
        for path in self.iter_matches(root, target):
            count += 1
            if on_match is not None:
                on_match(path)
        return count

    def _enqueue(self, queue: PathQueue, path: PathLike) -> None:
        try:
            queue.enqueue(path)
        except MemoryError as error:
            raise FatalSearchError(path, ErrorKind.ALLOCATION_FAILURE, error, ENQUEUE) from error

    def _expand(self, queue: PathQueue, base: PathLike, target: PathLike) -> Iterator[PathLike]:
        """List one directory, yielding matches and queueing subdirectories."""
        with ExitStack() as stack:
            try:
                names = stack.enter_context(self.adapter.open_directory(base))
            except OSError as error:
                self.policy.handle(error, OPEN_DIRECTORY, base)
                self.stats.directories_skipped += 1
                logger.debug("Skipped directory %r: %s", base, error)
                return

            self.stats.directories_expanded += 1
            logger.debug("Expanding %r", base)

            while True:
                try:
                    name = next(names)
                except StopIteration:
                    break
                except OSError as error:
                    # Entries already seen in this listing stay reported
                    self.policy.handle(error, READ_DIRECTORY, base)
                    self.stats.listings_truncated += 1
                    logger.debug("Stopped reading %r: %s", base, error)
                    return

                path = compose_path(base, name)
                self.stats.entries_examined += 1
                try:
                    kind = classify_entry(name, path, target, self.adapter)
                except OSError as error:
                    self.policy.handle(error, LSTAT, path)
                    self.stats.entries_skipped += 1
                    logger.debug("Skipped entry %r: %s", path, error)
                    continue

                if kind is EntryKind.MATCH:
                    self.stats.matches += 1
                    logger.debug("Match %r", path)
                    yield path
                elif kind is EntryKind.DIRECTORY:
                    self._enqueue(queue, path)
