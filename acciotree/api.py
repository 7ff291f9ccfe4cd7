"""High-level API for AccioTree.

Simple functional interfaces over BreadthFirstSearcher for the common
cases: find one entry by name, or report every entry with that name.
"""

from typing import Callable, Iterator, Optional, Union

from .adapters.filesystem import FileSystemAdapter
from .config import SearchConfig, SearchMode
from .core.adapter import DirectoryAdapter
from .core.searcher import BreadthFirstSearcher
from .error_policies import ErrorPolicy, default_policy

PathLike = Union[str, bytes]


def _searcher_for(config: SearchConfig,
                  adapter: Optional[DirectoryAdapter],
                  policy: Optional[ErrorPolicy]):
    config.check()
    adapter = adapter or FileSystemAdapter()
    searcher = BreadthFirstSearcher(adapter, policy or default_policy(config.verbose))
    return searcher, config.resolved_root(adapter)


def iter_matches(
    root: PathLike,
    target: PathLike,
    *,
    policy: Optional[ErrorPolicy] = None,
    adapter: Optional[DirectoryAdapter] = None,
    resolve_root: bool = True,
) -> Iterator[PathLike]:
    """Iterate over every entry under ``root`` named ``target``.

    Args:
        root: Directory to search
        target: Exact entry name to look for
        policy: Error policy (defaults to skipping permission failures)
        adapter: Tree adapter (defaults to FileSystemAdapter)
        resolve_root: Canonicalize ``root`` first, making results absolute

    Returns:
        Iterator over matching paths in breadth-first discovery order

    Raises:
        ConfigurationError: Immediately, if ``target`` is empty or not a
            single name
        FatalSearchError: While iterating, if the search has to abort

    Example:
        >>> for path in iter_matches("/srv", "config.yml"):
        ...     print(path)
    """
    config = SearchConfig(root=root, target=target,
                          mode=SearchMode.ALL_MATCHES, resolve_root=resolve_root)
    searcher, start = _searcher_for(config, adapter, policy)
    return searcher.iter_matches(start, target)


def find_first(
    root: PathLike,
    target: PathLike,
    *,
    policy: Optional[ErrorPolicy] = None,
    adapter: Optional[DirectoryAdapter] = None,
    resolve_root: bool = True,
) -> Optional[PathLike]:
    """Find the shallowest entry named ``target`` under ``root``.

    Args:
        root: Directory to search
        target: Exact entry name to look for
        policy: Error policy (defaults to skipping permission failures)
        adapter: Tree adapter (defaults to FileSystemAdapter)
        resolve_root: Canonicalize ``root`` first, making results absolute

    Returns:
        The first matching path, or None if there is none

    Raises:
        ConfigurationError: If ``target`` is empty or not a single name
        FatalSearchError: If the search has to abort

    Example:
        >>> find_first("/home/user", "notes.txt")
        '/home/user/docs/notes.txt'
    """
    config = SearchConfig(root=root, target=target,
                          mode=SearchMode.FIRST_MATCH, resolve_root=resolve_root)
    searcher, start = _searcher_for(config, adapter, policy)
    return searcher.find_first(start, target)


def find_all(
    root: PathLike,
    target: PathLike,
    on_match: Optional[Callable[[PathLike], None]] = None,
    *,
    policy: Optional[ErrorPolicy] = None,
    adapter: Optional[DirectoryAdapter] = None,
    resolve_root: bool = True,
) -> int:
    """Report every entry named ``target`` under ``root``.

    ``on_match`` is called as soon as each match is found, so results can
    be printed while the search is still running.

    Returns:
        Number of matches; 0 means not found
    """
    config = SearchConfig(root=root, target=target,
                          mode=SearchMode.ALL_MATCHES, resolve_root=resolve_root)
    searcher, start = _searcher_for(config, adapter, policy)
    return searcher.find_all(start, target, on_match)


def search(config: SearchConfig,
           on_match: Optional[Callable[[PathLike], None]] = None,
           adapter: Optional[DirectoryAdapter] = None,
           policy: Optional[ErrorPolicy] = None) -> BreadthFirstSearcher:
    """Run a search described by a SearchConfig.

    In FIRST_MATCH mode ``on_match`` is called at most once. The searcher
    is returned so callers can inspect ``stats`` afterwards.
    """
    searcher, start = _searcher_for(config, adapter, policy)
    if config.mode is SearchMode.FIRST_MATCH:
        found = searcher.find_first(start, config.target)
        if found is not None and on_match is not None:
            on_match(found)
    else:
        searcher.find_all(start, config.target, on_match)
    return searcher
