"""AccioTree - breadth-first search for files and directories by name.

AccioTree walks a directory tree level by level and reports the entries
whose name exactly equals a target. Unreadable directories are skipped;
any other filesystem failure aborts the search with FatalSearchError.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from acciotree import find_first, find_all

    find_first("/srv", "config.yml")
    find_all("/srv", "config.yml", print)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .core import (
    BreadthFirstSearcher,
    DirectoryAdapter,
    EntryKind,
    PathQueue,
    SearchStats,
    classify_entry,
    compose_path,
)
from .adapters import FileSystemAdapter
from .config import ConfigurationError, SearchConfig, SearchMode
from .error_policies import (
    ErrorKind,
    ErrorPolicy,
    FailFastPolicy,
    FatalSearchError,
    SkipPermissionDeniedPolicy,
    classify_error,
)
from .api import find_all, find_first, iter_matches, search

__all__ = [
    "__version__",
    # Core
    "BreadthFirstSearcher",
    "DirectoryAdapter",
    "EntryKind",
    "PathQueue",
    "SearchStats",
    "classify_entry",
    "compose_path",
    # Adapters
    "FileSystemAdapter",
    # Config
    "ConfigurationError",
    "SearchConfig",
    "SearchMode",
    # Errors
    "ErrorKind",
    "ErrorPolicy",
    "FailFastPolicy",
    "FatalSearchError",
    "SkipPermissionDeniedPolicy",
    "classify_error",
    # API
    "find_all",
    "find_first",
    "iter_matches",
    "search",
]
