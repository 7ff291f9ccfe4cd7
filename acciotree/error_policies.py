"""
Error handling policies for AccioTree.

Every failure met during a search (opening a directory, reading its
listing, looking up the status of an entry) is handed to an ErrorPolicy.
The policy either absorbs it, in which case the directory or entry is
simply left out of the search, or raises FatalSearchError to abort the
whole search.
"""

import errno
import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Union

PathLike = Union[str, bytes]

# Operation names passed to ErrorPolicy.handle
OPEN_DIRECTORY = "open_directory"
READ_DIRECTORY = "read_directory"
LSTAT = "lstat"
ENQUEUE = "enqueue"


class ErrorKind(Enum):
    """Failure kinds the searcher distinguishes."""
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND_OR_WRONG_TYPE = "not_found_or_wrong_type"
    OTHER_STATUS_FAILURE = "other_status_failure"
    ALLOCATION_FAILURE = "allocation_failure"


_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM}
_NOT_FOUND_ERRNOS = {errno.ENOENT, errno.ENOTDIR}


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception raised during a search to an ErrorKind.

    Args:
        error: Exception raised by the adapter or the queue

    Returns:
        The ErrorKind the error belongs to
    """
    if isinstance(error, MemoryError):
        return ErrorKind.ALLOCATION_FAILURE
    if isinstance(error, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return ErrorKind.NOT_FOUND_OR_WRONG_TYPE
    if isinstance(error, OSError):
        if error.errno in _PERMISSION_ERRNOS:
            return ErrorKind.PERMISSION_DENIED
        if error.errno in _NOT_FOUND_ERRNOS:
            return ErrorKind.NOT_FOUND_OR_WRONG_TYPE
    return ErrorKind.OTHER_STATUS_FAILURE


def _display(path: Optional[PathLike]) -> str:
    if isinstance(path, bytes):
        return path.decode(sys.getfilesystemencoding(), "backslashreplace")
    return str(path)


class FatalSearchError(Exception):
    """Raised when a failure must abort the whole search.

    Attributes:
        path: The path whose operation failed
        kind: ErrorKind of the failure
        operation: Name of the failed operation (e.g. 'open_directory')
        cause: The underlying exception
    """

    def __init__(self,
                 path: Optional[PathLike],
                 kind: ErrorKind,
                 cause: Optional[BaseException] = None,
                 operation: Optional[str] = None):
        self.path = path
        self.kind = kind
        self.cause = cause
        self.operation = operation
        super().__init__(self._format())

    @property
    def reason(self) -> str:
        """OS-level description of the failure."""
        if self.cause is None:
            return self.kind.value.replace("_", " ")
        strerror = getattr(self.cause, "strerror", None)
        if strerror:
            return strerror
        if isinstance(self.cause, MemoryError):
            return "Out of memory"
        return str(self.cause) or type(self.cause).__name__

    def _format(self) -> str:
        where = f" during {self.operation}" if self.operation else ""
        return f"{_display(self.path)}: {self.reason}{where}"


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses decide per failure whether the search skips the failing
    directory/entry or aborts.
    """

    @abstractmethod
    def handle(self, error: Exception, operation: str, path: PathLike) -> None:
        """
        Handle a failure that occurred during a search.

        Args:
            error: The exception that was raised
            operation: Name of the failed operation ('open_directory',
                'read_directory', 'lstat')
            path: The path being processed when the error occurred

        Returns:
            None, meaning the directory or entry is skipped

        Raises:
            FatalSearchError: To abort the search
        """
        pass

    def abort(self, error: Exception, operation: str, path: PathLike) -> None:
        """Raise FatalSearchError for ``error``, chained to it."""
        raise FatalSearchError(path, classify_error(error), error, operation) from error


class SkipPermissionDeniedPolicy(ErrorPolicy):
    """
    Default policy: skip unreadable directories and entries, abort on the rest.

    Permission failures are routine on multi-user systems and must not stop
    an otherwise useful search. Missing paths, type changes and any other
    status failure point at a race or a bug and abort, since hiding them
    would turn into a silently wrong "not found".
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the policy.

        Args:
            verbose: If True, print a warning to stderr for each skipped path
        """
        self.errors: List[dict] = []
        self.skipped_paths: List[PathLike] = []
        self.verbose = verbose

    def handle(self, error: Exception, operation: str, path: PathLike) -> None:
        kind = classify_error(error)
        if kind is not ErrorKind.PERMISSION_DENIED:
            self.abort(error, operation, path)

        self.errors.append({
            'path': path,
            'operation': operation,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        self.skipped_paths.append(path)

        if self.verbose:
            print(f"WARNING: Skipping inaccessible path '{_display(path)}': {error}",
                  file=sys.stderr)

    def get_statistics(self) -> dict:
        """
        Get statistics about skipped paths.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'skipped_directories': sum(
                1 for e in self.errors if e['operation'] in (OPEN_DIRECTORY, READ_DIRECTORY)
            ),
            'skipped_entries': sum(1 for e in self.errors if e['operation'] == LSTAT),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that aborts on any failure, permission denials included.

    Useful when a partial answer is worse than no answer.
    """

    def handle(self, error: Exception, operation: str, path: PathLike) -> None:
        """Abort immediately."""
        self.abort(error, operation, path)


def default_policy(verbose: bool = False) -> ErrorPolicy:
    """Create the policy used when the caller does not supply one."""
    return SkipPermissionDeniedPolicy(verbose=verbose)
