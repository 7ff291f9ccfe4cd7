"""Entry classification for AccioTree.

Decides, for a single directory entry, whether it is the name being
searched for, a subdirectory that should be queued, or neither.
"""

import os
import stat
from enum import Enum
from typing import Union

from .adapter import DirectoryAdapter

PathLike = Union[str, bytes]


class EntryKind(Enum):
    """Outcome of classifying one directory entry."""
    MATCH = "match"           # Name equals the target
    DIRECTORY = "directory"   # Traversable subdirectory
    OTHER = "other"           # Files, symlinks, devices, ...


def _separators(path: PathLike):
    """Return the separators that are valid for the type of ``path``."""
    seps = [os.sep]
    if os.altsep:
        seps.append(os.altsep)
    if isinstance(path, bytes):
        return tuple(os.fsencode(s) for s in seps)
    return tuple(seps)


def compose_path(base: PathLike, name: PathLike) -> PathLike:
    """Join a directory path and a child name.

    Exactly one separator ends up between ``base`` and ``name``: one is
    inserted only when ``base`` does not already end with a separator.
    A bare root separator therefore yields ``/name`` and never ``//name``.

    Args:
        base: Directory path (str or bytes)
        name: Child entry name, same type as ``base``

    Returns:
        The composed path, same type as the inputs

    Example:
        >>> compose_path("/a/b/", "c")
        '/a/b/c'
        >>> compose_path("/", "c")
        '/c'
    """
    if isinstance(base, bytes) != isinstance(name, bytes):
        raise TypeError("base and name must both be str or both be bytes")

    seps = _separators(base)
    if not base or base.endswith(seps):
        return base + name
    return base + seps[0] + name


def is_self_or_parent(name: PathLike) -> bool:
    """True for the ``.`` and ``..`` self/parent references."""
    if isinstance(name, bytes):
        return name in (b".", b"..")
    return name in (".", "..")


def names_equal(name: PathLike, target: PathLike) -> bool:
    """Exact, case-sensitive comparison of an entry name with the target.

    A str target is compared against bytes names through its filesystem
    encoding, so a search started from a bytes root still honours a str
    target given on the command line.
    """
    if isinstance(name, bytes) and not isinstance(target, bytes):
        target = os.fsencode(target)
    elif isinstance(target, bytes) and not isinstance(name, bytes):
        name = os.fsencode(name)
    return name == target


def classify_entry(name: PathLike,
                   path: PathLike,
                   target: PathLike,
                   adapter: DirectoryAdapter) -> EntryKind:
    """Classify one directory entry.

    Matching is checked first, so a directory whose name equals the target
    is reported as a MATCH and is not descended into.

    Args:
        name: The entry's name as listed
        path: The composed full path of the entry
        target: Name being searched for
        adapter: Adapter used for the non-following status lookup

    Returns:
        EntryKind for the entry

    Raises:
        OSError: If the status lookup fails. Failures are never folded
            into OTHER; the caller routes them to its error policy.
    """
    if names_equal(name, target):
        return EntryKind.MATCH

    # Never queue the self/parent references, whatever their status says
    if is_self_or_parent(name):
        return EntryKind.OTHER

    st = adapter.lstat(path)
    if stat.S_ISDIR(st.st_mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER
