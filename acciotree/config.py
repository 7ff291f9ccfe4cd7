"""Configuration for AccioTree searches.

SearchConfig collects everything a search needs: where to start, what
name to look for, and whether to stop at the first match.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from .core.adapter import DirectoryAdapter
from .core.classifier import is_self_or_parent

PathLike = Union[str, bytes]


class SearchMode(Enum):
    """Whether a search stops at the first match."""
    FIRST_MATCH = "first"     # Return one path and stop
    ALL_MATCHES = "all"       # Report every match as found


class ConfigurationError(ValueError):
    """Raised when a SearchConfig fails validation."""
    pass


@dataclass
class SearchConfig:
    """Complete configuration for one search."""

    root: PathLike = "."
    target: PathLike = ""
    mode: SearchMode = SearchMode.FIRST_MATCH
    resolve_root: bool = True   # Canonicalize the root (absolute results)
    verbose: bool = False       # Warn about skipped paths

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.root:
            errors.append("root directory cannot be empty")

        if not self.target:
            errors.append("target name cannot be empty")
        else:
            seps = [os.sep] + ([os.altsep] if os.altsep else [])
            if isinstance(self.target, bytes):
                seps = [os.fsencode(s) for s in seps]
            if any(sep in self.target for sep in seps):
                errors.append("target must be a single name, not a path")
            if is_self_or_parent(self.target):
                errors.append("target cannot be '.' or '..'")

        if not isinstance(self.mode, SearchMode):
            errors.append(f"unknown search mode: {self.mode!r}")

        return errors

    def check(self) -> 'SearchConfig':
        """Raise ConfigurationError if the configuration is invalid.

        Returns:
            self, for chaining
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
        return self

    def resolved_root(self, adapter: DirectoryAdapter) -> PathLike:
        """Root path to seed the search with."""
        if self.resolve_root:
            return adapter.resolve_path(self.root)
        return self.root
