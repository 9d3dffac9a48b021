"""Source store: key/value pairs loaded from a configuration file."""

import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .exceptions import FileLoadError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"
SEPARATOR = "="


def parse_lines(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """Parse configuration lines into key/value pairs.

    A line is an entry only if it contains ``=`` and does not start with ``#``.
    Only the first ``=`` splits, so values may contain ``=`` themselves.

    Args:
        lines: Lines of the configuration file  # (trailing newlines are stripped)

    Yields:
        (lowercased key, raw value) pairs in file order
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if SEPARATOR not in line or line.startswith(COMMENT_PREFIX):
            continue
        key, value = line.split(SEPARATOR, 1)
        yield key.lower(), value


class SourceStore:
    """Case-insensitive key/value table with an optional environment fallback."""

    def __init__(
        self,
        entries: Optional[Mapping[str, str]] = None,
        allow_environment_fallback: bool = True,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize source store.

        Args:
            entries: Raw key/value pairs  # (keys are case-folded here)
            allow_environment_fallback: Consult ``environ`` for keys missing from ``entries``
            environ: Environment lookup  # (defaults to os.environ)
        """
        self._entries: Dict[str, str] = {}
        for key, value in (entries or {}).items():
            self._entries[key.lower()] = value
        self.allow_environment_fallback = allow_environment_fallback
        self.environ = os.environ if environ is None else environ

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        encoding: str = "utf-8-sig",
        allow_environment_fallback: bool = True,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "SourceStore":
        """Load a source store from a configuration file.

        A missing file yields an empty store, so every lookup goes to the environment.

        Args:
            path: Configuration file path
            encoding: File encoding  # (utf-8-sig also reads plain UTF-8 and drops a BOM)
            allow_environment_fallback: Consult the environment for missing keys
            environ: Environment lookup  # (defaults to os.environ)

        Returns:
            Loaded source store

        Raises:
            FileLoadError: If the file exists but cannot be read
        """
        path = Path(path)
        entries: Dict[str, str] = {}

        if not path.exists():
            logger.debug("Configuration file %s does not exist, using environment only.", path)
            return cls(entries, allow_environment_fallback, environ)

        try:
            with open(path, "r", encoding=encoding) as f:
                # Later duplicates overwrite earlier ones
                for key, value in parse_lines(f):
                    entries[key] = value
        except (OSError, UnicodeDecodeError) as e:
            raise FileLoadError(path, e) from e

        logger.debug("Loaded %d entries from %s.", len(entries), path)
        return cls(entries, allow_environment_fallback, environ)

    def get(self, key: str) -> Optional[str]:
        """Look up a raw value.

        Args:
            key: Lookup key  # (matched case-insensitively against the file)

        Returns:
            Raw value, or None if neither the file nor the environment has it
        """
        folded = key.lower()
        if folded in self._entries:
            return self._entries[folded]

        if self.allow_environment_fallback:
            # The environment is consulted with the original-case key
            value = self.environ.get(key)
            if value is not None:
                logger.debug("Resolved %s from the environment.", key)
            return value

        return None

    def set_environment_fallback(self, allow: bool) -> "SourceStore":
        """Toggle environment fallback and return the store for chaining."""
        self.allow_environment_fallback = allow
        return self

    @property
    def entries(self) -> Mapping[str, str]:
        """Read-only view of the file-derived entries."""
        return MappingProxyType(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"SourceStore({self._entries}, allow_environment_fallback={self.allow_environment_fallback})"
