"""Line-oriented flat file helpers.

Every record file is plain text, one record per line. Reads and writes are
best effort: an I/O failure is logged and reported through the returned
``StorageResult`` instead of being raised, so a broken disk never crashes
the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageResult:
    """Outcome of a single read or write against a record file."""

    ok: bool
    lines: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, lines: Optional[List[str]] = None) -> "StorageResult":
        return cls(ok=True, lines=list(lines or []))

    @classmethod
    def failure(cls, error: str) -> "StorageResult":
        return cls(ok=False, error=error)


def write_file(file_name: str, content: str, append: bool, encoding: Optional[str] = None) -> StorageResult:
    """Write ``content`` to ``file_name``, creating the file when missing.

    ``append=True`` adds to the end of the file, ``append=False`` truncates it
    first. Newlines in ``content`` become the platform line terminator.
    """
    mode = "a" if append else "w"
    try:
        with open(file_name, mode, encoding=encoding) as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Error writing to file {file_name}: {e}")
        return StorageResult.failure(str(e))
    return StorageResult.success()


def read_lines(file_name: str, encoding: Optional[str] = None) -> StorageResult:
    """Return the lines of ``file_name`` in order, without line terminators.

    A file that does not exist yet simply has no lines.
    """
    try:
        with open(file_name, "r", encoding=encoding) as f:
            lines = [line.rstrip("\n") for line in f]
    except FileNotFoundError:
        logger.debug(f"File {file_name} does not exist yet")
        return StorageResult.success()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {file_name}: {e}")
        return StorageResult.failure(str(e))
    return StorageResult.success(lines)
