"""
Error taxonomy for filesystem traversal.

Every OS-level failure raised while listing or stat-ing is translated into
one of these types so callers can handle a single hierarchy.
"""
from __future__ import annotations

import errno
from typing import Optional


class WalkError(Exception):
    """Base class for all traversal failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NotFound(WalkError):
    """Path does not exist."""


class NotADirectory(WalkError):
    """Path exists but is not a directory."""


class PermissionDenied(WalkError):
    """Access to the path was refused."""


class UnknownIOError(WalkError):
    """Catch-all for unclassified OS-level failures."""


class WalkCancelled(WalkError):
    """Traversal was aborted through its cancellation signal."""


class WalkTimeout(WalkCancelled):
    """Traversal exceeded its time limit."""


def map_os_error(exc: OSError, path: str) -> WalkError:
    """
    Translate an OSError into the traversal error taxonomy.

    Args:
        exc: Original error raised by the os module
        path: Path that was being accessed

    Returns:
        WalkError subclass instance (not raised)
    """
    reason = exc.strerror or str(exc)

    if isinstance(exc, FileNotFoundError):
        return NotFound(f"No such file or directory: {path}", path)
    if isinstance(exc, NotADirectoryError):
        return NotADirectory(f"Not a directory: {path}", path)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return PermissionDenied(f"Permission denied: {path}", path)
    return UnknownIOError(f"I/O error on {path}: {reason}", path)
