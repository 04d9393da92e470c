"""
Metadata accessor - Read-only access to directory listings and entry metadata.
"""
from __future__ import annotations

import logging
import os
import stat
from datetime import datetime
from typing import List

from file_searcher.errors import map_os_error
from file_searcher.models import Entry, EntryType

logger = logging.getLogger(__name__)


def classify_mode(mode: int) -> EntryType:
    """Map st_mode bits to an entry type; symlinks are never resolved."""
    if stat.S_ISREG(mode):
        return EntryType.FILE
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    return EntryType.OTHER


class LocalFileSystem:
    """Accessor backed by the local filesystem."""

    def list_child_names(self, path: str) -> List[str]:
        """
        List immediate child names of a directory.

        Args:
            path: Directory to list

        Returns:
            Child names in unspecified order

        Raises:
            NotFound, NotADirectory, PermissionDenied, UnknownIOError
        """
        try:
            with os.scandir(path) as iterator:
                names = [entry.name for entry in iterator]
        except OSError as exc:
            raise map_os_error(exc, path) from exc

        logger.debug("Listed %s entries in %s", len(names), path)
        return names

    def stat_entry(self, path: str) -> Entry:
        """
        Capture a metadata snapshot of a path without following symlinks.

        Args:
            path: Path to inspect

        Returns:
            Entry for the path

        Raises:
            NotFound, PermissionDenied, UnknownIOError
        """
        try:
            st = os.lstat(path)
        except OSError as exc:
            raise map_os_error(exc, path) from exc

        return Entry(
            path=path,
            entry_type=classify_mode(st.st_mode),
            size_bytes=st.st_size,
            modified_time=datetime.fromtimestamp(st.st_mtime),
            mode=st.st_mode,
        )
