"""
Shared fixtures for the test suite.
"""
import os
from pathlib import Path

import pytest

from file_searcher.accessor import LocalFileSystem
from file_searcher.errors import NotFound, PermissionDenied


class FailingFileSystem(LocalFileSystem):
    """Accessor that refuses to list or stat selected names."""

    def __init__(self, deny_list=(), missing_stat=()):
        self.deny_list = set(deny_list)
        self.missing_stat = set(missing_stat)

    def list_child_names(self, path):
        if os.path.basename(path) in self.deny_list:
            raise PermissionDenied(f"Permission denied: {path}", path)
        return super().list_child_names(path)

    def stat_entry(self, path):
        if os.path.basename(path) in self.missing_stat:
            raise NotFound(f"No such file or directory: {path}", path)
        return super().stat_entry(path)


def _make_tree(root: Path, files):
    """Create files (and their parent directories) below root."""
    for relative in files:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative)


@pytest.fixture
def make_tree():
    """Builder for small file trees."""
    return _make_tree


@pytest.fixture
def failing_fs():
    """Accessor class with injectable listing and stat failures."""
    return FailingFileSystem
