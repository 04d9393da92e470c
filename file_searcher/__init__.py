"""Package initialization."""
__version__ = "0.1.0"

from file_searcher.errors import (
    NotADirectory,
    NotFound,
    PermissionDenied,
    UnknownIOError,
    WalkCancelled,
    WalkError,
    WalkTimeout,
)
from file_searcher.models import (
    Entry,
    EntryType,
    SearchConfig,
    SearchResult,
    WalkResult,
)
from file_searcher.walker import Walker, walk

__all__ = [
    "Entry",
    "EntryType",
    "NotADirectory",
    "NotFound",
    "PermissionDenied",
    "SearchConfig",
    "SearchResult",
    "UnknownIOError",
    "WalkCancelled",
    "WalkError",
    "WalkResult",
    "WalkTimeout",
    "Walker",
    "walk",
]
