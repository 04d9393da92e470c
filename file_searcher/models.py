"""
Core data models for the recursive file search.

All models use Pydantic for validation and JSON serialization.
"""
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def default_max_workers() -> int:
    """Worker cap matching the ThreadPoolExecutor default."""
    return min(32, (os.cpu_count() or 1) + 4)


class EntryType(str, Enum):
    """Type discriminator for a filesystem entry."""
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class Entry(BaseModel):
    """Metadata snapshot of one filesystem object, captured at listing time."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path joined from the traversal root")
    entry_type: EntryType = Field(..., description="file, directory or other")
    size_bytes: int = Field(0, ge=0, description="Size in bytes")
    modified_time: datetime = Field(..., description="Last modified timestamp")
    mode: int = Field(0, description="Raw st_mode bits")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v):
        """Ensure path is not empty."""
        if not v:
            raise ValueError("path cannot be empty")
        return v

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def is_file(self) -> bool:
        return self.entry_type is EntryType.FILE

    @property
    def is_directory(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY


class WalkResult(BaseModel):
    """Outcome of one traversal."""
    files: List[Entry] = Field(default_factory=list, description="Collected file entries")
    skipped: List[str] = Field(
        default_factory=list,
        description="Failures tolerated under the skip policy",
    )


class SearchConfig(BaseModel):
    """Configuration for a file search run."""
    root_directory: str = Field("./", description="Directory to search")
    ignore_patterns: List[str] = Field(
        default_factory=list,
        description="Path fragments or glob patterns to ignore",
    )
    match_mode: Literal["prefix", "glob"] = Field(
        "prefix", description="How ignore patterns are matched"
    )
    max_workers: int = Field(
        default_factory=default_max_workers, ge=1, description="Concurrent I/O workers"
    )
    on_error: Literal["fail", "skip"] = Field(
        "fail", description="'fail' aborts on first error, 'skip' continues"
    )
    timeout: Optional[float] = Field(None, gt=0, description="Traversal time limit in seconds")

    @field_validator('root_directory')
    @classmethod
    def validate_root(cls, v):
        """Ensure root directory is given."""
        if not v or not v.strip():
            raise ValueError("root_directory cannot be empty")
        return v

    @field_validator('ignore_patterns')
    @classmethod
    def validate_patterns(cls, v):
        """Reject empty patterns, which would match the root itself."""
        for pattern in v:
            if not pattern or not pattern.strip():
                raise ValueError("ignore patterns cannot be empty")
            if Path(pattern).is_absolute():
                raise ValueError(f"ignore pattern must be relative to the root: {pattern}")
        return v


class SearchResult(BaseModel):
    """Result of a file search run."""
    root_directory: str = Field(..., description="Directory that was searched")
    total_files: int = Field(0, description="Files found")
    files: List[Entry] = Field(default_factory=list, description="All file entries")
    skipped: List[str] = Field(default_factory=list, description="Skipped entries")
    elapsed_seconds: float = Field(0.0, description="Wall-clock duration")
