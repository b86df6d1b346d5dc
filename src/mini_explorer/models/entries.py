"""
Entry data models for MiniFileExplorer.

This module defines the transient records the commands build and print:
rows of an `ls` listing, hits of a `search`, and the details shown by `stat`.
None of them outlive the command that created them.
"""

import math
from typing import List, Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator


DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class EntryType(Enum):
    """Type tag shown for an entry."""
    FILE = "File"
    DIR = "Dir"


def timestamp_to_datetime(timestamp: Optional[float]) -> Optional[datetime]:
    """Convert a POSIX timestamp to local time, or None if it cannot be represented."""
    if timestamp is None:
        return None
    try:
        return datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return None


def format_time(value: Optional[datetime], time_format: str = DEFAULT_TIME_FORMAT) -> str:
    """Render a local time, or '-' when unknown."""
    if value is None:
        return "-"
    try:
        return value.strftime(time_format)
    except ValueError:
        return "-"


class ListingEntry(BaseModel):
    """
    One row of an `ls` listing.

    Attributes:
        name: Base name of the entry
        entry_type: File or Dir
        size: Size to display in bytes, None when not applicable
        size_bytes: Size used for sorting (recursive total for directories in size mode)
        modified_time: Last modification time, None if the probe failed
        is_empty_dir: Whether this is a directory with no regular files below it
    """

    name: str = Field(..., min_length=1, description="Base name of the entry")
    entry_type: EntryType = Field(..., description="File or Dir")
    size: Optional[int] = Field(None, ge=0, description="Displayed size in bytes")
    size_bytes: int = Field(0, ge=0, description="Size used for sorting")
    modified_time: Optional[datetime] = Field(None, description="Last modification time")
    is_empty_dir: bool = Field(False, description="Directory without regular-file descendants")

    @property
    def is_dir(self) -> bool:
        return self.entry_type == EntryType.DIR

    @property
    def display_name(self) -> str:
        """Name with a trailing separator for directories."""
        return self.name + "/" if self.is_dir else self.name

    @property
    def sort_timestamp(self) -> int:
        """Modification time in whole seconds; entries changed within the same second tie."""
        return math.floor(self.modified_time.timestamp()) if self.modified_time else 0

    def size_cell(self) -> str:
        return "-" if self.size is None else str(self.size)

    def time_cell(self, time_format: str = DEFAULT_TIME_FORMAT) -> str:
        return format_time(self.modified_time, time_format)

    def to_row(self, time_format: str = DEFAULT_TIME_FORMAT) -> List[str]:
        """Cells in column order: Name, Type, Size(B), Modify Time."""
        return [self.display_name, self.entry_type.value, self.size_cell(), self.time_cell(time_format)]


class SearchResult(BaseModel):
    """
    A single `search` hit.

    Attributes:
        path: Absolute path, with a trailing separator for directories
        entry_type: File or Dir
    """

    path: str = Field(..., min_length=1, description="Absolute path of the match")
    entry_type: EntryType = Field(..., description="File or Dir")

    @field_validator('entry_type', mode='before')
    @classmethod
    def validate_entry_type(cls, v) -> EntryType:
        """Accept the display string as well as the enum."""
        if isinstance(v, str):
            try:
                return EntryType(v)
            except ValueError:
                raise ValueError(f"Invalid entry type: {v}")
        return v

    @classmethod
    def from_path(cls, path: str, is_dir: bool) -> 'SearchResult':
        if is_dir and not path.endswith("/"):
            path += "/"
        # Names come straight from the filesystem and may hold surrogate escapes
        return cls.model_construct(path=path, entry_type=EntryType.DIR if is_dir else EntryType.FILE)

    def __str__(self) -> str:
        return f"{self.path} ({self.entry_type.value})"


class FileStatus(BaseModel):
    """
    Details printed by `stat`.

    Attributes:
        entry_type: File or Dir
        path: Absolute path of the target
        size: Size in bytes, None for directories
        created_time: Creation time, None when the platform cannot report it
        modified_time: Last modification time
        accessed_time: Last access time
    """

    entry_type: EntryType = Field(..., description="File or Dir")
    path: str = Field(..., min_length=1, description="Absolute path of the target")
    size: Optional[int] = Field(None, ge=0, description="Size in bytes")
    created_time: Optional[datetime] = Field(None, description="Creation time")
    modified_time: Optional[datetime] = Field(None, description="Last modification time")
    accessed_time: Optional[datetime] = Field(None, description="Last access time")

    def to_lines(self, time_format: str = DEFAULT_TIME_FORMAT) -> List[str]:
        """Render the six `stat` output lines."""
        return [
            f"Type: {self.entry_type.value}",
            f"Path: {self.path}",
            f"Size: {'-' if self.size is None else self.size}",
            f"Create Time: {format_time(self.created_time, time_format)}",
            f"Modify Time: {format_time(self.modified_time, time_format)}",
            f"Access Time: {format_time(self.accessed_time, time_format)}",
        ]
