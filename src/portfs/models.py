"""Data models for filesystem entries."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    """Type of filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class PosixFilePermission(str, Enum):
    """Permission flag of a filesystem entry.

    Only the owner and group classes are modelled; the "others" class is
    not read yet.
    """

    OWNER_READ = "OWNER_READ"
    OWNER_WRITE = "OWNER_WRITE"
    OWNER_EXECUTE = "OWNER_EXECUTE"
    GROUP_READ = "GROUP_READ"
    GROUP_WRITE = "GROUP_WRITE"
    GROUP_EXECUTE = "GROUP_EXECUTE"


def _from_micros(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1_000_000, tz=timezone.utc)


class Attributes(BaseModel):
    """Point-in-time snapshot of a filesystem entry's metadata."""

    model_config = ConfigDict(frozen=True)

    is_directory: bool = Field(description="Entry is a directory")
    is_file: bool = Field(description="Entry is a regular file")
    is_symbolic_link: bool = Field(default=False, description="Always False, links are not detected")
    creation_time_us: int = Field(description="Creation (or status change) time, microseconds since epoch")
    last_access_time_us: int = Field(description="Last access time, microseconds since epoch")
    last_modified_time_us: int = Field(description="Last modification time, microseconds since epoch")
    size_bytes: int = Field(default=0, description="Size in bytes")
    permissions: frozenset[PosixFilePermission] = Field(
        default_factory=frozenset, description="Owner and group permission flags"
    )

    @property
    def entry_type(self) -> EntryType:
        """Type of the entry derived from the type flags."""
        if self.is_symbolic_link:
            return EntryType.SYMLINK
        if self.is_directory:
            return EntryType.DIRECTORY
        if self.is_file:
            return EntryType.FILE
        return EntryType.OTHER

    @property
    def created_at(self) -> datetime:
        return _from_micros(self.creation_time_us)

    @property
    def accessed_at(self) -> datetime:
        return _from_micros(self.last_access_time_us)

    @property
    def modified_at(self) -> datetime:
        return _from_micros(self.last_modified_time_us)
