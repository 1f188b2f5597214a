"""Domain models for file handles.

Uses Pydantic for the snapshot types handed back to callers.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class FileMode(str, Enum):
    """Open state of a file handle.

    A handle is never open for read and write at once; moving between the two
    always passes through CLOSED.
    """

    CLOSED = "closed"
    OPEN_FOR_READ = "open_for_read"
    OPEN_FOR_WRITE = "open_for_write"


class FileInfo(BaseModel):
    """Snapshot of a file's metadata as reported by the filesystem."""

    path: str = Field(description="Path the metadata was read from")
    size_bytes: int = Field(ge=0, description="File size in bytes")
    modified_at: datetime = Field(description="Last modification time (UTC)")
    is_ephemeral: bool = Field(
        default=False, description="Whether the owning handle will delete the file on disposal"
    )
