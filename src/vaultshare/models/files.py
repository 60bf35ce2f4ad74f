"""File store rows: one row per file record, its chunks, and its owner."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

# ---------------------------------------------------------------------------
# Content state tags
# ---------------------------------------------------------------------------

PENDING = "pending"
PARTIALLY_UPLOADED = "partially_uploaded"
UPLOADED = "uploaded"


class StoredFileBase(SQLModel):
    """Base fields for a file record. Subclass with ``table=True`` for a concrete table."""

    file_id: int = Field(primary_key=True)
    file_name: str = Field(default="")
    requester: str = Field(default="", index=True)
    user_public_key: bytes = Field(default=b"")
    state: str = Field(default=PENDING)
    alias: str | None = Field(default=None)
    requested_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),
    )
    file_type: str | None = Field(default=None)
    num_chunks: int = Field(default=0)
    uploaded_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),
    )


class StoredFile(StoredFileBase, table=True):
    """Default file table — ``vaultshare_files``."""

    __tablename__ = "vaultshare_files"


class FileChunk(SQLModel, table=True):
    """One received chunk of a file's content."""

    __tablename__ = "vaultshare_file_chunks"

    id: int | None = Field(default=None, primary_key=True)
    file_id: int = Field(index=True)
    chunk_index: int = Field(default=0)
    data: bytes = Field(default=b"")


class FileOwner(SQLModel, table=True):
    """Ownership index entry.

    ``owner_position`` orders owners by first request; ``position`` orders
    each owner's files.
    """

    __tablename__ = "vaultshare_file_owners"

    id: int | None = Field(default=None, primary_key=True)
    owner: str = Field(index=True)
    file_id: int = Field(index=True)
    owner_position: int = Field(default=0)
    position: int = Field(default=0)
