"""Share index rows.

``ShareRecipient`` records that a recipient has a share list at all
(possibly empty after revokes); ``FileShare`` holds its entries in
grant order.
"""

from __future__ import annotations

from sqlmodel import Field, SQLModel


class ShareRecipientBase(SQLModel):
    """Base fields for a share list owner. Subclass with ``table=True`` for a concrete table."""

    recipient: str = Field(primary_key=True)
    position: int = Field(default=0)


class ShareRecipient(ShareRecipientBase, table=True):
    """Default share recipient table — ``vaultshare_share_recipients``."""

    __tablename__ = "vaultshare_share_recipients"


class FileShareBase(SQLModel):
    """Base fields for a file share entry. Subclass with ``table=True`` for a concrete table."""

    id: int | None = Field(default=None, primary_key=True)
    recipient: str = Field(index=True)
    file_id: int = Field(index=True)
    position: int = Field(default=0)


class FileShare(FileShareBase, table=True):
    """Default file share table — ``vaultshare_file_shares``."""

    __tablename__ = "vaultshare_file_shares"
