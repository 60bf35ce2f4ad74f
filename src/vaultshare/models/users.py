"""User registry rows and id counters."""

from __future__ import annotations

from sqlmodel import Field, SQLModel


class StoredUser(SQLModel, table=True):
    """A registered user profile."""

    __tablename__ = "vaultshare_users"

    principal: str = Field(primary_key=True)
    username: str = Field(default="")
    public_key: bytes = Field(default=b"")
    position: int = Field(default=0)


class Counter(SQLModel, table=True):
    """Named monotonic counter (``file_count``, ``group_count``)."""

    __tablename__ = "vaultshare_counters"

    name: str = Field(primary_key=True)
    value: int = Field(default=0)
