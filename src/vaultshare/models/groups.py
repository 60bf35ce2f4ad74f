"""Group registry rows: groups, their members, and the alias index."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class StoredGroup(SQLModel, table=True):
    """A named group of files."""

    __tablename__ = "vaultshare_groups"

    group_id: int = Field(primary_key=True)
    name: str = Field(default="")
    requester: str = Field(default="")
    created_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),
    )
    position: int = Field(default=0)


class GroupMember(SQLModel, table=True):
    __tablename__ = "vaultshare_group_members"

    id: int | None = Field(default=None, primary_key=True)
    group_id: int = Field(index=True)
    file_id: int = Field(index=True)
    position: int = Field(default=0)


class GroupAlias(SQLModel, table=True):
    """Alias index entry. ``kind`` is ``"file"`` or ``"group"``."""

    __tablename__ = "vaultshare_aliases"

    alias: str = Field(primary_key=True)
    kind: str = Field(default="group", index=True)
    target_id: int = Field(default=0)
    position: int = Field(default=0)
