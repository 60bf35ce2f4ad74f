"""SQLModel tables for vaultshare state snapshots."""

from vaultshare.models.files import FileChunk, FileOwner, StoredFile
from vaultshare.models.groups import GroupAlias, GroupMember, StoredGroup
from vaultshare.models.shares import FileShare, ShareRecipient
from vaultshare.models.users import Counter, StoredUser

__all__ = [
    "Counter",
    "FileChunk",
    "FileOwner",
    "FileShare",
    "GroupAlias",
    "GroupMember",
    "ShareRecipient",
    "StoredFile",
    "StoredGroup",
    "StoredUser",
]
