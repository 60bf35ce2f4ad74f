"""Result types: FileSharingResponse, FileStatus, PublicFileMetadata, etc."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class FileSharingResponse(str, Enum):
    """Outcome of a share or revoke call."""

    OK = "ok"
    PERMISSION_ERROR = "permission_error"
    PENDING_ERROR = "pending_error"


@dataclass(frozen=True)
class PublicUser:
    """A registered user as shown to other users."""

    username: str
    public_key: bytes
    principal: str


@dataclass(frozen=True)
class PendingStatus:
    """File was requested and is waiting for its first chunk."""

    alias: str
    requested_at: datetime


@dataclass(frozen=True)
class PartiallyUploadedStatus:
    """Some but not all chunks have arrived."""


@dataclass(frozen=True)
class UploadedStatus:
    """All chunks have arrived."""

    uploaded_at: datetime


FileStatus = PendingStatus | PartiallyUploadedStatus | UploadedStatus


@dataclass
class PublicFileMetadata:
    """Presentation record for a file, joined with its group and recipients."""

    file_id: int
    file_name: str
    group_name: str
    group_alias: str | None
    file_status: FileStatus
    shared_with: list[PublicUser] = field(default_factory=list)


@dataclass
class MultiRequestResponse:
    """Result of requesting a named group of files."""

    group_id: int
    group_alias: str
    file_ids: list[int] = field(default_factory=list)


@dataclass
class AliasInfo:
    """What an uploader sees when they open a pending request alias."""

    file_id: int
    file_name: str
    user: PublicUser


@dataclass
class WhoAmIResponse:
    """Result of a who_am_i lookup; ``user`` is None for unknown callers."""

    known: bool
    user: PublicUser | None = None
