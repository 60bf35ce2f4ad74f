"""In-memory state: file records, content states, groups, and the flat indexes.

Every index is a flat mapping keyed by identity or integer id.  Records
never hold references to each other; cross-references go through ids.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _random_alias() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Content states
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Pending:
    """Requested, no chunk received yet."""

    alias: str
    requested_at: datetime


@dataclass(frozen=True)
class PartiallyUploaded:
    """Chunked upload in progress. ``contents`` has one slot per chunk."""

    contents: tuple[bytes | None, ...]
    file_type: str
    num_chunks: int

    @property
    def received(self) -> int:
        return sum(1 for chunk in self.contents if chunk is not None)


@dataclass(frozen=True)
class Uploaded:
    """Every chunk received."""

    contents: tuple[bytes, ...]
    file_type: str
    num_chunks: int
    uploaded_at: datetime


ContentState = Pending | PartiallyUploaded | Uploaded


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class User:
    """Registered profile."""

    username: str
    public_key: bytes


@dataclass
class FileMetadata:
    file_name: str
    requester: str
    user_public_key: bytes = b""


@dataclass
class FileRecord:
    """A file in the store: metadata plus its upload lifecycle state."""

    metadata: FileMetadata
    content: ContentState


@dataclass
class FileGroup:
    """Named collection of file ids."""

    group_id: int
    name: str
    requester: str
    files: list[int] = field(default_factory=list)
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass
class State:
    """All process-wide indexes, passed explicitly into every operation.

    ``clock`` and ``alias_factory`` are injectable so tests can pin
    timestamps and aliases.
    """

    users: dict[str, User] = field(default_factory=dict)
    file_owners: dict[str, list[int]] = field(default_factory=dict)
    file_data: dict[int, FileRecord] = field(default_factory=dict)
    file_alias_index: dict[str, int] = field(default_factory=dict)
    file_shares: dict[str, list[int]] = field(default_factory=dict)
    request_groups: dict[int, FileGroup] = field(default_factory=dict)
    group_alias_index: dict[str, int] = field(default_factory=dict)
    file_count: int = 0
    group_count: int = 0
    clock: Callable[[], datetime] = field(default=_utcnow, repr=False, compare=False)
    alias_factory: Callable[[], str] = field(
        default=_random_alias, repr=False, compare=False
    )
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def now(self) -> datetime:
        return self.clock()

    def new_alias(self) -> str:
        """Return an alias unused by both the file and group alias indexes."""
        while True:
            alias = self.alias_factory()
            if alias not in self.file_alias_index and alias not in self.group_alias_index:
                return alias
