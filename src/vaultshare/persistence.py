"""Snapshot a ``State`` into SQL tables and rebuild it.

The sharing core never touches the database; a host calls
``save_state`` before shutting down (or upgrading) and ``load_state``
on start.  Ordering of every list and of both alias indexes is kept
through explicit ``position`` columns.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, assert_never

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from .exceptions import StorageError
from .models import (
    Counter,
    FileChunk,
    FileOwner,
    FileShare,
    GroupAlias,
    GroupMember,
    ShareRecipient,
    StoredFile,
    StoredGroup,
    StoredUser,
)
from .models.files import PARTIALLY_UPLOADED, PENDING, UPLOADED
from .state import (
    FileGroup,
    FileMetadata,
    FileRecord,
    PartiallyUploaded,
    Pending,
    State,
    Uploaded,
    User,
)

if TYPE_CHECKING:
    from sqlmodel import Session

    from .state import ContentState

logger = logging.getLogger(__name__)

_TABLES: tuple[type[Any], ...] = (
    Counter,
    FileChunk,
    FileOwner,
    FileShare,
    GroupAlias,
    GroupMember,
    ShareRecipient,
    StoredFile,
    StoredGroup,
    StoredUser,
)


def _utc(value: datetime | None) -> datetime | None:
    # SQLite keeps the wall-clock time and drops the offset
    if value is not None and value.tzinfo is not None:
        return value.astimezone(UTC)
    return value


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------


def _file_rows(file_id: int, record: FileRecord) -> list[Any]:
    meta = record.metadata
    row = StoredFile(
        file_id=file_id,
        file_name=meta.file_name,
        requester=meta.requester,
        user_public_key=meta.user_public_key,
    )
    chunks: list[Any] = []
    content = record.content
    if isinstance(content, Pending):
        row.state = PENDING
        row.alias = content.alias
        row.requested_at = _utc(content.requested_at)
    elif isinstance(content, PartiallyUploaded):
        row.state = PARTIALLY_UPLOADED
        row.file_type = content.file_type
        row.num_chunks = content.num_chunks
        chunks = [
            FileChunk(file_id=file_id, chunk_index=i, data=data)
            for i, data in enumerate(content.contents)
            if data is not None
        ]
    elif isinstance(content, Uploaded):
        row.state = UPLOADED
        row.file_type = content.file_type
        row.num_chunks = content.num_chunks
        row.uploaded_at = _utc(content.uploaded_at)
        chunks = [
            FileChunk(file_id=file_id, chunk_index=i, data=data)
            for i, data in enumerate(content.contents)
        ]
    else:
        assert_never(content)
    return [row, *chunks]


def _state_rows(state: State) -> list[Any]:
    rows: list[Any] = [
        Counter(name="file_count", value=state.file_count),
        Counter(name="group_count", value=state.group_count),
    ]
    for pos, (principal, user) in enumerate(state.users.items()):
        rows.append(
            StoredUser(
                principal=principal,
                username=user.username,
                public_key=user.public_key,
                position=pos,
            )
        )
    for file_id, record in state.file_data.items():
        rows.extend(_file_rows(file_id, record))
    for opos, (owner, file_ids) in enumerate(state.file_owners.items()):
        rows.extend(
            FileOwner(owner=owner, file_id=fid, owner_position=opos, position=pos)
            for pos, fid in enumerate(file_ids)
        )
    for rpos, (recipient, file_ids) in enumerate(state.file_shares.items()):
        rows.append(ShareRecipient(recipient=recipient, position=rpos))
        rows.extend(
            FileShare(recipient=recipient, file_id=fid, position=pos)
            for pos, fid in enumerate(file_ids)
        )
    for gpos, group in enumerate(state.request_groups.values()):
        rows.append(
            StoredGroup(
                group_id=group.group_id,
                name=group.name,
                requester=group.requester,
                created_at=_utc(group.created_at),
                position=gpos,
            )
        )
        rows.extend(
            GroupMember(group_id=group.group_id, file_id=fid, position=pos)
            for pos, fid in enumerate(group.files)
        )
    for pos, (alias, group_id) in enumerate(state.group_alias_index.items()):
        rows.append(GroupAlias(alias=alias, kind="group", target_id=group_id, position=pos))
    for pos, (alias, file_id) in enumerate(state.file_alias_index.items()):
        rows.append(GroupAlias(alias=alias, kind="file", target_id=file_id, position=pos))
    return rows


def save_state(session: Session, state: State) -> int:
    """Replace the stored snapshot with *state*. Flushes but does not commit.

    Returns the number of rows written.
    """
    with state.lock:
        rows = _state_rows(state)
    try:
        for model in _TABLES:
            for existing in session.exec(select(model)).all():
                session.delete(existing)
        session.flush()
        session.add_all(rows)
        session.flush()
    except SQLAlchemyError as e:
        logger.error("Saving state snapshot failed: %s", e, exc_info=True)
        raise StorageError(f"Saving state snapshot failed: {e}") from e
    logger.debug("Saved state snapshot (%d rows)", len(rows))
    return len(rows)


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


def _content_from_row(row: StoredFile, chunks: dict[int, bytes]) -> ContentState:
    if row.state == PENDING:
        requested_at = _aware(row.requested_at)
        if row.alias is None or requested_at is None:
            msg = f"Pending file {row.file_id} is missing its alias or request time"
            raise StorageError(msg)
        return Pending(alias=row.alias, requested_at=requested_at)
    if row.state == PARTIALLY_UPLOADED:
        return PartiallyUploaded(
            contents=tuple(chunks.get(i) for i in range(row.num_chunks)),
            file_type=row.file_type or "",
            num_chunks=row.num_chunks,
        )
    if row.state == UPLOADED:
        uploaded_at = _aware(row.uploaded_at)
        if uploaded_at is None or len(chunks) != row.num_chunks:
            msg = f"Uploaded file {row.file_id} has an incomplete snapshot"
            raise StorageError(msg)
        return Uploaded(
            contents=tuple(chunks[i] for i in range(row.num_chunks)),
            file_type=row.file_type or "",
            num_chunks=row.num_chunks,
            uploaded_at=uploaded_at,
        )
    raise StorageError(f"Unknown content state {row.state!r} for file {row.file_id}")


def load_state(session: Session, **state_kwargs: Any) -> State:
    """Rebuild a ``State`` from the stored snapshot.

    *state_kwargs* are passed to ``State`` (e.g. ``clock``, ``alias_factory``).
    An empty database yields an empty state.
    """
    state = State(**state_kwargs)
    try:
        for counter in session.exec(select(Counter)).all():
            if counter.name == "file_count":
                state.file_count = counter.value
            elif counter.name == "group_count":
                state.group_count = counter.value

        for user in session.exec(select(StoredUser).order_by(StoredUser.position)).all():
            state.users[user.principal] = User(
                username=user.username, public_key=user.public_key
            )

        chunks_by_file: dict[int, dict[int, bytes]] = {}
        for chunk in session.exec(select(FileChunk)).all():
            chunks_by_file.setdefault(chunk.file_id, {})[chunk.chunk_index] = chunk.data

        for row in session.exec(select(StoredFile).order_by(StoredFile.file_id)).all():
            state.file_data[row.file_id] = FileRecord(
                metadata=FileMetadata(
                    file_name=row.file_name,
                    requester=row.requester,
                    user_public_key=row.user_public_key,
                ),
                content=_content_from_row(row, chunks_by_file.get(row.file_id, {})),
            )

        for owner in session.exec(
            select(FileOwner).order_by(FileOwner.owner_position, FileOwner.position)
        ).all():
            state.file_owners.setdefault(owner.owner, []).append(owner.file_id)

        for recipient in session.exec(
            select(ShareRecipient).order_by(ShareRecipient.position)
        ).all():
            state.file_shares[recipient.recipient] = []
        for share in session.exec(
            select(FileShare).order_by(FileShare.recipient, FileShare.position)
        ).all():
            state.file_shares.setdefault(share.recipient, []).append(share.file_id)

        for group in session.exec(select(StoredGroup).order_by(StoredGroup.position)).all():
            state.request_groups[group.group_id] = FileGroup(
                group_id=group.group_id,
                name=group.name,
                requester=group.requester,
                created_at=_aware(group.created_at),
            )
        for member in session.exec(
            select(GroupMember).order_by(GroupMember.group_id, GroupMember.position)
        ).all():
            group = state.request_groups.get(member.group_id)
            if group is None:
                msg = f"Group member row references missing group {member.group_id}"
                raise StorageError(msg)
            group.files.append(member.file_id)

        for alias in session.exec(
            select(GroupAlias).order_by(GroupAlias.kind, GroupAlias.position)
        ).all():
            if alias.kind == "group":
                state.group_alias_index[alias.alias] = alias.target_id
            else:
                state.file_alias_index[alias.alias] = alias.target_id
    except SQLAlchemyError as e:
        logger.error("Loading state snapshot failed: %s", e, exc_info=True)
        raise StorageError(f"Loading state snapshot failed: {e}") from e

    logger.debug(
        "Loaded state snapshot: %d files, %d recipients",
        len(state.file_data),
        len(state.file_shares),
    )
    return state
