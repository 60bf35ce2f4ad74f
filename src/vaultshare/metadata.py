"""Read-only file queries and the PublicFileMetadata projection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from .exceptions import ConsistencyError, UnknownFileError
from .groups import canonical_alias, find_group_for_file
from .state import PartiallyUploaded, Pending, Uploaded
from .types import (
    FileStatus,
    PartiallyUploadedStatus,
    PendingStatus,
    PublicFileMetadata,
    PublicUser,
    UploadedStatus,
)
from .users import to_public_user

if TYPE_CHECKING:
    from .state import State

logger = logging.getLogger(__name__)


def get_file_status(state: State, file_id: int) -> FileStatus:
    """Public lifecycle status of *file_id*."""
    record = state.file_data.get(file_id)
    if record is None:
        raise UnknownFileError(f"File not found: {file_id}")
    content = record.content
    if isinstance(content, Pending):
        return PendingStatus(alias=content.alias, requested_at=content.requested_at)
    if isinstance(content, PartiallyUploaded):
        return PartiallyUploadedStatus()
    if isinstance(content, Uploaded):
        return UploadedStatus(uploaded_at=content.uploaded_at)
    assert_never(content)


def get_allowed_users(state: State, file_id: int) -> list[PublicUser]:
    """Registered users whose share list contains *file_id*.

    Ordered by when each recipient first appeared in the share index.
    Recipients without a registered profile are skipped.
    """
    allowed: list[PublicUser] = []
    for principal, file_ids in state.file_shares.items():
        if file_id not in file_ids:
            continue
        user = state.users.get(principal)
        if user is None:
            continue
        allowed.append(to_public_user(principal, user))
    return allowed


def describe_file(state: State, file_id: int) -> PublicFileMetadata:
    """Join a file record with its group, recipients, and status.

    Raises ConsistencyError if *file_id* has no record: callers only pass
    ids taken from the ownership or share indexes, which must never
    outlive the record they point at.
    """
    record = state.file_data.get(file_id)
    if record is None:
        logger.error("Index references missing file %d", file_id)
        raise ConsistencyError(f"Index references missing file: {file_id}")

    group = find_group_for_file(state, file_id)
    if group is None:
        group_name = ""
        group_alias = None
    else:
        group_name = group.name
        group_alias = canonical_alias(state, group.group_id)

    return PublicFileMetadata(
        file_id=file_id,
        file_name=record.metadata.file_name,
        group_name=group_name,
        group_alias=group_alias,
        file_status=get_file_status(state, file_id),
        shared_with=get_allowed_users(state, file_id),
    )
