"""File request and upload lifecycle.

A requester asks for a file by name and receives an alias.  Whoever
holds the alias uploads the content, in one or more chunks.  The file
moves ``Pending -> PartiallyUploaded -> Uploaded`` (or straight to
``Uploaded`` for single-chunk uploads).  The requester owns the file.

Every operation holds ``state.lock`` for its whole duration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import UnknownFileError, UploadError
from .groups import create_group
from .metadata import describe_file
from .state import FileMetadata, FileRecord, PartiallyUploaded, Pending, Uploaded
from .types import AliasInfo, MultiRequestResponse, PublicFileMetadata
from .users import to_public_user

if TYPE_CHECKING:
    from .state import State

logger = logging.getLogger(__name__)


def request_file(state: State, caller: str, file_name: str) -> str:
    """Create a pending file owned by *caller*. Returns the upload alias."""
    with state.lock:
        file_id = state.file_count
        state.file_count += 1
        alias = state.new_alias()

        user = state.users.get(caller)
        state.file_data[file_id] = FileRecord(
            metadata=FileMetadata(
                file_name=file_name,
                requester=caller,
                user_public_key=user.public_key if user is not None else b"",
            ),
            content=Pending(alias=alias, requested_at=state.now()),
        )
        state.file_alias_index[alias] = file_id
        state.file_owners.setdefault(caller, []).append(file_id)
    logger.debug("File %d (%r) requested by %s", file_id, file_name, caller)
    return alias


def multi_request(
    state: State, caller: str, group_name: str, file_names: list[str]
) -> MultiRequestResponse:
    """Request several files at once and collect them in a named group."""
    with state.lock:
        file_ids: list[int] = []
        for name in file_names:
            alias = request_file(state, caller, name)
            file_ids.append(state.file_alias_index[alias])
        group_id, group_alias = create_group(state, caller, group_name, file_ids)
    return MultiRequestResponse(
        group_id=group_id, group_alias=group_alias, file_ids=file_ids
    )


def get_alias_info(state: State, alias: str) -> AliasInfo:
    """Resolve a pending upload alias to the file and the requester's profile."""
    with state.lock:
        file_id = state.file_alias_index.get(alias)
        if file_id is None:
            raise UnknownFileError(f"Unknown alias: {alias}")
        record = state.file_data[file_id]
        requester = record.metadata.requester
        user = state.users.get(requester)
    if user is None:
        raise UnknownFileError(f"Requester of alias {alias} is not registered")
    return AliasInfo(
        file_id=file_id,
        file_name=record.metadata.file_name,
        user=to_public_user(requester, user),
    )


def upload_file(
    state: State,
    file_id: int,
    file_content: bytes,
    file_type: str,
    num_chunks: int,
) -> None:
    """Upload the first chunk of a pending file.

    The pending alias is consumed: it no longer resolves afterwards.
    """
    if num_chunks < 1:
        raise UploadError(f"num_chunks must be at least 1, got {num_chunks}")
    with state.lock:
        record = state.file_data.get(file_id)
        if record is None:
            raise UnknownFileError(f"File not found: {file_id}")
        content = record.content
        if not isinstance(content, Pending):
            raise UploadError(f"File {file_id} is not pending")

        if num_chunks == 1:
            record.content = Uploaded(
                contents=(file_content,),
                file_type=file_type,
                num_chunks=1,
                uploaded_at=state.now(),
            )
        else:
            chunks: list[bytes | None] = [None] * num_chunks
            chunks[0] = file_content
            record.content = PartiallyUploaded(
                contents=tuple(chunks), file_type=file_type, num_chunks=num_chunks
            )
        state.file_alias_index.pop(content.alias, None)
    logger.debug("File %d: first of %d chunk(s) uploaded", file_id, num_chunks)


def upload_file_continue(
    state: State, file_id: int, chunk_id: int, contents: bytes
) -> None:
    """Store one more chunk; the file becomes Uploaded once every slot is filled."""
    with state.lock:
        record = state.file_data.get(file_id)
        if record is None:
            raise UnknownFileError(f"File not found: {file_id}")
        content = record.content
        if not isinstance(content, PartiallyUploaded):
            raise UploadError(f"File {file_id} is not partially uploaded")
        if not 0 <= chunk_id < content.num_chunks:
            raise UploadError(
                f"Chunk {chunk_id} out of range for file {file_id} "
                f"({content.num_chunks} chunks)"
            )

        chunks = list(content.contents)
        chunks[chunk_id] = contents
        if all(chunk is not None for chunk in chunks):
            record.content = Uploaded(
                contents=tuple(c for c in chunks if c is not None),
                file_type=content.file_type,
                num_chunks=content.num_chunks,
                uploaded_at=state.now(),
            )
            logger.debug("File %d: upload complete", file_id)
        else:
            record.content = PartiallyUploaded(
                contents=tuple(chunks),
                file_type=content.file_type,
                num_chunks=content.num_chunks,
            )


def get_requests(state: State, caller: str) -> list[PublicFileMetadata]:
    """Files owned by *caller*, in request order."""
    with state.lock:
        return [
            describe_file(state, file_id)
            for file_id in state.file_owners.get(caller, [])
        ]
