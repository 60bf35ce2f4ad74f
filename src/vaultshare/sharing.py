"""SharingService — grant, revoke, and list file shares.

Stateless service that receives the ``State`` at call time, the same
way a repository receives its session.  Ownership gates both grant and
revoke; only fully uploaded files can be shared.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from .exceptions import ConsistencyError
from .metadata import describe_file
from .state import PartiallyUploaded, Pending, Uploaded
from .types import FileSharingResponse

if TYPE_CHECKING:
    from .state import State
    from .types import PublicFileMetadata

logger = logging.getLogger(__name__)


def can_share(state: State, caller: str, file_id: int) -> bool:
    """True iff *caller* owns *file_id*."""
    owned = state.file_owners.get(caller)
    if owned is None:
        return False
    return file_id in owned


def _lifecycle_response(state: State, file_id: int) -> FileSharingResponse:
    record = state.file_data.get(file_id)
    if record is None:
        # Owned ids must always have a record.
        logger.error("Owned file %d has no record", file_id)
        raise ConsistencyError(f"Owned file has no record: {file_id}")
    content = record.content
    if isinstance(content, (Pending, PartiallyUploaded)):
        return FileSharingResponse.PENDING_ERROR
    if isinstance(content, Uploaded):
        return FileSharingResponse.OK
    assert_never(content)


class SharingService:
    """Manages which recipients can see which files.

    Every method holds ``state.lock`` for its whole duration so that a
    threaded host still sees each call as atomic.
    """

    def share_file(
        self, state: State, caller: str, sharing_with: str, file_id: int
    ) -> FileSharingResponse:
        """Grant *sharing_with* visibility of *file_id*.

        Repeated grants are a no-op and still return ``OK``.
        """
        with state.lock:
            if not can_share(state, caller, file_id):
                logger.info(
                    "Share of file %d denied: %s is not the owner", file_id, caller
                )
                return FileSharingResponse.PERMISSION_ERROR

            response = _lifecycle_response(state, file_id)
            if response is not FileSharingResponse.OK:
                logger.info("Share of file %d refused: upload incomplete", file_id)
                return response

            shares = state.file_shares.setdefault(sharing_with, [])
            if file_id not in shares:
                shares.append(file_id)
            logger.debug("File %d shared by %s with %s", file_id, caller, sharing_with)
            return FileSharingResponse.OK

    def revoke_share(
        self, state: State, caller: str, sharing_with: str, file_id: int
    ) -> FileSharingResponse:
        """Remove *file_id* from *sharing_with*'s share list.

        The removal happens before the lifecycle check, so the result
        reflects the file's upload state rather than whether anything
        was removed.  A recipient with no share list at all is a
        permission error.
        """
        with state.lock:
            if not can_share(state, caller, file_id):
                logger.info(
                    "Revoke of file %d denied: %s is not the owner", file_id, caller
                )
                return FileSharingResponse.PERMISSION_ERROR

            shares = state.file_shares.get(sharing_with)
            if shares is None:
                logger.info(
                    "Revoke of file %d denied: %s has no shares", file_id, sharing_with
                )
                return FileSharingResponse.PERMISSION_ERROR

            if file_id in shares:
                shares.remove(file_id)
                logger.debug(
                    "File %d unshared by %s from %s", file_id, caller, sharing_with
                )
            return _lifecycle_response(state, file_id)

    def get_shared_files(self, state: State, caller: str) -> list[PublicFileMetadata]:
        """Files shared with *caller*, in the order they were granted."""
        with state.lock:
            return [
                describe_file(state, file_id)
                for file_id in state.file_shares.get(caller, [])
            ]

    def can_share(self, state: State, caller: str, file_id: int) -> bool:
        with state.lock:
            return can_share(state, caller, file_id)


_default_service = SharingService()


def share_file(
    state: State, caller: str, sharing_with: str, file_id: int
) -> FileSharingResponse:
    return _default_service.share_file(state, caller, sharing_with, file_id)


def revoke_share(
    state: State, caller: str, sharing_with: str, file_id: int
) -> FileSharingResponse:
    return _default_service.revoke_share(state, caller, sharing_with, file_id)


def get_shared_files(state: State, caller: str) -> list[PublicFileMetadata]:
    return _default_service.get_shared_files(state, caller)
