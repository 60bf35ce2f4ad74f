"""Group registry lookups: named groups of files and their public aliases.

Lookups are linear scans in insertion order; the first match wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .state import FileGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .state import State

logger = logging.getLogger(__name__)


def create_group(
    state: State, caller: str, name: str, file_ids: Iterable[int]
) -> tuple[int, str]:
    """Create a group holding *file_ids* and give it a fresh alias.

    Returns ``(group_id, alias)``.
    """
    with state.lock:
        group_id = state.group_count
        state.group_count += 1
        alias = state.new_alias()
        state.request_groups[group_id] = FileGroup(
            group_id=group_id,
            name=name,
            requester=caller,
            files=list(file_ids),
            created_at=state.now(),
        )
        state.group_alias_index[alias] = group_id
    logger.debug("Created group %d (%r) with alias %s", group_id, name, alias)
    return group_id, alias


def find_group_for_file(state: State, file_id: int) -> FileGroup | None:
    """First group whose file list contains *file_id*."""
    for group in state.request_groups.values():
        if file_id in group.files:
            return group
    return None


def canonical_alias(state: State, group_id: int) -> str | None:
    """First alias in the alias index that points at *group_id*."""
    for alias, gid in state.group_alias_index.items():
        if gid == group_id:
            return alias
    return None


def get_group_by_alias(state: State, alias: str) -> FileGroup | None:
    group_id = state.group_alias_index.get(alias)
    if group_id is None:
        return None
    return state.request_groups.get(group_id)
