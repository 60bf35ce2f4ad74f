"""Shared fixtures for vaultshare tests."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlmodel import Session, SQLModel, create_engine

import vaultshare.models  # noqa: F401  (registers tables on SQLModel.metadata)
from vaultshare import State, User, multi_request, set_user_info, upload_file

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Engine

    from vaultshare import MultiRequestResponse

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

OWNER = "owner-aaaa"
RECIPIENT = "recipient-bbbb"
STRANGER = "stranger-cccc"


@pytest.fixture
def engine() -> Engine:
    """In-memory SQLite engine with all tables created."""
    eng = create_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(eng)
    return eng


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """SQLModel session bound to the in-memory engine, rolled back after each test."""
    with Session(engine) as s:
        s.begin()
        yield s
        s.rollback()


@pytest.fixture
def state() -> State:
    """Empty state with a fixed clock and predictable aliases."""
    counter = itertools.count(1)
    return State(clock=lambda: FIXED_NOW, alias_factory=lambda: f"alias{next(counter)}")


@pytest.fixture
def users(state: State) -> State:
    """State with OWNER and RECIPIENT registered (STRANGER is not)."""
    set_user_info(state, OWNER, User(username="Owner", public_key=b"\x01\x02\x03"))
    set_user_info(state, RECIPIENT, User(username="Recipient", public_key=b"\x04\x05"))
    return state


@pytest.fixture
def groups(users: State) -> list[MultiRequestResponse]:
    """Four files (ids 0-3) requested by OWNER, each in its own group ``groupN``."""
    return [
        multi_request(users, OWNER, f"group{n}", [f"request{n}"]) for n in range(1, 5)
    ]


@pytest.fixture
def uploaded(users: State, groups: list[MultiRequestResponse]) -> State:
    """Files 0 and 2 fully uploaded; files 1 and 3 still pending."""
    upload_file(users, 0, b"abc", "jpeg", 1)
    upload_file(users, 2, b"def", "jpeg", 1)
    return users
