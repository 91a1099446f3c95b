"""
Pytest fixtures for transcript engine tests.
"""

import uuid

import pytest

from transcript.config import Settings
from transcript.kernel.models.base import AccountId
from transcript.kernel.models.state import TranscriptState
from transcript.orchestration.dispatcher import CommandDispatcher


# Named accounts, stable for the whole session so failures read well

@pytest.fixture(scope="session")
def alice() -> AccountId:
    """The account that creates the engine (first admin)."""
    return uuid.UUID("00000000-0000-0000-0000-00000000a11c")


@pytest.fixture(scope="session")
def bob() -> AccountId:
    return uuid.UUID("00000000-0000-0000-0000-000000000b0b")


@pytest.fixture(scope="session")
def charlie() -> AccountId:
    return uuid.UUID("00000000-0000-0000-0000-0000000c4a71")


@pytest.fixture(scope="session")
def eve() -> AccountId:
    return uuid.UUID("00000000-0000-0000-0000-000000000e7e")


@pytest.fixture(scope="session")
def frank() -> AccountId:
    return uuid.UUID("00000000-0000-0000-0000-0000000f4a4c")


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def state(alice: AccountId) -> TranscriptState:
    """Fresh state with alice as the only admin."""
    return TranscriptState.new(alice)


@pytest.fixture
def dispatcher(state: TranscriptState, settings: Settings) -> CommandDispatcher:
    """Dispatcher over a fresh state; alice is the only admin."""
    return CommandDispatcher(state, settings=settings)


@pytest.fixture
def school(dispatcher: CommandDispatcher, alice, bob, eve, frank) -> CommandDispatcher:
    """
    A populated engine.

    - admins: alice
    - teachers: alice, eve
    - students: bob, frank
    - CS50 taught by alice with [bob]
    - CS51 taught by eve with [bob, frank]
    """
    dispatcher.add_teacher(alice, alice)
    dispatcher.add_teacher(alice, eve)
    dispatcher.add_student(alice, bob)
    dispatcher.add_student(alice, frank)
    dispatcher.add_class(alice, "CS50", alice, [bob])
    dispatcher.add_class(alice, "CS51", eve, [bob, frank])
    return dispatcher
