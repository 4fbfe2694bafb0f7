"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Callable, Generator, Iterable

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


class LoadedDice(random.Random):
    """A 'random' generator that rolls the given values, in order."""

    def __init__(self, rolls: Iterable[int]) -> None:
        super().__init__()
        self._rolls = list(rolls)

    def randint(self, a: int, b: int) -> int:
        return self._rolls.pop(0)


@pytest.fixture
def loaded_dice() -> Callable[..., LoadedDice]:
    """Build a generator with predetermined rolls: loaded_dice(6, 3, ...)"""

    def _build(*rolls: int) -> LoadedDice:
        return LoadedDice(rolls)

    return _build


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session_shared() -> Generator[Session, None, None]:
    """Connection to a test database. Mock real setup with multiple sessions connecting to the same engine / database tables."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
