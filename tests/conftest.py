"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from pathlib import Path
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.chess.board import Board
from src.chess.game import Game
from src.core.config import Settings
from src.core.shared_types import Color, Status
from src.db.database import build_session_factory
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

WHITE_PLAYER = "Wilhelmina White"
BLACK_PLAYER = "Barnaby Black"


@pytest.fixture
def db_session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Sessions on a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def file_session_factory(tmp_path: Path) -> Generator[sessionmaker[Session], None, None]:
    """Sessions on a SQLite file: every session gets its own connection (needed when testing with threads)."""
    session_factory = build_session_factory(
        Settings(database_url=f"sqlite:///{tmp_path / 'games.db'}")
    )
    try:
        yield session_factory
    finally:
        session_factory.kw["bind"].dispose()


@pytest.fixture
def game_in_position() -> Callable[[str, Color], Game]:
    """Call the inner function with the board part of a FEN string and the color to move, to get an active game in that position."""

    def _create_game(fen_position: str, color_to_move: Color = Color.WHITE) -> Game:
        return Game(
            board=Board.from_fen(fen_position),
            players={Color.WHITE: WHITE_PLAYER, Color.BLACK: BLACK_PLAYER},
            color_to_move=color_to_move,
            status=Status.ACTIVE,
        )

    return _create_game
