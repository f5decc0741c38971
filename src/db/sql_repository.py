"""Implementation of (Game)Repository using SQLAlchemy"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameModel
from src.core.shared_types import Color
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy

    Every call opens its own session: moves on different games may be stored from different threads.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get_game(self, game_id: int) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if game_db:
                return self._to_model(game_db)
            return None

    def create_game(self, game: GameModel) -> tuple[GameModel, int]:
        """Store new game and return the stored data + newly created game ID (assigned by the database)."""
        with self.session_factory() as db:
            game_db = DBGame(
                white=game.registered_players[Color.WHITE],
                black=game.registered_players[Color.BLACK],
                board=game.board,
                color_to_move=game.color_to_move,
                status=game.status,
                winner=game.winner,
                moves_uci=list(game.moves_uci),
            )
            db.add(game_db)
            db.commit()
            db.refresh(game_db)
            logger.debug("Stored new game with id=%s", game_db.id)
            return self._to_model(game_db), game_db.id

    def update_game(self, game_id: int, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if not game_db:
                return None
            game_db.white = game.registered_players[Color.WHITE]
            game_db.black = game.registered_players[Color.BLACK]
            game_db.board = game.board
            game_db.color_to_move = game.color_to_move
            game_db.status = game.status
            game_db.winner = game.winner
            # new list, so SQLAlchemy notices the change of the JSON column
            game_db.moves_uci = list(game.moves_uci)
            db.commit()
            db.refresh(game_db)
            logger.debug("Updated game with id=%s", game_id)
            return self._to_model(game_db)

    def delete_game(self, game_id: int) -> GameModel | None:
        """Remove a game's record."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if not game_db:
                return None
            game_model = self._to_model(game_db)
            db.delete(game_db)
            db.commit()
            logger.debug("Deleted game with id=%s", game_id)
            return game_model

    def _fetch_game(self, db: Session, game_id: int) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            board=game_db.board,
            color_to_move=game_db.color_to_move,
            registered_players={
                Color.WHITE.value: game_db.white,
                Color.BLACK.value: game_db.black,
            },
            status=game_db.status,
            winner=game_db.winner,
            moves_uci=list(game_db.moves_uci),
        )
