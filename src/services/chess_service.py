"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from collections import defaultdict
from threading import Lock

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.square import Square
from src.core.events import GameCreated, GameEnded, MoveApplied
from src.core.exceptions import MoveRejectedError, RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.services.notifications import GameNotifier

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository, notifier: GameNotifier) -> None:
        self.repo = repository
        self.notifier = notifier
        # one lock per stored, unfinished game: moves on the same game are handled one after the other
        self._game_locks: defaultdict[int, Lock] = defaultdict(Lock)
        self._registry_lock = Lock()

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Initiator challenges an opponent. The initiator gets the white pieces."""

        # Use info in CreateGameRequest to create a new Game, and convert into GameModel
        new_game = Game.new_game(white=request.initiator, black=request.opponent)
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository (which hands out the new ID)
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info(
            "Created game %s: %s (white) vs %s (black)",
            game_id,
            request.initiator,
            request.opponent,
        )

        self.notifier.publish(
            GameCreated(game_id=game_id, white=request.initiator, black=request.opponent)
        )
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        stored_model = self._fetch_game(request.game_id)
        game = Game.from_model(stored_model)
        legal_moves = game.legal_moves(request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=game.color_to_move,
            legal_moves=legal_moves,
        )

    def submit_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        A rejected move raises (a subclass of GameError): nothing gets stored and nothing gets published.
        """
        move = Move(
            from_square=Square.from_algebraic(request.from_square),
            to_square=Square.from_algebraic(request.to_square),
        )

        # unknown games never get a lock
        self._fetch_game(request.game_id)

        with self._lock_for(request.game_id):
            try:
                stored_model = self._fetch_game(request.game_id)
            except RepositoryError:
                # deleted in the meantime
                self._forget_lock(request.game_id)
                raise
            game = Game.from_model(stored_model)

            try:
                outcome = game.apply_move(request.player_name, move)
            except MoveRejectedError as e:
                logger.info(
                    "Rejected move %s by %s in game %s: %s",
                    move.to_uci(),
                    request.player_name,
                    request.game_id,
                    e.reason,
                )
                raise

            # Capture updated state in GameModel and store in repository
            after_move = game.to_model()
            self.repo.update_game(request.game_id, after_move)

        logger.info(
            "Game %s: %s played %s", request.game_id, outcome.mover, move.to_uci()
        )
        self.notifier.publish(
            MoveApplied(
                game_id=request.game_id,
                mover=outcome.mover,
                from_square=move.from_square.to_algebraic(),
                to_square=move.to_square.to_algebraic(),
            )
        )
        if outcome.winner is not None:
            # an ended game is never written again
            self._forget_lock(request.game_id)
            logger.info("Game %s ended, winner: %s", request.game_id, outcome.winner)
            self.notifier.publish(GameEnded(game_id=request.game_id, winner=outcome.winner))

        return MoveResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            move=move.to_uci(),
            game_ended=outcome.ended_game,
            game=self._create_game_response(request.game_id, after_move),
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._lock_for(request.game_id):
            deleted = self.repo.delete_game(request.game_id)
        self._forget_lock(request.game_id)
        if deleted is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _lock_for(self, game_id: int) -> Lock:
        with self._registry_lock:
            return self._game_locks[game_id]

    def _forget_lock(self, game_id: int) -> None:
        with self._registry_lock:
            self._game_locks.pop(game_id, None)

    def _create_game_response(self, game_id: int, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.) Corrupt data raises a GameStateError."""
        game = Game.from_model(model)
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            status=game.status,
            winner=game.winner,
            color_to_move=game.color_to_move,
            board=list(model.board),
            fen_position=game.board.to_fen(),
            move_history=model.moves_uci,
        )

    def _fetch_game(self, game_id: int) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
