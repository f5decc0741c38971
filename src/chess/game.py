"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import Move, validate_move
from src.chess.pieces import Color
from src.chess.terminal import generate_legal_moves, is_terminal
from src.core.exceptions import (
    GameNotActiveError,
    GameStateError,
    NotYourTurnError,
    SelfPlayNotAllowedError,
    rejection_error,
)
from src.core.models import GameModel
from src.core.shared_types import Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    """What happened in a single accepted move. `winner` is only set if this move ended the game."""

    move: Move
    mover: str
    winner: Optional[str] = None

    @property
    def ended_game(self) -> bool:
        return self.winner is not None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: dict[Color, str]
    color_to_move: Color
    status: Status
    winner: Optional[str] = None
    moves: list[Move] = field(default_factory=list)

    @classmethod
    def new_game(cls, white: str, black: str) -> Self:
        """Start a game from the standard position. The first player gets the white pieces."""
        if white == black:
            raise SelfPlayNotAllowedError(
                f"Cannot create new game. Player {white!r} cannot play against themselves."
            )
        return cls(
            board=Board.starting_position(),
            players={Color.WHITE: white, Color.BLACK: black},
            color_to_move=Color.WHITE,
            status=Status.ACTIVE,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in Status.__members__.values():
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(Status)}"
            )
        if model.color_to_move not in Color.__members__.values():
            raise GameStateError(f"Invalid color to move: {model.color_to_move!r}")
        missing = [color for color in Color if color not in model.registered_players]
        if missing:
            raise GameStateError(f"Game is missing players for: {','.join(missing)}")

        try:
            board = Board.from_bytes(model.board)
        except ValueError as e:
            raise GameStateError(f"Stored board cannot be decoded: {e}") from e

        return cls(
            board=board,
            players={color: model.registered_players[color] for color in Color},
            color_to_move=Color(model.color_to_move),
            status=Status(model.status),
            winner=model.winner,
            moves=[Move.from_uci(uci) for uci in model.moves_uci],
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_bytes(),
            color_to_move=self.color_to_move.value,
            registered_players={color.value: name for color, name in self.players.items()},
            status=self.status.value,
            winner=self.winner,
            moves_uci=[move.to_uci() for move in self.moves],
        )

    def legal_moves(self, player: str) -> list[str]:
        """
        Service can request the set of legal moves, e.g. to display them to the user.
        ----
        1. Check the game is still going and that it is your turn
        2. Yes? Generate legal moves and return a list of moves in UCI notation.
        """
        self._assert_active()
        self._assert_your_turn(player)
        return [move.to_uci() for move in generate_legal_moves(self.board, self.color_to_move)]

    def apply_move(self, player: str, move: Move) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. make sure the game is (still) active
        2. make sure it is your turn
        3. ask for the legality verdict of the move
        4. update the board, the (history of) moves and the color to move
        5. check if the opponent has any move left: if not, the game ended and you won.

        Any failed check raises, and leaves the game untouched.
        """
        self._assert_active()
        self._assert_your_turn(player)

        reason = validate_move(self.board, self.color_to_move, move)
        if reason is not None:
            raise rejection_error(
                reason, f"Move not allowed: {move.to_uci()} ({reason.value})"
            )

        # update the board, the list of moves in this game, and whose turn it is
        mover_color = self.color_to_move
        self.board.move_piece(move)
        self._update_moves(move)
        self.color_to_move = mover_color.opponent

        # update the Game Status / check for end condition
        winner = self._update_game_status(mover_color)
        return MoveOutcome(move=move, mover=player, winner=winner)

    # -- PRIVATE HELPERS ---
    def _assert_active(self) -> None:
        if self.status != Status.ACTIVE:
            raise GameNotActiveError(f"Game is not active. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move.
        NOTE this also rejects anyone who is not registered for this game."""
        player_to_move = self.players[self.color_to_move]
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _update_moves(self, move: Move) -> None:
        self.moves.append(move)

    def _update_game_status(self, mover_color: Color) -> Optional[str]:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the color to move has already been flipped. The player to move now is the opponent of the player who just moved.
        """
        if not is_terminal(self.board, self.color_to_move):
            return None

        self.status = Status.ENDED
        self.winner = self.players[mover_color]
        logger.debug(
            "No legal moves left for %s, %s wins", self.color_to_move, self.winner
        )
        return self.winner
