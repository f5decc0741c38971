"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PieceColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """The initiator plays White, the opponent Black."""

    initiator: PlayerName
    opponent: PlayerName

    @field_validator(*["initiator", "opponent"])
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value


class GetGameRequest(BaseModel):
    game_id: int


class LegalMovesRequest(BaseModel):
    game_id: int
    player_name: PlayerName


class MoveRequest(BaseModel):
    game_id: int
    player_name: PlayerName
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        """
        Only the notation is checked here: a letter followed by a number.
        NOTE 'z9' passes. Whether the square is on the board is decided by the legality check.
        """

        def _is_algebraic_notation(value: str) -> bool:
            if len(value) not in (2, 3):
                return False

            first_character = value[0]
            rest = value[1:]
            if not (first_character.isalpha() and first_character.isascii()):
                return False
            return rest.isascii() and rest.isdecimal()

        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value.lower()


class DeleteGameRequest(BaseModel):
    game_id: int


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: int
    players: dict[PieceColor, PlayerName]
    status: Status
    winner: Optional[PlayerName]
    color_to_move: Color
    board: list[int]
    fen_position: str
    move_history: list[str]


class MoveResponse(BaseModel):
    game_id: int
    player_name: PlayerName
    move: str
    game_ended: bool
    game: GameResponse


class LegalMovesResponse(BaseModel):
    game_id: int
    player_name: PlayerName
    color: Color
    legal_moves: list[str]
