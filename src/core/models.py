"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Game layers.

    `board` holds 64 encoded piece bytes, index = rank * 8 + file (see src/chess/pieces.py for the encoding).
    """

    board: bytes
    color_to_move: PieceColor
    registered_players: dict[PieceColor, PlayerName]
    status: str
    winner: Optional[PlayerName] = None
    moves_uci: list[str] = field(default_factory=list)
