"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    ACTIVE = "active"
    ENDED = "ended"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class RejectionReason(StrEnum):
    """Why the legality check refused a move. The first failing check wins."""

    OUT_OF_BOUNDS = "out of bounds"
    EMPTY_SOURCE = "empty source"
    WRONG_COLOR_PIECE = "wrong color piece"
    OWN_PIECE_CAPTURE = "own piece capture"
    ILLEGAL_SHAPE = "illegal shape"
    PATH_BLOCKED = "path blocked"
