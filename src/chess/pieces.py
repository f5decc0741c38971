"""
Defines the chess pieces and their single byte encoding.

Byte layout (used for storage):
* bits 0-2: piece type, pawn=1 ... king=6
* bit 3: color, set for black
* 0x00: empty square
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import Color, PieceType

COLOR_BIT = 0x08
TYPE_MASK = 0x07
EMPTY_SQUARE = 0x00

PIECE_CODES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 2,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 4,
    PieceType.QUEEN: 5,
    PieceType.KING: 6,
}

CODE_TO_PIECE: dict[int, PieceType] = {value: key for key, value in PIECE_CODES.items()}

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )


def encode_piece(piece: Optional[Piece]) -> int:
    """Pack a piece (or an empty square) into a single byte."""
    if piece is None:
        return EMPTY_SQUARE
    if piece.type not in PIECE_CODES:
        raise ValueError(f"Cannot encode piece type {piece.type!r}")
    color_bit = COLOR_BIT if piece.color == Color.BLACK else 0
    return PIECE_CODES[piece.type] | color_bit


def decode_piece(code: int) -> Optional[Piece]:
    """Reverse of encode_piece(). Only the 13 values in the encoding table are accepted."""
    if code == EMPTY_SQUARE:
        return None
    if code & ~(TYPE_MASK | COLOR_BIT) or (code & TYPE_MASK) not in CODE_TO_PIECE:
        raise ValueError(f"Not a valid piece encoding: {code:#04x}")
    color = Color.BLACK if code & COLOR_BIT else Color.WHITE
    return Piece(CODE_TO_PIECE[code & TYPE_MASK], color)


def is_empty(code: int) -> bool:
    return code == EMPTY_SQUARE
