"""
Movement rules and the legality check for a single move.

Key idea: Use strategy pattern to define the movement shape for each piece type.
Every candidate move gets one verdict: legal (None) or the first reason it fails.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.shared_types import RejectionReason


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_occupied(self, square: Square) -> bool: ...


Vector = tuple[int, int]
Verdict = Optional[RejectionReason]

# Pawns move up the board for White, down for Black
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g1f3": (knight) jumps from g1 to f3
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.file - self.from_square.file,
            self.to_square.rank - self.from_square.rank,
        )


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- PATH HELPERS ---
def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between two squares on the same rank, file, or diagonal.
    Walks in unit steps from from_square towards to_square.
    """
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        raise ValueError(
            f"squares_between requires both squares on one line. \n from: {from_square}\n to: {to_square}"
        )

    step_file, step_rank = _sign(df), _sign(dr)
    squares_found: list[Square] = []
    square = Square(from_square.file + step_file, from_square.rank + step_rank)
    while square != to_square:
        squares_found.append(square)
        square = Square(square.file + step_file, square.rank + step_rank)
    return squares_found


def is_path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    return not any(board.is_occupied(sq) for sq in squares_between(from_square, to_square))


# --- SHAPE RULES ---
def is_diagonal(df: int, dr: int) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return abs(df) == abs(dr) and df != 0


def is_straight(df: int, dr: int) -> bool:
    """Rooks move either horizontally or vertically"""
    return (df == 0) != (dr == 0)


def _sliding_verdict(move: Move, board: Board, shape_ok: bool) -> Verdict:
    """Sliding pieces: first the shape, then the line-of-sight."""
    if not shape_ok:
        return RejectionReason.ILLEGAL_SHAPE
    if not is_path_clear(board, move.from_square, move.to_square):
        return RejectionReason.PATH_BLOCKED
    return None


def pawn_verdict(move: Move, board: Board) -> Verdict:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two from its starting rank, if both squares in front of it are empty.
    - takes diagonally (one square forward), and only when there is something to take.
    """
    pawn = board.piece(move.from_square)
    assert pawn is not None
    direction = PAWN_DIRECTION[pawn.color]
    df, dr = move.delta
    target_occupied = board.is_occupied(move.to_square)

    # single push
    if df == 0 and dr == direction:
        return RejectionReason.ILLEGAL_SHAPE if target_occupied else None

    # double push from the home rank
    if df == 0 and dr == 2 * direction:
        if move.from_square.rank != PAWN_HOME_RANK[pawn.color]:
            return RejectionReason.ILLEGAL_SHAPE
        if not is_path_clear(board, move.from_square, move.to_square):
            return RejectionReason.PATH_BLOCKED
        return RejectionReason.ILLEGAL_SHAPE if target_occupied else None

    # diagonal take. NOTE own pieces were already ruled out by the generic checks
    if abs(df) == 1 and dr == direction:
        return None if target_occupied else RejectionReason.ILLEGAL_SHAPE

    return RejectionReason.ILLEGAL_SHAPE


def knight_verdict(move: Move, board: Board) -> Verdict:
    """Knights jump: |delta_rank| + |delta_file| = 3, never blocked."""
    df, dr = move.delta
    if {abs(df), abs(dr)} == {1, 2}:
        return None
    return RejectionReason.ILLEGAL_SHAPE


def bishop_verdict(move: Move, board: Board) -> Verdict:
    return _sliding_verdict(move, board, is_diagonal(*move.delta))


def rook_verdict(move: Move, board: Board) -> Verdict:
    return _sliding_verdict(move, board, is_straight(*move.delta))


def queen_verdict(move: Move, board: Board) -> Verdict:
    """The Queen combines the rook moves and the bishop moves"""
    df, dr = move.delta
    return _sliding_verdict(move, board, is_diagonal(df, dr) or is_straight(df, dr))


def king_verdict(move: Move, board: Board) -> Verdict:
    """The king can move by a single square at the time."""
    df, dr = move.delta
    if max(abs(df), abs(dr)) == 1:
        return None
    return RejectionReason.ILLEGAL_SHAPE


# -- STRATEGY PATTERN: MOVEMENT RULES ---
ShapeRuleFn = Callable[[Move, Board], Verdict]
SHAPE_RULES: dict[PieceType, ShapeRuleFn] = {
    PieceType.PAWN: pawn_verdict,
    PieceType.KNIGHT: knight_verdict,
    PieceType.BISHOP: bishop_verdict,
    PieceType.ROOK: rook_verdict,
    PieceType.QUEEN: queen_verdict,
    PieceType.KING: king_verdict,
}


def validate_move(board: Board, color_to_move: Color, move: Move) -> Verdict:
    """
    Legality verdict for a single move
    ----

    Checks in order, the first one failing is the reason returned:
    1. both squares on the board
    2. there is a piece to move
    3. it is a piece of the color to move
    4. it does not land on a piece of its own color (also rules out standing still)
    5. the piece is allowed to move like that (+ the path is clear for sliding pieces)

    Returns None for a legal move.
    """
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return RejectionReason.OUT_OF_BOUNDS

    moving_piece = board.piece(move.from_square)
    if moving_piece is None:
        return RejectionReason.EMPTY_SOURCE

    if moving_piece.color != color_to_move:
        return RejectionReason.WRONG_COLOR_PIECE

    target_piece = board.piece(move.to_square)
    if target_piece is not None and target_piece.color == moving_piece.color:
        return RejectionReason.OWN_PIECE_CAPTURE

    return SHAPE_RULES[moving_piece.type](move, board)


def is_legal(board: Board, color_to_move: Color, move: Move) -> bool:
    return validate_move(board, color_to_move, move) is None
