"""Unit tests for /src/chess/board.py"""

import pytest

from src.chess.board import BACK_RANK, Board
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


# -- SETUP --
def test_starting_position_back_ranks() -> None:
    """Rook, knight, bishop, queen, king, bishop, knight, rook from the a-file onwards, for both colors."""
    board = Board.starting_position()
    for file, piece_type in enumerate(BACK_RANK):
        assert board.piece(Square(file, 0)) == Piece(piece_type, Color.WHITE)
        assert board.piece(Square(file, 7)) == Piece(piece_type, Color.BLACK)


def test_starting_position_pawns() -> None:
    board = Board.starting_position()
    for file in range(8):
        assert board.piece(Square(file, 1)) == Piece(PieceType.PAWN, Color.WHITE)
        assert board.piece(Square(file, 6)) == Piece(PieceType.PAWN, Color.BLACK)


def test_starting_position_middle_is_empty() -> None:
    board = Board.starting_position()
    for rank in range(2, 6):
        for file in range(8):
            assert board.piece(Square(file, rank)) is None


def test_starting_position_king_and_queen_squares() -> None:
    """Queen on d1/d8, king on e1/e8"""
    board = Board.starting_position()
    assert board.piece(Square.from_algebraic("d1")) == Piece(PieceType.QUEEN, Color.WHITE)
    assert board.piece(Square.from_algebraic("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Square.from_algebraic("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(Square.from_algebraic("e8")) == Piece(PieceType.KING, Color.BLACK)


def test_starting_position_matches_fen() -> None:
    assert Board.starting_position() == Board.from_fen(STARTING_POSITION_FEN)
    assert Board.starting_position().to_fen() == STARTING_POSITION_FEN


def test_empty_board() -> None:
    board = Board.empty()
    assert board.to_fen() == EMPTY_FEN
    assert board.locate_color(Color.WHITE) == []
    assert board.locate_color(Color.BLACK) == []


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION_FEN,
        EMPTY_FEN,
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen


# -- STORAGE ENCODING --
def test_starting_position_bytes() -> None:
    """index = rank * 8 + file, so a1 comes first and h8 last."""
    data = Board.starting_position().to_bytes()
    assert len(data) == 64
    assert data[:8] == bytes([0x04, 0x02, 0x03, 0x05, 0x06, 0x03, 0x02, 0x04])
    assert data[8:16] == bytes([0x01] * 8)
    assert data[16:48] == bytes(32)
    assert data[48:56] == bytes([0x09] * 8)
    assert data[56:] == bytes([0x0C, 0x0A, 0x0B, 0x0D, 0x0E, 0x0B, 0x0A, 0x0C])


def test_from_bytes_restores_board() -> None:
    board = Board.from_fen("r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1")
    assert Board.from_bytes(board.to_bytes()) == board


@pytest.mark.parametrize("length", [0, 63, 65])
def test_from_bytes_wrong_length(length: int) -> None:
    with pytest.raises(ValueError):
        _ = Board.from_bytes(bytes(length))


# -- QUERIES / UPDATES --
def test_locate_color() -> None:
    board = Board.from_fen("8/8/8/3p4/8/8/8/K6N")
    assert sorted(board.locate_color(Color.WHITE), key=lambda sq: sq.file) == [
        Square(0, 0),
        Square(7, 0),
    ]
    assert board.locate_color(Color.BLACK) == [Square(3, 4)]


def test_move_piece_to_empty_square() -> None:
    board = Board.starting_position()
    board.move_piece(Move.from_uci("g1f3"))
    assert board.piece(Square.from_algebraic("g1")) is None
    assert board.piece(Square.from_algebraic("f3")) == Piece(PieceType.KNIGHT, Color.WHITE)


def test_move_piece_captures() -> None:
    """Whatever is on the target square gets overwritten."""
    board = Board.from_fen("8/8/8/8/8/8/8/R6r")
    board.move_piece(Move.from_uci("a1h1"))
    assert board.piece(Square.from_algebraic("a1")) is None
    assert board.piece(Square.from_algebraic("h1")) == Piece(PieceType.ROOK, Color.WHITE)
    assert board.locate_color(Color.BLACK) == []


def test_place_and_remove_piece() -> None:
    board = Board.empty()
    square = Square(3, 3)
    board.place_piece(Piece(PieceType.QUEEN, Color.BLACK), square)
    assert board.is_occupied(square)
    board.remove_piece(square)
    assert not board.is_occupied(square)


def test_squares_covers_the_board() -> None:
    squares = Board.empty().squares()
    assert len(squares) == 64
    assert len(set(squares)) == 64
