"""Unit tests for /src/chess/terminal.py"""

from unittest.mock import patch

import pytest

from src.chess.board import Board
from src.chess.pieces import Color
from src.chess.terminal import generate_legal_moves, has_legal_move, is_terminal

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
# Black pawn on a4 runs into the white pawn on a3, nothing to take
STUCK_BLACK_PAWN = "8/8/8/8/p7/P7/8/7K"


def test_twenty_moves_in_starting_position() -> None:
    """16 pawn moves + 4 knight moves, for either side."""
    board = Board.starting_position()
    assert len(generate_legal_moves(board, Color.WHITE)) == 20
    assert len(generate_legal_moves(board, Color.BLACK)) == 20


def test_starting_position_move_list() -> None:
    moves = {move.to_uci() for move in generate_legal_moves(Board.starting_position(), Color.WHITE)}
    assert {"b1a3", "b1c3", "g1f3", "g1h3", "e2e3", "e2e4", "a2a4", "h2h3"} <= moves
    assert "a1a3" not in moves


def test_starting_position_not_terminal() -> None:
    board = Board.starting_position()
    assert has_legal_move(board, Color.WHITE)
    assert not is_terminal(board, Color.BLACK)


def test_blocked_pawn_is_terminal() -> None:
    board = Board.from_fen(STUCK_BLACK_PAWN)
    assert generate_legal_moves(board, Color.BLACK) == []
    assert is_terminal(board, Color.BLACK)
    # White still has king moves
    assert not is_terminal(board, Color.WHITE)


def test_capture_available_is_not_terminal() -> None:
    """Same as before, but a white knight on b3 gives the black pawn something to take."""
    board = Board.from_fen("8/8/8/8/p7/PN6/8/7K")
    assert [move.to_uci() for move in generate_legal_moves(board, Color.BLACK)] == ["a4b3"]
    assert not is_terminal(board, Color.BLACK)


def test_no_pieces_left_is_terminal() -> None:
    board = Board.from_fen("8/8/8/8/8/8/8/7K")
    assert is_terminal(board, Color.BLACK)


def test_no_notion_of_check() -> None:
    """A king that is attacked but can still move: not terminal (only 'has a move' counts)."""
    board = Board.from_fen("k7/8/8/8/8/8/8/R6K")
    assert not is_terminal(board, Color.BLACK)


@pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
def test_has_legal_move_stops_at_first_legal_move(color: Color) -> None:
    board = Board.starting_position()
    with patch("src.chess.terminal.is_legal", return_value=True) as mock_is_legal:
        assert has_legal_move(board, color)
    mock_is_legal.assert_called_once()


def test_detector_does_not_touch_the_board() -> None:
    board = Board.from_fen(STARTING_POSITION_FEN)
    before = board.to_bytes()
    _ = generate_legal_moves(board, Color.WHITE)
    _ = is_terminal(board, Color.BLACK)
    assert board.to_bytes() == before
