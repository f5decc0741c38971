"""
Has the side to move run out of moves?

NOTE there is no notion of check here: checkmate and stalemate are both "no legal move for the player to move".
"""

from typing import Iterator

from src.chess.board import Board
from src.chess.moves import Move, is_legal
from src.chess.pieces import Color


def _candidate_moves(board: Board, color: Color) -> Iterator[Move]:
    """Every piece of the color, paired with every other square on the board."""
    targets = board.squares()
    for from_square in board.locate_color(color):
        for to_square in targets:
            if to_square != from_square:
                yield Move(from_square, to_square)


def generate_legal_moves(board: Board, color: Color) -> list[Move]:
    return [move for move in _candidate_moves(board, color) if is_legal(board, color, move)]


def has_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first legal move found."""
    return any(is_legal(board, color, move) for move in _candidate_moves(board, color))


def is_terminal(board: Board, color: Color) -> bool:
    return not has_legal_move(board, color)
