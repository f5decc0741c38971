"""The Game board: placement of the pieces on an 8x8 grid, plus conversion to/from its stored (byte) form."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType, decode_piece, encode_piece
from src.chess.square import BOARD_DIMENSIONS, Square

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# rank index of (back rank, pawn rank) per color
HOME_RANKS: dict[Color, tuple[int, int]] = {
    Color.WHITE: (0, 1),
    Color.BLACK: (BOARD_DIMENSIONS[1] - 1, BOARD_DIMENSIONS[1] - 2),
}

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    """
    grid[rank][file] holds the piece on that square, or None if the square is empty.
    Rank 0 is White's back rank, rank 7 is Black's.
    """

    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        num_files, num_ranks = BOARD_DIMENSIONS
        return cls([[None] * num_files for _ in range(num_ranks)])

    @classmethod
    def starting_position(cls) -> Self:
        """The standard setup: pieces on the back ranks, a row of pawns in front of them."""
        board = cls.empty()
        for color, (back_rank, pawn_rank) in HOME_RANKS.items():
            for file, piece_type in enumerate(BACK_RANK):
                board.place_piece(Piece(piece_type, color), Square(file, back_rank))
                board.place_piece(Piece(PieceType.PAWN, color), Square(file, pawn_rank))
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the board part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (the top), read from the a-file to the h-file
        * ranks 6 through 3 have 8 consecutive empty squares
        * 1st rank are the white pieces (capital letters)
        """
        board = cls.empty()
        for rank_idx, fen_one_rank in enumerate(fen_str.split("/")):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - 1 - rank_idx
            file = 0
            for character in fen_one_rank:
                if character.isalpha():
                    board.place_piece(Piece.from_fen(character), Square(file, rank))
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.grid[rank]:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- STORAGE ENCODING ---
    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """64 encoded pieces, ordered rank by rank starting at a1 (index = rank * 8 + file)"""
        num_files, num_ranks = BOARD_DIMENSIONS
        if len(data) != num_files * num_ranks:
            raise ValueError(
                f"Board encoding must hold {num_files * num_ranks} bytes, got {len(data)}"
            )
        return cls(
            [
                [decode_piece(code) for code in data[rank * num_files : (rank + 1) * num_files]]
                for rank in range(num_ranks)
            ]
        )

    def to_bytes(self) -> bytes:
        return bytes(encode_piece(piece) for row in self.grid for piece in row)

    # --- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.rank][square.file]

    def is_occupied(self, square: Square) -> bool:
        return self.piece(square) is not None

    def locate_color(self, color: Color) -> list[Square]:
        return [
            Square(file, rank)
            for rank, row in enumerate(self.grid)
            for file, piece in enumerate(row)
            if piece is not None and piece.color == color
        ]

    def squares(self) -> list[Square]:
        num_files, num_ranks = BOARD_DIMENSIONS
        return [Square(file, rank) for rank in range(num_ranks) for file in range(num_files)]

    # --- UPDATES ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.grid[square.rank][square.file] = piece

    def remove_piece(self, square: Square) -> None:
        self.grid[square.rank][square.file] = None

    def move_piece(self, move: Move) -> None:
        """Update the position on the board. Whatever stood on the target square is captured."""
        piece_that_moved = self.piece(move.from_square)
        self.remove_piece(move.from_square)
        self.grid[move.to_square.rank][move.to_square.file] = piece_that_moved
