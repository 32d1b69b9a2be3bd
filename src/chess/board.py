"""The Game board: an immutable 8x8 grid. Every update produces a new Board."""

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.chess.castling import CASTLING_RULES, CastlingDirection
from src.chess.moves import PROMOTION_ROW, Move
from src.chess.pieces import (
    FEN_TO_PIECE,
    PROMOTION_TYPE,
    Color,
    Piece,
    PieceType,
    piece_id,
)
from src.chess.square import BOARD_DIMENSIONS, Square

Grid = tuple[tuple[Optional[Piece], ...], ...]

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass(frozen=True)
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        rows, cols = BOARD_DIMENSIONS
        return cls(tuple(tuple(None for _ in range(cols)) for _ in range(rows)))

    @classmethod
    def starting_position(cls) -> Self:
        """
        Row 0 and row 7 hold the back ranks, rows 1 and 6 the pawns.
        ids: white-rook-1 on a1, white-rook-2 on h1, white-pawn-1 on a2 etc.
        """
        return cls.from_fen(STARTING_PLACEMENT)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 7), starting with a rook on a8
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        Pieces get numbered per color and type in reading order, which makes the ids deterministic.
        """
        grid: list[list[Optional[Piece]]] = [
            [None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])
        ]
        counters: Counter[tuple[Color, PieceType]] = Counter()
        for rank_idx, fen_one_rank in enumerate(fen_str.split("/")):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            row = BOARD_DIMENSIONS[0] - 1 - rank_idx
            col = 0
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    color = Color.WHITE if character.isupper() else Color.BLACK
                    key = (color, FEN_TO_PIECE[character.lower()])
                    counters[key] += 1
                    grid[row][col] = Piece.from_fen(
                        character, piece_id(*key, counters[key])
                    )
                    col += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
        return cls(tuple(tuple(row) for row in grid))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0] - 1, -1, -1)
        )

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.grid[row]:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def occupied_squares(self) -> Iterator[tuple[Square, Piece]]:
        for row, pieces in enumerate(self.grid):
            for col, piece in enumerate(pieces):
                if piece is not None:
                    yield Square(row, col), piece

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.occupied_squares() if piece.color == color]

    def find_king(self, color: Color) -> Optional[Square]:
        return next(
            (
                square
                for square, piece in self.occupied_squares()
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )

    def with_pieces(self, changes: dict[Square, Optional[Piece]]) -> Self:
        """A copy of the board with the given squares (re)filled. None empties a square."""
        grid = [list(row) for row in self.grid]
        for square, piece in changes.items():
            grid[square.row][square.col] = piece
        return type(self)(tuple(tuple(row) for row in grid))

    def apply_move(self, move: Move) -> Self:
        """
        The board after the move (this board is left untouched)
        ----

        1. En passant: remove the passed pawn (it stands beside the origin square, not on the target square)
        2. Castling: the rook jumps over to the other side of the king
        3. Move the piece itself
        4. A pawn reaching the last rank becomes a queen (keeping its id)

        Turn, castling rights, and en passant bookkeeping are not a concern of the board.
        """
        changes: dict[Square, Optional[Piece]] = {}

        if move.is_en_passant:
            changes[Square(move.from_square.row, move.to_square.col)] = None

        if move.castling is not None:
            rule = CASTLING_RULES[CastlingDirection.of(move.piece.color, move.castling)]
            changes[rule.rook_to] = self.piece(rule.rook_from)
            changes[rule.rook_from] = None

        moved_piece = move.piece
        if (
            moved_piece.type == PieceType.PAWN
            and move.to_square.row == PROMOTION_ROW[moved_piece.color]
        ):
            moved_piece = moved_piece.promote_to(PROMOTION_TYPE)

        changes[move.from_square] = None
        changes[move.to_square] = moved_piece
        return self.with_pieces(changes)
