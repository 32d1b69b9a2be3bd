"""Defines the types of chess pieces"""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Self


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Pawns reaching the last rank always become this piece
PROMOTION_TYPE = PieceType.QUEEN


@dataclass(frozen=True)
class Piece:
    """
    A piece keeps its id for as long as it stays on the board.
    (A promoted pawn keeps its id as well, only its type changes)
    """

    id: str
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str, piece_id: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_id, piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def promote_to(self, new_type: PieceType) -> Self:
        return replace(self, type=new_type)


def piece_id(color: Color, piece_type: PieceType, index: int) -> str:
    """ids look like 'white-pawn-3'"""
    return f"{color}-{piece_type}-{index}"
