"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Self

from src.chess.pieces import Color
from src.chess.square import Square


class CastlingSide(StrEnum):
    KING_SIDE = "king"
    QUEEN_SIDE = "queen"


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"

    @classmethod
    def of(cls, color: Color, side: CastlingSide) -> Self:
        return cls[f"{color.name}_{side.name}"]

    @property
    def color(self) -> Color:
        return Color.WHITE if self.value.isupper() else Color.BLACK

    @property
    def side(self) -> CastlingSide:
        return (
            CastlingSide.KING_SIDE
            if self.value.lower() == "k"
            else CastlingSide.QUEEN_SIDE
        )


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.

    `must_be_empty` are the squares in between king and rook,
    `king_passes` is the square the king crosses on its way to `king_to`.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    king_passes: Square
    must_be_empty: tuple[Square, ...]

    @classmethod
    def from_algebraic(
        cls, k_from: str, k_to: str, r_from: str, r_to: str, between: str
    ) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        must_be_empty = tuple(
            Square.from_algebraic(sq) for sq in between.split(",")
        )
        # the king always crosses the square the rook lands on
        return cls(king_from, king_to, rook_from, rook_to, rook_to, must_be_empty)


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1", "f1,g1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1", "b1,c1,d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8", "f8,g8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8", "b8,c8,d8"
    ),
}


@dataclass(frozen=True)
class CastlingRights:
    """
    Rights still available. Can only ever shrink: `revoke` returns a new value, nothing restores a right.
    """

    available: frozenset[CastlingDirection] = frozenset(CastlingDirection)

    @classmethod
    def none(cls) -> Self:
        return cls(frozenset())

    @classmethod
    def from_fen(cls, castle_fen: str) -> Self:
        """parse the part of the FEN string that encodes castling rights"""
        return cls(
            frozenset(
                direction
                for direction in CastlingDirection
                if direction.value in castle_fen
            )
        )

    def to_fen(self) -> str:
        castling_chars = "".join(
            direction.value
            for direction in CastlingDirection
            if direction in self.available
        )
        return castling_chars or "-"

    def has(self, color: Color, side: CastlingSide) -> bool:
        return CastlingDirection.of(color, side) in self.available

    def revoke(self, *directions: CastlingDirection) -> Self:
        return type(self)(self.available - frozenset(directions))

    def revoke_all(self, color: Color) -> Self:
        return self.revoke(
            *(direction for direction in CastlingDirection if direction.color == color)
        )


def direction_for_rook_square(square: Square) -> CastlingDirection | None:
    """Which castling right depends on the rook standing on this (corner) square."""
    for direction, rule in CASTLING_RULES.items():
        if rule.rook_from == square:
            return direction
    return None
