"""Unit tests for /src/chess/pieces.py"""

import pytest

from src.chess.pieces import (
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    Color,
    Piece,
    PieceType,
    piece_id,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char, "some-id")
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE
    assert piece.id == "some-id"


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char, "some-id")
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece("w", piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece("b", piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type].lower()


@pytest.mark.parametrize("color", list(Color))
def test_promotion_to_queen(color: Color) -> None:
    """Promotion gives a new piece: same id and color, different type. The pawn itself is untouched."""
    pawn = Piece(piece_id(color, PieceType.PAWN, 3), PieceType.PAWN, color)
    queen = pawn.promote_to(PieceType.QUEEN)
    assert queen.type == PieceType.QUEEN
    assert queen.color == color
    assert queen.id == pawn.id
    assert pawn.type == PieceType.PAWN


def test_piece_id() -> None:
    assert piece_id(Color.BLACK, PieceType.KNIGHT, 2) == "black-knight-2"


def test_opponent_color() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE
