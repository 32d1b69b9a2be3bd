"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status

PieceColor = str
SquareName = str

FILES = "abcdefgh"
RANKS = "12345678"


def _is_algebraic_notation(value: str) -> bool:
    return len(value) == 2 and value[0] in FILES and value[1] in RANKS


def validate_square_name(value: str) -> str:
    value = value.strip().lower()
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class LegalMovesRequest(BaseModel):
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class ShareRequest(BaseModel):
    code: str


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    board: str
    turn: PieceColor
    status: Status
    check: bool
    checkmate: bool
    stalemate: bool
    last_move: Optional[str]
    move_history: list[str]
    can_undo: bool
    can_redo: bool


class LegalMovesResponse(BaseModel):
    square: SquareName
    legal_moves: list[str]


class ShareResponse(BaseModel):
    code: str
    move_count: int


class ProgressResponse(BaseModel):
    wins: int
    losses: int
    draws: int
    coins: int
