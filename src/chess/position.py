"""
Representation of a single game state: the position on the board plus everything needed to continue playing from it.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board
from src.chess.castling import CastlingRights
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.square import Square
from src.core.shared_types import Status


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a game.
    ----

    * `history` holds every committed move since the starting position. Replaying it from there reproduces this state.
    * `turn` is the color to move. Starting from the initial position: even history length means White to move.
    * `castling_rights` only ever lose entries.
    * `en_passant_square` is the square a pawn skipped over during the previous move (valid for a single move only).
    * `check`, `checkmate` and `stalemate` describe the position for the side to move.
    """

    board: Board
    turn: Color = Color.WHITE
    last_move: Optional[Move] = None
    check: bool = False
    checkmate: bool = False
    stalemate: bool = False
    history: tuple[Move, ...] = ()
    castling_rights: CastlingRights = CastlingRights.none()
    en_passant_square: Optional[Square] = None

    @classmethod
    def initial(cls) -> Self:
        """Standard starting position: White to move, all castling rights available."""
        return cls(
            board=Board.starting_position(),
            turn=Color.WHITE,
            castling_rights=CastlingRights(),
        )

    @property
    def status(self) -> Status:
        if self.checkmate:
            return Status.CHECKMATE
        if self.stalemate:
            return Status.STALEMATE
        return Status.IN_PROGRESS

    @property
    def is_concluded(self) -> bool:
        return self.status != Status.IN_PROGRESS
