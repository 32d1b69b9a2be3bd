"""Orchestration of communication from the presentation layer to the game session and persistence layers (and the reverse direction)."""

import logging
from typing import Optional, Self

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    ProgressResponse,
    ShareRequest,
    ShareResponse,
)
from src.chess.game import Game
from src.chess.notation import move_to_token
from src.chess.square import Square
from src.core.config import Settings
from src.db.database import open_store
from src.services.progress_service import ProgressService

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a local chess game."""

    def __init__(self, progress: ProgressService, game: Optional[Game] = None) -> None:
        self.progress_service = progress
        self.game = game or Game()

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        store = open_store(settings)
        return cls(ProgressService(store, key=settings.progress_key))

    # -- Presentation layer logic ---
    def get_game(self) -> GameResponse:
        """Current game state. Read-only snapshot."""
        return self._create_game_response()

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves for the piece on the requested square."""
        moves = self.game.legal_moves(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            square=request.square,
            legal_moves=[move.to_uci() for move in moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.

        An illegal move leaves the game as it was. The move that concludes the game gets tallied in the progress record.
        """
        accepted = self.game.submit_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        if not accepted:
            logger.debug(
                "Move %s-%s rejected.", request.from_square, request.to_square
            )
        elif self.game.state.is_concluded:
            self.progress_service.record_result(self.game.state)

        return self._create_game_response()

    def undo(self) -> GameResponse:
        self.game.undo()
        return self._create_game_response()

    def redo(self) -> GameResponse:
        self.game.redo()
        return self._create_game_response()

    def reset(self) -> GameResponse:
        self.game.reset()
        return self._create_game_response()

    def share(self) -> ShareResponse:
        """Share code for the moves played so far (to be carried in a URL fragment)."""
        return ShareResponse(
            code=self.game.share_code(),
            move_count=len(self.game.state.history),
        )

    def load_shared(self, request: ShareRequest) -> GameResponse:
        """Replace the current game by the one in the share code. Recovers as many moves as it can."""
        self.game.load_shared(request.code)
        logger.info(
            "Loaded shared game with %d move(s).", len(self.game.state.history)
        )
        return self._create_game_response()

    def progress(self) -> ProgressResponse:
        progress = self.progress_service.load()
        return ProgressResponse(
            wins=progress.wins,
            losses=progress.losses,
            draws=progress.draws,
            coins=progress.coins,
        )

    # -- Internal helpers --
    def _create_game_response(self) -> GameResponse:
        state = self.game.state
        return GameResponse(
            board=state.board.to_fen(),
            turn=str(state.turn),
            status=state.status,
            check=state.check,
            checkmate=state.checkmate,
            stalemate=state.stalemate,
            last_move=move_to_token(state.last_move) if state.last_move else None,
            move_history=[move_to_token(move) for move in state.history],
            can_undo=self.game.can_undo,
            can_redo=self.game.can_redo,
        )
