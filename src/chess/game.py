"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the authoritative GameState and the redo stack, and replaces them wholesale on every transition.

Requests that do not lead to a transition (illegal move, nothing to undo/redo) are no-ops: methods return False.
"""

from dataclasses import dataclass, field

from src.chess.moves import Move
from src.chess.notation import deserialize, serialize
from src.chess.position import GameState
from src.chess.rules import legal_moves, replay, submit_move
from src.chess.square import Square


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    state: GameState = field(default_factory=GameState.initial)
    redo_stack: tuple[Move, ...] = ()

    @property
    def can_undo(self) -> bool:
        return len(self.state.history) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.redo_stack) > 0

    def legal_moves(self, square: Square) -> list[Move]:
        """Can be used to display the options of a selected piece to the user."""
        return legal_moves(self.state, square)

    def submit_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Attempt to make a move
        -----

        A new move (as opposed to a redo) makes the moves undone before unreachable: the redo stack is cleared.
        """
        next_state = submit_move(self.state, from_square, to_square)
        if next_state is self.state:
            return False

        self.state = next_state
        self.redo_stack = ()
        return True

    def undo(self) -> bool:
        """
        Take back the last move.
        ----

        The state is rebuilt by replaying all but the last move from the starting position.
        (Cost grows with the length of the game, fine for games played by hand)
        """
        if not self.can_undo:
            return False

        *remaining, last_move = self.state.history
        self.redo_stack = (*self.redo_stack, last_move)
        self.state = replay((move.from_square, move.to_square) for move in remaining)
        return True

    def redo(self) -> bool:
        """Play the most recently undone move again."""
        if not self.can_redo:
            return False

        *remaining, next_move = self.redo_stack
        next_state = submit_move(self.state, next_move.from_square, next_move.to_square)
        if next_state is self.state:
            return False

        self.redo_stack = tuple(remaining)
        self.state = next_state
        return True

    def reset(self) -> None:
        """Start over from the starting position."""
        self.state = GameState.initial()
        self.redo_stack = ()

    def share_code(self) -> str:
        return serialize(self.state.history)

    def load_shared(self, code: str) -> None:
        """Replace the current game by the one encoded in the share code."""
        self.state = deserialize(code)
        self.redo_stack = ()
