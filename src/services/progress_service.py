"""Loading, saving and updating the player's progress record."""

import logging
from dataclasses import replace
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from src.chess.pieces import Color
from src.chess.position import GameState
from src.core.config import DEFAULT_PROGRESS_KEY
from src.core.exceptions import CorruptedProgressRecordError, RepositoryError
from src.core.models import ProgressModel
from src.core.shared_types import Outcome
from src.db.repository import KeyValueStore

logger = logging.getLogger(__name__)

# Coins earned per concluded game
OUTCOME_REWARDS: dict[Outcome, int] = {
    Outcome.WIN: 150,
    Outcome.LOSS: 150,
    Outcome.DRAW: 50,
}

# The local player plays White
LOCAL_PLAYER_COLOR = Color.WHITE

_progress_adapter = TypeAdapter(ProgressModel)


def parse_progress(raw: str) -> ProgressModel:
    """
    JSON --> ProgressModel. Missing fields get their default values, unknown fields are ignored.
    Raises CorruptedProgressRecordError if the data cannot be interpreted.
    """
    try:
        return _progress_adapter.validate_json(raw)
    except ValidationError as exc:
        raise CorruptedProgressRecordError(
            f"Progress record cannot be parsed: {exc.error_count()} error(s)."
        ) from exc


def dump_progress(progress: ProgressModel) -> str:
    return _progress_adapter.dump_json(progress).decode("utf-8")


def game_outcome(state: GameState) -> Optional[Outcome]:
    """The outcome of a concluded game. None while the game is still going on."""
    if state.checkmate:
        # The side to move got mated
        winner = state.turn.opponent
        return Outcome.WIN if winner == LOCAL_PLAYER_COLOR else Outcome.LOSS
    if state.stalemate:
        return Outcome.DRAW
    return None


class ProgressService:
    """
    Progress survives failing storage: whatever cannot be read is replaced by the default values,
    whatever cannot be written is logged and dropped.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_PROGRESS_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> ProgressModel:
        try:
            raw = self.store.get(self.key)
        except RepositoryError as exc:
            logger.warning("Could not read progress, using defaults: %s", exc)
            return ProgressModel()

        if raw is None:
            return ProgressModel()

        try:
            return parse_progress(raw)
        except CorruptedProgressRecordError as exc:
            logger.warning("%s Using defaults.", exc)
            return ProgressModel()

    def save(self, progress: ProgressModel) -> None:
        try:
            self.store.set(self.key, dump_progress(progress))
        except RepositoryError as exc:
            logger.warning("Could not save progress: %s", exc)

    def record_result(self, state: GameState) -> ProgressModel:
        """
        Tally a concluded game
        ----

        * checkmate by White: win, checkmate by Black: loss
        * stalemate: draw
        Coins are earned either way. A game that is still in progress leaves the record untouched.
        """
        progress = self.load()
        outcome = game_outcome(state)
        if outcome is None:
            return progress

        reward = OUTCOME_REWARDS[outcome]
        match outcome:
            case Outcome.WIN:
                progress = replace(progress, wins=progress.wins + 1)
            case Outcome.LOSS:
                progress = replace(progress, losses=progress.losses + 1)
            case Outcome.DRAW:
                progress = replace(progress, draws=progress.draws + 1)
        progress = replace(progress, coins=progress.coins + reward)

        logger.info("Game concluded: %s (+%d coins)", outcome, reward)
        self.save(progress)
        return progress
