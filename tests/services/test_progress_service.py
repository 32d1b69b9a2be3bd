"""Unit tests for src/services/progress_service.py"""

import json
import logging

import pytest

from src.chess.board import Board
from src.chess.pieces import Color
from src.chess.position import GameState
from src.chess.rules import replay, with_status
from src.chess.square import Square
from src.core.config import DEFAULT_PROGRESS_KEY
from src.core.exceptions import CorruptedProgressRecordError
from src.core.models import INITIAL_COINS, ProgressModel
from src.core.shared_types import Outcome
from src.db.repository import KeyValueStore
from src.services.progress_service import (
    ProgressService,
    dump_progress,
    game_outcome,
    parse_progress,
)


def play(*tokens: str) -> GameState:
    moves = []
    for token in tokens:
        from_sq, to_sq = token.split("-")
        moves.append((Square.from_algebraic(from_sq), Square.from_algebraic(to_sq)))
    return replay(moves)


# Black delivers mate
FOOLS_MATE = play("f2-f4", "e7-e6", "g2-g4", "d8-h4")
# White delivers mate
SCHOLARS_MATE = play("e2-e4", "e7-e5", "f1-c4", "b8-c6", "d1-h5", "g8-f6", "h5-f7")
STALEMATE = with_status(GameState(board=Board.from_fen("k7/8/1QK5/8/8/8/8/8"), turn=Color.BLACK))


@pytest.fixture
def service(mock_store: KeyValueStore) -> ProgressService:
    return ProgressService(mock_store)


# -- (DE)SERIALIZATION --
def test_dump_progress_is_json() -> None:
    raw = dump_progress(ProgressModel(wins=2, losses=1, draws=0, coins=400))
    assert json.loads(raw) == {"wins": 2, "losses": 1, "draws": 0, "coins": 400}


def test_parse_partial_record_fills_defaults() -> None:
    assert parse_progress('{"wins": 3}') == ProgressModel(wins=3, coins=INITIAL_COINS)


def test_parse_ignores_unknown_fields() -> None:
    assert parse_progress('{"wins": 1, "theme": "fire"}') == ProgressModel(wins=1)


@pytest.mark.parametrize("raw", ["not json", "null", '{"wins": "many"}'])
def test_parse_corrupted_record(raw: str) -> None:
    with pytest.raises(CorruptedProgressRecordError):
        parse_progress(raw)


# -- OUTCOMES --
def test_outcomes() -> None:
    assert FOOLS_MATE.checkmate and SCHOLARS_MATE.checkmate and STALEMATE.stalemate
    assert game_outcome(SCHOLARS_MATE) == Outcome.WIN
    assert game_outcome(FOOLS_MATE) == Outcome.LOSS
    assert game_outcome(STALEMATE) == Outcome.DRAW
    assert game_outcome(GameState.initial()) is None


# -- LOAD / SAVE --
def test_load_defaults_without_record(service: ProgressService) -> None:
    assert service.load() == ProgressModel(wins=0, losses=0, draws=0, coins=100)


def test_save_then_load(service: ProgressService, mock_store: KeyValueStore) -> None:
    progress = ProgressModel(wins=4, losses=2, draws=1, coins=1050)
    service.save(progress)
    assert mock_store.get(DEFAULT_PROGRESS_KEY) is not None
    assert service.load() == progress


def test_custom_key(mock_store: KeyValueStore) -> None:
    service = ProgressService(mock_store, key="other_save")
    service.save(ProgressModel(wins=1))
    assert mock_store.get("other_save") is not None
    assert mock_store.get(DEFAULT_PROGRESS_KEY) is None


def test_corrupted_record_loads_defaults(
    service: ProgressService, mock_store: KeyValueStore, caplog: pytest.LogCaptureFixture
) -> None:
    mock_store.set(DEFAULT_PROGRESS_KEY, "{broken")
    with caplog.at_level(logging.WARNING):
        assert service.load() == ProgressModel()
    assert "Using defaults" in caplog.text


def test_failing_store_loads_defaults_and_drops_saves(failing_store: KeyValueStore) -> None:
    service = ProgressService(failing_store)
    assert service.load() == ProgressModel()
    service.save(ProgressModel(wins=1))


# -- RECORDING RESULTS --
def test_record_win(service: ProgressService) -> None:
    progress = service.record_result(SCHOLARS_MATE)
    assert progress == ProgressModel(wins=1, losses=0, draws=0, coins=250)
    assert service.load() == progress


def test_record_loss(service: ProgressService) -> None:
    progress = service.record_result(FOOLS_MATE)
    assert progress == ProgressModel(wins=0, losses=1, draws=0, coins=250)


def test_record_draw(service: ProgressService) -> None:
    progress = service.record_result(STALEMATE)
    assert progress == ProgressModel(wins=0, losses=0, draws=1, coins=150)


def test_results_accumulate(service: ProgressService) -> None:
    service.record_result(SCHOLARS_MATE)
    service.record_result(STALEMATE)
    assert service.load() == ProgressModel(wins=1, losses=0, draws=1, coins=300)


def test_game_in_progress_is_not_recorded(service: ProgressService, mock_store: KeyValueStore) -> None:
    progress = service.record_result(play("e2-e4"))
    assert progress == ProgressModel()
    assert mock_store.get(DEFAULT_PROGRESS_KEY) is None


def test_record_result_with_failing_store(failing_store: KeyValueStore) -> None:
    progress = ProgressService(failing_store).record_result(SCHOLARS_MATE)
    assert progress == ProgressModel(wins=1, coins=250)
