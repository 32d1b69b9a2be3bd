import pytest
from pydantic import ValidationError

from src.api.models import (
    LegalMovesRequest,
    MoveRequest,
    ShareRequest,
    validate_square_name,
)
from src.core.exceptions import InvalidRequestError


# -- Validation - square names --
@pytest.mark.parametrize("name, expected", [("e2", "e2"), ("E2", "e2"), (" h8 ", "h8"), ("a1", "a1")])
def test_square_names_are_normalized(name: str, expected: str) -> None:
    assert validate_square_name(name) == expected


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # off the board
        "a9",
        "a0",
        "",
    ],
)
def test_invalid_square_name(square: str) -> None:
    with pytest.raises(InvalidRequestError):
        validate_square_name(square)


# -- Validation - MoveRequest --
def test_valid_move_request() -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(from_square="E2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"


@pytest.mark.parametrize("square", ["nonsense", "11", "aa"])
def test_invalid_from_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(ValidationError):
        _ = MoveRequest(from_square=square, to_square="e2")


@pytest.mark.parametrize("square", ["nonsense", "11", "aa"])
def test_invalid_to_square(square: str) -> None:
    with pytest.raises(ValidationError):
        _ = MoveRequest(from_square="e2", to_square=square)


# -- Validation - other requests --
def test_legal_moves_request() -> None:
    assert LegalMovesRequest(square=" G1").square == "g1"
    with pytest.raises(ValidationError):
        _ = LegalMovesRequest(square="z9")


def test_share_request_keeps_code_as_is() -> None:
    """Share codes are decoded forgivingly later on, so anything goes here."""
    assert ShareRequest(code="#ZTItZTQ=").code == "#ZTItZTQ="
