"""
Move list encoding for share links.
----

Every move becomes a token '<file><rank>-<file><rank>', e.g. 'e2-e4' (standard algebraic ranks: row 0 is rank 1).
Tokens are joined by '|' and the result is base64 encoded (URL safe alphabet), so it can be carried as a URL fragment.

Decoding is forgiving: tokens that cannot be parsed or that are not legal at that point of the game are skipped,
and a truncated payload yields whatever prefix of moves can still be recovered.
"""

import base64
import logging
import re
from typing import Iterable

from src.chess.moves import Move
from src.chess.position import GameState
from src.chess.rules import submit_move
from src.chess.square import Square
from src.core.exceptions import MalformedShareTokenError

logger = logging.getLogger(__name__)

SQUARE_SEPARATOR = "-"
MOVE_DELIMITER = "|"
TOKEN_PATTERN = re.compile(r"([a-h][1-8])-([a-h][1-8])")


def move_to_token(move: Move) -> str:
    return f"{move.from_square.to_algebraic()}{SQUARE_SEPARATOR}{move.to_square.to_algebraic()}"


def parse_token(token: str) -> tuple[Square, Square]:
    """'e2-e4' --> (Square e2, Square e4)"""
    match = TOKEN_PATTERN.fullmatch(token.strip())
    if match is None:
        raise MalformedShareTokenError(f"Cannot interpret {token!r} as a move.")
    from_alg, to_alg = match.groups()
    return Square.from_algebraic(from_alg), Square.from_algebraic(to_alg)


def serialize(history: Iterable[Move]) -> str:
    """Encode the moves played so far into an opaque share code."""
    joined = MOVE_DELIMITER.join(move_to_token(move) for move in history)
    return base64.urlsafe_b64encode(joined.encode("ascii")).decode("ascii")


def decode_payload(payload: str) -> str:
    """
    Undo the base64 step.

    A leading '#' (URL fragment) is ignored, and so are trailing characters that do not fill a complete base64 block
    (a truncated link). A payload that is not base64 at all (or not even ASCII) decodes to an empty move list.
    """
    code = payload.strip().lstrip("#")
    code = code[: len(code) - len(code) % 4]
    try:
        return base64.urlsafe_b64decode(code).decode("ascii")
    except ValueError as exc:
        logger.debug("Share code %r could not be decoded: %s", payload, exc)
        return ""


def deserialize(payload: str) -> GameState:
    """
    Rebuild a game from a share code
    ----

    Replays every token from the starting position. Skips (without failing):
    * tokens that do not follow the grammar
    * tokens that are not a legal move in the position reached so far
    """
    state = GameState.initial()
    for token in decode_payload(payload).split(MOVE_DELIMITER):
        if not token:
            continue

        try:
            from_square, to_square = parse_token(token)
        except MalformedShareTokenError as exc:
            logger.debug("Skipping share token: %s", exc)
            continue

        next_state = submit_move(state, from_square, to_square)
        if next_state is state:
            logger.debug("Skipping share token %r: not a legal move.", token)
            continue
        state = next_state
    return state
