"""
The rules that turn pseudo-legal moves into a game.
----

* Legality filter: keep the moves that do not leave your own king attacked.
* Game status: check / checkmate / stalemate for the side to move.
* Committing a move: next board, turn, castling rights, en passant square, history and status.

All functions are pure: a new GameState is returned, the given one is never touched.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from src.chess.castling import CastlingRights, direction_for_rook_square
from src.chess.moves import Move, generate_moves, is_in_check
from src.chess.pieces import PieceType
from src.chess.position import GameState
from src.chess.square import Square, is_square_on_board


@dataclass(frozen=True)
class GameStatus:
    check: bool = False
    checkmate: bool = False
    stalemate: bool = False


# -- LEGALITY FILTER ---
def legal_moves(state: GameState, square: Square) -> list[Move]:
    """
    Legal moves of the piece standing on `square`
    ----

    1. generate pseudo-legal moves (incl. castling / en passant given the state's rights and en passant square)
    2. play each of them on a copy of the board
    3. keep those that do not leave (or put) your own king in check

    Only the side to move has legal moves, and squares off the board have none.
    """
    if not is_square_on_board(square):
        return []

    piece = state.board.piece(square)
    if piece is None or piece.color != state.turn:
        return []

    candidate_moves = generate_moves(
        state.board, square, state.en_passant_square, state.castling_rights
    )
    return [
        move
        for move in candidate_moves
        if not is_in_check(state.board.apply_move(move), piece.color)
    ]


def all_legal_moves(state: GameState) -> list[Move]:
    """Legal moves of every piece of the side to move"""
    return [
        move
        for square in state.board.locate_color(state.turn)
        for move in legal_moves(state, square)
    ]


def has_legal_moves(state: GameState) -> bool:
    """Stops at the first piece that can move"""
    return any(legal_moves(state, square) for square in state.board.locate_color(state.turn))


# -- GAME STATUS ---
def evaluate_status(state: GameState) -> GameStatus:
    """
    * check: your king is attacked
    * checkmate: check, and no legal move to get out of it
    * stalemate: not in check, but no legal move either
    """
    check = is_in_check(state.board, state.turn)
    can_move = has_legal_moves(state)
    return GameStatus(
        check=check,
        checkmate=check and not can_move,
        stalemate=not check and not can_move,
    )


def with_status(state: GameState) -> GameState:
    """Stamp the evaluated status onto the state"""
    status = evaluate_status(state)
    return replace(
        state,
        check=status.check,
        checkmate=status.checkmate,
        stalemate=status.stalemate,
    )


# -- COMMITTING MOVES ---
def revoke_castling_rights(rights: CastlingRights, move: Move) -> CastlingRights:
    """
    Checks which rights should get revoked
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If you are moving a rook away from its starting corner --> revoke the right in that direction
    3. If you are taking a rook on its starting corner --> revoke your opponent's right in that direction
    """
    if move.piece.type == PieceType.KING:
        rights = rights.revoke_all(move.piece.color)

    if move.piece.type == PieceType.ROOK:
        direction = direction_for_rook_square(move.from_square)
        if direction is not None and direction.color == move.piece.color:
            rights = rights.revoke(direction)

    if move.captured is not None and move.captured.type == PieceType.ROOK:
        direction = direction_for_rook_square(move.to_square)
        if direction is not None and direction.color == move.captured.color:
            rights = rights.revoke(direction)

    return rights


def next_en_passant_square(move: Move) -> Optional[Square]:
    """Only a pawn advancing two ranks leaves an en passant square behind: the one it skipped."""
    if move.piece.type != PieceType.PAWN:
        return None
    if abs(move.to_square.row - move.from_square.row) != 2:
        return None
    return Square(
        (move.from_square.row + move.to_square.row) // 2, move.from_square.col
    )


def commit_move(state: GameState, move: Move) -> GameState:
    """
    Play a move that is already known to be legal
    -----

    1. update the board
    2. pass the turn to the opponent
    3. update castling rights and en passant square
    4. update the history of moves
    5. update check / checkmate / stalemate for the new side to move
    """
    next_state = replace(
        state,
        board=state.board.apply_move(move),
        turn=state.turn.opponent,
        last_move=move,
        history=(*state.history, move),
        castling_rights=revoke_castling_rights(state.castling_rights, move),
        en_passant_square=next_en_passant_square(move),
    )
    return with_status(next_state)


def find_legal_move(
    state: GameState, from_square: Square, to_square: Square
) -> Optional[Move]:
    return next(
        (move for move in legal_moves(state, from_square) if move.to_square == to_square),
        None,
    )


def submit_move(state: GameState, from_square: Square, to_square: Square) -> GameState:
    """
    Attempt to make a move
    -----

    The requested squares are resolved against the legal moves of the piece on `from_square`.
    Not a legal move? Then nothing happens: the very same state is returned.
    """
    move = find_legal_move(state, from_square, to_square)
    if move is None:
        return state
    return commit_move(state, move)


def replay(moves: Iterable[tuple[Square, Square]]) -> GameState:
    """Play (from, to) pairs from the starting position. Pairs that are not legal at that point are skipped."""
    state = GameState.initial()
    for from_square, to_square in moves:
        state = submit_move(state, from_square, to_square)
    return state
