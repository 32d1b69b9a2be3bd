"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define pseudo-legal move sets for each piece type.
Every strategy runs in one of two modes:

* MOVES: "where can this piece go?" (pawn pushes, captures, en passant, castling)
* ATTACKS: "which squares does this piece threaten?" (no castling, no pawn pushes, pawns always report both diagonals)

The attack query (`is_square_attacked`) only ever runs the ATTACKS mode, so castling safety checks never recurse.

Legality is checked later (see rules.py)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Protocol

from src.chess.castling import (
    CASTLING_RULES,
    CastlingDirection,
    CastlingRights,
    CastlingSide,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def locate_color(self, color: Color) -> list[Square]: ...
    def find_king(self, color: Color) -> Optional[Square]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """
    A move fully determines the next board, given the board it was generated from.

    `piece` is the moving piece as it was before the move (a promoting pawn is still a pawn here).
    For en passant, `captured` is the pawn that got passed, which does NOT stand on `to_square`.
    """

    from_square: Square
    to_square: Square
    piece: Piece
    captured: Optional[Piece] = None
    castling: Optional[CastlingSide] = None
    is_en_passant: bool = False

    def to_uci(self) -> str:
        """Convert into UCI notation (promotion is implied: always a queen)"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


class GenerationMode(Enum):
    MOVES = auto()
    ATTACKS = auto()


@dataclass(frozen=True)
class GenerationContext:
    """Everything a movement strategy may look at."""

    board: Board
    mode: GenerationMode = GenerationMode.MOVES
    en_passant_square: Optional[Square] = None
    castling_rights: CastlingRights = CastlingRights.none()

    @property
    def attack_only(self) -> bool:
        return self.mode == GenerationMode.ATTACKS


# --- DIRECTIONS ---
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_JUMPS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]

# White moves UP the board (increasing row), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, context: GenerationContext, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. An opponent's piece ends the ray with a capture, an own piece just ends it.

    Empty squares are reported in both modes: a square a slider reaches is a square it attacks.
    """
    board = context.board
    piece = board.piece(square)
    assert piece is not None

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_on_board():
            occupant = board.piece(target_square)
            if occupant is not None:
                if occupant.color != piece.color:
                    moves.append(Move(square, target_square, piece, captured=occupant))
                break

            moves.append(Move(square, target_square, piece))
            target_square = target_square.offset(d_row, d_col)
    return moves


def single_step_move(
    square: Square, context: GenerationContext, deltas: list[Vector]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    board = context.board
    piece = board.piece(square)
    assert piece is not None

    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_on_board():
            continue

        occupant = board.piece(target_square)
        if occupant is None:
            moves.append(Move(square, target_square, piece))
        elif occupant.color != piece.color:
            moves.append(Move(square, target_square, piece, captured=occupant))
    return moves


def candidate_pawn_moves(square: Square, context: GenerationContext) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank)
    - takes diagonally (also en passant)

    NOTE: moving forward is not an attack, so in ATTACKS mode only the two diagonals are reported, occupied or not.
    """
    board = context.board
    pawn = board.piece(square)
    assert pawn is not None
    direction = PAWN_DIRECTION[pawn.color]

    moves: list[Move] = []
    if not context.attack_only:
        one_forward = square.offset(direction, 0)
        if one_forward.is_on_board() and board.piece(one_forward) is None:
            moves.append(Move(square, one_forward, pawn))
            two_forward = square.offset(2 * direction, 0)
            if (
                square.row == PAWN_START_ROW[pawn.color]
                and board.piece(two_forward) is None
            ):
                moves.append(Move(square, two_forward, pawn))

    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        if not target_square.is_on_board():
            continue

        if context.attack_only:
            moves.append(Move(square, target_square, pawn))
            continue

        occupant = board.piece(target_square)
        if occupant is not None:
            if occupant.color != pawn.color:
                moves.append(Move(square, target_square, pawn, captured=occupant))
        elif target_square == context.en_passant_square:
            moves.extend(en_passant_moves(square, target_square, context))
    return moves


def en_passant_moves(
    square: Square, target_square: Square, context: GenerationContext
) -> list[Move]:
    """
    The pawn that gets taken stands beside the moving pawn: same rank as the moving pawn, same file as the en passant square.
    """
    pawn = context.board.piece(square)
    assert pawn is not None
    passed_square = Square(square.row, target_square.col)
    passed_pawn = context.board.piece(passed_square)
    if (
        passed_pawn is None
        or passed_pawn.type != PieceType.PAWN
        or passed_pawn.color == pawn.color
    ):
        return []
    return [
        Move(
            square,
            target_square,
            pawn,
            captured=passed_pawn,
            is_en_passant=True,
        )
    ]


def candidate_knight_moves(square: Square, context: GenerationContext) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, context, KNIGHT_JUMPS)


def candidate_bishop_moves(square: Square, context: GenerationContext) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, context, DIAGONALS)


def candidate_rook_moves(square: Square, context: GenerationContext) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, context, STRAIGHTS)


def candidate_queen_moves(square: Square, context: GenerationContext) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, context, STRAIGHTS + DIAGONALS)


def candidate_king_moves(square: Square, context: GenerationContext) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (never in ATTACKS mode).
    """
    moves = single_step_move(square, context, STRAIGHTS + DIAGONALS)
    if not context.attack_only:
        moves.extend(candidate_castling_moves(square, context))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, GenerationContext], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def generate_moves(
    board: Board,
    square: Square,
    en_passant_square: Optional[Square] = None,
    castling_rights: Optional[CastlingRights] = None,
    mode: GenerationMode = GenerationMode.MOVES,
) -> list[Move]:
    """Pseudo-legal moves of the piece on `square` (an empty square has none)."""
    piece = board.piece(square)
    if piece is None:
        return []

    context = GenerationContext(
        board=board,
        mode=mode,
        en_passant_square=en_passant_square,
        castling_rights=castling_rights or CastlingRights.none(),
    )
    movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
    return movement_rule(square, context)


def attacked_squares(board: Board, square: Square) -> list[Square]:
    """The squares the piece on `square` threatens."""
    return [
        move.to_square
        for move in generate_moves(board, square, mode=GenerationMode.ATTACKS)
    ]


# --- ATTACK QUERIES ---
def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """
    Is any piece of `by_color` threatening `square`?

    NOTE: Raw reachability. Whether the attacker could legally make that move (pinned pieces etc.) is ignored.
    """
    return any(
        square in attacked_squares(board, origin)
        for origin in board.locate_color(by_color)
    )


def is_in_check(board: Board, color: Color) -> bool:
    """A board without that king (not reachable in a real game) is never in check."""
    king_square = board.find_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color.opponent)


# -- CASTLING MOVES ---
def candidate_castling_moves(
    square: Square, context: GenerationContext
) -> list[Move]:
    """
    You are allowed to castle if
    ---

    * Castling rights are not yet revoked (and king and rook are standing on their squares).
    * All squares in between king and rook are empty.
    * The king is not in check, and does not pass through an attacked square.

    NOTE the square the king lands on is checked by the legality filter, as for any other king move.
    """
    board = context.board
    king = board.piece(square)
    assert king is not None
    opponent_color = king.color.opponent

    moves: list[Move] = []
    for side in CastlingSide:
        if not context.castling_rights.has(king.color, side):
            continue

        rule = CASTLING_RULES[CastlingDirection.of(king.color, side)]
        if square != rule.king_from:
            continue

        rook = board.piece(rule.rook_from)
        if rook is None or rook.type != PieceType.ROOK or rook.color != king.color:
            continue

        if any(board.piece(between) is not None for between in rule.must_be_empty):
            continue

        if is_square_attacked(board, rule.king_from, opponent_color):
            continue

        if is_square_attacked(board, rule.king_passes, opponent_color):
            continue

        moves.append(Move(rule.king_from, rule.king_to, king, castling=side))
    return moves
