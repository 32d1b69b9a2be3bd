"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class Outcome(StrEnum):
    """A concluded game, from the point of view of the local player (who plays White)."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
