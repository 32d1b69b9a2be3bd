"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the db layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer or API layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass

# Starting balance of a new player
INITIAL_COINS = 100


@dataclass
class ProgressModel:
    """Transport-safe representation of the player's progress, persisted as JSON in a key-value store."""

    wins: int = 0
    losses: int = 0
    draws: int = 0
    coins: int = INITIAL_COINS
