"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class GameModel:
    """Transport-safe representation of a game record."""

    status: str
    current_turn_index: Optional[int] = None
    last_dice_roll: Optional[int] = None
    id: Optional[UUID] = None


@dataclass
class PlayerModel:
    game_id: UUID
    name: str
    turn_order: int
    id: Optional[UUID] = None


@dataclass
class PieceModel:
    owner_player_id: UUID
    position: int = 0
    id: Optional[UUID] = None

