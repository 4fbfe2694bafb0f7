"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"


class TurnPhase(StrEnum):
    """Sub-state of a game in progress. Derived from the pending dice roll, never stored."""

    ROLL_PENDING = "roll_pending"
    MOVE_PENDING = "move_pending"
