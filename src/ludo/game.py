"""
The Game class is the domain view of a stored game record.

The record only holds a nullable dice roll; here it becomes an explicit turn state
(RollPending / MovePending), so a game in progress is always in exactly one of the two phases
and a waiting game is in neither.
"""

from dataclasses import dataclass
from typing import Optional, Self
from uuid import UUID

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import Status, TurnPhase
from src.ludo.dice import is_valid_roll


@dataclass(frozen=True)
class RollPending:
    """The turn player still has to roll."""


@dataclass(frozen=True)
class MovePending:
    """The turn player rolled and owes exactly one move."""

    dice_roll: int


TurnState = RollPending | MovePending


@dataclass
class Game:
    status: Status
    turn_index: Optional[int] = None
    turn_state: Optional[TurnState] = None
    id: Optional[UUID] = None

    @classmethod
    def new_game(cls) -> Self:
        return cls(status=Status.WAITING)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Build a Game from a stored record, refusing combinations the state machine cannot reach."""
        try:
            status = Status(model.status)
        except ValueError as exc:
            raise GameStateError(
                f"Invalid status: {model.status!r}. Pick one from {', '.join(Status)}"
            ) from exc

        if status == Status.WAITING:
            if model.current_turn_index is not None or model.last_dice_roll is not None:
                raise GameStateError(
                    f"Waiting game {model.id} cannot have a turn index or a dice roll."
                )
            return cls(status=status, id=model.id)

        if model.current_turn_index is None or model.current_turn_index < 1:
            raise GameStateError(
                f"Game {model.id} is in progress without a valid turn index: {model.current_turn_index!r}"
            )

        turn_state: TurnState
        if model.last_dice_roll is None:
            turn_state = RollPending()
        elif is_valid_roll(model.last_dice_roll):
            turn_state = MovePending(model.last_dice_roll)
        else:
            raise GameStateError(
                f"Game {model.id} holds an impossible dice roll: {model.last_dice_roll}"
            )
        return cls(
            status=status,
            turn_index=model.current_turn_index,
            turn_state=turn_state,
            id=model.id,
        )

    def to_model(self) -> GameModel:
        return GameModel(
            status=str(self.status),
            current_turn_index=self.turn_index,
            last_dice_roll=self.dice_roll,
            id=self.id,
        )

    @property
    def phase(self) -> Optional[TurnPhase]:
        if isinstance(self.turn_state, MovePending):
            return TurnPhase.MOVE_PENDING
        if isinstance(self.turn_state, RollPending):
            return TurnPhase.ROLL_PENDING
        return None

    @property
    def dice_roll(self) -> Optional[int]:
        if isinstance(self.turn_state, MovePending):
            return self.turn_state.dice_roll
        return None

    # --- TRANSITIONS ---
    def start(self) -> None:
        """waiting -> in progress, first seat to roll."""
        self.status = Status.IN_PROGRESS
        self.turn_index = 1
        self.turn_state = RollPending()

    def record_roll(self, value: int) -> None:
        """ROLL_PENDING -> MOVE_PENDING."""
        self.turn_state = MovePending(value)

    def end_turn(self, next_index: int) -> None:
        """MOVE_PENDING -> ROLL_PENDING for the next seat."""
        self.turn_index = next_index
        self.turn_state = RollPending()
