"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status, TurnPhase

MAX_NAME_LENGTH = 50


# --- HTTP BODIES (the game ID travels in the path) ---
class JoinGameBody(BaseModel):
    player_name: str


class PlayerActionBody(BaseModel):
    player_id: UUID


class MovePieceBody(BaseModel):
    player_id: UUID
    piece_id: UUID


# --- REQUEST MODELS ---
class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidRequestError("Player name cannot be empty.")
        if len(name) > MAX_NAME_LENGTH:
            raise InvalidRequestError(
                f"Player name cannot be longer than {MAX_NAME_LENGTH} characters."
            )
        return name


class StartGameRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class RollDiceRequest(BaseModel):
    game_id: UUID
    player_id: UUID


class MovePieceRequest(BaseModel):
    game_id: UUID
    player_id: UUID
    piece_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_id: UUID


class PassTurnRequest(BaseModel):
    game_id: UUID
    player_id: UUID


# --- RESPONSE MODELS ---
class CreateGameResponse(BaseModel):
    game_id: UUID


class JoinGameResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    player_name: str
    turn_order: int


class StartGameResponse(BaseModel):
    game_id: UUID
    status: Status
    current_turn_index: int


class PieceResponse(BaseModel):
    piece_id: UUID
    position: int


class PlayerResponse(BaseModel):
    player_id: UUID
    player_name: str
    turn_order: int
    pieces: list[PieceResponse]


class GameStateResponse(BaseModel):
    game_id: UUID
    status: Status
    current_turn_index: Optional[int]
    last_dice_roll: Optional[int]
    phase: Optional[TurnPhase]
    players: list[PlayerResponse]


class RollDiceResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    dice_roll: int


class MovePieceResponse(BaseModel):
    game_id: UUID
    piece_id: UUID
    new_position: int
    current_turn_index: int


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    dice_roll: Optional[int]
    piece_ids: list[UUID]


class PassTurnResponse(BaseModel):
    game_id: UUID
    current_turn_index: int


class ErrorResponse(BaseModel):
    code: str
    message: str
