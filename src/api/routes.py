"""HTTP routes. Each handler only parses the request and hands it to the service."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_service
from src.api.models import (
    CreateGameResponse,
    GameStateResponse,
    GetGameRequest,
    JoinGameBody,
    JoinGameRequest,
    JoinGameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MovePieceBody,
    MovePieceRequest,
    MovePieceResponse,
    PassTurnRequest,
    PassTurnResponse,
    PlayerActionBody,
    RollDiceRequest,
    RollDiceResponse,
    StartGameRequest,
    StartGameResponse,
)
from src.services.ludo_service import LudoService

router = APIRouter(prefix="/games", tags=["games"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_game(service: LudoService = Depends(get_service)) -> CreateGameResponse:
    return service.create_new_game()


@router.post("/{game_id}/join")
def join_game(
    game_id: UUID, body: JoinGameBody, service: LudoService = Depends(get_service)
) -> JoinGameResponse:
    request = JoinGameRequest(game_id=game_id, player_name=body.player_name)
    return service.join_game(request)


@router.post("/{game_id}/start")
def start_game(
    game_id: UUID, service: LudoService = Depends(get_service)
) -> StartGameResponse:
    return service.start_game(StartGameRequest(game_id=game_id))


@router.get("/{game_id}/state")
def get_game_state(
    game_id: UUID, service: LudoService = Depends(get_service)
) -> GameStateResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.post("/{game_id}/roll-dice")
def roll_dice(
    game_id: UUID, body: PlayerActionBody, service: LudoService = Depends(get_service)
) -> RollDiceResponse:
    request = RollDiceRequest(game_id=game_id, player_id=body.player_id)
    return service.roll_dice(request)


@router.post("/{game_id}/move-piece")
def move_piece(
    game_id: UUID, body: MovePieceBody, service: LudoService = Depends(get_service)
) -> MovePieceResponse:
    request = MovePieceRequest(
        game_id=game_id, player_id=body.player_id, piece_id=body.piece_id
    )
    return service.move_piece(request)


@router.get("/{game_id}/legal-moves")
def legal_moves(
    game_id: UUID, player_id: UUID, service: LudoService = Depends(get_service)
) -> LegalMovesResponse:
    request = LegalMovesRequest(game_id=game_id, player_id=player_id)
    return service.legal_moves(request)


@router.post("/{game_id}/pass-turn")
def pass_turn(
    game_id: UUID, body: PlayerActionBody, service: LudoService = Depends(get_service)
) -> PassTurnResponse:
    request = PassTurnRequest(game_id=game_id, player_id=body.player_id)
    return service.pass_turn(request)
