"""Translate domain exceptions into HTTP responses."""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from src.api.models import ErrorResponse
from src.core.exceptions import (
    CapacityExceededError,
    ConflictRaceError,
    GameError,
    GameStateError,
    InvalidRequestError,
    NotFoundError,
    NotYourTurnError,
    PreconditionFailedError,
    StoreFailureError,
)

# looked up along the exception's MRO: the most specific entry wins
ERROR_STATUS: dict[type[GameError], int] = {
    NotYourTurnError: 403,
    NotFoundError: 404,
    PreconditionFailedError: 400,
    CapacityExceededError: 400,
    InvalidRequestError: 422,
    ConflictRaceError: 409,
    StoreFailureError: 503,
    GameStateError: 500,
}


def status_code_for(exc: GameError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


async def handle_game_error(request: Request, exc: Exception) -> JSONResponse:
    # for the type checker: only registered for GameError
    assert isinstance(exc, GameError)
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("{} {} failed: {}", request.method, request.url.path, exc)
    else:
        logger.warning(
            "{} {} rejected ({}): {}", request.method, request.url.path, exc.code, exc
        )
    body = ErrorResponse(code=exc.code, message=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())
