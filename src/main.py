"""FastAPI application"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.api.errors import handle_game_error
from src.api.routes import router
from src.core.config import get_settings
from src.core.exceptions import GameError
from src.core.logging import setup_logging
from src.db.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging(get_settings().log_level)
    init_db()
    logger.info("Ludo Royale API is up")
    try:
        yield
    finally:
        logger.info("Stop server")


app = FastAPI(title="Ludo Royale", lifespan=lifespan)
app.add_exception_handler(GameError, handle_game_error)
app.include_router(router)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Ludo Royale API is up and running!"
