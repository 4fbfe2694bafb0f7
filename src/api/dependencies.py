"""FastAPI dependencies. Locks and the dice generator are shared by every request of the process."""

import random
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from src.core.config import get_settings
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.ludo.dice import build_rng
from src.services.game_locks import GameLockRegistry
from src.services.ludo_service import LudoService


@lru_cache
def get_lock_registry() -> GameLockRegistry:
    return GameLockRegistry(timeout_seconds=get_settings().lock_timeout_seconds)


@lru_cache
def get_rng() -> random.Random:
    return build_rng(get_settings().dice_seed)


def get_service(db: Session = Depends(get_db)) -> LudoService:
    return LudoService(
        SQLGameRepository(db), locks=get_lock_registry(), rng=get_rng()
    )
