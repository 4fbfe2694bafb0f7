"""Lobby rules: who may join a game and when it may start."""

from typing import Optional

from src.core.exceptions import (
    GameAlreadyStartedError,
    GameFullError,
    NotJoinableError,
    TooFewPlayersError,
)
from src.core.shared_types import Status
from src.ludo.game import Game
from src.ludo.rules import HOME_POSITION, MAX_PLAYERS, MIN_PLAYERS, PIECES_PER_PLAYER


def admit_player(game: Optional[Game], player_count: int) -> int:
    """Check the game accepts one more player and return the turn order the newcomer gets."""
    if game is None or game.status != Status.WAITING:
        raise NotJoinableError("Game not found or has already started.")
    if player_count >= MAX_PLAYERS:
        raise GameFullError(f"Game is full ({MAX_PLAYERS} players).")
    return player_count + 1


def starting_positions() -> list[int]:
    """Every newcomer gets PIECES_PER_PLAYER pieces, all at home."""
    return [HOME_POSITION] * PIECES_PER_PLAYER


def start(game: Game, player_count: int) -> None:
    """Quorum check, then waiting -> in progress. Starting twice is refused."""
    if game.status != Status.WAITING:
        raise GameAlreadyStartedError(f"Game {game.id} has already started.")
    if player_count < MIN_PLAYERS:
        raise TooFewPlayersError(
            f"Cannot start a game with fewer than {MIN_PLAYERS} players."
        )
    game.start()
