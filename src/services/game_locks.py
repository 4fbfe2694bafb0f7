"""Per-game mutual exclusion. Requests on different games never wait for each other."""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator
from uuid import UUID

from loguru import logger

from src.core.exceptions import GameBusyError

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass
class _GameLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0  # holder plus waiters


class GameLockRegistry:
    """
    One lock per game ID.
    ----

    An entry lives only while some request holds or waits for it, so IDs of unknown or finished games are not kept.
    """

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.timeout_seconds = timeout_seconds
        self._locks: dict[UUID, _GameLock] = {}
        self._registry_lock = threading.Lock()  # protects _locks and the user counts

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    def is_held(self, game_id: UUID) -> bool:
        with self._registry_lock:
            entry = self._locks.get(game_id)
            return entry is not None and entry.lock.locked()

    def _checkout(self, game_id: UUID) -> _GameLock:
        with self._registry_lock:
            entry = self._locks.setdefault(game_id, _GameLock())
            entry.users += 1
            return entry

    def _checkin(self, game_id: UUID, entry: _GameLock) -> None:
        with self._registry_lock:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[game_id]

    @contextmanager
    def hold(self, game_id: UUID) -> Iterator[None]:
        """Exclusive access to one game for the duration of the block. Raises GameBusyError on timeout."""
        entry = self._checkout(game_id)
        try:
            if not entry.lock.acquire(timeout=self.timeout_seconds):
                logger.warning(
                    "Timed out after {}s waiting for game {}",
                    self.timeout_seconds,
                    game_id,
                )
                raise GameBusyError(
                    f"Game {game_id} is busy handling another request. Try again."
                )
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(game_id, entry)
