"""Protocol repository (any storage backend offering these operations + a unit of work will do)."""

from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, PieceModel, PlayerModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def atomic(self) -> AbstractContextManager[None]:
        """
        Unit of work: everything written inside the block becomes visible together on exit, or not at all.
        Raises ConflictRaceError / StoreFailureError when the commit fails (after rolling back).
        """
        ...

    # --- GAMES ---
    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def get_game(self, game_id: UUID, for_update: bool = False) -> GameModel | None:
        """Get game by ID, if record exists. `for_update` locks the row until the unit of work ends (where supported)."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite status / turn fields of an existing record."""
        ...

    # --- PLAYERS ---
    def add_player(
        self, player: PlayerModel, piece_positions: list[int]
    ) -> tuple[PlayerModel, list[PieceModel]]:
        """Store a new player together with one piece per given position. Returns both with their new IDs."""
        ...

    def get_player(self, player_id: UUID) -> PlayerModel | None: ...

    def list_players(self, game_id: UUID) -> list[PlayerModel]:
        """Players of a game, ordered by turn order."""
        ...

    def count_players(self, game_id: UUID) -> int: ...

    # --- PIECES ---
    def get_piece(self, piece_id: UUID) -> PieceModel | None: ...

    def list_pieces(self, player_id: UUID) -> list[PieceModel]: ...

    def update_piece(self, piece: PieceModel) -> PieceModel | None:
        """Write the new position of an existing piece."""
        ...
