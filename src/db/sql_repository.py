"""Implementation of (Game)Repository using SQLAlchemy"""

from contextlib import contextmanager
from typing import Iterator
from uuid import UUID, uuid4

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import ConcurrentUpdateError, StoreFailureError
from src.core.models import GameModel, PieceModel, PlayerModel
from src.db.schema import DBGame, DBPiece, DBPlayer


class SQLGameRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy

    Writes only flush. Nothing is committed outside of `atomic()`.
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Rolled back on integrity error: {}", exc.orig)
            raise ConcurrentUpdateError(
                "The game was changed by another request. Try again."
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Rolled back on store failure")
            raise StoreFailureError("Could not save the game.") from exc
        except BaseException:
            self.db.rollback()
            raise

    # --- GAMES ---
    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            status=game.status,
            current_turn_index=game.current_turn_index,
            last_dice_roll=game.last_dice_roll,
        )
        self.db.add(game_db)
        self.db.flush()
        return self._game_to_model(game_db), new_id

    def get_game(self, game_id: UUID, for_update: bool = False) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id, for_update)
        if game_db:
            return self._game_to_model(game_db)
        return None

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite status / turn fields of an existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.status = game.status
        game_db.current_turn_index = game.current_turn_index
        game_db.last_dice_roll = game.last_dice_roll
        self.db.flush()
        return self._game_to_model(game_db)

    # --- PLAYERS ---
    def add_player(
        self, player: PlayerModel, piece_positions: list[int]
    ) -> tuple[PlayerModel, list[PieceModel]]:
        player_db = DBPlayer(
            id=uuid4(),
            game_id=player.game_id,
            name=player.name,
            turn_order=player.turn_order,
        )
        self.db.add(player_db)
        # the player row must exist before the pieces referencing it
        self.db.flush()
        pieces_db = [
            DBPiece(id=uuid4(), owner_player_id=player_db.id, position=position)
            for position in piece_positions
        ]
        self.db.add_all(pieces_db)
        self.db.flush()
        return self._player_to_model(player_db), [
            self._piece_to_model(piece_db) for piece_db in pieces_db
        ]

    def get_player(self, player_id: UUID) -> PlayerModel | None:
        player_db = self.db.get(DBPlayer, player_id)
        if player_db:
            return self._player_to_model(player_db)
        return None

    def list_players(self, game_id: UUID) -> list[PlayerModel]:
        query = (
            select(DBPlayer)
            .where(DBPlayer.game_id == game_id)
            .order_by(DBPlayer.turn_order)
        )
        return [self._player_to_model(player_db) for player_db in self.db.scalars(query)]

    def count_players(self, game_id: UUID) -> int:
        query = select(func.count()).select_from(DBPlayer).where(DBPlayer.game_id == game_id)
        return self.db.scalar(query) or 0

    # --- PIECES ---
    def get_piece(self, piece_id: UUID) -> PieceModel | None:
        piece_db = self.db.get(DBPiece, piece_id)
        if piece_db:
            return self._piece_to_model(piece_db)
        return None

    def list_pieces(self, player_id: UUID) -> list[PieceModel]:
        query = (
            select(DBPiece)
            .where(DBPiece.owner_player_id == player_id)
            .order_by(DBPiece.id)
        )
        return [self._piece_to_model(piece_db) for piece_db in self.db.scalars(query)]

    def update_piece(self, piece: PieceModel) -> PieceModel | None:
        if piece.id is None:
            return None
        piece_db = self.db.get(DBPiece, piece.id)
        if not piece_db:
            return None
        piece_db.position = piece.position
        self.db.flush()
        return self._piece_to_model(piece_db)

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID, for_update: bool = False) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        if for_update:
            # fresh values, not whatever the identity map cached before the lock was taken
            query = query.with_for_update().execution_options(populate_existing=True)
        return self.db.scalar(query)

    def _game_to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            status=game_db.status,
            current_turn_index=game_db.current_turn_index,
            last_dice_roll=game_db.last_dice_roll,
            id=game_db.id,
        )

    def _player_to_model(self, player_db: DBPlayer) -> PlayerModel:
        return PlayerModel(
            game_id=player_db.game_id,
            name=player_db.name,
            turn_order=player_db.turn_order,
            id=player_db.id,
        )

    def _piece_to_model(self, piece_db: DBPiece) -> PieceModel:
        return PieceModel(
            owner_player_id=piece_db.owner_player_id,
            position=piece_db.position,
            id=piece_db.id,
        )
