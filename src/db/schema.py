"""Database tables / schema"""

from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.shared_types import Status


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint(
            "last_dice_roll IS NULL OR (last_dice_roll BETWEEN 1 AND 6)",
            name="ck_games_dice_roll",
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True)
    status: Mapped[str] = mapped_column(default=Status.WAITING)
    current_turn_index: Mapped[Optional[int]]
    last_dice_roll: Mapped[Optional[int]]


class DBPlayer(Base):
    __tablename__ = "players"
    # turn order is dense and unique per game: two concurrent joins cannot take the same seat
    __table_args__ = (
        UniqueConstraint("game_id", "turn_order", name="uq_players_game_turn_order"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"), index=True)
    name: Mapped[str]
    turn_order: Mapped[int]


class DBPiece(Base):
    __tablename__ = "pieces"
    __table_args__ = (CheckConstraint("position >= 0", name="ck_pieces_position"),)

    id: Mapped[UUID] = mapped_column(primary_key=True)
    owner_player_id: Mapped[UUID] = mapped_column(
        ForeignKey("players.id"), index=True
    )
    position: Mapped[int] = mapped_column(default=0)
