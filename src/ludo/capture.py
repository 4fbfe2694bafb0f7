"""
Extension point for capturing opponent pieces.

Capturing is not part of the rules yet. The service calls the configured rule right before committing a move,
handing it the opponent pieces standing on the destination. A rule may change those pieces (e.g. send them home);
the service persists whatever it returns in the same unit of work as the move.
"""

from typing import Protocol

from src.core.models import PieceModel, PlayerModel
from src.ludo.game import Game


class CaptureRule(Protocol):
    def resolve(
        self,
        game: Game,
        mover: PlayerModel,
        piece: PieceModel,
        destination: int,
        opponent_pieces: list[PieceModel],
    ) -> list[PieceModel]:
        """Return the opponent pieces that were changed and must be persisted."""
        ...


class NoCapture:
    """Pieces share squares freely."""

    def resolve(
        self,
        game: Game,
        mover: PlayerModel,
        piece: PieceModel,
        destination: int,
        opponent_pieces: list[PieceModel],
    ) -> list[PieceModel]:
        return []
