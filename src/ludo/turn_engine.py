"""
Turn rules: whose turn it is, rolling the die, where a piece lands, and who plays next.

All functions work on an already hydrated snapshot (Game + players + pieces).
They never touch storage; the service layer decides when the outcome gets persisted.
"""

import random

from src.core.exceptions import (
    GameNotInProgressError,
    MoveAlreadyOwedError,
    MustRollSixToEnterError,
    NoRollYetError,
    NotYourTurnError,
    PieceNotOwnedError,
)
from src.core.models import PieceModel, PlayerModel
from src.core.shared_types import Status
from src.ludo.dice import roll_die
from src.ludo.game import Game, MovePending
from src.ludo.rules import ENTRY_ROLL, HOME_POSITION, TRACK_START


def validate_turn_owner(game: Game, player: PlayerModel) -> None:
    """Only the player seated at the current turn index may act, and only while the game is running."""
    if game.status != Status.IN_PROGRESS:
        raise GameNotInProgressError(
            f"Game {game.id} is not in progress. status: {game.status}"
        )
    if player.turn_order != game.turn_index:
        raise NotYourTurnError(
            f"It is not your turn. Waiting for the player with turn order {game.turn_index}."
        )


def roll_dice(game: Game, player: PlayerModel, rng: random.Random) -> int:
    """
    Roll for the turn player and remember the result until the move is made.
    ----

    Does NOT advance the turn. A second roll before moving is refused.
    """
    validate_turn_owner(game, player)
    if isinstance(game.turn_state, MovePending):
        raise MoveAlreadyOwedError(
            f"Already rolled a {game.turn_state.dice_roll}. Move a piece first."
        )
    value = roll_die(rng)
    game.record_roll(value)
    return value


def compute_move(game: Game, player: PlayerModel, piece: PieceModel) -> int:
    """
    Destination of `piece` for the pending roll.
    ----

    * A piece at home only enters on a six, and the six is spent putting it on the first track square.
    * Any other piece advances by the roll.
    * Positions are not bounded: there is no finish line or wrap-around (yet).
    """
    validate_turn_owner(game, player)
    if not isinstance(game.turn_state, MovePending):
        raise NoRollYetError("Roll the dice before moving a piece.")
    if piece.owner_player_id != player.id:
        raise PieceNotOwnedError(f"Piece {piece.id} does not belong to you.")

    dice_roll = game.turn_state.dice_roll
    at_home = piece.position == HOME_POSITION
    if at_home and dice_roll != ENTRY_ROLL:
        raise MustRollSixToEnterError(
            f"Rolled a {dice_roll}. A piece only leaves home on a {ENTRY_ROLL}."
        )

    if at_home:
        return TRACK_START
    return piece.position + dice_roll


def advance_turn(game: Game, player_count: int) -> int:
    """Next seat, wrapping back to 1 after the last player."""
    # for the type checker: only called on a game in progress
    assert game.turn_index is not None
    return (game.turn_index % player_count) + 1


def finish_turn(game: Game, player_count: int) -> int:
    """Clear the pending roll and hand the turn to the next seat (one single state change)."""
    next_index = advance_turn(game, player_count)
    game.end_turn(next_index)
    return next_index


def movable_pieces(
    game: Game, player: PlayerModel, pieces: list[PieceModel]
) -> list[PieceModel]:
    """Pieces compute_move would accept right now. Empty while no roll is pending."""
    validate_turn_owner(game, player)
    if not isinstance(game.turn_state, MovePending):
        return []
    legal: list[PieceModel] = []
    for piece in pieces:
        try:
            compute_move(game, player, piece)
        except (MustRollSixToEnterError, PieceNotOwnedError):
            continue
        legal.append(piece)
    return legal
