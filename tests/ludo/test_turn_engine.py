"""Unit tests for src/ludo/turn_engine.py"""

from typing import Callable, Optional
from uuid import uuid4

import pytest

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
from src.ludo.dice import build_rng
from src.ludo.game import Game, MovePending, RollPending
from src.ludo.turn_engine import (
    advance_turn,
    compute_move,
    finish_turn,
    movable_pieces,
    roll_dice,
    validate_turn_owner,
)


# --- HELPERS ---
def running_game(turn_index: int = 1, dice_roll: Optional[int] = None) -> Game:
    return Game(
        status=Status.IN_PROGRESS,
        turn_index=turn_index,
        turn_state=MovePending(dice_roll) if dice_roll else RollPending(),
        id=uuid4(),
    )


def make_player(turn_order: int) -> PlayerModel:
    return PlayerModel(game_id=uuid4(), name=f"player {turn_order}", turn_order=turn_order, id=uuid4())


def piece_of(player: PlayerModel, position: int = 0) -> PieceModel:
    assert player.id is not None
    return PieceModel(owner_player_id=player.id, position=position, id=uuid4())


@pytest.fixture
def alice() -> PlayerModel:
    return make_player(1)


@pytest.fixture
def bob() -> PlayerModel:
    return make_player(2)


# --- TURN OWNERSHIP ---
def test_turn_owner_accepted(alice: PlayerModel) -> None:
    validate_turn_owner(running_game(turn_index=1), alice)


def test_other_seat_is_refused(bob: PlayerModel) -> None:
    with pytest.raises(NotYourTurnError):
        validate_turn_owner(running_game(turn_index=1), bob)


def test_waiting_game_has_no_turn_owner(alice: PlayerModel) -> None:
    with pytest.raises(GameNotInProgressError):
        validate_turn_owner(Game.new_game(), alice)


# --- ROLLING ---
def test_roll_is_remembered_without_advancing(alice: PlayerModel) -> None:
    game = running_game()
    value = roll_dice(game, alice, build_rng(seed=3))
    assert 1 <= value <= 6
    assert game.turn_state == MovePending(value)
    assert game.turn_index == 1


def test_roll_uses_the_injected_generator(
    alice: PlayerModel, loaded_dice: Callable
) -> None:
    game = running_game()
    assert roll_dice(game, alice, loaded_dice(4)) == 4
    assert game.dice_roll == 4


def test_out_of_turn_roll_changes_nothing(bob: PlayerModel) -> None:
    game = running_game(turn_index=1)
    with pytest.raises(NotYourTurnError):
        roll_dice(game, bob, build_rng())
    assert game.turn_state == RollPending()
    assert game.dice_roll is None


def test_roll_in_waiting_game_changes_nothing(alice: PlayerModel) -> None:
    game = Game.new_game()
    with pytest.raises(GameNotInProgressError):
        roll_dice(game, alice, build_rng())
    assert game.turn_state is None


def test_cannot_roll_twice(alice: PlayerModel, loaded_dice: Callable) -> None:
    game = running_game(dice_roll=2)
    with pytest.raises(MoveAlreadyOwedError):
        roll_dice(game, alice, loaded_dice(5))
    assert game.dice_roll == 2


# --- MOVING ---
def test_move_requires_a_roll(alice: PlayerModel) -> None:
    with pytest.raises(NoRollYetError):
        compute_move(running_game(), alice, piece_of(alice, 3))


def test_move_requires_turn(alice: PlayerModel, bob: PlayerModel) -> None:
    with pytest.raises(NotYourTurnError):
        compute_move(running_game(turn_index=1, dice_roll=6), bob, piece_of(bob, 3))


def test_cannot_move_someone_elses_piece(alice: PlayerModel, bob: PlayerModel) -> None:
    with pytest.raises(PieceNotOwnedError):
        compute_move(running_game(dice_roll=6), alice, piece_of(bob, 3))


@pytest.mark.parametrize("dice_roll", [1, 2, 3, 4, 5])
def test_home_piece_needs_a_six(alice: PlayerModel, dice_roll: int) -> None:
    with pytest.raises(MustRollSixToEnterError):
        compute_move(running_game(dice_roll=dice_roll), alice, piece_of(alice, 0))


def test_six_enters_on_first_square(alice: PlayerModel) -> None:
    assert compute_move(running_game(dice_roll=6), alice, piece_of(alice, 0)) == 1


@pytest.mark.parametrize(
    "position, dice_roll, expected",
    [(1, 1, 2), (1, 6, 7), (10, 3, 13), (57, 5, 62)],  # no upper bound on the track
)
def test_track_piece_advances_by_roll(
    alice: PlayerModel, position: int, dice_roll: int, expected: int
) -> None:
    game = running_game(dice_roll=dice_roll)
    piece = piece_of(alice, position)
    assert compute_move(game, alice, piece) == expected
    # computing a move is not making it
    assert piece.position == position
    assert game.dice_roll == dice_roll


# --- NEXT TURN ---
@pytest.mark.parametrize(
    "turn_index, player_count, expected",
    [(1, 2, 2), (2, 2, 1), (3, 4, 4), (4, 4, 1), (30, 30, 1)],
)
def test_advance_turn_wraps(turn_index: int, player_count: int, expected: int) -> None:
    assert advance_turn(running_game(turn_index=turn_index), player_count) == expected


@pytest.mark.parametrize("player_count", [2, 3, 7, 30])
def test_full_round_returns_to_start(player_count: int) -> None:
    """Advancing N times visits every seat once and lands on the original one."""
    game = running_game(turn_index=1)
    seen = []
    for _ in range(player_count):
        seen.append(finish_turn(game, player_count))
        assert 1 <= game.turn_index <= player_count  # type: ignore[operator]
    assert game.turn_index == 1
    assert sorted(seen) == list(range(1, player_count + 1))


def test_finish_turn_clears_roll() -> None:
    game = running_game(turn_index=2, dice_roll=6)
    assert finish_turn(game, 3) == 3
    assert game.turn_state == RollPending()


# --- LEGAL MOVES ---
def test_no_movable_pieces_before_rolling(alice: PlayerModel) -> None:
    assert movable_pieces(running_game(), alice, [piece_of(alice, 5)]) == []


def test_only_track_pieces_move_without_a_six(alice: PlayerModel) -> None:
    at_home = piece_of(alice, 0)
    on_track = piece_of(alice, 8)
    assert movable_pieces(running_game(dice_roll=2), alice, [at_home, on_track]) == [on_track]


def test_everything_moves_on_a_six(alice: PlayerModel) -> None:
    pieces = [piece_of(alice, 0), piece_of(alice, 4)]
    assert movable_pieces(running_game(dice_roll=6), alice, pieces) == pieces


def test_all_home_without_six_is_stuck(alice: PlayerModel) -> None:
    pieces = [piece_of(alice, 0) for _ in range(4)]
    assert movable_pieces(running_game(dice_roll=3), alice, pieces) == []
