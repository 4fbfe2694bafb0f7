"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import random
from typing import Optional
from uuid import UUID

from loguru import logger

from src.api.models import (
    CreateGameResponse,
    GameStateResponse,
    GetGameRequest,
    JoinGameRequest,
    JoinGameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MovePieceRequest,
    MovePieceResponse,
    PassTurnRequest,
    PassTurnResponse,
    PieceResponse,
    PlayerResponse,
    RollDiceRequest,
    RollDiceResponse,
    StartGameRequest,
    StartGameResponse,
)
from src.core.exceptions import (
    GameNotFoundError,
    LegalMoveAvailableError,
    NoRollYetError,
    PieceNotFoundError,
    PlayerNotFoundError,
)
from src.core.models import PieceModel, PlayerModel
from src.db.repository import GameRepository
from src.ludo import lobby, turn_engine
from src.ludo.capture import CaptureRule, NoCapture
from src.ludo.dice import build_rng
from src.ludo.game import Game, MovePending
from src.services.game_locks import GameLockRegistry


class LudoService:
    """
    Orchestration of layers for a Ludo game.
    ----

    Every operation on an existing game runs inside that game's lock, and every write inside one unit of work:
    lock -> hydrate -> rules -> persist -> commit -> unlock.
    """

    def __init__(
        self,
        repository: GameRepository,
        locks: Optional[GameLockRegistry] = None,
        rng: Optional[random.Random] = None,
        capture_rule: Optional[CaptureRule] = None,
    ) -> None:
        self.repo = repository
        self.locks = locks or GameLockRegistry()
        self.rng = rng or build_rng()
        self.capture_rule = capture_rule or NoCapture()

    # -- API routes logic ---
    def create_new_game(self) -> CreateGameResponse:
        """Open a new lobby."""
        new_game = Game.new_game()
        with self.repo.atomic():
            _, game_id = self.repo.create_game(new_game.to_model())
        logger.bind(game_id=str(game_id)).info("Created game")
        return CreateGameResponse(game_id=game_id)

    def join_game(self, request: JoinGameRequest) -> JoinGameResponse:
        """Seat a new player at the end of the turn order, with all pieces at home."""
        with self.locks.hold(request.game_id), self.repo.atomic():
            stored_model = self.repo.get_game(request.game_id, for_update=True)
            game = Game.from_model(stored_model) if stored_model else None
            turn_order = lobby.admit_player(
                game, self.repo.count_players(request.game_id)
            )
            player, _ = self.repo.add_player(
                PlayerModel(
                    game_id=request.game_id,
                    name=request.player_name,
                    turn_order=turn_order,
                ),
                lobby.starting_positions(),
            )

        # for the typechecker: the repository hands out the ID
        assert player.id is not None
        logger.bind(game_id=str(request.game_id)).info(
            "{} joined with turn order {}", player.name, turn_order
        )
        return JoinGameResponse(
            game_id=request.game_id,
            player_id=player.id,
            player_name=player.name,
            turn_order=turn_order,
        )

    def start_game(self, request: StartGameRequest) -> StartGameResponse:
        """Close the lobby. The first seat rolls first."""
        with self.locks.hold(request.game_id), self.repo.atomic():
            game = self._fetch_game(request.game_id, for_update=True)
            player_count = self.repo.count_players(request.game_id)
            lobby.start(game, player_count)
            self.repo.update_game(request.game_id, game.to_model())

        assert game.turn_index is not None
        logger.bind(game_id=str(request.game_id)).info(
            "Started game with {} players", player_count
        )
        return StartGameResponse(
            game_id=request.game_id,
            status=game.status,
            current_turn_index=game.turn_index,
        )

    def get_game_state(self, request: GetGameRequest) -> GameStateResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        Taken under the game's lock and read in one transaction, so a move is never seen half applied.
        """
        with self.locks.hold(request.game_id), self.repo.atomic():
            game = self._fetch_game(request.game_id)
            players = self.repo.list_players(request.game_id)
            pieces = {
                player.id: self.repo.list_pieces(player.id)
                for player in players
                if player.id is not None
            }
        return self._create_state_response(game, players, pieces)

    def roll_dice(self, request: RollDiceRequest) -> RollDiceResponse:
        """Turn player rolls. The result is kept on the game until the move is made."""
        with self.locks.hold(request.game_id), self.repo.atomic():
            game = self._fetch_game(request.game_id, for_update=True)
            player = self._fetch_player(request.game_id, request.player_id)
            dice_roll = turn_engine.roll_dice(game, player, self.rng)
            self.repo.update_game(request.game_id, game.to_model())

        logger.bind(game_id=str(request.game_id)).info(
            "{} rolled a {}", player.name, dice_roll
        )
        return RollDiceResponse(
            game_id=request.game_id, player_id=request.player_id, dice_roll=dice_roll
        )

    def move_piece(self, request: MovePieceRequest) -> MovePieceResponse:
        """
        Make a move attempt.
        ----

        The piece position, the cleared roll and the next turn index are committed together or not at all.
        """
        with self.locks.hold(request.game_id), self.repo.atomic():
            game = self._fetch_game(request.game_id, for_update=True)
            player = self._fetch_player(request.game_id, request.player_id)
            turn_engine.validate_turn_owner(game, player)
            piece = self._fetch_piece(request.piece_id)
            new_position = turn_engine.compute_move(game, player, piece)

            players = self.repo.list_players(request.game_id)
            opponent_pieces = self._opponent_pieces_at(players, player, new_position)
            piece.position = new_position
            captured = self.capture_rule.resolve(
                game, player, piece, new_position, opponent_pieces
            )
            next_index = turn_engine.finish_turn(game, len(players))

            self.repo.update_piece(piece)
            for opponent_piece in captured:
                self.repo.update_piece(opponent_piece)
            self.repo.update_game(request.game_id, game.to_model())

        logger.bind(game_id=str(request.game_id)).info(
            "{} moved piece {} to {}. Next turn: {}",
            player.name,
            request.piece_id,
            new_position,
            next_index,
        )
        return MovePieceResponse(
            game_id=request.game_id,
            piece_id=request.piece_id,
            new_position=new_position,
            current_turn_index=next_index,
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Pieces the turn player may move with the pending roll (none before rolling)."""
        with self.locks.hold(request.game_id), self.repo.atomic():
            game = self._fetch_game(request.game_id)
            player = self._fetch_player(request.game_id, request.player_id)
            pieces = self.repo.list_pieces(request.player_id)
            movable = turn_engine.movable_pieces(game, player, pieces)

        return LegalMovesResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            dice_roll=game.dice_roll,
            piece_ids=[piece.id for piece in movable if piece.id is not None],
        )

    def pass_turn(self, request: PassTurnRequest) -> PassTurnResponse:
        """Give up the owed move. Only allowed when none of the player's pieces can use the roll."""
        with self.locks.hold(request.game_id), self.repo.atomic():
            game = self._fetch_game(request.game_id, for_update=True)
            player = self._fetch_player(request.game_id, request.player_id)
            turn_engine.validate_turn_owner(game, player)
            if not isinstance(game.turn_state, MovePending):
                raise NoRollYetError("Roll the dice before passing.")

            pieces = self.repo.list_pieces(request.player_id)
            if turn_engine.movable_pieces(game, player, pieces):
                raise LegalMoveAvailableError(
                    "Cannot pass: at least one piece can move with this roll."
                )
            next_index = turn_engine.finish_turn(
                game, self.repo.count_players(request.game_id)
            )
            self.repo.update_game(request.game_id, game.to_model())

        logger.bind(game_id=str(request.game_id)).info(
            "{} passed. Next turn: {}", player.name, next_index
        )
        return PassTurnResponse(game_id=request.game_id, current_turn_index=next_index)

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID, for_update: bool = False) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id, for_update=for_update)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return Game.from_model(game_model)

    def _fetch_player(self, game_id: UUID, player_id: UUID) -> PlayerModel:
        """A player of another game is as unknown as a player that does not exist."""
        player = self.repo.get_player(player_id)
        if player is None or player.game_id != game_id:
            raise PlayerNotFoundError(
                f"Player with {player_id=} not found in game {game_id}."
            )
        return player

    def _fetch_piece(self, piece_id: UUID) -> PieceModel:
        piece = self.repo.get_piece(piece_id)
        if piece is None:
            raise PieceNotFoundError(f"Piece with {piece_id=} not found.")
        return piece

    def _opponent_pieces_at(
        self, players: list[PlayerModel], mover: PlayerModel, position: int
    ) -> list[PieceModel]:
        return [
            piece
            for player in players
            if player.id is not None and player.id != mover.id
            for piece in self.repo.list_pieces(player.id)
            if piece.position == position
        ]

    def _create_state_response(
        self,
        game: Game,
        players: list[PlayerModel],
        pieces: dict[UUID, list[PieceModel]],
    ) -> GameStateResponse:
        """Convert domain state to a GameStateResponse."""
        assert game.id is not None
        return GameStateResponse(
            game_id=game.id,
            status=game.status,
            current_turn_index=game.turn_index,
            last_dice_roll=game.dice_roll,
            phase=game.phase,
            players=[
                PlayerResponse(
                    player_id=player.id,
                    player_name=player.name,
                    turn_order=player.turn_order,
                    pieces=[
                        PieceResponse(piece_id=piece.id, position=piece.position)
                        for piece in pieces.get(player.id, [])
                    ],
                )
                for player in players
            ],
        )
