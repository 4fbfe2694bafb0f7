"""
Custom exceptions shared across layers.

Every exception carries a stable `code` so the API layer can report it without inspecting the message.
The intermediate classes group them by how a caller should react (terminal rule violation vs. retryable).
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a game."""

    code = "GAME_ERROR"


# --- REQUEST / RECORD INTEGRITY ---
class InvalidRequestError(GameError):
    code = "INVALID_REQUEST"


class GameStateError(GameError):
    """A stored record could not be turned into a consistent Game."""

    code = "INCONSISTENT_GAME_STATE"


# --- NOT FOUND ---
class NotFoundError(GameError):
    code = "NOT_FOUND"


class GameNotFoundError(NotFoundError):
    code = "GAME_NOT_FOUND"


class NotJoinableError(NotFoundError):
    code = "GAME_NOT_JOINABLE"


class GameNotInProgressError(NotFoundError):
    code = "GAME_NOT_IN_PROGRESS"


class PlayerNotFoundError(NotFoundError):
    code = "PLAYER_NOT_FOUND"


class PieceNotFoundError(NotFoundError):
    code = "PIECE_NOT_FOUND"


class PieceNotOwnedError(NotFoundError):
    code = "PIECE_NOT_OWNED"


# --- PRECONDITIONS ---
class PreconditionFailedError(GameError):
    code = "PRECONDITION_FAILED"


class NotYourTurnError(PreconditionFailedError):
    code = "NOT_YOUR_TURN"


class NoRollYetError(PreconditionFailedError):
    code = "NO_ROLL_YET"


class MustRollSixToEnterError(PreconditionFailedError):
    code = "MUST_ROLL_SIX_TO_ENTER"


class MoveAlreadyOwedError(PreconditionFailedError):
    code = "MOVE_ALREADY_OWED"


class LegalMoveAvailableError(PreconditionFailedError):
    code = "LEGAL_MOVE_AVAILABLE"


class GameAlreadyStartedError(PreconditionFailedError):
    code = "GAME_ALREADY_STARTED"


# --- CAPACITY ---
class CapacityExceededError(GameError):
    code = "CAPACITY_EXCEEDED"


class GameFullError(CapacityExceededError):
    code = "GAME_FULL"


class TooFewPlayersError(CapacityExceededError):
    code = "TOO_FEW_PLAYERS"


# --- RETRYABLE ---
class ConflictRaceError(GameError):
    """Another request holds (or just changed) the same game. Safe to retry."""

    code = "CONFLICT"


class GameBusyError(ConflictRaceError):
    code = "GAME_BUSY"


class ConcurrentUpdateError(ConflictRaceError):
    code = "CONCURRENT_UPDATE"


class StoreFailureError(GameError):
    """Persistence unavailable or the transaction got aborted. Nothing was written."""

    code = "STORE_FAILURE"
