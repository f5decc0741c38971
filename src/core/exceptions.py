"""
Custom exceptions, shared by all layers.

Every exception is a subclass of GameError, so the service (and whatever sits on top of it) can catch one type.
"""

from src.core.shared_types import RejectionReason


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game."""


class GameStateError(GameError):
    """The data describing a game cannot be interpreted (bad status name, unknown color, ...)"""


class SelfPlayNotAllowedError(GameError):
    """A game needs two different players."""


class GameNotActiveError(GameError):
    """Moves can only be submitted while the game is still active."""


class NotYourTurnError(GameError):
    """Player is either not registered for this game or has to wait for the opponent."""


class RepositoryError(GameError):
    """Record could not be found / stored."""


class InvalidRequestError(GameError):
    """
    Raised by request validators.
    NOTE not a ValueError on purpose: pydantic lets it through instead of wrapping it in a ValidationError.
    """


# --- MOVE REJECTIONS ---
class MoveRejectedError(GameError):
    """The legality check refused the move. `reason` tells exactly which check failed."""

    reason: RejectionReason

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.reason.value)


class OutOfBoundsError(MoveRejectedError):
    reason = RejectionReason.OUT_OF_BOUNDS


class EmptySourceError(MoveRejectedError):
    reason = RejectionReason.EMPTY_SOURCE


class WrongColorPieceError(MoveRejectedError):
    reason = RejectionReason.WRONG_COLOR_PIECE


class OwnPieceCaptureError(MoveRejectedError):
    reason = RejectionReason.OWN_PIECE_CAPTURE


class IllegalShapeError(MoveRejectedError):
    reason = RejectionReason.ILLEGAL_SHAPE


class PathBlockedError(MoveRejectedError):
    reason = RejectionReason.PATH_BLOCKED


REJECTION_ERRORS: dict[RejectionReason, type[MoveRejectedError]] = {
    error.reason: error
    for error in (
        OutOfBoundsError,
        EmptySourceError,
        WrongColorPieceError,
        OwnPieceCaptureError,
        IllegalShapeError,
        PathBlockedError,
    )
}


def rejection_error(reason: RejectionReason, message: str = "") -> MoveRejectedError:
    """Build the exception that belongs to a rejection reason."""
    return REJECTION_ERRORS[reason](message)
