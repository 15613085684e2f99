"""Exception hierarchy for the round engine."""

from __future__ import annotations


class GameError(RuntimeError):
    """Base class for rejected game actions."""


class IllegalActionError(GameError):
    """Raised when an action is out of phase or issued by the non-active player."""


class EmptyDeckError(GameError):
    """Raised when drawing from an empty deck."""


class EmptyPileError(GameError):
    """Raised when drawing from an empty discard pile."""


class InvalidCardError(GameError):
    """Raised when a card index does not reference a card in hand."""


class TurnInProgressError(IllegalActionError):
    """Raised when a bot turn is started while another one is still running."""


class SessionError(GameError):
    """Raised when a session is used without an active round."""
