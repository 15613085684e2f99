"""Observer interface for round state changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from .state import RoundSnapshot

logger = logging.getLogger(__name__)


class RoundObserver:
    """Base class for consumers of round notifications. Override what you need."""

    def on_state_changed(self, snapshot: "RoundSnapshot") -> None:
        """Called after every successful action."""
        return None

    def on_turn_changed(self, player: int) -> None:
        """Called when the active player switches."""
        return None

    def on_knocked(self, player: int) -> None:
        """Called when a player knocks and the round ends."""
        return None


class ObserverRegistry:
    """Ordered set of observers. Notification order is subscription order.

    A failing observer is logged and skipped; the action that triggered the
    notification has already been applied and the remaining observers still run.
    """

    def __init__(self) -> None:
        self._observers: List[RoundObserver] = []

    def __len__(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: RoundObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: RoundObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def state_changed(self, snapshot: "RoundSnapshot") -> None:
        self._notify("on_state_changed", snapshot)

    def turn_changed(self, player: int) -> None:
        self._notify("on_turn_changed", player)

    def knocked(self, player: int) -> None:
        self._notify("on_knocked", player)

    def _notify(self, hook: str, payload: Any) -> None:
        for observer in list(self._observers):
            try:
                getattr(observer, hook)(payload)
            except Exception:
                logger.exception("Observer %r failed in %s.", observer, hook)
