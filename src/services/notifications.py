"""
Outgoing notifications (game created, move made, game over).

The service only depends on the GameNotifier protocol, so a message queue / websocket broadcaster can be plugged in later.
"""

import logging
from typing import Callable, Protocol

from src.core.events import GameEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[GameEvent], None]


class GameNotifier(Protocol):
    def publish(self, event: GameEvent) -> None: ...


class CallbackNotifier:
    """Fan out every published event to the subscribed callbacks, in order of subscription."""

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        self._handlers.remove(handler)

    def publish(self, event: GameEvent) -> None:
        """A failing handler is logged and skipped: the event already happened, the other handlers still get it."""
        logger.debug("Publishing %r to %d handler(s)", event, len(self._handlers))
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed on %r", handler, event)
