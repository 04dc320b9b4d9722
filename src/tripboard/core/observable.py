"""Minimal observer channel shared by the points and filter models."""

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Observer = Callable[[Any, Any], None]


class Observable:
    """
    Plain-callback observer list.

    Observers are called in subscription order with ``(update_type, payload)``.
    Delivery is synchronous and FIFO; an observer added twice is called once.
    """

    def __init__(self):
        self._observers: List[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            return
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, update_type: Any, payload: Any = None) -> None:
        """Deliver one notification to every observer."""
        logger.debug(f"{type(self).__name__} notify {update_type} -> {len(self._observers)} observer(s)")
        # Snapshot so observers may unsubscribe while being notified
        for observer in list(self._observers):
            observer(update_type, payload)
