"""
Scoped keyboard subscriptions.

Instead of pairing install/remove calls by hand, callers acquire a
``KeySubscription`` token and release it on every exit path. Release is
idempotent, and a released token never invokes its handler again, even if
a key event was already in flight.

Usage:
    self._escape = KeyboardService.subscribe(Qt.Key.Key_Escape, self._on_escape)
    ...
    self._escape.release()  # safe to call any number of times
"""

from typing import Callable, Dict, List, Optional
import logging

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtWidgets import QApplication

logger = logging.getLogger(__name__)


class KeySubscription:
    """Cancellation token for one key handler."""

    def __init__(self, key: Qt.Key, handler: Callable[[], None], service: "KeyboardService"):
        self._key = key
        self._handler = handler
        self._service = service
        self._released = False

    @property
    def key(self) -> Qt.Key:
        return self._key

    @property
    def is_active(self) -> bool:
        return not self._released

    def fire(self) -> bool:
        """Invoke the handler unless released. Returns True if it ran."""
        if self._released:
            return False
        self._handler()
        return True

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._service._remove(self)


class _KeyPressFilter(QObject):
    """Application-wide event filter forwarding key presses to the service."""

    def __init__(self, service: "KeyboardService"):
        super().__init__()
        self._service = service

    def eventFilter(self, watched, event):
        if event.type() == QEvent.Type.KeyPress and not event.isAutoRepeat():
            if self._service.dispatch(event.key()):
                return True
        return super().eventFilter(watched, event)


class KeyboardService:
    """
    Registry of key subscriptions backed by a single application event filter.

    The filter is installed while at least one subscription is active and
    removed when the last one is released.
    """

    _subscriptions: Dict[int, List[KeySubscription]] = {}
    _filter: Optional[_KeyPressFilter] = None

    @classmethod
    def subscribe(cls, key: Qt.Key, handler: Callable[[], None]) -> KeySubscription:
        subscription = KeySubscription(key, handler, cls)
        cls._subscriptions.setdefault(key.value, []).append(subscription)
        cls._ensure_filter()
        logger.debug(f"[KEYS] Subscribed {key.name} ({cls.active_count()} active)")
        return subscription

    @classmethod
    def dispatch(cls, key_code: int) -> bool:
        """Deliver a key press to the most recent active subscriber.

        Returns:
            True if a handler consumed the key
        """
        subscribers = cls._subscriptions.get(key_code)
        if not subscribers:
            return False
        return subscribers[-1].fire()

    @classmethod
    def active_count(cls, key: Optional[Qt.Key] = None) -> int:
        if key is not None:
            return len(cls._subscriptions.get(key.value, []))
        return sum(len(subs) for subs in cls._subscriptions.values())

    @classmethod
    def _remove(cls, subscription: KeySubscription) -> None:
        subscribers = cls._subscriptions.get(subscription.key.value, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
        if not subscribers:
            cls._subscriptions.pop(subscription.key.value, None)
        logger.debug(f"[KEYS] Released {subscription.key.name} ({cls.active_count()} active)")
        if not cls._subscriptions:
            cls._remove_filter()

    @classmethod
    def _ensure_filter(cls) -> None:
        if cls._filter is not None:
            return
        app = QApplication.instance()
        if app is None:
            logger.warning("[KEYS] No QApplication instance; key events will not be delivered")
            return
        cls._filter = _KeyPressFilter(cls)
        app.installEventFilter(cls._filter)

    @classmethod
    def _remove_filter(cls) -> None:
        if cls._filter is None:
            return
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(cls._filter)
        cls._filter = None
