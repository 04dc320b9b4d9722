"""Serialized mutation gate with a delayed blocking indicator."""

from collections import deque
from typing import Callable, Deque, Optional
import logging
import time

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from tripboard.config import get_board_config

logger = logging.getLogger(__name__)

Release = Callable[[], None]
Operation = Callable[[Release], None]


class ConcurrencyGate(QObject):
    """
    Runs view-mutating operations one at a time, in submission order.

    An operation is a callable receiving a ``release`` callback. It applies
    its optimistic UI state, starts the asynchronous call and must invoke
    ``release()`` exactly once when the call has completed (success or
    failure) and its continuation has run. Extra ``release()`` calls are
    ignored. The next queued operation starts only after release.

    Indicator timing:
    - resolved before ``lower_limit_ms``: indicator never shown
    - otherwise shown at ``lower_limit_ms`` and kept until at least
      ``upper_limit_ms`` after the block began, so it never flickers
    - still unresolved at ``upper_limit_ms``: logged as slow, indicator
      stays; the operation itself is never cancelled

    Usage:
        gate = ConcurrencyGate()
        gate.indicator_changed.connect(overlay.setVisible)

        def save(release):
            presenter.set_saving()
            model.update_point(kind, point,
                               on_success=lambda _: release(),
                               on_error=lambda e: (presenter.set_aborting(), release()))

        gate.submit(save)
    """

    indicator_changed = pyqtSignal(bool)

    def __init__(self, lower_limit_ms: Optional[int] = None, upper_limit_ms: Optional[int] = None, parent=None):
        super().__init__(parent)
        config = get_board_config()
        self._lower_limit_ms = config.lower_limit_ms if lower_limit_ms is None else lower_limit_ms
        self._upper_limit_ms = config.upper_limit_ms if upper_limit_ms is None else upper_limit_ms
        if self._upper_limit_ms < self._lower_limit_ms:
            raise ValueError(
                f"upper_limit_ms ({self._upper_limit_ms}) must be >= lower_limit_ms ({self._lower_limit_ms})"
            )

        self._queue: Deque[Operation] = deque()
        self._busy = False
        self._indicator_visible = False
        self._block_started_at = 0.0

        self._show_timer = self._single_shot_timer(self._on_lower_limit)
        self._slow_timer = self._single_shot_timer(self._on_upper_limit)
        self._hide_timer = self._single_shot_timer(self._hide_indicator)

    def _single_shot_timer(self, handler: Callable[[], None]) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(handler)
        return timer

    # ========== PUBLIC API ==========

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def is_indicator_visible(self) -> bool:
        return self._indicator_visible

    @property
    def pending_count(self) -> int:
        """Operations submitted but not yet started."""
        return len(self._queue)

    def submit(self, operation: Operation) -> None:
        """Queue an operation; it starts immediately if the gate is idle."""
        self._queue.append(operation)
        if self._busy:
            logger.debug(f"[GATE] Busy, queued operation ({len(self._queue)} pending)")
            return
        self._start_next()

    # ========== SCHEDULING ==========

    def _start_next(self) -> None:
        while self._queue and not self._busy:
            operation = self._queue.popleft()
            self._busy = True
            self._block()
            release = self._make_release()
            try:
                operation(release)
            except Exception:
                # An operation that fails to start must not wedge the gate
                release()
                raise

    def _make_release(self) -> Release:
        released = False

        def release() -> None:
            nonlocal released
            if released:
                logger.debug("[GATE] Ignoring repeated release")
                return
            released = True
            self._busy = False
            self._unblock()
            self._start_next()

        return release

    # ========== INDICATOR TIMING ==========

    def _block(self) -> None:
        self._block_started_at = time.monotonic()
        if self._hide_timer.isActive():
            # Previous indicator still inside its minimum display window: keep it
            self._hide_timer.stop()
        if not self._indicator_visible:
            self._show_timer.start(self._lower_limit_ms)
        self._slow_timer.start(self._upper_limit_ms)

    def _unblock(self) -> None:
        self._show_timer.stop()
        self._slow_timer.stop()
        if not self._indicator_visible:
            return

        elapsed_ms = (time.monotonic() - self._block_started_at) * 1000
        remaining_ms = int(self._upper_limit_ms - elapsed_ms)
        if remaining_ms > 0:
            self._hide_timer.start(remaining_ms)
        else:
            self._hide_indicator()

    def _on_lower_limit(self) -> None:
        if not self._busy:
            return
        self._indicator_visible = True
        logger.debug(f"[GATE] Operation exceeded {self._lower_limit_ms}ms, showing indicator")
        self.indicator_changed.emit(True)

    def _on_upper_limit(self) -> None:
        if self._busy:
            logger.warning(f"[GATE] Operation still pending after {self._upper_limit_ms}ms")

    def _hide_indicator(self) -> None:
        if self._busy or not self._indicator_visible:
            return
        self._indicator_visible = False
        self.indicator_changed.emit(False)
