"""
Layout-friendly horizontal shake.

Moving a widget that lives in a layout is undone on the next layout pass,
so the shake offsets the widget's contents margins instead. The original
margins are restored when the animation ends or is stopped.
"""

import math
from typing import Callable, Optional
import logging

from PyQt6.QtCore import QObject, QVariantAnimation
from PyQt6.QtWidgets import QWidget

from .shake_config import ShakeConfig, get_shake_config

logger = logging.getLogger(__name__)


class ShakeAnimation(QObject):
    """
    Plays one damped horizontal shake on a widget.

    Usage:
        shake = ShakeAnimation(view)
        shake.start(on_finished=lambda: view.update_element(is_disabled=False))
    """

    def __init__(self, widget: QWidget, config: Optional[ShakeConfig] = None):
        super().__init__(widget)
        self._widget = widget
        self._config = config or get_shake_config()
        self._base_margins = None
        self._on_finished: Optional[Callable[[], None]] = None

        self._animation = QVariantAnimation(self)
        self._animation.setStartValue(0.0)
        self._animation.setEndValue(1.0)
        self._animation.setDuration(self._config.duration_ms)
        self._animation.valueChanged.connect(self._apply_progress)
        self._animation.finished.connect(self._finish)

    @property
    def is_running(self) -> bool:
        return self._animation.state() == QVariantAnimation.State.Running

    def start(self, on_finished: Optional[Callable[[], None]] = None) -> None:
        """Start (or restart) the shake."""
        if self.is_running:
            self._animation.stop()
            self._restore_margins()
        self._on_finished = on_finished
        self._base_margins = self._widget.contentsMargins()
        self._animation.start()

    def stop(self) -> None:
        if self.is_running:
            self._animation.stop()
            self._finish()

    def _offset_for(self, progress: float) -> int:
        damping = 1.0 - progress
        swing = math.sin(progress * self._config.oscillations * 2 * math.pi)
        return round(self._config.amplitude_px * damping * swing)

    def _apply_progress(self, progress) -> None:
        if self._base_margins is None:
            return
        offset = self._offset_for(float(progress))
        base = self._base_margins
        # Shift content sideways without changing the widget's total width
        self._widget.setContentsMargins(
            max(0, base.left() + offset),
            base.top(),
            max(0, base.right() - offset),
            base.bottom(),
        )

    def _restore_margins(self) -> None:
        if self._base_margins is not None:
            self._widget.setContentsMargins(self._base_margins)
            self._base_margins = None

    def _finish(self) -> None:
        self._restore_margins()
        callback, self._on_finished = self._on_finished, None
        if callback:
            callback()
