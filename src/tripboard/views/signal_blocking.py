"""Context managers for widget signal blocking."""

from contextlib import contextmanager
import logging

from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)


@contextmanager
def block_signals(*widgets: QWidget):
    """Block signals on ``widgets`` for the duration; restored even on exception.

    Example:
        with block_signals(self.type_input, self.price_input):
            self.type_input.setCurrentText(point.type)
            self.price_input.setValue(point.base_price)
    """
    previous = []
    for widget in widgets:
        if widget is not None:
            previous.append((widget, widget.blockSignals(True)))

    try:
        yield
    finally:
        for widget, was_blocked in previous:
            widget.blockSignals(was_blocked)
