"""Semi-transparent overlay that swallows input while the gate indicator is up."""

from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtWidgets import QWidget

from tripboard.theming import ColorScheme


class BlockerOverlay(QWidget):
    """
    Covers its parent widget and tracks its size.

    Usage:
        overlay = BlockerOverlay(main_window.centralWidget())
        gate.indicator_changed.connect(overlay.set_active)
    """

    def __init__(self, parent: QWidget, color_scheme: ColorScheme = None):
        super().__init__(parent)
        scheme = color_scheme or ColorScheme()
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"background-color: {scheme.to_rgba_css(scheme.blocker_bg)};")
        self.setCursor(Qt.CursorShape.WaitCursor)
        parent.installEventFilter(self)
        self.setGeometry(parent.rect())
        self.hide()

    def set_active(self, active: bool) -> None:
        if active:
            self.setGeometry(self.parentWidget().rect())
            self.raise_()
            self.show()
        else:
            self.hide()

    def eventFilter(self, watched, event):
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self.setGeometry(watched.rect())
        return super().eventFilter(watched, event)

    def mousePressEvent(self, event):
        event.accept()
