"""Board-level message banners: loading, load failure, empty list."""

from enum import Enum
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QVBoxLayout

from tripboard.models import FilterType

from .abstract_view import AbstractView


class BoardMessage(Enum):
    """Fixed banner texts."""
    LOADING = "Loading..."
    ERROR = "Failed to load latest route information"


class MessageView(AbstractView):
    """Centered single-line message."""

    def __init__(self, text: str, color_scheme=None, parent=None):
        self._text = text
        super().__init__(color_scheme=color_scheme, parent=parent)

    @property
    def text(self) -> str:
        return self._text

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        self.label = QLabel(self._text)
        self.label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.label)


class LoadingView(MessageView):
    def __init__(self, color_scheme=None, parent=None):
        super().__init__(BoardMessage.LOADING.value, color_scheme=color_scheme, parent=parent)


class ErrorView(MessageView):
    def __init__(self, color_scheme=None, parent=None):
        super().__init__(BoardMessage.ERROR.value, color_scheme=color_scheme, parent=parent)
        scheme = self.color_scheme
        self.label.setStyleSheet(f"color: {scheme.to_hex(scheme.status_error)};")


class EmptyListView(MessageView):
    """Shown when no point passes the active filter."""

    def __init__(self, filter_type: FilterType = FilterType.EVERYTHING, color_scheme=None, parent=None):
        self.filter_type: Optional[FilterType] = filter_type
        super().__init__(filter_type.empty_message, color_scheme=color_scheme, parent=parent)
