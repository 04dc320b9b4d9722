"""Container the point cards and forms are mounted into."""

from PyQt6.QtWidgets import QVBoxLayout

from tripboard.core import unmount

from .abstract_view import AbstractView


class PointListView(AbstractView):
    """Vertical list; items are mounted by presenters via ``core.render``."""

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

    @property
    def item_count(self) -> int:
        return self.layout().count()

    def items(self):
        """Mounted item widgets, top to bottom."""
        layout = self.layout()
        return [layout.itemAt(index).widget() for index in range(layout.count())]

    def clear(self) -> None:
        """Unmount every item still in the list."""
        for widget in self.items():
            unmount(widget)
