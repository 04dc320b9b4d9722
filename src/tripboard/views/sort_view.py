"""Sort bar: Day, Event, Time, Price, Offers."""

from typing import Dict

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QButtonGroup, QHBoxLayout, QRadioButton

from tripboard.models import SortType

from .abstract_view import AbstractView


class SortView(AbstractView):
    """Radio buttons for every SortType; criteria without an ordering are disabled."""

    sort_type_changed = pyqtSignal(object)  # SortType

    def __init__(self, current_sort_type: SortType = SortType.DAY, color_scheme=None, parent=None):
        self._current_sort_type = current_sort_type
        self.buttons: Dict[SortType, QRadioButton] = {}
        super().__init__(color_scheme=color_scheme, parent=parent)

    @property
    def current_sort_type(self) -> SortType:
        return self._current_sort_type

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._group = QButtonGroup(self)
        for sort_type in SortType:
            button = QRadioButton(sort_type.label)
            button.setEnabled(sort_type.is_sortable)
            button.setChecked(sort_type is self._current_sort_type)
            button.clicked.connect(lambda _checked, value=sort_type: self._on_clicked(value))
            self._group.addButton(button)
            layout.addWidget(button)
            self.buttons[sort_type] = button
        layout.addStretch()

    def _on_clicked(self, sort_type: SortType) -> None:
        if not sort_type.is_sortable:
            return
        self.sort_type_changed.emit(sort_type)
