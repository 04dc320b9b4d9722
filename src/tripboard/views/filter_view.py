"""Filter bar: Everything, Future, Present, Past."""

from typing import Dict

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QButtonGroup, QHBoxLayout, QRadioButton

from tripboard.models import FilterType

from .abstract_view import AbstractView


class FilterView(AbstractView):
    filter_type_changed = pyqtSignal(object)  # FilterType

    def __init__(self, current_filter: FilterType = FilterType.EVERYTHING, color_scheme=None, parent=None):
        self._current_filter = current_filter
        self.buttons: Dict[FilterType, QRadioButton] = {}
        super().__init__(color_scheme=color_scheme, parent=parent)

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._group = QButtonGroup(self)
        for filter_type in FilterType:
            button = QRadioButton(filter_type.label)
            button.setChecked(filter_type is self._current_filter)
            button.clicked.connect(lambda _checked, value=filter_type: self._on_clicked(value))
            self._group.addButton(button)
            layout.addWidget(button)
            self.buttons[filter_type] = button
        layout.addStretch()

    def set_current(self, filter_type: FilterType) -> None:
        """Reflect a filter change made elsewhere (no signal)."""
        self._current_filter = filter_type
        self.buttons[filter_type].setChecked(True)

    def _on_clicked(self, filter_type: FilterType) -> None:
        if filter_type is self._current_filter:
            return
        self._current_filter = filter_type
        self.filter_type_changed.emit(filter_type)
