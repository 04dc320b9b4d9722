"""Edit / create form for one point."""

from datetime import datetime
from typing import Dict, Optional

from PyQt6.QtCore import QDate, QDateTime, QTime, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox, QComboBox, QDateTimeEdit, QFormLayout, QHBoxLayout,
    QLabel, QPushButton, QSpinBox, QVBoxLayout, QWidget,
)

from tripboard.models import Point, POINT_TYPES, TripCatalog

from .abstract_view import AbstractStatefulView
from .signal_blocking import block_signals

MAX_PRICE = 100_000
DATETIME_FORMAT = "dd/MM/yy HH:mm"


def to_qdatetime(value: datetime) -> QDateTime:
    return QDateTime(QDate(value.year, value.month, value.day), QTime(value.hour, value.minute))


def from_qdatetime(value: QDateTime) -> datetime:
    date, time = value.date(), value.time()
    return datetime(date.year(), date.month(), date.day(), time.hour(), time.minute())


def _initial_state(point: Point) -> Dict:
    return {
        "point": point,
        "is_saving": False,
        "is_deleting": False,
        "is_disabled": False,
    }


class PointEditView(AbstractStatefulView):
    """
    Form bound to a draft copy of a point.

    State keys:
        point:       draft being edited (updated on every field change)
        is_saving:   submit in flight
        is_deleting: delete in flight
        is_disabled: all inputs locked

    ``reset(point)`` discards the draft and every pending flag.
    For a new point (``is_new``) the delete button reads "Cancel" and
    there is no rollup button.
    """

    form_submitted = pyqtSignal(object)  # Point draft
    delete_clicked = pyqtSignal(object)  # Point draft
    rollup_clicked = pyqtSignal()

    def __init__(self, point: Point, catalog: TripCatalog, is_new: bool = False, color_scheme=None, parent=None):
        self._catalog = catalog
        self._is_new = is_new
        self._offer_boxes: Dict[str, QCheckBox] = {}
        super().__init__(_initial_state(point), color_scheme=color_scheme, parent=parent)

    @property
    def draft(self) -> Point:
        return self._state["point"]

    @property
    def is_new(self) -> bool:
        return self._is_new

    @property
    def is_busy(self) -> bool:
        return self._state["is_saving"] or self._state["is_deleting"] or self._state["is_disabled"]

    def reset(self, point: Point) -> None:
        """Restore the form to ``point`` and clear pending flags."""
        self.update_element(**_initial_state(point))

    # ========== UI ==========

    def _setup_ui(self) -> None:
        scheme = self.color_scheme
        self.setStyleSheet(f"background-color: {scheme.to_hex(scheme.editor_bg)};")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        form = QFormLayout()
        self.type_input = QComboBox()
        self.type_input.addItems(POINT_TYPES)
        self.type_input.currentTextChanged.connect(self._on_type_changed)
        form.addRow("Type", self.type_input)

        self.destination_input = QComboBox()
        self.destination_input.addItem("", None)
        for destination in self._catalog.destinations:
            self.destination_input.addItem(destination.name, destination.id)
        self.destination_input.currentIndexChanged.connect(self._on_destination_changed)
        form.addRow("Destination", self.destination_input)

        self.date_from_input = QDateTimeEdit()
        self.date_from_input.setDisplayFormat(DATETIME_FORMAT)
        self.date_from_input.setCalendarPopup(True)
        self.date_from_input.dateTimeChanged.connect(self._on_date_from_changed)
        form.addRow("From", self.date_from_input)

        self.date_to_input = QDateTimeEdit()
        self.date_to_input.setDisplayFormat(DATETIME_FORMAT)
        self.date_to_input.setCalendarPopup(True)
        self.date_to_input.dateTimeChanged.connect(self._on_date_to_changed)
        form.addRow("To", self.date_to_input)

        self.price_input = QSpinBox()
        self.price_input.setRange(0, MAX_PRICE)
        self.price_input.setPrefix("€ ")
        self.price_input.valueChanged.connect(self._on_price_changed)
        form.addRow("Price", self.price_input)
        layout.addLayout(form)

        self.offers_container = QWidget()
        self.offers_layout = QVBoxLayout(self.offers_container)
        self.offers_layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.offers_container)

        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        layout.addWidget(self.description_label)

        self.error_label = QLabel()
        self.error_label.setStyleSheet(f"color: {scheme.to_hex(scheme.status_error)};")
        layout.addWidget(self.error_label)

        buttons = QHBoxLayout()
        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self._on_submit)
        buttons.addWidget(self.save_button)

        self.reset_button = QPushButton("Cancel" if self._is_new else "Delete")
        self.reset_button.clicked.connect(lambda: self.delete_clicked.emit(self.draft))
        buttons.addWidget(self.reset_button)

        self.rollup_button = QPushButton("▲")
        self.rollup_button.setToolTip("Close event")
        self.rollup_button.setVisible(not self._is_new)
        self.rollup_button.clicked.connect(lambda: self.rollup_clicked.emit())
        buttons.addWidget(self.rollup_button)
        buttons.addStretch()
        layout.addLayout(buttons)

    # ========== STATE → WIDGETS ==========

    def _apply_state(self, changed: set) -> None:
        if "point" in changed:
            self._fill_form(self._state["point"])
        self._apply_flags()

    def _fill_form(self, point: Point) -> None:
        with block_signals(self.type_input, self.destination_input, self.date_from_input,
                           self.date_to_input, self.price_input):
            self.type_input.setCurrentText(point.type)
            self.destination_input.setCurrentIndex(max(0, self.destination_input.findData(point.destination)))
            self.date_from_input.setDateTime(to_qdatetime(point.date_from))
            self.date_to_input.setDateTime(to_qdatetime(point.date_to))
            self.price_input.setValue(point.base_price)
        self._rebuild_offers(point)
        self._refresh_description(point)

    def _rebuild_offers(self, point: Point) -> None:
        for box in self._offer_boxes.values():
            self.offers_layout.removeWidget(box)
            box.deleteLater()
        self._offer_boxes = {}
        for offer in self._catalog.offers_for_type(point.type):
            box = QCheckBox(f"{offer.title} +€{offer.price}")
            box.setChecked(offer.id in point.offers)
            box.toggled.connect(lambda checked, offer_id=offer.id: self._on_offer_toggled(offer_id, checked))
            self.offers_layout.addWidget(box)
            self._offer_boxes[offer.id] = box
        self.offers_container.setVisible(bool(self._offer_boxes))

    def _refresh_description(self, point: Point) -> None:
        destination = self._catalog.destination_by_id(point.destination)
        self.description_label.setText(destination.description if destination else "")
        self.description_label.setVisible(bool(destination and destination.description))

    def _apply_flags(self) -> None:
        is_saving = self._state["is_saving"]
        is_deleting = self._state["is_deleting"]
        locked = self.is_busy

        for widget in (self.type_input, self.destination_input, self.date_from_input,
                       self.date_to_input, self.price_input, self.offers_container,
                       self.reset_button, self.rollup_button):
            widget.setEnabled(not locked)

        self.save_button.setText("Saving..." if is_saving else "Save")
        if not self._is_new:
            self.reset_button.setText("Deleting..." if is_deleting else "Delete")

        error = self.validation_error()
        self.error_label.setText(error or "")
        self.error_label.setVisible(error is not None)
        self.save_button.setEnabled(not locked and error is None)

    def validation_error(self) -> Optional[str]:
        """Reason the draft cannot be submitted, or None."""
        point = self.draft
        if point.destination is None:
            return "Choose a destination"
        if point.date_to < point.date_from:
            return "End must not be before start"
        return None

    # ========== WIDGETS → DRAFT ==========

    def _set_draft(self, **changes) -> None:
        self._state["point"] = self.draft.with_changes(**changes)
        self._apply_flags()

    def _on_type_changed(self, point_type: str) -> None:
        # Offers belong to a type; switching type clears the selection
        self._set_draft(type=point_type, offers=frozenset())
        self._rebuild_offers(self.draft)

    def _on_destination_changed(self, index: int) -> None:
        self._set_draft(destination=self.destination_input.itemData(index))
        self._refresh_description(self.draft)

    def _on_date_from_changed(self, value: QDateTime) -> None:
        self._set_draft(date_from=from_qdatetime(value))

    def _on_date_to_changed(self, value: QDateTime) -> None:
        self._set_draft(date_to=from_qdatetime(value))

    def _on_price_changed(self, value: int) -> None:
        self._set_draft(base_price=value)

    def _on_offer_toggled(self, offer_id: str, checked: bool) -> None:
        offers = set(self.draft.offers)
        if checked:
            offers.add(offer_id)
        else:
            offers.discard(offer_id)
        self._set_draft(offers=frozenset(offers))

    def _on_submit(self) -> None:
        if self.is_busy or self.validation_error() is not None:
            return
        self.form_submitted.emit(self.draft)
