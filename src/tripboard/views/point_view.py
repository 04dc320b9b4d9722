"""Read-only card for one point in the list."""

from datetime import timedelta
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from tripboard.models import Point, TripCatalog

from .abstract_view import AbstractView


def humanize_duration(duration: timedelta) -> str:
    """Format as ``01D 02H 30M``, dropping leading zero units."""
    total_minutes = max(0, int(duration.total_seconds() // 60))
    days, remainder = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(remainder, 60)
    if days:
        return f"{days:02d}D {hours:02d}H {minutes:02d}M"
    if hours:
        return f"{hours:02d}H {minutes:02d}M"
    return f"{minutes:02d}M"


class PointView(AbstractView):
    """Display card: date, type and destination, times, price, offers, favorite star."""

    edit_clicked = pyqtSignal()
    favorite_clicked = pyqtSignal()

    def __init__(self, point: Point, catalog: TripCatalog, color_scheme=None, parent=None):
        self._point = point
        self._catalog = catalog
        super().__init__(color_scheme=color_scheme, parent=parent)

    @property
    def point(self) -> Point:
        return self._point

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        scheme = self.color_scheme
        point = self._point

        destination = self._catalog.destination_by_id(point.destination)
        destination_name = destination.name if destination else ""

        self.date_label = QLabel(point.date_from.strftime("%b %d").upper())
        layout.addWidget(self.date_label)

        details = QVBoxLayout()
        self.title_label = QLabel(f"{point.type.capitalize()} {destination_name}".strip())
        details.addWidget(self.title_label)
        self.schedule_label = QLabel(
            f"{point.date_from:%H:%M} - {point.date_to:%H:%M} ({humanize_duration(point.duration)})"
        )
        self.schedule_label.setStyleSheet(f"color: {scheme.to_hex(scheme.text_secondary)};")
        details.addWidget(self.schedule_label)
        offers = self._catalog.selected_offers(point)
        self.offers_label = QLabel("\n".join(f"+ {offer.title} €{offer.price}" for offer in offers))
        self.offers_label.setVisible(bool(offers))
        details.addWidget(self.offers_label)
        layout.addLayout(details, 1)

        self.price_label = QLabel(f"€ {point.base_price}")
        layout.addWidget(self.price_label)

        self.favorite_button = QPushButton("★")
        self.favorite_button.setCheckable(True)
        self.favorite_button.setChecked(point.is_favorite)
        star_color = scheme.favorite if point.is_favorite else scheme.favorite_inactive
        self.favorite_button.setStyleSheet(f"color: {scheme.to_hex(star_color)};")
        self.favorite_button.setToolTip("Add to favorites")
        # Checked state follows the committed point, not the click
        self.favorite_button.clicked.connect(self._on_favorite_clicked)
        layout.addWidget(self.favorite_button)

        self.rollup_button = QPushButton("▼")
        self.rollup_button.setToolTip("Open event")
        self.rollup_button.clicked.connect(lambda: self.edit_clicked.emit())
        layout.addWidget(self.rollup_button)

    def _on_favorite_clicked(self, _checked: Optional[bool] = None) -> None:
        self.favorite_button.setChecked(self._point.is_favorite)
        self.favorite_clicked.emit()
