"""
Demo application: the board wired to an in-memory backend.

    tripboard --latency 0.6 --fail-every 3 --log-level DEBUG
"""

from typing import List, Optional
import argparse
import logging
import sys

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QApplication, QHBoxLayout, QMainWindow, QPushButton, QScrollArea, QVBoxLayout, QWidget,
)

from tripboard.config import BoardConfig, get_board_config, set_board_config
from tripboard.core import ConcurrencyGate
from tripboard.logging_config import setup_logging
from tripboard.models import FilterModel, FilterType, PointsModel, UpdateType, demo_api
from tripboard.presenters import BoardPresenter
from tripboard.theming import ColorScheme
from tripboard.views import BlockerOverlay, FilterView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Header (filters, New event) above a scrollable board."""

    def __init__(self, points_model: PointsModel, filter_model: FilterModel,
                 color_scheme: Optional[ColorScheme] = None):
        super().__init__()
        self.setWindowTitle("Trip board")
        self.resize(720, 640)
        self._points_model = points_model
        self._filter_model = filter_model
        self._color_scheme = color_scheme or ColorScheme()

        central = QWidget()
        layout = QVBoxLayout(central)

        header = QHBoxLayout()
        self.filter_view = FilterView(filter_model.filter, color_scheme=self._color_scheme)
        self.filter_view.filter_type_changed.connect(self._on_filter_changed)
        header.addWidget(self.filter_view, 1)
        self.new_event_button = QPushButton("New event")
        self.new_event_button.setEnabled(False)
        header.addWidget(self.new_event_button)
        layout.addLayout(header)

        self.board_container = QWidget()
        board_layout = QVBoxLayout(self.board_container)
        board_layout.setContentsMargins(0, 0, 0, 0)
        board_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.board_container)
        layout.addWidget(scroll, 1)
        self.setCentralWidget(central)

        self.gate = ConcurrencyGate(parent=self)
        self.overlay = BlockerOverlay(central, color_scheme=self._color_scheme)
        self.gate.indicator_changed.connect(self.overlay.set_active)

        self.board = BoardPresenter(
            self.board_container,
            points_model,
            filter_model,
            on_create_trigger_changed=self.new_event_button.setEnabled,
            gate=self.gate,
            color_scheme=self._color_scheme,
        )
        self.new_event_button.clicked.connect(self._on_new_event)
        filter_model.add_observer(self._sync_filter_view)
        points_model.add_observer(self._enable_creation_after_load)

    def start(self) -> None:
        self.board.init()
        self._points_model.init()

    def _on_filter_changed(self, filter_type: FilterType) -> None:
        self._filter_model.set_filter(UpdateType.MAJOR, filter_type)

    def _on_new_event(self) -> None:
        self.board.create_point()

    def _sync_filter_view(self, _update_type: UpdateType, filter_type: FilterType) -> None:
        # create_point() resets the filter from inside the board
        self.filter_view.set_current(filter_type)

    def _enable_creation_after_load(self, update_type: UpdateType, _payload=None) -> None:
        if update_type is UpdateType.INIT:
            self.new_event_button.setEnabled(self.board.is_create_trigger_enabled)
            self._points_model.remove_observer(self._enable_creation_after_load)

    def closeEvent(self, event):
        self._filter_model.remove_observer(self._sync_filter_view)
        self.board.destroy()
        self._points_model.runner.cleanup()
        super().closeEvent(event)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tripboard", description="Trip points board demo")
    parser.add_argument("--latency", type=float, default=0.5,
                        help="Simulated backend latency in seconds (default: 0.5)")
    parser.add_argument("--fail-every", type=int, default=0,
                        help="Reject every Nth mutation (0 disables)")
    parser.add_argument("--fail-load", action="store_true",
                        help="Make the initial load fail")
    parser.add_argument("--log-level", default=None, help="Logging level (default from BoardConfig)")
    parser.add_argument("--log-file", default=None, help="Optional log file path")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_board_config()
    set_board_config(BoardConfig(
        lower_limit_ms=config.lower_limit_ms,
        upper_limit_ms=config.upper_limit_ms,
        log_level=args.log_level or config.log_level,
        log_file=args.log_file or config.log_file,
    ))
    setup_logging()

    app = QApplication.instance() or QApplication(sys.argv[:1])
    api = demo_api(latency_s=args.latency, fail_every=args.fail_every, fail_load=args.fail_load)
    window = MainWindow(PointsModel(api), FilterModel())
    window.show()
    window.start()
    logger.info("Trip board started")
    return app.exec()
