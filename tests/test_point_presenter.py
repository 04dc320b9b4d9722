"""Tests for the per-item presenter and its edit session."""

import pytest
from PyQt6.QtCore import Qt

from tripboard.core import KeyboardService, is_mounted
from tripboard.models import Mode, UpdateType, UserAction
from tripboard.presenters import PointPresenter, PresenterStateError
from tripboard.views import PointListView

from conftest import make_point


class Recorder:
    def __init__(self):
        self.data_changes = []
        self.mode_changes = 0
        self.order = []

    def on_data_change(self, action, update_type, point):
        self.data_changes.append((action, update_type, point))

    def on_mode_change(self):
        self.mode_changes += 1
        self.order.append("mode_change")


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def list_view(qapp):
    view = PointListView()
    yield view
    view.deleteLater()


@pytest.fixture
def point():
    return make_point("p1", price=100)


@pytest.fixture
def presenter(list_view, recorder, point, catalog):
    presenter = PointPresenter(list_view, recorder.on_data_change, recorder.on_mode_change)
    presenter.init(point, catalog)
    yield presenter
    presenter.destroy()


def _escape():
    return KeyboardService.dispatch(Qt.Key.Key_Escape.value)


def test_init_mounts_card(presenter, list_view, point):
    assert presenter.mode is Mode.DEFAULT
    assert presenter.point == point
    assert list_view.items() == [presenter.session.point_view]


def test_edit_click_notifies_board_then_opens_editor(presenter, list_view, recorder):
    session = presenter.session
    original_open = session.open

    def open_and_record():
        recorder.order.append("open")
        original_open()

    session.open = open_and_record
    session.point_view.edit_clicked.emit()

    assert recorder.order == ["mode_change", "open"]
    assert presenter.mode is Mode.EDITING
    assert list_view.items() == [session.edit_view]
    assert session.has_escape_subscription


def test_edit_click_while_editing_is_ignored(presenter, recorder):
    presenter.session.point_view.edit_clicked.emit()
    presenter.session.point_view.edit_clicked.emit()

    assert recorder.mode_changes == 1


def test_escape_closes_editor(presenter, list_view):
    presenter.session.point_view.edit_clicked.emit()

    assert _escape() is True

    assert presenter.mode is Mode.DEFAULT
    assert list_view.items() == [presenter.session.point_view]
    assert KeyboardService.active_count() == 0


def test_cancel_discards_draft(presenter, point):
    session = presenter.session
    session.point_view.edit_clicked.emit()
    session.edit_view.price_input.setValue(999)

    session.edit_view.rollup_clicked.emit()

    assert presenter.mode is Mode.DEFAULT
    assert session.edit_view.draft == point
    assert not session.has_escape_subscription


def test_submit_requests_update_with_draft(presenter, recorder):
    session = presenter.session
    session.point_view.edit_clicked.emit()
    session.edit_view.price_input.setValue(150)

    session.edit_view.save_button.click()

    action, update_type, draft = recorder.data_changes[-1]
    assert (action, update_type) == (UserAction.UPDATE_POINT, UpdateType.MINOR)
    assert draft.base_price == 150
    assert presenter.point.base_price == 100


def test_delete_requests_committed_point(presenter, recorder, point):
    session = presenter.session
    session.point_view.edit_clicked.emit()
    session.edit_view.price_input.setValue(5)

    session.edit_view.reset_button.click()

    assert recorder.data_changes == [(UserAction.DELETE_POINT, UpdateType.MINOR, point)]


def test_favorite_toggle_request(presenter, recorder, point):
    presenter.session.point_view.favorite_button.click()

    action, update_type, requested = recorder.data_changes[-1]
    assert action is UserAction.UPDATE_POINT
    assert update_type is UpdateType.MINOR
    assert requested == point.with_changes(is_favorite=True)
    assert presenter.mode is Mode.DEFAULT


def test_set_saving_outside_editing_is_noop(presenter):
    presenter.set_saving()
    presenter.set_deleting()

    assert presenter.session.edit_view.is_busy is False


def test_set_saving_and_aborting_while_editing(presenter):
    session = presenter.session
    session.point_view.edit_clicked.emit()
    session.edit_view.price_input.setValue(321)

    presenter.set_saving()
    assert session.edit_view.state["is_saving"]
    assert session.edit_view.state["is_disabled"]

    presenter.set_aborting()
    state = session.edit_view.state
    assert not state["is_saving"] and not state["is_disabled"]
    assert session.edit_view.draft.base_price == 321
    assert session.edit_view.is_shaking
    assert presenter.mode is Mode.EDITING


def test_delete_failure_clears_all_flags(presenter):
    """Rollback after a failed delete leaves the form fully usable."""
    presenter.session.point_view.edit_clicked.emit()

    presenter.set_deleting()
    assert presenter.session.edit_view.state["is_deleting"]
    presenter.set_aborting()

    state = presenter.session.edit_view.state
    assert not state["is_deleting"]
    assert not state["is_disabled"]
    assert presenter.session.edit_view.reset_button.text() == "Delete"


def test_aborting_in_default_mode_shakes_card(presenter):
    presenter.set_aborting()

    assert presenter.session.point_view.is_shaking
    assert presenter.mode is Mode.DEFAULT


def test_reinit_replaces_card_in_place(list_view, recorder, catalog, point):
    neighbours = [PointPresenter(list_view, recorder.on_data_change, recorder.on_mode_change)
                  for _ in range(2)]
    neighbours[0].init(make_point("n0"), catalog)
    presenter = PointPresenter(list_view, recorder.on_data_change, recorder.on_mode_change)
    presenter.init(point, catalog)
    neighbours[1].init(make_point("n1"), catalog)

    updated = point.with_changes(base_price=555)
    presenter.init(updated, catalog)

    assert list_view.items()[1] is presenter.session.point_view
    assert list_view.item_count == 3
    assert presenter.session.point_view.price_label.text() == "€ 555"


def test_reinit_while_editing_closes_editor(presenter, list_view, point, catalog):
    presenter.session.point_view.edit_clicked.emit()
    assert KeyboardService.active_count() == 1

    presenter.init(point.with_changes(is_favorite=True), catalog)

    assert presenter.mode is Mode.DEFAULT
    assert list_view.items() == [presenter.session.point_view]
    assert KeyboardService.active_count() == 0


def test_destroy_is_idempotent(presenter, list_view, point, catalog):
    presenter.session.point_view.edit_clicked.emit()
    edit_view = presenter.session.edit_view

    presenter.destroy()
    presenter.destroy()

    assert presenter.is_destroyed
    assert list_view.item_count == 0
    assert not is_mounted(edit_view)
    assert KeyboardService.active_count() == 0
    assert _escape() is False

    with pytest.raises(PresenterStateError):
        presenter.init(point, catalog)
