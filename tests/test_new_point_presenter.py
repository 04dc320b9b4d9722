"""Tests for the creation-form presenter."""

import pytest
from PyQt6.QtCore import Qt

from tripboard.core import KeyboardService, mount
from tripboard.models import UpdateType, UserAction
from tripboard.presenters import NewPointPresenter
from tripboard.views import PointListView, PointView

from conftest import make_point


@pytest.fixture
def events():
    return []


@pytest.fixture
def list_view(qapp):
    view = PointListView()
    yield view
    view.deleteLater()


@pytest.fixture
def presenter(list_view, events):
    presenter = NewPointPresenter(
        list_view,
        on_data_change=lambda *change: events.append(("data", change)),
        on_start=lambda: events.append("start"),
        on_destroy=lambda: events.append("destroy"),
    )
    yield presenter
    presenter.destroy()


def test_init_mounts_form_on_top(presenter, list_view, events, catalog):
    mount(PointView(make_point("existing"), catalog), list_view)

    presenter.init(catalog)

    assert presenter.is_active
    assert list_view.items()[0] is presenter.edit_view
    assert presenter.edit_view.is_new
    assert events == ["start"]
    assert KeyboardService.active_count(Qt.Key.Key_Escape) == 1


def test_init_twice_is_noop(presenter, list_view, events, catalog):
    presenter.init(catalog)
    presenter.init(catalog)

    assert list_view.item_count == 1
    assert events == ["start"]


def test_cancel_button_destroys(presenter, list_view, events, catalog):
    presenter.init(catalog)

    presenter.edit_view.reset_button.click()

    assert not presenter.is_active
    assert list_view.item_count == 0
    assert events == ["start", "destroy"]
    assert KeyboardService.active_count() == 0


def test_escape_destroys(presenter, events, catalog):
    presenter.init(catalog)

    assert KeyboardService.dispatch(Qt.Key.Key_Escape.value)

    assert not presenter.is_active
    assert events[-1] == "destroy"


def test_destroy_is_idempotent(presenter, events, catalog):
    presenter.init(catalog)
    presenter.destroy()
    presenter.destroy()

    assert events.count("destroy") == 1


def test_submit_requests_add(presenter, events, catalog):
    seed = make_point(None, price=70)
    presenter.init(catalog, seed=seed)

    presenter.edit_view.save_button.click()

    assert events[-1] == ("data", (UserAction.ADD_POINT, UpdateType.MINOR, seed))


def test_saving_then_aborting_keeps_input(presenter, catalog):
    presenter.init(catalog, seed=make_point(None))
    presenter.edit_view.price_input.setValue(640)

    presenter.set_saving()
    assert presenter.edit_view.is_busy

    presenter.set_aborting()
    assert not presenter.edit_view.is_busy
    assert presenter.edit_view.draft.base_price == 640
    assert presenter.edit_view.is_shaking
    assert presenter.is_active


def test_state_calls_without_form_are_noops(presenter):
    presenter.set_saving()
    presenter.set_aborting()
    assert not presenter.is_active
