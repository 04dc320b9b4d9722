"""Tests for core utilities."""

import pytest
from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QApplication, QFormLayout, QLabel, QWidget

from tripboard.core import (
    BackgroundTaskRunner, KeyboardService, Observable, RenderPosition,
    is_mounted, mount, swap, unmount,
)

from conftest import wait_until


def _labels(container):
    layout = container.layout()
    return [layout.itemAt(i).widget().text() for i in range(layout.count())]


def _press(key, widget=None):
    event = QKeyEvent(QEvent.Type.KeyPress, key.value, Qt.KeyboardModifier.NoModifier)
    QApplication.sendEvent(widget or QApplication.instance(), event)


# ========== RENDER ==========

def test_mount_positions(container):
    """AFTERBEGIN inserts first, BEFOREEND appends."""
    mount(QLabel("middle"), container)
    mount(QLabel("last"), container)
    mount(QLabel("first"), container, RenderPosition.AFTERBEGIN)

    assert _labels(container) == ["first", "middle", "last"]


def test_mount_twice_raises(container):
    label = QLabel("x")
    mount(label, container)
    with pytest.raises(RuntimeError):
        mount(label, container)


def test_mount_requires_box_layout(qapp):
    """Containers without a QBoxLayout are rejected."""
    widget = QWidget()
    QFormLayout(widget)
    with pytest.raises(TypeError):
        mount(QLabel("x"), widget)


def test_swap_keeps_position(container):
    first, second, third = QLabel("1"), QLabel("2"), QLabel("3")
    for label in (first, second, third):
        mount(label, container)

    replacement = QLabel("2b")
    swap(replacement, second)

    assert _labels(container) == ["1", "2b", "3"]
    assert not is_mounted(second)
    assert is_mounted(replacement)


def test_swap_back_and_forth(container):
    """The swapped-out view can be swapped back in."""
    card, form = QLabel("card"), QLabel("form")
    mount(card, container)
    swap(form, card)
    swap(card, form)

    assert _labels(container) == ["card"]


def test_swap_unmounted_raises(container):
    with pytest.raises(RuntimeError):
        swap(QLabel("new"), QLabel("never mounted"))


def test_unmount_is_idempotent(container):
    label = QLabel("x")
    mount(label, container)

    unmount(label)
    unmount(label)
    unmount(None)

    assert _labels(container) == []
    assert not is_mounted(label)
    assert label.isHidden()


# ========== KEYBOARD ==========

def test_key_subscription_release_is_idempotent(qapp):
    calls = []
    subscription = KeyboardService.subscribe(Qt.Key.Key_Escape, lambda: calls.append(1))
    assert KeyboardService.active_count(Qt.Key.Key_Escape) == 1

    subscription.release()
    subscription.release()

    assert not subscription.is_active
    assert KeyboardService.active_count() == 0
    assert subscription.fire() is False
    assert calls == []


def test_latest_subscriber_handles_key(qapp):
    """Only the most recent subscriber receives the key."""
    calls = []
    first = KeyboardService.subscribe(Qt.Key.Key_Escape, lambda: calls.append("first"))
    second = KeyboardService.subscribe(Qt.Key.Key_Escape, lambda: calls.append("second"))

    assert KeyboardService.dispatch(Qt.Key.Key_Escape.value) is True
    second.release()
    assert KeyboardService.dispatch(Qt.Key.Key_Escape.value) is True
    first.release()
    assert KeyboardService.dispatch(Qt.Key.Key_Escape.value) is False

    assert calls == ["second", "first"]


def test_escape_key_event_reaches_subscriber(qapp):
    """A real key press goes through the application event filter."""
    calls = []
    target = QWidget()
    subscription = KeyboardService.subscribe(Qt.Key.Key_Escape, lambda: calls.append(1))

    _press(Qt.Key.Key_Escape, target)
    _press(Qt.Key.Key_Enter, target)
    assert calls == [1]

    subscription.release()
    _press(Qt.Key.Key_Escape, target)
    assert calls == [1]
    assert KeyboardService._filter is None


# ========== OBSERVABLE ==========

def test_observable_delivers_in_subscription_order():
    source = Observable()
    received = []
    source.add_observer(lambda kind, payload: received.append(("a", kind, payload)))
    source.add_observer(lambda kind, payload: received.append(("b", kind, payload)))

    source._notify("minor", 1)

    assert received == [("a", "minor", 1), ("b", "minor", 1)]


def test_observable_ignores_duplicate_and_allows_removal_during_notify():
    source = Observable()
    received = []

    def once(kind, payload):
        received.append(kind)
        source.remove_observer(once)

    source.add_observer(once)
    source.add_observer(once)
    source._notify("init")
    source._notify("minor")

    assert received == ["init"]


# ========== BACKGROUND TASKS ==========

def test_background_runner_delivers_result(qapp):
    runner = BackgroundTaskRunner()
    results = []

    runner.run(target=lambda x, y: x + y, args=(2, 3), on_success=results.append)

    assert wait_until(lambda: results == [5])
    assert wait_until(lambda: runner.active_count == 0)


def test_background_runner_delivers_error(qapp):
    runner = BackgroundTaskRunner()
    errors = []

    def fail():
        raise ValueError("boom")

    runner.run(target=fail, on_error=errors.append)

    assert wait_until(lambda: len(errors) == 1)
    assert isinstance(errors[0], ValueError)
    runner.cleanup()
