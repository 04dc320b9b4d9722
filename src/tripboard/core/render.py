"""
Layout-based rendering primitives.

The three operations presenters rely on to place views:

    mount(view, container, position)   # insert into container's layout
    swap(new_view, old_view)           # replace old_view in place
    unmount(view)                      # detach from its container

Containers are plain QWidgets that own a QBoxLayout. ``unmount`` is
idempotent and accepts ``None`` so teardown paths never need guards.
Unmounted views stay parented; owners dispose of them with deleteLater()
so a view can be unmounted from inside one of its own signals.
"""

from enum import Enum
from typing import Optional
import logging

from PyQt6.QtWidgets import QBoxLayout, QWidget

logger = logging.getLogger(__name__)


class RenderPosition(Enum):
    """Where ``mount`` inserts a view inside its container."""
    AFTERBEGIN = "afterbegin"  # First child
    BEFOREEND = "beforeend"    # Last child


def _container_layout(container: QWidget) -> QBoxLayout:
    layout = container.layout()
    if not isinstance(layout, QBoxLayout):
        raise TypeError(
            f"Render container {type(container).__name__} must own a QBoxLayout, "
            f"got {type(layout).__name__}"
        )
    return layout


def _owning_layout(view: QWidget) -> Optional[QBoxLayout]:
    """Return the layout currently holding ``view``, if any."""
    parent = view.parentWidget()
    if parent is None:
        return None
    layout = parent.layout()
    if layout is None or layout.indexOf(view) < 0:
        return None
    return layout


def is_mounted(view: Optional[QWidget]) -> bool:
    """True if ``view`` currently sits in a container's layout."""
    return view is not None and _owning_layout(view) is not None


def mount(view: QWidget, container: QWidget, position: RenderPosition = RenderPosition.BEFOREEND) -> None:
    """Insert ``view`` into ``container`` at ``position``.

    Raises:
        RuntimeError: if the view is already mounted somewhere
    """
    if is_mounted(view):
        raise RuntimeError(f"{type(view).__name__} is already mounted")

    layout = _container_layout(container)
    if position is RenderPosition.AFTERBEGIN:
        layout.insertWidget(0, view)
    else:
        layout.addWidget(view)
    view.show()


def swap(new_view: QWidget, old_view: QWidget) -> None:
    """Put ``new_view`` exactly where ``old_view`` is mounted.

    The old view is hidden and detached from the layout but stays parented,
    so it can be swapped back in later.

    Raises:
        RuntimeError: if ``old_view`` is not mounted
    """
    layout = _owning_layout(old_view)
    if layout is None:
        raise RuntimeError(f"Cannot swap: {type(old_view).__name__} is not mounted")

    index = layout.indexOf(old_view)
    layout.removeWidget(old_view)
    old_view.hide()
    layout.insertWidget(index, new_view)
    new_view.show()


def unmount(view: Optional[QWidget]) -> None:
    """Take ``view`` out of its container's layout and hide it. No-op if not mounted."""
    if view is None:
        return

    layout = _owning_layout(view)
    if layout is not None:
        layout.removeWidget(view)
    view.hide()
