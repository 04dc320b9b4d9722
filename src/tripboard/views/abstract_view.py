"""
Base classes for board views.

Views only render and report gestures through signals; every decision is
taken by a presenter. Each view can play a failure shake, and stateful
views rebuild themselves from a state dict via ``update_element``.
"""

from abc import ABC, ABCMeta, abstractmethod
from typing import Any, Callable, Dict, Optional
import logging

from PyQt6.QtWidgets import QWidget

from tripboard.animation import ShakeAnimation
from tripboard.theming import ColorScheme

logger = logging.getLogger(__name__)


# Combined metaclass for ABC + PyQt6 QWidget
class _CombinedMeta(ABCMeta, type(QWidget)):
    """Combined metaclass for ABC + PyQt6 QWidget."""
    pass


class AbstractView(QWidget, ABC, metaclass=_CombinedMeta):
    """
    Base view.

    Subclasses MUST implement ``_setup_ui``; it runs once from ``__init__``.
    """

    def __init__(self, color_scheme: Optional[ColorScheme] = None, parent=None):
        super().__init__(parent)
        self.color_scheme = color_scheme or ColorScheme()
        self._shake: Optional[ShakeAnimation] = None
        self._setup_ui()

    @abstractmethod
    def _setup_ui(self) -> None:
        ...

    @property
    def is_shaking(self) -> bool:
        return self._shake is not None and self._shake.is_running

    def shake(self, on_finished: Optional[Callable[[], None]] = None) -> None:
        """Play the transient failure animation."""
        if self._shake is None:
            self._shake = ShakeAnimation(self)
        logger.debug(f"Shaking {type(self).__name__}")
        self._shake.start(on_finished=on_finished)


class AbstractStatefulView(AbstractView):
    """
    View whose rendering is a pure function of ``self._state``.

    ``update_element(**update)`` merges the update and re-applies it;
    subclasses implement ``_apply_state(changed_keys)``.
    """

    def __init__(self, initial_state: Dict[str, Any], color_scheme: Optional[ColorScheme] = None, parent=None):
        self._state: Dict[str, Any] = dict(initial_state)
        super().__init__(color_scheme=color_scheme, parent=parent)
        self._apply_state(set(self._state))

    @property
    def state(self) -> Dict[str, Any]:
        """Copy of the current state."""
        return dict(self._state)

    def update_element(self, **update: Any) -> None:
        if not update:
            return
        unknown = set(update) - set(self._state)
        if unknown:
            raise KeyError(f"{type(self).__name__} has no state keys {sorted(unknown)}")
        self._state.update(update)
        self._apply_state(set(update))

    @abstractmethod
    def _apply_state(self, changed: set) -> None:
        ...
