"""Theming: semantic color roles for the board views."""

from .color_scheme import ColorScheme

__all__ = [
    "ColorScheme",
]
