"""
Animation and visual effects.

Transient failure feedback for views whose background update failed.
"""

from .shake_config import ShakeConfig, get_shake_config, set_shake_config
from .shake import ShakeAnimation

__all__ = [
    "ShakeConfig",
    "get_shake_config",
    "set_shake_config",
    "ShakeAnimation",
]
