"""
Core PyQt6 utilities.

Rendering primitives, scoped key subscriptions, the serialized mutation
gate and background execution. No domain-specific logic.
"""

from .observable import Observable
from .render import RenderPosition, mount, swap, unmount, is_mounted
from .key_subscription import KeySubscription, KeyboardService
from .ui_blocker import ConcurrencyGate
from .background_task import BackgroundTask, BackgroundTaskRunner

__all__ = [
    "Observable",
    "RenderPosition",
    "mount",
    "swap",
    "unmount",
    "is_mounted",
    "KeySubscription",
    "KeyboardService",
    "ConcurrencyGate",
    "BackgroundTask",
    "BackgroundTaskRunner",
]
