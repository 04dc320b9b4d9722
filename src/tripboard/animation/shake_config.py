"""Declarative configuration for the failure shake animation."""

from dataclasses import dataclass
from typing import Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ShakeConfig:
    """Shake animation tuning knobs."""

    duration_ms: int = 600
    amplitude_px: int = 5
    oscillations: int = 3  # Full left-right swings over the duration

    def __post_init__(self):
        if self.duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {self.duration_ms}")
        if self.oscillations < 1:
            logger.warning(f"[ShakeConfig] oscillations={self.oscillations} is too low, using 1")
            self.oscillations = 1


_config: Optional[ShakeConfig] = None


def get_shake_config() -> ShakeConfig:
    """Return singleton shake config."""
    global _config
    if _config is None:
        _config = ShakeConfig()
    return _config


def set_shake_config(config: ShakeConfig) -> None:
    global _config
    _config = config
