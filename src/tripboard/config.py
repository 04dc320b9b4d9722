"""Board configuration.

Provides hooks for applications to tune blocker timing and logging.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class BoardConfig:
    """Base configuration for the trip board.

    Applications can subclass this to provide custom configuration.

    Attributes:
        lower_limit_ms: Delay before an unresolved mutation shows the blocking indicator
        upper_limit_ms: Minimum time (from block start) a shown indicator stays visible
        log_level: Level name applied by setup_logging()
        log_file: Optional log file path for setup_logging()
    """

    lower_limit_ms: int = 350
    upper_limit_ms: int = 1000
    log_level: str = "INFO"
    log_file: Optional[str] = None


# Global config instance (set by application)
_board_config: Optional[BoardConfig] = None


def set_board_config(config: BoardConfig) -> None:
    """Set the global board configuration.

    Args:
        config: BoardConfig instance
    """
    global _board_config
    _board_config = config


def get_board_config() -> BoardConfig:
    """Get the current board configuration.

    Returns:
        Current BoardConfig or default if not set
    """
    if _board_config is None:
        return BoardConfig()
    return _board_config
