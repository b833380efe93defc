"""Infrastructure registry patterns."""

from .save_strategy_registry import (
    SaveStrategyRegistry,
    UnknownSaveTypeError,
    get_save_strategy_registry,
    reset_save_strategy_registry,
)

__all__ = [
    'SaveStrategyRegistry',
    'UnknownSaveTypeError',
    'get_save_strategy_registry',
    'reset_save_strategy_registry',
]
