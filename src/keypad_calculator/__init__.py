"""Integer keypad calculator with a persisted light/dark theme."""

from .adapter import KeypadAdapter
from .engine import (
    DIVIDE_BY_ZERO_TOKEN,
    ERROR_CLEAR_DELAY,
    ERROR_TOKEN,
    MAX_DISPLAY_LENGTH,
    CalculatorEngine,
    Operation,
)
from .errors import CalculatorError, DivisionByZeroError, InvalidInputError
from .theme import JsonFileThemeStore, MemoryThemeStore, ThemePreference
from .timers import TimerHandle, TimerQueue

__all__ = [
    "KeypadAdapter",
    "CalculatorEngine",
    "Operation",
    "ERROR_TOKEN",
    "DIVIDE_BY_ZERO_TOKEN",
    "ERROR_CLEAR_DELAY",
    "MAX_DISPLAY_LENGTH",
    "CalculatorError",
    "DivisionByZeroError",
    "InvalidInputError",
    "ThemePreference",
    "MemoryThemeStore",
    "JsonFileThemeStore",
    "TimerQueue",
    "TimerHandle",
]
