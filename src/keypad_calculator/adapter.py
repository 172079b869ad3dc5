"""
Adapter between button events and the calculator engine.

Forwards digit/action labels to the engine, pumps deferred timers, and
pushes the display string to any subscribed listeners.
"""

import logging
from typing import Callable, List, Optional

from .engine import CalculatorEngine
from .theme import ThemePreference
from .timers import TimerQueue
from .validator import DECIMAL_POINT, is_valid_action, is_valid_digit

logger = logging.getLogger(__name__)

DisplayListener = Callable[[str], None]


class KeypadAdapter:
    """
    Thin event adapter owning one engine and its timer queue.

    Args:
        engine: Calculator engine; a new one on ``timers`` is built if omitted
        timers: Timer queue the engine schedules on; defaults to the
            engine's own scheduler
        theme: Optional theme preference exposed through ``toggle_theme``
    """

    def __init__(
        self,
        engine: Optional[CalculatorEngine] = None,
        timers: Optional[TimerQueue] = None,
        theme: Optional[ThemePreference] = None,
    ):
        if engine is None:
            self.timers = timers if timers is not None else TimerQueue()
            self.engine = CalculatorEngine(self.timers)
        else:
            if timers is not None and timers is not engine.scheduler:
                raise ValueError("timers must be the queue the engine schedules on")
            self.engine = engine
            self.timers = engine.scheduler
        self.theme = theme
        self._listeners: List[DisplayListener] = []

    @property
    def display_text(self) -> str:
        return self.engine.display

    def subscribe(self, listener: DisplayListener) -> None:
        self._listeners.append(listener)

    def tick(self) -> None:
        """Fire due timers; notifies listeners only when something fired."""
        if self.timers.run_due():
            self._notify()

    def digit_pressed(self, label: str) -> str:
        self.tick()
        self.engine.on_digit(label)
        self._notify()
        return self.display_text

    def action_pressed(self, label: str) -> str:
        self.tick()
        self.engine.handle_action(label)
        self._notify()
        return self.display_text

    def press(self, label: str) -> str:
        """
        Route a raw button label to the digit or action handler.

        Unrecognized labels leave the engine untouched.
        """
        if is_valid_digit(label) or label == DECIMAL_POINT:
            return self.digit_pressed(label)
        if is_valid_action(label):
            return self.action_pressed(label)
        logger.debug("Ignoring unknown button label %r", label)
        self.tick()
        return self.display_text

    def toggle_theme(self) -> Optional[str]:
        if self.theme is None:
            return None
        return self.theme.toggle()

    def _notify(self) -> None:
        text = self.display_text
        for listener in self._listeners:
            listener(text)
