import pytest

from keypad_calculator.engine import CalculatorEngine
from keypad_calculator.timers import TimerQueue


class ManualClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def timers(clock):
    return TimerQueue(clock)


@pytest.fixture
def engine(timers):
    return CalculatorEngine(timers)


def feed(engine, *labels):
    """Press each label: digits (and ".") go to on_digit, the rest to handle_action."""
    for label in labels:
        if len(label) == 1:
            engine.on_digit(label)
        else:
            engine.handle_action(label)
    return engine.display
