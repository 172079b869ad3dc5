import pytest

from keypad_calculator.adapter import KeypadAdapter
from keypad_calculator.engine import CalculatorEngine
from keypad_calculator.theme import MemoryThemeStore, ThemePreference
from keypad_calculator.timers import TimerQueue


def test_press_routes_digits_and_actions():
    adapter = KeypadAdapter()
    for label in ["5", "add", "3", "add", "2"]:
        adapter.press(label)
    assert adapter.press("equals") == "10"


def test_listeners_receive_display_after_each_event():
    adapter = KeypadAdapter()
    seen = []
    adapter.subscribe(seen.append)
    adapter.digit_pressed("1")
    adapter.digit_pressed("2")
    adapter.action_pressed("sign")
    assert seen == ["1", "12", "-12"]


def test_unknown_label_is_noop():
    adapter = KeypadAdapter()
    seen = []
    adapter.subscribe(seen.append)
    adapter.press("4")
    assert adapter.press("sqrt") == "4"
    assert seen == ["4"]


def test_tick_fires_auto_clear_and_notifies(timers, clock):
    adapter = KeypadAdapter(timers=timers)
    seen = []
    for label in ["9", "divide", "0", "equals"]:
        adapter.press(label)
    adapter.subscribe(seen.append)

    adapter.tick()
    assert seen == []

    clock.advance(2)
    adapter.tick()
    assert seen == ["0"]
    assert adapter.display_text == "0"


def test_press_pumps_due_timers_first(timers, clock):
    adapter = KeypadAdapter(timers=timers)
    for label in ["9", "divide", "0", "equals"]:
        adapter.press(label)
    clock.advance(3)
    # auto-clear lands before the operation, so the pending divide is gone
    adapter.press("add")
    assert adapter.engine.previous_input == "0"


def test_uses_given_engine(timers):
    engine = CalculatorEngine(timers)
    adapter = KeypadAdapter(engine=engine, timers=timers)
    adapter.press("3")
    assert engine.current_input == "3"


def test_toggle_theme():
    assert KeypadAdapter().toggle_theme() is None
    adapter = KeypadAdapter(theme=ThemePreference(MemoryThemeStore()))
    assert adapter.toggle_theme() == "light"


def test_engine_only_adapter_shares_engine_timers(timers, clock):
    adapter = KeypadAdapter(engine=CalculatorEngine(timers))
    assert adapter.timers is timers
    for label in ["9", "divide", "0", "equals"]:
        adapter.press(label)

    clock.advance(10)
    adapter.tick()
    assert adapter.display_text == "0"


def test_mismatched_timers_are_rejected(timers):
    with pytest.raises(ValueError):
        KeypadAdapter(engine=CalculatorEngine(timers), timers=TimerQueue())
