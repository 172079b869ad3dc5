"""
Integer keypad calculator engine.

Four-function integer arithmetic driven by button presses:
- Digit entry with leading-zero replacement
- Left-to-right chained operations (no precedence)
- Floor division and floor percentage
- Error tokens that auto-clear after a fixed delay
"""

import logging
from enum import Enum
from typing import Dict, Optional

from .errors import CalculatorError, DivisionByZeroError, InvalidInputError
from .timers import TimerHandle, TimerQueue
from .validator import (
    DECIMAL_POINT,
    OPERATION_LABELS,
    is_division_by_zero,
    is_valid_digit,
    is_valid_number,
    limit_input_length,
)

logger = logging.getLogger(__name__)

ERROR_TOKEN = "Error"
DIVIDE_BY_ZERO_TOKEN = "Cannot divide by zero"
MAX_DISPLAY_LENGTH = 12
ERROR_CLEAR_DELAY = 2.0  # seconds


class Operation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


def add(a: int, b: int) -> int:
    return a + b


def subtract(a: int, b: int) -> int:
    return a - b


def multiply(a: int, b: int) -> int:
    return a * b


def divide(a: int, b: int) -> int:
    """
    Floor-divide ``a`` by ``b`` (rounds toward negative infinity).

    Raises:
        DivisionByZeroError: If ``b`` is zero
    """
    if is_division_by_zero(b):
        raise DivisionByZeroError("Cannot divide by zero")
    return a // b


def percent_of(n: int) -> int:
    """Integer percentage, floored like ``divide``: percent_of(-50) == -1."""
    return n // 100


_OPERATIONS = {
    Operation.ADD: add,
    Operation.SUBTRACT: subtract,
    Operation.MULTIPLY: multiply,
    Operation.DIVIDE: divide,
}


def apply_operation(op: Operation, a: int, b: int) -> int:
    return _OPERATIONS[Operation(op)](a, b)


def parse_operand(text: Optional[str]) -> int:
    """
    Parse a stored operand string as a base-10 integer.

    Raises:
        InvalidInputError: If ``text`` is not ``-?[0-9]+``
    """
    if text is None or not is_valid_number(text):
        raise InvalidInputError(f"Not an integer: {text!r}")
    return int(text)


class CalculatorEngine:
    """
    Input/accumulator state machine behind the keypad.

    Args:
        scheduler: Object with ``call_later(delay, callback)`` returning a
            handle with ``cancel()``. Defaults to a private ``TimerQueue``.
    """

    def __init__(self, scheduler=None):
        self.scheduler = scheduler if scheduler is not None else TimerQueue()
        self._error_timer: Optional[TimerHandle] = None
        self._epoch = 0
        self.clear()

    @property
    def display(self) -> str:
        """Current input truncated for presentation."""
        return limit_input_length(self.current_input, MAX_DISPLAY_LENGTH)

    def on_digit(self, digit: str) -> None:
        """
        Enter one keypad digit.

        Args:
            digit: Single character "0"-"9"; "." is accepted and ignored
        """
        if digit != DECIMAL_POINT and not is_valid_digit(digit):
            logger.debug("Ignoring malformed digit %r", digit)
            return

        if self.is_error_state:
            self._cancel_error_timer()
            self.is_error_state = False
            self.current_input = "0"

        if self.should_reset_display:
            self.current_input = "0"
            self.should_reset_display = False

        # integer-only mode
        if digit == DECIMAL_POINT:
            return

        if self.current_input == "0":
            self.current_input = digit
        else:
            self.current_input += digit

    def on_operation(self, op: Operation) -> None:
        """Select a binary operation, folding any pending one first."""
        try:
            op = Operation(op)
        except ValueError:
            logger.debug("Ignoring unknown operation %r", op)
            return

        if self.previous_input is None:
            self.previous_input = self.current_input
        elif self.operation is not None:
            self.calculate()
            # folded result is the next left operand
            if not self.is_error_state:
                self.previous_input = self.current_input

        self.operation = op
        self.should_reset_display = True

    def calculate(self) -> None:
        """Apply the pending operation to the stored and current operands."""
        if self.operation is None or self.previous_input is None:
            return

        try:
            a = parse_operand(self.previous_input)
            b = parse_operand(self.current_input)
        except InvalidInputError:
            self.enter_error_state(ERROR_TOKEN)
            return

        try:
            result = apply_operation(self.operation, a, b)
        except DivisionByZeroError:
            self.enter_error_state(DIVIDE_BY_ZERO_TOKEN)
            return
        except CalculatorError:
            self.enter_error_state(ERROR_TOKEN)
            return

        self.current_input = str(result)
        self.operation = None
        self.previous_input = None
        self.should_reset_display = True

    def toggle_sign(self) -> None:
        if self.is_error_state or self.current_input == "0":
            return
        if self.current_input.startswith("-"):
            self.current_input = self.current_input[1:]
        else:
            self.current_input = "-" + self.current_input

    def percentage(self) -> None:
        try:
            value = parse_operand(self.current_input)
        except InvalidInputError:
            return
        self.current_input = str(percent_of(value))

    def clear(self) -> None:
        """Reset every field to its initial value and drop any pending auto-clear."""
        self._cancel_error_timer()
        self.current_input = "0"
        self.previous_input: Optional[str] = None
        self.operation: Optional[Operation] = None
        self.should_reset_display = False
        self.is_error_state = False

    def enter_error_state(self, token: str) -> None:
        """
        Show an error token and schedule the automatic clear.

        Args:
            token: User-visible message replacing the current input
        """
        logger.info("Calculator error: %s", token)
        self._cancel_error_timer()
        self.current_input = token
        self.is_error_state = True
        epoch = self._epoch
        self._error_timer = self.scheduler.call_later(
            ERROR_CLEAR_DELAY, lambda: self._auto_clear(epoch)
        )

    def handle_action(self, action: str) -> None:
        """
        Dispatch an action-button label.

        Args:
            action: One of clear, sign, percent, add, subtract, multiply,
                divide, equals. Anything else is ignored.
        """
        if action == "clear":
            self.clear()
        elif action == "sign":
            self.toggle_sign()
        elif action == "percent":
            self.percentage()
        elif action in OPERATION_LABELS:
            self.on_operation(Operation(action))
        elif action == "equals":
            self.calculate()
        else:
            logger.debug("Ignoring unknown action %r", action)

    def snapshot(self) -> Dict:
        return {
            "display": self.display,
            "current_input": self.current_input,
            "previous_input": self.previous_input,
            "operation": self.operation.value if self.operation else None,
            "should_reset_display": self.should_reset_display,
            "is_error_state": self.is_error_state,
        }

    def _auto_clear(self, epoch: int) -> None:
        if epoch != self._epoch or not self.is_error_state:
            return
        self._error_timer = None
        self.clear()

    def _cancel_error_timer(self) -> None:
        self._epoch += 1
        if self._error_timer is not None:
            self._error_timer.cancel()
            self._error_timer = None
