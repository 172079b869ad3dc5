"""
Input validation for keypad labels and operand strings.

Validates what the UI layer sends before it reaches the engine.
"""

import re

DIGIT_LABELS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9")
DECIMAL_POINT = "."
OPERATION_LABELS = ("add", "subtract", "multiply", "divide")
ACTION_LABELS = ("clear", "sign", "percent") + OPERATION_LABELS + ("equals",)

_INTEGER_RE = re.compile(r"-?[0-9]+")


def is_valid_number(text: str) -> bool:
    """
    Check whether a string is a plain base-10 integer.

    Args:
        text: Candidate operand, e.g. "42" or "-7"

    Returns:
        True only for an optional leading minus followed by digits
    """
    return isinstance(text, str) and _INTEGER_RE.fullmatch(text) is not None


def is_valid_digit(label: str) -> bool:
    return label in DIGIT_LABELS


def is_valid_action(label: str) -> bool:
    return label in ACTION_LABELS


def is_valid_operation(label: str) -> bool:
    return label in OPERATION_LABELS


def is_division_by_zero(operand: int) -> bool:
    return operand == 0


def limit_input_length(text: str, max_length: int = 12) -> str:
    """Keep the first ``max_length`` characters of ``text``."""
    if len(text) > max_length:
        return text[:max_length]
    return text
