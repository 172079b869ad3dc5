"""
Web front-end for the keypad calculator.

Serves the calculator page and its JSON API.
"""

from .server import app

__all__ = ["app"]
