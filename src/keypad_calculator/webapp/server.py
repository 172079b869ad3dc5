"""
Flask server for the keypad calculator web UI.

Serves the calculator page and the JSON API the page drives.
"""

import logging
import os
import threading
from typing import Dict, Optional

from flask import Flask, jsonify, render_template, request

from ..theme import JsonFileThemeStore, ThemePreference

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Configuration
THEME_FILE = os.environ.get("KEYPAD_CALC_THEME_FILE", "./calculator-theme.json")

_theme = None
_theme_lock = threading.Lock()


def _load_theme() -> ThemePreference:
    """Lazily load the server-wide theme preference; caller holds the lock."""
    global _theme
    if _theme is None:
        _theme = ThemePreference(JsonFileThemeStore(THEME_FILE))
    return _theme


def set_theme(theme) -> None:
    """Replace the theme preference (``None`` reloads from THEME_FILE)."""
    global _theme
    with _theme_lock:
        _theme = theme


def theme_state() -> Dict[str, str]:
    with _theme_lock:
        theme = _load_theme()
        return {"theme": theme.theme, "icon": theme.icon}


def toggle_theme_state() -> Dict[str, str]:
    """Toggle and persist the theme as one step under the theme lock."""
    with _theme_lock:
        theme = _load_theme()
        theme.toggle()
        return {"theme": theme.theme, "icon": theme.icon}


@app.route("/")
def index():
    """Render the calculator page."""
    state = theme_state()
    return render_template("index.html", theme=state["theme"], theme_icon=state["icon"])


@app.route("/api/sessions", methods=["POST"])
def create_session():
    """
    Start a calculator session.

    Returns:
        {"session_id": "...", "display": "0", ...engine state}
    """
    from .sessions import create_session

    return jsonify(create_session()), 201


@app.route("/api/sessions/<session_id>", methods=["GET"])
def get_session(session_id: str):
    """
    Get the current display and engine state.

    Pending auto-clears that are due fire before the state is read, so a
    client polling after an error sees the cleared display.
    """
    from .sessions import get_session

    state = get_session(session_id)

    if not state:
        return jsonify({"error": "Session not found"}), 404

    return jsonify(state)


@app.route("/api/sessions/<session_id>/press", methods=["POST"])
def press_button(session_id: str):
    """
    Handle a button press.

    Expected JSON payload:
        {"label": "0".."9" | "clear|sign|percent|add|subtract|multiply|divide|equals"}

    Unrecognized labels are accepted and leave the state unchanged.

    Returns:
        Updated session state
    """
    from .sessions import press

    data = request.get_json(silent=True)

    if not data:
        return jsonify({"error": "No JSON data provided"}), 400

    label = data.get("label")
    if not isinstance(label, str):
        return jsonify({"error": "label is required"}), 400

    state = press(session_id, label)

    if not state:
        return jsonify({"error": "Session not found"}), 404

    return jsonify(state)


@app.route("/api/sessions/<session_id>", methods=["DELETE"])
def delete_session(session_id: str):
    from .sessions import delete_session

    if not delete_session(session_id):
        return jsonify({"error": "Session not found"}), 404

    return jsonify({"ok": True})


@app.route("/api/theme", methods=["GET"])
def get_theme_preference():
    """
    Returns:
        {"theme": "dark|light", "icon": "..."}
    """
    return jsonify(theme_state())


@app.route("/api/theme/toggle", methods=["POST"])
def toggle_theme():
    """Flip the theme and persist it; persistence failures are logged only."""
    state = toggle_theme_state()
    logger.info("Theme switched to %s", state["theme"])
    return jsonify(state)


def main():
    """Run the Flask development server."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the keypad calculator web server")
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=5001,
        help="Port to bind to (default: 5001)",
    )
    parser.add_argument(
        "--theme-file",
        default=THEME_FILE,
        help="JSON file holding the theme preference (default: ./calculator-theme.json)",
    )

    args = parser.parse_args()
    run_server(args.host, args.port, args.theme_file)


def run_server(host: str, port: int, theme_file: Optional[str] = None) -> None:
    global THEME_FILE

    logging.basicConfig(level=logging.INFO)
    if theme_file:
        THEME_FILE = theme_file
        set_theme(None)

    print("Starting keypad calculator web server...")
    print(f"Theme file: {THEME_FILE}")
    print(f"Access at: http://{host}:{port}")

    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    main()
