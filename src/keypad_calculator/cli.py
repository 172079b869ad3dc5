import json
import logging
import os
from typing import Tuple

import click

from .adapter import KeypadAdapter
from .theme import JsonFileThemeStore, ThemePreference

DEFAULT_THEME_FILE = os.environ.get("KEYPAD_CALC_THEME_FILE", "./calculator-theme.json")


def run_labels(labels: Tuple[str, ...], trace: bool = False) -> KeypadAdapter:
    adapter = KeypadAdapter()
    if trace:
        adapter.subscribe(click.echo)
    for label in labels:
        adapter.press(label)
    return adapter


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.argument("labels", nargs=-1, required=True)
@click.option("--trace", is_flag=True, default=False, help="Print the display after every press")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full engine state")
def press(labels: Tuple[str, ...], trace: bool, as_json: bool) -> None:
    """Feed button LABELS (0-9, add, subtract, ..., equals) into a fresh calculator."""
    adapter = run_labels(labels, trace=trace)
    if as_json:
        click.echo(json.dumps(adapter.engine.snapshot()))
    elif not trace:
        click.echo(adapter.display_text)


@main.command()
@click.option("--toggle", is_flag=True, default=False, help="Switch between dark and light")
@click.option(
    "--store",
    "store_path",
    default=DEFAULT_THEME_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Theme preference file",
)
def theme(toggle: bool, store_path: str) -> None:
    """Show or toggle the persisted theme."""
    pref = ThemePreference(JsonFileThemeStore(store_path))
    if toggle:
        pref.toggle()
    click.echo(f"{pref.theme} {pref.icon}")


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Host to bind to")
@click.option("--port", default=5001, show_default=True, help="Port to bind to")
@click.option("--theme-file", default=DEFAULT_THEME_FILE, show_default=True, help="Theme preference file")
def serve(host: str, port: int, theme_file: str) -> None:
    """Run the web calculator."""
    from .webapp.server import run_server

    run_server(host, port, theme_file)


if __name__ == "__main__":  # pragma: no cover
    main()
