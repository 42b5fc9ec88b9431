from __future__ import annotations

import typer

from pioide.installer.state import JsonStateStore, default_state_path
from pioide.output.console import RichConsole, Style


state_app = typer.Typer(no_args_is_help=True)


@state_app.command("show")
def show() -> None:
    """Print persisted installer flags."""
    console = RichConsole()
    store = JsonStateStore(default_state_path())
    flags = store.snapshot()

    console.print(str(store.path), Style.DIM)
    if not flags:
        console.print("(no flags recorded)", Style.DIM)
        return
    for key in sorted(flags):
        console.print(f"{key} = {flags[key]}")
