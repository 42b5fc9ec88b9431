from __future__ import annotations

import typer

from pioide import __version__
from pioide.cli.commands.ensure import ensure
from pioide.cli.commands.lock import lock_app
from pioide.cli.commands.state import state_app


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(ensure)

app.add_typer(lock_app, name="lock", help="Inspect or clear the install lock.")
app.add_typer(state_app, name="state", help="Inspect persisted installer flags.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    pass


def main() -> None:
    app()
