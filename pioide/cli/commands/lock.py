from __future__ import annotations

from pathlib import Path

import typer

from pioide.cli.context import resolve_cache_dir
from pioide.core.errors import ErrorCode
from pioide.installer.lock import InstallLock
from pioide.output.console import RichConsole, Style


lock_app = typer.Typer(no_args_is_help=True)

_CACHE_DIR_OPTION = typer.Option(None, "--cache-dir", help="Shared cache directory.")


@lock_app.command("status")
def status(cache_dir: Path | None = _CACHE_DIR_OPTION) -> None:
    """Show whether an install is claimed and by which process."""
    console = RichConsole()
    lock = InstallLock(resolve_cache_dir(cache_dir))

    if not lock.is_held():
        console.print(f"lock: free ({lock.path})")
        return

    console.print(f"lock: claimed ({lock.path})", Style.WARNING)
    holder = lock.holder()
    if holder is None:
        console.print("holder: unknown (unreadable lock file)", Style.DIM)
        return

    alive = holder.is_alive()
    state = "unknown" if alive is None else ("alive" if alive else "not running (stale)")
    console.print(f"holder: pid {holder.pid} since {holder.acquired_at} [{state}]", Style.DIM)


@lock_app.command("clear")
def clear(cache_dir: Path | None = _CACHE_DIR_OPTION) -> None:
    """Force-remove the install lock."""
    console = RichConsole()
    lock = InstallLock(resolve_cache_dir(cache_dir))

    try:
        removed = lock.clear()
    except OSError as e:
        console.error(f"cannot remove {lock.path}: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    if removed:
        console.success(f"removed {lock.path}")
    else:
        console.print("lock: already free", Style.DIM)
