from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from pioide.core.config import InstallerConfig, default_config_path, load_config_or_default
from pioide.core.errors import ErrorCode
from pioide.core.result import Err
from pioide.installer.cache import default_cache_dir
from pioide.installer.state import JsonStateStore, StateStore, default_state_path
from pioide.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: InstallerConfig
    cache_dir: Path
    state: StateStore
    console: ConsoleProtocol


def resolve_cache_dir(cache_dir: Path | None) -> Path:
    """Absolute cache dir: the option if given, else the per-user default."""
    try:
        return (cache_dir or default_cache_dir()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --cache-dir: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))


def build_context(*, config_path: Path | None = None, cache_dir: Path | None = None) -> CLIContext:
    path = config_path or default_config_path()
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        config=config_result.value,
        cache_dir=resolve_cache_dir(cache_dir),
        state=JsonStateStore(default_state_path()),
        console=RichConsole(),
    )
