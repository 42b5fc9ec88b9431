from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from pioide import __version__
from pioide.cli.context import CLIContext, build_context
from pioide.core.version import is_prerelease
from pioide.installer.coordinator import InstallationCoordinator
from pioide.installer.outcome import exit_code_for
from pioide.installer.platformio import PlatformioCoreInstaller
from pioide.installer.reporter import ConsoleReporter


def make_coordinator(
    ctx: CLIContext,
    *,
    prerelease: bool | None,
    verbose: bool,
) -> InstallationCoordinator:
    """Wire a coordinator the way one editor activation would."""
    channel = is_prerelease(__version__) if prerelease is None else prerelease
    return InstallationCoordinator(
        ctx.state,
        ctx.config,
        ctx.cache_dir,
        channel,
        install_operation=PlatformioCoreInstaller(ctx.config),
        reporter=ConsoleReporter(ctx.console, verbose=verbose),
    )


def ensure(
    config: Path | None = typer.Option(None, "--config", help="Config file (TOML)."),
    cache_dir: Path | None = typer.Option(None, "--cache-dir", help="Shared cache directory."),
    prerelease: bool | None = typer.Option(
        None,
        "--prerelease/--stable",
        help="Install channel (default: derived from the pioide version).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every progress step."),
) -> None:
    """Make sure PlatformIO Core is installed, installing it if needed."""
    ctx = build_context(config_path=config, cache_dir=cache_dir)
    coordinator = make_coordinator(ctx, prerelease=prerelease, verbose=verbose)
    outcome = asyncio.run(coordinator.ensure_ready())

    code = exit_code_for(outcome)
    if not code.is_success:
        raise typer.Exit(code=int(code))
