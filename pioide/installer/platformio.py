"""PlatformIO Core install operation.

PlatformIO Core is installed into a dedicated venv inside the Core home:

    ~/.platformio/penv          (or <core_dir>/penv)

The coordinator treats this module as an opaque operation: it awaits
``install()`` and looks only at the returned Result (or at an exception).
All subprocess work runs in a worker thread so the caller's event loop
keeps running while pip downloads.
"""

from __future__ import annotations

import asyncio
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pioide.core.config import InstallerConfig
from pioide.core.result import Err, Ok, Result
from pioide.platform.detection import Platform, detect_platform
from pioide.platform.paths import home
from pioide.platform.process import run

__all__ = [
    "InstallFailure",
    "InstallOperation",
    "PlatformioCoreInstaller",
    "parse_pio_version",
]

_PIO_VERSION_RE = re.compile(r"version\s+(\S+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class InstallFailure:
    """A step of the install failed.

    Attributes:
        step: Which step failed ("venv", "pip", "verify").
        message: Human-readable error message.
    """

    step: str
    message: str

    def __str__(self) -> str:
        return f"{self.step}: {self.message}"


class InstallOperation(Protocol):
    """What the coordinator needs from an installer."""

    def is_present(self) -> bool:
        """True if the toolchain executable exists on disk."""
        ...

    async def install(self, cache_dir: Path, *, prerelease: bool) -> Result[str, InstallFailure]:
        """Install the toolchain and return the installed version."""
        ...


def parse_pio_version(output: str) -> str | None:
    """Extract the version from ``pio --version`` output.

    Example: "PlatformIO Core, version 6.1.16" -> "6.1.16"
    """
    m = _PIO_VERSION_RE.search(output)
    return m.group(1) if m else None


class PlatformioCoreInstaller:
    """Install PlatformIO Core with pip into <core_dir>/penv."""

    def __init__(self, config: InstallerConfig, *, platform: Platform | None = None) -> None:
        self._config = config
        self._platform = platform or detect_platform()
        self._core_dir = config.core_dir or home() / ".platformio"

    @property
    def core_dir(self) -> Path:
        return self._core_dir

    @property
    def venv_dir(self) -> Path:
        return self._core_dir / "penv"

    def _venv_exe(self, name: str) -> Path:
        return self.venv_dir / self._platform.venv_bin_dir / self._platform.exe_name(name)

    def pio_executable(self) -> Path:
        return self._venv_exe("pio")

    def is_present(self) -> bool:
        return self.pio_executable().exists()

    def requirement(self, *, prerelease: bool) -> list[str]:
        """pip arguments selecting the Core build for a channel."""
        if prerelease:
            return ["--pre", f"platformio>={self._config.core_version}"]
        return [f"platformio=={self._config.core_version}"]

    def _env(self, cache_dir: Path) -> dict[str, str]:
        env = dict(os.environ)
        env["PIP_CACHE_DIR"] = str(cache_dir / "pip")
        env["PIP_DISABLE_PIP_VERSION_CHECK"] = "1"
        env["PLATFORMIO_CORE_DIR"] = str(self._core_dir)
        return env

    async def install(self, cache_dir: Path, *, prerelease: bool) -> Result[str, InstallFailure]:
        return await asyncio.to_thread(self._install_blocking, cache_dir, prerelease)

    def _install_blocking(self, cache_dir: Path, prerelease: bool) -> Result[str, InstallFailure]:
        env = self._env(cache_dir)
        timeout = self._config.install_timeout

        python = self._venv_exe("python")
        if not python.exists():
            self._core_dir.mkdir(parents=True, exist_ok=True)
            base_python = self._config.python or sys.executable
            venv = run([base_python, "-m", "venv", str(self.venv_dir)], env=env, timeout=timeout)
            if isinstance(venv, Err):
                return Err(InstallFailure("venv", venv.error.detail or str(venv.error)))

        pip = run(
            [str(python), "-m", "pip", "install", "-U", *self.requirement(prerelease=prerelease)],
            env=env,
            timeout=timeout,
        )
        if isinstance(pip, Err):
            return Err(InstallFailure("pip", pip.error.detail or str(pip.error)))

        check = run([str(self.pio_executable()), "--version"], env=env, timeout=timeout)
        if isinstance(check, Err):
            return Err(InstallFailure("verify", check.error.detail or str(check.error)))

        version = parse_pio_version(check.value)
        if version is None:
            return Err(InstallFailure("verify", f"unexpected pio --version output: {check.value.strip()!r}"))
        return Ok(version)
