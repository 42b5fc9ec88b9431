"""Typed installer configuration.

Configuration lives in a TOML file with a single ``[installer]`` table:

    [installer]
    core_version = "6.1.16"
    core_dir = "~/.platformio"
    python = "/usr/bin/python3"
    notify_suspended = true
    install_timeout = 600

Every key is optional. A missing file is not an error; it means defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pioide.platform.paths import user_config_dir

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_str, get_table

__all__ = [
    "DEFAULT_CORE_VERSION",
    "DEFAULT_INSTALL_TIMEOUT",
    "ConfigError",
    "InstallerConfig",
    "default_config_path",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CORE_VERSION = "6.1.16"
DEFAULT_INSTALL_TIMEOUT = 600.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class InstallerConfig:
    """Configuration snapshot handed to the coordinator.

    Attributes:
        core_version: Required PlatformIO Core version.
        core_dir: PlatformIO Core home (None = ~/.platformio).
        python: Interpreter used to create the Core venv (None = current).
        notify_suspended: Show a notice when another process is installing.
        install_timeout: Per-command timeout for the install subprocesses.
    """

    core_version: str = DEFAULT_CORE_VERSION
    core_dir: Path | None = None
    python: str | None = None
    notify_suspended: bool = True
    install_timeout: float = DEFAULT_INSTALL_TIMEOUT

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> InstallerConfig:
        """Create config from a parsed TOML document."""
        table: StrDict = get_table(data, "installer") or {}

        core_dir = get_str(table, "core_dir")
        notify = get_bool(table, "notify_suspended")
        timeout = get_float(table, "install_timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"install_timeout must be positive, got {timeout}")

        return cls(
            core_version=get_str(table, "core_version") or DEFAULT_CORE_VERSION,
            core_dir=Path(core_dir).expanduser() if core_dir else None,
            python=get_str(table, "python"),
            notify_suspended=True if notify is None else notify,
            install_timeout=timeout or DEFAULT_INSTALL_TIMEOUT,
        )


def default_config_path() -> Path:
    return user_config_dir() / "config.toml"


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (UnicodeDecodeError, OSError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[InstallerConfig, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to config.toml

    Returns:
        Ok(InstallerConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(InstallerConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[InstallerConfig, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(InstallerConfig())
    return load_config(path)
