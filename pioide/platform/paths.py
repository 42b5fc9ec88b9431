"""User-level directories shared by every pioide process on the machine.

The cache directory holds the install lock, so all processes must agree on
it: it depends only on the user's environment, never on the working dir.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_windows

__all__ = [
    "home",
    "user_cache_dir",
    "user_config_dir",
]

APP_NAME = "pioide"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then Path.home().
    """
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Config and persisted-state directory.

    Location: ~/.config/pioide/ (Linux/macOS) or %APPDATA%/pioide/ (Windows).
    """
    if is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """Scratch directory root.

    Location: ~/.cache/pioide/ (Linux/macOS) or %LOCALAPPDATA%/pioide/ (Windows).
    """
    if is_windows():
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local) / APP_NAME
        return home() / "AppData" / "Local" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    return home() / ".cache" / APP_NAME


def clear_caches() -> None:
    """Forget cached paths (tests change HOME and XDG_* variables)."""
    home.cache_clear()
    user_config_dir.cache_clear()
    user_cache_dir.cache_clear()
