"""Cache directory manager.

The cache directory is shared by every pioide process on the machine: it
holds pip's download cache and the install lock file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pioide.core.result import Err, Ok, Result
from pioide.platform.paths import user_cache_dir

__all__ = ["CacheDirError", "default_cache_dir", "ensure_cache_dir"]


@dataclass(frozen=True, slots=True)
class CacheDirError:
    """The cache directory could not be created or is not a directory."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


def default_cache_dir() -> Path:
    return user_cache_dir() / ".cache"


def ensure_cache_dir(path: Path) -> Result[Path, CacheDirError]:
    """Create the cache directory if missing. Safe to call repeatedly."""
    if path.exists() and not path.is_dir():
        return Err(CacheDirError(path=path, message="Cache path exists but is not a directory"))

    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        return Err(CacheDirError(path=path, message="Permission denied creating cache directory"))
    except OSError as e:
        return Err(CacheDirError(path=path, message=f"Cannot create cache directory ({e})"))

    return Ok(path)
