"""Filesystem lock guarding the PlatformIO Core install.

Every editor process on the machine shares one lock file inside the cache
directory. The file's existence means "an install was claimed"; it does not
prove the claimant is still alive, since a crashed or force-quit process
leaves the file behind. The coordinator copes with that by force-clearing
the file at the end of every attempt.

State machine of the file:

    Absent --acquire--> Present --release/clear--> Absent

The content (holder pid and timestamp) is for forensics only; no decision
in the install path reads it.
"""

from __future__ import annotations

import contextlib
import json
import os
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from pioide.core.structured import as_str_dict
from pioide.platform.detection import is_windows
from pioide.platform.files import atomic_write_text

__all__ = ["LOCK_FILE_NAME", "InstallLock", "LockHolder"]

LOCK_FILE_NAME = "install.lock"


@dataclass(frozen=True, slots=True)
class LockHolder:
    """Identity recorded in the lock file.

    Attributes:
        pid: Process id of the process that acquired the lock.
        acquired_at: ISO timestamp of the acquisition.
    """

    pid: int
    acquired_at: str

    @classmethod
    def current(cls) -> LockHolder:
        return cls(pid=os.getpid(), acquired_at=datetime.now().isoformat())

    def to_json(self) -> str:
        return json.dumps({"pid": self.pid, "acquired_at": self.acquired_at})

    def is_alive(self) -> bool | None:
        """Check whether the recorded process still exists.

        Returns None when liveness cannot be probed (Windows, where
        os.kill would terminate the process instead of probing it).
        """
        if is_windows():
            return None
        try:
            os.kill(self.pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists, owned by another user
            return True
        return True


class InstallLock:
    """Advisory cross-process lock backed by a single file.

    Usage:
        lock = InstallLock(cache_dir)
        if not lock.is_held():
            with lock.held():
                run_install()
    """

    def __init__(self, cache_dir: Path, name: str = LOCK_FILE_NAME) -> None:
        self._path = cache_dir / name

    @property
    def path(self) -> Path:
        return self._path

    def is_held(self) -> bool:
        """True if the lock file exists, whether or not its holder is alive."""
        return self._path.exists()

    def acquire(self) -> None:
        """Stake the lock for this process.

        The file is created atomically when absent. A leftover file from a
        crashed holder is overwritten rather than treated as an error.

        Raises:
            OSError: If the file cannot be written.
        """
        payload = LockHolder.current().to_json()
        try:
            fd = os.open(self._path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            atomic_write_text(self._path, payload)
            return

        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)

    def release(self) -> None:
        """Remove the lock file. A missing file is not an error.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        self._path.unlink(missing_ok=True)

    def clear(self) -> bool:
        """Force-remove the lock file regardless of who holds it.

        Returns:
            True if a file was removed, False if there was none.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        return True

    @contextlib.contextmanager
    def held(self) -> Iterator[None]:
        """Hold the lock for the duration of the block, releasing on every exit."""
        self.acquire()
        try:
            yield
        finally:
            self.release()

    def holder(self) -> LockHolder | None:
        """Read the recorded holder, or None if absent or unreadable."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError:
            return None

        try:
            data = as_str_dict(json.loads(raw))
        except json.JSONDecodeError:
            return None
        if data is None:
            return None

        pid = data.get("pid")
        acquired_at = data.get("acquired_at")
        if isinstance(pid, bool) or not isinstance(pid, int) or not isinstance(acquired_at, str):
            return None
        return LockHolder(pid=pid, acquired_at=acquired_at)
