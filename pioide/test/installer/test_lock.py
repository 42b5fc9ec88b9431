"""Tests for pioide.installer.lock - the cross-process install lock."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

from pioide.installer.lock import LOCK_FILE_NAME, InstallLock, LockHolder

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX pid probing")


class TestInstallLock:
    """Acquire / release / clear state machine."""

    def test_absent_by_default(self, tmp_path: Path) -> None:
        lock = InstallLock(tmp_path)
        assert lock.path == tmp_path / LOCK_FILE_NAME
        assert not lock.is_held()

    def test_acquire_writes_holder_identity(self, tmp_path: Path) -> None:
        lock = InstallLock(tmp_path)
        lock.acquire()

        assert lock.is_held()
        data = json.loads(lock.path.read_text(encoding="utf-8"))
        assert data["pid"] == os.getpid()
        assert data["acquired_at"]

    def test_acquire_over_stale_file(self, tmp_path: Path) -> None:
        lock = InstallLock(tmp_path)
        lock.path.write_text(json.dumps({"pid": 1, "acquired_at": "2020-01-01T00:00:00"}))

        lock.acquire()

        holder = lock.holder()
        assert holder is not None
        assert holder.pid == os.getpid()

    def test_release(self, tmp_path: Path) -> None:
        lock = InstallLock(tmp_path)
        lock.acquire()
        lock.release()
        assert not lock.is_held()

    def test_release_when_absent_is_noop(self, tmp_path: Path) -> None:
        InstallLock(tmp_path).release()

    def test_clear_reports_removal(self, tmp_path: Path) -> None:
        lock = InstallLock(tmp_path)
        lock.acquire()

        assert lock.clear() is True
        assert lock.clear() is False
        assert not lock.is_held()

    def test_held_releases_on_exception(self, tmp_path: Path) -> None:
        lock = InstallLock(tmp_path)

        with pytest.raises(RuntimeError):
            with lock.held():
                assert lock.is_held()
                raise RuntimeError("install exploded")

        assert not lock.is_held()

    def test_two_instances_share_the_file(self, tmp_path: Path) -> None:
        a = InstallLock(tmp_path)
        b = InstallLock(tmp_path)

        a.acquire()
        assert b.is_held()
        b.clear()
        assert not a.is_held()

    def test_acquire_in_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            InstallLock(tmp_path / "missing").acquire()


class TestLockHolder:
    """Forensic holder inspection."""

    def test_holder_absent(self, tmp_path: Path) -> None:
        assert InstallLock(tmp_path).holder() is None

    @pytest.mark.parametrize(
        "content",
        ["", "not json", "[1, 2]", '{"pid": "12"}', '{"pid": true, "acquired_at": "x"}'],
    )
    def test_unreadable_holder(self, tmp_path: Path, content: str) -> None:
        lock = InstallLock(tmp_path)
        lock.path.write_text(content, encoding="utf-8")

        assert lock.is_held()
        assert lock.holder() is None

    def test_roundtrip(self) -> None:
        holder = LockHolder(pid=42, acquired_at="2026-01-01T10:00:00")
        assert json.loads(holder.to_json()) == {"pid": 42, "acquired_at": "2026-01-01T10:00:00"}

    @posix_only
    def test_current_process_is_alive(self) -> None:
        assert LockHolder.current().is_alive() is True

    @posix_only
    def test_dead_pid(self) -> None:
        # Above the Linux/macOS pid limits
        assert LockHolder(pid=99_999_999, acquired_at="x").is_alive() is False

    def test_windows_is_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import pioide.installer.lock as lock_module

        monkeypatch.setattr(lock_module, "is_windows", lambda: True)
        assert LockHolder.current().is_alive() is None
