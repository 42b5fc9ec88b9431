"""Tests for pioide.platform.paths module."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from pioide.platform import paths
from pioide.platform.detection import Platform


@pytest.fixture(autouse=True)
def _fresh_caches() -> Iterator[None]:
    paths.clear_caches()
    yield
    paths.clear_caches()


@pytest.fixture
def posix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "is_windows", lambda: False)


@pytest.mark.usefixtures("posix")
class TestPosixPaths:
    def test_home_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.home() == tmp_path

    def test_config_dir_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        assert paths.user_config_dir() == tmp_path / "cfg" / "pioide"

    def test_config_dir_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.user_config_dir() == tmp_path / ".config" / "pioide"

    def test_cache_dir_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
        assert paths.user_cache_dir() == tmp_path / "cache" / "pioide"

    def test_cache_dir_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.user_cache_dir() == tmp_path / ".cache" / "pioide"


class TestWindowsPaths:
    def test_appdata(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(paths, "is_windows", lambda: True)
        monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "Local"))

        assert paths.user_config_dir() == tmp_path / "Roaming" / "pioide"
        assert paths.user_cache_dir() == tmp_path / "Local" / "pioide"


class TestPlatform:
    def test_venv_layout(self) -> None:
        assert Platform.WINDOWS.venv_bin_dir == "Scripts"
        assert Platform.LINUX.venv_bin_dir == "bin"
        assert Platform.WINDOWS.exe_name("pio") == "pio.exe"
        assert Platform.MACOS.exe_name("pio") == "pio"

    def test_str(self) -> None:
        assert str(Platform.LINUX) == "linux"
