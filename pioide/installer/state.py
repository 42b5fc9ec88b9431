"""Persisted installer flags shared by every process on the machine.

Flags are small string markers ("which Core version did we install last",
"what happened last time") stored in a JSON file in the user config
directory. They are an advisory cache, not a correctness mechanism: other
processes may rewrite the file at any moment, the last write wins, and a
file that cannot be parsed reads as empty.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pioide.core.structured import as_str_dict
from pioide.platform.files import atomic_write_text
from pioide.platform.paths import user_config_dir

__all__ = [
    "INSTALLED_AT",
    "INSTALLED_VERSION",
    "LAST_CHECKED_VERSION",
    "LAST_OUTCOME",
    "JsonStateStore",
    "MemoryStateStore",
    "StateStore",
    "default_state_path",
]

INSTALLED_VERSION = "core.installed_version"
INSTALLED_AT = "core.installed_at"
LAST_OUTCOME = "installer.last_outcome"
LAST_CHECKED_VERSION = "installer.last_checked_version"


class StateStore(Protocol):
    """Key/value store for persisted flags."""

    def snapshot(self) -> dict[str, str]:
        """Return all flags as currently persisted."""
        ...

    def get(self, key: str) -> str | None: ...

    def update(self, values: Mapping[str, str]) -> None:
        """Merge values into the persisted flags."""
        ...


def default_state_path() -> Path:
    return user_config_dir() / "state.json"


class JsonStateStore:
    """StateStore backed by a JSON object file.

    update() is a read-merge-write: keys written concurrently by another
    process between the read and the write may be lost. Acceptable for an
    advisory cache.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def snapshot(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            # Missing, unreadable or not text: no usable flags
            return {}

        try:
            data = as_str_dict(json.loads(raw))
        except json.JSONDecodeError:
            # Corrupted or half-written by a foreign tool, start fresh
            return {}
        if data is None:
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self.snapshot().get(key)

    def update(self, values: Mapping[str, str]) -> None:
        data = self.snapshot()
        data.update(values)
        atomic_write_text(self._path, json.dumps(data, indent=2, sort_keys=True))


def _empty_flags() -> dict[str, str]:
    return {}


@dataclass
class MemoryStateStore:
    """In-process StateStore, for tests and embedding."""

    flags: dict[str, str] = field(default_factory=_empty_flags)
    writes: int = 0

    def snapshot(self) -> dict[str, str]:
        return dict(self.flags)

    def get(self, key: str) -> str | None:
        return self.flags.get(key)

    def update(self, values: Mapping[str, str]) -> None:
        self.flags.update(values)
        self.writes += 1
