"""PlatformIO Core installation coordination.

This package provides:
- Cache directory management (cache.py)
- The cross-process install lock (lock.py)
- Persisted installer flags (state.py)
- Outcome values and progress reporting (outcome.py, reporter.py)
- The PlatformIO Core install operation (platformio.py)
- The coordinator tying them together (coordinator.py)
"""

from pioide.installer.cache import CacheDirError, default_cache_dir, ensure_cache_dir
from pioide.installer.coordinator import InstallationCoordinator
from pioide.installer.lock import InstallLock, LockHolder
from pioide.installer.outcome import (
    AlreadyCurrent,
    InstallationFailed,
    InstallationOutcome,
    InstalledSuccessfully,
    SuspendedByOther,
    exit_code_for,
)
from pioide.installer.platformio import InstallFailure, InstallOperation, PlatformioCoreInstaller
from pioide.installer.reporter import ConsoleReporter, ProgressReporter, RecordingReporter
from pioide.installer.state import JsonStateStore, MemoryStateStore, StateStore

__all__ = [
    # Cache
    "CacheDirError",
    "default_cache_dir",
    "ensure_cache_dir",
    # Coordinator
    "InstallationCoordinator",
    # Lock
    "InstallLock",
    "LockHolder",
    # Outcome
    "AlreadyCurrent",
    "InstallationFailed",
    "InstallationOutcome",
    "InstalledSuccessfully",
    "SuspendedByOther",
    "exit_code_for",
    # Install operation
    "InstallFailure",
    "InstallOperation",
    "PlatformioCoreInstaller",
    # Reporting
    "ConsoleReporter",
    "ProgressReporter",
    "RecordingReporter",
    # State
    "JsonStateStore",
    "MemoryStateStore",
    "StateStore",
]
