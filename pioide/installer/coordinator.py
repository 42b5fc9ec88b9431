"""Installation coordinator.

Each editor process builds one coordinator at activation and awaits
``ensure_ready()`` once. Processes coordinate only through the lock file in
the shared cache directory:

1. make sure the cache directory exists;
2. ask the version oracle; if the installed Core is current, stop here
   (no lock access, no writes);
3. if another process holds the lock, report that installation is
   suspended and do not install;
4. otherwise hold the lock while the install operation runs;
5. release, then force-clear the lock, whatever happened;
6. report and return the outcome.

Force-clearing at the end of every attempt heals a lock left behind by a
crashed process after one cycle. The flip side: a process that sees a live
installer's lock also clears it on its way out.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pioide.core.config import InstallerConfig
from pioide.core.result import Err, Result
from pioide.core.version import check_version

from .cache import ensure_cache_dir
from .lock import InstallLock
from .outcome import (
    AlreadyCurrent,
    InstallationFailed,
    InstallationOutcome,
    InstalledSuccessfully,
    SuspendedByOther,
)
from .platformio import InstallFailure, InstallOperation
from .reporter import FAILED, INSTALLED, INSTALLING, READY, SUSPENDED, VERIFYING, WARNING, ProgressReporter
from .state import INSTALLED_AT, INSTALLED_VERSION, LAST_CHECKED_VERSION, LAST_OUTCOME, StateStore

__all__ = ["SUSPENDED_MESSAGE", "InstallationCoordinator"]

SUSPENDED_MESSAGE = (
    "PlatformIO IDE installation has been suspended, because PlatformIO "
    "IDE Installer is already started in another window."
)


class InstallationCoordinator:
    """Guarantees a usable PlatformIO Core, installing it at most once at a time.

    Args:
        state: Persisted flags shared across processes. Read once here.
        config: Configuration snapshot.
        cache_dir: Absolute path of the shared cache directory.
        prerelease_channel: True if the running integration is a pre-release.
        install_operation: Performs the actual install.
        reporter: Receives progress notifications.
    """

    def __init__(
        self,
        state: StateStore,
        config: InstallerConfig,
        cache_dir: Path,
        prerelease_channel: bool,
        *,
        install_operation: InstallOperation,
        reporter: ProgressReporter,
    ) -> None:
        if not cache_dir.is_absolute():
            raise ValueError(f"cache_dir must be absolute: {cache_dir}")

        self._state = state
        self._flags = state.snapshot()
        self._config = config
        self._cache_dir = cache_dir
        self._prerelease_channel = prerelease_channel
        self._operation = install_operation
        self._reporter = reporter
        self._lock = InstallLock(cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def prerelease_channel(self) -> bool:
        return self._prerelease_channel

    @property
    def lock(self) -> InstallLock:
        return self._lock

    def installed_version(self) -> str | None:
        """Recorded Core version, trusted only if the executable is still there."""
        version = self._flags.get(INSTALLED_VERSION)
        if not version or not self._operation.is_present():
            return None
        return version

    async def ensure_ready(self) -> InstallationOutcome:
        """Make sure PlatformIO Core is installed and current.

        Never raises for install failures; they come back as
        InstallationFailed. Cancellation still propagates, after the lock
        has been cleaned up.
        """
        self._reporter.report(VERIFYING, "Verifying PlatformIO Core installation...")

        cache = ensure_cache_dir(self._cache_dir)
        if isinstance(cache, Err):
            return self._failed(str(cache.error))

        installed = self.installed_version()
        verdict = check_version(
            installed,
            self._config.core_version,
            prerelease_channel=self._prerelease_channel,
        )
        if verdict.current and installed is not None:
            self._reporter.report(READY, verdict.reason)
            return AlreadyCurrent(version=installed)

        try:
            if self._lock.is_held():
                return self._suspended()
            self._reporter.report(VERIFYING, verdict.reason)
            return await self._install()
        finally:
            self._clear_lock()

    def _suspended(self) -> InstallationOutcome:
        if self._config.notify_suspended:
            self._reporter.report(SUSPENDED, SUSPENDED_MESSAGE)
        outcome = SuspendedByOther()
        self._persist({LAST_OUTCOME: outcome.name})
        return outcome

    async def _install(self) -> InstallationOutcome:
        self._reporter.report(
            INSTALLING,
            "Installing PlatformIO Core... Please don't close this window "
            "until this process is completed.",
        )

        try:
            self._lock.acquire()
        except OSError as e:
            return self._failed(f"Cannot create install lock {self._lock.path}: {e}")

        try:
            result = await self._run_operation()
        finally:
            self._release_lock()

        if isinstance(result, Err):
            return self._failed(str(result.error))

        version = result.value
        self._persist(
            {
                INSTALLED_VERSION: version,
                INSTALLED_AT: datetime.now().isoformat(),
                LAST_CHECKED_VERSION: self._config.core_version,
                LAST_OUTCOME: InstalledSuccessfully.name,
            }
        )
        self._reporter.report(INSTALLED, f"PlatformIO Core {version} installed successfully.")
        return InstalledSuccessfully(version=version)

    async def _run_operation(self) -> Result[str, InstallFailure]:
        try:
            return await self._operation.install(
                self._cache_dir,
                prerelease=self._prerelease_channel,
            )
        except Exception as e:  # noqa: BLE001 - any install fault becomes an outcome
            return Err(InstallFailure("install", str(e) or type(e).__name__))

    def _failed(self, reason: str) -> InstallationOutcome:
        self._reporter.report(FAILED, f"Failed to install PlatformIO Core: {reason}")
        self._persist({LAST_OUTCOME: InstallationFailed.name})
        return InstallationFailed(reason=reason)

    def _release_lock(self) -> None:
        try:
            self._lock.release()
        except OSError as e:
            self._reporter.report(WARNING, f"Cannot release install lock {self._lock.path}: {e}")

    def _clear_lock(self) -> None:
        try:
            self._lock.clear()
        except OSError as e:
            self._reporter.report(WARNING, f"Cannot clear install lock {self._lock.path}: {e}")

    def _persist(self, values: dict[str, str]) -> None:
        try:
            self._state.update(values)
        except OSError as e:
            self._reporter.report(WARNING, f"Cannot save installer state: {e}")
            return
        self._flags.update(values)
