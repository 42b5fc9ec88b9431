"""Outcome of one ensure_ready() call.

Exactly one of four values is produced per call. Failures are returned, not
raised, so the caller decides how to abort dependent work:

    match await coordinator.ensure_ready():
        case InstallationFailed(reason=reason):
            show_blocking_error(reason)
        case SuspendedByOther():
            show_notice("another window is installing")
        case _:
            pass
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from pioide.core.errors import ErrorCode

__all__ = [
    "AlreadyCurrent",
    "InstallationFailed",
    "InstallationOutcome",
    "InstalledSuccessfully",
    "SuspendedByOther",
    "exit_code_for",
]


@dataclass(frozen=True, slots=True)
class AlreadyCurrent:
    """The installed Core satisfies the requirement; nothing was done."""

    name: ClassVar[str] = "already_current"
    version: str
    ok: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class SuspendedByOther:
    """Another process holds the install lock; this one deferred to it."""

    name: ClassVar[str] = "suspended_by_other"
    ok: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class InstalledSuccessfully:
    """This process installed the Core.

    Attributes:
        version: Version reported by the freshly installed Core.
    """

    name: ClassVar[str] = "installed"
    version: str
    ok: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class InstallationFailed:
    """The attempt failed; dependent features must not start.

    Attributes:
        reason: Underlying failure message, suitable for display.
    """

    name: ClassVar[str] = "failed"
    reason: str
    ok: ClassVar[bool] = False


InstallationOutcome: TypeAlias = AlreadyCurrent | SuspendedByOther | InstalledSuccessfully | InstallationFailed


def exit_code_for(outcome: InstallationOutcome) -> ErrorCode:
    """Map an outcome to the CLI exit code. Contention is not an error."""
    if isinstance(outcome, InstallationFailed):
        return ErrorCode.ENV_ERROR
    return ErrorCode.OK
