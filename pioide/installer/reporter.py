"""Progress reporting for the install coordinator.

The coordinator emits ``(phase, message)`` notifications and never looks at
what the reporter does with them. A reporter that fails must not take the
install down with it, so adapters swallow their own errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from pioide.output.console import ConsoleProtocol, Style

__all__ = [
    "FAILED",
    "INSTALLED",
    "INSTALLING",
    "READY",
    "SUSPENDED",
    "VERIFYING",
    "WARNING",
    "ConsoleReporter",
    "ProgressEvent",
    "ProgressReporter",
    "RecordingReporter",
]

VERIFYING = "verifying"
READY = "ready"
SUSPENDED = "suspended"
INSTALLING = "installing"
INSTALLED = "installed"
FAILED = "failed"
WARNING = "warning"


class ProgressReporter(Protocol):
    def report(self, phase: str, message: str) -> None: ...


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    phase: str
    message: str


class ConsoleReporter:
    """Render progress on a console.

    Success is quiet, contention is an informational notice and failure is
    an explicit error line.
    """

    def __init__(self, console: ConsoleProtocol, *, verbose: bool = False) -> None:
        self._console = console
        self._verbose = verbose

    def report(self, phase: str, message: str) -> None:
        try:
            self._render(phase, message)
        except Exception:  # noqa: BLE001 - reporting must never fail the install
            pass

    def _render(self, phase: str, message: str) -> None:
        match phase:
            case "failed":
                self._console.error(message)
            case "warning":
                self._console.warning(message)
            case "suspended":
                self._console.info(message)
            case "installed":
                self._console.success(message)
            case "installing":
                self._console.print(message, Style.HEADER)
            case _:
                if self._verbose:
                    self._console.print(message, Style.DIM)


def _empty_events() -> list[ProgressEvent]:
    return []


@dataclass
class RecordingReporter:
    """Reporter that keeps every event, in order."""

    events: list[ProgressEvent] = field(default_factory=_empty_events)

    def report(self, phase: str, message: str) -> None:
        self.events.append(ProgressEvent(phase, message))

    @property
    def phases(self) -> list[str]:
        return [e.phase for e in self.events]

    def last(self) -> ProgressEvent | None:
        return self.events[-1] if self.events else None
