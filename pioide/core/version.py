"""Version oracle: is the installed PlatformIO Core the one we need?

Everything here is pure. Callers gather the inputs (the integration's own
version, the required Core version, whatever locally recorded installed
version exists) and get back a verdict. Nothing here touches the disk or the
network, and nothing here raises on bad input: an unknown or malformed
version always means "not current", so the worst case is an unneeded
reinstall check, never a skipped install.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "SemVer",
    "VersionVerdict",
    "check_version",
    "is_prerelease",
    "parse_version",
]

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*)?$"
)
# pip publishes Core pre-releases as 6.1.17a2 / 6.1.17rc1.
_PEP440_PRE_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(a|b|rc)(0|[1-9]\d*)$")


@dataclass(frozen=True, slots=True)
class SemVer:
    """Parsed version. Build metadata is dropped, it never affects precedence."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def precedence(self) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
        """Sort key following semver precedence rules.

        A release sorts after every pre-release of the same triple; numeric
        identifiers sort numerically and before alphanumeric ones.
        """
        idents = tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in self.prerelease)
        return (self.major, self.minor, self.patch, 0 if self.prerelease else 1, idents)

    def __lt__(self, other: SemVer) -> bool:
        return self.precedence < other.precedence

    def __le__(self, other: SemVer) -> bool:
        return self.precedence <= other.precedence

    def __gt__(self, other: SemVer) -> bool:
        return self.precedence > other.precedence

    def __ge__(self, other: SemVer) -> bool:
        return self.precedence >= other.precedence

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{'.'.join(self.prerelease)}"
        return base


def parse_version(text: str | None) -> SemVer | None:
    """Parse a version string, returning None when it is absent or malformed."""
    if not text:
        return None
    s = text.strip()

    m = _SEMVER_RE.match(s)
    if m is not None:
        pre = tuple(m.group(4).split(".")) if m.group(4) else ()
        return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre)

    m = _PEP440_PRE_RE.match(s)
    if m is not None:
        return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), (m.group(4), m.group(5)))

    return None


def is_prerelease(text: str | None) -> bool:
    """True if text is a valid version carrying a pre-release suffix.

    "2.1.0-beta.1" -> True, "2.1.0" -> False, "garbage" -> False.
    """
    v = parse_version(text)
    return v is not None and v.is_prerelease


@dataclass(frozen=True, slots=True)
class VersionVerdict:
    """Outcome of a version check.

    Attributes:
        current: True if the installed toolchain can be used as is.
        prerelease_channel: Channel the verdict was computed for.
        reason: Short human-readable explanation, for progress messages.
    """

    current: bool
    prerelease_channel: bool
    reason: str


def check_version(
    installed: str | None,
    required: str,
    *,
    prerelease_channel: bool,
) -> VersionVerdict:
    """Decide whether the installed Core satisfies the required version.

    Current means: same major version, not older than required and, on the
    stable channel, not a pre-release build.
    """

    def verdict(current: bool, reason: str) -> VersionVerdict:
        return VersionVerdict(current=current, prerelease_channel=prerelease_channel, reason=reason)

    if not installed:
        return verdict(False, "PlatformIO Core is not installed")

    have = parse_version(installed)
    if have is None:
        return verdict(False, f"unrecognized installed version: {installed!r}")

    want = parse_version(required)
    if want is None:
        return verdict(False, f"unrecognized required version: {required!r}")

    if have.major != want.major:
        return verdict(False, f"installed {have} is not compatible with {want}")
    if have < want:
        return verdict(False, f"installed {have} is older than {want}")
    if have.is_prerelease and not prerelease_channel:
        return verdict(False, f"installed {have} is a pre-release build")

    return verdict(True, f"PlatformIO Core {have} is up to date")
