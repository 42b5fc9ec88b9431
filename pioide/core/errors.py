"""Exit codes for the pioide CLI.

Every command maps its final state onto one of these codes so that editor
glue and shell scripts can branch on the process status alone.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    Values are part of the CLI contract and must stay stable:
    - 0: Success (toolchain current, installed, or installation deferred)
    - 1: User error (bad option, unreadable config)
    - 2: Environment error (installation failed, cache dir unusable)
    - 5: I/O error (lock or state file could not be touched)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
