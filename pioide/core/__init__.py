"""Core types: configuration, results, exit codes and the version oracle."""

from .config import ConfigError, InstallerConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .version import SemVer, VersionVerdict, check_version, is_prerelease, parse_version

__all__ = [
    # config
    "ConfigError",
    "InstallerConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # version
    "SemVer",
    "VersionVerdict",
    "check_version",
    "is_prerelease",
    "parse_version",
]
