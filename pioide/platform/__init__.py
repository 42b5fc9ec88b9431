"""Platform abstraction layer."""

from .detection import Platform, detect_platform, is_windows
from .files import atomic_write_text
from .paths import home, user_cache_dir, user_config_dir
from .process import ProcessError, run

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_windows",
    # files
    "atomic_write_text",
    # paths
    "home",
    "user_cache_dir",
    "user_config_dir",
    # process
    "ProcessError",
    "run",
]
