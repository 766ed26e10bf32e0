"""Filesystem paths for per-user configuration files."""

import logging
import sys
from pathlib import Path, PurePath

from platformdirs import user_config_dir

from home_config.errors import HomeDirError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".config"


def home_dir() -> Path:
    """Return the current user's home directory.

    Returns:
        The absolute home directory path.

    Raises:
        HomeDirError: If the home directory cannot be determined.
    """
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise HomeDirError(f"Could not determine the home directory: {exc}") from exc

    if not home.is_absolute():
        raise HomeDirError(f"Home directory is not an absolute path: {home}")
    return home


def config_dir(app_name: str) -> Path:
    """Return the configuration directory of an application.

    Args:
        app_name: Name of the application owning the directory.

    Returns:
        ``~/.config/<app_name>``, or the roaming application data folder on Windows.
    """
    _check_app_name(app_name)
    if sys.platform == "win32":
        # platformdirs reads the shell folder; still fail loudly without a home.
        home_dir()
        return Path(user_config_dir(app_name, appauthor=False, roaming=True))
    return home_dir() / CONFIG_DIR_NAME / app_name


def config_file_path(app_name: str, file_name: str | PurePath) -> Path:
    """Return the path of a file inside an application's configuration directory.

    Args:
        app_name: Name of the application owning the file.
        file_name: File path relative to the configuration directory.

    Returns:
        The configuration file path.
    """
    path = config_dir(app_name) / _relative(file_name)
    logger.debug(f"Resolved config file for {app_name}: {path}")
    return path


def home_file_path(relative_path: str | PurePath) -> Path:
    """Return the path of a file directly under the home directory.

    Args:
        relative_path: File path relative to the home directory.

    Returns:
        The home file path.
    """
    path = home_dir() / _relative(relative_path)
    logger.debug(f"Resolved home file: {path}")
    return path


def _check_app_name(app_name: str) -> None:
    parts = PurePath(app_name).parts
    if len(parts) != 1 or parts[0] in (".", "..") or PurePath(app_name).anchor:
        raise ValueError(f"Application name must be a single path component: {app_name!r}")


def _relative(path: str | PurePath) -> PurePath:
    """Validate a caller supplied relative path.

    Args:
        path: Path to validate.

    Returns:
        The path as a ``PurePath``.
    """
    pure = PurePath(path)
    if pure.is_absolute() or pure.anchor:
        raise ValueError(f"Expected a relative path, got {str(path)!r}")
    if not pure.parts:
        raise ValueError("Expected a non-empty file path")
    if ".." in pure.parts:
        raise ValueError(f"Path must not leave its base directory: {str(path)!r}")
    return pure
