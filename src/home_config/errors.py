"""Exceptions raised by home-config."""

import errno
from pathlib import Path


class ConfigError(RuntimeError):
    """Configuration related errors."""


class HomeDirError(ConfigError):
    """The current user's home directory could not be determined."""


class CodecUnavailableError(ConfigError):
    """A codec is unknown or its serialization library is not installed."""


class ConfigIOError(ConfigError):
    """The configuration file could not be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class ConfigNotFoundError(ConfigIOError, FileNotFoundError):
    """The configuration file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Configuration file not found")
        self.errno = errno.ENOENT


class ConfigDecodeError(ConfigError):
    """The configuration file content is malformed or has the wrong shape."""

    def __init__(self, path: Path, codec: str, detail: str) -> None:
        super().__init__(f"Invalid {codec} configuration file {path}: {detail}")
        self.path = path
        self.codec = codec


class ConfigEncodeError(ConfigError):
    """A value cannot be represented in the target format."""

    def __init__(self, codec: str, detail: str) -> None:
        super().__init__(f"Cannot encode value as {codec}: {detail}")
        self.codec = codec
