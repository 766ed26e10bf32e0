"""Configuration file handle stored under the user's home directory."""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any

from pydantic import TypeAdapter, ValidationError

from home_config import codecs
from home_config.codecs import Codec
from home_config.errors import (
    ConfigDecodeError,
    ConfigEncodeError,
    ConfigIOError,
    ConfigNotFoundError,
)
from home_config.paths import config_file_path, home_file_path

logger = logging.getLogger(__name__)

_PLAIN_DATA: TypeAdapter[Any] = TypeAdapter(Any)


@dataclass(frozen=True)
class HomeConfig:
    """A configuration file in the current user's home directory.

    The handle only holds the resolved path. Every method goes back to the
    filesystem, so a handle never goes stale.

    Example::

        config = HomeConfig.with_config_dir("app", "config.json")
        # Linux:   /home/name/.config/app/config.json
        # macOS:   /Users/name/.config/app/config.json
        # Windows: C:\\Users\\name\\AppData\\Roaming\\app\\config.json

        try:
            options = config.parse_json(Options)
        except ConfigNotFoundError:
            options = Options()
        config.save_json(options)
    """

    _path: Path

    @classmethod
    def with_config_dir(cls, app_name: str, file_name: str | PurePath) -> "HomeConfig":
        """Create a handle for ``~/.config/<app_name>/<file_name>``.

        Args:
            app_name: Name of the application owning the file.
            file_name: File path relative to the application's directory.

        Returns:
            The configuration handle.

        Raises:
            HomeDirError: If the home directory cannot be determined.
            ValueError: If ``app_name`` or ``file_name`` is not a valid relative name.
        """
        return cls(config_file_path(app_name, file_name))

    new = with_config_dir

    @classmethod
    def with_file(cls, relative_path: str | PurePath) -> "HomeConfig":
        """Create a handle for ``~/<relative_path>``.

        Args:
            relative_path: File path relative to the home directory.

        Returns:
            The configuration handle.

        Raises:
            HomeDirError: If the home directory cannot be determined.
            ValueError: If ``relative_path`` is absolute, empty or contains ``..``.
        """
        return cls(home_file_path(relative_path))

    @property
    def path(self) -> Path:
        """The absolute configuration file path."""
        return self._path

    def exists(self) -> bool:
        """Return whether the configuration file exists."""
        return self._path.is_file()

    def read_to_string(self, encoding: str = "utf-8") -> str:
        """Read the whole configuration file as text.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
        """
        logger.debug(f"Reading {self._path}")
        return self._path.read_text(encoding=encoding)

    def read_to_bytes(self) -> bytes:
        """Read the whole configuration file as bytes."""
        logger.debug(f"Reading {self._path}")
        return self._path.read_bytes()

    def save(self, content: str | bytes, encoding: str = "utf-8") -> None:
        """Replace the configuration file content.

        Missing parent directories are created. The content is written to a
        temporary file next to the target which then replaces it, so readers
        see either the old or the new content. When the path is a symlink the
        file it points to is replaced and the link is kept.

        Args:
            content: Text or bytes to write.
            encoding: Encoding used when ``content`` is text.

        Raises:
            OSError: If a directory or the file cannot be written.
        """
        if isinstance(content, str):
            content = content.encode(encoding)

        path = self._path.resolve()
        if path.exists():
            mode = stat.S_IMODE(path.stat().st_mode)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            mode = _new_file_mode()

        tmp_fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(tmp_fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError as exc:
                    logger.warning(f"Failed to remove temporary file {tmp_path}: {exc}")

        logger.debug(f"Wrote {len(content)} bytes to {path}")

    def delete(self) -> None:
        """Remove the configuration file; a missing file is not an error.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        try:
            self._path.unlink()
        except FileNotFoundError:
            logger.debug(f"Nothing to delete at {self._path}")
            return
        logger.debug(f"Deleted {self._path}")

    def parse(self, codec: Codec | str | None = None, model: Any = None) -> Any:
        """Decode the configuration file.

        Args:
            codec: Codec or codec name. Inferred from the file suffix when omitted.
            model: Optional target type (pydantic model, dataclass, typed dict, ...)
                the decoded data is validated into.

        Returns:
            The decoded data, or an instance of ``model``.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigIOError: If the file cannot be read.
            ConfigDecodeError: If the content is invalid or does not match ``model``.
            CodecUnavailableError: If the codec is not installed.
        """
        codec = self._codec(codec)
        try:
            content = self._path.read_bytes()
        except FileNotFoundError as exc:
            raise ConfigNotFoundError(self._path) from exc
        except OSError as exc:
            raise ConfigIOError(self._path, f"Failed to read configuration file ({exc})") from exc

        try:
            data = codec.decode(content)
        except codec.decode_errors as exc:
            raise ConfigDecodeError(self._path, codec.name, str(exc)) from exc

        logger.debug(f"Parsed {codec.name} configuration from {self._path}")
        if model is None:
            return data

        try:
            return TypeAdapter(model).validate_python(data)
        except ValidationError as exc:
            raise ConfigDecodeError(self._path, codec.name, str(exc)) from exc

    def save_as(self, value: Any, codec: Codec | str | None = None) -> None:
        """Encode a value and replace the configuration file with it.

        Args:
            value: Data to save. Pydantic models, dataclasses and other types
                pydantic can serialize are converted to plain data first.
            codec: Codec or codec name. Inferred from the file suffix when omitted.

        Raises:
            ConfigEncodeError: If the value cannot be represented in the format.
            ConfigIOError: If the file cannot be written.
            CodecUnavailableError: If the codec is not installed.
        """
        codec = self._codec(codec)
        try:
            data = _plain_data(value)
            content = codec.encode(data)
        except codec.encode_errors as exc:
            raise ConfigEncodeError(codec.name, str(exc)) from exc

        try:
            self.save(content)
        except OSError as exc:
            raise ConfigIOError(self._path, f"Failed to write configuration file ({exc})") from exc

    def parse_json(self, model: Any = None) -> Any:
        """Decode the configuration file as JSON."""
        return self.parse(codecs.JSON, model)

    def save_json(self, value: Any) -> None:
        """Save a value as indented JSON."""
        self.save_as(value, codecs.JSON)

    if codecs.YAML is not None:

        def parse_yaml(self, model: Any = None) -> Any:
            """Decode the configuration file as YAML."""
            return self.parse(codecs.YAML, model)

        def save_yaml(self, value: Any) -> None:
            """Save a value as block style YAML."""
            self.save_as(value, codecs.YAML)

    if codecs.TOML is not None:

        def parse_toml(self, model: Any = None) -> Any:
            """Decode the configuration file as TOML."""
            return self.parse(codecs.TOML, model)

        def save_toml(self, value: Any) -> None:
            """Save a mapping as TOML."""
            self.save_as(value, codecs.TOML)

    def _codec(self, codec: Codec | str | None) -> Codec:
        if codec is None:
            return codecs.codec_for_path(self._path)
        if isinstance(codec, str):
            return codecs.get_codec(codec)
        return codec


def _plain_data(value: Any) -> Any:
    """Convert a value into the dicts, lists and scalars codecs accept.

    Floats are passed through untouched so each codec decides whether it can
    store infinity and NaN.
    """
    return _normalize(_PLAIN_DATA.dump_python(value, mode="python"))


def _normalize(data: Any) -> Any:
    if isinstance(data, dict):
        return {_normalize(key): _normalize(item) for key, item in data.items()}
    if isinstance(data, (list, tuple, set, frozenset)):
        return [_normalize(item) for item in data]
    if data is None or type(data) in (str, int, float, bool):
        return data
    return _PLAIN_DATA.dump_python(data, mode="json")


def _new_file_mode() -> int:
    """Return the permission bits a newly created file gets under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
