"""Serialization codecs for configuration files.

Each codec turns plain data (dicts, lists, strings, numbers, booleans) into
bytes and back for one text format. JSON is always available; YAML and TOML
are registered only when their libraries are installed:

- YAML: ``pip install home-config[yaml]`` (PyYAML)
- TOML: ``pip install home-config[toml]`` (tomli-w, plus tomli before 3.11)
"""

import json
import logging
import sys
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any

from home_config.errors import CodecUnavailableError

logger = logging.getLogger(__name__)

try:
    import yaml
except ImportError:
    yaml = None

try:
    import tomli_w

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib
except ImportError:
    tomli_w = None
    tomllib = None


class Codec(ABC):
    """Encode and decode plain data for one serialization format."""

    name: str
    suffixes: tuple[str, ...]
    decode_errors: tuple[type[Exception], ...] = (ValueError,)
    encode_errors: tuple[type[Exception], ...] = (ValueError, TypeError)

    @abstractmethod
    def encode(self, data: Any) -> bytes:
        """Encode plain data into file content."""
        raise NotImplementedError

    @abstractmethod
    def decode(self, content: bytes) -> Any:
        """Decode file content into plain data."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class JsonCodec(Codec):
    """JSON with two-space indentation."""

    name = "json"
    suffixes = (".json",)

    def encode(self, data: Any) -> bytes:
        text = json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
        return (text + "\n").encode("utf-8")

    def decode(self, content: bytes) -> Any:
        return json.loads(content)


class YamlCodec(Codec):
    """Block style YAML through PyYAML's safe loader and dumper."""

    name = "yaml"
    suffixes = (".yaml", ".yml")

    def __init__(self) -> None:
        if yaml is None:
            raise CodecUnavailableError("YAML support requires PyYAML: pip install home-config[yaml]")
        self.decode_errors = (yaml.YAMLError, ValueError)
        self.encode_errors = (yaml.YAMLError, ValueError, TypeError)

    def encode(self, data: Any) -> bytes:
        text = yaml.safe_dump(data, allow_unicode=True, sort_keys=False, default_flow_style=False)
        return text.encode("utf-8")

    def decode(self, content: bytes) -> Any:
        return yaml.safe_load(content)


class TomlCodec(Codec):
    """TOML read with tomllib and written with tomli-w.

    TOML documents are tables, so only mappings can be encoded, and TOML has
    no null value.
    """

    name = "toml"
    suffixes = (".toml",)

    def __init__(self) -> None:
        if tomli_w is None:
            raise CodecUnavailableError("TOML support requires tomli-w: pip install home-config[toml]")

    def encode(self, data: Any) -> bytes:
        if not isinstance(data, dict):
            raise TypeError(f"TOML documents must be tables, got {type(data).__name__}")
        return tomli_w.dumps(data).encode("utf-8")

    def decode(self, content: bytes) -> Any:
        return tomllib.loads(content.decode("utf-8"))


def _build_registry() -> dict[str, Codec]:
    registry: dict[str, Codec] = {}
    for codec_cls in (JsonCodec, YamlCodec, TomlCodec):
        try:
            codec = codec_cls()
        except CodecUnavailableError as exc:
            logger.debug(f"Codec {codec_cls.name} disabled: {exc}")
            continue
        registry[codec.name] = codec
    return registry


_CODECS = _build_registry()

JSON: Codec = _CODECS["json"]
YAML: Codec | None = _CODECS.get("yaml")
TOML: Codec | None = _CODECS.get("toml")


def available_codecs() -> list[str]:
    """Return the names of the installed codecs.

    Returns:
        Codec names, JSON first.
    """
    return list(_CODECS)


def get_codec(name: str) -> Codec:
    """Return the codec registered under a name.

    Args:
        name: Codec name such as ``"json"``, ``"yaml"`` or ``"toml"``.

    Returns:
        The codec.

    Raises:
        CodecUnavailableError: If no installed codec has that name.
    """
    try:
        return _CODECS[name.lower()]
    except KeyError:
        raise CodecUnavailableError(
            f"No {name!r} codec available (installed: {', '.join(_CODECS)})"
        ) from None


def codec_for_path(path: str | PurePath) -> Codec:
    """Return the codec matching a file's suffix.

    Args:
        path: Configuration file path.

    Returns:
        The codec whose suffixes include the file's suffix.

    Raises:
        CodecUnavailableError: If the suffix is unknown or its codec is not installed.
    """
    suffix = PurePath(path).suffix.lower()
    for codec in _CODECS.values():
        if suffix in codec.suffixes:
            return codec
    raise CodecUnavailableError(f"No codec available for {str(path)!r}")
