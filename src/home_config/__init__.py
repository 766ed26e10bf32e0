"""home-config - use configuration files in the user's home directory."""

from home_config.codecs import Codec, available_codecs, codec_for_path, get_codec
from home_config.errors import (
    CodecUnavailableError,
    ConfigDecodeError,
    ConfigEncodeError,
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    HomeDirError,
)
from home_config.store import HomeConfig

__all__ = [
    "HomeConfig",
    "Codec",
    "available_codecs",
    "codec_for_path",
    "get_codec",
    "ConfigError",
    "HomeDirError",
    "CodecUnavailableError",
    "ConfigIOError",
    "ConfigNotFoundError",
    "ConfigDecodeError",
    "ConfigEncodeError",
]
