"""Tests for structured configuration files."""

import json
import math
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from home_config import (
    ConfigDecodeError,
    ConfigEncodeError,
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    HomeConfig,
)


class Options(BaseModel):
    """Options stored by the tests."""

    name: str
    age: int


@dataclass
class Window:
    """A dataclass target type."""

    width: int
    height: int
    tags: list[str] = field(default_factory=list)


def test_json_record_round_trip(home: Path) -> None:
    """A record saved as JSON parses back equal."""
    config = HomeConfig.with_config_dir("test", "config.json")

    config.save_json(Options(name="XiaoMing", age=18))
    options = config.parse_json(Options)

    assert options == Options(name="XiaoMing", age=18)


def test_json_plain_data_round_trip(home: Path) -> None:
    """Plain data parses back without a target type."""
    config = HomeConfig.with_config_dir("test", "config.json")
    data = {"name": "XiaoMing", "age": 18, "langs": ["zh", "en"], "nested": {"ok": True, "none": None}}

    config.save_json(data)

    assert config.parse_json() == data


def test_json_dataclass_round_trip(home: Path) -> None:
    """Dataclasses are converted on save and rebuilt on parse."""
    config = HomeConfig.with_config_dir("test", "window.json")

    config.save_json(Window(width=800, height=600, tags=["main"]))

    assert config.parse_json(Window) == Window(width=800, height=600, tags=["main"])


def test_json_output_is_indented(home: Path) -> None:
    """JSON files are written for humans to edit."""
    config = HomeConfig.with_config_dir("test", "config.json")

    config.save_json({"name": "小明", "age": 18})

    text = config.read_to_string()
    assert '\n  "name": "小明"' in text
    assert json.loads(text) == {"name": "小明", "age": 18}


def test_parse_missing_file_raises_not_found(home: Path) -> None:
    """A missing file is reported separately from other failures."""
    config = HomeConfig.with_config_dir("test", "not.json")

    with pytest.raises(ConfigNotFoundError) as exc_info:
        config.parse_json(Options)

    error = exc_info.value
    assert isinstance(error, ConfigIOError)
    assert isinstance(error, FileNotFoundError)
    assert error.path == config.path


def test_parse_unreadable_file_raises_io_error(home: Path) -> None:
    """A path that cannot be read as a file is an I/O error, not a missing file."""
    config = HomeConfig.with_config_dir("test", "config.json")
    config.path.mkdir(parents=True)

    with pytest.raises(ConfigIOError) as exc_info:
        config.parse_json()

    assert not isinstance(exc_info.value, ConfigNotFoundError)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_parse_malformed_json_raises_decode_error(home: Path) -> None:
    """Broken content is a decode error."""
    config = HomeConfig.with_config_dir("test", "config.json")
    config.save('{"name": "XiaoMing",')

    with pytest.raises(ConfigDecodeError) as exc_info:
        config.parse_json()

    assert exc_info.value.codec == "json"
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


def test_parse_wrong_shape_raises_decode_error(home: Path) -> None:
    """Valid JSON that does not fit the target type is a decode error."""
    config = HomeConfig.with_config_dir("test", "config.json")
    config.save_json({"name": "XiaoMing", "age": "eighteen"})

    with pytest.raises(ConfigDecodeError) as exc_info:
        config.parse_json(Options)

    assert isinstance(exc_info.value.__cause__, ValidationError)


def test_save_unserializable_value_raises_encode_error(home: Path) -> None:
    """A value with no JSON form fails before anything is written."""
    config = HomeConfig.with_config_dir("test", "config.json")

    with pytest.raises(ConfigEncodeError):
        config.save_json({"handle": object()})

    assert not config.exists()


def test_save_into_blocked_directory_raises_io_error(home: Path) -> None:
    """Write failures are I/O errors, not encode errors."""
    (home / ".config").mkdir()
    (home / ".config" / "test").write_text("not a directory", encoding="utf-8")
    config = HomeConfig.with_config_dir("test", "config.json")

    with pytest.raises(ConfigIOError):
        config.save_json({"name": "XiaoMing"})


def test_save_overwrites_previous_document(home: Path) -> None:
    """A second save replaces the whole document."""
    config = HomeConfig.with_config_dir("test", "config.json")
    config.save_json({"name": "XiaoMing", "age": 18, "extra": "x" * 100})

    config.save_json({"name": "XiaoHong"})

    assert config.parse_json() == {"name": "XiaoHong"}


def test_all_errors_share_base_class(home: Path) -> None:
    """Callers can catch every structured failure with ``ConfigError``."""
    config = HomeConfig.with_config_dir("test", "config.json")

    with pytest.raises(ConfigError):
        config.parse_json()


def test_generic_parse_infers_codec_from_suffix(home: Path) -> None:
    """``save_as`` and ``parse`` pick the codec from the file name."""
    config = HomeConfig.with_config_dir("test", "config.json")

    config.save_as({"name": "XiaoMing"})

    assert json.loads(config.read_to_string()) == {"name": "XiaoMing"}
    assert config.parse() == {"name": "XiaoMing"}


def test_generic_parse_accepts_codec_name(home: Path) -> None:
    """A codec name overrides the file suffix."""
    config = HomeConfig.with_file(".testrc")

    config.save_as({"age": 18}, "json")

    assert config.parse("json") == {"age": 18}
    assert config.parse("json", dict[str, int]) == {"age": 18}


@pytest.mark.parametrize("number", [math.inf, -math.inf, math.nan])
def test_json_rejects_non_finite_floats(home: Path, number: float) -> None:
    """JSON has no infinity or NaN, so saving one is an encode error."""
    config = HomeConfig.with_config_dir("test", "config.json")

    with pytest.raises(ConfigEncodeError):
        config.save_json({"x": number})

    assert not config.exists()


def test_json_rejects_non_finite_floats_in_models(home: Path) -> None:
    """Model fields are checked the same way as plain data."""

    class Limits(BaseModel):
        ceiling: float

    config = HomeConfig.with_config_dir("test", "config.json")

    with pytest.raises(ConfigEncodeError):
        config.save_json(Limits(ceiling=math.inf))


def test_json_keeps_non_plain_scalars_serializable(home: Path) -> None:
    """Dates, tuples and sets are still turned into JSON values."""
    config = HomeConfig.with_config_dir("test", "config.json")

    config.save_json({"day": date(2024, 1, 2), "pair": (1, 2), "tags": {"a"}})

    assert config.parse_json() == {"day": "2024-01-02", "pair": [1, 2], "tags": ["a"]}
