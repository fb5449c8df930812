import json

import pytest

from emiglio.config import Config, get_config
from emiglio.jsonparser import JsonParseError


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return Config()


def test_default_paths_follow_home(config, tmp_path):
    assert config.config_dir == f"{tmp_path}/config/settings/Emiglio"
    assert config.data_dir == f"{tmp_path}/config/settings/Emiglio/data"
    assert config.recipes_dir == f"{tmp_path}/config/settings/Emiglio/recipes"
    assert config.log_file == f"{tmp_path}/config/settings/Emiglio/emilio.log"


def test_default_home_fallback(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    assert Config().config_dir == "/boot/home/config/settings/Emiglio"


def test_default_values(config):
    assert config.get_string("app.name") == "Emiglio"
    assert config.get_string("app.version") == "1.0.0"
    assert config.get_string("log.level") == "INFO"
    assert config.get_string("log.file") == config.log_file
    assert config.loaded is False


def test_missing_keys_return_defaults(config):
    assert config.get_string("nope", "fallback") == "fallback"
    assert config.get_int("nope", 9) == 9
    assert config.get_double("nope", 2.5) == 2.5
    assert config.get_bool("nope", True) is True
    assert config.has("nope") is False


def test_int_parsing(config):
    config.set_string("a", "42")
    config.set_string("b", "12abc")
    config.set_string("c", "abc")
    config.set_string("d", "99999999999")
    assert config.get_int("a") == 42
    assert config.get_int("b") == 12
    assert config.get_int("c", 5) == 5
    assert config.get_int("d", 7) == 7


def test_double_parsing(config):
    config.set_string("a", "3.25")
    config.set_string("b", "x")
    assert config.get_double("a") == 3.25
    assert config.get_double("b", 1.5) == 1.5


def test_set_double_uses_fixed_six_decimals(config):
    config.set_double("ratio", 1.5)
    assert config.get_string("ratio") == "1.500000"
    assert config.get_double("ratio") == 1.5


def test_bool_values(config):
    config.set_bool("on", True)
    config.set_bool("off", False)
    config.set_string("one", "1")
    config.set_string("yes", "yes")
    assert config.get_string("on") == "true"
    assert config.get_bool("on") is True
    assert config.get_bool("off", True) is False
    assert config.get_bool("one") is True
    assert config.get_bool("yes", True) is False


def test_set_int_round_trip(config):
    config.set_int("count", -17)
    assert config.get_int("count") == -17
    assert config.has("count")


def test_string_array(config):
    config.set_string("ex.0", "binance")
    config.set_string("ex.1", "kraken")
    config.set_string("ex.3", "skipped")
    assert config.get_string_array("ex") == ["binance", "kraken"]
    assert config.get_string_array("missing") == []


def test_load_flattens_nested(config, tmp_path):
    path = tmp_path / "nested.json"
    path.write_text(
        json.dumps({"log": {"level": "DEBUG"}, "exchanges": ["a", "b"], "x": {"y": 3}}),
        encoding="utf-8",
    )
    config.load(path)
    assert config.get_string("log.level") == "DEBUG"
    assert config.get_string_array("exchanges") == ["a", "b"]
    assert config.get_int("x.y") == 3


def test_load_missing_file(config, tmp_path):
    with pytest.raises(FileNotFoundError):
        config.load(tmp_path / "absent.json")
    assert config.loaded is False
    assert config.get_string("app.name") == "Emiglio"


def test_load_invalid_json(config, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"a": ', encoding="utf-8")
    with pytest.raises(JsonParseError):
        config.load(path)
    assert config.loaded is False


def test_save_to_unwritable_path(config, tmp_path):
    with pytest.raises(OSError):
        config.save(tmp_path / "no" / "such" / "dir.json")


def test_get_config_is_shared():
    get_config().set_string("test.shared.marker", "shared-value")
    assert get_config().get_string("test.shared.marker") == "shared-value"
    assert get_config().has("test.shared.marker") is True
    assert get_config().get_string("app.name") == "Emiglio"