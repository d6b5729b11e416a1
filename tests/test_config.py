"""Tests for API key loading and settings."""

from swell_forecast import config
from swell_forecast.config import Settings, get_settings, load_api_key


def test_load_api_key_reads_value(tmp_path):
    props = tmp_path / "local.properties"
    props.write_text("# surf settings\nAPI_KEY = abc123 \nOTHER=1\n")

    assert load_api_key(str(props)) == "abc123"


def test_load_api_key_keeps_equals_in_value(tmp_path):
    props = tmp_path / "local.properties"
    props.write_text("API_KEY=abc=def\n")

    assert load_api_key(str(props)) == "abc=def"


def test_load_api_key_missing_file(tmp_path):
    assert load_api_key(str(tmp_path / "nope.properties")) == ""


def test_load_api_key_empty_value(tmp_path):
    props = tmp_path / "local.properties"
    props.write_text("API_KEY=\n")

    assert load_api_key(str(props)) == ""


def test_get_settings_prefers_environment(monkeypatch, tmp_path):
    props = tmp_path / "local.properties"
    props.write_text("API_KEY=from-file\n")
    monkeypatch.setattr(config, "PROPERTIES_FILE", str(props))

    monkeypatch.setenv("API_KEY", "from-env")
    assert get_settings().api_key == "from-env"

    monkeypatch.setenv("API_KEY", "")
    assert get_settings().api_key == "from-file"


def test_settings_has_api_key():
    assert not Settings().has_api_key
    assert Settings(api_key="k").has_api_key
    assert Settings().timeout == 15.0
