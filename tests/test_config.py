from pathlib import Path

import pytest

from waypoint.config import AppConfig, default_data_dir, get_config, reset_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in ("WAYPOINT_DATA_DIR", "WAYPOINT_AUTOSAVE",
                 "WAYPOINT_DARK_MODE", "WAYPOINT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestAppConfig:

    def test_defaults(self):
        config = AppConfig()
        assert config.autosave is True
        assert config.dark_mode is True
        assert config.log_level == "INFO"
        assert config.data_dir == default_data_dir()
        assert config.annotations_dir == config.data_dir / "annotations"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WAYPOINT_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("WAYPOINT_AUTOSAVE", "no")
        monkeypatch.setenv("WAYPOINT_DARK_MODE", "0")
        monkeypatch.setenv("WAYPOINT_LOG_LEVEL", "DEBUG")

        config = AppConfig()

        assert config.data_dir == tmp_path
        assert config.autosave is False
        assert config.dark_mode is False
        assert config.log_level == "DEBUG"

    def test_string_data_dir_becomes_path(self, tmp_path):
        assert AppConfig(data_dir=str(tmp_path)).data_dir == Path(tmp_path)

    def test_default_data_dir_is_named_after_app(self):
        assert default_data_dir("Example").name == "Example"


class TestGetConfig:

    def test_cached(self):
        assert get_config() is get_config()

    def test_reset_rereads_environment(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("WAYPOINT_AUTOSAVE", "false")
        reset_config()

        second = get_config()

        assert second is not first
        assert second.autosave is False
