"""Test configuration management."""

import json

import pytest

from basic_vfs.config import BasicVfsConfig, ConfigManager, CONFIG_FILE_NAME


class TestBasicVfsConfig:
    def test_defaults(self, config_home, monkeypatch):
        monkeypatch.delenv("BASIC_VFS_STRICT_IDS", raising=False)
        config = BasicVfsConfig()

        assert config.log_level == "INFO"
        assert config.strict_ids is False
        assert config.deletion_notices is True
        assert config.render_indent == 2

    def test_environment_overrides(self, config_home, monkeypatch):
        monkeypatch.setenv("BASIC_VFS_STRICT_IDS", "true")
        monkeypatch.setenv("BASIC_VFS_LOG_LEVEL", "DEBUG")

        config = BasicVfsConfig()

        assert config.strict_ids is True
        assert config.log_level == "DEBUG"

    def test_render_indent_must_be_positive(self, config_home):
        with pytest.raises(ValueError):
            BasicVfsConfig(render_indent=0)

    def test_is_test_env(self, config_home):
        # pytest sets PYTEST_CURRENT_TEST
        assert BasicVfsConfig().is_test_env is True

    def test_data_dir_follows_config_dir(self, config_home):
        assert BasicVfsConfig().data_dir_path == config_home / ".basic-vfs"


class TestConfigManager:
    def test_creates_default_file(self, config_home):
        manager = ConfigManager()
        config = manager.load_config()

        assert manager.config_file == config_home / ".basic-vfs" / CONFIG_FILE_NAME
        assert manager.config_file.exists()
        saved = json.loads(manager.config_file.read_text())
        assert saved["strict_ids"] == config.strict_ids

    def test_loads_file_values(self, config_home, monkeypatch):
        monkeypatch.delenv("BASIC_VFS_STRICT_IDS", raising=False)
        manager = ConfigManager()
        manager.config_file.write_text(json.dumps({"strict_ids": True, "render_indent": 4}))

        config = manager.load_config()

        assert config.strict_ids is True
        assert config.render_indent == 4

    def test_environment_wins_over_file(self, config_home, monkeypatch):
        manager = ConfigManager()
        manager.config_file.write_text(json.dumps({"log_level": "ERROR"}))
        monkeypatch.setenv("BASIC_VFS_LOG_LEVEL", "DEBUG")

        assert manager.load_config().log_level == "DEBUG"

    def test_cache_is_shared_and_invalidated_on_save(self, config_home):
        manager = ConfigManager()
        manager.config_file.write_text(json.dumps({"render_indent": 3}))

        first = manager.load_config()
        assert ConfigManager().load_config() is first

        manager.save_config(BasicVfsConfig(render_indent=5))
        assert manager.load_config().render_indent == 5

    def test_invalid_json_exits(self, config_home):
        manager = ConfigManager()
        manager.config_file.write_text("{not json")

        with pytest.raises(SystemExit):
            manager.load_config()
