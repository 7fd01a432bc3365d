"""Tests for layered configuration."""

import pytest

from check_iostat.core import config as config_module
from check_iostat.core.context import Context
from check_iostat.core.config import DEFAULTS, load_config, load_config_file


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_missing_file(self, tmp_path):
        """A missing file contributes nothing."""
        assert load_config_file(tmp_path / "absent.yaml") == {}

    def test_invalid_yaml(self, tmp_path):
        """Unparsable YAML contributes nothing."""
        path = tmp_path / "bad.yaml"
        path.write_text("warning: [1, 2\n")
        assert load_config_file(path) == {}

    def test_non_mapping(self, tmp_path):
        """A YAML document that is not a mapping is ignored."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        assert load_config_file(path) == {}


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, mock_context):
        """Without config files the built-in defaults apply."""
        assert load_config(mock_context()) == DEFAULTS

    def test_user_config(self, mock_context, tmp_path):
        """~/.config/check_iostat/config.yaml is read."""
        user_config = tmp_path / ".config" / "check_iostat" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("interval: 3\nmount_table: /etc/mtab\n")

        settings = load_config(mock_context(home=tmp_path))

        assert settings["interval"] == 3
        assert settings["mount_table"] == "/etc/mtab"
        assert settings["warning"] == [1000, 5000]

    def test_precedence(self, mock_context, tmp_path, monkeypatch):
        """Env file beats user config, which beats system config."""
        system = tmp_path / "system.yaml"
        system.write_text("interval: 1\niostat: /sys/iostat\nlog_dir: /var/log/probe\n")
        monkeypatch.setattr(config_module, "SYSTEM_CONFIG", system)

        user_config = tmp_path / "home" / ".config" / "check_iostat" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("interval: 2\niostat: /user/iostat\n")

        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("interval: 3\n")

        ctx = mock_context(
            home=tmp_path / "home",
            env={"CHECK_IOSTAT_CONFIG": str(explicit)},
        )
        settings = load_config(ctx)

        assert settings["interval"] == 3
        assert settings["iostat"] == "/user/iostat"
        assert settings["log_dir"] == "/var/log/probe"

    def test_unknown_keys_ignored(self, mock_context, tmp_path):
        """Keys the probe doesn't know are dropped."""
        path = tmp_path / "c.yaml"
        path.write_text("colour: blue\n")

        settings = load_config(mock_context(env={"CHECK_IOSTAT_CONFIG": str(path)}))

        assert "colour" not in settings


    @pytest.mark.parametrize("content", [
        "mount_table:\n",
        "iostat:\n",
        "mount_table: ''\niostat: 7\n",
        "mount_table: [/proc/mounts]\n",
        "log_dir: 5\n",
    ])
    def test_non_string_paths_ignored(self, tmp_path, monkeypatch, content):
        """Null or non-string path and command values keep the defaults."""
        path = tmp_path / "c.yaml"
        path.write_text(content)
        monkeypatch.setenv("CHECK_IOSTAT_CONFIG", str(path))
        monkeypatch.setenv("HOME", str(tmp_path))

        settings = load_config(Context())

        assert settings["mount_table"] == "/proc/mounts"
        assert settings["iostat"] == "iostat"
        assert settings["log_dir"] is None

    def test_log_dir_can_be_cleared(self, mock_context, tmp_path, monkeypatch):
        """A lower layer's log_dir can be reset to null by a higher one."""
        system = tmp_path / "system.yaml"
        system.write_text("log_dir: /var/log/probe\n")
        monkeypatch.setattr(config_module, "SYSTEM_CONFIG", system)
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("log_dir:\n")

        settings = load_config(mock_context(env={"CHECK_IOSTAT_CONFIG": str(explicit)}))

        assert settings["log_dir"] is None
