import pytest

from zpoolctl import config as config_module
from zpoolctl.config import ZpoolctlConfig, get_config, reset_config


ENV_KEYS = ["LOG_LEVEL", "HOST", "PORT", "ENABLE_DOCS", "CORS_ORIGINS", "ZPOOL_CMD", "COMMAND_TIMEOUT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
        monkeypatch.delenv(f"ZPOOLCTL_{key}", raising=False)
    reset_config()
    yield
    reset_config()


class TestZpoolctlConfig:
    """Test suite for environment driven configuration."""

    def test_defaults(self):
        config = ZpoolctlConfig()

        assert config.server.log_level == "INFO"
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8000
        assert config.server.enable_docs is True
        assert config.server.cors_origins == ["*"]
        assert config.zpool.cmd_name == "zpool"
        assert config.zpool.command_timeout is None

    def test_plain_variables(self, monkeypatch):
        monkeypatch.setenv("ZPOOL_CMD", "/sbin/zpool")
        monkeypatch.setenv("COMMAND_TIMEOUT", "30")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("ENABLE_DOCS", "false")
        monkeypatch.setenv("CORS_ORIGINS", "http://a,http://b")

        config = ZpoolctlConfig()

        assert config.zpool.cmd_name == "/sbin/zpool"
        assert config.zpool.command_timeout == 30.0
        assert config.server.log_level == "DEBUG"
        assert config.server.port == 9000
        assert config.server.enable_docs is False
        assert config.server.cors_origins == ["http://a", "http://b"]

    def test_prefixed_alias(self, monkeypatch):
        monkeypatch.setenv("ZPOOLCTL_ZPOOL_CMD", "/opt/zfs/zpool")

        assert ZpoolctlConfig().zpool.cmd_name == "/opt/zfs/zpool"

    def test_plain_name_wins_over_prefix(self, monkeypatch):
        monkeypatch.setenv("ZPOOL_CMD", "/sbin/zpool")
        monkeypatch.setenv("ZPOOLCTL_ZPOOL_CMD", "/opt/zfs/zpool")

        assert ZpoolctlConfig().zpool.cmd_name == "/sbin/zpool"

    @pytest.mark.parametrize("key,value,attr,expected", [
        ("PORT", "not-a-port", "port", 8000),
        ("PORT", "70000", "port", 8000),
        ("LOG_LEVEL", "LOUD", "log_level", "INFO"),
    ])
    def test_invalid_server_values_fall_back(self, monkeypatch, key, value, attr, expected):
        monkeypatch.setenv(key, value)

        assert getattr(ZpoolctlConfig().server, attr) == expected

    @pytest.mark.parametrize("value", ["0", "-1", "soon"])
    def test_non_positive_or_invalid_timeout_means_no_timeout(self, monkeypatch, value):
        monkeypatch.setenv("COMMAND_TIMEOUT", value)

        assert ZpoolctlConfig().zpool.command_timeout is None

    def test_blank_command_falls_back(self, monkeypatch):
        monkeypatch.setenv("ZPOOL_CMD", "  ")

        assert ZpoolctlConfig().zpool.cmd_name == "zpool"

    def test_summary(self):
        summary = ZpoolctlConfig().get_summary()

        assert summary["zpool"] == {"cmd_name": "zpool", "command_timeout": None}
        assert summary["server"]["port"] == 8000


class TestGlobalConfig:

    def test_get_config_is_cached(self, monkeypatch):
        monkeypatch.setattr(config_module, "load_dotenv_if_exists", lambda: False)

        assert get_config() is get_config()

    def test_reset_config_reloads(self, monkeypatch):
        monkeypatch.setattr(config_module, "load_dotenv_if_exists", lambda: False)
        first = get_config()
        monkeypatch.setenv("ZPOOL_CMD", "/sbin/zpool")

        reset_config()

        assert get_config() is not first
        assert get_config().zpool.cmd_name == "/sbin/zpool"

    def test_dotenv_file_is_loaded(self, monkeypatch, tmp_path):
        # Registered so the value loaded from .env is removed on teardown
        monkeypatch.setenv("ZPOOL_CMD", "")
        monkeypatch.delenv("ZPOOL_CMD")
        (tmp_path / ".env").write_text("ZPOOL_CMD=/from/dotenv/zpool\n")
        monkeypatch.chdir(tmp_path)

        assert config_module.load_dotenv_if_exists() is True
        assert ZpoolctlConfig().zpool.cmd_name == "/from/dotenv/zpool"
