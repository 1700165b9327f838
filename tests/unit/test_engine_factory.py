from zpoolctl import config as config_module
from zpoolctl.config import reset_config
from zpoolctl.zpool_operations.factories.engine_factory import (
    EngineFactory,
    EngineFactoryBuilder,
    create_engine_factory_from_config,
)
from zpoolctl.zpool_operations.infrastructure.zpool_open3 import ZpoolOpen3


class TestEngineFactory:
    """Test suite for engine creation and dependency sharing."""

    def test_builder_configures_engine(self):
        factory = EngineFactoryBuilder() \
            .with_zpool_cmd("/sbin/zpool") \
            .with_command_timeout(12.5) \
            .with_log_level("DEBUG") \
            .build()

        engine = factory.create_zpool_engine()

        assert isinstance(engine, ZpoolOpen3)
        assert engine.cmd_name == "/sbin/zpool"
        assert engine._executor.timeout == 12.5
        assert factory.get_config()["log_level"] == "DEBUG"

    def test_engines_share_executor_and_logger(self):
        factory = EngineFactory()

        first = factory.create_zpool_engine()
        second = factory.create_zpool_engine()

        assert first is not second
        assert first._executor is second._executor
        assert first._logger is second._logger

    def test_defaults(self):
        engine = EngineFactory().create_zpool_engine()

        assert engine.cmd_name == "zpool"
        assert engine._executor.timeout is None

    def test_get_config_returns_copy(self):
        factory = EngineFactory({"zpool_cmd": "zpool"})

        factory.get_config()["zpool_cmd"] = "changed"

        assert factory.get_config()["zpool_cmd"] == "zpool"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setattr(config_module, "load_dotenv_if_exists", lambda: False)
        monkeypatch.setenv("ZPOOL_CMD", "/opt/zfs/zpool")
        monkeypatch.setenv("COMMAND_TIMEOUT", "60")
        reset_config()
        try:
            engine = create_engine_factory_from_config().create_zpool_engine()
        finally:
            reset_config()

        assert engine.cmd_name == "/opt/zfs/zpool"
        assert engine._executor.timeout == 60.0
