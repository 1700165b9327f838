"""
Engine factory for dependency injection and engine creation.
"""
import threading
from typing import Dict, Any, Optional

from ...config import get_config
from ..core.interfaces.logger_interface import ILogger
from ..core.interfaces.zpool_engine import ZpoolEngine
from ..infrastructure.command_executor import CommandExecutor
from ..infrastructure.logging.structured_logger import ContextLogger
from ..infrastructure.zpool_open3 import ZpoolOpen3, DEFAULT_ZPOOL_CMD


class EngineFactory:
    """Creates engines sharing one executor and one logger per name."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config = config or {}
        self._logger_instances: Dict[str, ILogger] = {}
        self._lock = threading.Lock()
        self._executor = CommandExecutor(timeout=self._config.get('command_timeout'))

    def create_zpool_engine(self) -> ZpoolEngine:
        """Create a zpool(8) backed engine with injected dependencies."""
        return ZpoolOpen3(
            cmd_name=self._config.get('zpool_cmd', DEFAULT_ZPOOL_CMD),
            executor=self._executor,
            logger=self._get_logger("zpoolctl.zpool", zpool_module="zpool", zpool_impl="open3")
        )

    def _get_logger(self, name: str, **context: Any) -> ILogger:
        with self._lock:
            if name not in self._logger_instances:
                self._logger_instances[name] = ContextLogger(
                    name=name,
                    level=self._config.get('log_level', 'INFO'),
                    context=context
                )
            return self._logger_instances[name]

    def get_config(self) -> Dict[str, Any]:
        return self._config.copy()


class EngineFactoryBuilder:
    """Builder for creating EngineFactory instances with fluent configuration."""

    def __init__(self):
        self._config: Dict[str, Any] = {}

    def with_zpool_cmd(self, cmd_name: str) -> 'EngineFactoryBuilder':
        self._config['zpool_cmd'] = cmd_name
        return self

    def with_command_timeout(self, timeout: Optional[float]) -> 'EngineFactoryBuilder':
        self._config['command_timeout'] = timeout
        return self

    def with_log_level(self, level: str) -> 'EngineFactoryBuilder':
        self._config['log_level'] = level
        return self

    def build(self) -> EngineFactory:
        return EngineFactory(self._config)


def create_engine_factory_from_config() -> EngineFactory:
    """Create an engine factory from the environment configuration."""
    config = get_config()
    return EngineFactoryBuilder() \
        .with_zpool_cmd(config.zpool.cmd_name) \
        .with_command_timeout(config.zpool.command_timeout) \
        .with_log_level(config.server.log_level) \
        .build()
