"""
zpoolctl Configuration Module

Centralizes environment variable loading. Every setting can be given either
plainly (``LOG_LEVEL``) or with the ``ZPOOLCTL_`` prefix
(``ZPOOLCTL_LOG_LEVEL``); the plain name wins.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """HTTP server settings"""
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    enable_docs: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class ZpoolConfig:
    """Settings of the zpool(8) backend"""
    cmd_name: str = "zpool"
    # Seconds; None waits for zpool to finish however long it takes.
    command_timeout: Optional[float] = None


class ZpoolctlConfig:
    """
    zpoolctl configuration settings loaded from environment variables.

    Invalid values are logged and replaced by their defaults.
    """

    PREFIXES = ("", "ZPOOLCTL_")

    def __init__(self):
        self.server = ServerConfig()
        self.zpool = ZpoolConfig()

        self._load_environment_variables()
        self._validate_configuration()

    def _load_environment_variables(self):
        # ==== SERVER CONFIG ====
        self.server.log_level = self._get_string("LOG_LEVEL", self.server.log_level).upper()
        self.server.host = self._get_string("HOST", self.server.host)
        self.server.port = self._get_int("PORT", self.server.port)
        self.server.enable_docs = self._get_bool("ENABLE_DOCS", self.server.enable_docs)
        self.server.cors_origins = self._get_string("CORS_ORIGINS", "*").split(",")

        # ==== ZPOOL CONFIG ====
        self.zpool.cmd_name = self._get_string("ZPOOL_CMD", self.zpool.cmd_name)
        self.zpool.command_timeout = self._get_optional_float("COMMAND_TIMEOUT", self.zpool.command_timeout)

    def _get_string(self, key: str, default: str) -> str:
        """Get string value from environment with multiple key attempts"""
        for prefix in self.PREFIXES:
            value = os.getenv(f"{prefix}{key}")
            if value is not None:
                return value
        return default

    def _get_int(self, key: str, default: int) -> int:
        value = self._get_string(key, str(default))
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer value for {key}: {value}, using default: {default}")
            return default

    def _get_optional_float(self, key: str, default: Optional[float]) -> Optional[float]:
        value = self._get_string(key, "")
        if not value:
            return default
        try:
            timeout = float(value)
        except ValueError:
            logger.warning(f"Invalid number for {key}: {value}, using default: {default}")
            return default
        return timeout if timeout > 0 else None

    def _get_bool(self, key: str, default: bool) -> bool:
        value = self._get_string(key, str(default)).lower()
        return value in ("true", "1", "yes", "on")

    def _validate_configuration(self):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.server.log_level not in valid_levels:
            logger.warning(f"Invalid log level: {self.server.log_level}, using INFO")
            self.server.log_level = "INFO"

        if not (1 <= self.server.port <= 65535):
            logger.warning(f"Invalid port: {self.server.port}, using default: 8000")
            self.server.port = 8000

        if not self.zpool.cmd_name.strip():
            logger.warning("Empty ZPOOL_CMD, using zpool")
            self.zpool.cmd_name = "zpool"

    def get_summary(self) -> dict:
        return {
            "server": {
                "log_level": self.server.log_level,
                "host": self.server.host,
                "port": self.server.port,
                "enable_docs": self.server.enable_docs,
                "cors_origins": self.server.cors_origins,
            },
            "zpool": {
                "cmd_name": self.zpool.cmd_name,
                "command_timeout": self.zpool.command_timeout,
            },
        }


def load_dotenv_if_exists() -> bool:
    """Load the first .env file found in the working directory or project root"""
    env_files = [
        Path(".env"),
        Path(__file__).parent.parent / ".env",
    ]
    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file)
            logger.info(f"Environment variables loaded from: {env_file}")
            return True
    return False


_config: Optional[ZpoolctlConfig] = None


def get_config() -> ZpoolctlConfig:
    """Get the global configuration instance, loading it on first use"""
    global _config
    if _config is None:
        load_dotenv_if_exists()
        _config = ZpoolctlConfig()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it"""
    global _config
    _config = None
