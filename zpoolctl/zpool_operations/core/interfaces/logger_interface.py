"""
Logger seam used by zpool engines.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class ILogger(ABC):
    """Implementations provide ``log``; the level helpers route through it."""

    @abstractmethod
    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Emit ``message`` at ``level`` with ``extra`` as structured fields."""
        pass

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.ERROR, message, extra)
