from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass


@dataclass
class CommandResult:
    """Raw outcome of a command execution.

    ``os_error`` is set when the process could not be launched at all; in
    that case ``returncode`` is -1 and both streams are empty.
    """
    returncode: int
    stdout: bytes
    stderr: bytes
    os_error: Optional[OSError] = None

    @property
    def success(self) -> bool:
        return self.os_error is None and self.returncode == 0


class ICommandExecutor(ABC):
    """Interface for blocking command execution"""

    @abstractmethod
    def execute(self, command: str, *args: str) -> CommandResult:
        """Run ``command`` with ``args`` and wait for it to finish"""
        pass
