"""
Concrete implementation of command executor interface.
"""
import logging
import subprocess
from typing import List, Optional

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult

TIMEOUT_EXIT_CODE = 124


class CommandExecutor(ICommandExecutor):
    """Runs commands synchronously, blocking the caller until they exit.

    Failures are reported through the returned CommandResult, never raised:
    a process that could not be launched carries the OSError in
    ``os_error``.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def execute(self, command: str, *args: str) -> CommandResult:
        return self._execute_command([command, *args])

    def _execute_command(self, command: List[str]) -> CommandResult:
        self.logger.debug(f"Executing command: {' '.join(command)}")
        try:
            process = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                returncode=TIMEOUT_EXIT_CODE,
                stdout=b"",
                stderr=f"Command timed out after {self.timeout} seconds".encode()
            )
        except OSError as e:
            self.logger.error(f"Command execution failed: {e}")
            return CommandResult(returncode=-1, stdout=b"", stderr=b"", os_error=e)

        if process.returncode != 0:
            self.logger.warning(
                f"Command failed with exit code {process.returncode}: "
                f"{process.stderr.decode('utf-8', errors='replace').strip()}"
            )

        return CommandResult(
            returncode=process.returncode,
            stdout=process.stdout,
            stderr=process.stderr
        )
