from enum import Enum
from typing import Dict, Any, Optional


class ZpoolErrorKind(Enum):
    """Comparable tag of a ZpoolError.

    Some errors wrap payloads that do not compare meaningfully (an OSError
    for instance), so callers and tests branch on the kind instead.
    """
    COMMAND_NOT_FOUND = "CommandNotFound"
    IO = "Io"
    POOL_NOT_FOUND = "PoolNotFound"
    INVALID_TOPOLOGY = "InvalidTopology"
    VDEV_REUSE = "VdevReuse"
    PARSE_ERROR = "ParseError"
    DEVICE_TOO_SMALL = "DeviceTooSmall"
    PERMISSION_DENIED = "PermissionDenied"
    OTHER = "Other"


class ZpoolError(Exception):
    """Base exception for all zpool operations"""

    kind: ZpoolErrorKind = ZpoolErrorKind.OTHER

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'kind': self.kind.value,
            'message': str(self),
            'error_code': self.error_code,
            'details': self.details
        }


class CommandNotFoundError(ZpoolError):
    """The zpool executable could not be found"""

    kind = ZpoolErrorKind.COMMAND_NOT_FOUND

    def __init__(self, command: str = "zpool"):
        super().__init__(
            f"Command '{command}' not found",
            error_code="COMMAND_NOT_FOUND",
            details={"command": command}
        )
        self.command = command


class ZpoolIOError(ZpoolError):
    """Launching or talking to the zpool process failed"""

    kind = ZpoolErrorKind.IO

    def __init__(self, cause: OSError):
        super().__init__(
            f"I/O error: {cause}",
            error_code="IO_ERROR",
            details={"errno": cause.errno, "strerror": cause.strerror}
        )
        self.cause = cause
        self.__cause__ = cause


class PoolNotFoundError(ZpoolError):
    """Trying to manipulate a pool that does not exist"""

    kind = ZpoolErrorKind.POOL_NOT_FOUND

    def __init__(self, pool_name: str):
        super().__init__(
            f"Pool '{pool_name}' not found",
            error_code="POOL_NOT_FOUND",
            details={"pool_name": pool_name}
        )
        self.pool_name = pool_name


class InvalidTopologyError(ZpoolError):
    """Topology failed validation before create"""

    kind = ZpoolErrorKind.INVALID_TOPOLOGY

    def __init__(self, pool_name: str = ""):
        message = "Invalid topology"
        if pool_name:
            message += f" for pool '{pool_name}'"
        super().__init__(
            message,
            error_code="INVALID_TOPOLOGY",
            details={"pool_name": pool_name}
        )
        self.pool_name = pool_name


class VdevReuseError(ZpoolError):
    """One or more vdevs already belong to an active pool.

    Some platforms report the condition without naming the device or the
    pool; both fields are empty strings then.
    """

    kind = ZpoolErrorKind.VDEV_REUSE

    def __init__(self, vdev: str, pool: str):
        super().__init__(
            f"{vdev} is part of {pool}",
            error_code="VDEV_REUSE",
            details={"vdev": vdev, "pool": pool}
        )
        self.vdev = vdev
        self.pool = pool


class ZpoolParseError(ZpoolError):
    """Failed to parse zpool output. Seeing this is a bug."""

    kind = ZpoolErrorKind.PARSE_ERROR

    def __init__(self, reason: str = ""):
        message = "Failed to parse zpool output"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            error_code="PARSE_ERROR",
            details={"reason": reason}
        )
        self.reason = reason


class DeviceTooSmallError(ZpoolError):
    """A device in the topology is smaller than the 64M minimum"""

    kind = ZpoolErrorKind.DEVICE_TOO_SMALL

    def __init__(self):
        super().__init__(
            "One or more devices is less than the minimum size",
            error_code="DEVICE_TOO_SMALL"
        )


class PermissionDeniedError(ZpoolError):
    """Permission denied while creating a pool.

    Usually the process is not running as root, or runs inside a jail that
    is not allowed to operate zfs.
    """

    kind = ZpoolErrorKind.PERMISSION_DENIED

    def __init__(self):
        super().__init__(
            "Permission denied",
            error_code="PERMISSION_DENIED"
        )


class UnclassifiedError(ZpoolError):
    """zpool failed with a message we do not know how to categorize"""

    kind = ZpoolErrorKind.OTHER

    def __init__(self, message: str):
        super().__init__(
            message,
            error_code="ZPOOL_ERROR",
            details={"stderr": message}
        )
        self.message = message
