"""Zpool error taxonomy and classifier"""

from .zpool_exceptions import (
    ZpoolErrorKind,
    ZpoolError,
    CommandNotFoundError,
    ZpoolIOError,
    PoolNotFoundError,
    InvalidTopologyError,
    VdevReuseError,
    ZpoolParseError,
    DeviceTooSmallError,
    PermissionDeniedError,
    UnclassifiedError,
)
from .error_classifier import classify_stderr, from_os_error, from_value_error

__all__ = [
    'ZpoolErrorKind',
    'ZpoolError',
    'CommandNotFoundError',
    'ZpoolIOError',
    'PoolNotFoundError',
    'InvalidTopologyError',
    'VdevReuseError',
    'ZpoolParseError',
    'DeviceTooSmallError',
    'PermissionDeniedError',
    'UnclassifiedError',
    'classify_stderr',
    'from_os_error',
    'from_value_error',
]
