"""
Classification of zpool(8) failures.

`classify_stderr` turns the raw diagnostic output of a failed zpool run into
one of the typed errors in `zpool_exceptions`. The classification is
deterministic and text based: patterns are tried in a fixed order and the
first match wins. Anything we cannot recognise is returned as
`UnclassifiedError` carrying the full decoded text.
"""
import errno
import re
from typing import Callable, List, Optional, Tuple

from .zpool_exceptions import (
    ZpoolError,
    CommandNotFoundError,
    ZpoolIOError,
    ZpoolParseError,
    VdevReuseError,
    DeviceTooSmallError,
    PermissionDeniedError,
    UnclassifiedError,
)


_RE_REUSE_VDEV = re.compile(r"following errors:\n(\S+) is part of active pool '(\S+)'")
# ZFS on Linux reports the same condition without naming the vdev or the pool.
_RE_REUSE_VDEV_ZOL = re.compile(
    r"cannot create \S+: one or more vdevs refer to the same device, or one of\n"
    r"the devices is part of an active md or lvm device\n"
)
_RE_TOO_SMALL = re.compile(r"cannot create \S+: one or more devices is less than the minimum size \S+")
_RE_PERMISSION_DENIED = re.compile(r"cannot create \S+: permission denied\n")


def _vdev_reuse(match: "re.Match[str]") -> ZpoolError:
    return VdevReuseError(match.group(1), match.group(2))


# Order matters: most specific first.
_CLASSIFIERS: List[Tuple["re.Pattern[str]", Callable[["re.Match[str]"], ZpoolError]]] = [
    (_RE_REUSE_VDEV, _vdev_reuse),
    (_RE_REUSE_VDEV_ZOL, lambda _: VdevReuseError("", "")),
    (_RE_TOO_SMALL, lambda _: DeviceTooSmallError()),
    (_RE_PERMISSION_DENIED, lambda _: PermissionDeniedError()),
]


def decode_output(raw: bytes) -> str:
    """Decode tool output, replacing invalid byte sequences."""
    return raw.decode("utf-8", errors="replace")


def classify_stderr(raw: bytes) -> ZpoolError:
    """Classify stderr of a failed zpool invocation into a typed error."""
    text = decode_output(raw)
    for pattern, build in _CLASSIFIERS:
        match = pattern.search(text)
        if match:
            return build(match)
    return UnclassifiedError(text)


def from_os_error(err: OSError, command: Optional[str] = None) -> ZpoolError:
    """Translate a failure to launch or talk to a process."""
    if isinstance(err, FileNotFoundError) or err.errno == errno.ENOENT:
        return CommandNotFoundError(command or err.filename or "zpool")
    return ZpoolIOError(err)


def from_value_error(err: ValueError) -> ZpoolError:
    """Translate a failure to parse a number or an enum out of zpool output."""
    return ZpoolParseError(str(err))
