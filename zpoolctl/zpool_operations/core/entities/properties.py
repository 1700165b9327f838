"""
Pool properties as read from ``zpool get`` and as written by ``zpool set``.
"""
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union


class Health(Enum):
    """Health of a pool or vdev as printed by zpool."""
    ONLINE = "ONLINE"
    DEGRADED = "DEGRADED"
    FAULTED = "FAULTED"
    OFFLINE = "OFFLINE"
    AVAILABLE = "AVAIL"
    UNAVAILABLE = "UNAVAIL"
    REMOVED = "REMOVED"
    SUSPENDED = "SUSPENDED"
    # Spares only
    IN_USE = "INUSE"

    @classmethod
    def parse(cls, value: str) -> 'Health':
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown health state: {value!r}") from None


class FailMode(Enum):
    """Behaviour of the pool on catastrophic failure."""
    WAIT = "wait"
    CONTINUE = "continue"
    PANIC = "panic"

    @classmethod
    def parse(cls, value: str) -> 'FailMode':
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown failmode: {value!r}") from None

    def to_zpool_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class CacheType:
    """Value of the ``cachefile`` property.

    ``path`` is None for the default location and the literal ``"none"`` when
    the pool configuration is not cached at all.
    """
    path: Optional[str] = None

    @classmethod
    def default(cls) -> 'CacheType':
        return cls(None)

    @classmethod
    def none(cls) -> 'CacheType':
        return cls("none")

    @classmethod
    def custom(cls, path: Union[str, Path]) -> 'CacheType':
        return cls(str(path))

    @classmethod
    def parse(cls, value: str) -> 'CacheType':
        value = value.strip()
        if value in ("-", ""):
            return cls.default()
        return cls(value)

    @property
    def is_default(self) -> bool:
        return self.path is None

    def to_zpool_value(self) -> str:
        return "" if self.path is None else self.path


def to_zpool_value(value: Any) -> str:
    """Encode a property value the way zpool expects it on the command line."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if value is None:
        return "none"
    if hasattr(value, "to_zpool_value"):
        return value.to_zpool_value()
    if isinstance(value, Path):
        return str(value)
    return str(value)


def _optional(value: str) -> Optional[str]:
    value = value.strip()
    return None if value in ("-", "") else value


def _bool(value: str) -> bool:
    value = value.strip()
    if value == "on":
        return True
    if value == "off":
        return False
    raise ValueError(f"Expected on/off, got {value!r}")


def _int(value: str) -> int:
    return int(value.strip().rstrip("%"))


def _optional_int(value: str) -> Optional[int]:
    value = _optional(value)
    return None if value is None else _int(value)


def _ratio(value: str) -> float:
    return float(value.strip().rstrip("x"))


@dataclass(frozen=True)
class ZpoolProperties:
    """Snapshot of a pool's properties. Created fresh on every read."""

    alloc: int
    cap: int
    comment: Optional[str]
    dedup_ratio: float
    expand_size: Optional[int]
    fragmentation: Optional[int]
    free: int
    freeing: int
    guid: int
    health: Health
    size: int
    leaked: int
    alt_root: Optional[Path]
    read_only: bool
    auto_expand: bool
    auto_replace: bool
    boot_fs: Optional[str]
    cache_file: CacheType
    delegation: bool
    fail_mode: FailMode

    # Order of the properties requested from `zpool get`; matches the fields.
    ZPOOL_NAMES = (
        "alloc", "cap", "comment", "dedupratio", "expandsize", "fragmentation",
        "free", "freeing", "guid", "health", "size", "leaked", "altroot",
        "readonly", "autoexpand", "autoreplace", "bootfs", "cachefile", "delegation", "failmode",
    )

    @classmethod
    def from_stdout(cls, stdout: bytes) -> 'ZpoolProperties':
        """Parse ``zpool get -p -H -o value <ZPOOL_NAMES> <pool>`` output.

        Raises ValueError if output is truncated or a value does not parse.
        """
        lines = stdout.decode("utf-8", errors="replace").splitlines()
        if len(lines) < len(cls.ZPOOL_NAMES):
            raise ValueError(
                f"Expected {len(cls.ZPOOL_NAMES)} property values, got {len(lines)}"
            )
        v = dict(zip(cls.ZPOOL_NAMES, lines))
        alt_root = _optional(v["altroot"])
        return cls(
            alloc=_int(v["alloc"]),
            cap=_int(v["cap"]),
            comment=_optional(v["comment"]),
            dedup_ratio=_ratio(v["dedupratio"]),
            expand_size=_optional_int(v["expandsize"]),
            fragmentation=_optional_int(v["fragmentation"]),
            free=_int(v["free"]),
            freeing=_int(v["freeing"]),
            guid=_int(v["guid"]),
            health=Health.parse(v["health"]),
            size=_int(v["size"]),
            leaked=_int(v["leaked"]),
            alt_root=Path(alt_root) if alt_root else None,
            read_only=_bool(v["readonly"]),
            auto_expand=_bool(v["autoexpand"]),
            auto_replace=_bool(v["autoreplace"]),
            boot_fs=_optional(v["bootfs"]),
            cache_file=CacheType.parse(v["cachefile"]),
            delegation=_bool(v["delegation"]),
            fail_mode=FailMode.parse(v["failmode"]),
        )

    def to_dict(self) -> dict:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, CacheType):
                value = value.path
            elif isinstance(value, Path):
                value = str(value)
            result[f.name] = value
        return result


@dataclass(frozen=True)
class ZpoolPropertiesWrite:
    """Desired values of the settable pool properties.

    Built with ZpoolPropertiesWriteBuilder. An empty comment means "no
    comment".
    """

    read_only: bool = False
    auto_expand: bool = False
    auto_replace: bool = False
    boot_fs: Optional[str] = None
    cache_file: CacheType = CacheType()
    comment: str = ""
    delegation: bool = True
    fail_mode: FailMode = FailMode.WAIT

    @classmethod
    def builder(cls) -> 'ZpoolPropertiesWriteBuilder':
        return ZpoolPropertiesWriteBuilder()

    @classmethod
    def from_current(cls, props: ZpoolProperties) -> 'ZpoolPropertiesWrite':
        """Seed a write set from what the pool currently has."""
        return cls(
            read_only=props.read_only,
            auto_expand=props.auto_expand,
            auto_replace=props.auto_replace,
            boot_fs=props.boot_fs,
            cache_file=props.cache_file,
            comment=props.comment or "",
            delegation=props.delegation,
            fail_mode=props.fail_mode,
        )

    @property
    def desired_comment(self) -> Optional[str]:
        return self.comment or None

    def into_args(self) -> List[str]:
        """Render ``-o key=value`` pairs for zpool create.

        ``readonly`` is only accepted at import time, see ``import_args``.
        """
        pairs: List[tuple] = [
            ("autoexpand", self.auto_expand),
            ("autoreplace", self.auto_replace),
            ("delegation", self.delegation),
            ("failmode", self.fail_mode),
        ]
        if not self.cache_file.is_default:
            pairs.append(("cachefile", self.cache_file))
        if self.boot_fs is not None:
            pairs.append(("bootfs", self.boot_fs))
        if self.comment:
            pairs.append(("comment", self.comment))
        return self._render(pairs)

    def import_args(self) -> List[str]:
        """Render ``-o key=value`` pairs for zpool import."""
        pairs: List[tuple] = []
        if self.read_only:
            pairs.append(("readonly", True))
        if not self.cache_file.is_default:
            pairs.append(("cachefile", self.cache_file))
        return self._render(pairs)

    @staticmethod
    def _render(pairs: List[tuple]) -> List[str]:
        args: List[str] = []
        for key, value in pairs:
            args.extend(["-o", f"{key}={to_zpool_value(value)}"])
        return args


class ZpoolPropertiesWriteBuilder:
    """Fluent builder for ZpoolPropertiesWrite."""

    def __init__(self):
        self._values = {}

    def read_only(self, value: bool) -> 'ZpoolPropertiesWriteBuilder':
        self._values['read_only'] = value
        return self

    def auto_expand(self, value: bool) -> 'ZpoolPropertiesWriteBuilder':
        self._values['auto_expand'] = value
        return self

    def auto_replace(self, value: bool) -> 'ZpoolPropertiesWriteBuilder':
        self._values['auto_replace'] = value
        return self

    def boot_fs(self, value: Optional[str]) -> 'ZpoolPropertiesWriteBuilder':
        self._values['boot_fs'] = value
        return self

    def cache_file(self, value: CacheType) -> 'ZpoolPropertiesWriteBuilder':
        self._values['cache_file'] = value
        return self

    def comment(self, value: str) -> 'ZpoolPropertiesWriteBuilder':
        self._values['comment'] = value
        return self

    def delegation(self, value: bool) -> 'ZpoolPropertiesWriteBuilder':
        self._values['delegation'] = value
        return self

    def fail_mode(self, value: FailMode) -> 'ZpoolPropertiesWriteBuilder':
        self._values['fail_mode'] = value
        return self

    def build(self) -> ZpoolPropertiesWrite:
        return replace(ZpoolPropertiesWrite(), **self._values)
