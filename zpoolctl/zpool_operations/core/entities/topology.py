"""
Pool topology: the layout of vdevs handed to ``zpool create``.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple, Union


class DiskType(Enum):
    """Kind of leaf device."""
    FILE = "file"
    DISK = "disk"


@dataclass(frozen=True)
class Disk:
    """A single leaf device: a backing file or a block device."""

    path: Path
    type: DiskType = DiskType.DISK

    @classmethod
    def file(cls, path: Union[str, Path]) -> 'Disk':
        return cls(Path(path), DiskType.FILE)

    @classmethod
    def disk(cls, path: Union[str, Path]) -> 'Disk':
        return cls(Path(path), DiskType.DISK)

    def is_valid(self) -> bool:
        """File vdevs must be regular files, disks must exist."""
        if self.type is DiskType.FILE:
            return self.path.is_file()
        return self.path.exists()

    def as_arg(self) -> str:
        return str(self.path)


class VdevType(Enum):
    """Vdev redundancy level."""
    NAKED = "naked"
    MIRROR = "mirror"
    RAIDZ = "raidz"
    RAIDZ2 = "raidz2"
    RAIDZ3 = "raidz3"

    @property
    def min_disks(self) -> int:
        return _MIN_DISKS[self]

    @property
    def is_redundant(self) -> bool:
        return self is not VdevType.NAKED


_MIN_DISKS = {
    VdevType.NAKED: 1,
    VdevType.MIRROR: 2,
    VdevType.RAIDZ: 3,
    VdevType.RAIDZ2: 4,
    VdevType.RAIDZ3: 5,
}


@dataclass(frozen=True)
class Vdev:
    """Virtual device: one naked disk or a redundancy group of disks."""

    type: VdevType
    disks: Tuple[Disk, ...]

    @classmethod
    def naked(cls, disk: Disk) -> 'Vdev':
        return cls(VdevType.NAKED, (disk,))

    @classmethod
    def mirror(cls, disks: List[Disk]) -> 'Vdev':
        return cls(VdevType.MIRROR, tuple(disks))

    @classmethod
    def raidz(cls, disks: List[Disk]) -> 'Vdev':
        return cls(VdevType.RAIDZ, tuple(disks))

    @classmethod
    def raidz2(cls, disks: List[Disk]) -> 'Vdev':
        return cls(VdevType.RAIDZ2, tuple(disks))

    @classmethod
    def raidz3(cls, disks: List[Disk]) -> 'Vdev':
        return cls(VdevType.RAIDZ3, tuple(disks))

    def is_valid(self) -> bool:
        if self.type is VdevType.NAKED and len(self.disks) != 1:
            return False
        if len(self.disks) < self.type.min_disks:
            return False
        return all(disk.is_valid() for disk in self.disks)

    def into_args(self) -> List[str]:
        args = [] if self.type is VdevType.NAKED else [self.type.value]
        args.extend(disk.as_arg() for disk in self.disks)
        return args


@dataclass(frozen=True)
class Topology:
    """Structure of a pool: data vdevs, log vdevs, cache and spare disks."""

    vdevs: Tuple[Vdev, ...] = ()
    zil: Tuple[Vdev, ...] = ()
    caches: Tuple[Disk, ...] = ()
    spares: Tuple[Disk, ...] = ()

    def is_suitable_for_create(self) -> bool:
        """Check that zpool create would accept this layout without ``-f``."""
        if not self.vdevs:
            return False
        if not all(vdev.is_valid() for vdev in self.vdevs):
            return False
        if not all(vdev.is_valid() for vdev in self.zil):
            return False
        if not all(disk.is_valid() for disk in self.caches):
            return False
        if not all(disk.is_valid() for disk in self.spares):
            return False

        # Mismatched replication level: naked disks next to redundant vdevs.
        redundancy = {vdev.type.is_redundant for vdev in self.vdevs}
        return len(redundancy) == 1

    def into_args(self) -> List[str]:
        args: List[str] = []
        for vdev in self.vdevs:
            args.extend(vdev.into_args())
        if self.zil:
            args.append("log")
            for vdev in self.zil:
                args.extend(vdev.into_args())
        if self.caches:
            args.append("cache")
            args.extend(disk.as_arg() for disk in self.caches)
        if self.spares:
            args.append("spare")
            args.extend(disk.as_arg() for disk in self.spares)
        return args


@dataclass
class TopologyBuilder:
    """Fluent builder for Topology."""

    _vdevs: List[Vdev] = field(default_factory=list)
    _zil: List[Vdev] = field(default_factory=list)
    _caches: List[Disk] = field(default_factory=list)
    _spares: List[Disk] = field(default_factory=list)

    def vdev(self, vdev: Vdev) -> 'TopologyBuilder':
        self._vdevs.append(vdev)
        return self

    def vdevs(self, vdevs: List[Vdev]) -> 'TopologyBuilder':
        self._vdevs.extend(vdevs)
        return self

    def zil(self, vdev: Vdev) -> 'TopologyBuilder':
        self._zil.append(vdev)
        return self

    def cache(self, disk: Disk) -> 'TopologyBuilder':
        self._caches.append(disk)
        return self

    def caches(self, disks: List[Disk]) -> 'TopologyBuilder':
        self._caches.extend(disks)
        return self

    def spare(self, disk: Disk) -> 'TopologyBuilder':
        self._spares.append(disk)
        return self

    def spares(self, disks: List[Disk]) -> 'TopologyBuilder':
        self._spares.extend(disks)
        return self

    def build(self) -> Topology:
        return Topology(
            vdevs=tuple(self._vdevs),
            zil=tuple(self._zil),
            caches=tuple(self._caches),
            spares=tuple(self._spares),
        )
