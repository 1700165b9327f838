"""Guarded zpool operations and their zpool(8) backend."""

from .core.entities.properties import (
    CacheType,
    FailMode,
    Health,
    ZpoolProperties,
    ZpoolPropertiesWrite,
    ZpoolPropertiesWriteBuilder,
)
from .core.entities.topology import Disk, Topology, TopologyBuilder, Vdev, VdevType
from .core.entities.zpool import Zpool, VdevStatus
from .core.exceptions.zpool_exceptions import ZpoolError, ZpoolErrorKind
from .core.interfaces.zpool_engine import ZpoolEngine
from .core.result import Result
from .infrastructure.zpool_open3 import ZpoolOpen3

__all__ = [
    'CacheType',
    'Disk',
    'FailMode',
    'Health',
    'Result',
    'Topology',
    'TopologyBuilder',
    'Vdev',
    'VdevStatus',
    'VdevType',
    'Zpool',
    'ZpoolEngine',
    'ZpoolError',
    'ZpoolErrorKind',
    'ZpoolOpen3',
    'ZpoolProperties',
    'ZpoolPropertiesWrite',
    'ZpoolPropertiesWriteBuilder',
]
