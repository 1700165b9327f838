"""
Pydantic models for API request/response validation.
"""
import re
from typing import Dict, Any, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from ..zpool_operations.core.entities.properties import (
    CacheType,
    FailMode,
    ZpoolPropertiesWrite,
)
from ..zpool_operations.core.entities.topology import (
    Disk,
    Topology,
    Vdev,
    VdevType,
)

POOL_NAME_PATTERN = r'^[a-zA-Z][a-zA-Z0-9_\-\.:]*$'
_POOL_NAME_RE = re.compile(POOL_NAME_PATTERN)


def _validate_pool_name(value: str) -> str:
    if not _POOL_NAME_RE.match(value):
        raise ValueError(f"Invalid pool name: {value!r}")
    return value


class APIResponse(BaseModel):
    """Base API response model."""
    success: bool
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class PoolResponse(APIResponse):
    """Pool operation response."""
    pool: Optional[Dict[str, Any]] = None


class PoolListResponse(BaseModel):
    """Response model for listing pools."""
    success: bool
    pools: List[Dict[str, Any]]
    count: int


class PropertiesResponse(APIResponse):
    """Pool properties response."""
    properties: Dict[str, Any]


class DiskModel(BaseModel):
    path: str = Field(..., min_length=1, description="Device or file path")
    type: Literal["file", "disk"] = "disk"

    def to_entity(self) -> Disk:
        return Disk.file(self.path) if self.type == "file" else Disk.disk(self.path)


class VdevModel(BaseModel):
    type: Literal["naked", "mirror", "raidz", "raidz2", "raidz3"] = "naked"
    disks: List[DiskModel] = Field(..., min_length=1)

    def to_entity(self) -> Vdev:
        return Vdev(VdevType(self.type), tuple(disk.to_entity() for disk in self.disks))


class TopologyModel(BaseModel):
    """Pool layout; structural checks are left to the engine."""
    vdevs: List[VdevModel] = Field(default_factory=list)
    zil: List[VdevModel] = Field(default_factory=list, description="Log vdevs")
    caches: List[DiskModel] = Field(default_factory=list)
    spares: List[DiskModel] = Field(default_factory=list)

    def to_entity(self) -> Topology:
        return Topology(
            vdevs=tuple(vdev.to_entity() for vdev in self.vdevs),
            zil=tuple(vdev.to_entity() for vdev in self.zil),
            caches=tuple(disk.to_entity() for disk in self.caches),
            spares=tuple(disk.to_entity() for disk in self.spares),
        )


class PoolPropertiesModel(BaseModel):
    """Settable pool properties. ``cache_file`` None means the default cache file."""
    read_only: bool = False
    auto_expand: bool = False
    auto_replace: bool = False
    boot_fs: Optional[str] = None
    cache_file: Optional[str] = None
    comment: str = ""
    delegation: bool = True
    fail_mode: Literal["wait", "continue", "panic"] = "wait"

    def overrides(self) -> Dict[str, Any]:
        """Fields explicitly sent by the client, converted to entity values."""
        values = self.model_dump(exclude_unset=True)
        if 'cache_file' in values:
            values['cache_file'] = CacheType(values['cache_file'])
        if 'fail_mode' in values:
            values['fail_mode'] = FailMode(values['fail_mode'])
        return values

    def to_entity(self) -> ZpoolPropertiesWrite:
        return ZpoolPropertiesWrite(
            read_only=self.read_only,
            auto_expand=self.auto_expand,
            auto_replace=self.auto_replace,
            boot_fs=self.boot_fs,
            cache_file=CacheType(self.cache_file),
            comment=self.comment,
            delegation=self.delegation,
            fail_mode=FailMode(self.fail_mode),
        )


class PoolCreateRequest(BaseModel):
    """Request model for creating a pool."""
    name: str = Field(..., description="Pool name")
    topology: TopologyModel
    properties: Optional[PoolPropertiesModel] = None
    mount: Optional[str] = Field(None, description="Mount point of the root dataset")
    alt_root: Optional[str] = Field(None, description="Alternate root directory")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _validate_pool_name(v)


class PoolImportRequest(BaseModel):
    """Request model for importing a pool from a device directory."""
    name: str = Field(..., description="Pool name")
    dir: str = Field(..., min_length=1, description="Directory to search for devices")
    properties: Optional[PoolPropertiesModel] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _validate_pool_name(v)
