"""
Pool description as reported by ``zpool status`` and ``zpool import``.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from .properties import Health


@dataclass
class VdevStatus:
    """A vdev (or leaf disk) within a pool's status tree."""
    name: str
    kind: str
    health: Health
    read_errors: int = 0
    write_errors: int = 0
    checksum_errors: int = 0
    reason: Optional[str] = None
    children: List['VdevStatus'] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if vdev or any of its children has errors."""
        own = self.read_errors + self.write_errors + self.checksum_errors
        return own > 0 or any(child.has_errors() for child in self.children)

    def is_healthy(self) -> bool:
        return self.health == Health.ONLINE and not self.has_errors()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'kind': self.kind,
            'health': self.health.value,
            'read_errors': self.read_errors,
            'write_errors': self.write_errors,
            'checksum_errors': self.checksum_errors,
            'reason': self.reason,
            'children': [child.to_dict() for child in self.children],
        }


@dataclass
class Zpool:
    """Status of a single pool, active or available for import."""

    name: str
    health: Health
    id: Optional[int] = None
    vdevs: List[VdevStatus] = field(default_factory=list)
    logs: List[VdevStatus] = field(default_factory=list)
    caches: List[VdevStatus] = field(default_factory=list)
    spares: List[VdevStatus] = field(default_factory=list)
    action: Optional[str] = None
    errors: Optional[str] = None
    reason: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Pool name cannot be empty")

    def is_healthy(self) -> bool:
        """Check if pool and every data vdev are healthy."""
        return self.health == Health.ONLINE and all(vdev.is_healthy() for vdev in self.vdevs)

    def get_failed_vdevs(self) -> List[VdevStatus]:
        return [vdev for vdev in self.vdevs if not vdev.is_healthy()]

    def to_dict(self) -> Dict[str, Any]:
        """Convert pool description to dictionary representation."""
        return {
            'name': self.name,
            'id': self.id,
            'health': self.health.value,
            'vdevs': [vdev.to_dict() for vdev in self.vdevs],
            'logs': [vdev.to_dict() for vdev in self.logs],
            'caches': [vdev.to_dict() for vdev in self.caches],
            'spares': [vdev.to_dict() for vdev in self.spares],
            'action': self.action,
            'errors': self.errors,
            'reason': self.reason,
        }
