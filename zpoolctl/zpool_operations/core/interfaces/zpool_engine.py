"""
Generic interface to manage zpools.

Backends implement the ``*_unchecked`` primitives (plus ``exists`` and the
enumeration calls) and get the guarded operations for free. A guarded
operation evaluates a cheap precondition, returns a locally synthesized
error if it does not hold, and otherwise delegates to the primitive and
returns whatever the backend produced, unmodified.

Guards are check-then-act: another actor can destroy or import a pool
between the guard and the delegated call. Callers that need exclusivity on a
pool name have to serialize externally and treat PoolNotFound as a normal
outcome.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from ..entities.properties import ZpoolProperties, ZpoolPropertiesWrite
from ..entities.topology import Topology
from ..entities.zpool import Zpool
from ..exceptions.zpool_exceptions import (
    ZpoolError,
    PoolNotFoundError,
    InvalidTopologyError,
)
from ..result import Result

PathLike = Union[str, Path]


class ZpoolEngine(ABC):
    """Pool lifecycle operations backed by zpool(8) or a native library."""

    # Settable properties touched by update_properties, in the order they are
    # applied: (attribute on the property records, zpool property name).
    UPDATABLE_PROPERTIES = (
        ("auto_expand", "autoexpand"),
        ("auto_replace", "autoreplace"),
        ("cache_file", "cachefile"),
        ("comment", "comment"),
        ("delegation", "delegation"),
        ("fail_mode", "failmode"),
    )

    # Unchecked primitives

    @abstractmethod
    def exists(self, name: str) -> Result[bool, ZpoolError]:
        """Check if a pool with given name exists.

        A missing pool is ``Result.success(False)``, never PoolNotFound.
        """
        pass

    @abstractmethod
    def create_unchecked(self,
                         name: str,
                         topology: Topology,
                         props: Optional[ZpoolPropertiesWrite] = None,
                         mount: Optional[PathLike] = None,
                         alt_root: Optional[PathLike] = None) -> Result[bool, ZpoolError]:
        """Create a pool without validating the topology."""
        pass

    @abstractmethod
    def destroy_unchecked(self, name: str, force: bool = False) -> Result[bool, ZpoolError]:
        """Destroy a pool without checking that it exists."""
        pass

    @abstractmethod
    def read_properties_unchecked(self, name: str) -> Result[ZpoolProperties, ZpoolError]:
        pass

    @abstractmethod
    def set_unchecked(self, name: str, key: str, value: Any) -> Result[bool, ZpoolError]:
        """Set a single pool property. Used by update_properties."""
        pass

    @abstractmethod
    def export_unchecked(self, name: str, force: bool = False) -> Result[bool, ZpoolError]:
        pass

    @abstractmethod
    def status_unchecked(self, name: str) -> Result[Zpool, ZpoolError]:
        pass

    @abstractmethod
    def available(self) -> Result[List[Zpool], ZpoolError]:
        """Pools available for import from the default device directory."""
        pass

    @abstractmethod
    def available_in_dir(self, dir: PathLike) -> Result[List[Zpool], ZpoolError]:
        """Pools available for import from ``dir``."""
        pass

    @abstractmethod
    def import_from_dir(self,
                        name: str,
                        dir: PathLike,
                        props: Optional[ZpoolPropertiesWrite] = None) -> Result[bool, ZpoolError]:
        """Import pool ``name`` searching for its devices in ``dir``."""
        pass

    @abstractmethod
    def all(self) -> Result[List[Zpool], ZpoolError]:
        """Status of every active pool."""
        pass

    # Guarded operations

    def create(self,
               name: str,
               topology: Topology,
               props: Optional[ZpoolPropertiesWrite] = None,
               mount: Optional[PathLike] = None,
               alt_root: Optional[PathLike] = None) -> Result[bool, ZpoolError]:
        """Create a new pool after checking the topology is usable."""
        if not topology.is_suitable_for_create():
            return Result.failure(InvalidTopologyError(name))
        return self.create_unchecked(name, topology, props, mount, alt_root)

    def destroy(self, name: str, force: bool = False) -> Result[bool, ZpoolError]:
        return self._if_exists(name, lambda: self.destroy_unchecked(name, force))

    def read_properties(self, name: str) -> Result[ZpoolProperties, ZpoolError]:
        return self._if_exists(name, lambda: self.read_properties_unchecked(name))

    def export(self, name: str, force: bool = False) -> Result[bool, ZpoolError]:
        return self._if_exists(name, lambda: self.export_unchecked(name, force))

    def status(self, name: str) -> Result[Zpool, ZpoolError]:
        return self._if_exists(name, lambda: self.status_unchecked(name))

    def update_properties(self, name: str, props: ZpoolPropertiesWrite) -> Result[ZpoolProperties, ZpoolError]:
        """Bring the pool's settable properties in line with ``props``.

        One ``set`` is issued per property whose current value differs, in
        the order of UPDATABLE_PROPERTIES. The first failing ``set`` aborts
        the rest and is returned; properties already set stay changed, there
        is no rollback. On success the freshly read properties are returned.
        """
        return self._if_exists(name, lambda: self._update_properties(name, props))

    def _update_properties(self, name: str, props: ZpoolPropertiesWrite) -> Result[ZpoolProperties, ZpoolError]:
        current = self.read_properties_unchecked(name)
        if current.is_failure:
            return current

        for attr, key in self.UPDATABLE_PROPERTIES:
            if attr == "comment":
                # An empty desired comment means "no comment".
                have, want = current.value.comment, props.desired_comment
                value = props.comment
            else:
                have, want = getattr(current.value, attr), getattr(props, attr)
                value = want
            if have == want:
                continue
            result = self.set_unchecked(name, key, value)
            if result.is_failure:
                return Result.failure(result.error)

        return self.read_properties_unchecked(name)

    def _if_exists(self, name: str, action: Callable[[], Result]) -> Result:
        exists = self.exists(name)
        if exists.is_failure:
            return exists
        if not exists.value:
            return Result.failure(PoolNotFoundError(name))
        return action()
