"""
zpoolctl test configuration and fixtures.
"""

import pytest
from unittest.mock import Mock

from zpoolctl.zpool_operations.core.entities.properties import ZpoolProperties
from zpoolctl.zpool_operations.core.interfaces.command_executor import CommandResult
from zpoolctl.zpool_operations.core.interfaces.zpool_engine import ZpoolEngine
from zpoolctl.zpool_operations.core.result import Result


PROPERTIES_STDOUT = b"\n".join([
    b"1024",                   # alloc
    b"0",                      # cap
    b"-",                      # comment
    b"1.00",                   # dedupratio
    b"-",                      # expandsize
    b"0",                      # fragmentation
    b"66060288",               # free
    b"0",                      # freeing
    b"12345678901234567890",   # guid
    b"ONLINE",                 # health
    b"67108864",               # size
    b"0",                      # leaked
    b"-",                      # altroot
    b"off",                    # readonly
    b"off",                    # autoexpand
    b"off",                    # autoreplace
    b"-",                      # bootfs
    b"-",                      # cachefile
    b"on",                     # delegation
    b"wait",                   # failmode
]) + b"\n"


STATUS_STDOUT = b"""  pool: tank
 state: ONLINE
  scan: none requested
config:

\tNAME              STATE     READ WRITE CKSUM
\ttank              ONLINE       0     0     0
\t  mirror-0        ONLINE       0     0     0
\t    /vdevs/vdev0  ONLINE       0     0     0
\t    /vdevs/vdev1  ONLINE       0     0     0
\tlogs
\t  /vdevs/vdev2    ONLINE       0     0     0
\tcache
\t  /vdevs/vdev3    ONLINE       0     0     0
\tspares
\t  /vdevs/vdev4    AVAIL

errors: No known data errors
"""


class MockZpoolEngine(ZpoolEngine):
    """ZpoolEngine whose primitives are recorded on a single Mock."""

    def __init__(self):
        self.primitives = Mock()

    def exists(self, name):
        return self.primitives.exists(name)

    def create_unchecked(self, name, topology, props=None, mount=None, alt_root=None):
        return self.primitives.create_unchecked(name, topology, props, mount, alt_root)

    def destroy_unchecked(self, name, force=False):
        return self.primitives.destroy_unchecked(name, force)

    def read_properties_unchecked(self, name):
        return self.primitives.read_properties_unchecked(name)

    def set_unchecked(self, name, key, value):
        return self.primitives.set_unchecked(name, key, value)

    def export_unchecked(self, name, force=False):
        return self.primitives.export_unchecked(name, force)

    def status_unchecked(self, name):
        return self.primitives.status_unchecked(name)

    def available(self):
        return self.primitives.available()

    def available_in_dir(self, dir):
        return self.primitives.available_in_dir(dir)

    def import_from_dir(self, name, dir, props=None):
        return self.primitives.import_from_dir(name, dir, props)

    def all(self):
        return self.primitives.all()


@pytest.fixture
def properties_stdout():
    return PROPERTIES_STDOUT


@pytest.fixture
def status_stdout():
    return STATUS_STDOUT


@pytest.fixture
def sample_properties():
    """Properties of a freshly created single disk pool."""
    return ZpoolProperties.from_stdout(PROPERTIES_STDOUT)


@pytest.fixture
def mock_engine():
    """Engine with mocked primitives; the pool exists by default."""
    engine = MockZpoolEngine()
    engine.primitives.exists.return_value = Result.success(True)
    return engine


@pytest.fixture
def mock_executor():
    """Command executor that succeeds with empty output by default."""
    executor = Mock()
    executor.execute.return_value = CommandResult(returncode=0, stdout=b"", stderr=b"")
    return executor


@pytest.fixture
def mock_logger():
    logger = Mock()
    logger.info = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.debug = Mock()
    return logger
