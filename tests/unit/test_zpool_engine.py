import pytest
from unittest.mock import Mock

from zpoolctl.zpool_operations.core.entities.properties import Health, ZpoolPropertiesWrite
from zpoolctl.zpool_operations.core.entities.topology import Disk, Topology, Vdev
from zpoolctl.zpool_operations.core.entities.zpool import Zpool
from zpoolctl.zpool_operations.core.exceptions import (
    CommandNotFoundError,
    PermissionDeniedError,
    UnclassifiedError,
    ZpoolErrorKind,
)
from zpoolctl.zpool_operations.core.result import Result


GUARDED_BY_EXISTS = [
    ("destroy", ("tank",), "destroy_unchecked"),
    ("read_properties", ("tank",), "read_properties_unchecked"),
    ("export", ("tank",), "export_unchecked"),
    ("status", ("tank",), "status_unchecked"),
    ("update_properties", ("tank", ZpoolPropertiesWrite()), "read_properties_unchecked"),
]


@pytest.fixture
def valid_topology(tmp_path):
    """Two backing files in a mirror."""
    disks = []
    for index in range(2):
        path = tmp_path / f"vdev{index}"
        path.write_bytes(b"\0" * 1024)
        disks.append(Disk.file(path))
    return Topology(vdevs=(Vdev.mirror(disks),))


class TestGuardedOperations:
    """Test suite for the existence guard shared by checked operations."""

    @pytest.mark.parametrize("operation,args,primitive", GUARDED_BY_EXISTS)
    def test_missing_pool_is_pool_not_found(self, mock_engine, operation, args, primitive):
        mock_engine.primitives.exists.return_value = Result.success(False)

        result = getattr(mock_engine, operation)(*args)

        assert result.is_failure
        assert result.error.kind == ZpoolErrorKind.POOL_NOT_FOUND
        assert result.error.pool_name == "tank"
        getattr(mock_engine.primitives, primitive).assert_not_called()
        mock_engine.primitives.set_unchecked.assert_not_called()

    @pytest.mark.parametrize("operation,args,primitive", GUARDED_BY_EXISTS)
    def test_failing_exists_is_returned_as_is(self, mock_engine, operation, args, primitive):
        exists_failure = Result.failure(CommandNotFoundError("zpool"))
        mock_engine.primitives.exists.return_value = exists_failure

        result = getattr(mock_engine, operation)(*args)

        assert result is exists_failure
        getattr(mock_engine.primitives, primitive).assert_not_called()

    def test_destroy_delegates_with_force(self, mock_engine):
        mock_engine.primitives.destroy_unchecked.return_value = Result.success(True)

        result = mock_engine.destroy("tank", True)

        assert result.is_success
        mock_engine.primitives.exists.assert_called_once_with("tank")
        mock_engine.primitives.destroy_unchecked.assert_called_once_with("tank", True)

    def test_export_delegates(self, mock_engine):
        mock_engine.primitives.export_unchecked.return_value = Result.success(True)

        assert mock_engine.export("tank").is_success
        mock_engine.primitives.export_unchecked.assert_called_once_with("tank", False)

    def test_status_returns_backend_value(self, mock_engine):
        pool = Zpool(name="tank", health=Health.ONLINE)
        mock_engine.primitives.status_unchecked.return_value = Result.success(pool)

        result = mock_engine.status("tank")

        assert result.value is pool

    def test_read_properties_returns_backend_value(self, mock_engine, sample_properties):
        mock_engine.primitives.read_properties_unchecked.return_value = Result.success(sample_properties)

        result = mock_engine.read_properties("tank")

        assert result.value == sample_properties

    @pytest.mark.parametrize("operation,primitive", [
        ("destroy", "destroy_unchecked"),
        ("export", "export_unchecked"),
        ("status", "status_unchecked"),
        ("read_properties", "read_properties_unchecked"),
    ])
    def test_delegated_failure_is_not_wrapped(self, mock_engine, operation, primitive):
        backend_failure = Result.failure(UnclassifiedError("pool is busy"))
        getattr(mock_engine.primitives, primitive).return_value = backend_failure

        result = getattr(mock_engine, operation)("tank")

        assert result is backend_failure

    def test_guard_is_evaluated_on_every_call(self, mock_engine):
        mock_engine.primitives.export_unchecked.return_value = Result.success(True)

        mock_engine.export("tank")
        mock_engine.export("tank")

        assert mock_engine.primitives.exists.call_count == 2


class TestCreate:
    """Test suite for the topology guard on create."""

    def test_unsuitable_topology_is_invalid_topology(self, mock_engine):
        result = mock_engine.create("tank", Topology())

        assert result.is_failure
        assert result.error.kind == ZpoolErrorKind.INVALID_TOPOLOGY
        mock_engine.primitives.create_unchecked.assert_not_called()
        mock_engine.primitives.exists.assert_not_called()

    def test_missing_backing_file_is_invalid_topology(self, mock_engine, tmp_path):
        topology = Topology(vdevs=(Vdev.naked(Disk.file(tmp_path / "missing")),))

        result = mock_engine.create("tank", topology)

        assert result.error.kind == ZpoolErrorKind.INVALID_TOPOLOGY
        mock_engine.primitives.create_unchecked.assert_not_called()

    def test_suitable_topology_delegates(self, mock_engine, valid_topology):
        props = ZpoolPropertiesWrite.builder().auto_expand(True).build()
        mock_engine.primitives.create_unchecked.return_value = Result.success(True)

        result = mock_engine.create("tank", valid_topology, props, "/mnt/tank", None)

        assert result.is_success
        mock_engine.primitives.create_unchecked.assert_called_once_with(
            "tank", valid_topology, props, "/mnt/tank", None
        )

    def test_create_does_not_check_existence(self, mock_engine, valid_topology):
        mock_engine.primitives.create_unchecked.return_value = Result.success(True)

        mock_engine.create("tank", valid_topology)

        mock_engine.primitives.exists.assert_not_called()

    def test_backend_failure_is_returned_unmodified(self, mock_engine, valid_topology):
        backend_failure = Result.failure(PermissionDeniedError())
        mock_engine.primitives.create_unchecked.return_value = backend_failure

        assert mock_engine.create("tank", valid_topology) is backend_failure


class TestExists:

    def test_missing_pool_is_false_not_an_error(self, mock_engine):
        mock_engine.primitives.exists.return_value = Result.success(False)

        result = mock_engine.exists("tank")

        assert result.is_success
        assert result.value is False


class TestUnguardedOperations:

    @pytest.mark.parametrize("operation,args", [
        ("all", ()),
        ("available", ()),
        ("available_in_dir", ("/vdevs",)),
        ("import_from_dir", ("tank", "/vdevs", None)),
    ])
    def test_no_existence_check(self, mock_engine, operation, args):
        sentinel = Result.success(Mock())
        getattr(mock_engine.primitives, operation).return_value = sentinel

        result = getattr(mock_engine, operation)(*args)

        assert result is sentinel
        mock_engine.primitives.exists.assert_not_called()
