"""
Dependencies for API endpoints.
"""
from functools import lru_cache

from fastapi import HTTPException, status

from ..zpool_operations.core.exceptions.zpool_exceptions import ZpoolError, ZpoolErrorKind
from ..zpool_operations.core.interfaces.zpool_engine import ZpoolEngine
from ..zpool_operations.factories.engine_factory import (
    EngineFactory,
    create_engine_factory_from_config,
)

ERROR_STATUS_CODES = {
    ZpoolErrorKind.POOL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ZpoolErrorKind.INVALID_TOPOLOGY: status.HTTP_400_BAD_REQUEST,
    ZpoolErrorKind.DEVICE_TOO_SMALL: status.HTTP_400_BAD_REQUEST,
    ZpoolErrorKind.VDEV_REUSE: status.HTTP_409_CONFLICT,
    ZpoolErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ZpoolErrorKind.COMMAND_NOT_FOUND: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@lru_cache()
def get_engine_factory() -> EngineFactory:
    """Get the process wide engine factory."""
    return create_engine_factory_from_config()


def get_zpool_engine() -> ZpoolEngine:
    """Get a ZpoolEngine instance."""
    return get_engine_factory().create_zpool_engine()


def http_error(error: ZpoolError) -> HTTPException:
    """Map a zpool error to the HTTP error returned to the client."""
    return HTTPException(
        status_code=ERROR_STATUS_CODES.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.to_dict()
    )
