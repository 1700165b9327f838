"""
Pool API router on top of the zpool engine.
"""
import logging
from dataclasses import replace
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from ..dependencies import get_zpool_engine, http_error
from ..models import (
    POOL_NAME_PATTERN,
    APIResponse,
    PoolCreateRequest,
    PoolImportRequest,
    PoolListResponse,
    PoolPropertiesModel,
    PoolResponse,
    PropertiesResponse,
)
from ...zpool_operations.core.entities.properties import ZpoolPropertiesWrite
from ...zpool_operations.core.interfaces.zpool_engine import ZpoolEngine

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/v1/pools", tags=["pools"])

PoolName = Annotated[str, Path(pattern=POOL_NAME_PATTERN, description="Pool name")]


@router.get("/", response_model=PoolListResponse)
def list_pools(engine: ZpoolEngine = Depends(get_zpool_engine)):
    """List all active pools."""
    result = engine.all()
    if result.is_failure:
        raise http_error(result.error)

    pools = [pool.to_dict() for pool in result.value]
    return PoolListResponse(success=True, pools=pools, count=len(pools))


@router.get("/importable", response_model=PoolListResponse)
def list_importable_pools(
    dir: Optional[str] = Query(None, description="Directory to search for devices"),
    engine: ZpoolEngine = Depends(get_zpool_engine)
):
    """List pools available for import."""
    result = engine.available_in_dir(dir) if dir else engine.available()
    if result.is_failure:
        raise http_error(result.error)

    pools = [pool.to_dict() for pool in result.value]
    return PoolListResponse(success=True, pools=pools, count=len(pools))


@router.post("/", response_model=APIResponse, status_code=201)
def create_pool(request: PoolCreateRequest, engine: ZpoolEngine = Depends(get_zpool_engine)):
    """Create a new pool."""
    props = request.properties.to_entity() if request.properties else None
    result = engine.create(
        request.name,
        request.topology.to_entity(),
        props,
        request.mount,
        request.alt_root
    )
    if result.is_failure:
        raise http_error(result.error)

    logger.info(f"Created pool {request.name}")
    return APIResponse(success=True, message=f"Pool {request.name} created")


@router.post("/import", response_model=APIResponse)
def import_pool(request: PoolImportRequest, engine: ZpoolEngine = Depends(get_zpool_engine)):
    """Import a pool from a device directory."""
    props = request.properties.to_entity() if request.properties else None
    result = engine.import_from_dir(request.name, request.dir, props)
    if result.is_failure:
        raise http_error(result.error)

    return APIResponse(success=True, message=f"Pool {request.name} imported")


@router.get("/{pool_name}", response_model=PoolResponse)
def get_pool(pool_name: PoolName, engine: ZpoolEngine = Depends(get_zpool_engine)):
    """Get status of a pool."""
    result = engine.status(pool_name)
    if result.is_failure:
        raise http_error(result.error)

    return PoolResponse(success=True, pool=result.value.to_dict())


@router.get("/{pool_name}/exists", response_model=APIResponse)
def pool_exists(pool_name: PoolName, engine: ZpoolEngine = Depends(get_zpool_engine)):
    result = engine.exists(pool_name)
    if result.is_failure:
        raise http_error(result.error)

    return APIResponse(success=True, data={"exists": result.value})


@router.get("/{pool_name}/properties", response_model=PropertiesResponse)
def get_pool_properties(pool_name: PoolName, engine: ZpoolEngine = Depends(get_zpool_engine)):
    result = engine.read_properties(pool_name)
    if result.is_failure:
        raise http_error(result.error)

    return PropertiesResponse(success=True, properties=result.value.to_dict())


@router.patch("/{pool_name}/properties", response_model=PropertiesResponse)
def update_pool_properties(
    pool_name: PoolName,
    request: PoolPropertiesModel,
    engine: ZpoolEngine = Depends(get_zpool_engine)
):
    """Update pool properties. Fields left out of the request keep their current value."""
    current = engine.read_properties(pool_name)
    if current.is_failure:
        raise http_error(current.error)

    desired = replace(ZpoolPropertiesWrite.from_current(current.value), **request.overrides())
    result = engine.update_properties(pool_name, desired)
    if result.is_failure:
        raise http_error(result.error)

    return PropertiesResponse(success=True, properties=result.value.to_dict())


@router.post("/{pool_name}/export", response_model=APIResponse)
def export_pool(
    pool_name: PoolName,
    force: bool = Query(False, description="Forcefully unmount datasets"),
    engine: ZpoolEngine = Depends(get_zpool_engine)
):
    result = engine.export(pool_name, force)
    if result.is_failure:
        raise http_error(result.error)

    return APIResponse(success=True, message=f"Pool {pool_name} exported")


@router.delete("/{pool_name}", response_model=APIResponse)
def destroy_pool(
    pool_name: PoolName,
    force: bool = Query(False, description="Forcefully unmount datasets"),
    engine: ZpoolEngine = Depends(get_zpool_engine)
):
    result = engine.destroy(pool_name, force)
    if result.is_failure:
        raise http_error(result.error)

    logger.info(f"Destroyed pool {pool_name}")
    return APIResponse(success=True, message=f"Pool {pool_name} destroyed")
