#!/usr/bin/env python3
"""
zpoolctl API Service

FastAPI application exposing pool lifecycle operations over HTTP.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_config
from .api.routers import pool_router

config = get_config()

logging.basicConfig(
    level=config.server.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting zpoolctl API service with config: {config.get_summary()}")
    yield
    logger.info("Shutting down zpoolctl API service")


app = FastAPI(
    title="zpoolctl API",
    description="Pool lifecycle and property management on top of zpool(8)",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if config.server.enable_docs else None,
    redoc_url="/redoc" if config.server.enable_docs else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(pool_router)


@app.get("/")
def root():
    """Root endpoint with API information"""
    return {
        "name": "zpoolctl",
        "version": __version__,
        "docs": "/docs" if config.server.enable_docs else None,
        "pools": "/api/v1/pools/",
    }


def main():
    """Run the API service with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level=config.server.log_level.lower())


if __name__ == "__main__":
    main()
