#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are handled concurrently via async I/O in a single
uvicorn process (FastAPI + aiohttp client). Each request awaits at most one
storage round-trip.

Usage:
    python app.py

Environment variables:
    STORAGE_URL - Storage service base address (GO_SQLITE_SERVER also accepted)
    TABLE_NAME - Table holding URL mappings
    REDIRECTOR_PATH - Path segment short hashes are served under
    HOST - Host to bind to
    PORT - Port to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.storage.http_gateway import HTTPStorageGateway
from shortlink.service import URLShortenerService
from shortlink.hashing import HashGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


def build_service(config: Config, logger) -> URLShortenerService:
    """Wire the gateway and service from configuration."""
    gateway = HTTPStorageGateway(storage_url=config.storage_url, logger=logger)
    return URLShortenerService(
        gateway=gateway,
        table_name=config.table_name,
        redirector_path=config.redirector_path,
        hash_generator=HashGenerator(),
        logger=logger,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")
    logger.info(f"Using storage service at {config.storage_url}")

    # Initialize service
    service = build_service(config, logger)
    app.state.service = service

    # Non-fatal: a failed schema check is reported and startup continues
    app.state.schema_check = await service.initialize()

    logger.info("Service started successfully")

    yield

    # Shutdown
    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Create FastAPI app with lifespan
    app = create_app(
        service_instance=None,  # Set in lifespan
        config=config,
        lifespan=lifespan,
    )
    app.state.logger = logger

    # Configure uvicorn
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    # Run server
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
