#!/usr/bin/env python3
"""Main entry point for GeoGuard."""

import uvicorn

from geo_guard.common.config import get_config
from geo_guard.common.logging import get_logger

logger = get_logger(__name__)


def main():
    """Start the API gateway."""
    config = get_config()
    logger.info(f"GeoGuard starting in {config.environment.value} mode")
    logger.info(f"Project root: {config.project_root}")

    uvicorn.run(
        "geo_guard.api.gateway:app",
        host=config.api_host,
        port=config.api_port,
        reload=config.is_development and config.debug,
        log_level=config.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
