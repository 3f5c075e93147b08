#!/usr/bin/env python3
"""
centralconf Application Starter
Initializes the Application (config store, central config fetcher) then starts the status API server.
"""

import logging
import signal
import sys

import uvicorn

from centralconf.app import application
from centralconf.helpers.logging_helper import configure_logging, sanitize_url

# Configure logging once for the whole process
configure_logging(logging.INFO)


def shutdown_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logging.info(f"Received signal {signum}, shutting down...")
    application.stop()
    sys.exit(0)


def main() -> None:
    # Register signal handlers for graceful shutdown
    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    logging.info("[Application] Starting centralconf...")
    application.start()

    static = application.static_config
    logging.info(
        "Effective config: server_url=%s service_name=%s environment=%s central_config=%s api=%s:%d",
        sanitize_url(static.server_url),
        static.service_name,
        static.environment,
        static.central_config,
        application.api_host,
        application.api_port,
    )

    try:
        uvicorn.run(
            "centralconf.interfaces.api.api_app:api_app",
            host=application.api_host,
            port=application.api_port,
            log_level="info",
        )
    finally:
        logging.info("API server stopped, cleaning up...")
        application.stop()


if __name__ == "__main__":
    main()
