"""
Run command: start the central configuration loop until SIGINT/SIGTERM.
"""

from __future__ import annotations

import argparse
import logging
import signal
import threading

from centralconf.helpers.logging_helper import configure_logging
from centralconf.interfaces.cli.cli_ui import print_info, print_success


def cmd_run(args: argparse.Namespace) -> int:
    """
    Start the Application and block until interrupted.

    With --serve the status API is exposed with uvicorn (which handles signals itself).
    """
    configure_logging(logging.INFO)

    # Import here so loading configuration happens after logging is configured
    import centralconf.app as app

    application = app.application
    application.start()
    print_success(f"Running ({application.current_config().description})")

    try:
        if args.serve:
            import uvicorn

            from centralconf.interfaces.api.api_app import api_app

            host = args.host or application.api_host
            port = args.port or application.api_port
            print_info(f"Status API at http://{host}:{port}/api/v1/config")
            uvicorn.run(api_app, host=host, port=port, log_level="info")
        else:
            stop_event = threading.Event()

            def _request_stop(signum, frame):
                logging.info(f"Received signal {signum}, shutting down...")
                stop_event.set()

            signal.signal(signal.SIGTERM, _request_stop)
            signal.signal(signal.SIGINT, _request_stop)
            stop_event.wait()
    finally:
        application.stop()

    print_info("Stopped")
    return 0
