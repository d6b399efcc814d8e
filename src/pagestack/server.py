"""Local development server for previewing a built site."""

import logging
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

logger = logging.getLogger(__name__)


class PreviewRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that logs through the pagestack logger."""

    def log_message(self, format: str, *args) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


def create_server(directory: Path, host: str = "127.0.0.1", port: int = 8080) -> ThreadingHTTPServer:
    """Create a server for a directory without starting it.

    Args:
        directory: Directory to serve
        host: Interface to bind
        port: TCP port (0 picks a free port)

    Returns:
        Bound, not yet serving, HTTP server

    Raises:
        ValueError: If the directory does not exist
    """
    if not directory.is_dir():
        raise ValueError(f"Output directory does not exist: {directory}")
    handler = partial(PreviewRequestHandler, directory=str(directory))
    return ThreadingHTTPServer((host, port), handler)


def serve(directory: Path, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Serve a directory until interrupted."""
    server = create_server(directory, host, port)
    bound_host, bound_port = server.server_address[:2]
    logger.info("Start debug server at http://%s:%d/ (serving %s)", bound_host, bound_port, directory)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Stopping debug server")
