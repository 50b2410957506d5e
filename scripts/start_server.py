#!/usr/bin/env python3
"""
Start the Pairwise Ranker web server.
"""

import argparse
import logging
import os
import socket
import sys
from pathlib import Path

import uvicorn

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from data.candidates import load_candidates  # noqa: E402
from web.main import CANDIDATES_FILE_ENV  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

PORT_SEARCH_SPAN = 10


def port_is_free(host: str, port: int) -> bool:
    """True if a TCP socket can bind host:port right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def choose_port(host: str, port: int, auto_port: bool) -> int:
    """
    Pick the port to serve on.

    Args:
        host: Interface to bind
        port: Requested port
        auto_port: Whether to try the next PORT_SEARCH_SPAN ports when taken

    Returns:
        The requested port, or the first free one after it

    Raises:
        RuntimeError: If auto_port is set and no port in the span is free
    """
    if not auto_port:
        return port

    for candidate in range(port, port + PORT_SEARCH_SPAN):
        if port_is_free(host, candidate):
            if candidate != port:
                logger.warning(f"Port {port} is taken, using {candidate} instead")
            return candidate
    raise RuntimeError(
        f"No free port in {port}-{port + PORT_SEARCH_SPAN - 1} on {host}"
    )


def configure_candidates(path: str) -> int:
    """
    Check a candidate file and hand it to the app.

    The app reads the file itself on first request, which also covers
    uvicorn reload workers that start from a fresh interpreter.

    Returns:
        Number of candidates in the file
    """
    candidates_path = Path(path).absolute()
    count = len(load_candidates(candidates_path))
    if count < 2:
        logger.warning(
            f"{candidates_path} lists {count} candidate(s); add more to vote"
        )
    os.environ[CANDIDATES_FILE_ENV] = str(candidates_path)
    return count


def main():
    parser = argparse.ArgumentParser(description="Start the Pairwise Ranker server")
    parser.add_argument(
        "--candidates", help="Text or CSV file with candidates to preload"
    )
    parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--auto-port",
        action="store_true",
        help=f"Try the next {PORT_SEARCH_SPAN} ports if the requested one is taken",
    )

    args = parser.parse_args()

    try:
        if args.candidates:
            count = configure_candidates(args.candidates)
            logger.info(f"Preloading {count} candidates from {args.candidates}")
        port = choose_port(args.host, args.port, args.auto_port)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error(f"Cannot start server: {e}")
        sys.exit(1)

    logger.info(f"Serving Pairwise Ranker on http://{args.host}:{port} (Ctrl+C stops)")
    uvicorn.run("web.main:app", host=args.host, port=port, reload=args.reload)


if __name__ == "__main__":
    main()
