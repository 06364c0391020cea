#!/usr/bin/env python3
"""
Static file server for the browser front-end.

Serves a directory over HTTP/1.1 with a per-connection read timeout so a slow
client cannot hold a worker forever. Access logs go through loguru and use the
client's IP address, never a reverse DNS lookup.

Usage:
    life-serve                          # localhost:8081, current directory
    life-serve --port 9000 --directory web
"""

from __future__ import annotations

import argparse
import functools
import sys
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from loguru import logger

from game_of_life.config import ServerConfig, load_config
from game_of_life.errors import GameOfLifeError
from game_of_life.logs import setup_logging


class StaticHandler(SimpleHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    timeout = 30.0

    def address_string(self) -> str:
        """Client IP only; access logs never do a reverse DNS lookup."""
        return self.client_address[0]

    def log_message(self, format: str, *args) -> None:
        logger.info(f"{self.address_string()} - {format % args}")


def make_server(config: ServerConfig) -> ThreadingHTTPServer:
    """Bind a threaded server for ``config``; call ``serve_forever`` to run it."""
    handler_cls = type("StaticHandler", (StaticHandler,), {"timeout": config.read_timeout})
    handler = functools.partial(handler_cls, directory=config.directory)
    server = ThreadingHTTPServer((config.host, config.port), handler)
    server.daemon_threads = True
    return server


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the front-end files over HTTP")
    parser.add_argument("--host", help="Bind address (default: server.host)")
    parser.add_argument("--port", "-p", type=int, help="Port (default: server.port)")
    parser.add_argument("--directory", "-d", help="Directory to serve (default: server.directory)")
    parser.add_argument("--config", "-c", help="Path to life_config.toml")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config.output.log_level, config.output.log_file)
    except GameOfLifeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    server_config = config.server
    if args.host:
        server_config.host = args.host
    if args.port is not None:
        server_config.port = args.port
    if args.directory:
        server_config.directory = args.directory

    server = make_server(server_config)
    host, port = server.server_address[:2]
    logger.info(f"Serving {server_config.directory} on http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
