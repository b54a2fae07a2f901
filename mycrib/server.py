"""The HTTPS server that answers requests through the route table."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import signal
import ssl
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Mapping, Optional, Sequence, Union
from urllib.parse import parse_qsl, unquote, urlsplit

from mycrib.db import DEFAULT_DB_PATH
from mycrib.handler import RequestContext, movies_handler, root_handler
from mycrib.http import Response, check_method, error_response
from mycrib.route import Router
from mycrib.util import load_file

logger = logging.getLogger(__name__)

StrPath = Union[str, "os.PathLike[str]"]

PORT = 8080
SERVER_KEY_FILE = "../pki/mycrib.key"
SERVER_CERT_FILE = "../pki/mycrib.pem"


def answer_connection(
    router: Router,
    method: str,
    url: str,
    query: Optional[Mapping[str, str]] = None,
    body: bytes = b"",
) -> Response:
    """Answer one request: refuse methods other than GET and POST, else route it."""
    if not check_method(method):
        return error_response(HTTPStatus.METHOD_NOT_ALLOWED)
    req_ctx = RequestContext(url=url, method=method, query=dict(query or {}), body=body)
    return router.dispatch(req_ctx)


def build_router(db_path: StrPath = DEFAULT_DB_PATH) -> Router:
    """Return a router serving '/' and '/movies' against the database at *db_path*."""

    def movies(req_ctx: RequestContext):
        return movies_handler(dataclasses.replace(req_ctx, db_path=db_path))

    router = Router()
    router.add("/", root_handler)
    router.add("/movies", movies)
    return router


class RequestHandler(BaseHTTPRequestHandler):
    """Feeds every incoming request to :func:`answer_connection`."""

    server_version = "mycrib"

    def _answer(self) -> None:
        parts = urlsplit(self.path)
        query: dict[str, str] = {}
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            query.setdefault(key, value)

        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        body = self.rfile.read(length) if length > 0 else b""

        response = answer_connection(
            self.server.router, self.command, unquote(parts.path), query, body
        )

        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(response.body)

    do_GET = _answer
    do_POST = _answer
    do_PUT = _answer
    do_DELETE = _answer
    do_PATCH = _answer
    do_HEAD = _answer
    do_OPTIONS = _answer

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)


class _RoutingServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], router: Router) -> None:
        super().__init__(address, RequestHandler)
        self.router = router


def make_server(
    host: str,
    port: int,
    router: Router,
    certfile: Optional[StrPath] = None,
    keyfile: Optional[StrPath] = None,
) -> ThreadingHTTPServer:
    """Bind a threaded server; with a certificate and key it speaks TLS."""
    if (certfile is None) != (keyfile is None):
        raise ValueError("certfile and keyfile must be given together")

    server = _RoutingServer((host, port), router)
    if certfile is not None:
        try:
            context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
            context.load_cert_chain(certfile, keyfile)
            server.socket = context.wrap_socket(server.socket, server_side=True)
        except Exception:
            server.server_close()
            raise
    return server


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the server until SIGINT or SIGTERM."""
    parser = argparse.ArgumentParser(prog="mycrib", description="Movie search server.")
    parser.add_argument("--host", default="", help="address to bind (default: all)")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--cert", default=SERVER_CERT_FILE, help="PEM certificate")
    parser.add_argument("--key", default=SERVER_KEY_FILE, help="PEM private key")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="SQLite database")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    try:
        load_file(args.cert)
        load_file(args.key)
    except (OSError, ValueError):
        print("the key/certificate files could not be read.")
        return 1

    router = build_router(args.db)
    try:
        server = make_server(args.host, args.port, router, args.cert, args.key)
    except OSError as exc:
        logger.error("could not start server: %s", exc)
        return 1

    stop = threading.Event()

    def request_stop(signum, frame) -> None:
        logger.info("shutting down server")
        stop.set()

    signal.signal(signal.SIGINT, request_stop)
    signal.signal(signal.SIGTERM, request_stop)

    worker = threading.Thread(target=server.serve_forever, daemon=True)
    worker.start()
    logger.info(
        "[%d] started server on port %d, press CTRL+C to stop", os.getpid(), args.port
    )

    while not stop.wait(1):
        pass

    server.shutdown()
    server.server_close()
    worker.join()
    return 0