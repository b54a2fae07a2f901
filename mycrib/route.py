"""A route table keyed by the CRC-16 of the request path."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus

from mycrib.handler import Handler, RequestContext
from mycrib.http import Response, error_response, json_response, reason_phrase
from mycrib.util import small_crc16_8005

logger = logging.getLogger(__name__)

MAX_ROUTE_LEN = 64


@dataclass(frozen=True)
class _Route:
    path: str
    handler: Handler


def _internal_error() -> Response:
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    return Response(int(status), reason_phrase(status).encode("utf-8"))


class Router:
    """Maps request paths to handlers and turns their results into responses.

    Paths are looked up by their CRC-16 alone, so two paths with the same
    checksum share a slot and the later one wins.
    """

    def __init__(self) -> None:
        self._routes: dict[int, _Route] = {}

    def add(self, path: str, handler: Handler) -> None:
        """Register *handler* for *path*."""
        self._routes[small_crc16_8005(path)] = _Route(path, handler)
        logger.info("new route: '%s'", path)

    def remove(self, path: str) -> None:
        """Forget the route for *path*; unknown paths are ignored."""
        self._routes.pop(small_crc16_8005(path), None)

    def dispatch(self, req_ctx: RequestContext) -> Response:
        """Run the handler for the request's URL and build the response."""
        if len(req_ctx.url.encode("utf-8")) > MAX_ROUTE_LEN:
            return error_response(HTTPStatus.BAD_REQUEST)

        route = self._routes.get(small_crc16_8005(req_ctx.url))
        if route is None:
            return error_response(HTTPStatus.NOT_FOUND)

        result = route.handler(req_ctx)
        if result is None:
            return _internal_error()

        status = result.get("status")
        if not isinstance(status, int) or isinstance(status, bool) or status == 0:
            return _internal_error()

        return json_response(result, status)