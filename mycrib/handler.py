"""Request handlers for the routes the server exposes."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Dict, Mapping, Optional, Union

from mycrib.db import DEFAULT_DB_PATH, DatabaseError, read_movies
from mycrib.http import reason_phrase

logger = logging.getLogger(__name__)

StrPath = Union[str, "os.PathLike[str]"]

Payload = Dict[str, Any]
Handler = Callable[["RequestContext"], Optional[Payload]]


@dataclass(frozen=True)
class RequestContext:
    """What a handler may look at: method, URL, query arguments and body."""

    url: str
    method: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    db_path: StrPath = DEFAULT_DB_PATH


def _is_get(method: str) -> bool:
    return method.startswith("GET")


def root_handler(req_ctx: RequestContext) -> Payload:
    """Handle '/': list the available routes for GET, refuse anything else."""
    if not _is_get(req_ctx.method):
        status = HTTPStatus.METHOD_NOT_ALLOWED
        return {"status": int(status), "result": reason_phrase(status)}
    return {"status": int(HTTPStatus.OK), "result": "['/', '/movies']"}


def movies_handler(req_ctx: RequestContext) -> Optional[Payload]:
    """Handle '/movies': search the movies table.

    Query arguments: ``search_pattern`` (required), ``search_type``
    (contains by default, or exact, startswith, endswith) and ``search_by``
    (the column to search, title by default). Returns None for methods other
    than GET.
    """
    if not _is_get(req_ctx.method):
        logger.error("Unimplemented handler for HTTP %s", req_ctx.method)
        return None

    search_pattern = req_ctx.query.get("search_pattern")
    if search_pattern is None:
        return {
            "status": int(HTTPStatus.BAD_REQUEST),
            "error": "A search pattern must be provided",
        }

    search_type = req_ctx.query.get("search_type") or "contains"
    search_by = req_ctx.query.get("search_by") or "title"

    try:
        return read_movies(search_pattern, search_type, search_by, req_ctx.db_path)
    except DatabaseError as exc:
        logger.error("%s", exc)
        return {
            "status": int(HTTPStatus.INTERNAL_SERVER_ERROR),
            "error": "Internal Server Error",
        }