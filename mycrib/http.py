"""HTTP response helpers shared by the router and the server."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

JSON_CONTENT_TYPE = "application/json"
ALLOWED_METHODS = frozenset({"GET", "POST"})

_ERROR_TEMPLATE = '{{"status": {status}, "result": "{reason}"}}'


@dataclass(frozen=True)
class Response:
    """A finished HTTP response: status code, body and content type."""

    status: int
    body: bytes
    content_type: str = JSON_CONTENT_TYPE

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": self.content_type}


def check_method(method: str) -> bool:
    """Return True when *method* is one the server accepts (GET or POST)."""
    return method in ALLOWED_METHODS


def reason_phrase(status: int) -> str:
    """Return the standard reason phrase for *status*, or "Unknown"."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown"


def json_response(payload: Any, status: int) -> Response:
    """Serialise *payload* as JSON into a response with *status*."""
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    return Response(status, body)


def error_response(status: int) -> Response:
    """Return the standard JSON error body for *status*."""
    body = _ERROR_TEMPLATE.format(status=status, reason=reason_phrase(status))
    return Response(status, body.encode("utf-8"))