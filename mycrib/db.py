"""Movie lookups against the SQLite database."""

from __future__ import annotations

import logging
import os
import re
import sqlite3
from contextlib import closing
from typing import Any, Union

logger = logging.getLogger(__name__)

StrPath = Union[str, "os.PathLike[str]"]

DEFAULT_DB_PATH = "../sql/mycrib.db"

HTTP_OK = 200
HTTP_BAD_REQUEST = 400

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

# Search types are matched by prefix, in this order.
_SEARCH_TYPES = (
    ("contains", "LIKE", "%{}%"),
    ("endswith", "LIKE", "%{}"),
    ("startswith", "LIKE", "{}%"),
    ("exact", "=", "{}"),
)


class DatabaseError(Exception):
    """Raised when the database cannot be opened or queried."""


def connect(path: StrPath = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open the database at *path* in defensive mode where available."""
    try:
        connection = sqlite3.connect(path)
    except sqlite3.Error as exc:
        raise DatabaseError(f"can't open database: {exc}") from exc

    if hasattr(connection, "setconfig"):
        try:
            connection.setconfig(sqlite3.SQLITE_DBCONFIG_DEFENSIVE, True)
        except sqlite3.Error as exc:
            connection.close()
            raise DatabaseError(
                f"could not set SQLITE_DBCONFIG_DEFENSIVE: {exc}"
            ) from exc
    return connection


def build_statement(
    connection: sqlite3.Connection, query: str, *args: Any
) -> sqlite3.Cursor:
    """Run *query* with *args* bound as text and return the cursor over its rows."""
    try:
        return connection.execute(query, tuple(str(arg) for arg in args))
    except sqlite3.Error as exc:
        raise DatabaseError(f"failed to prepare statement: {exc}") from exc


def _column(row: tuple, index: int) -> Any:
    return row[index] if index < len(row) else None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _as_number(value: Any, kind: type) -> Any:
    if value is None:
        return kind(0)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    try:
        return kind(value)
    except (TypeError, ValueError):
        try:
            return kind(float(value))
        except (TypeError, ValueError):
            return kind(0)


def _movie_record(row: tuple) -> dict[str, Any] | None:
    text_fields = {
        "title": _as_text(_column(row, 1)),
        "genre": _as_text(_column(row, 2)),
        "poster_url": _as_text(_column(row, 5)),
        "cast": _as_text(_column(row, 7)),
        "director": _as_text(_column(row, 8)),
    }
    if any(value is None for value in text_fields.values()):
        return None
    return {
        "title": text_fields["title"],
        "genre": text_fields["genre"],
        "year": _as_number(_column(row, 3), int),
        "length": _as_number(_column(row, 4), int),
        "poster_url": text_fields["poster_url"],
        "rating_family": _as_number(_column(row, 6), float),
        "cast": text_fields["cast"],
        "director": text_fields["director"],
        "rating_imdb": _as_number(_column(row, 9), float),
    }


def exec_read_movies(cursor: sqlite3.Cursor) -> list[dict[str, Any]]:
    """Collect movie records from *cursor*, skipping rows with missing text.

    A failure part way through is logged and the rows read so far are returned.
    """
    records: list[dict[str, Any]] = []
    try:
        for row in cursor:
            record = _movie_record(tuple(row))
            if record is not None:
                records.append(record)
    except sqlite3.Error as exc:
        logger.error("%s", exc)
    finally:
        cursor.close()
    return records


def read_movies(
    search_pattern: str,
    search_type: str = "contains",
    search_by: str = "title",
    path: StrPath = DEFAULT_DB_PATH,
) -> dict[str, Any]:
    """Search the movies table and return a JSON-ready response document."""
    with closing(connect(path)) as connection:
        for name, operator, template in _SEARCH_TYPES:
            if search_type.startswith(name):
                break
        else:
            return {"status": HTTP_BAD_REQUEST, "error": "Unsupported search type"}

        if not _IDENTIFIER.match(search_by):
            raise DatabaseError(f"invalid column name: {search_by!r}")

        query = f"SELECT * FROM movies WHERE {search_by} {operator} ?;"
        cursor = build_statement(connection, query, template.format(search_pattern))
        return {"status": HTTP_OK, "result": exec_read_movies(cursor)}