"""HTTPS JSON server and helpers for searching a SQLite movie catalogue."""

__version__ = "0.1.0"