"""File helpers and the small CRC-16 used to key routes."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

StrPath = Union[str, "os.PathLike[str]"]


def get_file_size(filename: StrPath) -> int:
    """Return the size of *filename* in bytes, or 0 if it cannot be opened."""
    try:
        with open(filename, "rb") as handle:
            return handle.seek(0, os.SEEK_END)
    except OSError:
        return 0


def load_file(filename: StrPath) -> bytes:
    """Return the whole contents of *filename*.

    Raises OSError when the file cannot be read and ValueError when it is empty.
    """
    data = Path(filename).read_bytes()
    if not data:
        raise ValueError(f"{os.fspath(filename)}: file is empty")
    return data


def small_crc16_8005(data: str | bytes) -> int:
    """Return the CRC-16 (polynomial 0x8005, reflected, initial value 0) of *data*.

    Text is encoded as UTF-8 before hashing.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    crc = 0
    for byte in data:
        x = ((crc ^ byte) & 0xFF) << 8
        y = x

        x ^= x << 1
        x ^= x << 2
        x ^= x << 4

        x = (x & 0x8000) | (y >> 1)

        crc = (crc >> 8) ^ (x >> 15) ^ (x >> 1) ^ x
    return crc & 0xFFFF