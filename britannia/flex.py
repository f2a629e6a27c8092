"""Reading of flex archives, the container format of most game data files.

A flex file starts with an 80-byte title, followed by twelve little-endian
unsigned ints: an ignored magic value, the number of entries, and ten
reserved words. Then comes a table of (offset, length) pairs, one per entry.
An entry whose offset is 0 is empty.
"""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import BinaryIO

TITLE_SIZE = 80
TABLE_START = TITLE_SIZE + 12 * 4
_ENTRY = struct.Struct("<II")


class FlexError(ValueError):
    """Raised when a flex file is truncated or malformed."""


@dataclass(frozen=True)
class FlexEntry:
    """Location of one entry's data inside a flex file."""

    offset: int
    length: int

    @property
    def empty(self) -> bool:
        """True when the entry holds no data."""
        return self.offset == 0


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise FlexError(f"flex file truncated in {what}")
    return data


def parse_flex_header(stream: BinaryIO) -> list[FlexEntry]:
    """Read the header and entry table, leaving the stream just after the table."""
    _read_exact(stream, TITLE_SIZE, "title")
    words = struct.unpack("<12I", _read_exact(stream, 12 * 4, "header"))
    count = words[1]
    table = _read_exact(stream, count * _ENTRY.size, "entry table")
    return [
        FlexEntry(offset, length if offset else 0)
        for offset, length in _ENTRY.iter_unpack(table)
    ]


def read_flex_entries(stream: BinaryIO) -> list[bytes]:
    """Read every entry's data; empty entries give b""."""
    entries = parse_flex_header(stream)
    records = []
    for number, entry in enumerate(entries):
        if entry.empty:
            records.append(b"")
            continue
        stream.seek(entry.offset)
        records.append(_read_exact(stream, entry.length, f"entry {number}"))
    return records


def read_flex_records(data: bytes) -> list[bytes]:
    """Read every entry's data from an in-memory flex file."""
    return read_flex_entries(io.BytesIO(data))