"""Binary serialization of ints, unsigned ints, floats, bools and strings.

Values are stored as 4-byte little-endian words. Bools are stored as an
int holding 0 or 1. Strings are a 4-byte length followed by the raw bytes
and may be at most 255 bytes long.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

MAX_STRING_LENGTH = 255


class SerializationError(Exception):
    """Raised when data cannot be read from or written to a stream."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise SerializationError("stream ended prematurely")
    return data


def _read(fmt: str, stream: BinaryIO):
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))[0]


def _write(fmt: str, stream: BinaryIO, value) -> None:
    try:
        packed = struct.pack(fmt, value)
    except struct.error as exc:
        raise SerializationError(f"cannot serialize {value!r}: {exc}") from exc
    stream.write(packed)
    stream.flush()


def read_int(stream: BinaryIO) -> int:
    """Read a signed 32-bit integer."""
    return _read("<i", stream)


def read_uint(stream: BinaryIO) -> int:
    """Read an unsigned 32-bit integer."""
    return _read("<I", stream)


def read_float(stream: BinaryIO) -> float:
    """Read a 32-bit float."""
    return _read("<f", stream)


def read_bool(stream: BinaryIO) -> bool:
    """Read a bool stored as an int of 0 or 1."""
    value = read_int(stream)
    if value == 0:
        return False
    if value == 1:
        return True
    raise SerializationError(f"bad bool value {value}")


def read_string(stream: BinaryIO) -> str:
    """Read a length-prefixed string."""
    length = read_int(stream)
    if length < 0 or length > MAX_STRING_LENGTH:
        raise SerializationError(f"bad string length {length}")
    data = _read_exact(stream, length)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SerializationError("string is not valid UTF-8") from exc


def write_int(stream: BinaryIO, value: int) -> None:
    """Write a signed 32-bit integer."""
    _write("<i", stream, value)


def write_uint(stream: BinaryIO, value: int) -> None:
    """Write an unsigned 32-bit integer."""
    _write("<I", stream, value)


def write_float(stream: BinaryIO, value: float) -> None:
    """Write a 32-bit float."""
    _write("<f", stream, value)


def write_bool(stream: BinaryIO, value: bool) -> None:
    """Write a bool as an int of 0 or 1."""
    write_int(stream, 1 if value else 0)


def write_string(stream: BinaryIO, value: str) -> None:
    """Write a length-prefixed string of at most 255 bytes."""
    data = value.encode("utf-8")
    if len(data) > MAX_STRING_LENGTH:
        raise SerializationError(
            f"only strings of at most {MAX_STRING_LENGTH} bytes can be serialized"
        )
    write_uint(stream, len(data))
    stream.write(data)
    stream.flush()