"""Decoding of the world map: chunk types, the chunk map and fixed and placed objects."""

from __future__ import annotations

import struct
from array import array
from dataclasses import dataclass
from typing import BinaryIO, Sequence

from britannia.flex import read_flex_records

CHUNK_COUNT = 3072
CHUNK_SIZE = 16
SUPERCHUNKS = 12
MAP_CHUNKS = SUPERCHUNKS * CHUNK_SIZE
WORLD_SIZE = MAP_CHUNKS * CHUNK_SIZE
FIRST_OBJECT_SHAPE = 150
EGG_SHAPES = frozenset({0, 275, 607})

_SHAPE_MASK = 0x3FF
_FRAME_MASK = 0x1F


@dataclass(frozen=True)
class PlacedObject:
    """An object at a world position; z is its lift."""

    shape: int
    frame: int
    x: int
    y: int
    z: int


def _split_shape(value: int) -> tuple[int, int]:
    return value & _SHAPE_MASK, (value >> 10) & _FRAME_MASK


def _read_words(stream: BinaryIO, count: int) -> array:
    data = stream.read(count * 2)
    data = data[: len(data) - len(data) % 2]
    words = array("H")
    words.frombytes(data)
    if array("H", [1]).tobytes() != b"\x01\x00":
        words.byteswap()
    words.extend([0] * (count - len(words)))
    return words


def load_chunks(stream: BinaryIO) -> list[list[list[int]]]:
    """Read the 3072 chunk types, each 16 rows of 16 tile words; missing data reads as 0."""
    words = _read_words(stream, CHUNK_COUNT * CHUNK_SIZE * CHUNK_SIZE)
    chunks = []
    for chunk in range(CHUNK_COUNT):
        base = chunk * CHUNK_SIZE * CHUNK_SIZE
        chunks.append(
            [
                list(words[base + row * CHUNK_SIZE : base + (row + 1) * CHUNK_SIZE])
                for row in range(CHUNK_SIZE)
            ]
        )
    return chunks


def load_chunk_map(stream: BinaryIO) -> list[list[int]]:
    """Read the 192x192 map of chunk ids, indexed [x][y]; missing data reads as 0.

    The file holds 12x12 superchunks in row order, each 16x16 chunk ids in row order.
    """
    words = iter(_read_words(stream, MAP_CHUNKS * MAP_CHUNKS))
    chunk_map = [[0] * MAP_CHUNKS for _ in range(MAP_CHUNKS)]
    for super_y in range(SUPERCHUNKS):
        for super_x in range(SUPERCHUNKS):
            for row in range(CHUNK_SIZE):
                for column in range(CHUNK_SIZE):
                    chunk_map[super_x * CHUNK_SIZE + column][super_y * CHUNK_SIZE + row] = next(words)
    return chunk_map


def build_world(
    chunks: Sequence[Sequence[Sequence[int]]], chunk_map: Sequence[Sequence[int]]
) -> tuple[list[array], list[PlacedObject]]:
    """Expand the chunk map into a 3072x3072 tile grid and list the object tiles.

    The grid is indexed [row][column]. Tiles whose shape is 150 or more are
    also returned as objects at lift 0.
    """
    if len(chunk_map) != MAP_CHUNKS or any(len(column) != MAP_CHUNKS for column in chunk_map):
        raise ValueError(f"chunk map must be {MAP_CHUNKS}x{MAP_CHUNKS}")

    transposed: dict[int, list[array]] = {}
    object_tiles: dict[int, list[tuple[int, int, int, int]]] = {}

    def prepare(chunk_id: int) -> None:
        if chunk_id in transposed:
            return
        try:
            chunk = chunks[chunk_id]
        except IndexError:
            raise ValueError(f"chunk map refers to unknown chunk {chunk_id}") from None
        transposed[chunk_id] = [
            array("H", (chunk[l][k] for l in range(CHUNK_SIZE))) for k in range(CHUNK_SIZE)
        ]
        tiles = []
        for k in range(CHUNK_SIZE):
            for l in range(CHUNK_SIZE):
                shape, frame = _split_shape(chunk[l][k])
                if shape >= FIRST_OBJECT_SHAPE:
                    tiles.append((k, l, shape, frame))
        object_tiles[chunk_id] = tiles

    objects: list[PlacedObject] = []
    for i, column in enumerate(chunk_map):
        for j, chunk_id in enumerate(column):
            prepare(chunk_id)
            objects.extend(
                PlacedObject(shape, frame, i * CHUNK_SIZE + k, j * CHUNK_SIZE + l, 0)
                for k, l, shape, frame in object_tiles[chunk_id]
            )

    world = []
    for j in range(MAP_CHUNKS):
        for k in range(CHUNK_SIZE):
            row = array("H")
            for i in range(MAP_CHUNKS):
                row.extend(transposed[chunk_map[i][j]][k])
            world.append(row)
    return world, objects


def superchunk_file_name(prefix: str, index: int) -> str:
    """File name of a superchunk's data: the prefix and two upper-case hex digits."""
    return f"{prefix}{index:02x}".upper()


def parse_ifix(data: bytes, superchunk_x: int, superchunk_y: int) -> list[PlacedObject]:
    """Decode the fixed objects of one superchunk from its flex file."""
    records = read_flex_records(data)
    objects = []
    for chunk_number, record in enumerate(records[: CHUNK_SIZE * CHUNK_SIZE]):
        chunk_y, chunk_x = divmod(chunk_number, CHUNK_SIZE)
        usable = len(record) - len(record) % 4
        for location, shape_data in struct.iter_unpack("<HH", record[:usable]):
            shape, frame = _split_shape(shape_data)
            objects.append(
                PlacedObject(
                    shape,
                    frame,
                    superchunk_x * 256 + chunk_x * CHUNK_SIZE + ((location >> 4) & 0xF),
                    superchunk_y * 256 + chunk_y * CHUNK_SIZE + (location & 0xF),
                    (location >> 8) & 0xF,
                )
            )
    return objects


def _position(x: int, y: int, superchunk_x: int, superchunk_y: int) -> tuple[int, int]:
    return (
        superchunk_x * 256 + (x >> 4) * CHUNK_SIZE + (x & 0x0F),
        superchunk_y * 256 + (y >> 4) * CHUNK_SIZE + (y & 0x0F),
    )


def parse_ireg(data: bytes, superchunk_x: int, superchunk_y: int) -> list[PlacedObject]:
    """Decode the placed objects of one superchunk.

    Records start with a length byte. Length 6 is a plain object, length 12 a
    container or egg; other length bytes are skipped on their own. Eggs and
    shape 0 are left out. Parsing stops at a truncated record.
    """
    objects = []
    pos = 0
    while pos < len(data):
        length = data[pos]
        pos += 1
        if length not in (6, 12):
            continue
        record = data[pos : pos + length]
        if len(record) < length:
            break
        pos += length
        x, y = record[0], record[1]
        shape, frame = _split_shape(struct.unpack_from("<H", record, 2)[0])
        lift = (record[4] if length == 6 else record[9]) >> 4
        if shape not in EGG_SHAPES:
            world_x, world_y = _position(x, y, superchunk_x, superchunk_y)
            objects.append(PlacedObject(shape, frame, world_x, world_y, lift))
    return objects