"""Decoding of palettes, terrain tiles and run-length encoded object shapes."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Sequence

from britannia.flex import FlexEntry, FlexError, parse_flex_header, read_flex_records
from britannia.primitives import Color, Image

TERRAIN_SHAPES = 150
SHAPE_COUNT = 1024
TILE_SIZE = 8
TILE_BYTES = TILE_SIZE * TILE_SIZE
PALETTE_SIZE = 256
TRANSPARENT_INDEX = 254
TRANSPARENT_COLOR = Color(128, 128, 128, 128)


@dataclass
class ShapeFrame:
    """One decoded frame of an object shape.

    x_offset and y_offset are the distances from the frame's hot spot to its
    left and top edges.
    """

    image: Image
    x_offset: int
    y_offset: int

    @property
    def width(self) -> int:
        """Frame width in pixels."""
        return self.image.width

    @property
    def height(self) -> int:
        """Frame height in pixels."""
        return self.image.height


class _Reader:
    """Bounds-checked little-endian reader over a byte buffer."""

    def __init__(self, data: bytes, pos: int) -> None:
        self._data = data
        self.pos = pos

    def take(self, fmt: str) -> tuple:
        size = struct.calcsize(fmt)
        if self.pos < 0 or self.pos + size > len(self._data):
            raise FlexError("shape data truncated")
        values = struct.unpack_from(fmt, self._data, self.pos)
        self.pos += size
        return values

    def u8(self) -> int:
        return self.take("<B")[0]

    def u16(self) -> int:
        return self.take("<H")[0]

    def u32(self) -> int:
        return self.take("<I")[0]

    def raw(self, count: int) -> bytes:
        if self.pos + count > len(self._data):
            raise FlexError("shape data truncated")
        chunk = self._data[self.pos : self.pos + count]
        self.pos += count
        return chunk


def parse_palette(data: bytes) -> list[Color]:
    """Read the base palette from the first entry of a palette flex file.

    Channels are stored as 6-bit values and scaled by four. Index 254 is the
    translucent grey used for shadows.
    """
    records = read_flex_records(data)
    if not records:
        raise FlexError("palette file has no entries")
    record = records[0]
    if len(record) < PALETTE_SIZE * 3:
        raise FlexError("palette entry is too short")
    palette = [
        Color((r * 4) & 0xFF, (g * 4) & 0xFF, (b * 4) & 0xFF, 255)
        for r, g, b in struct.iter_unpack("<3B", record[: PALETTE_SIZE * 3])
    ]
    palette[TRANSPARENT_INDEX] = TRANSPARENT_COLOR
    return palette


def decode_terrain(
    data: bytes, entries: Sequence[FlexEntry], palette: Sequence[Color]
) -> Image:
    """Draw the unencoded 8x8 terrain tiles into one image.

    Shape n occupies columns 8n to 8n+7; frame f occupies rows 8f to 8f+7.
    Only the first 150 entries are terrain.
    """
    terrain = list(entries[:TERRAIN_SHAPES])
    frame_counts = [entry.length // TILE_BYTES for entry in terrain]
    image = Image(TERRAIN_SHAPES * TILE_SIZE, max(frame_counts, default=0) * TILE_SIZE)
    for shape, (entry, frames) in enumerate(zip(terrain, frame_counts)):
        if frames == 0:
            continue
        block = data[entry.offset : entry.offset + frames * TILE_BYTES]
        if len(block) < frames * TILE_BYTES:
            raise FlexError(f"terrain shape {shape} truncated")
        for index, value in enumerate(block):
            frame, within = divmod(index, TILE_BYTES)
            row, column = divmod(within, TILE_SIZE)
            image.set(shape * TILE_SIZE + column, frame * TILE_SIZE + row, palette[value])
    return image


def _decode_frame(data: bytes, start: int, palette: Sequence[Color]) -> ShapeFrame:
    reader = _Reader(data, start)
    w2, w1, h1, h2 = reader.take("<hhhh")
    width = w2 + w1 + 1
    height = h1 + h2 + 1
    if width <= 0 or height <= 0:
        raise FlexError(f"bad frame size {width}x{height}")
    image = Image(width, height)

    while True:
        block = reader.u16()
        if block == 0:
            break
        span, encoded = block >> 1, block & 1
        x, y = reader.take("<hh")
        x += width - w2 - 1
        y += height - h2 - 1
        if not encoded:
            for i, value in enumerate(reader.raw(span)):
                image.set(x + i, y, palette[value])
            continue
        end = x + span
        while x < end:
            run = reader.u8()
            count, repeated = run >> 1, run & 1
            if count == 0:
                raise FlexError("zero-length run in shape data")
            if repeated:
                color = palette[reader.u8()]
                for i in range(count):
                    image.set(x + i, y, color)
            else:
                for i, value in enumerate(reader.raw(count)):
                    image.set(x + i, y, palette[value])
            x += count
    return ShapeFrame(image, w2, h2)


def decode_shape(
    data: bytes, offset: int, length: int, palette: Sequence[Color]
) -> list[ShapeFrame]:
    """Decode the frames of one shape entry.

    An entry is run-length encoded when its first word equals its length;
    entries that are not encoded give an empty list.
    """
    reader = _Reader(data, offset)
    if reader.u32() != length:
        return []
    header_length = reader.u32()
    if header_length < 8:
        raise FlexError(f"bad shape header length {header_length}")
    count = (header_length - 4) // 4
    starts = [reader.pos - offset] + [reader.u32() for _ in range(count - 1)]
    return [_decode_frame(data, offset + start, palette) for start in starts]


def decode_shapes(
    data: bytes, palette: Sequence[Color]
) -> tuple[Image, dict[int, list[ShapeFrame]]]:
    """Decode a shapes flex file into the terrain image and the object shapes.

    Entries 0-149 are terrain; entries 150-1023 are objects, keyed by shape
    number. Empty and unencoded object entries are left out.
    """
    import io

    entries = parse_flex_header(io.BytesIO(data))
    terrain = decode_terrain(data, entries, palette)
    shapes: dict[int, list[ShapeFrame]] = {}
    for number in range(TERRAIN_SHAPES, min(len(entries), SHAPE_COUNT)):
        entry = entries[number]
        if entry.empty:
            continue
        frames = decode_shape(data, entry.offset, entry.length, palette)
        if frames:
            shapes[number] = frames
    return terrain, shapes