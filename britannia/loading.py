"""Step-by-step loading of the game data directory into one GameData object."""

from __future__ import annotations

import io
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from britannia.flex import FlexError
from britannia.log import LogLevel, log
from britannia.objects import ObjectInfo, parse_object_table, parse_text_names
from britannia.primitives import Color, Image
from britannia.shapes import ShapeFrame, decode_shapes, parse_palette
from britannia.world import (
    SUPERCHUNKS,
    PlacedObject,
    build_world,
    load_chunk_map,
    load_chunks,
    parse_ifix,
    parse_ireg,
    superchunk_file_name,
)

DEFAULT_VERSION = "v0.0.1"
_VERSION_LENGTH = 19


class LoadingError(Exception):
    """Raised when the game data cannot be found or decoded."""


@dataclass
class GameData:
    """Everything read from the game data directory."""

    version: str = ""
    chunks: list = field(default_factory=list)
    chunk_map: list = field(default_factory=list)
    world: list = field(default_factory=list)
    object_table: list[ObjectInfo] = field(default_factory=list)
    palette: list[Color] = field(default_factory=list)
    terrain: Image | None = None
    shapes: dict[int, list[ShapeFrame]] = field(default_factory=dict)
    objects: list[PlacedObject] = field(default_factory=list)


def load_version(path: str | Path) -> str:
    """Read the version string from the first line of a file, or the default if it is missing."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(_VERSION_LENGTH)
    except OSError:
        return DEFAULT_VERSION
    return line.rstrip("\r\n")


class Loader:
    """Loads the game data one step at a time, recording progress messages."""

    def __init__(self, data_path: str | Path, version_path: str | Path = "Data/version.txt") -> None:
        self.data_path = Path(data_path)
        self.version_path = Path(version_path)
        self.data = GameData()
        self.failed = False
        self._messages: list[str] = []
        self._pending: deque[tuple[str | None, Callable[[], None]]] = deque(
            [
                ("Loading version...", self._load_version),
                ("Loading chunks...", self._load_chunks),
                ("Loading mapfile...", self._load_map),
                ("Loading objects...", self._load_objects),
                (None, self._load_shapes),
                ("Making map...", self._make_map),
                ("Loading IFIX...", self._load_ifix),
                ("Loading IREG...", self._load_ireg),
            ]
        )

    def _missing(self) -> LoadingError:
        text = (
            "Ultima VII files not found.  They should go into the "
            f"{self.data_path} folder."
        )
        log(text, LogLevel.ERROR)
        return LoadingError(text)

    def _read(self, *parts: str) -> bytes:
        try:
            return self.data_path.joinpath(*parts).read_bytes()
        except OSError as exc:
            raise self._missing() from exc

    def _load_version(self) -> None:
        self.data.version = load_version(self.version_path)

    def _load_chunks(self) -> None:
        self.data.chunks = load_chunks(io.BytesIO(self._read("STATIC", "U7CHUNKS")))

    def _load_map(self) -> None:
        self.data.chunk_map = load_chunk_map(io.BytesIO(self._read("STATIC", "U7MAP")))

    def _load_objects(self) -> None:
        names = parse_text_names(self._read("STATIC", "TEXT.FLX"))
        self.data.object_table = parse_object_table(
            self._read("STATIC", "TFA.DAT"), self._read("STATIC", "WGTVOL.DAT"), names
        )

    def _load_shapes(self) -> None:
        self.data.palette = parse_palette(self._read("STATIC", "PALETTES.FLX"))
        self.data.terrain, self.data.shapes = decode_shapes(
            self._read("STATIC", "SHAPES.VGA"), self.data.palette
        )

    def _make_map(self) -> None:
        self.data.world, objects = build_world(self.data.chunks, self.data.chunk_map)
        self.data.objects.extend(objects)

    def _superchunks(self):
        for super_y in range(SUPERCHUNKS):
            for super_x in range(SUPERCHUNKS):
                yield super_x, super_y, super_x + super_y * SUPERCHUNKS

    def _load_ifix(self) -> None:
        for super_x, super_y, index in self._superchunks():
            data = self._read("STATIC", superchunk_file_name("U7IFIX", index))
            self.data.objects.extend(parse_ifix(data, super_x, super_y))

    def _load_ireg(self) -> None:
        for super_x, super_y, index in self._superchunks():
            data = self._read("GAMEDAT", superchunk_file_name("U7IREG", index))
            self.data.objects.extend(parse_ireg(data, super_x, super_y))

    def step(self) -> bool:
        """Carry out the next loading step; False when nothing is left or loading failed."""
        if self.failed or not self._pending:
            return False
        message, action = self._pending[0]
        if message is not None:
            self._messages.append(message)
        try:
            action()
        except LoadingError:
            self.failed = True
            raise
        except (FlexError, ValueError) as exc:
            self.failed = True
            raise LoadingError(f"bad game data: {exc}") from exc
        self._pending.popleft()
        return True

    def run(self) -> GameData:
        """Carry out every remaining step and return the loaded data."""
        while self.step():
            pass
        if self.failed:
            raise LoadingError("loading failed")
        return self.data

    def done(self) -> bool:
        """True once every step has completed."""
        return not self.failed and not self._pending

    def messages(self) -> list[str]:
        """Progress messages recorded so far."""
        return list(self._messages)