"""Basic 2D building blocks: vectors, colours, sprites, tweens, animations and images."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Iterable, Sequence

from britannia.serialize import read_int, read_string, write_int, write_string


@dataclass(frozen=True)
class Vector2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vector2) -> float:
        """Euclidean distance to another vector."""
        return (other - self).length()

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length > 0:
            return Vector2(self.x / length, self.y / length)
        return self


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255


WHITE = Color(255, 255, 255, 255)
BLANK = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Vertex:
    """A 3D vertex with colour and texture coordinates."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0
    u: float = 0.0
    v: float = 0.0


@dataclass
class Vertex2D:
    """A 2D vertex with colour and texture coordinates."""

    x: float = 0.0
    y: float = 0.0
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0
    u: float = 0.0
    v: float = 0.0


def _channels(color: Color | Sequence[float] | None) -> tuple[float, float, float, float]:
    if color is None:
        return (1.0, 1.0, 1.0, 1.0)
    if isinstance(color, Color):
        return (color.r, color.g, color.b, color.a)
    r, g, b, a = color
    return (r, g, b, a)


def create_vertex(
    x: float = 0.0,
    y: float = 0.0,
    z: float = 0.0,
    color: Color | Sequence[float] | None = None,
    u: float = 0.0,
    v: float = 0.0,
) -> Vertex:
    """Build a vertex; color is a Color or four channel values, white by default."""
    r, g, b, a = _channels(color)
    return Vertex(x, y, z, r, g, b, a, u, v)


def create_vertex_2d(
    x: float = 0.0,
    y: float = 0.0,
    color: Color | Sequence[float] | None = None,
    u: float = 0.0,
    v: float = 0.0,
) -> Vertex2D:
    """Build a 2D vertex; color is a Color or four channel values, white by default."""
    r, g, b, a = _channels(color)
    return Vertex2D(x, y, r, g, b, a, u, v)


@dataclass
class ColoredString:
    """A piece of text with the colour it is drawn in."""

    text: str = ""
    color: Color = WHITE


@dataclass
class Sprite:
    """A rectangular region of a texture."""

    texture: Any = None
    source: Rect = Rect()


class MoveType(enum.IntEnum):
    """How a tween travels to its destination."""

    NORMAL = 0
    EASING = 1
    BOUNCE = 2
    PARABOLIC = 3


def _overshot(pos: Vector2, new: Vector2, dest: Vector2) -> bool:
    return (
        (pos.x < dest.x and new.x > dest.x)
        or (pos.x > dest.x and new.x < dest.x)
        or (pos.y < dest.y and new.y > dest.y)
        or (pos.y > dest.y and new.y < dest.y)
    )


class Tween:
    """A point that moves from a start towards a destination."""

    def __init__(
        self,
        start: Vector2,
        dest: Vector2,
        speed: float,
        acceleration: float = 0.0,
        move_type: MoveType = MoveType.NORMAL,
    ) -> None:
        self.start = start
        self.pos = start
        self.dest = dest
        self.speed = speed
        self.acceleration = 1.0
        self.acceleration_per_second = acceleration
        self.move_type = MoveType(move_type)
        self.overshoot_count = 0
        self.done = False

    def _step_clamped(self, step: Vector2) -> None:
        new = self.pos + step
        remaining = self.dest - new
        x = self.dest.x if remaining.x * step.x < 0 else new.x
        y = self.dest.y if remaining.y * step.y < 0 else new.y
        self.pos = Vector2(x, y)

    def update(self, dt: float) -> None:
        """Advance the tween by dt seconds."""
        if self.pos == self.dest:
            self.done = True
            return
        self.done = False
        direction = (self.dest - self.pos).normalized()

        if self.move_type is MoveType.NORMAL:
            self._step_clamped(direction * (self.speed * dt))

        elif self.move_type is MoveType.EASING:
            start_distance = self.start.distance_to(self.dest)
            current = self.pos.distance_to(self.dest)
            ratio = 1.0 if start_distance == 0 else min(math.sin(current / start_distance) * 1.5, 1.0)
            self._step_clamped(direction * (self.speed * ratio * dt))

        elif self.move_type is MoveType.BOUNCE:
            self.acceleration += self.acceleration_per_second * dt
            self.speed += self.acceleration * dt
            new = self.pos + direction * (self.speed * dt)
            if _overshot(self.pos, new, self.dest):
                self.speed = -0.1 * self.speed
                self.acceleration = self.acceleration_per_second
                self.overshoot_count += 1
            else:
                self.pos = new

        elif self.move_type is MoveType.PARABOLIC:
            self.acceleration += self.acceleration_per_second * dt
            self.speed += self.acceleration * dt
            new = self.pos + direction * (self.speed * dt)
            if _overshot(self.pos, new, self.dest):
                if self.overshoot_count == 0:
                    self.pos = new
                    self.acceleration = 0.0
                    self.acceleration_per_second *= 12
                    self.speed = -self.speed * 0.5
                else:
                    self.pos = self.dest
                self.overshoot_count += 1
            else:
                self.pos = new

    def reverse(self) -> None:
        """Swap the start and destination points."""
        self.start, self.dest = self.dest, self.start

    def pop_to_start(self) -> None:
        """Jump to the start point."""
        self.pos = self.start

    def pop_to_destination(self) -> None:
        """Jump to the destination point."""
        self.pos = self.dest


@dataclass
class _Anim:
    frame_order: list[int]
    frame_rate: int
    looping: bool
    ms_per_frame: int = field(init=False)

    def __post_init__(self) -> None:
        self.ms_per_frame = 1000 // self.frame_rate


class Animation:
    """A set of sprite frames and named sequences that play them."""

    def __init__(self) -> None:
        self.frames: list[Sprite] = []
        self._anims: dict[str, _Anim] = {}
        self.current_anim = ""
        self.start_time = 0
        self.elapsed_time = 0
        self.done = False

    def add_frame(self, sprite: Sprite) -> None:
        """Append a single frame."""
        self.frames.append(sprite)

    def add_frames(self, texture: Any, x: int, y: int, width: int, height: int, count: int) -> None:
        """Append count adjacent frames lying on one row of a texture."""
        self.add_frames_spaced(texture, x, y, width, height, count, width)

    def add_frames_spaced(
        self, texture: Any, x: int, y: int, width: int, height: int, count: int, x_step: int
    ) -> None:
        """Append count frames on one row, x_step pixels apart."""
        self.frames.extend(
            Sprite(texture, Rect(x + i * x_step, y, width, height)) for i in range(count)
        )

    def add_anim(self, name: str, frames: Iterable[int], frame_rate: int, looping: bool) -> None:
        """Define a named sequence of frame indices played at frame_rate per second."""
        if not 1 <= frame_rate <= 1000:
            raise ValueError(f"frame rate must be between 1 and 1000, got {frame_rate}")
        order = list(frames)
        if not order:
            raise ValueError("an animation needs at least one frame")
        self._anims[name] = _Anim(order, frame_rate, looping)

    def update(self, dt: float) -> None:
        """Advance the elapsed time by dt seconds."""
        self.elapsed_time += int(dt * 1000)

    def play(self, name: str, start_time: int = 0, elapsed_time: int = 0, now: float = 0.0) -> None:
        """Start a named sequence; unknown names are ignored."""
        playing = self._anims.get(self.current_anim)
        if name == self.current_anim and playing is not None and playing.looping and elapsed_time == 0:
            return
        if name not in self._anims:
            return
        self.current_anim = name
        self.start_time = int(now * 1000) + elapsed_time if start_time == 0 else start_time
        self.elapsed_time = elapsed_time
        self.done = False

    def _playing(self) -> _Anim:
        try:
            return self._anims[self.current_anim]
        except KeyError:
            raise LookupError("no animation is playing") from None

    def current_frame_number(self) -> int:
        """Index into frames of the frame shown now."""
        anim = self._playing()
        step = self.elapsed_time // anim.ms_per_frame
        last = len(anim.frame_order) - 1
        if anim.looping:
            step %= len(anim.frame_order)
        elif step > last:
            step = last
            self.done = True
        return anim.frame_order[step]

    def current_frame(self) -> Sprite:
        """The sprite shown now."""
        return self.frames[self.current_frame_number()]

    def frame(self, index: int) -> Sprite:
        """The sprite at a position in the playing sequence."""
        return self.frames[self._playing().frame_order[index]]

    def raw_frame(self, index: int) -> Sprite:
        """The sprite at an index in the frame list."""
        return self.frames[index]

    def save(self, stream: BinaryIO) -> None:
        """Write the playing sequence name and elapsed time."""
        write_string(stream, self.current_anim)
        write_int(stream, self.elapsed_time)

    def load(self, stream: BinaryIO, now: float = 0.0) -> None:
        """Read a saved sequence name and elapsed time and resume playing."""
        name = read_string(stream)
        elapsed = read_int(stream)
        self.play(name, int(now * 1000), elapsed, now)


class SpriteSheet:
    """A texture divided into a grid of equally sized sprites."""

    def __init__(self, texture: Any, width: int, height: int, columns: int, rows: int) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError("a sprite sheet needs at least one column and one row")
        self.texture = texture
        self.columns = columns
        self.rows = rows
        self.column_width = width // columns
        self.row_height = height // rows

    def sprite_at(self, column: int, row: int) -> Sprite:
        """The sprite in a grid cell."""
        return Sprite(
            self.texture,
            Rect(
                column * self.column_width,
                row * self.row_height,
                self.column_width,
                self.row_height,
            ),
        )


class Image:
    """A grid of RGBA pixels; reads outside it give BLANK and writes are ignored."""

    def __init__(self, width: int, height: int, fill: Color = BLANK) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.pixels: list[Color] = [fill] * (width * height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Color:
        """Colour at (x, y)."""
        if not self._inside(x, y):
            return BLANK
        return self.pixels[y * self.width + x]

    def set(self, x: int, y: int, color: Color) -> None:
        """Set the colour at (x, y)."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color

    def copy(self) -> Image:
        """An independent copy."""
        duplicate = Image(self.width, self.height)
        duplicate.pixels = list(self.pixels)
        return duplicate

    def crop(self, width: int, height: int) -> Image:
        """A new image holding the top-left width by height region."""
        result = Image(width, height)
        for y in range(height):
            for x in range(width):
                result.set(x, y, self.get(x, y))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (self.width, self.height, self.pixels) == (other.width, other.height, other.pixels)

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"


class ModTexture:
    """An image that can be shifted and cropped, with its original kept for reset."""

    def __init__(self, image: Image) -> None:
        self.image = image.copy()
        self.original = image.copy()
        self.width = image.width
        self.height = image.height

    def move_row_left(self, row: int) -> None:
        """Shift a row one pixel left; the last pixel keeps its colour."""
        for x in range(self.image.width - 1):
            self.image.set(x, row, self.image.get(x + 1, row))

    def move_row_right(self, row: int) -> None:
        """Shift a row one pixel right; the first pixel keeps its colour."""
        for x in range(self.image.width - 1, 0, -1):
            self.image.set(x, row, self.image.get(x - 1, row))

    def move_column_up(self, column: int) -> None:
        """Shift a column one pixel up; the bottom pixel keeps its colour."""
        for y in range(self.image.height - 1):
            self.image.set(column, y, self.image.get(column, y + 1))

    def move_column_down(self, column: int) -> None:
        """Shift a column one pixel down; the top pixel keeps its colour."""
        for y in range(self.image.height - 1, 0, -1):
            self.image.set(column, y, self.image.get(column, y - 1))

    def resize(self, width: float, height: float) -> None:
        """Crop the image to its top-left region; sizes outside 1..original are ignored."""
        if width < 1 or height < 1 or width > self.width or height > self.height:
            return
        self.image = self.image.crop(int(width), int(height))

    def reset(self) -> None:
        """Restore the original image."""
        self.image = self.original.copy()
        self.width = self.image.width
        self.height = self.image.height