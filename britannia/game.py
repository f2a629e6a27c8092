"""The world viewer: visible object selection, floor switching and the command entry point."""

from __future__ import annotations

import argparse
import enum
import math
import time
from typing import Iterable

from britannia.loading import Loader, LoadingError
from britannia.rng import RNG
from britannia.world import PlacedObject

Vector3 = tuple[float, float, float]

START_LOCATIONS: tuple[Vector3, ...] = (
    (1071.0, 0.0, 2209.0),
    (896.0, 0.0, 1328.0),
    (1025.0, 0.0, 2433.0),
    (294.0, 0.0, 1675.0),
    (2192.0, 0.0, 1487.0),
)

WELCOME_MESSAGES = (
    "Welcome to Ultima VII: Revisited!",
    "Move with WASD, rotate with Q and E.",
    "Zoom in and out with mousewheel.",
    "Left-click in the minimap to teleport.",
    "Press F1 to switch to the Object Viewer.",
    "Press SPACE to toggle pixelation.",
    "Press ESC to exit.",
)

DEFAULT_CAMERA_DISTANCE = 16.0


class Floor(float, enum.Enum):
    """Height cutoffs for viewing each floor of buildings."""

    FIRST = 4.0
    SECOND = 9.0
    THIRD = 15.0


_UP = {Floor.FIRST: Floor.SECOND, Floor.SECOND: Floor.THIRD}
_DOWN = {Floor.THIRD: Floor.SECOND, Floor.SECOND: Floor.FIRST}
_FLOOR_MESSAGES = {
    Floor.FIRST: "Viewing First Floor",
    Floor.SECOND: "Viewing Second Floor",
    Floor.THIRD: "Viewing Third Floor",
}


class Viewer:
    """Chooses which objects are in view of the camera and in what order to draw them."""

    def __init__(
        self,
        objects: Iterable[PlacedObject],
        camera_target: Vector3,
        camera_position: Vector3,
        camera_distance: float,
    ) -> None:
        self.objects = list(objects)
        self.camera_target = camera_target
        self.camera_position = camera_position
        self.camera_distance = camera_distance
        self.height_cutoff = Floor.FIRST
        self.pixelated = False

    def visible_objects(self) -> list[PlacedObject]:
        """Objects within draw range and below the floor cutoff, farthest from the camera first."""
        draw_range = self.camera_distance * 1.5
        visible = []
        for obj in self.objects:
            pos = (obj.x, obj.z, obj.y)
            if math.dist(pos, self.camera_target) - obj.z < draw_range and obj.z <= self.height_cutoff:
                visible.append((math.dist(pos, self.camera_position) - obj.z, obj))
        visible.sort(key=lambda item: item[0], reverse=True)
        return [obj for _, obj in visible]

    def floor_up(self) -> str | None:
        """Show one floor higher; returns the console message, or None at the top."""
        higher = _UP.get(self.height_cutoff)
        if higher is None:
            return None
        self.height_cutoff = higher
        return _FLOOR_MESSAGES[higher]

    def floor_down(self) -> str | None:
        """Show one floor lower; returns the console message, or None at the bottom."""
        lower = _DOWN.get(self.height_cutoff)
        if lower is None:
            return None
        self.height_cutoff = lower
        return _FLOOR_MESSAGES[lower]

    def toggle_pixelation(self) -> bool:
        """Flip pixelated rendering and return the new setting."""
        self.pixelated = not self.pixelated
        return self.pixelated


def pick_start_location(rng: RNG) -> Vector3:
    """Pick one of the five starting camera targets at random."""
    return START_LOCATIONS[rng.random(len(START_LOCATIONS))]


def main(argv: list[str] | None = None) -> int:
    """Load the game data and report the view from a random start location."""
    parser = argparse.ArgumentParser(
        prog="britannia", description="Load the game world and report the starting view."
    )
    parser.add_argument("--data-path", default="Data/U7", help="directory holding the game files")
    parser.add_argument("--version-file", default="Data/version.txt")
    parser.add_argument("--camera-distance", type=float, default=DEFAULT_CAMERA_DISTANCE)
    parser.add_argument("--seed", type=int, help="seed for picking the start location")
    args = parser.parse_args(argv)

    loader = Loader(args.data_path, args.version_file)
    try:
        data = loader.run()
    except LoadingError:
        for message in loader.messages():
            print(message)
        return 1
    for message in loader.messages():
        print(message)

    seed = args.seed if args.seed is not None else int(time.time() * 1000)
    target = pick_start_location(RNG(seed))
    d = args.camera_distance
    position = (target[0] + d, target[1] + d, target[2] + d)
    viewer = Viewer(data.objects, target, position, d)

    for message in WELCOME_MESSAGES:
        print(message)
    print(data.version)
    print(f"X: {int(target[0])} Y: {int(target[2])} ")
    print(f"{len(viewer.visible_objects())} objects in view")
    return 0