"""Layout of boxed, multi-line tooltips."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Sequence

from britannia.primitives import WHITE, Color, ColoredString, Rect, Vector2


class Anchor(enum.IntEnum):
    """Which corner of the tooltip sits at the given point."""

    UPPER_LEFT = 0
    UPPER_RIGHT = 1
    LOWER_RIGHT = 2
    LOWER_LEFT = 3


@dataclass
class TooltipLayout:
    """Everything needed to draw a tooltip."""

    background: Rect
    background_color: Color
    outline_color: Color | None
    text: list[tuple[ColoredString, Vector2]]
    border: list[tuple[Vector2, Vector2]]
    border_color: Color = WHITE


def _monospace(text: str, size: float) -> float:
    return len(text) * size * 0.5


def _border(left: float, top: float, right: float, bottom: float) -> list[tuple[Vector2, Vector2]]:
    top_left = Vector2(left, top)
    bottom_left = Vector2(left, bottom)
    bottom_right = Vector2(right, bottom)
    top_right = Vector2(right, top)
    return [
        (top_left, bottom_left),
        (bottom_left, bottom_right),
        (bottom_right, top_right),
        (top_right, top_left),
    ]


def layout_tooltip(
    strings: str | Sequence[ColoredString],
    size: float,
    x: int,
    y: int,
    anchor: Anchor | int = Anchor.UPPER_LEFT,
    measure: Callable[[str, float], float] = _monospace,
) -> TooltipLayout | None:
    """Lay out a tooltip; measure gives a text's width at a size. None when there is no text."""
    lines = [ColoredString(strings, WHITE)] if isinstance(strings, str) else list(strings)
    if not lines:
        return None

    width = 0
    for line in lines:
        measured = measure(line.text, size)
        if measured > width:
            width = int(measured)
    width += 6
    height = int(size * len(lines) * 1.3)

    try:
        corner = Anchor(anchor)
    except ValueError:
        corner = Anchor.UPPER_LEFT

    translucent = Color(0, 0, 0, 192)
    outline: Color | None = None
    if corner is Anchor.UPPER_LEFT:
        text_x = x + 3
        pos_y = y - 1
        line_step = 1.0
        background = Rect(x - 1, y - 1, width + 2, height + 1)
        background_color = Color(0, 0, 0, 255)
        outline = translucent
        left, top = x - 1, y - 1
    elif corner is Anchor.UPPER_RIGHT:
        text_x = x + 3 - width
        pos_y = y - 1
        line_step = 1.2
        background = Rect(x - width - 1, y - 1, width + 2, height + 1)
        background_color = translucent
        left, top = x - width - 1, y - 1
    elif corner is Anchor.LOWER_RIGHT:
        text_x = x + 3 - width
        pos_y = y - height - 1
        line_step = 1.2
        background = Rect(x - width - 1, y - 1, width + 2, height + 1)
        background_color = translucent
        left, top = x - width - 1, y - height - 1
    else:
        text_x = x + 3
        pos_y = y - height - 1
        line_step = 1.2
        background = Rect(x - 1, y - height - 1, width + 2, height + 1)
        background_color = translucent
        left, top = x - 1, y - height - 1

    placed = []
    for line in lines:
        placed.append((line, Vector2(float(text_x), float(pos_y))))
        pos_y = int(pos_y + size * line_step)

    return TooltipLayout(
        background=background,
        background_color=background_color,
        outline_color=outline,
        text=placed,
        border=_border(left, top, left + width + 3, top + height + 1),
    )