"""Decoding of the object table: names, weights, volumes and tile flags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from britannia.flex import read_flex_records

OBJECT_COUNT = 1024
TFA_RECORD = 3
WGTVOL_RECORD = 2


@dataclass(frozen=True)
class ObjectInfo:
    """Static properties shared by every object of one shape."""

    name: str
    weight: float
    volume: float
    has_sound_effect: bool
    rotatable: bool
    is_animated: bool
    is_not_walkable: bool
    is_water: bool
    height: int
    shape_type: int
    is_trap: bool
    is_door: bool
    is_vehicle_part: bool
    is_not_selectable: bool
    width: int
    depth: int
    is_light_source: bool
    is_translucent: bool


def parse_text_names(data: bytes) -> list[str]:
    """Read the NUL-terminated strings of a text flex file; empty entries give ""."""
    return [
        record.split(b"\0", 1)[0].decode("latin-1") for record in read_flex_records(data)
    ]


def _signed(value: int) -> int:
    return value - 256 if value >= 128 else value


def parse_object_table(tfa: bytes, wgtvol: bytes, names: Sequence[str]) -> list[ObjectInfo]:
    """Combine the flag, weight/volume and name tables into 1024 object entries.

    Weights are stored in tenths and returned in whole units. The trap, door,
    vehicle-part and not-selectable flags are read from above the top bit of
    the second flag byte taken as a signed byte, so all four follow its sign.
    """
    if len(tfa) < OBJECT_COUNT * TFA_RECORD:
        raise ValueError("flag table is too short")
    if len(wgtvol) < OBJECT_COUNT * WGTVOL_RECORD:
        raise ValueError("weight and volume table is too short")
    if len(names) < OBJECT_COUNT:
        raise ValueError("name table is too short")

    table = []
    for shape in range(OBJECT_COUNT):
        weight, volume = wgtvol[shape * 2 : shape * 2 + 2]
        b0, b1, b2 = tfa[shape * 3 : shape * 3 + 3]
        high = _signed(b1)
        table.append(
            ObjectInfo(
                name=names[shape],
                weight=weight * 10.0,
                volume=float(volume),
                has_sound_effect=bool(b0 & 0x01),
                rotatable=bool((b0 >> 1) & 0x01),
                is_animated=bool((b0 >> 2) & 0x01),
                is_not_walkable=bool((b0 >> 3) & 0x01),
                is_water=bool((b0 >> 4) & 0x01),
                height=(b0 >> 5) & 0x07,
                shape_type=(b1 >> 4) & 0x0F,
                is_trap=bool((high >> 8) & 0x01),
                is_door=bool((high >> 9) & 0x01),
                is_vehicle_part=bool((high >> 10) & 0x01),
                is_not_selectable=bool((high >> 11) & 0x01),
                width=(b2 & 0x07) + 1,
                depth=((b2 >> 3) & 0x07) + 1,
                is_light_source=bool((b2 >> 6) & 0x01),
                is_translucent=bool((b2 >> 7) & 0x01),
            )
        )
    return table