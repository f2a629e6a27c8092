import struct

import pytest

from britannia.objects import ObjectInfo, parse_object_table, parse_text_names

NAMES = [f"shape{i}" for i in range(1024)]


def build_flex(records):
    header = b"T" * 80 + struct.pack("<12I", 0xFFFF1A00, len(records), *([0] * 10))
    pos = len(header) + 8 * len(records)
    table = b""
    body = b""
    for record in records:
        if record is None:
            table += struct.pack("<II", 0, 0)
            continue
        table += struct.pack("<II", pos, len(record))
        body += record
        pos += len(record)
    return header + table + body


def encode_tfa(sound, rotatable, animated, not_walkable, water, height, shape_type,
               width, depth, light, translucent):
    b0 = (
        int(sound)
        | int(rotatable) << 1
        | int(animated) << 2
        | int(not_walkable) << 3
        | int(water) << 4
        | height << 5
    )
    b1 = shape_type << 4
    b2 = (width - 1) | (depth - 1) << 3 | int(light) << 6 | int(translucent) << 7
    return bytes([b0, b1, b2])


def table_with(first_tfa, first_wgtvol=b"\0\0"):
    tfa = first_tfa + bytes(3 * 1023)
    wgtvol = first_wgtvol + bytes(2 * 1023)
    return parse_object_table(tfa, wgtvol, NAMES)


def test_parse_text_names_stops_at_nul():
    data = build_flex([b"apple\0junk", b"pear", None])
    assert parse_text_names(data) == ["apple", "pear", ""]


@pytest.mark.parametrize(
    "fields",
    [
        (True, False, True, False, True, 3, 5, 2, 4, True, False),
        (False, True, False, True, False, 7, 15, 8, 8, False, True),
        (False, False, False, False, False, 0, 0, 1, 1, False, False),
    ],
)
def test_flags_round_trip(fields):
    info = table_with(encode_tfa(*fields))[0]
    assert isinstance(info, ObjectInfo)
    assert (
        info.has_sound_effect,
        info.rotatable,
        info.is_animated,
        info.is_not_walkable,
        info.is_water,
        info.height,
        info.shape_type,
        info.width,
        info.depth,
        info.is_light_source,
        info.is_translucent,
    ) == fields


def test_high_flags_follow_sign_of_second_byte():
    set_info = table_with(bytes([0, 0x80, 0]))[0]
    assert set_info.is_trap and set_info.is_door
    assert set_info.is_vehicle_part and set_info.is_not_selectable
    clear_info = table_with(bytes([0, 0x7F, 0]))[0]
    assert not (clear_info.is_trap or clear_info.is_door
                or clear_info.is_vehicle_part or clear_info.is_not_selectable)


def test_weight_volume_and_names():
    table = table_with(bytes(3), bytes([3, 7]))
    assert len(table) == 1024
    assert table[0].weight == 30.0
    assert table[0].volume == 7.0
    assert [info.name for info in table] == NAMES
    assert table[1].weight == 0.0


def test_short_tables_raise():
    with pytest.raises(ValueError):
        parse_object_table(bytes(10), bytes(2048), NAMES)
    with pytest.raises(ValueError):
        parse_object_table(bytes(3072), bytes(10), NAMES)
    with pytest.raises(ValueError):
        parse_object_table(bytes(3072), bytes(2048), NAMES[:5])