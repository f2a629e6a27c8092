import io
import math

import pytest

from britannia.primitives import (
    BLANK,
    WHITE,
    Animation,
    Color,
    ColoredString,
    Image,
    ModTexture,
    MoveType,
    Rect,
    Sprite,
    SpriteSheet,
    Tween,
    Vector2,
    create_vertex,
    create_vertex_2d,
)

RED = Color(255, 0, 0, 255)
GREEN = Color(0, 255, 0, 255)
BLUE = Color(0, 0, 255, 255)


def test_vector_normalized_has_unit_length():
    v = Vector2(3.0, 4.0).normalized()
    assert math.isclose(v.length(), 1.0)


def test_zero_vector_normalizes_to_zero():
    assert Vector2(0.0, 0.0).normalized() == Vector2(0.0, 0.0)


def test_create_vertex_copies_color_channels():
    vertex = create_vertex(1.0, 2.0, 3.0, RED, 0.5, 0.25)
    assert (vertex.x, vertex.y, vertex.z) == (1.0, 2.0, 3.0)
    assert (vertex.r, vertex.g, vertex.b, vertex.a) == (RED.r, RED.g, RED.b, RED.a)
    assert (vertex.u, vertex.v) == (0.5, 0.25)


def test_create_vertex_default_color_is_unit_white():
    vertex = create_vertex()
    assert (vertex.r, vertex.g, vertex.b, vertex.a) == (1.0, 1.0, 1.0, 1.0)


def test_create_vertex_2d_accepts_channel_sequence():
    vertex = create_vertex_2d(4.0, 5.0, (0.1, 0.2, 0.3, 0.4), 1.0, 0.0)
    assert (vertex.r, vertex.g, vertex.b, vertex.a) == (0.1, 0.2, 0.3, 0.4)
    assert (vertex.x, vertex.y) == (4.0, 5.0)


def test_colored_string_defaults_to_white():
    assert ColoredString("hello").color == WHITE


def test_tween_normal_moves_by_speed():
    tween = Tween(Vector2(0.0, 0.0), Vector2(10.0, 0.0), 4.0)
    tween.update(0.5)
    assert math.isclose(tween.pos.x, 4.0 * 0.5)
    assert tween.pos.y == 0.0
    assert tween.done is False


def test_tween_normal_clamps_at_destination_then_done():
    dest = Vector2(10.0, -6.0)
    tween = Tween(Vector2(0.0, 0.0), dest, 1000.0)
    tween.update(1.0)
    assert tween.pos == dest
    tween.update(1.0)
    assert tween.done is True


def test_tween_reverse_swaps_start_and_dest_only():
    start, dest = Vector2(1.0, 2.0), Vector2(5.0, 6.0)
    tween = Tween(start, dest, 1.0)
    tween.reverse()
    assert tween.start == dest
    assert tween.dest == start
    assert tween.pos == start


def test_tween_pop_to_start_and_destination():
    start, dest = Vector2(1.0, 2.0), Vector2(5.0, 6.0)
    tween = Tween(start, dest, 1.0)
    tween.pop_to_destination()
    assert tween.pos == dest
    tween.pop_to_start()
    assert tween.pos == start


def test_tween_bounce_overshoot_reverses_speed_and_stays():
    start = Vector2(0.0, 0.0)
    tween = Tween(start, Vector2(10.0, 0.0), 100.0, 0.0, MoveType.BOUNCE)
    tween.update(1.0)
    assert tween.overshoot_count == 1
    assert tween.pos == start
    assert tween.speed < 0


def test_tween_parabolic_first_overshoot_passes_destination():
    dest = Vector2(10.0, 0.0)
    tween = Tween(Vector2(0.0, 0.0), dest, 100.0, 0.0, MoveType.PARABOLIC)
    tween.update(1.0)
    assert tween.overshoot_count == 1
    assert tween.pos.x > dest.x
    assert tween.speed < 0


def test_tween_parabolic_later_overshoot_snaps_to_destination():
    dest = Vector2(10.0, 0.0)
    tween = Tween(Vector2(0.0, 0.0), dest, 100.0, 0.0, MoveType.PARABOLIC)
    tween.overshoot_count = 1
    tween.update(1.0)
    assert tween.pos == dest
    assert tween.overshoot_count == 2


def test_tween_easing_approaches_without_passing():
    dest = Vector2(10.0, 0.0)
    tween = Tween(Vector2(0.0, 0.0), dest, 10.0, move_type=MoveType.EASING)
    previous = tween.pos.x
    for _ in range(50):
        tween.update(0.1)
        assert previous <= tween.pos.x <= dest.x
        previous = tween.pos.x
    assert previous > 0.0


def _walking_animation():
    animation = Animation()
    animation.add_frames("tex", 0, 0, 16, 16, 3)
    animation.add_anim("walk", [2, 0, 1], 10, True)
    animation.add_anim("die", [0, 1], 10, False)
    return animation


def test_add_frames_lays_frames_along_a_row():
    animation = _walking_animation()
    assert animation.raw_frame(0).source == Rect(0, 0, 16, 16)
    assert animation.raw_frame(2).source == Rect(2 * 16, 0, 16, 16)
    assert animation.raw_frame(1).texture == "tex"


def test_add_frames_spaced_uses_step():
    animation = Animation()
    animation.add_frames_spaced("tex", 4, 8, 16, 16, 2, 20)
    assert animation.raw_frame(1).source == Rect(4 + 20, 8, 16, 16)


def test_looping_animation_frame_number():
    animation = _walking_animation()
    animation.play("walk")
    animation.update(0.25)
    assert animation.elapsed_time == 250
    assert animation.current_frame_number() == 1
    assert animation.current_frame() is animation.raw_frame(1)
    assert animation.frame(0) is animation.raw_frame(2)


def test_looping_animation_wraps():
    animation = _walking_animation()
    animation.play("walk")
    animation.update(0.3)
    assert animation.current_frame_number() == 2
    assert animation.done is False


def test_non_looping_animation_holds_last_frame():
    animation = _walking_animation()
    animation.play("die")
    animation.update(5.0)
    assert animation.current_frame_number() == 1
    assert animation.done is True


def test_replaying_looping_animation_keeps_time():
    animation = _walking_animation()
    animation.play("walk")
    animation.update(0.25)
    animation.play("walk")
    assert animation.elapsed_time == 250


def test_play_unknown_name_is_ignored():
    animation = _walking_animation()
    animation.play("walk")
    animation.play("fly")
    assert animation.current_anim == "walk"


def test_add_anim_rejects_bad_frame_rate():
    with pytest.raises(ValueError):
        Animation().add_anim("walk", [0], 0, True)


def test_frame_number_without_animation_raises():
    with pytest.raises(LookupError):
        Animation().current_frame_number()


def test_animation_save_load_round_trip():
    animation = _walking_animation()
    animation.play("walk")
    animation.update(0.25)
    stream = io.BytesIO()
    animation.save(stream)
    stream.seek(0)
    restored = _walking_animation()
    restored.load(stream)
    assert restored.current_anim == "walk"
    assert restored.elapsed_time == 250
    assert restored.current_frame_number() == animation.current_frame_number()


def test_sprite_sheet_cells():
    sheet = SpriteSheet("tex", 64, 32, 4, 2)
    sprite = sheet.sprite_at(3, 1)
    assert sprite.texture == "tex"
    assert sprite.source == Rect(3 * 16, 16, 16, 16)


def test_sprite_sheet_rejects_empty_grid():
    with pytest.raises(ValueError):
        SpriteSheet("tex", 64, 32, 0, 2)


def test_sprite_defaults():
    assert Sprite().source == Rect(0, 0, 0, 0)


def test_image_set_get_and_bounds():
    image = Image(3, 2)
    image.set(2, 1, RED)
    assert image.get(2, 1) == RED
    assert image.get(0, 0) == BLANK
    image.set(5, 5, GREEN)
    assert image.get(5, 5) == BLANK
    assert GREEN not in image.pixels


def test_image_copy_is_independent():
    image = Image(2, 2, RED)
    duplicate = image.copy()
    duplicate.set(0, 0, BLUE)
    assert image.get(0, 0) == RED
    assert duplicate != image


def test_image_crop_keeps_top_left():
    image = Image(3, 3)
    image.set(1, 1, RED)
    image.set(2, 2, BLUE)
    cropped = image.crop(2, 2)
    assert (cropped.width, cropped.height) == (2, 2)
    assert cropped.get(1, 1) == RED
    assert BLUE not in cropped.pixels


def _row_texture():
    image = Image(3, 1)
    for x, color in enumerate([RED, GREEN, BLUE]):
        image.set(x, 0, color)
    return ModTexture(image)


def _column_texture():
    image = Image(1, 3)
    for y, color in enumerate([RED, GREEN, BLUE]):
        image.set(0, y, color)
    return ModTexture(image)


def test_move_row_left():
    texture = _row_texture()
    texture.move_row_left(0)
    assert [texture.image.get(x, 0) for x in range(3)] == [GREEN, BLUE, BLUE]


def test_move_row_right():
    texture = _row_texture()
    texture.move_row_right(0)
    assert [texture.image.get(x, 0) for x in range(3)] == [RED, RED, GREEN]


def test_move_column_up():
    texture = _column_texture()
    texture.move_column_up(0)
    assert [texture.image.get(0, y) for y in range(3)] == [GREEN, BLUE, BLUE]


def test_move_column_down():
    texture = _column_texture()
    texture.move_column_down(0)
    assert [texture.image.get(0, y) for y in range(3)] == [RED, RED, GREEN]


def test_resize_crops_and_rejects_out_of_range():
    texture = _row_texture()
    texture.resize(4, 1)
    assert texture.image.width == 3
    texture.resize(0, 1)
    assert texture.image.width == 3
    texture.resize(2, 1)
    assert (texture.image.width, texture.image.height) == (2, 1)
    assert texture.image.get(1, 0) == GREEN


def test_reset_restores_original():
    texture = _row_texture()
    original = texture.image.copy()
    texture.move_row_left(0)
    texture.resize(1, 1)
    texture.reset()
    assert texture.image == original
    assert (texture.width, texture.height) == (original.width, original.height)


def test_mod_texture_does_not_share_source_image():
    image = Image(2, 2, RED)
    texture = ModTexture(image)
    image.set(0, 0, BLUE)
    assert texture.image.get(0, 0) == RED