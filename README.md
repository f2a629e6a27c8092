# britannia

Reads the static and saved-game data files of a classic isometric
role-playing game, puts the world together from them, and carries a small
engine toolkit around that work: a seedable random number generator, a state
machine, tweens and animations, particles, tooltip layout and a resource cache.

Nothing outside the Python standard library is required.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Running

```
britannia
```

This loads the game data step by step (version, chunks, map, objects,
shapes, world, fixed objects, placed objects), printing a progress message
for each step. It then picks one of five starting locations at random and
prints the welcome text, the version string, the starting coordinates and
how many objects are in view from there.

Options:

- `--data-path DIR`: directory holding the game files (default `Data/U7`).
- `--version-file FILE`: file whose first line is the version string
  (default `Data/version.txt`; `v0.0.1` is used when it is missing).
- `--camera-distance N`: camera distance, which sets the view range
  (default 16).
- `--seed N`: seed for picking the start location (default: the current time).

If a data file cannot be read or decoded, the progress messages so far are
printed and the command exits with status 1.

The data directory is expected to hold `STATIC/U7CHUNKS`, `STATIC/U7MAP`,
`STATIC/TEXT.FLX`, `STATIC/TFA.DAT`, `STATIC/WGTVOL.DAT`,
`STATIC/PALETTES.FLX`, `STATIC/SHAPES.VGA`, the 144 files
`STATIC/U7IFIX00` to `STATIC/U7IFIX8F` and the 144 files
`GAMEDAT/U7IREG00` to `GAMEDAT/U7IREG8F`.

## What it does not do

There is no window, renderer, input handling or sound. The command reports
the loaded world as text; the engine pieces below compute positions, colours,
frames and draw commands but draw nothing themselves. Shapes are decoded into
in-memory `Image` objects and are not written to disk.

## Using the library

### Loading the game data

```python
from britannia.loading import Loader, LoadingError

loader = Loader("Data/U7", "Data/version.txt")
try:
    data = loader.run()
except LoadingError as error:
    print(error)
for message in loader.messages():
    print(message)
```

`Loader.step()` does one loading stage at a time and returns `False` when
nothing is left, which suits a game loop that must keep drawing while it
loads; `Loader.done()` says when every stage has finished. A stage that fails
raises `LoadingError` and stops further steps. `Loader.run()` returns a
`GameData` holding the version, chunks, chunk map, tile grid, object table,
palette, terrain image, decoded shapes and all placed objects.
`load_version(path)` reads a version string on its own.

### Reading the file formats directly

- `britannia.flex` reads flex archives: `parse_flex_header`,
  `read_flex_entries` and `read_flex_records`, giving `FlexEntry` values and
  raising `FlexError` on truncated files.
- `britannia.world` reads chunk and map files (`load_chunks`,
  `load_chunk_map`), joins them into the 3072x3072 tile grid with
  `build_world`, names superchunk files with `superchunk_file_name`, and
  reads fixed and placed objects with `parse_ifix` and `parse_ireg`, which
  give `PlacedObject` values.
- `britannia.shapes` reads palettes (`parse_palette`) and decodes terrain
  tiles and run-length encoded object shapes (`decode_terrain`,
  `decode_shape`, `decode_shapes`) into `ShapeFrame` images.
- `britannia.objects` reads object names (`parse_text_names`) and the
  object property table (`parse_object_table`) into `ObjectInfo` records.

### Engine pieces

```python
from britannia.rng import RNG

rng = RNG(7777)
roll = rng.random(6)          # 0 <= roll < 6
seed, index = rng.get_state()
rng.set_state(seed, index)    # reproduce the same sequence from here
```

- `britannia.statemachine`: `State` and `StateMachine`, with queued
  transitions, pushed and popped overlay states, and `StateMachineError` for
  bad identifiers or illegal transitions.
- `britannia.serialize`: little-endian binary reading and writing of ints,
  unsigned ints, floats, bools and strings of at most 255 bytes, raising
  `SerializationError` on short or bad input.
- `britannia.primitives`: `Vector2`, `Color`, `Rect`, `Vertex`, `Vertex2D`,
  `ColoredString`, `Sprite`, `Tween` with its `MoveType` movement styles,
  `Animation`, `SpriteSheet`, `Image` and `ModTexture`.
- `britannia.particles`: `Particle`, `Emitter` and `ParticleSystem`, which
  give draw commands for their particles.
- `britannia.resources`: `ResourceManager`, a cache of resources by
  `ResourceKind` that calls a loader you supply on first use.
- `britannia.tooltip`: `layout_tooltip` works out where a tooltip's box,
  lines and border go for each `Anchor` corner.
- `britannia.log`: `log` and `format_log_line` with `LogLevel`.
- `britannia.game`: the world `Viewer`, which picks visible objects and
  switches floors by `Floor`, and `pick_start_location`.