# quadkit

Building blocks for an immediate-mode user interface, plus a loader for
maps made in the Tiled editor. Nothing here talks to a window or a GPU:
every piece takes plain values and gives plain values back, so it can sit
under whatever renderer you use.

## What is inside

- `quadkit.geometry`: frozen value types `Vec2`, `Rect`, `RectOffset`
  and `Color` (`Color.from_rgba` takes 0..255 components).
- `quadkit.cursor`: the layout `Cursor` that places the next widget,
  with `Layout` (`Layout.VERTICAL`, `Layout.HORIZONTAL`,
  `Layout.free(point)`) and `Scroll`.
- `quadkit.input`: `Input` state for a frame, `KeyCode`,
  `InputCharacter` and the `KeyRepeat` helper, which lets a held key fire
  once and then repeatedly after half a second.
- `quadkit.painter`: the `Painter`, which turns drawing requests into
  draw commands (`DrawRect`, `DrawLine`, `DrawTriangle`, `DrawSprite`,
  `DrawRawTexture`, `Clip`, ...) and drops those outside the current
  clipping zone. `ElementState` describes a widget's interaction state.
- `quadkit.mesh`: `render_command` rasterises draw commands into
  `DrawList` batches of `Vertex` values and indices, starting a new batch
  when the clip zone or texture changes or a batch grows too large.
- `quadkit.style`: `Style`, which picks fill colours, text colours and
  background sprites for an `ElementState`.
- `quadkit.tiled_format`: dataclasses for Tiled JSON maps and tilesets,
  read strictly by `parse_map` and `parse_tileset`.
- `quadkit.tiled_map`: `load_map` resolves tile ids against tilesets and
  gives a `TiledMap` to look tiles up by layer and position.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Laying out widgets

    from quadkit.geometry import Rect, Vec2
    from quadkit.cursor import Cursor, Layout

    cursor = Cursor(Rect(0, 0, 200, 100), margin=2)
    first = cursor.fit(Vec2(50, 20), Layout.VERTICAL)
    second = cursor.fit(Vec2(50, 20), Layout.VERTICAL)

Each call returns where the widget goes on screen and moves the cursor on.
`cursor.reset()` starts a new frame.

## Drawing

    from quadkit.geometry import Color, Rect
    from quadkit.painter import Painter
    from quadkit.mesh import render_command

    painter = Painter()
    painter.clip(Rect(0, 0, 100, 100))
    painter.draw_rect(Rect(10, 10, 20, 20), None, Color(1, 0, 0, 1))

    draw_lists = []
    for command in painter.commands:
        render_command(draw_lists, command)

Each `DrawList` holds vertices, indices, a clipping zone and an optional
texture, ready to hand to a renderer.

## Loading a Tiled map

    from quadkit.tiled_map import load_map

    level = load_map(json_text, textures={"tiles.png": my_texture})
    tile = level.get_tile("ground", 3, 4)
    for x, y, tile in level.tiles("ground", None):
        ...

`textures` maps image names in the JSON to your texture objects; tilesets
stored in separate files are passed as `external_tilesets`, a mapping from
their `source` name to their JSON text. `tiles` walks the rectangle row by
row and stops one cell short of its last cell. A missing texture raises
`TextureNotFound`, two layers with the same name raise
`NonUniqueLayerName`, and malformed JSON or a schema mismatch raises
`JsonError`; all three derive from `TiledError`, which is also raised for
a missing external tileset.

## What it does not do

There is no text editing: no edit box state, cursor movement, selection or
undo for typed text. The painter draws shapes, sprites and textures but not
text, as it has no font handling. There are no finished widgets (buttons,
windows, sliders) and no window, event loop or GPU backend; you feed in
`Input` yourself and render the `DrawList` batches with your own code.