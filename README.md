# raycaster

Building blocks for a first-person raycaster in the grid-walls style:
in-memory pixel images, a reader for XPM texture files, player and
keyboard state with wall-aware movement, and a pygame window with event
hooks and a main loop.

## Installing

```
pip install .
```

The window is drawn with pygame. The tests run with `pytest`
(`pip install .[test]`).

## Modules

### `raycaster.colornames`

`lookup_color(name)` returns the `0xRRGGBB` value of a named colour such as
`"red"`, `"light blue"` or `"gray50"`, ignoring case. The name `none`
gives `-1` (transparent). An unknown name raises `KeyError`.

### `raycaster.image`

`Image(width, height, bpp=32, endian=0)` is a packed pixel buffer whose rows
are padded to 32 bits. `endian` 0 stores the least significant byte first.

* `size_line()` is the number of bytes in one row; the bytes are in `data`.
* `put_pixel(x, y, color)` stores a value; points outside the image are
  ignored.
* `get_pixel(x, y)` reads it back and raises `IndexError` outside the image.
* `fill(color)` sets every pixel.

A non-positive size or a bit depth that is not a multiple of 8 raises
`ValueError`.

`rgb_shifts(red_mask, green_mask, blue_mask)` turns three channel masks into
six numbers (offset and width of each channel), and
`convert_color(color, depth, shifts)` maps a `0xRRGGBB` colour to a pixel
value for a visual of that depth; at 24 bits and more the colour is returned
unchanged.

### `raycaster.xpm`

* `load_xpm(path)` reads an XPM file into an `Image`.
* `parse_xpm_source(text)` does the same for the text of an XPM file:
  C comments outside strings are removed (`strip_comments`) and the quoted
  strings are parsed.
* `parse_xpm(lines)` builds an image from the strings of an XPM array:
  a `width height ncolors chars_per_pixel` header, the colour table, then
  the pixel rows.

Colours are written as `#rrggbb` or as a name from `raycaster.colornames`
(`text_to_rgb(name, suffix)`); unknown names give black, and `None`
(transparent) pixels are stored as `0xFF000000`. Malformed or truncated data
and unreadable files raise `XpmError`, a `ValueError`.

```python
from raycaster.xpm import parse_xpm

image = parse_xpm([
    "2 1 2 1",
    "a c #ff0000",
    "b c blue",
    "ab",
])
assert image.get_pixel(0, 0) == 0xFF0000
assert image.get_pixel(1, 0) == 0x0000FF
```

### `raycaster.player`

* `Key` lists the keys the player reacts to; `Key.from_keysym(code)` maps an
  X keysym to one of them (or `None`).
* `Keys` holds the keys currently down; `press` and `release` accept a `Key`
  or a keysym and ignore keys that are not used.
* `spawn_player(facing, x, y)` puts a `Player` in the centre of cell
  `(x, y)`, facing `"N"`, `"E"`, `"S"` or `"W"`.
* `Player.move(grid, dx, dy, sign)` steps forwards (`sign` 1) or backwards
  (`sign` -1), moving along each axis only if the target cell is not a wall
  (`"1"`); cells outside the grid count as walls.
* `Player.turn(angle)` rotates the view direction and camera plane.
* `Player.update(keys, grid)` applies the held keys: `W`/Up forward,
  `S`/Down backward, `A`/`D` strafe, Left/Right turn. Escape is left to
  the caller.

The grid is a sequence of strings, one per map row.

### `raycaster.window`

`Window(width, height, title="")` opens a fixed-size pygame window. Only one
window is shown at a time; opening another replaces it.

* `hook(event, callback)` attaches a callback to an `Event`
  (`KEY_PRESS`, `KEY_RELEASE`, `BUTTON_PRESS`, `BUTTON_RELEASE`,
  `MOTION_NOTIFY`, `EXPOSE`, `DESTROY_NOTIFY`). Key callbacks get the X
  keysym, button callbacks `(button, x, y)`, motion callbacks `(x, y)`, the
  others nothing. Closing the window from the desktop fires
  `DESTROY_NOTIFY`.
* `loop_hook(callback)` runs a callback once per loop iteration.
* `loop()` handles events until `end_loop()` is called or no window is open;
  `dispatch(event)` passes a single pygame event to the hooks.
* `clear()`, `put_pixel(x, y, color)`, `put_image(image, x, y)` and
  `draw_text(x, y, color, text)` draw into the window.
* `mouse_position()`, `move_mouse(x, y)`, `hide_mouse()` and `show_mouse()`
  work with the pointer.
* `close()` closes the window; `is_open` tells whether it still is.

`screen_size()` returns the width and height of the screen.

## What it does not do

The package has no command to run and does not play a map by itself. It does
not read or check `.cub` scene files, does not cast rays or render wall
columns, and has no game object tying the window, keys and player together.
Those parts are left to the program that uses these modules.