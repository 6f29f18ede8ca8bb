# minigfx

A small, pure-Python graphics toolkit that keeps everything in memory:
windows with pixel framebuffers, images, X11-style colour names, an XPM
image reader, per-window hook tables for keyboard, mouse and expose events,
an event loop, and a tile-map renderer built on top of them.

It has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `minigfx.colors.color_by_name(name)` looks up a colour such as
  `"dark orange"` or `"grey50"`, ignoring case, and returns its `0xRRGGBB`
  value. `"none"` gives `-1`; an unknown name raises `KeyError`.
- `minigfx.wordtab` has `find(text, needle, limit)`,
  `find_unquoted(text, needle, limit)` (skips matches inside double quotes)
  and `split_words(text)` (splits on spaces and tabs only).
- `minigfx.image.Image(width, height, bits_per_pixel=32, big_endian=False)`
  is a pixel buffer with rows padded to 32 bits. It offers `put_pixel`,
  `get_pixel`, `row`, and the attributes `data`, `size_line` and
  `bytes_per_pixel`. `minigfx.image.Visual.from_masks(red_mask, green_mask,
  blue_mask, depth)` describes a channel layout; its `color_value(color)`
  converts `0xRRGGBB` to a pixel value for that layout.
- `minigfx.xpm` reads XPM images: `read_xpm_file(path, ...)` for files,
  `xpm_from_data(lines, ...)` for lists of strings, and the helpers
  `parse_xpm`, `strip_comments`, `quoted_lines` and `text_to_rgb`.
  Transparent (`None`) pixels are stored as `0xFF000000`. Malformed input
  raises `XpmError`.
- `minigfx.events` defines `EventType`, `EventMask`, the `Event` dataclass
  and `HookTable`. Register callbacks with `key_hook`, `mouse_hook`,
  `expose_hook` or the general `hook(event, mask, func, param)`; `dispatch`
  calls the hook with the arguments its event type calls for (key hooks get
  `(keysym, param)`, button hooks `(button, x, y, param)`, motion hooks
  `(x, y, param)`, the others `(param)`), and `event_mask` returns the union
  of the registered masks.
- `minigfx.display.Display` owns windows, images and an event queue.
  `new_window` returns a `Window` (with a `framebuffer` image, a `pixel(x, y)`
  method, a `hooks` table and a list of drawn `texts`) and queues its first
  expose event. Images come from `new_image`, `xpm_file_to_image` and
  `xpm_to_image`. Drawing is done with `put_image`, `pixel_put`,
  `string_put`, `clear_window` and `set_font`. Events are queued with
  `post_event` and handled by `loop`, which runs until `loop_end` is called,
  until no window is left, or, without a `loop_hook`, until the queue is
  empty. There are also `flush_events`, `screen_size`, `mouse_get_pos`,
  `mouse_move`, `mouse_hide`, `mouse_show` and `close`; a `Display` works as
  a context manager.
- `minigfx.game` reads tile maps: `read_map(path)` returns the rows and
  `has_two_newlines(text)` detects a blank line inside a map. `Game.from_file`
  builds a game; `open_window(display)` opens a window of 64 pixels per tile,
  `load_textures(image_dir="img")` loads the tile XPM files and draws the map,
  and `draw_map` / `print_move` redraw it with the move counter. Bad maps and
  missing textures raise `MapError`.

## Example

```python
from minigfx.display import Display
from minigfx.events import Event, EventType

with Display() as display:
    window = display.new_window(320, 240, "demo")
    image = display.new_image(32, 32)
    for y in range(32):
        for x in range(32):
            image.put_pixel(x, y, display.color_value(0xFF8800))
    display.put_image(window, image, 10, 10)
    display.string_put(window, 20, 60, 0xFFFFFF, "hello")

    def on_key(key, param):
        print("key", hex(key))

    window.hooks.key_hook(on_key, None)
    display.post_event(window, Event(EventType.KEY_RELEASE, keysym=0xFF1B))
    display.loop()
    print(hex(window.pixel(10, 10)))  # 0xff8800
```

## Map files

A map is a text file of rows made of `1` (wall), `0` (floor), `P` (player),
`C` (collectible), `E` (exit) and `N` (enemy). Only the first 9999 bytes are
read, and a blank line inside the map is rejected.

## What it does not do

- Nothing is shown on a real screen: windows are framebuffers in memory and
  events only arrive through `Display.post_event`.
- Strings are recorded in `Window.texts`, not rasterised into pixels.
- The game module loads and draws maps only. It does not validate map
  layouts, move the player, animate the exit or decide wins and losses, and
  there is no command that starts a game.