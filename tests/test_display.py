import pytest

from minigfx.display import Display
from minigfx.events import Event, EventMask, EventType
from minigfx.image import Image, Visual

WIN1_SX = 242
WIN1_SY = 242


@pytest.fixture
def display():
    with Display() as d:
        yield d


def test_first_expose_is_delivered(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    calls = []
    win.hooks.expose_hook(lambda p: calls.append(p), "param")
    display.loop()
    assert calls == ["param"]


def test_windows_are_listed_newest_first(display):
    w1 = display.new_window(10, 10, "Title1")
    w2 = display.new_window(10, 10, "Title2")
    assert display.windows == (w2, w1)
    assert w2.title == "Title2"


def test_color_map_with_pixel_put(display):
    w, h = 16, 16
    win = display.new_window(w, h, "Title1")
    colors = {}
    for x in range(w):
        for y in range(h):
            color = (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
            colors[x, y] = color
            display.pixel_put(win, x, y, color)
    assert win.pixel(0, 0) == 0xFF0000
    assert all(win.pixel(x, y) == c for (x, y), c in colors.items())


def test_pixel_put_outside_is_clipped(display):
    win = display.new_window(8, 8, "w")
    display.pixel_put(win, -1, 3, 0xFFFFFF)
    display.pixel_put(win, 8, 3, 0xFFFFFF)
    assert win.pixel(0, 3) == 0
    assert win.pixel(7, 3) == 0
    assert not any(win.framebuffer.data)


def test_clear_window(display):
    win = display.new_window(8, 8, "w")
    display.pixel_put(win, 2, 2, 0xABCDEF)
    display.string_put(win, 1, 1, 0xFFFFFF, "hi")
    display.clear_window(win)
    assert win.pixel(2, 2) == 0
    assert win.texts == []


def test_new_image_layout(display):
    image = display.new_image(42, 42)
    assert image.bits_per_pixel == 32
    assert image.size_line == 168
    assert len(image.data) == 168 * 42


def test_put_image_is_clipped(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    image = display.new_image(42, 42)
    for x in range(42):
        for y in range(42):
            image.put_pixel(x, y, 0x123456)
    display.put_image(win, image, 220, 220)
    assert win.pixel(241, 241) == 0x123456
    assert win.pixel(220, 220) == 0x123456
    assert win.pixel(219, 219) == 0


def test_put_big_endian_image(display):
    win = display.new_window(10, 10, "w")
    image = Image(4, 4, 24, True)
    image.put_pixel(1, 2, 0x00FF80)
    display.put_image(win, image, 3, 3)
    assert win.pixel(4, 5) == 0x00FF80
    assert win.pixel(3, 3) == 0


def test_transparent_xpm_pixel_shows_black(display):
    win = display.new_window(4, 4, "w")
    image = display.xpm_to_image(["2 1 2 1", "a c None", "b c #FF0000", "ab"])
    assert image.get_pixel(0, 0) == 0xFF000000
    display.put_image(win, image, 0, 0)
    assert win.pixel(0, 0) == 0
    assert win.pixel(1, 0) == 0xFF0000


def test_xpm_file_to_image(display, tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(
        '/* XPM */\nstatic char *open[] = {\n"2 2 2 1",\n". c #000000",\n'
        '"x c red",\n".x",\n"x.",\n};\n'
    )
    image = display.xpm_file_to_image(path)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(1, 0) == 0xFF0000
    assert image.get_pixel(0, 0) == 0


def test_destroy_image(display):
    image = display.new_image(4, 4)
    display.destroy_image(image)
    with pytest.raises(ValueError):
        display.destroy_image(image)
    with pytest.raises(ValueError):
        display.destroy_image(Image(2, 2))


def test_string_put_records_text_and_font(display):
    win = display.new_window(242, 242, "Title1")
    display.set_font(win, "fixed")
    display.string_put(win, 5, 121, 0xFF99FF, "String output")
    item = win.texts[0]
    assert (item.x, item.y, item.color, item.text, item.font) == (
        5, 121, 0xFF99FF, "String output", "fixed")


def test_color_value_on_16_bit_visual(display):
    display.visual = Visual.from_masks(0xF800, 0x07E0, 0x001F, 16)
    assert display.color_value(0xFFFFFF) == 0xFFFF
    win = display.new_window(2, 2, "w")
    display.pixel_put(win, 0, 0, 0xFF0000)
    assert win.pixel(0, 0) == 0xF800


def test_escape_in_window3_destroys_it(display):
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win3 = display.new_window(WIN1_SX, WIN1_SY, "Title3")
    keys = []

    def key_win3(key, param):
        keys.append(key)
        if key == 0xFF1B:
            display.destroy_window(win3)

    win3.hooks.key_hook(key_win3, None)
    assert display.post_event(win3, Event(EventType.KEY_RELEASE, keysym=0xFF1B))
    display.loop()
    assert keys == [0xFF1B]
    assert display.windows == (win1,)


def test_mouse_hook_replaces_window(display):
    state = {}

    def gere_mouse(button, x, y, param):
        display.destroy_window(state["win1"])
        state["win1"] = display.new_window(120, 80, "new win")
        state["win1"].hooks.mouse_hook(gere_mouse, None)

    state["win1"] = display.new_window(300, 300, "win1")
    win2 = display.new_window(600, 600, "win2")
    state["win1"].hooks.mouse_hook(gere_mouse, None)
    win2.hooks.mouse_hook(gere_mouse, None)
    display.post_event(state["win1"], Event(EventType.BUTTON_PRESS, button=1, x=3, y=4))
    display.loop()
    titles = sorted(w.title for w in display.windows)
    assert titles == ["new win", "win2"]


def test_motion_hook(display):
    win3 = display.new_window(WIN1_SX, WIN1_SY, "Title3")
    moves = []
    win3.hooks.hook(EventType.MOTION_NOTIFY, EventMask.POINTER_MOTION,
                    lambda x, y, p: moves.append((x, y, p)), "p")
    display.post_event(win3, Event(EventType.MOTION_NOTIFY, x=5, y=7))
    display.loop()
    assert moves == [(5, 7, "p")]
    assert display.mouse_get_pos(win3) == (5, 7)


def test_unselected_event_dropped_but_close_request_calls_destroy_hook(display):
    win = display.new_window(10, 10, "w")
    closed = []
    win.hooks.hook(EventType.DESTROY_NOTIFY, 0, lambda p: closed.append(p), "bye")
    rounds = []

    def tick(param):
        rounds.append(param)
        if len(rounds) == 1:
            queued = display.post_event(win, Event(EventType.DESTROY_NOTIFY))
            rounds.append(queued)
            display.post_event(win, Event(EventType.CLIENT_MESSAGE))
        else:
            display.loop_end()

    display.loop_hook(tick, "t")
    display.loop()
    assert rounds[1] is False
    assert closed == ["bye"]


def test_loop_end_stops_loop(display):
    win = display.new_window(10, 10, "w")
    count = []

    def tick(param):
        count.append(1)
        if len(count) == 3:
            display.loop_end()

    display.loop_hook(tick, None)
    display.loop()
    assert len(count) == 3
    assert display.windows == (win,)


def test_loop_returns_when_no_window_left(display):
    win = display.new_window(10, 10, "w")
    win.hooks.expose_hook(lambda p: display.destroy_window(win), None)
    calls = []
    display.loop_hook(lambda p: calls.append(p), "x")
    display.loop()
    assert display.windows == ()
    assert calls == ["x"]


def test_flush_events(display):
    win = display.new_window(10, 10, "w")
    calls = []
    win.hooks.expose_hook(lambda p: calls.append(p), None)
    display.post_event(win, Event(EventType.EXPOSE))
    assert display.flush_events() == 2
    display.loop()
    assert calls == []


def test_screen_size(display):
    display.screen_width = 800
    display.screen_height = 600
    assert display.screen_size() == (800, 600)


def test_mouse_move_hide_show(display):
    win = display.new_window(50, 50, "w")
    display.mouse_move(win, 12, 34)
    assert display.mouse_get_pos(win) == (12, 34)
    display.mouse_hide(win)
    assert win.cursor_visible is False
    display.mouse_show(win)
    assert win.cursor_visible is True


def test_foreign_window_rejected(display):
    other = Display()
    foreign = other.new_window(5, 5, "x")
    with pytest.raises(ValueError):
        display.destroy_window(foreign)
    with pytest.raises(ValueError):
        display.post_event(foreign, Event(EventType.EXPOSE))


def test_invalid_window_size(display):
    with pytest.raises(ValueError):
        display.new_window(0, 10, "bad")


def test_close(display):
    display.new_window(5, 5, "w")
    display.close()
    assert display.windows == ()
    with pytest.raises(RuntimeError):
        display.new_window(5, 5, "again")