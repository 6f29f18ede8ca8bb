"""An in-memory display server: windows, images, drawing and the event loop."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Callable

from minigfx.events import Event, EventMask, EventType, HookTable
from minigfx.image import Image, Visual
from minigfx.xpm import read_xpm_file, xpm_from_data

_ALL_EVENTS = EventMask(0xFFFFFF)

_STRUCTURE = EventMask.STRUCTURE_NOTIFY | EventMask.SUBSTRUCTURE_NOTIFY
_MOTION = (
    EventMask.POINTER_MOTION | EventMask.POINTER_MOTION_HINT | EventMask.BUTTON_MOTION
    | EventMask.BUTTON1_MOTION | EventMask.BUTTON2_MOTION | EventMask.BUTTON3_MOTION
    | EventMask.BUTTON4_MOTION | EventMask.BUTTON5_MOTION
)

# Which selection bits make the server send each event type. Types that are
# missing here are always delivered.
_REQUIRED_MASK: dict[EventType, EventMask] = {
    EventType.KEY_PRESS: EventMask.KEY_PRESS,
    EventType.KEY_RELEASE: EventMask.KEY_RELEASE,
    EventType.BUTTON_PRESS: EventMask.BUTTON_PRESS,
    EventType.BUTTON_RELEASE: EventMask.BUTTON_RELEASE,
    EventType.MOTION_NOTIFY: _MOTION,
    EventType.ENTER_NOTIFY: EventMask.ENTER_WINDOW,
    EventType.LEAVE_NOTIFY: EventMask.LEAVE_WINDOW,
    EventType.FOCUS_IN: EventMask.FOCUS_CHANGE,
    EventType.FOCUS_OUT: EventMask.FOCUS_CHANGE,
    EventType.KEYMAP_NOTIFY: EventMask.KEYMAP_STATE,
    EventType.EXPOSE: EventMask.EXPOSURE,
    EventType.VISIBILITY_NOTIFY: EventMask.VISIBILITY_CHANGE,
    EventType.CREATE_NOTIFY: EventMask.SUBSTRUCTURE_NOTIFY,
    EventType.DESTROY_NOTIFY: _STRUCTURE,
    EventType.UNMAP_NOTIFY: _STRUCTURE,
    EventType.MAP_NOTIFY: _STRUCTURE,
    EventType.REPARENT_NOTIFY: _STRUCTURE,
    EventType.CONFIGURE_NOTIFY: _STRUCTURE,
    EventType.GRAVITY_NOTIFY: _STRUCTURE,
    EventType.CIRCULATE_NOTIFY: _STRUCTURE,
    EventType.MAP_REQUEST: EventMask.SUBSTRUCTURE_REDIRECT,
    EventType.CONFIGURE_REQUEST: EventMask.SUBSTRUCTURE_REDIRECT,
    EventType.CIRCULATE_REQUEST: EventMask.SUBSTRUCTURE_REDIRECT,
    EventType.RESIZE_REQUEST: EventMask.RESIZE_REDIRECT,
    EventType.PROPERTY_NOTIFY: EventMask.PROPERTY_CHANGE,
    EventType.COLORMAP_NOTIFY: EventMask.COLORMAP_CHANGE,
}


@dataclass(frozen=True)
class TextItem:
    """A string drawn into a window."""

    x: int
    y: int
    color: int
    text: str
    font: str | None


@dataclass(eq=False)
class Window:
    """A fixed-size window placed at the screen origin."""

    width: int
    height: int
    title: str
    depth_mask: int = 0xFFFFFF
    hooks: HookTable = field(default_factory=HookTable)
    font: str | None = None
    cursor_visible: bool = True
    selected_events: EventMask = _ALL_EVENTS
    texts: list[TextItem] = field(default_factory=list)
    framebuffer: Image = field(init=False)

    def __post_init__(self) -> None:
        self.framebuffer = Image(self.width, self.height)

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value shown at (x, y)."""
        return self.framebuffer.get_pixel(x, y) & self.depth_mask


class Display:
    """A connection to the display: owns windows, images and the event queue."""

    def __init__(self) -> None:
        self.screen_width = 1920
        self.screen_height = 1080
        self.visual = Visual.from_masks(0xFF0000, 0x00FF00, 0x0000FF, 24)
        self._windows: list[Window] = []
        self._images: list[Image] = []
        self._events: deque[tuple[Window, Event]] = deque()
        self._loop_hook: Callable[..., Any] | None = None
        self._loop_param: Any = None
        self._end_loop = False
        self._pointer = (0, 0)
        self._closed = False

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def windows(self) -> tuple[Window, ...]:
        """The open windows, newest first."""
        return tuple(self._windows)

    @property
    def pending(self) -> int:
        """Number of events waiting in the queue."""
        return len(self._events)

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("display is closed")

    def _check_window(self, window: Window) -> None:
        self._check_open()
        if not any(w is window for w in self._windows):
            raise ValueError("window does not belong to this display")

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window; its first expose event is queued straight away."""
        self._check_open()
        depth = min(self.visual.depth, 32)
        window = Window(width, height, title, depth_mask=(1 << depth) - 1)
        self._windows.insert(0, window)
        self._events.append((window, Event(EventType.EXPOSE)))
        return window

    def destroy_window(self, window: Window) -> None:
        """Close a window; events still queued for it are ignored."""
        self._check_window(window)
        self._windows = [w for w in self._windows if w is not window]

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank 32-bit image owned by this display."""
        self._check_open()
        image = Image(width, height, 32, False)
        self._images.append(image)
        return image

    def xpm_file_to_image(self, path: str | PathLike[str]) -> Image:
        """Load an XPM file into a new image."""
        self._check_open()
        image = read_xpm_file(path, 32, False)
        self._images.append(image)
        return image

    def xpm_to_image(self, data: Iterable[str]) -> Image:
        """Build a new image from XPM strings."""
        self._check_open()
        image = xpm_from_data(data, 32, False)
        self._images.append(image)
        return image

    def destroy_image(self, image: Image) -> None:
        """Release an image created by this display."""
        self._check_open()
        for index, owned in enumerate(self._images):
            if owned is image:
                del self._images[index]
                return
        raise ValueError("image does not belong to this display")

    def put_image(self, window: Window, image: Image, x: int, y: int) -> None:
        """Copy an image into a window with its top-left corner at (x, y)."""
        self._check_window(window)
        x0, x1 = max(x, 0), min(x + image.width, window.width)
        y0, y1 = max(y, 0), min(y + image.height, window.height)
        if x0 >= x1 or y0 >= y1:
            return
        target = window.framebuffer
        if image.bits_per_pixel == 32 and not image.big_endian:
            count = (x1 - x0) * 4
            for row in range(y0, y1):
                src = (row - y) * image.size_line + (x0 - x) * 4
                dst = row * target.size_line + x0 * 4
                target.data[dst:dst + count] = image.data[src:src + count]
            return
        for row in range(y0, y1):
            for col in range(x0, x1):
                target.put_pixel(col, row, image.get_pixel(col - x, row - y))

    def pixel_put(self, window: Window, x: int, y: int, color: int) -> None:
        """Draw one 0xRRGGBB pixel; points outside the window are clipped."""
        self._check_window(window)
        if 0 <= x < window.width and 0 <= y < window.height:
            window.framebuffer.put_pixel(x, y, self.color_value(color))

    def string_put(self, window: Window, x: int, y: int, color: int, text: str) -> None:
        """Draw a string at (x, y) in the window's current font."""
        self._check_window(window)
        window.texts.append(TextItem(x, y, self.color_value(color), text, window.font))

    def clear_window(self, window: Window) -> None:
        """Paint the whole window with the black background."""
        self._check_window(window)
        window.framebuffer.data[:] = bytes(len(window.framebuffer.data))
        window.texts.clear()

    def set_font(self, window: Window, name: str) -> None:
        """Choose the font used by later string_put calls on this window."""
        self._check_window(window)
        window.font = name

    def color_value(self, color: int) -> int:
        """Convert 0xRRGGBB to a pixel value of this display's visual."""
        return self.visual.color_value(color)

    def loop_hook(self, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Call ``func(param)`` each time the loop runs out of events."""
        self._loop_hook = func
        self._loop_param = param

    def post_event(self, window: Window, event: Event) -> bool:
        """Queue an event for a window.

        Returns False when the window has not selected this kind of event,
        in which case it is dropped.
        """
        self._check_window(window)
        if event.type is EventType.MOTION_NOTIFY:
            self._pointer = (event.x, event.y)
        required = _REQUIRED_MASK.get(event.type)
        if required is not None and not window.selected_events & required:
            return False
        self._events.append((window, event))
        return True

    def _deliver(self, window: Window, event: Event) -> None:
        if not any(w is window for w in self._windows):
            return
        if event.type is EventType.CLIENT_MESSAGE:
            # A close request from the window manager.
            window.hooks.dispatch(Event(EventType.DESTROY_NOTIFY))
        window.hooks.dispatch(event)

    def loop(self) -> None:
        """Dispatch events until loop_end, until no window is left, or,
        without a loop hook, until the queue runs dry.

        On entry each window selects exactly the events its hooks ask for.
        """
        self._check_open()
        for window in self._windows:
            window.selected_events = window.hooks.event_mask()
        while self._windows and not self._end_loop:
            while not self._end_loop and self._events:
                window, event = self._events.popleft()
                self._deliver(window, event)
            if self._loop_hook is None:
                break
            self._loop_hook(self._loop_param)

    def loop_end(self) -> None:
        """Ask the running loop to stop."""
        self._end_loop = True

    def flush_events(self) -> int:
        """Discard every queued event and return how many there were."""
        count = len(self._events)
        self._events.clear()
        return count

    def screen_size(self) -> tuple[int, int]:
        """Return the (width, height) of the screen."""
        return self.screen_width, self.screen_height

    def mouse_get_pos(self, window: Window) -> tuple[int, int]:
        """Return the pointer position relative to the window."""
        self._check_window(window)
        return self._pointer

    def mouse_move(self, window: Window, x: int, y: int) -> None:
        """Move the pointer to (x, y) relative to the window."""
        self._check_window(window)
        self._pointer = (x, y)

    def mouse_hide(self, window: Window) -> None:
        """Hide the pointer while it is over the window."""
        self._check_window(window)
        window.cursor_visible = False

    def mouse_show(self, window: Window) -> None:
        """Show the pointer over the window again."""
        self._check_window(window)
        window.cursor_visible = True

    def close(self) -> None:
        """Close the display, dropping all windows, images and events."""
        self._windows.clear()
        self._images.clear()
        self._events.clear()
        self._end_loop = True
        self._closed = True