"""Window events, event masks and per-window hook tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any

Hook = Callable[..., Any]


class EventType(IntEnum):
    """Core window-system event codes."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


class EventMask(IntFlag):
    """Bits selecting which events a window wants to receive."""

    NONE = 0
    KEY_PRESS = 1 << 0
    KEY_RELEASE = 1 << 1
    BUTTON_PRESS = 1 << 2
    BUTTON_RELEASE = 1 << 3
    ENTER_WINDOW = 1 << 4
    LEAVE_WINDOW = 1 << 5
    POINTER_MOTION = 1 << 6
    POINTER_MOTION_HINT = 1 << 7
    BUTTON1_MOTION = 1 << 8
    BUTTON2_MOTION = 1 << 9
    BUTTON3_MOTION = 1 << 10
    BUTTON4_MOTION = 1 << 11
    BUTTON5_MOTION = 1 << 12
    BUTTON_MOTION = 1 << 13
    KEYMAP_STATE = 1 << 14
    EXPOSURE = 1 << 15
    VISIBILITY_CHANGE = 1 << 16
    STRUCTURE_NOTIFY = 1 << 17
    RESIZE_REDIRECT = 1 << 18
    SUBSTRUCTURE_NOTIFY = 1 << 19
    SUBSTRUCTURE_REDIRECT = 1 << 20
    FOCUS_CHANGE = 1 << 21
    PROPERTY_CHANGE = 1 << 22
    COLORMAP_CHANGE = 1 << 23
    OWNER_GRAB_BUTTON = 1 << 24


@dataclass(frozen=True)
class Event:
    """A single event delivered to a window.

    ``keysym`` is used by key events, ``button`` by button events, ``x`` and
    ``y`` by button and motion events, and ``count`` by expose events (the
    number of expose events still to follow).
    """

    type: EventType
    keysym: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0


@dataclass
class _Slot:
    mask: EventMask
    func: Hook
    param: Any


class HookTable:
    """The callbacks a window has registered, one per event type."""

    def __init__(self) -> None:
        self._slots: dict[EventType, _Slot] = {}

    def hook(self, event: EventType | int, mask: EventMask | int,
             func: Hook, param: Any = None) -> None:
        """Register ``func`` for ``event``, asking for the events in ``mask``."""
        self._slots[EventType(event)] = _Slot(EventMask(mask), func, param)

    def key_hook(self, func: Hook, param: Any = None) -> None:
        """Call ``func(keysym, param)`` when a key is released."""
        self.hook(EventType.KEY_RELEASE, EventMask.KEY_RELEASE, func, param)

    def mouse_hook(self, func: Hook, param: Any = None) -> None:
        """Call ``func(button, x, y, param)`` when a mouse button is pressed."""
        self.hook(EventType.BUTTON_PRESS, EventMask.BUTTON_PRESS, func, param)

    def expose_hook(self, func: Hook, param: Any = None) -> None:
        """Call ``func(param)`` when the window needs redrawing."""
        self.hook(EventType.EXPOSE, EventMask.EXPOSURE, func, param)

    def event_mask(self) -> EventMask:
        """Return the union of the masks of all registered hooks."""
        mask = EventMask.NONE
        for slot in self._slots.values():
            mask |= slot.mask
        return mask

    def has_hook(self, event: EventType | int) -> bool:
        """Tell whether a callback is registered for ``event``."""
        try:
            return EventType(event) in self._slots
        except ValueError:
            return False

    def dispatch(self, event: Event) -> Any:
        """Pass ``event`` to its hook with the arguments its type calls for.

        Returns what the hook returned, or None when no hook was called.
        """
        slot = self._slots.get(event.type)
        if slot is None:
            return None
        kind = event.type
        if kind in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            return slot.func(event.keysym, slot.param)
        if kind in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            return slot.func(event.button, event.x, event.y, slot.param)
        if kind is EventType.MOTION_NOTIFY:
            return slot.func(event.x, event.y, slot.param)
        if kind is EventType.EXPOSE:
            if event.count:
                return None
            return slot.func(slot.param)
        return slot.func(slot.param)