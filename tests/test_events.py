import pytest

from minigfx.events import Event, EventMask, EventType, HookTable


def _recorder():
    calls = []

    def record(*args):
        calls.append(args)
        return len(calls)

    return calls, record


def test_key_hook_receives_keysym_on_release():
    table = HookTable()
    calls, record = _recorder()
    table.key_hook(record, "win1")
    result = table.dispatch(Event(EventType.KEY_RELEASE, keysym=0xFF1B))
    assert calls == [(0xFF1B, "win1")]
    assert result == 1


def test_key_hook_ignores_key_press():
    table = HookTable()
    calls, record = _recorder()
    table.key_hook(record)
    assert table.dispatch(Event(EventType.KEY_PRESS, keysym=0x61)) is None
    assert calls == []


def test_mouse_hook_receives_button_and_position():
    table = HookTable()
    calls, record = _recorder()
    table.mouse_hook(record, None)
    result = table.dispatch(Event(EventType.BUTTON_PRESS, button=1, x=20, y=30))
    assert result == 1
    assert calls == [(1, 20, 30, None)]


def test_motion_hook_via_generic_hook():
    table = HookTable()
    calls, record = _recorder()
    table.hook(EventType.MOTION_NOTIFY, EventMask.POINTER_MOTION, record, 0)
    table.dispatch(Event(EventType.MOTION_NOTIFY, x=5, y=7))
    assert calls == [(5, 7, 0)]
    assert table.event_mask() == EventMask.POINTER_MOTION


def test_expose_only_fires_on_last_expose():
    table = HookTable()
    calls, record = _recorder()
    table.expose_hook(record, "p")
    assert table.dispatch(Event(EventType.EXPOSE, count=2)) is None
    table.dispatch(Event(EventType.EXPOSE, count=0))
    assert calls == [("p",)]


def test_generic_event_gets_only_param():
    table = HookTable()
    calls, record = _recorder()
    table.hook(17, EventMask.STRUCTURE_NOTIFY, record, "close")
    result = table.dispatch(Event(EventType.DESTROY_NOTIFY))
    assert result == 1
    assert calls == [("close",)]


def test_button_release_hook_arguments():
    table = HookTable()
    calls, record = _recorder()
    table.hook(EventType.BUTTON_RELEASE, EventMask.BUTTON_RELEASE, record, 9)
    result = table.dispatch(Event(EventType.BUTTON_RELEASE, button=3, x=1, y=2))
    assert result == 1
    assert calls == [(3, 1, 2, 9)]


def test_event_mask_combines_all_hooks():
    table = HookTable()
    _, record = _recorder()
    table.expose_hook(record)
    table.mouse_hook(record)
    table.key_hook(record)
    assert table.event_mask() == (
        EventMask.EXPOSURE | EventMask.BUTTON_PRESS | EventMask.KEY_RELEASE
    )
    assert int(table.event_mask()) == 0x8006


def test_empty_table_has_no_mask_and_dispatches_nothing():
    table = HookTable()
    assert table.event_mask() == EventMask.NONE
    assert table.dispatch(Event(EventType.EXPOSE)) is None


def test_has_hook():
    table = HookTable()
    _, record = _recorder()
    assert table.has_hook(EventType.KEY_RELEASE) is False
    table.key_hook(record)
    assert table.has_hook(EventType.KEY_RELEASE) is True
    assert table.has_hook(3) is True
    assert table.has_hook(0) is False


def test_rehooking_replaces_previous_callback():
    table = HookTable()
    first_calls, first = _recorder()
    second_calls, second = _recorder()
    table.key_hook(first)
    table.key_hook(second)
    result = table.dispatch(Event(EventType.KEY_RELEASE, keysym=1))
    assert result == 1
    assert first_calls == []
    assert second_calls == [(1, None)]


def test_hook_rejects_unknown_event_type():
    table = HookTable()
    _, record = _recorder()
    with pytest.raises(ValueError):
        table.hook(99, 0, record, None)