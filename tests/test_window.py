import os

os.environ["SDL_VIDEODRIVER"] = "dummy"
os.environ["SDL_AUDIODRIVER"] = "dummy"

import pygame  # noqa: E402
import pytest  # noqa: E402

from raycaster.image import Image  # noqa: E402
from raycaster.window import Event, Window  # noqa: E402


@pytest.fixture
def window():
    win = Window(64, 48, "Title1")
    yield win
    win.close()


def _rgb_at(win, x, y):
    return tuple(win.surface.get_at((x, y)))[:3]


def test_title_and_size(window):
    assert pygame.display.get_caption()[0] == "Title1"
    assert window.surface.get_size() == (64, 48)


def test_invalid_size():
    with pytest.raises(ValueError):
        Window(0, 10)


def test_put_pixel(window):
    window.put_pixel(3, 4, 0x112233)
    assert _rgb_at(window, 3, 4) == (0x11, 0x22, 0x33)


def test_put_pixel_outside_is_ignored(window):
    window.put_pixel(-1, 100, 0xFFFFFF)
    assert _rgb_at(window, 0, 0) == (0, 0, 0)


def test_clear(window):
    window.put_pixel(5, 5, 0xFF99FF)
    window.clear()
    assert _rgb_at(window, 5, 5) == (0, 0, 0)


@pytest.mark.parametrize("endian", [0, 1])
def test_put_image(window, endian):
    image = Image(4, 4, endian=endian)
    image.put_pixel(1, 2, 0xABCDEF)
    window.put_image(image, 10, 5)
    assert _rgb_at(window, 11, 7) == (0xAB, 0xCD, 0xEF)
    assert _rgb_at(window, 10, 5) == (0, 0, 0)


def test_draw_text_marks_pixels(window):
    window.draw_text(2, 30, 0xFFFFFF, "MinilibX test")
    lit = [
        (x, y)
        for x in range(64)
        for y in range(48)
        if _rgb_at(window, x, y) != (0, 0, 0)
    ]
    assert len(lit) > 0


@pytest.mark.parametrize(
    "key, keysym",
    [
        (pygame.K_ESCAPE, 0xFF1B),
        (pygame.K_LEFT, 0xFF51),
        (pygame.K_UP, 0xFF52),
        (pygame.K_RIGHT, 0xFF53),
        (pygame.K_DOWN, 0xFF54),
        (pygame.K_w, ord("w")),
    ],
)
def test_key_press_gives_keysym(window, key, keysym):
    seen = []
    window.hook(Event.KEY_PRESS, seen.append)
    window.dispatch(pygame.event.Event(pygame.KEYDOWN, key=key))
    assert seen == [keysym]


def test_key_release(window):
    seen = []
    window.hook(Event.KEY_RELEASE, seen.append)
    window.dispatch(pygame.event.Event(pygame.KEYUP, key=pygame.K_a))
    assert seen == [ord("a")]


def test_mouse_button(window):
    seen = []
    window.hook(Event.BUTTON_PRESS, lambda b, x, y: seen.append((b, x, y)))
    window.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(5, 6)))
    assert seen == [(1, 5, 6)]


def test_mouse_motion(window):
    seen = []
    window.hook(Event.MOTION_NOTIFY, lambda x, y: seen.append((x, y)))
    window.dispatch(
        pygame.event.Event(pygame.MOUSEMOTION, pos=(7, 8), rel=(0, 0), buttons=(0, 0, 0))
    )
    assert seen == [(7, 8)]


def test_quit_calls_destroy_hook(window):
    calls = []
    window.hook(Event.DESTROY_NOTIFY, lambda: calls.append("closed") or 42)
    assert window.dispatch(pygame.event.Event(pygame.QUIT)) == 42
    assert calls == ["closed"]


def test_unhooked_event_returns_none(window):
    assert window.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w)) is None


def test_hook_replaced_and_removed(window):
    first, second = [], []
    window.hook(Event.KEY_PRESS, first.append)
    window.hook(Event.KEY_PRESS, second.append)
    window.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_s))
    window.hook(Event.KEY_PRESS, None)
    window.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_s))
    assert first == []
    assert second == [ord("s")]


def test_loop_runs_hook_until_end(window):
    count = []

    def tick():
        count.append(1)
        if len(count) == 3:
            window.end_loop()

    window.loop_hook(tick)
    window.loop()
    assert len(count) == 3
    assert window.is_open is True


def test_loop_dispatches_posted_events(window):
    seen = []
    window.hook(Event.KEY_PRESS, seen.append)
    window.loop_hook(window.end_loop)
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_d))
    window.loop()
    assert seen == [ord("d")]


def test_loop_ends_when_window_closed(window):
    window.loop_hook(window.close)
    window.loop()
    assert window.is_open is False


def test_mouse_hook_replaces_window():
    first = Window(300, 300, "win1")
    created = []

    def on_mouse(button, x, y):
        first.close()
        new = Window(30, 20, "new win")
        created.append(new)

    first.hook(Event.BUTTON_PRESS, on_mouse)
    first.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(1, 1)))
    try:
        assert first.is_open is False
        assert len(created) == 1
        assert created[0].surface.get_size() == (30, 20)
        assert pygame.display.get_caption()[0] == "new win"
    finally:
        for win in created:
            win.close()


def test_new_window_replaces_previous():
    first = Window(40, 40, "win1")
    second = Window(60, 60, "win2")
    try:
        assert first.is_open is False
        assert second.is_open is True
        with pytest.raises(RuntimeError):
            first.put_pixel(0, 0, 0xFFFFFF)
    finally:
        second.close()