"""A single on-screen window with event hooks, drawing calls and a main loop."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple, Union

import pygame

from raycaster.image import Image

_FONT_SIZE = 16


class Event(IntEnum):
    """Event kinds a callback can be hooked to, numbered as in X11."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    EXPOSE = 12
    DESTROY_NOTIFY = 17


_KEYSYMS = {
    pygame.K_ESCAPE: 0xFF1B,
    pygame.K_LEFT: 0xFF51,
    pygame.K_UP: 0xFF52,
    pygame.K_RIGHT: 0xFF53,
    pygame.K_DOWN: 0xFF54,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_LSHIFT: 0xFFE1,
    pygame.K_RSHIFT: 0xFFE2,
    pygame.K_LCTRL: 0xFFE3,
    pygame.K_RCTRL: 0xFFE4,
}

_EXPOSE_TYPES = frozenset(
    kind
    for kind in (getattr(pygame, "VIDEOEXPOSE", None), getattr(pygame, "WINDOWEXPOSED", None))
    if kind is not None
)


def _keysym(key: int) -> int:
    """Translate a pygame key code into the matching X keysym."""
    return _KEYSYMS.get(key, key)


def _rgb(color: int) -> Tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _image_surface(image: Image) -> pygame.Surface:
    width, height = image.width, image.height
    if image.bpp == 32 and image.size_line() == width * 4:
        offsets = (1, 2, 3) if image.endian else (2, 1, 0)
        rgb = bytearray(width * height * 3)
        for channel, offset in enumerate(offsets):
            rgb[channel::3] = image.data[offset::4]
        return pygame.image.frombuffer(bytes(rgb), (width, height), "RGB")
    surface = pygame.Surface((width, height))
    for y in range(height):
        for x in range(width):
            surface.set_at((x, y), _rgb(image.get_pixel(x, y)))
    return surface


class Window:
    """A fixed-size window on the display.

    Only one window is shown at a time: opening a new one replaces the
    previous one, which then counts as closed.
    """

    _active: Optional["Window"] = None

    def __init__(self, width: int, height: int, title: str = "") -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid window size {width}x{height}")
        pygame.display.init()
        previous = Window._active
        if previous is not None:
            previous._surface = None
        self.width = width
        self.height = height
        self.title = title
        self._surface: Optional[pygame.Surface] = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self._hooks: Dict[Event, Callable[..., Any]] = {}
        self._loop_hook: Optional[Callable[[], Any]] = None
        self._ending = False
        self._autoflush = True
        self._font: Optional[pygame.font.Font] = None
        Window._active = self
        self.clear()

    @property
    def is_open(self) -> bool:
        """True until the window is closed or replaced by another one."""
        return self._surface is not None

    @property
    def surface(self) -> pygame.Surface:
        """The drawing surface of the window."""
        if self._surface is None:
            raise RuntimeError("window is closed")
        return self._surface

    def _flush(self) -> None:
        if self._autoflush and self._surface is not None:
            pygame.display.flip()

    def hook(self, event: Union[Event, int], callback: Optional[Callable[..., Any]]) -> None:
        """Call ``callback`` for ``event``; None removes the hook.

        Key callbacks receive the X keysym, button callbacks
        ``(button, x, y)``, motion callbacks ``(x, y)`` and the others
        nothing.
        """
        kind = Event(event)
        if callback is None:
            self._hooks.pop(kind, None)
        else:
            self._hooks[kind] = callback

    def loop_hook(self, callback: Optional[Callable[[], Any]]) -> None:
        """Call ``callback`` once per loop iteration, after pending events."""
        self._loop_hook = callback

    def _call(self, kind: Event, *args: Any) -> Any:
        callback = self._hooks.get(kind)
        if callback is None:
            return None
        return callback(*args)

    def dispatch(self, event: pygame.event.Event) -> Any:
        """Pass a pygame event to the hooked callback and return its result."""
        kind = event.type
        if kind == pygame.KEYDOWN:
            return self._call(Event.KEY_PRESS, _keysym(event.key))
        if kind == pygame.KEYUP:
            return self._call(Event.KEY_RELEASE, _keysym(event.key))
        if kind == pygame.MOUSEBUTTONDOWN:
            x, y = event.pos
            return self._call(Event.BUTTON_PRESS, event.button, x, y)
        if kind == pygame.MOUSEBUTTONUP:
            x, y = event.pos
            return self._call(Event.BUTTON_RELEASE, event.button, x, y)
        if kind == pygame.MOUSEMOTION:
            x, y = event.pos
            return self._call(Event.MOTION_NOTIFY, x, y)
        if kind == pygame.QUIT:
            return self._call(Event.DESTROY_NOTIFY)
        if kind in _EXPOSE_TYPES:
            return self._call(Event.EXPOSE)
        return None

    def loop(self) -> None:
        """Handle events until :meth:`end_loop` is called or no window is open.

        Without a loop hook the loop sleeps until an event arrives.
        """
        self._ending = False
        self._autoflush = False
        try:
            while Window._active is not None and not self._ending:
                if self._loop_hook is None:
                    Window._active.dispatch(pygame.event.wait())
                while not self._ending and Window._active is not None:
                    pending = pygame.event.poll()
                    if pending.type == pygame.NOEVENT:
                        break
                    Window._active.dispatch(pending)
                if Window._active is None:
                    break
                pygame.display.flip()
                if self._loop_hook is not None and not self._ending:
                    self._loop_hook()
        finally:
            self._autoflush = True

    def end_loop(self) -> None:
        """Make :meth:`loop` return after the current iteration."""
        self._ending = True

    def clear(self) -> None:
        """Fill the window with black."""
        self.surface.fill((0, 0, 0))
        self._flush()

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Draw one 0xRRGGBB pixel; points outside the window are ignored."""
        surface = self.surface
        if 0 <= x < self.width and 0 <= y < self.height:
            surface.set_at((x, y), _rgb(color))
        self._flush()

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy ``image`` into the window with its top-left corner at (x, y)."""
        self.surface.blit(_image_surface(image), (x, y))
        self._flush()

    def draw_text(self, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""
        surface = self.surface
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, _FONT_SIZE)
        rendered = self._font.render(text, False, _rgb(color))
        surface.blit(rendered, (x, y - self._font.get_ascent()))
        self._flush()

    def mouse_position(self) -> Tuple[int, int]:
        """Return the pointer position relative to the window."""
        x, y = pygame.mouse.get_pos()
        return x, y

    def move_mouse(self, x: int, y: int) -> None:
        """Move the pointer to (x, y) in the window."""
        pygame.mouse.set_pos((x, y))

    def hide_mouse(self) -> None:
        """Make the pointer invisible over the window."""
        pygame.mouse.set_visible(False)

    def show_mouse(self) -> None:
        """Make the pointer visible again."""
        pygame.mouse.set_visible(True)

    def close(self) -> None:
        """Close the window; closing twice does nothing."""
        if self._surface is None:
            return
        self._surface = None
        if Window._active is self:
            Window._active = None
            pygame.display.quit()


def screen_size() -> Tuple[int, int]:
    """Return the width and height of the screen."""
    if not pygame.display.get_init():
        pygame.display.init()
    info = pygame.display.Info()
    return info.current_w, info.current_h