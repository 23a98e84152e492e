"""Reading XPM images into :class:`~raycaster.image.Image` buffers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

from raycaster.colornames import lookup_color
from raycaster.image import Image

TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_WORD_SPLIT = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_ATOI = re.compile(r"\s*([+-]?\d+)")
_HEX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _find_unquoted(text: str, marker: str) -> int:
    quoted = False
    for index in range(len(text) - len(marker) + 1):
        if text[index] == '"':
            quoted = not quoted
        if not quoted and text.startswith(marker, index):
            return index
    return -1


def _blank(text: str, start: int, end: int) -> str:
    end = min(end, len(text))
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C comments outside string literals with spaces.

    Block comments are removed first, then line comments together with
    their terminating newline. The length of the text is kept.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if close == -1 else close + 2)
    while (begin := _find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if newline == -1 else newline + 1)
    return text


def text_to_rgb(name: str, suffix: Optional[str]) -> int:
    """Return the 0xRRGGBB value of an XPM colour specification.

    ``#rrggbb`` is read as hexadecimal; otherwise ``name`` (joined with
    ``suffix`` when given) is looked up in the colour table. Unknown
    names give 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name[1:])
        digits = match.group(2) if match else ""
        if not digits:
            return 0
        value = int(digits, 16)
        return -value if match.group(1) == "-" else value
    if suffix is not None:
        name = f"{name} {suffix}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"incomplete XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header: {line!r}")
    return values  # type: ignore[return-value]


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        position = words.index("c")
    except ValueError:
        raise XpmError(f"colour definition without 'c' key: {line!r}") from None
    if position + 1 >= len(words):
        raise XpmError(f"colour definition without a value: {line!r}")
    suffix = words[position + 2] if position + 2 < len(words) else None
    return line[:cpp], text_to_rgb(words[position + 1], suffix)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the strings of an XPM array.

    With one or two characters per pixel a later colour definition
    replaces an earlier one for the same key; with more, the first one
    is kept. Pixels with an undefined key are black, transparent ones
    become 0xFF000000.
    """
    rows = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(rows)
        except StopIteration:
            raise XpmError(f"XPM data ends before the {what}") from None

    width, height, ncolors, cpp = _parse_header(next_line("header"))
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, rgb = _parse_color(next_line("colour table"), cpp)
        if cpp <= 2:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)

    image = Image(width, height)
    for y in range(height):
        line = next_line("pixel rows")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is too short")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            image.put_pixel(x, y, TRANSPARENT if color == -1 else color)
    return image


def parse_xpm_source(text: str) -> Image:
    """Build an image from the text of an XPM file."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> Image:
    """Read and parse the XPM file at ``path``."""
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_source(text)