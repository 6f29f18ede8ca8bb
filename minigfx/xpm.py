"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path

from minigfx.colors import color_by_name
from minigfx.image import Image
from minigfx.wordtab import find, find_unquoted, split_words

_TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63

_ATOI = re.compile(r"\s*([+-]?\d+)")
_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _blank(text: str, start: int, count: int) -> str:
    end = min(len(text), start + count)
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    The length of the text is preserved. A ``//`` comment is blanked up to
    and including its terminating newline.
    """
    size = len(text)
    while (begin := find_unquoted(text, "/*", size)) != -1:
        end = find(text[begin + 2:], "*/", size - begin - 2)
        text = _blank(text, begin, end + 4)
    while (begin := find_unquoted(text, "//", size)) != -1:
        end = find(text[begin + 2:], "\n", size - begin - 2)
        text = _blank(text, begin, end + 3)
    return text


def text_to_rgb(name: str, end: str | None = None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB.

    ``#hex`` values are parsed directly; otherwise ``name`` (joined with
    ``end`` when given) is looked up in the colour table. ``none`` gives -1
    and unknown names give 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name, 1)
        digits = match.group(2) if match else ""
        if not digits:
            return 0
        value = int(digits, 16)
        if match.group(1) == "-":
            value = -value
        return _to_int32(value)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return color_by_name(name)
    except KeyError:
        return 0


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in ``text``."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what} line") from None


def parse_xpm(lines: Iterable[str], bits_per_pixel: int = 32,
              big_endian: bool = False) -> Image:
    """Build an image from XPM lines: header, colour table, then pixel rows."""
    rows = iter(lines)
    words = split_words(_next_line(rows, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colour count and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(words[:4])}")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows, "colour")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour line without a 'c' key: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour line without a colour value: {line!r}")
        following = words[index + 2] if index + 2 < len(words) else None
        value = text_to_rgb(words[index + 1], following)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = Image(width, height, bits_per_pixel, big_endian)
    for y in range(height):
        line = _next_line(rows, "pixel")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def read_xpm_file(path: str | PathLike[str], bits_per_pixel: int = 32,
                  big_endian: bool = False) -> Image:
    """Load an XPM file from disk."""
    text = Path(path).read_text(encoding="latin-1")
    return parse_xpm(quoted_lines(strip_comments(text)), bits_per_pixel, big_endian)


def xpm_from_data(data: Iterable[str], bits_per_pixel: int = 32,
                  big_endian: bool = False) -> Image:
    """Build an image from XPM data already split into strings."""
    return parse_xpm(data, bits_per_pixel, big_endian)