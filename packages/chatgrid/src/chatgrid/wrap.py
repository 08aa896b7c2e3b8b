"""
Line wrapping for the chat log.

wrap_lines() turns an ordered list of logical text items into display lines
no wider than a given column count. Items are separated by forced breaks and
embedded newlines break as well. Results are never cached; they depend on
the pane width, which changes on resize.
"""
from __future__ import annotations

from typing import Sequence

from .cells import Color, DisplayCell, Line
from .utils import TAB_EXPANSION, glyph_width, glyphs

_SEPARATOR = "\n"
_OVERSIZED = "?"


def wrap_lines(
    items: Sequence[str],
    width: int,
    fg: Color = Color.DEFAULT,
    bg: Color = Color.DEFAULT,
) -> list[Line]:
    """
    Wrap items at width display columns.

    A trailing residual always emits a line, so with no wrapping needed the
    number of lines equals the number of items (and an empty input gives one
    empty line). Width <= 0 is treated as 1.
    """
    width = max(1, width)
    text = _SEPARATOR.join(items).replace("\t", TAB_EXPANSION)

    lines: list[Line] = []
    current: list[DisplayCell] = []
    x = 0

    for g in glyphs(text):
        if g[0] == _SEPARATOR:
            lines.append(tuple(current))
            current = []
            x = 0
            continue

        w = glyph_width(g)
        if w == 0:
            continue
        if w > width:
            g, w = _OVERSIZED, 1

        if x + w > width:
            lines.append(tuple(current))
            current = []
            x = 0

        current.append(DisplayCell(g, fg, bg))
        if w == 2:
            current.append(DisplayCell("", fg, bg))
        x += w

    lines.append(tuple(current))
    return lines


def line_width(line: Line) -> int:
    """Display width of a wrapped line (continuation cells included)."""
    return len(line)


def line_text(line: Line) -> str:
    return "".join(c.char for c in line)
