"""
Character cell grid and the primitives that paint into it.

Provides:
- Color: ANSI color palette
- DisplayCell: immutable {character, fg, bg}
- PaneBounds: inner rectangle of a pane (border excluded)
- CellGrid: the shared output grid
- paint() / paint_cells() / fill_remainder() / fill_rect(): clipped writers
- draw_border(): box border with a label in the top edge
- Theme: pane colors
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from .utils import TAB_EXPANSION, glyph_width, glyphs, truncate_to_width


class Color(enum.Enum):
    DEFAULT = 9
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

    @classmethod
    def from_name(cls, name: str) -> "Color":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown color: {name!r}") from None

    @property
    def fg_code(self) -> int:
        return 30 + self.value

    @property
    def bg_code(self) -> int:
        return 40 + self.value


@dataclass(frozen=True)
class DisplayCell:
    char: str = " "
    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT

    @property
    def is_continuation(self) -> bool:
        """True for the trailing half of a double-width glyph."""
        return self.char == ""

    def inverted(self) -> "DisplayCell":
        return DisplayCell(self.char, self.bg, self.fg)


Line = tuple[DisplayCell, ...]


@dataclass(frozen=True)
class PaneBounds:
    """Inner rectangle of a pane; every edge helper is inclusive."""
    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def shrink(self, n: int = 1) -> "PaneBounds":
        return PaneBounds(
            self.x + n,
            self.y + n,
            max(0, self.width - 2 * n),
            max(0, self.height - 2 * n),
        )


# ─────────────────────────────────────────────────────────────────────────────
# CellGrid
# ─────────────────────────────────────────────────────────────────────────────

_BLANK = DisplayCell()


class CellGrid:
    """Fixed-size matrix of DisplayCell. Writes outside the grid are ignored."""

    def __init__(self, width: int, height: int) -> None:
        self.width = 0
        self.height = 0
        self._rows: list[list[DisplayCell]] = []
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Resize and clear the grid."""
        self.width = max(0, width)
        self.height = max(0, height)
        self._rows = [[_BLANK] * self.width for _ in range(self.height)]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> DisplayCell:
        if not self.contains(x, y):
            return _BLANK
        return self._rows[y][x]

    def set(self, x: int, y: int, cell: DisplayCell) -> None:
        if self.contains(x, y):
            self._rows[y][x] = cell

    def row_text(self, y: int) -> str:
        """Characters of row y, continuation cells skipped."""
        if not 0 <= y < self.height:
            return ""
        return "".join(c.char for c in self._rows[y])

    def snapshot(self) -> tuple[tuple[DisplayCell, ...], ...]:
        return tuple(tuple(row) for row in self._rows)

    def to_text_lines(self) -> list[str]:
        return [self.row_text(y) for y in range(self.height)]

    def to_ansi_lines(self) -> list[str]:
        """Serialize each row with SGR color codes, emitting a code only on color change."""
        lines: list[str] = []
        for row in self._rows:
            out: list[str] = []
            current: tuple[Color, Color] | None = None
            for cell in row:
                if cell.is_continuation:
                    continue
                colors = (cell.fg, cell.bg)
                if colors != current:
                    out.append(f"\x1b[{cell.fg.fg_code};{cell.bg.bg_code}m")
                    current = colors
                out.append(cell.char)
            out.append("\x1b[0m")
            lines.append("".join(out))
        return lines


# ─────────────────────────────────────────────────────────────────────────────
# Painting primitives
# ─────────────────────────────────────────────────────────────────────────────

def text_cells(text: str, fg: Color, bg: Color) -> list[DisplayCell]:
    """Build cells for text; a wide glyph is followed by a continuation cell."""
    cells: list[DisplayCell] = []
    for g in glyphs(text.replace("\t", TAB_EXPANSION)):
        w = glyph_width(g)
        if w == 0:
            continue
        cells.append(DisplayCell(g, fg, bg))
        if w == 2:
            cells.append(DisplayCell("", fg, bg))
    return cells


def paint_cells(
    grid: CellGrid,
    bounds: PaneBounds,
    row: int,
    cells: Iterable[DisplayCell],
    from_x: int = 0,
) -> int:
    """
    Write cells on row starting at bounds.left + from_x, clipped to the pane.
    A wide glyph that would straddle the right edge is not written.
    Returns the next free column relative to bounds.left.
    """
    if bounds.is_empty or not bounds.top <= row <= bounds.bottom:
        return from_x
    x = from_x
    pending = list(cells)
    i = 0
    while i < len(pending):
        cell = pending[i]
        wide = i + 1 < len(pending) and pending[i + 1].is_continuation
        span = 2 if wide else 1
        if x + span > bounds.width:
            break
        grid.set(bounds.left + x, row, cell)
        if wide:
            grid.set(bounds.left + x + 1, row, pending[i + 1])
        x += span
        i += span
    return x


def paint(
    grid: CellGrid,
    bounds: PaneBounds,
    row: int,
    text: str,
    fg: Color,
    bg: Color,
    from_x: int = 0,
) -> int:
    return paint_cells(grid, bounds, row, text_cells(text, fg, bg), from_x)


def fill_remainder(
    grid: CellGrid,
    bounds: PaneBounds,
    row: int,
    from_x: int,
    fg: Color,
    bg: Color,
) -> None:
    """Pad row from from_x to the pane's right edge with background spaces."""
    if bounds.is_empty or not bounds.top <= row <= bounds.bottom:
        return
    blank = DisplayCell(" ", fg, bg)
    for x in range(max(0, from_x), bounds.width):
        grid.set(bounds.left + x, row, blank)


def fill_rect(grid: CellGrid, bounds: PaneBounds, fg: Color, bg: Color) -> None:
    for row in range(bounds.top, bounds.bottom + 1):
        fill_remainder(grid, bounds, row, 0, fg, bg)


_BOX = {
    "h": "─", "v": "│",
    "tl": "┌", "tr": "┐", "bl": "└", "br": "┘",
}


def draw_border(
    grid: CellGrid,
    outer: PaneBounds,
    label: str,
    fg: Color,
    bg: Color,
    label_fg: Color | None = None,
) -> None:
    """Draw a one-cell box around outer, with label written into the top edge."""
    if outer.width < 2 or outer.height < 2:
        return
    for x in range(outer.left + 1, outer.right):
        grid.set(x, outer.top, DisplayCell(_BOX["h"], fg, bg))
        grid.set(x, outer.bottom, DisplayCell(_BOX["h"], fg, bg))
    for y in range(outer.top + 1, outer.bottom):
        grid.set(outer.left, y, DisplayCell(_BOX["v"], fg, bg))
        grid.set(outer.right, y, DisplayCell(_BOX["v"], fg, bg))
    grid.set(outer.left, outer.top, DisplayCell(_BOX["tl"], fg, bg))
    grid.set(outer.right, outer.top, DisplayCell(_BOX["tr"], fg, bg))
    grid.set(outer.left, outer.bottom, DisplayCell(_BOX["bl"], fg, bg))
    grid.set(outer.right, outer.bottom, DisplayCell(_BOX["br"], fg, bg))

    if label:
        edge = PaneBounds(outer.left + 1, outer.top, outer.width - 2, 1)
        paint(grid, edge, outer.top, truncate_to_width(label, edge.width), label_fg or fg, bg)


@dataclass(frozen=True)
class Theme:
    fg: Color = Color.WHITE
    bg: Color = Color.DEFAULT
    border: Color = Color.WHITE
    label: Color = Color.CYAN


DEFAULT_THEME = Theme()
