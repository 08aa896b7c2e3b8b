"""Input pane: single-line editor with an inverted-cell cursor."""
from __future__ import annotations

from dataclasses import dataclass, field

from ..cells import DEFAULT_THEME, CellGrid, DisplayCell, PaneBounds, Theme, fill_remainder, paint
from ..utils import display_width


@dataclass
class EditBuffer:
    characters: list[str] = field(default_factory=list)
    cursor_position: int = 0

    @property
    def text(self) -> str:
        return "".join(self.characters)

    def cursor_column(self) -> int:
        return display_width("".join(self.characters[:self.cursor_position]))


def render_input(
    buffer: EditBuffer,
    bounds: PaneBounds,
    grid: CellGrid,
    theme: Theme = DEFAULT_THEME,
) -> None:
    if bounds.is_empty:
        return
    row = bounds.top
    x = paint(grid, bounds, row, buffer.text, theme.fg, theme.bg)
    fill_remainder(grid, bounds, row, x, theme.fg, theme.bg)

    col = buffer.cursor_column()
    if col < bounds.width:
        under = grid.get(bounds.left + col, row)
        if under.is_continuation:
            under = DisplayCell(" ", theme.fg, theme.bg)
        grid.set(bounds.left + col, row, DisplayCell(under.char, theme.bg, theme.fg))
        trailing = grid.get(bounds.left + col + 1, row)
        if trailing.is_continuation and col + 1 < bounds.width:
            grid.set(bounds.left + col + 1, row, trailing.inverted())


class LineEditor:
    """
    Single-line text buffer edited at a cursor position.

    Input is capped so that the text plus the cursor cell always fit the
    pane: an insert is refused once it would bring the display width to the
    inner width minus one.
    """

    def __init__(self, bounds: PaneBounds, theme: Theme = DEFAULT_THEME) -> None:
        self._bounds = bounds
        self.theme = theme
        self.buffer = EditBuffer()

    @property
    def bounds(self) -> PaneBounds:
        return self._bounds

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor_position(self) -> int:
        return self.buffer.cursor_position

    def is_empty(self) -> bool:
        return not self.buffer.characters

    def insert(self, char: str) -> None:
        b = self.buffer
        limit = self._bounds.width - 1
        if display_width(b.text) + display_width(char) > limit:
            return
        b.characters.insert(b.cursor_position, char)
        b.cursor_position += 1

    def backspace(self) -> None:
        b = self.buffer
        if b.cursor_position == 0:
            return
        del b.characters[b.cursor_position - 1]
        b.cursor_position -= 1

    def delete(self) -> None:
        b = self.buffer
        if b.cursor_position >= len(b.characters):
            return
        del b.characters[b.cursor_position]

    def move_cursor_left(self) -> None:
        if self.buffer.cursor_position > 0:
            self.buffer.cursor_position -= 1

    def move_cursor_right(self) -> None:
        if self.buffer.cursor_position < len(self.buffer.characters):
            self.buffer.cursor_position += 1

    def clear(self) -> None:
        self.buffer = EditBuffer()

    def set_bounds(self, bounds: PaneBounds) -> None:
        self._bounds = bounds

    def render(self, grid: CellGrid) -> None:
        render_input(self.buffer, self._bounds, grid, self.theme)
