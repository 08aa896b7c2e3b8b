"""Mode pane: the current input mode, centered on one row."""
from __future__ import annotations

from ..cells import DEFAULT_THEME, CellGrid, PaneBounds, Theme, fill_remainder, paint


class ModeIndicator:
    def __init__(self, bounds: PaneBounds, text: str = "COMMAND", theme: Theme = DEFAULT_THEME) -> None:
        self._bounds = bounds
        self.text = text
        self.theme = theme

    @property
    def bounds(self) -> PaneBounds:
        return self._bounds

    def set_text(self, text: str) -> None:
        self.text = text

    def set_bounds(self, bounds: PaneBounds) -> None:
        self._bounds = bounds

    def render(self, grid: CellGrid) -> None:
        b = self._bounds
        if b.is_empty:
            return
        start = max(0, b.width // 2 - len(self.text) // 2)
        fill_remainder(grid, b, b.top, 0, self.theme.fg, self.theme.bg)
        paint(grid, b, b.top, self.text, self.theme.fg, self.theme.bg, from_x=start)
