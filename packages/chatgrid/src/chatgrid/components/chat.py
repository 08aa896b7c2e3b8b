"""
Chat pane: an append-only message log rendered bottom-up.

offset counts wrapped lines scrolled back from the newest one; 0 keeps the
tail of the conversation on the pane's bottom row. Lines are laid out from
the bottom upward, so scrolling back never re-flows the rows below.
"""
from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from ..cells import DEFAULT_THEME, CellGrid, PaneBounds, Theme, fill_remainder, paint_cells
from ..wrap import wrap_lines

logger = logging.getLogger(__name__)

DEFAULT_PAGE_STEP = 10


@dataclass
class LogState:
    messages: list[str] = field(default_factory=list)
    offset: int = 0


def render_log(
    state: LogState,
    bounds: PaneBounds,
    grid: CellGrid,
    theme: Theme = DEFAULT_THEME,
) -> None:
    if bounds.is_empty:
        return
    lines = wrap_lines(state.messages, bounds.width, theme.fg, theme.bg)

    row = bounds.bottom
    i = len(lines) - 1 - state.offset
    while i >= 0 and row >= bounds.top:
        x = paint_cells(grid, bounds, row, lines[i])
        fill_remainder(grid, bounds, row, x, theme.fg, theme.bg)
        row -= 1
        i -= 1

    # Blank everything above the last painted line so nothing from an
    # earlier frame survives.
    while row >= bounds.top:
        fill_remainder(grid, bounds, row, 0, theme.fg, theme.bg)
        row -= 1


def format_label(name: str, topic: str = "") -> str:
    if topic:
        return f"{name} - {topic}"
    return name


class ScrollingLog:
    """Message log with page-wise scroll-back."""

    def __init__(
        self,
        bounds: PaneBounds,
        theme: Theme = DEFAULT_THEME,
        page_step: int = DEFAULT_PAGE_STEP,
    ) -> None:
        self._bounds = bounds
        self.theme = theme
        self.page_step = max(1, page_step)
        self.state = LogState()
        self.label = ""

    @property
    def bounds(self) -> PaneBounds:
        return self._bounds

    @property
    def messages(self) -> list[str]:
        return self.state.messages

    @property
    def offset(self) -> int:
        return self.state.offset

    def total_lines(self) -> int:
        return len(wrap_lines(self.state.messages, self._bounds.width))

    def max_offset(self) -> int:
        return max(0, self.total_lines() - max(0, self._bounds.height))

    def max_visible_messages(self) -> int:
        return max(0, self._bounds.height)

    # ─── Content ──────────────────────────────────────────────────────────

    def append(self, message: str) -> None:
        # The offset is left alone: a reader scrolled back keeps their place.
        self.state.messages.append(html.unescape(message))

    def append_all(self, messages: Iterable[str]) -> None:
        for message in messages:
            self.append(message)

    def clear(self) -> None:
        self.state.messages = []
        self.state.offset = 0

    def set_label(self, name: str, topic: str = "") -> None:
        self.label = format_label(name, topic)

    def show_help(self, keymap: Mapping[str, Mapping[str, Sequence[str]]]) -> None:
        """Replace the log with usage text and the key bindings of every mode."""
        lines = [
            "chatgrid - chat client for your terminal",
            "",
            "USAGE:",
            "    chatgrid snapshot --fixture [path-to-fixture]",
            "",
            "KEY BINDINGS:",
            "",
        ]
        for mode in sorted(keymap):
            lines.append(f"    {mode.upper()}")
            lines.append("")
            for action in sorted(keymap[mode]):
                keys = ", ".join(keymap[mode][action])
                lines.append(f"    {keys:<20}{action:<15}")
            lines.append("")
        self.state.messages = lines
        self.state.offset = 0

    # ─── Scrolling ────────────────────────────────────────────────────────

    def scroll_up(self) -> None:
        self.state.offset = min(self.state.offset + self.page_step, self.max_offset())

    def scroll_down(self) -> None:
        self.state.offset = max(0, self.state.offset - self.page_step)

    # ─── Geometry ─────────────────────────────────────────────────────────

    def set_bounds(self, bounds: PaneBounds) -> None:
        self._bounds = bounds
        clamped = min(self.state.offset, self.max_offset())
        if clamped != self.state.offset:
            logger.debug("log offset %d clamped to %d after resize", self.state.offset, clamped)
            self.state.offset = clamped

    def render(self, grid: CellGrid) -> None:
        render_log(self.state, self._bounds, grid, self.theme)
