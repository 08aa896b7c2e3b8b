"""
Channel pane: a scrollable list with edge-following navigation.

The highlighted row (cursor_row) moves freely through the interior of the
pane; once it reaches the top or bottom edge, further movement scrolls the
list underneath it instead. cursor_row is an absolute grid row, so at all
times cursor_row - bounds.top == selected_index - offset.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from ..cells import DEFAULT_THEME, CellGrid, PaneBounds, Theme, fill_remainder, paint
from ..events import EventBus, SelectionChanged, UnreadRaised

logger = logging.getLogger(__name__)

DEFAULT_UNREAD_MARKER = "*"


@dataclass(frozen=True)
class ListEntry:
    id: str
    label: str
    unread: bool = False

    def display_label(self, marker: str = DEFAULT_UNREAD_MARKER) -> str:
        """Label as painted: marker replaces the leading blank while unread."""
        if self.unread:
            return marker + self.label.lstrip()
        return self.label


@dataclass
class ListState:
    entries: list[ListEntry] = field(default_factory=list)
    selected_index: int = 0
    offset: int = 0
    cursor_row: int = 0


def render_list(
    state: ListState,
    bounds: PaneBounds,
    grid: CellGrid,
    theme: Theme = DEFAULT_THEME,
    marker: str = DEFAULT_UNREAD_MARKER,
) -> None:
    """Paint the visible window of entries; the cursor row is drawn inverted."""
    row = bounds.top
    for entry in state.entries[state.offset:]:
        if row > bounds.bottom:
            break
        if row == state.cursor_row:
            fg, bg = theme.bg, theme.fg
        else:
            fg, bg = theme.fg, theme.bg
        x = paint(grid, bounds, row, entry.display_label(marker), fg, bg)
        fill_remainder(grid, bounds, row, x, fg, bg)
        row += 1

    while row <= bounds.bottom:
        fill_remainder(grid, bounds, row, 0, theme.fg, theme.bg)
        row += 1


class ScrollableList:
    """Channel list with selection cursor and viewport offset."""

    def __init__(
        self,
        bounds: PaneBounds,
        bus: EventBus | None = None,
        theme: Theme = DEFAULT_THEME,
        marker: str = DEFAULT_UNREAD_MARKER,
    ) -> None:
        self._bounds = bounds
        self._bus = bus or EventBus()
        self.theme = theme
        self.marker = marker
        self.state = ListState(cursor_row=bounds.top)

    # ─── Accessors ────────────────────────────────────────────────────────

    @property
    def bounds(self) -> PaneBounds:
        return self._bounds

    @property
    def entries(self) -> list[ListEntry]:
        return self.state.entries

    @property
    def selected_index(self) -> int:
        return self.state.selected_index

    @property
    def offset(self) -> int:
        return self.state.offset

    @property
    def cursor_row(self) -> int:
        return self.state.cursor_row

    def selected_entry(self) -> ListEntry | None:
        if not self.state.entries:
            return None
        return self.state.entries[self.state.selected_index]

    def index_of(self, entry_id: str) -> int | None:
        for i, entry in enumerate(self.state.entries):
            if entry.id == entry_id:
                return i
        return None

    def _max_offset(self) -> int:
        return max(0, len(self.state.entries) - max(1, self._bounds.height))

    # ─── Content ──────────────────────────────────────────────────────────

    def set_entries(self, entries: list[ListEntry]) -> None:
        """
        Replace all entries. Selection, offset and cursor row are kept as they
        were (call move_to_top() to reset); they are only clamped if the new
        list is too short to hold them.
        """
        self.state.entries = list(entries)
        s = self.state
        if s.entries and s.selected_index >= len(s.entries):
            logger.debug("selection %d out of range after refresh, clamping", s.selected_index)
            s.selected_index = len(s.entries) - 1
        self._resync()

    def set_unread(self, entry_id: str) -> None:
        idx = self.index_of(entry_id)
        if idx is None:
            logger.debug("set_unread: unknown entry %s", entry_id)
            return
        entry = self.state.entries[idx]
        if entry.unread:
            return
        self.state.entries[idx] = dataclasses.replace(entry, unread=True)
        self._bus.emit(UnreadRaised(entry_id))

    def set_read(self, entry_id: str) -> None:
        idx = self.index_of(entry_id)
        if idx is None:
            return
        entry = self.state.entries[idx]
        if entry.unread:
            self.state.entries[idx] = dataclasses.replace(entry, unread=False)

    # ─── Navigation ───────────────────────────────────────────────────────

    def move_selection_up(self) -> None:
        s = self.state
        if not s.entries or s.selected_index == 0:
            return
        s.selected_index -= 1
        self._scroll_step_up()
        self._notify_selection_change()

    def move_selection_down(self) -> None:
        s = self.state
        if not s.entries or s.selected_index >= len(s.entries) - 1:
            return
        s.selected_index += 1
        self._scroll_step_down()
        self._notify_selection_change()

    def move_to_top(self) -> None:
        s = self.state
        s.selected_index = 0
        s.offset = 0
        s.cursor_row = self._bounds.top
        self._notify_selection_change()

    def move_to_bottom(self) -> None:
        s = self.state
        if not s.entries:
            return
        height = max(1, self._bounds.height)
        s.selected_index = len(s.entries) - 1
        if len(s.entries) <= height:
            s.offset = 0
            s.cursor_row = s.selected_index + self._bounds.top
        else:
            s.offset = len(s.entries) - height
            s.cursor_row = self._bounds.top + height - 1
        self._notify_selection_change()

    def select(self, entry_id: str) -> None:
        """Move the selection to entry_id without notifying; unknown ids are ignored."""
        idx = self.index_of(entry_id)
        if idx is None or idx == self.state.selected_index:
            return
        self.state.selected_index = idx
        self._resync()

    def _scroll_step_up(self) -> None:
        s = self.state
        if s.cursor_row <= self._bounds.top:
            s.offset = max(0, s.offset - 1)
        else:
            s.cursor_row -= 1

    def _scroll_step_down(self) -> None:
        s = self.state
        if s.cursor_row >= self._bounds.bottom:
            s.offset = min(self._max_offset(), s.offset + 1)
        else:
            s.cursor_row += 1

    def _notify_selection_change(self) -> None:
        entry = self.selected_entry()
        if entry is not None:
            self._bus.emit(SelectionChanged(entry.id))

    # ─── Geometry ─────────────────────────────────────────────────────────

    def set_bounds(self, bounds: PaneBounds) -> None:
        """Move the pane; the selection stays visible and the cursor row follows it."""
        self._bounds = bounds
        self._resync()

    def _resync(self) -> None:
        s = self.state
        height = max(1, self._bounds.height)
        if not s.entries:
            s.selected_index = 0
            s.offset = 0
            s.cursor_row = self._bounds.top
            return
        if s.selected_index < s.offset:
            s.offset = s.selected_index
        elif s.selected_index >= s.offset + height:
            s.offset = s.selected_index - height + 1
        s.offset = max(0, min(s.offset, self._max_offset()))
        s.cursor_row = self._bounds.top + (s.selected_index - s.offset)

    def render(self, grid: CellGrid) -> None:
        render_list(self.state, self._bounds, grid, self.theme, self.marker)
