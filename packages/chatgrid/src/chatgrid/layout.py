"""
Screen layout: two columns by two rows on a 12-column grid.

    ┌Channels──┐┌#general - topic──────────────┐
    │          ││                              │
    └──────────┘└──────────────────────────────┘
    ┌──────────┐┌──────────────────────────────┐
    │ COMMAND  ││                              │
    └──────────┘└──────────────────────────────┘

The sidebar column holds channels above the mode indicator; the main
column holds the chat log above the input line. Every pane has an outer
rectangle (border included) and inner bounds one cell in on each side.
"""
from __future__ import annotations

from dataclasses import dataclass

from .cells import PaneBounds
from .config import GRID_COLUMNS, ViewConfig


@dataclass(frozen=True)
class Pane:
    outer: PaneBounds

    @property
    def inner(self) -> PaneBounds:
        return self.outer.shrink(1)


@dataclass(frozen=True)
class Layout:
    width: int
    height: int
    channels: Pane
    chat: Pane
    mode: Pane
    input: Pane

    def panes(self) -> list[Pane]:
        return [self.channels, self.chat, self.mode, self.input]


def compute_layout(width: int, height: int, config: ViewConfig | None = None) -> Layout:
    config = config or ViewConfig()
    width = max(0, width)
    height = max(0, height)

    sidebar = width * config.sidebar_width // GRID_COLUMNS
    main = width - sidebar
    bottom = min(config.input_height, height)
    body = height - bottom

    return Layout(
        width=width,
        height=height,
        channels=Pane(PaneBounds(0, 0, sidebar, body)),
        chat=Pane(PaneBounds(sidebar, 0, main, body)),
        mode=Pane(PaneBounds(0, body, sidebar, bottom)),
        input=Pane(PaneBounds(sidebar, body, main, bottom)),
    )
