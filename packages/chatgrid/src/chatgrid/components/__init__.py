"""
chatgrid.components — the four panes of the chat screen.
"""
from .channels import ListEntry, ListState, ScrollableList, render_list
from .chat import LogState, ScrollingLog, format_label, render_log
from .input import EditBuffer, LineEditor, render_input
from .mode import ModeIndicator

__all__ = [
    "EditBuffer",
    "LineEditor",
    "ListEntry",
    "ListState",
    "LogState",
    "ModeIndicator",
    "ScrollableList",
    "ScrollingLog",
    "format_label",
    "render_input",
    "render_list",
    "render_log",
]
