"""
chatgrid — character-grid renderer for a three-pane terminal chat client.
"""
from .app import ChatApp, ReadMarkObserver
from .backend import ChannelInfo, ChannelKind, ChatBackend, InMemoryBackend, format_message, sort_channels
from .cells import CellGrid, Color, DisplayCell, Line, PaneBounds, Theme, fill_remainder, paint
from .components import EditBuffer, LineEditor, ListEntry, ModeIndicator, ScrollableList, ScrollingLog
from .config import ViewConfig, load_config
from .errors import BackendError, ChatgridError, ConfigError
from .events import (
    ChannelSwitched,
    EventBus,
    EventQueue,
    KeyPressed,
    MessageArrived,
    QuitRequested,
    Resized,
    SelectionChanged,
    SubmitRequested,
    UnreadRaised,
)
from .keybindings import DEFAULT_KEYMAP, KeybindingsManager
from .layout import Layout, compute_layout
from .utils import display_width, glyphs, truncate_to_width
from .view import ChatView
from .wrap import wrap_lines

__version__ = "0.1.0"

__all__ = [
    # app
    "ChatApp",
    "ReadMarkObserver",
    # backend
    "ChannelInfo",
    "ChannelKind",
    "ChatBackend",
    "InMemoryBackend",
    "format_message",
    "sort_channels",
    # cells
    "CellGrid",
    "Color",
    "DisplayCell",
    "Line",
    "PaneBounds",
    "Theme",
    "fill_remainder",
    "paint",
    # components
    "EditBuffer",
    "LineEditor",
    "ListEntry",
    "ModeIndicator",
    "ScrollableList",
    "ScrollingLog",
    # config
    "ViewConfig",
    "load_config",
    # errors
    "BackendError",
    "ChatgridError",
    "ConfigError",
    # events
    "ChannelSwitched",
    "EventBus",
    "EventQueue",
    "KeyPressed",
    "MessageArrived",
    "QuitRequested",
    "Resized",
    "SelectionChanged",
    "SubmitRequested",
    "UnreadRaised",
    # keybindings
    "DEFAULT_KEYMAP",
    "KeybindingsManager",
    # layout
    "Layout",
    "compute_layout",
    # utils
    "display_width",
    "glyphs",
    "truncate_to_width",
    # view
    "ChatView",
    # wrap
    "wrap_lines",
]
