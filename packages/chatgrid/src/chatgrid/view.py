"""
ChatView — the core facade over the four panes.

Entry points (on_key, on_resize, on_message_arrived, on_channel_switch)
mutate component state; render() paints everything into a CellGrid. The
view never blocks on anything but the backend calls it is handed, and a
failed backend call leaves its state as it was.

Outbound events are emitted on ``view.bus``:
SelectionChanged, UnreadRaised, SubmitRequested, QuitRequested.
"""
from __future__ import annotations

import logging

from .backend import ChannelInfo, ChannelKind, ChatBackend, sort_channels
from .cells import CellGrid, Theme, draw_border
from .components.channels import ListEntry, ScrollableList
from .components.chat import ScrollingLog
from .components.input import LineEditor
from .components.mode import ModeIndicator
from .config import ViewConfig
from .errors import BackendError
from .events import EventBus, QuitRequested, SubmitRequested
from .keybindings import COMMAND_MODE, INSERT_MODE, KeybindingsManager, is_printable_key
from .layout import Layout, compute_layout

logger = logging.getLogger(__name__)

CHANNELS_LABEL = "Channels"

_KIND_PREFIX = {
    ChannelKind.CHANNEL: "#",
    ChannelKind.GROUP: "~",
    ChannelKind.IM: "@",
}


def entry_label(channel: ChannelInfo) -> str:
    """Sidebar label; the leading blank is where the unread marker goes."""
    prefix = _KIND_PREFIX.get(channel.kind, "")
    return f" {prefix}{channel.name}"


class ChatView:
    def __init__(
        self,
        backend: ChatBackend,
        width: int,
        height: int,
        config: ViewConfig | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or ViewConfig()
        self.backend = backend
        self.bus = bus or EventBus()
        self.keybindings = KeybindingsManager(self.config.keymap)
        self.theme: Theme = self.config.theme.to_theme()
        self.mode = COMMAND_MODE

        self.layout: Layout = compute_layout(width, height, self.config)
        self.channels = ScrollableList(
            self.layout.channels.inner, self.bus, self.theme, self.config.unread_marker
        )
        self.chat = ScrollingLog(self.layout.chat.inner, self.theme, self.config.page_step)
        self.input = LineEditor(self.layout.input.inner, self.theme)
        self.mode_indicator = ModeIndicator(self.layout.mode.inner, COMMAND_MODE.upper(), self.theme)

        self._channel_info: dict[str, ChannelInfo] = {}
        self.current_channel_id: str | None = None

    # ─── Channels ─────────────────────────────────────────────────────────

    def refresh_channels(self) -> None:
        """Reload the channel list from the backend; selection is left where it was."""
        try:
            channels = sort_channels(self.backend.list_channels())
        except BackendError as exc:
            logger.warning("Channel refresh failed: %s", exc)
            return
        self._channel_info = {c.id: c for c in channels}
        self.channels.set_entries([
            ListEntry(c.id, entry_label(c), unread=c.unread) for c in channels
        ])
        logger.debug("Loaded %d channels", len(channels))

    def channel_info(self, channel_id: str) -> ChannelInfo | None:
        return self._channel_info.get(channel_id)

    # ─── Entry points ─────────────────────────────────────────────────────

    def on_resize(self, width: int, height: int) -> None:
        self.layout = compute_layout(width, height, self.config)
        self.channels.set_bounds(self.layout.channels.inner)
        self.chat.set_bounds(self.layout.chat.inner)
        self.input.set_bounds(self.layout.input.inner)
        self.mode_indicator.set_bounds(self.layout.mode.inner)
        logger.debug("Resized to %dx%d", width, height)

    def on_message_arrived(self, channel_id: str, text: str) -> None:
        if channel_id == self.current_channel_id:
            self.chat.append(text)
        else:
            self.channels.set_unread(channel_id)

    def on_channel_switch(self, channel_id: str) -> None:
        count = self.config.fetch_count
        if count is None:
            count = self.chat.max_visible_messages()
        try:
            messages = self.backend.fetch_messages(channel_id, count)
        except BackendError as exc:
            logger.warning("Switch to %s failed: %s", channel_id, exc)
            return

        self.current_channel_id = channel_id
        self.chat.clear()
        self.chat.append_all(messages)
        info = self._channel_info.get(channel_id)
        if info is not None:
            self.chat.set_label(info.name, info.topic)
        else:
            self.chat.set_label(channel_id)
        self.channels.set_read(channel_id)
        self.channels.select(channel_id)

    def on_key(self, key: str) -> None:
        action = self.keybindings.action_for(self.mode, key)
        if action is None:
            if self.mode == INSERT_MODE and is_printable_key(key):
                self.input.insert(key)
            else:
                logger.debug("Unbound key %r in %s mode", key, self.mode)
            return
        self._dispatch(action)

    def _dispatch(self, action: str) -> None:
        if action == "mode-insert":
            self.set_mode(INSERT_MODE)
        elif action == "mode-command":
            self.set_mode(COMMAND_MODE)
        elif action == "channel-up":
            self.channels.move_selection_up()
        elif action == "channel-down":
            self.channels.move_selection_down()
        elif action == "channel-top":
            self.channels.move_to_top()
        elif action == "channel-bottom":
            self.channels.move_to_bottom()
        elif action == "chat-up":
            self.chat.scroll_up()
        elif action == "chat-down":
            self.chat.scroll_down()
        elif action == "cursor-left":
            self.input.move_cursor_left()
        elif action == "cursor-right":
            self.input.move_cursor_right()
        elif action == "backspace":
            self.input.backspace()
        elif action == "delete":
            self.input.delete()
        elif action == "space":
            self.input.insert(" ")
        elif action == "send":
            self.submit()
        elif action == "help":
            self.chat.show_help(self.keybindings.as_dict())
        elif action == "quit":
            self.bus.emit(QuitRequested())
        else:
            logger.debug("Unhandled action %s", action)

    def set_mode(self, mode: str) -> None:
        self.mode = mode
        self.mode_indicator.set_text(mode.upper())

    def submit(self) -> None:
        """Ask the host to send the typed text; it calls confirm_submit() on success."""
        if self.input.is_empty():
            return
        self.bus.emit(SubmitRequested(self.current_channel_id, self.input.text))

    def confirm_submit(self) -> None:
        self.input.clear()

    # ─── Rendering ────────────────────────────────────────────────────────

    def render(self, grid: CellGrid) -> None:
        if (grid.width, grid.height) != (self.layout.width, self.layout.height):
            grid.resize(self.layout.width, self.layout.height)

        t = self.theme
        labels = (
            (self.layout.channels, CHANNELS_LABEL),
            (self.layout.chat, self.chat.label),
            (self.layout.mode, ""),
            (self.layout.input, ""),
        )
        for pane, label in labels:
            draw_border(grid, pane.outer, label, t.border, t.bg, t.label)

        self.channels.render(grid)
        self.chat.render(grid)
        self.mode_indicator.render(grid)
        self.input.render(grid)
