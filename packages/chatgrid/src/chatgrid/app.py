"""
Application shell around ChatView.

ChatApp owns the bounded event queue. Listener threads (terminal input,
backend push) only ever post() events; process_pending() runs on the
thread that owns the view, applies each event to completion and then
renders one frame.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable

from .backend import ChatBackend
from .cells import CellGrid
from .config import ViewConfig
from .errors import BackendError
from .events import (
    ChannelSwitched,
    EventQueue,
    HostEvent,
    KeyPressed,
    MessageArrived,
    QuitRequested,
    Resized,
    SelectionChanged,
    SubmitRequested,
    UnreadRaised,
)
from .view import ChatView

logger = logging.getLogger(__name__)


def _terminal_bell() -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


class ReadMarkObserver:
    """
    Follows the channel selection: switches the chat pane to the newly
    selected channel and pushes a read mark to the backend.
    """

    def __init__(self, view: ChatView) -> None:
        self._view = view
        self._unsubscribe = view.bus.on(SelectionChanged, self._on_selection_changed)

    def _on_selection_changed(self, event: SelectionChanged) -> None:
        self.open(event.channel_id)

    def open(self, channel_id: str) -> None:
        """Show channel_id and, once it is showing, mark it read on the backend."""
        self._view.on_channel_switch(channel_id)
        if self._view.current_channel_id != channel_id:
            return
        try:
            self._view.backend.mark_read(channel_id)
        except BackendError as exc:
            logger.warning("Read mark for %s failed: %s", channel_id, exc)

    def close(self) -> None:
        self._unsubscribe()


class ChatApp:
    def __init__(
        self,
        backend: ChatBackend,
        width: int,
        height: int,
        config: ViewConfig | None = None,
        bell: Callable[[], None] | None = None,
        queue_size: int | None = None,
    ) -> None:
        self.config = config or ViewConfig()
        self.view = ChatView(backend, width, height, self.config)
        self.queue = EventQueue(queue_size) if queue_size else EventQueue()
        self.grid = CellGrid(width, height)
        self.running = True
        self._bell = bell or _terminal_bell

        self.read_marker = ReadMarkObserver(self.view)
        self.view.bus.on(SubmitRequested, self._on_submit)
        self.view.bus.on(UnreadRaised, self._on_unread)
        self.view.bus.on(QuitRequested, self._on_quit)

    def start(self) -> CellGrid:
        """Load channels, open the first one and draw the first frame."""
        self.view.refresh_channels()
        entry = self.view.channels.selected_entry()
        if entry is not None:
            self.read_marker.open(entry.id)
        return self.render()

    # ─── Event handling ───────────────────────────────────────────────────

    def post(self, event: HostEvent) -> None:
        """Thread-safe: enqueue an event for the owner thread."""
        self.queue.put(event)

    def process_pending(self) -> CellGrid:
        for event in self.queue.drain():
            self.apply(event)
        return self.render()

    def apply(self, event: HostEvent) -> None:
        if isinstance(event, KeyPressed):
            self.view.on_key(event.key)
        elif isinstance(event, Resized):
            self.view.on_resize(event.width, event.height)
        elif isinstance(event, MessageArrived):
            self.view.on_message_arrived(event.channel_id, event.text)
        elif isinstance(event, ChannelSwitched):
            self.view.on_channel_switch(event.channel_id)
        else:
            logger.warning("Dropping unknown event %r", event)

    def render(self) -> CellGrid:
        self.view.render(self.grid)
        return self.grid

    # ─── View events ──────────────────────────────────────────────────────

    def _on_submit(self, event: SubmitRequested) -> None:
        if event.channel_id is None:
            logger.debug("Nothing to send to: no channel selected")
            return
        try:
            self.view.backend.send_message(event.channel_id, event.text)
        except BackendError as exc:
            logger.warning("Send to %s failed: %s", event.channel_id, exc)
            return
        self.view.confirm_submit()

    def _on_unread(self, event: UnreadRaised) -> None:
        if self.config.bell:
            self._bell()

    def _on_quit(self, event: QuitRequested) -> None:
        self.running = False
