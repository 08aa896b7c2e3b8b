"""
Events flowing in and out of the chat view.

Outbound (emitted by the view, handled by the host):
    SelectionChanged, UnreadRaised, SubmitRequested, QuitRequested

Inbound (posted by the host, applied by ChatApp on its own thread):
    KeyPressed, Resized, MessageArrived, ChannelSwitched

EventBus is a synchronous pub/sub keyed by event class. EventQueue is the
bounded FIFO that carries inbound events from listener threads to the
single thread that owns the view.
"""
from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)


# ─── Outbound ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SelectionChanged:
    channel_id: str


@dataclass(frozen=True)
class UnreadRaised:
    channel_id: str


@dataclass(frozen=True)
class SubmitRequested:
    channel_id: str | None
    text: str


@dataclass(frozen=True)
class QuitRequested:
    pass


# ─── Inbound ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class MessageArrived:
    channel_id: str
    text: str


@dataclass(frozen=True)
class ChannelSwitched:
    channel_id: str


HostEvent = Union[KeyPressed, Resized, MessageArrived, ChannelSwitched]


# ─── EventBus ─────────────────────────────────────────────────────────────────

class EventBus:
    """Synchronous event bus; handlers are looked up by the event's class."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = {}

    def emit(self, event: object) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler error (%s)", type(event).__name__)

    def on(self, event_type: type, handler: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe to an event class. Returns an unsubscribe function."""
        self._handlers.setdefault(event_type, []).append(handler)

        def unsubscribe() -> None:
            try:
                self._handlers.get(event_type, []).remove(handler)
            except ValueError:
                pass

        return unsubscribe

    def clear(self) -> None:
        self._handlers.clear()


# ─── EventQueue ───────────────────────────────────────────────────────────────

DEFAULT_QUEUE_SIZE = 20


class EventQueue:
    """
    Bounded FIFO of host events.

    put() may be called from any thread and blocks while the queue is full.
    drain() is called by the owning thread only.
    """

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue: queue.Queue[HostEvent] = queue.Queue(maxsize=maxsize)

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def put(self, event: HostEvent, timeout: float | None = None) -> None:
        self._queue.put(event, timeout=timeout)

    def get(self, timeout: float | None = None) -> HostEvent:
        """Block until an event is available (raises queue.Empty on timeout)."""
        return self._queue.get(timeout=timeout)

    def drain(self) -> list[HostEvent]:
        """Return every event queued right now, oldest first, without blocking."""
        events: list[HostEvent] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events

    def __len__(self) -> int:
        return self._queue.qsize()
