"""
Chat backend interface consumed by the view.

ChatBackend is the narrow protocol a real service client implements.
InMemoryBackend is a dict-backed implementation used by the demo CLI and the
tests; it can be loaded from a JSON fixture of the form::

    {
      "channels": [
        {"id": "C1", "name": "general", "topic": "chit-chat", "kind": "channel"},
        {"id": "D1", "name": "alice", "kind": "im", "unread": true}
      ],
      "messages": {"C1": ["[09:00] <bob> morning"]}
    }
"""
from __future__ import annotations

import enum
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from .errors import BackendError

logger = logging.getLogger(__name__)


class ChannelKind(enum.IntEnum):
    """Kind of conversation; the value is also the sidebar sort order."""
    CHANNEL = 1
    GROUP = 2
    IM = 3

    @classmethod
    def from_name(cls, name: str) -> "ChannelKind":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"unknown channel kind: {name!r}") from None


@dataclass(frozen=True)
class ChannelInfo:
    id: str
    name: str
    topic: str = ""
    kind: ChannelKind = ChannelKind.CHANNEL
    unread: bool = False


def sort_channels(channels: list[ChannelInfo]) -> list[ChannelInfo]:
    """Channels first, then groups, then direct messages; by name within a kind."""
    return sorted(channels, key=lambda c: (c.kind.value, c.name))


def format_message(timestamp: float, name: str, text: str, edited: bool = False) -> str:
    """Render a message as ``[HH:MM] <name> text``."""
    clock = time.strftime("%H:%M", time.localtime(timestamp))
    if edited:
        text = f"{text} (edited)"
    return f"[{clock}] <{name or 'unknown'}> {text}"


@runtime_checkable
class ChatBackend(Protocol):
    def list_channels(self) -> list[ChannelInfo]:
        ...

    def fetch_messages(self, channel_id: str, max_count: int) -> list[str]:
        """Newest max_count messages, oldest first."""
        ...

    def send_message(self, channel_id: str, text: str) -> None:
        ...

    def mark_read(self, channel_id: str) -> None:
        ...


@dataclass
class InMemoryBackend:
    """ChatBackend over plain dicts; sent messages are echoed into history."""
    channels: list[ChannelInfo] = field(default_factory=list)
    history: dict[str, list[str]] = field(default_factory=dict)
    user_name: str = "me"
    read_marks: list[str] = field(default_factory=list)

    def _require(self, channel_id: str, operation: str) -> ChannelInfo:
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        raise BackendError(operation, f"unknown channel {channel_id!r}")

    def list_channels(self) -> list[ChannelInfo]:
        return list(self.channels)

    def fetch_messages(self, channel_id: str, max_count: int) -> list[str]:
        self._require(channel_id, "fetch_messages")
        if max_count <= 0:
            return []
        return list(self.history.get(channel_id, [])[-max_count:])

    def send_message(self, channel_id: str, text: str) -> None:
        self._require(channel_id, "send_message")
        self.history.setdefault(channel_id, []).append(
            format_message(time.time(), self.user_name, text)
        )

    def mark_read(self, channel_id: str) -> None:
        channel = self._require(channel_id, "mark_read")
        self.read_marks.append(channel_id)
        if channel.unread:
            idx = self.channels.index(channel)
            self.channels[idx] = ChannelInfo(
                channel.id, channel.name, channel.topic, channel.kind, unread=False
            )

    # ─── Fixtures ─────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InMemoryBackend":
        channels: list[ChannelInfo] = []
        for raw in data.get("channels", []):
            try:
                channels.append(ChannelInfo(
                    id=str(raw["id"]),
                    name=str(raw.get("name", raw["id"])),
                    topic=str(raw.get("topic", "")),
                    kind=ChannelKind.from_name(raw.get("kind", "channel")),
                    unread=bool(raw.get("unread", False)),
                ))
            except (KeyError, ValueError) as exc:
                raise BackendError("load_fixture", f"bad channel entry {raw!r}: {exc}") from exc
        history = {str(k): [str(m) for m in v] for k, v in data.get("messages", {}).items()}
        return cls(channels=channels, history=history, user_name=str(data.get("user", "me")))

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryBackend":
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BackendError("load_fixture", f"{path}: {exc}") from exc
        logger.debug("Loaded fixture %s", path)
        return cls.from_dict(data)
