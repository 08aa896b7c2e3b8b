"""
Mode-scoped key bindings.

Keys are plain key ids as delivered by the terminal driver: a printable
character ("j", "G", "?"), a named key ("up", "enter", "pageUp") or a
modifier combination ("ctrl+c").

Provides ChatAction, DEFAULT_KEYMAP and KeybindingsManager.
"""
from __future__ import annotations

from typing import Literal, Mapping, Sequence

COMMAND_MODE = "command"
INSERT_MODE = "insert"

ChatAction = Literal[
    # Modes
    "mode-insert",
    "mode-command",
    # Channel pane
    "channel-up",
    "channel-down",
    "channel-top",
    "channel-bottom",
    # Chat pane
    "chat-up",
    "chat-down",
    # Input pane
    "cursor-left",
    "cursor-right",
    "backspace",
    "delete",
    "send",
    "space",
    # Application
    "help",
    "quit",
]

# ─────────────────────────────────────────────────────────────────────────────
# Default keymap
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_KEYMAP: dict[str, dict[str, list[str]]] = {
    COMMAND_MODE: {
        "mode-insert":    ["i"],
        "channel-up":     ["k", "up"],
        "channel-down":   ["j", "down"],
        "channel-top":    ["g", "home"],
        "channel-bottom": ["G", "end"],
        "chat-up":        ["pageUp", "ctrl+b"],
        "chat-down":      ["pageDown", "ctrl+f"],
        "help":           ["?"],
        "quit":           ["q", "ctrl+c"],
    },
    INSERT_MODE: {
        "mode-command":   ["escape"],
        "cursor-left":    ["left"],
        "cursor-right":   ["right"],
        "backspace":      ["backspace"],
        "delete":         ["delete"],
        "send":           ["enter"],
        "chat-up":        ["pageUp"],
        "chat-down":      ["pageDown"],
        "space":          ["space"],
    },
}

KeymapConfig = Mapping[str, Mapping[str, "str | Sequence[str]"]]


def is_printable_key(key: str) -> bool:
    """A single printable character (as opposed to a named key)."""
    return len(key) == 1 and key.isprintable()


class KeybindingsManager:
    """Resolves key ids to actions for the current mode."""

    def __init__(self, config: KeymapConfig | None = None) -> None:
        self._action_to_keys: dict[str, dict[str, list[str]]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeymapConfig) -> None:
        self._action_to_keys.clear()
        for mode, actions in DEFAULT_KEYMAP.items():
            self._action_to_keys[mode] = {a: list(k) for a, k in actions.items()}
        for mode, actions in config.items():
            target = self._action_to_keys.setdefault(mode, {})
            for action, keys in actions.items():
                if keys is None:
                    continue
                target[action] = [keys] if isinstance(keys, str) else list(keys)

    def action_for(self, mode: str, key: str) -> str | None:
        for action, keys in self._action_to_keys.get(mode, {}).items():
            if key in keys:
                return action
        return None

    def get_keys(self, mode: str, action: str) -> list[str]:
        return self._action_to_keys.get(mode, {}).get(action, [])

    def modes(self) -> list[str]:
        return list(self._action_to_keys)

    def as_dict(self) -> dict[str, dict[str, list[str]]]:
        return {m: {a: list(k) for a, k in acts.items()} for m, acts in self._action_to_keys.items()}

    def set_config(self, config: KeymapConfig) -> None:
        self._build_maps(config)
