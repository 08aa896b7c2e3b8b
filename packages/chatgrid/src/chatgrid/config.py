"""
View configuration.

Settings are read from a JSON file. The path is resolved in this order:
explicit argument, $CHATGRID_CONFIG, ~/.config/chatgrid/config.json.
A missing file yields the defaults; a present but invalid file raises
ConfigError.

Example::

    {
      "sidebar_width": 3,
      "page_step": 10,
      "unread_marker": "*",
      "theme": {"fg": "white", "bg": "default", "label": "cyan"},
      "keymap": {"command": {"quit": ["q", "ctrl+q"]}}
    }
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from .cells import Color, Theme
from .errors import ConfigError
from .keybindings import DEFAULT_KEYMAP
from .utils import display_width

logger = logging.getLogger(__name__)

APP_NAME: str = "chatgrid"
ENV_CONFIG_PATH: str = "CHATGRID_CONFIG"
GRID_COLUMNS: int = 12


def get_default_config_path() -> str:
    """Get the config file path (e.g., ~/.config/chatgrid/config.json)."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return os.path.expanduser(env_path)
    return os.path.join(os.path.expanduser("~"), ".config", APP_NAME, "config.json")


# ─── Settings dataclasses ─────────────────────────────────────────────────────

@dataclass
class ThemeConfig:
    fg: str = "white"
    bg: str = "default"
    border: str = "white"
    label: str = "cyan"

    def to_theme(self) -> Theme:
        try:
            return Theme(
                fg=Color.from_name(self.fg),
                bg=Color.from_name(self.bg),
                border=Color.from_name(self.border),
                label=Color.from_name(self.label),
            )
        except (ValueError, AttributeError) as exc:
            raise ConfigError(f"theme: {exc}") from exc


@dataclass
class ViewConfig:
    sidebar_width: int = 3          # twelfths of the screen width
    input_height: int = 3           # bottom row, borders included
    page_step: int = 10             # chat scroll step, in wrapped lines
    unread_marker: str = "*"
    bell: bool = True
    fetch_count: int | None = None  # None: as many messages as the chat pane shows
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    keymap: dict[str, dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def main_width(self) -> int:
        return GRID_COLUMNS - self.sidebar_width

    def validate(self) -> "ViewConfig":
        if not 1 <= self.sidebar_width < GRID_COLUMNS:
            raise ConfigError(f"sidebar_width must be between 1 and {GRID_COLUMNS - 1}, got {self.sidebar_width}")
        if self.input_height < 3:
            raise ConfigError(f"input_height must be at least 3, got {self.input_height}")
        if self.page_step < 1:
            raise ConfigError(f"page_step must be positive, got {self.page_step}")
        if display_width(self.unread_marker) != 1:
            raise ConfigError(f"unread_marker must be a single column glyph, got {self.unread_marker!r}")
        if self.fetch_count is not None and self.fetch_count < 0:
            raise ConfigError(f"fetch_count must not be negative, got {self.fetch_count}")
        for mode, actions in self.keymap.items():
            if mode not in DEFAULT_KEYMAP:
                raise ConfigError(f"keymap: unknown mode {mode!r}")
            if not isinstance(actions, dict):
                raise ConfigError(f"keymap.{mode} must be an object")
            for action, keys in actions.items():
                if keys is None or isinstance(keys, str):
                    continue
                if not isinstance(keys, (list, tuple)) or not all(isinstance(k, str) for k in keys):
                    raise ConfigError(f"keymap.{mode}.{action} must be a key or a list of keys")
        self.theme.to_theme()
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ViewConfig":
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")

        values = dict(data)
        theme = values.pop("theme", None) or {}
        if not isinstance(theme, dict):
            raise ConfigError("theme must be an object")
        try:
            theme_cfg = ThemeConfig(**theme)
        except TypeError as exc:
            raise ConfigError(f"theme: {exc}") from exc

        for name in ("sidebar_width", "input_height", "page_step"):
            if name in values and (not isinstance(values[name], int) or isinstance(values[name], bool)):
                raise ConfigError(f"{name} must be an integer")
        fetch_count = values.get("fetch_count")
        if fetch_count is not None and (not isinstance(fetch_count, int) or isinstance(fetch_count, bool)):
            raise ConfigError("fetch_count must be an integer or null")
        if "bell" in values and not isinstance(values["bell"], bool):
            raise ConfigError("bell must be true or false")
        if "unread_marker" in values and not isinstance(values["unread_marker"], str):
            raise ConfigError("unread_marker must be a string")
        if "keymap" in values and not isinstance(values["keymap"], dict):
            raise ConfigError("keymap must be an object")

        return cls(theme=theme_cfg, **values).validate()


def load_config(path: str | Path | None = None) -> ViewConfig:
    """Load the view configuration, falling back to defaults when no file exists."""
    resolved = Path(path) if path is not None else Path(get_default_config_path())
    if not resolved.exists():
        if path is not None:
            raise ConfigError(f"config file not found: {resolved}")
        logger.debug("No config at %s, using defaults", resolved)
        return ViewConfig()

    try:
        with open(resolved, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"not able to load config file ({resolved}): {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"config file must hold a JSON object: {resolved}")
    logger.debug("Loaded config from %s", resolved)
    return ViewConfig.from_dict(data)
