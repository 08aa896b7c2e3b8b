"""Tests for chatgrid.keybindings"""
from chatgrid.keybindings import (
    COMMAND_MODE,
    DEFAULT_KEYMAP,
    INSERT_MODE,
    KeybindingsManager,
    is_printable_key,
)


class TestDefaults:
    def test_command_mode(self):
        kb = KeybindingsManager()
        assert kb.action_for(COMMAND_MODE, "j") == "channel-down"
        assert kb.action_for(COMMAND_MODE, "down") == "channel-down"
        assert kb.action_for(COMMAND_MODE, "G") == "channel-bottom"
        assert kb.action_for(COMMAND_MODE, "i") == "mode-insert"
        assert kb.action_for(COMMAND_MODE, "ctrl+c") == "quit"

    def test_insert_mode(self):
        kb = KeybindingsManager()
        assert kb.action_for(INSERT_MODE, "escape") == "mode-command"
        assert kb.action_for(INSERT_MODE, "enter") == "send"
        assert kb.action_for(INSERT_MODE, "j") is None

    def test_unknown_mode(self):
        assert KeybindingsManager().action_for("visual", "j") is None

    def test_modes(self):
        assert KeybindingsManager().modes() == [COMMAND_MODE, INSERT_MODE]


class TestOverrides:
    def test_string_becomes_list(self):
        kb = KeybindingsManager({COMMAND_MODE: {"quit": "Q"}})
        assert kb.get_keys(COMMAND_MODE, "quit") == ["Q"]
        assert kb.action_for(COMMAND_MODE, "q") is None

    def test_other_actions_kept(self):
        kb = KeybindingsManager({COMMAND_MODE: {"quit": ["Q"]}})
        assert kb.get_keys(COMMAND_MODE, "channel-up") == ["k", "up"]

    def test_none_ignored(self):
        kb = KeybindingsManager({COMMAND_MODE: {"help": None}})
        assert kb.get_keys(COMMAND_MODE, "help") == ["?"]

    def test_set_config_rebuilds(self):
        kb = KeybindingsManager({COMMAND_MODE: {"quit": ["Q"]}})
        kb.set_config({})
        assert kb.get_keys(COMMAND_MODE, "quit") == ["q", "ctrl+c"]

    def test_defaults_not_mutated(self):
        kb = KeybindingsManager({COMMAND_MODE: {"quit": ["Q"]}})
        kb.as_dict()[COMMAND_MODE]["quit"].append("x")
        assert DEFAULT_KEYMAP[COMMAND_MODE]["quit"] == ["q", "ctrl+c"]
        assert kb.get_keys(COMMAND_MODE, "quit") == ["Q"]


class TestPrintable:
    def test_printable(self):
        assert is_printable_key("a")
        assert is_printable_key("中")
        assert not is_printable_key("enter")
        assert not is_printable_key("\x1b")
        assert not is_printable_key("")
