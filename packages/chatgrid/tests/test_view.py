"""Tests for chatgrid.view — ChatView entry points and frame rendering"""
import pytest

from chatgrid.backend import ChannelInfo, ChannelKind, InMemoryBackend
from chatgrid.cells import CellGrid, PaneBounds
from chatgrid.config import ViewConfig
from chatgrid.errors import BackendError
from chatgrid.events import QuitRequested, SelectionChanged, SubmitRequested, UnreadRaised
from chatgrid.view import ChatView, entry_label


def make_backend() -> InMemoryBackend:
    return InMemoryBackend(
        channels=[
            ChannelInfo("D1", "alice", kind=ChannelKind.IM, unread=True),
            ChannelInfo("G1", "ops", kind=ChannelKind.GROUP),
            ChannelInfo("C2", "random"),
            ChannelInfo("C1", "general", topic="chit-chat"),
        ],
        history={
            "C1": ["[09:00] <bob> morning", "[09:01] <carol> hi &amp; welcome"],
            "C2": ["[10:00] <dave> lunch?"],
        },
    )


def make_view(config=None, width=80, height=24):
    view = ChatView(make_backend(), width, height, config)
    view.refresh_channels()
    view.on_channel_switch("C1")
    return view


def record(view, event_type):
    events = []
    view.bus.on(event_type, events.append)
    return events


def press(view, *keys):
    for key in keys:
        view.on_key(key)


class TestEntryLabel:
    def test_prefix_per_kind(self):
        assert entry_label(ChannelInfo("C1", "general")) == " #general"
        assert entry_label(ChannelInfo("G1", "ops", kind=ChannelKind.GROUP)) == " ~ops"
        assert entry_label(ChannelInfo("D1", "alice", kind=ChannelKind.IM)) == " @alice"


class TestChannels:
    def test_sorted_by_kind_then_name(self):
        view = make_view()
        assert [e.id for e in view.channels.entries] == ["C1", "C2", "G1", "D1"]

    def test_unread_flag_carried_over(self):
        view = make_view()
        alice = view.channels.entries[3]
        assert alice.unread
        assert alice.display_label() == "*@alice"

    def test_refresh_failure_keeps_list(self):
        view = make_view()

        def boom():
            raise BackendError("list_channels", "offline")

        view.backend.list_channels = boom
        view.refresh_channels()
        assert len(view.channels.entries) == 4


class TestChannelSwitch:
    def test_loads_history_and_label(self):
        view = make_view()
        assert view.current_channel_id == "C1"
        assert view.chat.messages == ["[09:00] <bob> morning", "[09:01] <carol> hi & welcome"]
        assert view.chat.label == "general - chit-chat"

    def test_replaces_previous_history(self):
        view = make_view()
        view.on_channel_switch("C2")
        assert view.chat.messages == ["[10:00] <dave> lunch?"]
        assert view.chat.label == "random"

    def test_clears_unread(self):
        view = make_view()
        view.on_channel_switch("D1")
        assert not view.channels.entries[3].unread

    def test_unknown_channel_leaves_state(self):
        view = make_view()
        view.on_channel_switch("X9")
        assert view.current_channel_id == "C1"
        assert len(view.chat.messages) == 2

    def test_selection_follows_switch(self):
        view = make_view()
        events = record(view, SelectionChanged)
        view.on_channel_switch("G1")
        assert view.channels.selected_entry().id == "G1"
        assert view.channels.cursor_row == view.channels.bounds.top + 2
        assert events == []

    def test_failed_switch_keeps_selection(self):
        view = make_view()
        view.on_channel_switch("X9")
        assert view.channels.selected_index == 0

    def test_label_falls_back_to_id(self):
        view = ChatView(make_backend(), 80, 24)
        view.on_channel_switch("C2")
        assert view.chat.label == "C2"

    def test_fetch_count_from_config(self):
        view = make_view(ViewConfig(fetch_count=1))
        assert view.chat.messages == ["[09:01] <carol> hi & welcome"]

    def test_fetch_count_defaults_to_pane_height(self):
        backend = make_backend()
        backend.history["C1"] = [f"m{i}" for i in range(40)]
        view = ChatView(backend, 80, 24)
        view.on_channel_switch("C1")
        assert len(view.chat.messages) == view.chat.bounds.height == 19
        assert view.chat.messages[-1] == "m39"


class TestMessageArrival:
    def test_current_channel_appends(self):
        view = make_view()
        view.on_message_arrived("C1", "[09:05] <bob> again")
        assert view.chat.messages[-1] == "[09:05] <bob> again"

    def test_other_channel_marks_unread(self):
        view = make_view()
        events = record(view, UnreadRaised)
        view.on_message_arrived("C2", "psst")
        view.on_message_arrived("C2", "psst again")
        assert view.channels.entries[1].unread
        assert events == [UnreadRaised("C2")]
        assert "psst" not in view.chat.messages


class TestKeys:
    def test_channel_navigation_emits_selection(self):
        view = make_view()
        events = record(view, SelectionChanged)
        press(view, "j", "down", "k")
        assert [e.channel_id for e in events] == ["C2", "G1", "C2"]
        assert view.channels.selected_index == 1

    def test_top_and_bottom(self):
        view = make_view()
        press(view, "G")
        assert view.channels.selected_index == 3
        press(view, "g")
        assert view.channels.selected_index == 0

    def test_mode_switch_updates_indicator(self):
        view = make_view()
        press(view, "i")
        assert view.mode == "insert"
        assert view.mode_indicator.text == "INSERT"
        press(view, "escape")
        assert view.mode == "command"
        assert view.mode_indicator.text == "COMMAND"

    def test_typing_in_insert_mode(self):
        view = make_view()
        press(view, "i", "h", "i", "space", "j", "k", "left", "backspace")
        assert view.input.text == "hi k"

    def test_printable_keys_ignored_in_command_mode(self):
        view = make_view()
        press(view, "x", "y")
        assert view.input.is_empty()

    def test_send_requests_submit_without_clearing(self):
        view = make_view()
        events = record(view, SubmitRequested)
        press(view, "i", "h", "i", "enter")
        assert events == [SubmitRequested("C1", "hi")]
        assert view.input.text == "hi"
        view.confirm_submit()
        assert view.input.is_empty()

    def test_send_empty_input_is_noop(self):
        view = make_view()
        events = record(view, SubmitRequested)
        press(view, "i", "enter")
        assert events == []

    def test_quit(self):
        view = make_view()
        events = record(view, QuitRequested)
        press(view, "q")
        assert events == [QuitRequested()]

    def test_help(self):
        view = make_view()
        press(view, "?")
        assert "KEY BINDINGS:" in view.chat.messages

    def test_chat_scroll_keys(self):
        backend = make_backend()
        backend.history["C1"] = [f"m{i}" for i in range(19)]
        view = ChatView(backend, 80, 24, ViewConfig(page_step=5))
        view.on_channel_switch("C1")
        for i in range(10):
            view.on_message_arrived("C1", f"late{i}")
        press(view, "pageUp")
        assert view.chat.offset == 5
        press(view, "ctrl+b")
        assert view.chat.offset == 10
        press(view, "pageDown")
        assert view.chat.offset == 5

    def test_custom_keymap(self):
        view = make_view(ViewConfig(keymap={"command": {"quit": ["Q"]}}))
        events = record(view, QuitRequested)
        press(view, "q")
        assert events == []
        press(view, "Q")
        assert events == [QuitRequested()]


class TestResize:
    def test_panes_follow_layout(self):
        view = make_view()
        view.on_resize(40, 10)
        assert view.channels.bounds == PaneBounds(1, 1, 8, 5)
        assert view.chat.bounds == PaneBounds(11, 1, 28, 5)
        assert view.mode_indicator.bounds == PaneBounds(1, 8, 8, 1)
        assert view.input.bounds == PaneBounds(11, 8, 28, 1)

    def test_render_resizes_grid(self):
        view = make_view()
        view.on_resize(40, 10)
        grid = CellGrid(80, 24)
        view.render(grid)
        assert (grid.width, grid.height) == (40, 10)

    @pytest.mark.parametrize("size", [(0, 0), (1, 1), (3, 2), (12, 4)])
    def test_tiny_screens_render(self, size):
        view = make_view()
        view.on_resize(*size)
        grid = CellGrid(*size)
        view.render(grid)
        assert (grid.width, grid.height) == size


class TestRender:
    @pytest.fixture
    def lines(self):
        view = make_view()
        grid = CellGrid(80, 24)
        view.render(grid)
        return grid.to_text_lines()

    def test_pane_geometry(self):
        view = make_view()
        assert view.channels.bounds == PaneBounds(1, 1, 18, 19)
        assert view.chat.bounds == PaneBounds(21, 1, 58, 19)
        assert view.mode_indicator.bounds == PaneBounds(1, 22, 18, 1)
        assert view.input.bounds == PaneBounds(21, 22, 58, 1)

    def test_borders_and_labels(self, lines):
        assert lines[0].startswith("┌Channels─")
        assert lines[0][20:40] == "┌general - chit-chat"
        assert lines[0][79] == "┐"
        assert lines[20][0] == "└"
        assert lines[21][0] == "┌"
        assert lines[23][79] == "┘"

    def test_channel_rows(self, lines):
        assert lines[1][1:10] == " #general"
        assert lines[2][1:9] == " #random"
        assert lines[3][1:6] == " ~ops"
        assert lines[4][1:8] == "*@alice"

    def test_chat_rows_anchor_to_bottom(self, lines):
        assert lines[19][21:49] == "[09:01] <carol> hi & welcome"
        assert lines[18][21:42] == "[09:00] <bob> morning"
        assert lines[17][21:79] == " " * 58

    def test_mode_centered(self, lines):
        assert lines[22][1:19] == "      COMMAND     "

    def test_selected_row_inverted(self):
        view = make_view()
        grid = CellGrid(80, 24)
        view.render(grid)
        theme = view.theme
        assert grid.get(1, 1).bg is theme.fg
        assert grid.get(1, 2).bg is theme.bg

    def test_render_idempotent(self):
        view = make_view()
        grid = CellGrid(80, 24)
        view.render(grid)
        first = grid.snapshot()
        view.render(grid)
        assert grid.snapshot() == first
