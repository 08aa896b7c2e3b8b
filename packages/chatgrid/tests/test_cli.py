"""Tests for chatgrid.cli — snapshot and keys commands"""
import json

import pytest
from typer.testing import CliRunner

from chatgrid.cli import app

runner = CliRunner()

FIXTURE = {
    "channels": [
        {"id": "C1", "name": "general", "topic": "chit-chat"},
        {"id": "C2", "name": "random"},
    ],
    "messages": {
        "C1": ["[09:00] <bob> morning"],
        "C2": ["[10:00] <dave> lunch?"],
    },
}


@pytest.fixture
def fixture_path(tmp_path):
    path = tmp_path / "fixture.json"
    path.write_text(json.dumps(FIXTURE))
    return str(path)


def snapshot(*args):
    return runner.invoke(app, ["snapshot", *args])


class TestSnapshot:
    def test_first_frame(self, fixture_path):
        result = snapshot("--fixture", fixture_path, "--width", "40", "--height", "10")
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert len(lines) == 10
        assert lines[0].startswith("┌Channels┐┌general - chit-chat")
        assert "[09:00] <bob> morning" in lines[5]

    def test_keys_replayed(self, fixture_path):
        result = snapshot("-f", fixture_path, "-k", "j")
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0][20:27] == "┌random"
        assert "lunch?" in lines[19]

    def test_many_keys_do_not_block(self, fixture_path):
        keys = []
        for _ in range(30):
            keys += ["-k", "j", "-k", "k"]
        result = snapshot("-f", fixture_path, *keys)
        assert result.exit_code == 0, result.output

    def test_arrival_marks_unread(self, fixture_path):
        result = snapshot("-f", fixture_path, "--arrive", "C2:psst")
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[2][1:9] == "*#random"

    def test_bad_arrival(self, fixture_path):
        result = snapshot("-f", fixture_path, "--arrive", "no-separator")
        assert result.exit_code != 0

    def test_color_output(self, fixture_path):
        result = snapshot("-f", fixture_path, "--color")
        assert result.exit_code == 0, result.output
        assert "\x1b[" in result.output

    def test_missing_fixture(self, tmp_path):
        result = snapshot("-f", str(tmp_path / "missing.json"))
        assert result.exit_code == 1

    def test_bad_config(self, fixture_path, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"sidebar_width": 99}))
        result = snapshot("-f", fixture_path, "-c", str(config))
        assert result.exit_code == 1

    def test_debug_log(self, fixture_path, tmp_path):
        log = tmp_path / "debug.log"
        result = snapshot("-f", fixture_path, "--debug-log", str(log))
        assert result.exit_code == 0, result.output


class TestKeys:
    def test_lists_bindings(self):
        result = runner.invoke(app, ["keys"])
        assert result.exit_code == 0, result.output
        assert "Key Bindings" in result.output
        assert "channel-down" in result.output
