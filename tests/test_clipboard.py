"""Tests for clipboard access."""

from __future__ import annotations

import subprocess
from typing import Iterable

import pytest

from jsonshape.clipboard import ClipboardCommands, SystemClipboard, detect_commands
from jsonshape.errors import ClipboardError

_COMMANDS = ClipboardCommands(read=("paste",), write=("copy",))


class _RecordingRunner:
    def __init__(self, output: str = "") -> None:
        self.output = output
        self.calls: list[tuple[list[str], str | None]] = []

    def __call__(self, args: Iterable[str], *, input_text: str | None = None) -> str:
        self.calls.append((list(args), input_text))
        return self.output


def test_detect_commands_for_macos() -> None:
    commands = detect_commands(platform="darwin")

    assert commands == ClipboardCommands(read=("pbpaste",), write=("pbcopy",))


def test_detect_commands_prefers_wayland() -> None:
    commands = detect_commands(
        platform="linux",
        which=lambda name: f"/usr/bin/{name}",
        environ={"WAYLAND_DISPLAY": "wayland-0"},
    )

    assert commands.write == ("wl-copy",)


def test_detect_commands_falls_back_to_xclip() -> None:
    commands = detect_commands(
        platform="linux",
        which=lambda name: "/usr/bin/xclip" if name == "xclip" else None,
        environ={},
    )

    assert commands.read[0] == "xclip"


def test_detect_commands_without_tools_raises() -> None:
    with pytest.raises(ClipboardError):
        detect_commands(platform="linux", which=lambda name: None, environ={})


def test_read_and_write_use_runner() -> None:
    runner = _RecordingRunner(output='{"a": 1}')
    clipboard = SystemClipboard(runner, commands=_COMMANDS)

    assert clipboard.read_text() == '{"a": 1}'
    clipboard.write_text("array[1]<number>")

    assert runner.calls == [(["paste"], None), (["copy"], "array[1]<number>")]


@pytest.mark.parametrize(
    "error",
    [
        FileNotFoundError(2, "missing", "paste"),
        subprocess.CalledProcessError(1, ["paste"]),
        PermissionError("denied"),
    ],
)
def test_runner_failures_become_clipboard_errors(error: Exception) -> None:
    def runner(args: Iterable[str], *, input_text: str | None = None) -> str:
        raise error

    clipboard = SystemClipboard(runner, commands=_COMMANDS)

    with pytest.raises(ClipboardError):
        clipboard.read_text()
