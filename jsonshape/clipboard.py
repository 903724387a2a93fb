"""System clipboard access through the platform's clipboard commands."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from .errors import ClipboardError
from .logging import get_logger

logger = get_logger("clipboard")


@dataclass(frozen=True)
class ClipboardCommands:
    """Command lines used to read from and write to the clipboard."""

    read: Sequence[str]
    write: Sequence[str]


def detect_commands(
    *,
    platform: str | None = None,
    which: Callable[[str], Optional[str]] = shutil.which,
    environ: dict[str, str] | None = None,
) -> ClipboardCommands:
    """Pick clipboard commands for the running platform."""
    platform = platform or sys.platform
    environ = dict(os.environ) if environ is None else environ
    if platform == "darwin":
        return ClipboardCommands(read=("pbpaste",), write=("pbcopy",))
    if platform.startswith("win"):
        return ClipboardCommands(
            read=("powershell", "-NoProfile", "-Command", "Get-Clipboard"),
            write=("clip",),
        )
    if environ.get("WAYLAND_DISPLAY") and which("wl-copy"):
        return ClipboardCommands(read=("wl-paste", "--no-newline"), write=("wl-copy",))
    if which("xclip"):
        return ClipboardCommands(
            read=("xclip", "-selection", "clipboard", "-o"),
            write=("xclip", "-selection", "clipboard", "-i"),
        )
    if which("xsel"):
        return ClipboardCommands(
            read=("xsel", "--clipboard", "--output"),
            write=("xsel", "--clipboard", "--input"),
        )
    raise ClipboardError("No clipboard command found (install xclip, xsel or wl-clipboard)")


class SystemClipboard:
    """Reads and writes clipboard text by shelling out to clipboard utilities."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        commands: ClipboardCommands | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self._commands = commands

    def read_text(self) -> str:
        commands = self._resolve()
        text = self._run(commands.read)
        logger.debug("Read %d characters from the clipboard", len(text))
        return text

    def write_text(self, text: str) -> None:
        commands = self._resolve()
        self._run(commands.write, input_text=text)
        logger.debug("Wrote %d characters to the clipboard", len(text))

    # ------------------------------------------------------------------
    # Internals

    def _resolve(self) -> ClipboardCommands:
        if self._commands is None:
            self._commands = detect_commands()
        return self._commands

    def _run(self, args: Iterable[str], *, input_text: str | None = None) -> str:
        try:
            return self._runner(list(args), input_text=input_text)
        except FileNotFoundError as exc:
            raise ClipboardError(f"Clipboard command not available: {exc.filename or exc}") from exc
        except subprocess.CalledProcessError as exc:
            raise ClipboardError(f"Clipboard command failed with exit status {exc.returncode}") from exc
        except OSError as exc:
            raise ClipboardError(f"Clipboard access failed: {exc}") from exc

    @staticmethod
    def _default_runner(args: Iterable[str], *, input_text: str | None = None) -> str:
        completed = subprocess.run(
            list(args),
            input=input_text,
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["ClipboardCommands", "SystemClipboard", "detect_commands"]
