"""ANSI color palette and one-time terminal setup."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from rich.console import Console

logger = logging.getLogger(__name__)

_STD_OUTPUT_HANDLE = -11
# ENABLE_PROCESSED_OUTPUT | ENABLE_WRAP_AT_EOL_OUTPUT | ENABLE_VIRTUAL_TERMINAL_PROCESSING
_VT_CONSOLE_MODE = 7


@dataclass(frozen=True)
class Palette:
    """Escape sequences keyed by semantic color name.

    Either every field holds its ANSI code or every field is empty.
    """

    cyan: str
    green: str
    red: str
    white: str
    grey: str

    @classmethod
    def ansi(cls) -> Palette:
        return cls(
            cyan="\033[0;96m",
            green="\033[0;92m",
            red="\033[0;91m",
            white="\033[0;97m",
            grey="\033[1;30m",
        )

    @classmethod
    def plain(cls) -> Palette:
        return cls(cyan="", green="", red="", white="", grey="")

    @classmethod
    def detect(cls, console: Console) -> Palette:
        """Pick the palette for *console*, enabling VT output on Windows consoles."""
        if not console.is_terminal:
            return cls.plain()
        if "windows" in os.environ.get("OS", "").lower():
            enable_vt_mode()
        return cls.ansi()


def enable_vt_mode() -> bool:
    """Ask the Windows console to interpret ANSI sequences. Best effort."""
    try:
        import ctypes

        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        handle = kernel32.GetStdHandle(_STD_OUTPUT_HANDLE)
        if not kernel32.SetConsoleMode(handle, _VT_CONSOLE_MODE):
            raise OSError("SetConsoleMode failed")
    except (AttributeError, ImportError, OSError) as exc:
        logger.warning("Could not enable ANSI output on %s: %s", sys.platform, exc)
        return False
    logger.debug("Enabled virtual terminal processing")
    return True
