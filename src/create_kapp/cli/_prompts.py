"""Line-based interactive prompts with ANSI colors."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console

from create_kapp.cli._palette import Palette
from create_kapp.cli._types import PromptKind

Validator = Callable[[str], bool]

# Cursor to start of previous line, then clear to end of line.
_ERASE_LINE = "\033[F\033[K"


def non_empty(value: str) -> bool:
    return len(value) > 0


class PromptEngine:
    """Asks questions on a terminal and re-prompts until the answer is valid."""

    def __init__(self, console: Console | None = None, palette: Palette | None = None) -> None:
        self.console = console if console is not None else Console()
        self.palette = palette if palette is not None else Palette.detect(self.console)

    def _write(self, text: str) -> None:
        self.console.file.write(text)
        self.console.file.flush()

    def print(self, text: str, end: str = " ") -> None:
        """Write *text* in the base color, ending with *end* instead of a newline."""
        self._write(f"{self.palette.white}{text}{end}")

    def error(self, text: str, end: str = "\n") -> None:
        self.print(f"{self.palette.red}× {text}{self.palette.white}", end=end)

    def recap(self, question: str, answer: str) -> None:
        p = self.palette
        self._write(f"{p.green}✓{p.white} {question} {p.grey}»{p.white} {answer}\n")

    def _read(self, question: str) -> str:
        self.print(f"{self.palette.cyan}? {self.palette.white}{question}")
        answer = input().strip()
        self._write(_ERASE_LINE)
        return answer

    def ask(
        self,
        kind: PromptKind,
        question: str,
        validator: Validator | None = None,
        recap: bool = True,
    ) -> str:
        """Ask *question* until a valid answer is given and return it.

        ``INPUT`` accepts any line that *validator* approves (any line at all
        when no validator is given). ``CONFIRM`` accepts ``y`` or ``n`` in
        either case and returns it lower-cased.
        """
        if kind == PromptKind.INPUT:
            while True:
                answer = self._read(question)
                if validator is None or validator(answer):
                    break
                # Shares the line with the next question so one erase clears both.
                self.error("Invalid input. Try again.", end=" ")
        elif kind == PromptKind.CONFIRM:
            while True:
                answer = self._read(f"{question} {self.palette.grey}(y/n)").lower()
                if answer in ("y", "n"):
                    break
                self.error("Please answer with 'y' or 'n'.", end=" ")
        else:
            raise ValueError(f"Unknown prompt kind: {kind!r}")

        if recap:
            self.recap(question, answer)
        return answer
