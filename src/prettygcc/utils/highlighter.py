"""
Source excerpt printers used by the diagnostic renderer.

The renderer only needs one thing from a highlighter: "print lines A..B of
this file with line numbers, and make line N stand out". Anything that
satisfies ExcerptPrinter can be swapped in.
"""

from __future__ import annotations

from typing import List, Protocol, Tuple

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from ..errors import SourceUnavailableError

CONTEXT_LINES = 3


def excerpt_window(line: int) -> Tuple[int, int]:
    """
    Inclusive, 1-based range of lines shown around a diagnostic line.
    Both ends clamp at 0 (meaning "from the top of the file").
    """
    return max(0, line - CONTEXT_LINES), max(0, line + CONTEXT_LINES)


def read_source(path: str) -> str:
    # Non-UTF-8 bytes (Latin-1 comments, ...) still get an excerpt
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceUnavailableError(f"Unable to read source file '{path}': {e}") from e


class ExcerptPrinter(Protocol):
    def render(self, path: str, line_range: Tuple[int, int], highlight_line: int) -> None:
        ...


class SyntaxExcerptPrinter:
    """
    Full syntax highlighting via Rich (Pygments lexers, guessed from the file name).
    """

    def __init__(self, console: Console, theme: str = "monokai"):
        self.console = console
        self.theme = theme

    def render(self, path: str, line_range: Tuple[int, int], highlight_line: int) -> None:
        code = read_source(path)
        # Rich numbers the empty string after a final newline as an extra line
        if code.endswith("\n"):
            code = code[:-1]
        syntax = Syntax(
            code,
            Syntax.guess_lexer(path, code),
            theme=self.theme,
            line_numbers=True,
            line_range=line_range,
            highlight_lines={highlight_line},
        )
        self.console.print(syntax)


class PlainExcerptPrinter:
    """
    No lexer: numbered lines, the reported one marked with ► and bold.
    """

    def __init__(self, console: Console):
        self.console = console

    def render(self, path: str, line_range: Tuple[int, int], highlight_line: int) -> None:
        lines: List[str] = read_source(path).splitlines()
        start, end = line_range
        first = max(1, start)
        last = min(end, len(lines))

        excerpt = Text()
        for num in range(first, last + 1):
            code = lines[num - 1]
            if num == highlight_line:
                excerpt.append(f"► {num:>4} │ ", style="bold yellow")
                excerpt.append(code, style="bold")
            else:
                excerpt.append(f"  {num:>4} │ ", style="dim")
                excerpt.append(code, style="dim")
            if num < last:
                excerpt.append("\n")

        if excerpt:
            self.console.print(excerpt)
