"""
Diagnostic Renderer
===================
Turns one parsed Diagnostic into terminal output:

    [Error] expected ';' before '}' token
     File a.c line 5 col 3:
      2 │ ...
    ❱ 5 │ ...          <- reported line, emphasized
      8 │ ...

Source excerpts are delegated to an ExcerptPrinter so the highlighting
backend can be swapped without touching this file.
"""

from __future__ import annotations

from typing import Dict

from rich.console import Console
from rich.text import Text

from ..parsing.diagnostics import Diagnostic, Severity, SourceLocation
from ..utils.highlighter import ExcerptPrinter, excerpt_window

SEVERITY_STYLES: Dict[Severity, str] = {
    Severity.NOTE: "bold cyan",
    Severity.WARNING: "bold yellow",
    Severity.ERROR: "bold red",
}


class DiagnosticRenderer:
    def __init__(self, console: Console, excerpts: ExcerptPrinter):
        self.console = console
        self.excerpts = excerpts

    # ── Public API ──────────────────────────────────────────

    def render(self, diagnostic: Diagnostic) -> None:
        """
        Print the severity tag and message, then one excerpt per location.

        Raises SourceUnavailableError if a referenced file cannot be read;
        nothing after that location is printed.
        """
        self.console.print(self.format_header(diagnostic))

        for loc in diagnostic.locations:
            self.console.print(self.format_location(loc))
            self.excerpts.render(loc.file, excerpt_window(loc.line), loc.line)

        self.console.print()

    # ── Formatting ──────────────────────────────────────────

    @staticmethod
    def format_header(diagnostic: Diagnostic) -> Text:
        header = Text("[")
        header.append(diagnostic.severity.label, style=SEVERITY_STYLES[diagnostic.severity])
        header.append("] ")
        header.append(diagnostic.message)
        return header

    @staticmethod
    def format_location(loc: SourceLocation) -> Text:
        line = Text(" File ")
        line.append(loc.file, style="green")
        line.append(" line ")
        line.append(str(loc.line), style="cyan")
        line.append(" col ")
        line.append(str(loc.column), style="cyan")
        line.append(":")
        return line
