import sys
import time
from typing import List, Optional, TextIO

from rich.console import Console

from .compiler.driver import CompilerDriver, CompilerResult
from .parsing import try_parse_diagnostics
from .ui.renderer import DiagnosticRenderer
from .utils.config import ConfigManager
from .utils.highlighter import ExcerptPrinter, PlainExcerptPrinter, SyntaxExcerptPrinter


def build_excerpt_printer(console: Console, config: ConfigManager) -> ExcerptPrinter:
    if config.get("highlight", True):
        return SyntaxExcerptPrinter(console, theme=config.get("theme", "monokai"))
    return PlainExcerptPrinter(console)


class DiagnosticEngine:
    """
    Runs the compiler once and decides between the two outcomes:
    pretty-printed JSON diagnostics, or the raw streams passed through untouched.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        console: Optional[Console] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.config = config_manager if config_manager else ConfigManager()
        self.driver = CompilerDriver(self.config)
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.console = console if console is not None else Console(file=self.stdout)
        self.renderer = DiagnosticRenderer(self.console, build_excerpt_printer(self.console, self.config))
        self.log_file: Optional[str] = self.config.get("log_file")

    def _log(self, msg: str):
        if not self.log_file:
            return
        try:
            with open(self.log_file, "a") as f:
                f.write(f"[{time.time()}] {msg}\n")
        except OSError:
            pass

    def dispatch(self, result: CompilerResult) -> bool:
        """
        Returns True if stderr was structured and rendered, False on raw fallback.
        The compiler's stdout is dropped on the structured path.
        """
        diagnostics = try_parse_diagnostics(result.stderr)

        if diagnostics is None:
            self._log("Fallback: stderr is not JSON diagnostics")
            self.stderr.write(result.stderr)
            self.stdout.write(result.stdout)
            self.stderr.flush()
            self.stdout.flush()
            return False

        self._log(f"Rendering {len(diagnostics)} diagnostics")
        for diagnostic in diagnostics:
            self.renderer.render(diagnostic)
        return True

    def run(self, args: List[str]) -> int:
        """
        Compile with the forwarded arguments and print the result.
        Returns the exit status the tool should use.
        """
        self._log(f"Running {self.driver.build_command(args)}")
        result = self.driver.run(args)
        self._log(f"Compiler exited with {result.returncode}")

        self.dispatch(result)

        if not self.config.get("propagate_exit_code", True):
            return 0
        if result.returncode < 0:
            # Killed by a signal: report it the way a shell would
            return 128 - result.returncode
        return result.returncode
