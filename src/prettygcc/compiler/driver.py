import os
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..errors import CompilerLaunchError, CompilerOutputError
from ..utils.config import ConfigManager, COMPILER_ENV_VAR


@dataclass(frozen=True)
class CompilerResult:
    stdout: str
    stderr: str
    returncode: int


class CompilerDriver:
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        # Use provided config or load default
        self.config = config_manager if config_manager else ConfigManager()

        self.compiler = os.environ.get(COMPILER_ENV_VAR) or self.config.get("compiler", "g++")
        self.diagnostics_flag = self.config.get("diagnostics_flag", "-fdiagnostics-format=json")

    def build_command(self, args: List[str]) -> List[str]:
        """
        compiler + user arguments (verbatim, in order) + the JSON diagnostics flag.
        """
        return [self.compiler, *args, self.diagnostics_flag]

    def run(self, args: List[str]) -> CompilerResult:
        """
        Runs the compiler to completion and captures both streams as text.
        """
        command = self.build_command(args)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False
            )
        except UnicodeDecodeError as e:
            raise CompilerOutputError(f"{self.compiler} produced non-UTF-8 output: {e}") from e
        except OSError as e:
            raise CompilerLaunchError(f"Unable to start {self.compiler}: {e}") from e

        return CompilerResult(
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )
