from .diagnostics import parse_diagnostics, Diagnostic, SourceLocation, Severity
from ..errors import DiagnosticsParseError
from typing import List, Optional


def try_parse_diagnostics(stderr: str) -> Optional[List[Diagnostic]]:
    """
    Returns the parsed diagnostics, or None when stderr is not in the JSON format.
    """
    try:
        return parse_diagnostics(stderr)
    except DiagnosticsParseError:
        return None
