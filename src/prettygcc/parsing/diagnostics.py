import json
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from ..errors import DiagnosticsParseError


class Severity(str, Enum):
    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int    # 1-based
    column: int  # 1-based


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    locations: Tuple[SourceLocation, ...] = ()


def _is_int(value) -> bool:
    # json maps true/false to bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_location(entry) -> SourceLocation:
    if not isinstance(entry, dict) or not isinstance(entry.get("caret"), dict):
        raise DiagnosticsParseError(f"Location without a caret: {entry!r}")

    caret = entry["caret"]
    file, line, column = caret.get("file"), caret.get("line"), caret.get("column")
    if not isinstance(file, str) or not _is_int(line) or not _is_int(column):
        raise DiagnosticsParseError(f"Malformed caret: {caret!r}")

    return SourceLocation(file=file, line=line, column=column)


def _parse_entry(entry) -> Diagnostic:
    if not isinstance(entry, dict):
        raise DiagnosticsParseError(f"Diagnostic is not an object: {entry!r}")

    try:
        severity = Severity(entry.get("kind"))
    except ValueError:
        raise DiagnosticsParseError(f"Unknown diagnostic kind: {entry.get('kind')!r}") from None

    message = entry.get("message")
    if not isinstance(message, str):
        raise DiagnosticsParseError(f"Diagnostic message is not a string: {message!r}")

    locations = entry.get("locations")
    if not isinstance(locations, list):
        raise DiagnosticsParseError(f"Diagnostic locations is not an array: {locations!r}")

    return Diagnostic(
        severity=severity,
        message=message,
        locations=tuple(_parse_location(loc) for loc in locations),
    )


def parse_diagnostics(stderr: str) -> List[Diagnostic]:
    """
    Parses GCC's JSON diagnostics (-fdiagnostics-format=json) into structured objects.
    Example: [{"kind": "error", "message": "expected ';'", "locations": [{"caret": {...}}]}]

    The parse is all-or-nothing: anything that does not match the format
    (plain-text compiler output, an unknown kind, a truncated array) raises
    DiagnosticsParseError instead of returning a partial list.
    """
    try:
        entries = json.loads(stderr)
    except json.JSONDecodeError as e:
        raise DiagnosticsParseError(f"Not JSON diagnostics: {e}") from e

    if not isinstance(entries, list):
        raise DiagnosticsParseError("Top-level diagnostics value is not an array")

    return [_parse_entry(entry) for entry in entries]
