class PrettyGccError(Exception):
    """Base class for every error the wrapper reports itself."""


class CompilerLaunchError(PrettyGccError):
    """The compiler process could not be started."""


class CompilerOutputError(PrettyGccError):
    """The compiler wrote something that is not UTF-8 text."""


class DiagnosticsParseError(PrettyGccError, ValueError):
    """stderr is not a JSON diagnostics array. Handled by falling back to raw output."""


class SourceUnavailableError(PrettyGccError):
    """A file referenced by a diagnostic could not be read for the excerpt."""
