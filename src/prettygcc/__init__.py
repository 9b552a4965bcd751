"""
prettygcc: run g++ with JSON diagnostics and print them with highlighted source context.
"""
from .parsing import parse_diagnostics, Diagnostic, SourceLocation, Severity
from .engine import DiagnosticEngine

__version__ = "0.1.0"
