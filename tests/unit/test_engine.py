"""
Unit tests for DiagnosticEngine: structured vs. fallback dispatch,
exit status and the debug log. All compilation is mocked.
"""
import io
import json
import pytest
from unittest.mock import patch, MagicMock
from rich.console import Console

from prettygcc.engine import DiagnosticEngine, build_excerpt_printer
from prettygcc.compiler.driver import CompilerResult
from prettygcc.utils.config import DEFAULT_CONFIG
from prettygcc.utils.highlighter import SyntaxExcerptPrinter, PlainExcerptPrinter
from prettygcc.errors import CompilerLaunchError, SourceUnavailableError


def _config(**overrides):
    values = DEFAULT_CONFIG.copy()
    values.update(overrides)
    mgr = MagicMock()
    mgr.get.side_effect = lambda key, default=None: values.get(key, default)
    return mgr


def _engine(**overrides):
    out, err = io.StringIO(), io.StringIO()
    console = Console(file=out, width=200, color_system=None)
    engine = DiagnosticEngine(_config(**overrides), console=console, stdout=out, stderr=err)
    return engine, out, err


def _write_source(tmp_path, name="a.c", count=20):
    path = tmp_path / name
    path.write_text("".join(f"int value_{i:02d} = {i};\n" for i in range(1, count + 1)))
    return str(path)


class TestDispatchStructured:

    def test_renders_each_record_in_order(self):
        engine, out, err = _engine()
        stderr = json.dumps([
            {"kind": "warning", "message": "first", "locations": []},
            {"kind": "note", "message": "second", "locations": []},
        ])
        assert engine.dispatch(CompilerResult("", stderr, 1)) is True
        assert out.getvalue() == "[Warning] first\n\n[Note] second\n\n"
        assert err.getvalue() == ""

    def test_compiler_stdout_discarded(self):
        engine, out, err = _engine()
        assert engine.dispatch(CompilerResult("compiler chatter", "[]", 0)) is True
        assert out.getvalue() == ""
        assert err.getvalue() == ""

    def test_error_scenario(self, tmp_path):
        path = _write_source(tmp_path)
        engine, out, _ = _engine(highlight=False)
        stderr = json.dumps([{
            "kind": "error",
            "message": "expected ';'",
            "locations": [{"caret": {"file": path, "line": 5, "column": 3}}],
        }])
        engine.dispatch(CompilerResult("", stderr, 1))
        lines = out.getvalue().splitlines()
        assert lines[0] == "[Error] expected ';'"
        assert lines[1] == f" File {path} line 5 col 3:"
        assert len(lines[2:9]) == 7
        assert lines[2:9][3].startswith("►")

    def test_unreadable_source_propagates(self, tmp_path):
        engine, _, _ = _engine()
        stderr = json.dumps([{
            "kind": "error",
            "message": "x",
            "locations": [{"caret": {"file": str(tmp_path / "gone.c"), "line": 1, "column": 1}}],
        }])
        with pytest.raises(SourceUnavailableError):
            engine.dispatch(CompilerResult("", stderr, 1))


class TestDispatchFallback:

    def test_plain_text_passed_through(self):
        engine, out, err = _engine()
        raw = "a.c:5:3: error: expected ';'\n"
        assert engine.dispatch(CompilerResult("", raw, 1)) is False
        assert err.getvalue() == raw
        assert out.getvalue() == ""

    def test_streams_keep_their_separation(self):
        engine, out, err = _engine()
        assert engine.dispatch(CompilerResult("to stdout\n", "to stderr\n", 0)) is False
        assert out.getvalue() == "to stdout\n"
        assert err.getvalue() == "to stderr\n"

    def test_byte_for_byte_on_malformed_json(self):
        engine, _, err = _engine()
        raw = '[{"kind":"remark","message":"x","locations":[]}]  \r\n\ttrailing'
        engine.dispatch(CompilerResult("", raw, 0))
        assert err.getvalue() == raw

    def test_unknown_kind_falls_back_without_partial_render(self):
        engine, out, err = _engine()
        raw = json.dumps([
            {"kind": "error", "message": "good", "locations": []},
            {"kind": "fatal error", "message": "bad", "locations": []},
        ])
        assert engine.dispatch(CompilerResult("", raw, 1)) is False
        assert "good" not in out.getvalue()
        assert err.getvalue() == raw

    def test_empty_stderr_falls_back(self):
        engine, out, err = _engine()
        assert engine.dispatch(CompilerResult("preprocessed\n", "", 0)) is False
        assert out.getvalue() == "preprocessed\n"
        assert err.getvalue() == ""


class TestEngineRun:

    def test_propagates_exit_code_by_default(self):
        engine, _, _ = _engine()
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "[]", 1)):
            assert engine.run(["a.cpp"]) == 1

    def test_exit_code_zero_when_propagation_disabled(self):
        engine, _, _ = _engine(propagate_exit_code=False)
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "[]", 1)):
            assert engine.run(["a.cpp"]) == 0

    def test_signal_exit_mapped_like_a_shell(self):
        engine, _, _ = _engine()
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "", -9)):
            assert engine.run(["a.cpp"]) == 137

    def test_forwards_args_to_driver(self):
        engine, _, _ = _engine()
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "[]", 0)) as mock_run:
            engine.run(["-Wall", "a.cpp"])
        mock_run.assert_called_once_with(["-Wall", "a.cpp"])

    def test_launch_error_propagates_before_rendering(self):
        engine, out, err = _engine()
        with patch.object(engine.driver, "run", side_effect=CompilerLaunchError("nope")):
            with patch.object(engine, "dispatch") as mock_dispatch:
                with pytest.raises(CompilerLaunchError):
                    engine.run(["a.cpp"])
        mock_dispatch.assert_not_called()


class TestEngineLog:

    def test_no_log_file_by_default(self, tmp_path):
        engine, _, _ = _engine()
        assert engine.log_file is None
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "[]", 0)):
            engine.run(["a.cpp"])
        assert list(tmp_path.iterdir()) == []

    def test_log_records_path_taken(self, tmp_path):
        log = tmp_path / "prettygcc.log"
        engine, _, _ = _engine(log_file=str(log))
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "oops", 1)):
            engine.run(["a.cpp"])
        text = log.read_text()
        assert "a.cpp" in text
        assert "Compiler exited with 1" in text
        assert "Fallback" in text

    def test_unwritable_log_does_not_break_run(self, tmp_path):
        engine, _, _ = _engine(log_file=str(tmp_path / "missing-dir" / "x.log"))
        with patch.object(engine.driver, "run", return_value=CompilerResult("", "[]", 0)):
            assert engine.run(["a.cpp"]) == 0


class TestExcerptPrinterSelection:

    def test_highlight_enabled_uses_syntax(self):
        console = Console(file=io.StringIO())
        printer = build_excerpt_printer(console, _config())
        assert isinstance(printer, SyntaxExcerptPrinter)
        assert printer.theme == "monokai"

    def test_highlight_disabled_uses_plain(self):
        console = Console(file=io.StringIO())
        printer = build_excerpt_printer(console, _config(highlight=False))
        assert isinstance(printer, PlainExcerptPrinter)

    def test_theme_from_config(self):
        console = Console(file=io.StringIO())
        printer = build_excerpt_printer(console, _config(theme="ansi_dark"))
        assert printer.theme == "ansi_dark"
