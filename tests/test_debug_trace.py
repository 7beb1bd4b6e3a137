"""Tests for debug_trace.py: category filtering and the trace log file."""
from __future__ import annotations

import pytest

import debug_trace
from debug_trace import close_log, configure, trace, trace_call


@pytest.fixture
def trace_log(tmp_path, monkeypatch):
    monkeypatch.delenv("SCREENDESIGNER_TRACE", raising=False)
    path = tmp_path / "trace.log"
    configure(True, trace_paint=False, log_file=str(path))
    yield path
    close_log()
    configure(False)


def _lines(path):
    close_log()
    return path.read_text(encoding="utf-8").splitlines()


class TestTrace:
    def test_lines_carry_category(self, trace_log):
        trace("drop BUTTON at 50,50", "CANVAS")
        lines = _lines(trace_log)
        assert len(lines) == 1
        assert "[CANVAS] drop BUTTON at 50,50" in lines[0]

    def test_paint_filtered_unless_enabled(self, trace_log):
        trace("frame", "PAINT")
        trace("visible", "CANVAS")
        lines = _lines(trace_log)
        assert [l.split("] ", 2)[-1] for l in lines] == ["visible"]

    def test_disabled_emits_nothing(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SCREENDESIGNER_TRACE", raising=False)
        path = tmp_path / "off.log"
        configure(False, log_file=str(path))
        trace("hidden", "CANVAS")
        assert not debug_trace.DEBUG_TRACE
        assert not path.exists()
        configure(False)

    def test_trace_call_reraises(self, trace_log):
        @trace_call("TEST")
        def boom():
            raise RuntimeError("bad")

        with pytest.raises(RuntimeError):
            boom()
        lines = _lines(trace_log)
        assert any(">>> " in l and "boom" in l for l in lines)
        assert any("!!! " in l and "RuntimeError: bad" in l for l in lines)
