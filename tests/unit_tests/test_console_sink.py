"""
Console sink: JSON records on stdout, developer console on stderr, caller
capture and hooks.
"""

from __future__ import annotations

import io
import json
import os
from datetime import datetime

import pytest

from logfacade import Level, LoggerPanic, get_logger, with_caller, with_hook, with_level
from logfacade.options import BuildContext
from logfacade.sinks import ConsoleSink

THIS_FILE = os.path.basename(__file__)


def _records(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestJsonConsole:
    """Default (non-dev) mode"""

    def test_record_shape(self, capsys) -> None:
        get_logger("svc").info("started %s", "ok")

        out, err = capsys.readouterr()
        assert err == ""
        (record,) = _records(out)
        assert record["logger"] == "svc"
        assert record["level"] == "info"
        assert record["event"] == "started ok"
        parsed = datetime.fromisoformat(record["timestamp"])
        assert parsed.tzinfo is not None

    def test_no_caller_without_option(self, capsys) -> None:
        get_logger("svc").warning("careful")
        (record,) = _records(capsys.readouterr().out)
        assert "caller" not in record
        assert record["level"] == "warn"

    def test_gated_calls_write_nothing(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("LOGGING_LEVEL_SVC", "error")
        log = get_logger("svc")
        log.trace("no")
        log.debug("no")
        log.info("no")
        log.warning("no")
        log.error("yes")
        log.fatal("yes")
        assert [r["level"] for r in _records(capsys.readouterr().out)] == ["error", "fatal"]

    def test_fatal_does_not_exit(self, capsys) -> None:
        get_logger("svc").fatal("still running")
        assert _records(capsys.readouterr().out)[0]["event"] == "still running"

    def test_panic_writes_then_raises(self, capsys) -> None:
        with pytest.raises(LoggerPanic, match="gave up"):
            get_logger("svc").panic("gave up")
        (record,) = _records(capsys.readouterr().out)
        assert record["level"] == "panic"

    def test_panic_raises_when_off(self, capsys) -> None:
        log = get_logger("svc")
        log.set_level(Level.OFF)
        with pytest.raises(LoggerPanic):
            log.panic("gave up")
        assert capsys.readouterr().out == ""

    def test_explicit_stream(self) -> None:
        buffer = io.StringIO()
        sink = ConsoleSink(BuildContext(identifier="svc", level=Level.INFO), stream=buffer)
        sink.emit(Level.ERROR, "direct")
        (record,) = _records(buffer.getvalue())
        assert record == {"logger": "svc", "level": "error", "event": "direct", "timestamp": record["timestamp"]}


class TestCallerCapture:
    """Caller option"""

    def test_caller_points_at_call_site(self, capsys) -> None:
        get_logger("svc", with_caller()).info("here")
        (record,) = _records(capsys.readouterr().out)
        filename, _, line = record["caller"].rpartition(":")
        assert os.path.basename(filename) == THIS_FILE
        assert int(line) > 0

    def test_oversized_skip_omits_caller(self, capsys) -> None:
        get_logger("svc", with_caller(10_000)).info("here")
        (record,) = _records(capsys.readouterr().out)
        assert "caller" not in record


class TestHooks:
    """Side-channel hooks run synchronously on every emitted record"""

    def test_hook_receives_level_message_and_event(self, capsys) -> None:
        seen = []
        log = get_logger("svc", with_hook(lambda level, message, event: seen.append((level, message, dict(event)))))

        log.info("hello %s", "world")
        log.debug("filtered")

        assert len(seen) == 1
        level, message, event = seen[0]
        assert level is Level.INFO
        assert message == "hello world"
        assert event["logger"] == "svc"
        assert len(_records(capsys.readouterr().out)) == 1

    def test_hooks_run_in_order(self, capsys) -> None:
        order = []
        get_logger(
            "svc",
            with_hook(lambda *_: order.append("first")),
            with_hook(lambda *_: order.append("second")),
        ).error("x")
        assert order == ["first", "second"]

    def test_level_option_overrides_environment(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("LOGGING_LEVEL_SVC", "error")
        log = get_logger("svc", with_level("trace"))
        assert log.level is Level.TRACE
        log.trace("deep")
        assert _records(capsys.readouterr().out)[0]["level"] == "trace"


class TestDevConsole:
    """APP_ENV=dev writes a human-readable line to stderr"""

    @pytest.fixture(autouse=True)
    def dev_mode(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "dev")

    def test_goes_to_stderr_with_identifier_prefix(self, capsys) -> None:
        get_logger("svc").info("started")
        out, err = capsys.readouterr()
        assert out == ""
        assert "[svc] started" in err
        assert "INFO" in err

    def test_identifier_not_repeated_in_extras(self, capsys) -> None:
        get_logger("svc").info("started")
        err = capsys.readouterr().err
        assert "logger=" not in err
        assert err.count("svc") == 1

    def test_caller_hidden_without_option(self, capsys) -> None:
        get_logger("svc").info("started")
        assert THIS_FILE not in capsys.readouterr().err

    def test_caller_shown_with_option(self, capsys) -> None:
        get_logger("svc", with_caller()).info("started")
        assert THIS_FILE in capsys.readouterr().err

    def test_sink_is_dev(self) -> None:
        assert get_logger("svc").sink.dev is True
