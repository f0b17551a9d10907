"""Tests for structured logging setup."""

import json

import pytest

from shellkit.core.logging import log, setup_logging

pytestmark = pytest.mark.unit


def test_json_events_go_to_stderr(capsys):
    setup_logging("json", "info")

    log.info("chunk.written", index=1, size=10)

    captured = capsys.readouterr()
    assert captured.out == ""
    event = json.loads(captured.err.strip())
    assert event["event"] == "chunk.written"
    assert event["level"] == "info"
    assert event["index"] == 1
    assert "timestamp" in event


def test_level_filtering(capsys):
    setup_logging("plain", "warning")

    log.info("quiet.event")
    log.warning("loud.event", path="/tmp/x")

    err = capsys.readouterr().err
    assert "quiet.event" not in err
    assert "loud.event" in err
    assert "path=/tmp/x" in err


def test_auto_uses_json_in_ci(capsys, monkeypatch):
    monkeypatch.setenv("CI", "true")
    setup_logging("auto", "info")

    log.info("ci.event")

    assert json.loads(capsys.readouterr().err.strip())["event"] == "ci.event"


def test_debug_level_is_honoured(capsys):
    setup_logging("plain", "DEBUG")

    log.debug("debug.event")

    assert "debug.event" in capsys.readouterr().err


def test_unknown_level_falls_back_to_warning(capsys):
    setup_logging("plain", "chatty")

    log.info("quiet.event")
    log.warning("loud.event")

    err = capsys.readouterr().err
    assert "quiet.event" not in err
    assert "loud.event" in err
