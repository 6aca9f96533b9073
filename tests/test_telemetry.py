from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

import pytest

from line_editor.buffer import Document, FileOpenError
from line_editor.commands import CommandDispatcher
from line_editor.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.entries: List[Tuple[str, str, Dict[str, str]]] = []
        self.context: Dict[str, str] = {}
        self.components: List[str] = []
        self.profiles: List[str] = []

    def _record(self, level: str, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.entries.append((level, message, dict(pairs)))

    def info_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self._record("info", message, pairs)

    def warning_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self._record("warning", message, pairs)

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self._record("error", message, pairs)

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiles.append(name)
        yield


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_configure_preset_replaces_active_config(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)
    monkeypatch.setattr(telemetry, "_LOGGER_CACHE", {"line_editor": object()})

    telemetry.configure(preset="development")

    assert telemetry._ACTIVE_CONFIG is not None
    assert telemetry._LOGGER_CACHE == {}


def test_configure_rejects_unknown_preset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)

    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="performance_analysis")

    assert telemetry._ACTIVE_CONFIG is None


def test_presets_are_the_cli_choices() -> None:
    assert telemetry.PRESETS == ("development", "production", "performance")


def test_record_event_sends_structured_pairs(recorder: RecordingLogger) -> None:
    telemetry.record_event("document.save", data={"path": "a.txt", "lines": 3})

    assert recorder.entries == [
        (
            "info",
            "event::document.save",
            {"event": "document.save", "path": "a.txt", "lines": "3"},
        )
    ]


def test_record_event_rejects_unknown_level(recorder: RecordingLogger) -> None:
    with pytest.raises(ValueError, match="Unsupported log level"):
        telemetry.record_event("session.start", level="shout")


def test_failed_load_reports_span_failure(
    recorder: RecordingLogger, tmp_path: Path
) -> None:
    missing = tmp_path / "missing.txt"

    with pytest.raises(FileOpenError):
        Document().load_from_file(missing)

    failures = [entry for entry in recorder.entries if entry[1] == "span::fail"]
    assert failures == [
        (
            "error",
            "span::fail",
            {
                "span": "document::load",
                "path": str(missing),
                "component": "document",
                "reason": f"Error opening file for reading: {missing}",
            },
        )
    ]
    assert recorder.components == ["document"]
    assert recorder.profiles == ["document::load"]
    assert recorder.context == {}


def test_span_metadata_is_context_only_inside_block(
    recorder: RecordingLogger,
) -> None:
    with telemetry.span("document::save", metadata={"path": "x.txt"}) as handle:
        assert recorder.context == {"path": "x.txt"}
        handle.add_metadata("lines", 2)

    assert recorder.context == {}
    assert handle.metadata == {"path": "x.txt", "lines": "2"}
    assert recorder.components == []


def test_rejected_command_warns_on_its_span(recorder: RecordingLogger) -> None:
    dispatcher = CommandDispatcher()

    result = dispatcher.dispatch("insert 4 0 x")

    assert result.error
    warnings = [entry for entry in recorder.entries if entry[1] == "span::warn"]
    assert len(warnings) == 1
    level, _, payload = warnings[0]
    assert level == "warning"
    assert payload["span"] == "command::insert"
    assert payload["component"] == "commands"
    assert payload["reason"] == "Invalid line number"
    assert not any(entry[1] == "span::fail" for entry in recorder.entries)
