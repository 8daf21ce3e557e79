from __future__ import annotations

from contextlib import nullcontext
from typing import Any, List, Tuple

import pytest

from delim_engine.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, List[Tuple[str, str]]]] = []
        self.context: dict[str, str] = {}

    def info_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("info", message, pairs))

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("error", message, pairs))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    def profile(self, name: str) -> Any:
        return nullcontext()

    def track_component(self, name: str) -> Any:
        return nullcontext()


def make_logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    fake = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: fake)
    return fake


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="bogus")


def test_record_event_sends_stringified_pairs(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = make_logger(monkeypatch)

    telemetry.record_event("cycle", data={"cursor": 3, "pair": (1, 2)})

    assert fake.records == [
        ("info", "event::cycle", [("event", "cycle"), ("cursor", "3"), ("pair", "(1, 2)")])
    ]


def test_record_event_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    make_logger(monkeypatch)

    with pytest.raises(ValueError, match="Unsupported log level"):
        telemetry.record_event("cycle", level="verbose")


def test_span_logs_failure_and_clears_context(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = make_logger(monkeypatch)

    with pytest.raises(RuntimeError):
        with telemetry.span("work", metadata={"buffer": "demo"}) as handle:
            assert fake.context == {"buffer": "demo"}
            handle.add_metadata("status", "started")
            raise RuntimeError("boom")

    assert fake.context == {}
    level, message, pairs = fake.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert ("status", "started") in pairs
    assert ("reason", "boom") in pairs
