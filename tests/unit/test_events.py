import json
from pathlib import Path

import pytest

from bench_index import events


@pytest.fixture
def event_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "state" / "events.log"
    monkeypatch.setattr("bench_index.config.EVENT_LOG_PATH", path)
    monkeypatch.setenv("BENCH_INDEX_EVENT_LOG", "1")
    return path


class TestLogEvent:
    def test_disabled_by_default(self, event_log: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BENCH_INDEX_EVENT_LOG")
        events.log_event("published", "Bevy")
        assert not event_log.exists()

    def test_appends_jsonl(self, event_log: Path) -> None:
        events.log_event("published", "Bevy", faster="80")
        events.log_event("failed", "Mastodon", error="HTTP 502")

        lines = event_log.read_text(encoding="utf-8").splitlines()
        first, second = (json.loads(line) for line in lines)
        assert first["kind"] == "published"
        assert first["faster"] == "80"
        assert first["level"] == "info"
        assert second["benchmark"] == "Mastodon"
        assert second["level"] == "warning"

    def test_directory_path_is_skipped(self, event_log: Path) -> None:
        event_log.mkdir(parents=True)
        events.log_event("published", "Bevy")
        assert event_log.is_dir()


class TestRotation:
    def test_rotates_oversized_log(self, event_log: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("bench_index.config.MAX_LOG_SIZE_BYTES", 10)
        event_log.parent.mkdir(parents=True)
        event_log.write_text("x" * 100, encoding="utf-8")

        events.log_event("published", "Bevy")

        rotated = [p for p in event_log.parent.iterdir() if p != event_log]
        assert len(rotated) == 1
        assert rotated[0].read_text(encoding="utf-8") == "x" * 100
        assert json.loads(event_log.read_text(encoding="utf-8"))["benchmark"] == "Bevy"
