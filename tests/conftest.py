"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar

import pytest

from watcher_records.execution import TriggeredWatchCodec, Wid
from watcher_records.trigger import ScheduleTriggerEvent, TriggerEvent, TriggerService
from watcher_records.xcontent import DocumentBuilder, DocumentParser, EncodeOptions

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
SCENARIO_ID = "watch1_1970-01-01T00:00:00.000Z"
SCENARIO_SOURCE = (
    b'{"trigger_event":{"schedule":{"scheduled_time":"1970-01-01T00:00:00.000Z",'
    b'"triggered_time":"1970-01-01T00:00:00.000Z"}}}'
)


@dataclass(frozen=True, slots=True)
class FakeTriggerEvent(TriggerEvent):
    type: ClassVar[str] = "fake"

    job_name: str
    triggered_time: datetime
    body: dict[str, object]

    def encode(self, builder: DocumentBuilder, options: EncodeOptions) -> None:
        builder.start_object()
        for key, value in self.body.items():
            builder.field(key, value)
        builder.end_object()


class RecordingDecoder:
    """Decoder that materialises the trigger event sub-document as-is."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, object]]] = []

    def parse_trigger_event(
        self, watch_id: str, context: str, parser: DocumentParser
    ) -> FakeTriggerEvent:
        body = parser.map()
        self.calls.append((watch_id, context, body))
        return FakeTriggerEvent(job_name=watch_id, triggered_time=EPOCH, body=body)


@pytest.fixture
def trigger_service() -> TriggerService:
    return TriggerService.default()


@pytest.fixture
def codec(trigger_service: TriggerService) -> TriggeredWatchCodec:
    return TriggeredWatchCodec(trigger_service)


@pytest.fixture
def recording_decoder() -> RecordingDecoder:
    return RecordingDecoder()


@pytest.fixture
def scenario_wid() -> Wid:
    return Wid(SCENARIO_ID)


@pytest.fixture
def epoch_event() -> ScheduleTriggerEvent:
    return ScheduleTriggerEvent(job_name="watch1", triggered_time=EPOCH, scheduled_time=EPOCH)


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo handler/level changes made by `configure_logging`."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def clean_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run with no watcher settings in the environment and no `.env` file."""

    for name in ("LOG_LEVEL", "WATCHER_PRETTY_PRINT", "WATCHER_RECORD_VERSION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def scenario_id() -> str:
    return SCENARIO_ID


@pytest.fixture
def scenario_source() -> bytes:
    return SCENARIO_SOURCE


@pytest.fixture
def make_fake_event():
    def _make(job_name: str = "watch1", **body: object) -> FakeTriggerEvent:
        return FakeTriggerEvent(job_name=job_name, triggered_time=EPOCH, body=dict(body))

    return _make
