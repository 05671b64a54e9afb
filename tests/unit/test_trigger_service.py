"""Unit tests for trigger event decoding."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from watcher_records.trigger import (
    ManualTriggerEvent,
    ScheduleTriggerEngine,
    ScheduleTriggerEvent,
    TriggerEventParseError,
    TriggerService,
)
from watcher_records.xcontent import DocumentBuilder, DocumentParser, EncodeOptions, Token

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _positioned(source: object) -> DocumentParser:
    parser = DocumentParser(json.dumps(source))
    assert parser.next_token() is Token.START_OBJECT
    return parser


def _encode(event: object) -> object:
    builder = DocumentBuilder()
    event.encode(builder, EncodeOptions())  # type: ignore[attr-defined]
    return json.loads(builder.to_bytes())


def test_default_service_registers_schedule_and_manual() -> None:
    assert TriggerService.default().types == frozenset({"schedule", "manual"})


def test_duplicate_engine_types_are_rejected() -> None:
    with pytest.raises(ValueError):
        TriggerService([ScheduleTriggerEngine(), ScheduleTriggerEngine()])


def test_parse_schedule_event(trigger_service: TriggerService) -> None:
    parser = _positioned(
        {
            "schedule": {
                "triggered_time": "2025-01-01T00:00:01.500Z",
                "scheduled_time": "2025-01-01T00:00:00.000Z",
            }
        }
    )

    event = trigger_service.parse_trigger_event("watch1", "record-1", parser)

    assert event == ScheduleTriggerEvent(
        job_name="watch1",
        triggered_time=datetime(2025, 1, 1, 0, 0, 1, 500000, tzinfo=UTC),
        scheduled_time=datetime(2025, 1, 1, tzinfo=UTC),
    )
    assert parser.current_token is Token.END_OBJECT
    assert parser.next_token() is None


def test_parse_manual_event_wraps_inner_event(trigger_service: TriggerService) -> None:
    inner = {
        "triggered_time": "1970-01-01T00:00:00.000Z",
        "scheduled_time": "1970-01-01T00:00:00.000Z",
    }
    parser = _positioned({"manual": {"schedule": inner}})

    event = trigger_service.parse_trigger_event("watch1", "record-1", parser)

    assert isinstance(event, ManualTriggerEvent)
    assert event.trigger_event == ScheduleTriggerEvent("watch1", EPOCH, EPOCH)
    assert event.triggered_time == EPOCH


def test_schedule_event_encodes_both_times() -> None:
    event = ScheduleTriggerEvent("watch1", EPOCH, datetime(1970, 1, 1, 0, 0, 2, tzinfo=UTC))

    assert _encode(event) == {
        "triggered_time": "1970-01-01T00:00:00.000Z",
        "scheduled_time": "1970-01-01T00:00:02.000Z",
    }


def test_schedule_event_times_are_utc_millis() -> None:
    event = ScheduleTriggerEvent(
        "watch1",
        datetime(2025, 3, 4, 5, 6, 7, 123456, tzinfo=UTC),
        datetime(2025, 3, 4, 5, 6, 7),
    )

    assert event.triggered_time == datetime(2025, 3, 4, 5, 6, 7, 123000, tzinfo=UTC)
    assert event.scheduled_time == datetime(2025, 3, 4, 5, 6, 7, tzinfo=UTC)
    assert event.scheduled_time.tzinfo is UTC


def test_manual_event_nests_inner_event_under_its_type() -> None:
    event = ManualTriggerEvent("watch1", ScheduleTriggerEvent("watch1", EPOCH, EPOCH))

    assert _encode(event) == {
        "schedule": {
            "triggered_time": "1970-01-01T00:00:00.000Z",
            "scheduled_time": "1970-01-01T00:00:00.000Z",
        }
    }


def test_unknown_trigger_type(trigger_service: TriggerService) -> None:
    parser = _positioned({"cron": {}})

    with pytest.raises(TriggerEventParseError, match=r"unknown trigger type \[cron\]"):
        trigger_service.parse_trigger_event("watch1", "record-1", parser)


def test_parser_must_be_on_wrapper_object(trigger_service: TriggerService) -> None:
    parser = DocumentParser(b'{"schedule": {}}')

    with pytest.raises(TriggerEventParseError, match="expected an object"):
        trigger_service.parse_trigger_event("watch1", "record-1", parser)


def test_empty_wrapper(trigger_service: TriggerService) -> None:
    with pytest.raises(TriggerEventParseError, match="expected trigger type string field"):
        trigger_service.parse_trigger_event("watch1", "record-1", _positioned({}))


def test_scalar_trigger_body(trigger_service: TriggerService) -> None:
    with pytest.raises(TriggerEventParseError, match="as the trigger body"):
        trigger_service.parse_trigger_event("watch1", "record-1", _positioned({"schedule": 1}))


def test_wrapper_with_more_than_one_type(trigger_service: TriggerService) -> None:
    source = {
        "schedule": {
            "triggered_time": "1970-01-01T00:00:00.000Z",
            "scheduled_time": "1970-01-01T00:00:00.000Z",
        },
        "other": {},
    }

    with pytest.raises(TriggerEventParseError, match=r"expected \[end_object\]"):
        trigger_service.parse_trigger_event("watch1", "record-1", _positioned(source))


def test_schedule_requires_both_times(trigger_service: TriggerService) -> None:
    parser = _positioned({"schedule": {"triggered_time": "1970-01-01T00:00:00.000Z"}})

    with pytest.raises(TriggerEventParseError, match=r"missing required field \[scheduled_time\]"):
        trigger_service.parse_trigger_event("watch1", "record-1", parser)


def test_schedule_rejects_unknown_fields(trigger_service: TriggerService) -> None:
    parser = _positioned({"schedule": {"interval": "5m"}})

    with pytest.raises(TriggerEventParseError, match=r"field \[interval\]"):
        trigger_service.parse_trigger_event("watch1", "record-1", parser)


def test_schedule_bad_date_keeps_cause(trigger_service: TriggerService) -> None:
    parser = _positioned(
        {"schedule": {"triggered_time": "yesterday", "scheduled_time": "1970-01-01T00:00:00Z"}}
    )

    with pytest.raises(TriggerEventParseError) as excinfo:
        trigger_service.parse_trigger_event("watch1", "record-1", parser)

    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "record-1" in str(excinfo.value)
