"""Schedule trigger events: a watch fired by its schedule ticking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar

from watcher_records.dates import format_date_time, normalize_date_time, parse_date_time
from watcher_records.trigger.events import TriggerEvent, TriggerEventParseError
from watcher_records.xcontent import DocumentBuilder, DocumentParser, EncodeOptions, Token

if TYPE_CHECKING:
    from watcher_records.trigger.service import TriggerService

TRIGGERED_TIME = "triggered_time"
SCHEDULED_TIME = "scheduled_time"


@dataclass(frozen=True, slots=True)
class ScheduleTriggerEvent(TriggerEvent):
    type: ClassVar[str] = "schedule"

    job_name: str
    triggered_time: datetime
    scheduled_time: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "triggered_time", normalize_date_time(self.triggered_time))
        object.__setattr__(self, "scheduled_time", normalize_date_time(self.scheduled_time))

    def encode(self, builder: DocumentBuilder, options: EncodeOptions) -> None:
        builder.start_object()
        builder.field(TRIGGERED_TIME, format_date_time(self.triggered_time))
        builder.field(SCHEDULED_TIME, format_date_time(self.scheduled_time))
        builder.end_object()

    @classmethod
    def parse(cls, watch_id: str, context: str, parser: DocumentParser) -> ScheduleTriggerEvent:
        """Parse the event body; the parser must be on its START_OBJECT."""

        triggered_time: datetime | None = None
        scheduled_time: datetime | None = None
        current_name: str | None = None

        while (token := parser.next_token()) is not Token.END_OBJECT:
            if token is None:
                raise TriggerEventParseError(
                    f"could not parse [{cls.type}] trigger event for [{context}] "
                    f"for watch [{watch_id}]. unexpected end of document"
                )
            if token is Token.FIELD_NAME:
                current_name = parser.current_name
            elif token is Token.VALUE_STRING and current_name in (TRIGGERED_TIME, SCHEDULED_TIME):
                try:
                    value = parse_date_time(parser.text())
                except ValueError as e:
                    raise TriggerEventParseError(
                        f"could not parse [{cls.type}] trigger event for [{context}] "
                        f"for watch [{watch_id}]. failed to parse date field [{current_name}]"
                    ) from e
                if current_name == TRIGGERED_TIME:
                    triggered_time = value
                else:
                    scheduled_time = value
            else:
                raise TriggerEventParseError(
                    f"could not parse [{cls.type}] trigger event for [{context}] "
                    f"for watch [{watch_id}]. unexpected token [{token.value}] "
                    f"for field [{current_name}]"
                )

        if triggered_time is None:
            raise TriggerEventParseError(
                f"could not parse [{cls.type}] trigger event for [{context}] "
                f"for watch [{watch_id}]. missing required field [{TRIGGERED_TIME}]"
            )
        if scheduled_time is None:
            raise TriggerEventParseError(
                f"could not parse [{cls.type}] trigger event for [{context}] "
                f"for watch [{watch_id}]. missing required field [{SCHEDULED_TIME}]"
            )
        return cls(job_name=watch_id, triggered_time=triggered_time, scheduled_time=scheduled_time)


class ScheduleTriggerEngine:
    type = ScheduleTriggerEvent.type

    def parse_trigger_event(
        self, service: TriggerService, watch_id: str, context: str, parser: DocumentParser
    ) -> ScheduleTriggerEvent:
        return ScheduleTriggerEvent.parse(watch_id, context, parser)
