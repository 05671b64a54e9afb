"""Manual trigger events: a watch executed on demand.

A manual event wraps the event the watch would normally have fired with, so
the body is itself a `{<type>: {...}}` wrapper decoded through the service.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar

from watcher_records.trigger.events import TriggerEvent
from watcher_records.xcontent import DocumentBuilder, DocumentParser, EncodeOptions

if TYPE_CHECKING:
    from watcher_records.trigger.service import TriggerService


@dataclass(frozen=True, slots=True)
class ManualTriggerEvent(TriggerEvent):
    type: ClassVar[str] = "manual"

    job_name: str
    trigger_event: TriggerEvent

    @property
    def triggered_time(self) -> datetime:  # type: ignore[override]
        return self.trigger_event.triggered_time

    def encode(self, builder: DocumentBuilder, options: EncodeOptions) -> None:
        builder.start_object()
        builder.field_name(self.trigger_event.type)
        self.trigger_event.encode(builder, options)
        builder.end_object()


class ManualTriggerEngine:
    type = ManualTriggerEvent.type

    def parse_trigger_event(
        self, service: TriggerService, watch_id: str, context: str, parser: DocumentParser
    ) -> ManualTriggerEvent:
        inner = service.parse_trigger_event(watch_id, context, parser)
        return ManualTriggerEvent(job_name=watch_id, trigger_event=inner)
