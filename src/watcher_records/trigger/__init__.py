"""Trigger events and the service that decodes them by type."""

from watcher_records.trigger.events import TriggerEvent, TriggerEventDecoder, TriggerEventParseError
from watcher_records.trigger.manual import ManualTriggerEngine, ManualTriggerEvent
from watcher_records.trigger.schedule import ScheduleTriggerEngine, ScheduleTriggerEvent
from watcher_records.trigger.service import TriggerEngine, TriggerService

__all__ = [
    "ManualTriggerEngine",
    "ManualTriggerEvent",
    "ScheduleTriggerEngine",
    "ScheduleTriggerEvent",
    "TriggerEngine",
    "TriggerEvent",
    "TriggerEventDecoder",
    "TriggerEventParseError",
    "TriggerService",
]
