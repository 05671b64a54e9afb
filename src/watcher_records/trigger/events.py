"""Trigger events: the cause recorded alongside a watch execution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Protocol

if TYPE_CHECKING:
    from watcher_records.xcontent import DocumentBuilder, DocumentParser, EncodeOptions


class TriggerEventParseError(ValueError):
    pass


class TriggerEvent(ABC):
    """A signal that caused a watch to fire.

    `type` doubles as the field name the event payload is nested under when a
    record is persisted, so it must be unique across registered engines.
    """

    type: ClassVar[str]

    job_name: str
    triggered_time: datetime

    @abstractmethod
    def encode(self, builder: DocumentBuilder, options: EncodeOptions) -> None:
        """Write the event body as a complete object."""


class TriggerEventDecoder(Protocol):
    """Decodes a `{<type>: {...}}` trigger event wrapper for a watch record."""

    def parse_trigger_event(
        self, watch_id: str, context: str, parser: DocumentParser
    ) -> TriggerEvent: ...
