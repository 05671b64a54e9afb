"""Registry of trigger engines, keyed by trigger event type."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Protocol, cast

from watcher_records.trigger.events import TriggerEvent, TriggerEventParseError
from watcher_records.trigger.manual import ManualTriggerEngine
from watcher_records.trigger.schedule import ScheduleTriggerEngine
from watcher_records.xcontent import DocumentParser, Token

logger = logging.getLogger(__name__)


class TriggerEngine(Protocol):
    type: str

    def parse_trigger_event(
        self, service: TriggerService, watch_id: str, context: str, parser: DocumentParser
    ) -> TriggerEvent: ...


class TriggerService:
    """Decodes trigger events by dispatching on their type tag.

    The engine map is fixed at construction, so a service can be shared
    between codecs and threads.
    """

    def __init__(self, engines: Iterable[TriggerEngine]) -> None:
        by_type: dict[str, TriggerEngine] = {}
        for engine in engines:
            if engine.type in by_type:
                raise ValueError(f"duplicate trigger engine for type [{engine.type}]")
            by_type[engine.type] = engine
        self._engines: Mapping[str, TriggerEngine] = MappingProxyType(by_type)

    @classmethod
    def default(cls) -> TriggerService:
        return cls([ScheduleTriggerEngine(), ManualTriggerEngine()])

    @property
    def types(self) -> frozenset[str]:
        return frozenset(self._engines)

    def parse_trigger_event(
        self, watch_id: str, context: str, parser: DocumentParser
    ) -> TriggerEvent:
        """Parse a `{<type>: {...}}` wrapper positioned at its START_OBJECT.

        On return the parser sits on the wrapper's END_OBJECT.
        """

        if parser.current_token is not Token.START_OBJECT:
            raise TriggerEventParseError(
                f"could not parse trigger event for [{context}] for watch [{watch_id}]. "
                f"expected an object, but found [{_describe(parser.current_token)}]"
            )

        token = parser.next_token()
        if token is not Token.FIELD_NAME:
            raise TriggerEventParseError(
                f"could not parse trigger event for [{context}] for watch [{watch_id}]. "
                f"expected trigger type string field, but found [{_describe(token)}]"
            )
        trigger_type = cast(str, parser.current_name)

        token = parser.next_token()
        if token is not Token.START_OBJECT:
            raise TriggerEventParseError(
                f"could not parse trigger event for [{context}] for watch [{watch_id}]. "
                f"expected an object as the trigger body, but found [{_describe(token)}]"
            )

        event = self.parse_typed_trigger_event(watch_id, context, trigger_type, parser)

        token = parser.next_token()
        if token is not Token.END_OBJECT:
            raise TriggerEventParseError(
                f"could not parse trigger event for [{context}] for watch [{watch_id}]. "
                f"expected [{Token.END_OBJECT.value}] but found [{_describe(token)}]"
            )
        return event

    def parse_typed_trigger_event(
        self, watch_id: str, context: str, trigger_type: str, parser: DocumentParser
    ) -> TriggerEvent:
        engine = self._engines.get(trigger_type)
        if engine is None:
            raise TriggerEventParseError(
                f"could not parse trigger event for [{context}] for watch [{watch_id}]. "
                f"unknown trigger type [{trigger_type}]"
            )
        logger.debug(
            "Parsing trigger event",
            extra={"watch_id": watch_id, "context": context, "trigger_type": trigger_type},
        )
        return engine.parse_trigger_event(self, watch_id, context, parser)


def _describe(token: Token | None) -> str:
    return "end of document" if token is None else token.value
