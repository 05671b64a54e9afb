"""Triggered watch records.

A triggered watch is the persisted fact that a watch fired, keyed by its
execution id and carrying the event that caused it, so that pending
executions can be replayed after a restart.

Persisted shape:

    {"trigger_event": {"<event type>": {...event body...}}}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import IO

from watcher_records.execution.wid import Wid
from watcher_records.trigger.events import TriggerEvent, TriggerEventDecoder
from watcher_records.xcontent import (
    DocumentBuilder,
    DocumentParseError,
    DocumentParser,
    EncodeOptions,
    Token,
    create_parser,
)
from watcher_records.xcontent.parser import Source

logger = logging.getLogger(__name__)

TRIGGER_EVENT_FIELD = "trigger_event"
# Reserved; skipped on decode and never written.
STATE_FIELD = "state"


class WatchRecordParseError(Exception):
    """Raised when a persisted watch record cannot be decoded."""


class MissingTriggerEventError(WatchRecordParseError):
    def __init__(self, record_id: str) -> None:
        super().__init__(f"watch record [{record_id}] is missing trigger")
        self.record_id = record_id


class WatchRecordEncodeError(Exception):
    """Raised when an encoded watch record cannot be written to its sink."""


@dataclass(frozen=True, slots=True, eq=False)
class TriggeredWatch:
    """An execution id paired with the trigger event that caused it.

    Equality and hashing use the id alone: the id already identifies the
    firing and is the storage key, so records dedupe by id in sets and maps.
    """

    id: Wid
    trigger_event: TriggerEvent

    def __post_init__(self) -> None:
        if self.id is None:
            raise ValueError("triggered watch id is required")

    def encode(self, builder: DocumentBuilder, options: EncodeOptions) -> None:
        builder.start_object()
        builder.start_object(TRIGGER_EVENT_FIELD)
        builder.field_name(self.trigger_event.type)
        self.trigger_event.encode(builder, options)
        builder.end_object()
        builder.end_object()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TriggeredWatch):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return str(self.id)


class TriggeredWatchCodec:
    """Reads and writes triggered watch records.

    Holds no state besides the trigger event decoder, which is shared with
    other consumers; safe to use from several threads if the decoder is.
    """

    def __init__(self, trigger_decoder: TriggerEventDecoder) -> None:
        self._trigger_decoder = trigger_decoder

    def decode(
        self, record_id: str, version: int, source: Source | DocumentParser
    ) -> TriggeredWatch:
        """Decode a record from raw bytes, text, a binary stream or an open parser.

        A parser passed in is consumed in place and left open; any other source
        is wrapped in a parser that is closed before returning.

        Raises:
            ValueError: If `record_id` is empty.
            WatchRecordParseError: If the document is unreadable or malformed, or
                carries no trigger event.
        """

        if not record_id:
            raise ValueError("watch record id is missing")

        wid = Wid(record_id)
        logger.debug("Decoding watch record", extra={"record_id": record_id, "version": version})

        if isinstance(source, DocumentParser):
            return self._decode(wid, record_id, source, source.next_token())

        with create_parser(source) as parser:
            # The whole source is read and parsed on the first token.
            try:
                token = parser.next_token()
            except (OSError, DocumentParseError) as e:
                raise WatchRecordParseError("unable to parse watch record") from e
            return self._decode(wid, record_id, parser, token)

    def _decode(
        self, wid: Wid, record_id: str, parser: DocumentParser, token: Token | None
    ) -> TriggeredWatch:
        if token is not Token.START_OBJECT:
            found = "end of document" if token is None else token.value
            raise WatchRecordParseError(
                f"watch record [{record_id}] must be an object, found [{found}]"
            )

        trigger_event: TriggerEvent | None = None
        current_name: str | None = None
        while (token := parser.next_token()) is not Token.END_OBJECT:
            if token is None:
                raise WatchRecordParseError(f"watch record [{record_id}] ended unexpectedly")
            if token is Token.FIELD_NAME:
                current_name = parser.current_name
            elif token is Token.START_OBJECT:
                if current_name == TRIGGER_EVENT_FIELD:
                    trigger_event = self._trigger_decoder.parse_trigger_event(
                        wid.watch_id, record_id, parser
                    )
                else:
                    logger.debug(
                        "Skipping reserved watch record field"
                        if current_name == STATE_FIELD
                        else "Skipping unknown watch record field",
                        extra={"record_id": record_id, "field": current_name},
                    )
                    parser.skip_children()
            elif token is Token.START_ARRAY:
                parser.skip_children()

        if trigger_event is None:
            raise MissingTriggerEventError(record_id)
        return TriggeredWatch(id=wid, trigger_event=trigger_event)

    def encode(self, watch: TriggeredWatch, options: EncodeOptions | None = None) -> bytes:
        options = options or EncodeOptions()
        builder = DocumentBuilder()
        watch.encode(builder, options)
        return builder.to_bytes(pretty=options.pretty)

    def write(
        self, watch: TriggeredWatch, sink: IO[bytes], options: EncodeOptions | None = None
    ) -> None:
        data = self.encode(watch, options)
        try:
            sink.write(data)
        except OSError as e:
            raise WatchRecordEncodeError(f"unable to write watch record [{watch.id}]") from e
