"""Watch execution ids and triggered watch records."""

from watcher_records.execution.triggered_watch import (
    MissingTriggerEventError,
    TriggeredWatch,
    TriggeredWatchCodec,
    WatchRecordEncodeError,
    WatchRecordParseError,
)
from watcher_records.execution.wid import InvalidWidError, Wid

__all__ = [
    "InvalidWidError",
    "MissingTriggerEventError",
    "TriggeredWatch",
    "TriggeredWatchCodec",
    "WatchRecordEncodeError",
    "WatchRecordParseError",
    "Wid",
]
