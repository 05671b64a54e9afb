"""Watcher execution records.

Persistable records of triggered watch executions:
- execution ids binding a watch to one firing
- the triggered watch value object
- a codec mapping records to and from JSON documents
"""

__version__ = "0.1.0"

from watcher_records.config import WatcherSettings
from watcher_records.execution import TriggeredWatch, TriggeredWatchCodec, Wid

__all__ = ["__version__", "TriggeredWatch", "TriggeredWatchCodec", "WatcherSettings", "Wid"]
