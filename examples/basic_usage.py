#!/usr/bin/env python3
"""Programmatic watch record example.

This demonstrates using the record components directly:

* load settings from `.env`
* record a schedule firing as a triggered watch
* encode it to JSON and decode it back, as crash recovery would
"""

from __future__ import annotations

import argparse
from datetime import UTC, datetime
from typing import Sequence

from watcher_records.config import WatcherSettings
from watcher_records.execution import TriggeredWatch, TriggeredWatchCodec, Wid
from watcher_records.logging import configure_logging
from watcher_records.trigger import ScheduleTriggerEvent, TriggerService


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Round-trip a watch record (example).")
    parser.add_argument("--watch-id", required=True, help="Watch that fired")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = WatcherSettings()
    configure_logging(settings.log_level)

    now = datetime.now(tz=UTC)
    event = ScheduleTriggerEvent(job_name=args.watch_id, triggered_time=now, scheduled_time=now)
    watch = TriggeredWatch(id=Wid.generate(args.watch_id, now), trigger_event=event)

    codec = TriggeredWatchCodec(TriggerService.default())
    body = codec.encode(watch, settings.encode_options())
    print(f"Encoded {watch.id}:")
    print(body.decode("utf-8"))

    restored = codec.decode(str(watch.id), settings.record_version, body)
    print(f"Restored record equals original: {restored == watch}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
