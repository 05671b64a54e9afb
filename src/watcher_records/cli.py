"""CLI entrypoint for inspecting and minting watch records."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime

from pydantic import ValidationError

from watcher_records import __version__
from watcher_records.config import WatcherSettings
from watcher_records.dates import parse_date_time
from watcher_records.execution import (
    TriggeredWatch,
    TriggeredWatchCodec,
    WatchRecordParseError,
    Wid,
)
from watcher_records.logging import configure_logging
from watcher_records.trigger import (
    ManualTriggerEvent,
    ScheduleTriggerEvent,
    TriggerEvent,
    TriggerEventParseError,
    TriggerService,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="watcher-records",
        description="Decode and create triggered watch execution records",
    )
    parser.add_argument("--version", action="version", version=f"watcher-records {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    decode = subparsers.add_parser("decode", help="Decode a persisted watch record")
    decode.add_argument("--id", dest="record_id", required=True, help="Watch execution id")
    decode.add_argument(
        "--file",
        default="-",
        help="Path to the JSON record body ('-' reads stdin)",
    )

    new = subparsers.add_parser("new", help="Create a watch record for a schedule firing")
    new.add_argument("--watch-id", required=True, help="Watch the record belongs to")
    new.add_argument(
        "--scheduled-time",
        default=None,
        help="ISO-8601 time the schedule fired for (defaults to now)",
    )
    new.add_argument(
        "--triggered-time",
        default=None,
        help="ISO-8601 time the watch was triggered (defaults to the scheduled time)",
    )
    new.add_argument(
        "--manual",
        action="store_true",
        help="Record the firing as a manual execution wrapping the schedule event",
    )

    return parser


def _read_record(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = WatcherSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    codec = TriggeredWatchCodec(TriggerService.default())

    try:
        if args.command == "decode":
            watch = codec.decode(args.record_id, settings.record_version, _read_record(args.file))
            logger.info(
                "Watch record decoded",
                extra={"record_id": str(watch.id), "trigger_type": watch.trigger_event.type},
            )
            print(f"watch: {watch.id.watch_id}")
            print(f"trigger: {watch.trigger_event.type}")
            print(codec.encode(watch, settings.encode_options()).decode("utf-8"))
            return 0

        if args.command == "new":
            scheduled = (
                parse_date_time(args.scheduled_time)
                if args.scheduled_time
                else datetime.now(tz=UTC)
            )
            triggered = parse_date_time(args.triggered_time) if args.triggered_time else scheduled

            event: TriggerEvent = ScheduleTriggerEvent(
                job_name=args.watch_id, triggered_time=triggered, scheduled_time=scheduled
            )
            if args.manual:
                event = ManualTriggerEvent(job_name=args.watch_id, trigger_event=event)

            watch = TriggeredWatch(id=Wid.generate(args.watch_id, triggered), trigger_event=event)
            print(str(watch.id))
            print(codec.encode(watch, settings.encode_options()).decode("utf-8"))
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (WatchRecordParseError, TriggerEventParseError) as e:
        logger.warning(str(e), extra={"command": args.command})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
