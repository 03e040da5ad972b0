from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, NoReturn

from dotenv import load_dotenv

from timecollage.app import CollageRequest, generate_collage
from timecollage.config import configure_logging
from timecollage.domain.time_windows import DEFAULT_LOOKBACK, TimeWindow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ValueError(message)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog="timecollage",
        description="Render a collage of the albums a Last.fm user spent the most time on",
    )
    parser.add_argument("user", help="Last.fm user name")
    parser.add_argument("output", help="Output image path (.jpg, .jpeg or .png)")
    parser.add_argument(
        "--start",
        type=str,
        help="ISO-8601 timestamp (UTC) marking the inclusive start of the window",
    )
    parser.add_argument(
        "--end",
        type=str,
        help="ISO-8601 timestamp (UTC) marking the exclusive end of the window",
    )
    parser.add_argument(
        "--lookback-days",
        type=float,
        help=f"Window length in days when --start is omitted (default: {DEFAULT_LOOKBACK.days})",
    )
    parser.add_argument(
        "--no-labels",
        action="store_true",
        help="Do not draw artist, album and listening time above each cover",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _build_request(args: argparse.Namespace) -> CollageRequest:
    start = _parse_iso_datetime(args.start) if args.start else None
    end = _parse_iso_datetime(args.end) if args.end else None

    lookback = DEFAULT_LOOKBACK
    if args.lookback_days is not None:
        if args.lookback_days <= 0:
            raise ValueError("Lookback days must be positive")
        lookback = timedelta(days=args.lookback_days)

    if start and end and start >= end:
        raise ValueError("Time window start must be before end")

    return CollageRequest(
        user=args.user,
        output_path=Path(args.output),
        window=TimeWindow(start=start, end=end, lookback=lookback),
        show_labels=False if args.no_labels else None,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    verbose = "--verbose" in args_list
    configure_logging(level=logging.DEBUG if verbose else None)
    try:
        parsed_args = _parse_args(args_list)
        request = _build_request(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = generate_collage(request)
    except Exception:
        log.exception("Fatal error while generating collage")
        sys.exit(1)

    for message in result.summary.messages:
        log.warning(message)
    log.info(
        "Wrote collage with %d albums to %s", len(result.summary.albums), result.output_path
    )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def entrypoint() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    entrypoint()
