#!/usr/bin/env python3
"""Inspect an LL-HLS media playlist from the command line."""

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime
from typing import List
from typing import Optional

from prometheus_client import start_http_server

from llhls import settings
from llhls.config import ParserConfig
from llhls.errors import ParsePlaylistError
from llhls.models import MediaPlaylist
from llhls.parser import read_playlist
from llhls.telemetry import setup_telemetry
from llhls.telemetry import shutdown_telemetry

logger = logging.getLogger(__name__)


def _json_default(value):
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def playlist_to_json(playlist: MediaPlaylist) -> str:
    return json.dumps(dataclasses.asdict(playlist), default=_json_default, indent=2)


def print_summary(playlist: MediaPlaylist) -> None:
    """Print version, timing, segment and report details."""
    print("=" * 60)
    print("LL-HLS MEDIA PLAYLIST")
    print("=" * 60)

    print(f"\nVersion: {playlist.version}")
    print(f"Target duration: {playlist.target_duration}s")
    print(f"Part target: {playlist.part_inf.part_target}s")
    print(f"Media sequence: {playlist.media_sequence_number}")
    print(f"Ended: {'yes' if playlist.end_list else 'no'}")

    sc = playlist.server_control
    print("\nServer Control:")
    print(f"  Can block reload: {'YES' if sc.can_block_reload else 'NO'}")
    print(f"  Part hold back: {sc.part_hold_back}s")
    print(f"  Can skip until: {sc.can_skip_until}s")

    if playlist.skip:
        print(f"\nSkipped segments: {playlist.skip.skipped_segments}")

    print(f"\nSegments: {len(playlist.media_segments)} ({playlist.duration:.3f}s total)")
    for segment in playlist.media_segments:
        parts = len(segment.partial_segments)
        print(f"  {segment.uri}  {segment.duration:.3f}s  parts={parts} independent={segment.independent_parts}")

    if playlist.preload_hint:
        hint = playlist.preload_hint
        print(f"\nPreload hint: {hint.type.value} {hint.uri}")

    if playlist.rendition_reports:
        print("\nRendition Reports:")
        for report in playlist.rendition_reports:
            print(f"  {report.uri}  LAST-MSN={report.last_msn} LAST-PART={report.last_part}")

    print("\n" + "=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="llhls-inspect", description=__doc__)
    parser.add_argument("path", help="Path to a media playlist (.m3u8)")
    parser.add_argument("--json", action="store_true", help="Print the parsed playlist as JSON")
    parser.add_argument("--config", default=settings.CONFIG_PATH, help="Parser config YAML file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")

    if settings.METRICS_PORT:
        start_http_server(settings.METRICS_PORT)
        logger.info(f"Serving metrics on port {settings.METRICS_PORT}")
    if settings.ENABLE_TELEMETRY:
        setup_telemetry("llhls-inspect", settings.OTEL_EXPORTER_OTLP_ENDPOINT, enable_console_export=False)

    try:
        config = ParserConfig(args.config)
        playlist = read_playlist(args.path, config)
    except ParsePlaylistError as e:
        logger.error(f"Failed to parse {args.path}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: invalid config - {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_telemetry()

    if args.json:
        print(playlist_to_json(playlist))
    else:
        print_summary(playlist)
    return 0


if __name__ == "__main__":
    sys.exit(main())
