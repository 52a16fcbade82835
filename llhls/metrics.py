"""Prometheus metrics for playlist parsing."""

from prometheus_client import Counter
from prometheus_client import Histogram

playlists_parsed = Counter(
    "llhls_playlists_parsed_total",
    "Number of playlist documents parsed, by outcome",
    ["outcome"],
)
segments_parsed = Counter("llhls_segments_parsed_total", "Number of media segments sealed")
ignored_lines = Counter(
    "llhls_ignored_lines_total",
    "Lines skipped by the scanner, by reason",
    ["reason"],
)
parse_duration = Histogram("llhls_parse_duration_seconds", "Time taken to parse one playlist document")
