from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

PROBES = Counter(
    "gbfs_exporter_probes",
    "Probe requests handled, by outcome",
    ["result"],
)
PROBE_DURATION = Histogram(
    "gbfs_exporter_probe_duration_seconds",
    "Time spent fetching, decoding and rendering one probe",
)
POLLS = Counter(
    "gbfs_exporter_polls",
    "Background poll iterations, by outcome",
    ["result"],
)
LAST_POLL_SUCCESS = Gauge(
    "gbfs_exporter_last_poll_success_timestamp_seconds",
    "Unix time of the last successful background poll",
)
