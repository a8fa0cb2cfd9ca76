from __future__ import annotations

from datetime import datetime, timezone

from .models import FeedEnvelope

MINIMUM_POLL_SLEEP_SECONDS = 10
MAXIMUM_POLL_SLEEP_SECONDS = 24 * 60 * 60


def feed_timestamp(envelope: FeedEnvelope) -> datetime | None:
    if envelope.last_updated <= 0:
        return None
    try:
        return datetime.fromtimestamp(envelope.last_updated, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        # Out of datetime range, e.g. a feed reporting milliseconds.
        return None


def is_feed_advanced(previous: datetime | None, current: datetime | None) -> bool:
    if previous is None or current is None:
        return True
    return current > previous


def poll_sleep_seconds(
    ttl: int,
    minimum: float = MINIMUM_POLL_SLEEP_SECONDS,
    maximum: float = MAXIMUM_POLL_SLEEP_SECONDS,
) -> float:
    return max(minimum, min(ttl + 1, maximum))
