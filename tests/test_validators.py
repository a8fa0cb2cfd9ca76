from __future__ import annotations

from datetime import datetime, timezone

from gbfs_exporter.ingest import validators
from gbfs_exporter.ingest.models import FeedEnvelope


def test_newer_envelope_counts_as_advanced() -> None:
    previous = validators.feed_timestamp(FeedEnvelope(last_updated=1600000000, ttl=5))
    current = validators.feed_timestamp(FeedEnvelope(last_updated=1600000060, ttl=5))

    assert validators.is_feed_advanced(previous, current)


def test_repeated_envelope_does_not_count_as_advanced() -> None:
    envelope = FeedEnvelope(last_updated=1600000000, ttl=5)
    timestamp = validators.feed_timestamp(envelope)

    assert not validators.is_feed_advanced(timestamp, timestamp)


def test_first_envelope_counts_as_advanced() -> None:
    current = validators.feed_timestamp(FeedEnvelope(last_updated=1600000000, ttl=5))

    assert validators.is_feed_advanced(None, current)


def test_feed_timestamp_is_none_without_last_updated() -> None:
    assert validators.feed_timestamp(FeedEnvelope(last_updated=0, ttl=10)) is None


def test_feed_timestamp_converts_unix_seconds() -> None:
    envelope = FeedEnvelope(last_updated=1600000000, ttl=10)

    assert validators.feed_timestamp(envelope) == datetime(
        2020, 9, 13, 12, 26, 40, tzinfo=timezone.utc
    )


def test_feed_timestamp_is_none_for_millisecond_values() -> None:
    envelope = FeedEnvelope(last_updated=1600000000000, ttl=10)

    assert validators.feed_timestamp(envelope) is None


def test_feed_timestamp_is_none_for_int64_max() -> None:
    envelope = FeedEnvelope(last_updated=2**63 - 1, ttl=10)

    assert validators.feed_timestamp(envelope) is None


def test_poll_sleep_is_floored_by_minimum() -> None:
    assert validators.poll_sleep_seconds(5, 10) == 10


def test_poll_sleep_follows_ttl_above_minimum() -> None:
    assert validators.poll_sleep_seconds(30, 10) == 31


def test_poll_sleep_floors_zero_and_negative_ttl() -> None:
    assert validators.poll_sleep_seconds(0) == validators.MINIMUM_POLL_SLEEP_SECONDS
    assert validators.poll_sleep_seconds(-60) == validators.MINIMUM_POLL_SLEEP_SECONDS


def test_poll_sleep_is_capped_for_huge_ttl() -> None:
    assert (
        validators.poll_sleep_seconds(10**20) == validators.MAXIMUM_POLL_SLEEP_SECONDS
    )
