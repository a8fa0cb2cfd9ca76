from __future__ import annotations

import logging
import time

from ..core.instrumentation import PROBE_DURATION, PROBES
from ..core.metric_set import FULL_FIELDS, GaugeField, MetricSet
from ..errors import ConfigError, ExporterError
from ..ingest.gbfs_client import fetch_feed
from ..ingest.parser import station_status_data

logger = logging.getLogger(__name__)


def validate_target(target: str | None) -> str:
    if target is None or not target.strip():
        raise ConfigError("Target parameter missing")
    return target.strip()


def probe_target(
    target: str | None,
    fields: tuple[GaugeField, ...] = FULL_FIELDS,
    timeout: float = 30,
    max_stations: int = 0,
) -> bytes:
    """Fetch one station_status feed and render it as an isolated metric set.

    Raises an ``ExporterError`` subclass for every failure; nothing is
    rendered unless the whole feed decoded.
    """
    started_at = time.monotonic()
    try:
        url = validate_target(target)
        response = fetch_feed(url, timeout=timeout)
        if not response.ok:
            logger.info("Decoding HTTP %s answer from %s", response.status_code, url)
        status = station_status_data(response.body, url=url, max_stations=max_stations)
        metric_set = MetricSet(fields, isolated=True)
        station_count = metric_set.populate(status)
        output = metric_set.render()
    except ExporterError as exc:
        PROBES.labels(result=exc.reason).inc()
        logger.warning("Probe of %r failed (%s): %s", target, exc.reason, exc)
        raise
    finally:
        PROBE_DURATION.observe(time.monotonic() - started_at)

    PROBES.labels(result="success").inc()
    logger.debug(
        "Probe of %s rendered %d stations in %.3fs",
        url,
        station_count,
        time.monotonic() - started_at,
    )
    return output
