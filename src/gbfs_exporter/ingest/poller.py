from __future__ import annotations

import logging
import os
import signal
import threading
from datetime import datetime
from typing import Callable

from ..core.instrumentation import LAST_POLL_SUCCESS, POLLS
from ..errors import ExporterError
from .config import ExporterSettings
from .gbfs_client import fetch_feed
from .models import StationStatusResponse
from .parser import station_status_data
from .validators import (
    MINIMUM_POLL_SLEEP_SECONDS,
    feed_timestamp,
    is_feed_advanced,
    poll_sleep_seconds,
)

logger = logging.getLogger(__name__)

PollHandler = Callable[[StationStatusResponse], object]


def poll_once(
    url: str, timeout: float = 30, max_stations: int = 0
) -> StationStatusResponse:
    response = fetch_feed(url, timeout=timeout)
    if not response.ok:
        logger.info("Decoding HTTP %s answer from %s", response.status_code, url)
    return station_status_data(response.body, url=url, max_stations=max_stations)


def run_polling(
    handler: PollHandler,
    url: str,
    *,
    timeout: float = 30,
    max_stations: int = 0,
    min_sleep: float = MINIMUM_POLL_SLEEP_SECONDS,
    failure_policy: str = "continue",
    stop: threading.Event | None = None,
) -> None:
    """Fetch ``url`` and hand each decoded snapshot to ``handler`` until stopped.

    After a successful fetch the loop waits ``max(min_sleep, ttl + 1)`` seconds,
    capped at one day. With ``failure_policy="exit"`` any error raised while
    fetching, decoding or handling a snapshot propagates to the caller;
    otherwise it is logged, the handler's previous values are left in place
    and the next attempt happens after ``min_sleep`` seconds.
    """
    if stop is None:
        stop = threading.Event()
    previous_ts: datetime | None = None

    while not stop.is_set():
        try:
            status = poll_once(url, timeout=timeout, max_stations=max_stations)
            current_ts = feed_timestamp(status.envelope)
            if not is_feed_advanced(previous_ts, current_ts):
                logger.info("Feed %s last_updated did not advance (%s)", url, current_ts)
            previous_ts = current_ts
            handler(status)
        except Exception as exc:
            expected = isinstance(exc, ExporterError)
            POLLS.labels(result=exc.reason if expected else "unexpected_error").inc()
            if failure_policy == "exit":
                raise
            logger.error(
                "Polling %s failed, keeping previous values: %s",
                url,
                exc,
                exc_info=not expected,
            )
            sleep_for = min_sleep
        else:
            POLLS.labels(result="success").inc()
            LAST_POLL_SUCCESS.set_to_current_time()
            sleep_for = poll_sleep_seconds(status.envelope.ttl, min_sleep)
            logger.debug(
                "Polled %s: %d stations, ttl=%ss, next poll in %ss",
                url,
                len(status.stations),
                status.envelope.ttl,
                sleep_for,
            )

        stop.wait(sleep_for)


def _terminate_process() -> None:
    os.kill(os.getpid(), signal.SIGTERM)


class PollWorker:
    """Runs ``run_polling`` on a daemon thread for the life of the server."""

    def __init__(
        self,
        handler: PollHandler,
        settings: ExporterSettings,
        on_fatal: Callable[[], None] = _terminate_process,
    ) -> None:
        self._handler = handler
        self._settings = settings
        self._on_fatal = on_fatal
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="gbfs-poller", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        settings = self._settings
        try:
            run_polling(
                self._handler,
                settings.station_status_url,
                timeout=settings.fetch_timeout,
                max_stations=settings.max_stations,
                min_sleep=settings.min_poll_sleep,
                failure_policy=settings.poll_failure_policy,
                stop=self._stop,
            )
        except Exception as exc:
            logger.critical(
                "Polling %s failed, shutting down: %s",
                settings.station_status_url,
                exc,
                exc_info=not isinstance(exc, ExporterError),
            )
            self._on_fatal()
