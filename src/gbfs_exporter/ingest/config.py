from __future__ import annotations

import os
from dataclasses import dataclass

MODES = ("probe", "poll")
FIELD_SETS = ("full", "minimal")
POLL_FAILURE_POLICIES = ("continue", "exit")


def _get_env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _get_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = _get_env(name, default).strip().lower()
    if value not in choices:
        raise ValueError(
            f"Invalid value for {name}: {value!r} (expected one of {', '.join(choices)})"
        )
    return value


def _get_number(name: str, default: str, minimum: float = 0) -> float:
    raw = _get_env(name, default)
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid number for {name}: {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def exporter_mode() -> str:
    return _get_choice("GBFS_EXPORTER_MODE", "probe", MODES)


def listen_host() -> str:
    return _get_env("GBFS_EXPORTER_HOST", "0.0.0.0")


def listen_port() -> int:
    port = int(_get_number("GBFS_EXPORTER_PORT", "9607", minimum=1))
    if port > 65535:
        raise ValueError(f"GBFS_EXPORTER_PORT must be <= 65535, got {port}")
    return port


def station_status_url() -> str:
    return _get_env(
        "GBFS_STATION_STATUS_URL",
        "https://gbfs.citibikenyc.com/gbfs/en/station_status.json",
    )


def metric_fields() -> str:
    return _get_choice("GBFS_METRIC_FIELDS", "full", FIELD_SETS)


def fetch_timeout() -> float:
    timeout = _get_number("GBFS_FETCH_TIMEOUT", "30")
    if timeout == 0:
        raise ValueError("GBFS_FETCH_TIMEOUT must be > 0")
    return timeout


def max_stations() -> int:
    return int(_get_number("GBFS_MAX_STATIONS", "0"))


def min_poll_sleep() -> float:
    return _get_number("GBFS_MIN_POLL_SLEEP", "10")


def poll_failure_policy() -> str:
    return _get_choice("GBFS_POLL_FAILURE_POLICY", "continue", POLL_FAILURE_POLICIES)


def log_level() -> str:
    return _get_env("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class ExporterSettings:
    mode: str = "probe"
    host: str = "0.0.0.0"
    port: int = 9607
    station_status_url: str = "https://gbfs.citibikenyc.com/gbfs/en/station_status.json"
    metric_fields: str = "full"
    fetch_timeout: float = 30.0
    max_stations: int = 0
    min_poll_sleep: float = 10.0
    poll_failure_policy: str = "continue"
    log_level: str = "INFO"


def load_settings() -> ExporterSettings:
    return ExporterSettings(
        mode=exporter_mode(),
        host=listen_host(),
        port=listen_port(),
        station_status_url=station_status_url(),
        metric_fields=metric_fields(),
        fetch_timeout=fetch_timeout(),
        max_stations=max_stations(),
        min_poll_sleep=min_poll_sleep(),
        poll_failure_policy=poll_failure_policy(),
        log_level=log_level(),
    )
