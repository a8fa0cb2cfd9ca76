from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

from prometheus_client import REGISTRY, CollectorRegistry, Gauge, generate_latest

from ..ingest.models import StationStatus, StationStatusResponse

NAMESPACE = "gbfs"
STATION_LABEL = "station_id"


def bool_to_float(value: bool) -> float:
    return 1.0 if value else 0.0


@dataclass(frozen=True)
class GaugeField:
    name: str
    help: str
    value: Callable[[StationStatus], float]


MINIMAL_FIELDS: tuple[GaugeField, ...] = (
    GaugeField(
        "bikes_available",
        "The number of bikes available for rental",
        lambda s: float(s.bikes_available),
    ),
    GaugeField(
        "bikes_disabled",
        "The number of disabled bikes",
        lambda s: float(s.bikes_disabled),
    ),
    GaugeField(
        "docks_available",
        "The number of docks accepting bike returns",
        lambda s: float(s.docks_available),
    ),
)

FULL_FIELDS: tuple[GaugeField, ...] = MINIMAL_FIELDS + (
    GaugeField(
        "docks_disabled",
        "The number of empty but disabled dock points",
        lambda s: float(s.docks_disabled),
    ),
    GaugeField(
        "installed",
        "Indicates if the station is currently installed on the street",
        lambda s: bool_to_float(s.is_installed),
    ),
    GaugeField(
        "renting",
        "Indicates if the station is currently renting bikes, "
        "regardless of if any bikes are available",
        lambda s: bool_to_float(s.is_renting),
    ),
    GaugeField(
        "returning",
        "Indicates if the station is currently accepting bike returns, "
        "regardless of if any docks are available",
        lambda s: bool_to_float(s.is_returning),
    ),
    GaugeField(
        "last_reported_timestamp_seconds",
        "Last time this station reported its status to the feed, in unixtime",
        lambda s: float(s.last_reported),
    ),
)

FIELD_SETS: dict[str, tuple[GaugeField, ...]] = {
    "minimal": MINIMAL_FIELDS,
    "full": FULL_FIELDS,
}


def fields_for(name: str) -> tuple[GaugeField, ...]:
    try:
        return FIELD_SETS[name]
    except KeyError:
        raise ValueError(f"Unknown metric field set: {name!r}") from None


class MetricSet:
    """Station gauges registered in one registry.

    An isolated set owns a fresh ``CollectorRegistry`` and is meant to live for
    a single probe. A shared set registers into ``registry`` (the process
    registry by default) and is updated in place for the life of the process.
    """

    def __init__(
        self,
        fields: tuple[GaugeField, ...] = FULL_FIELDS,
        *,
        isolated: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        if isolated:
            registry = CollectorRegistry()
        elif registry is None:
            registry = REGISTRY
        self.isolated = isolated
        self.registry = registry
        self.fields = fields
        self._gauges = {
            field.name: Gauge(
                field.name,
                field.help,
                [STATION_LABEL],
                namespace=NAMESPACE,
                registry=registry,
            )
            for field in fields
        }
        self._stations: set[str] = set()
        self._lock = threading.Lock()

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    def observe(self, station_id: str, field_name: str, value: float) -> None:
        self._gauges[field_name].labels(station_id).set(value)

    def populate(self, response: StationStatusResponse) -> int:
        with self._lock:
            current: set[str] = set()
            for station in response.stations:
                for field in self.fields:
                    self.observe(station.station_id, field.name, field.value(station))
                current.add(station.station_id)
            for station_id in self._stations - current:
                for gauge in self._gauges.values():
                    gauge.remove(station_id)
            self._stations = current
        return len(current)

    def render(self) -> bytes:
        return generate_latest(self.registry)
