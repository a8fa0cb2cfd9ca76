from __future__ import annotations

from pydantic import ValidationError

from ..api.schemas.station_status import StationStatusDocument, StationStatusPayload
from ..errors import SchemaError
from .models import FeedEnvelope, StationStatus, StationStatusResponse


def to_flag(value: int) -> bool:
    """Map a numeric wire flag to a boolean; any non-zero value is true."""
    return value != 0


def station_status(payload: StationStatusPayload) -> StationStatus:
    return StationStatus(
        station_id=payload.station_id,
        bikes_available=payload.num_bikes_available,
        bikes_disabled=payload.num_bikes_disabled,
        docks_available=payload.num_docks_available,
        docks_disabled=payload.num_docks_disabled,
        is_installed=to_flag(payload.is_installed),
        is_renting=to_flag(payload.is_renting),
        is_returning=to_flag(payload.is_returning),
        last_reported=payload.last_reported,
    )


def station_status_data(
    body: bytes | str, url: str = "", max_stations: int = 0
) -> StationStatusResponse:
    try:
        document = StationStatusDocument.model_validate_json(body)
    except ValidationError as exc:
        raise SchemaError(url, exc) from exc

    stations = document.data.stations
    if max_stations and len(stations) > max_stations:
        raise SchemaError(
            url, f"feed lists {len(stations)} stations, limit is {max_stations}"
        )

    return StationStatusResponse(
        envelope=FeedEnvelope(last_updated=document.last_updated, ttl=document.ttl),
        stations=tuple(station_status(payload) for payload in stations),
    )
