from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Wire integers are signed 64-bit; anything wider is a malformed feed.
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class StationStatusPayload(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    station_id: str
    num_bikes_available: Int64
    num_bikes_disabled: Int64 = 0
    num_docks_available: Int64
    num_docks_disabled: Int64 = 0
    # Numeric on the wire; normalized to booleans after validation.
    is_installed: Int64
    is_renting: Int64
    is_returning: Int64
    last_reported: Int64


class StationStatusData(BaseModel):
    stations: list[StationStatusPayload]


class StationStatusDocument(BaseModel):
    last_updated: Int64 = 0
    ttl: Int64 = 0
    data: StationStatusData
