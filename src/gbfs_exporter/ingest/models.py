from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedEnvelope:
    last_updated: int
    ttl: int


@dataclass(frozen=True)
class StationStatus:
    station_id: str
    bikes_available: int
    bikes_disabled: int
    docks_available: int
    docks_disabled: int
    is_installed: bool
    is_renting: bool
    is_returning: bool
    last_reported: int


@dataclass(frozen=True)
class StationStatusResponse:
    envelope: FeedEnvelope
    stations: tuple[StationStatus, ...]


@dataclass(frozen=True)
class FeedResponse:
    url: str
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
