from __future__ import annotations

import json
from typing import Any

import pytest


def station_payload(station_id: str = "7001", **overrides: Any) -> dict[str, Any]:
    station: dict[str, Any] = {
        "station_id": station_id,
        "num_bikes_available": 4,
        "num_docks_available": 11,
        "is_installed": 1,
        "is_renting": 1,
        "is_returning": 0,
        "last_reported": 1600000000,
    }
    station.update(overrides)
    return station


def feed_body(*stations: dict[str, Any], ttl: int = 5, last_updated: int = 1600000010) -> bytes:
    return json.dumps(
        {
            "last_updated": last_updated,
            "ttl": ttl,
            "data": {"stations": list(stations)},
        }
    ).encode()


@pytest.fixture
def single_station_body() -> bytes:
    return feed_body(station_payload())


@pytest.fixture
def make_station():
    return station_payload


@pytest.fixture
def make_feed():
    return feed_body
