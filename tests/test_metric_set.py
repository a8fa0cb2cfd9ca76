from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from gbfs_exporter.core.metric_set import (
    FULL_FIELDS,
    MINIMAL_FIELDS,
    MetricSet,
    bool_to_float,
    fields_for,
)
from gbfs_exporter.ingest.parser import station_status_data


def test_bool_to_float() -> None:
    assert bool_to_float(True) == 1.0
    assert bool_to_float(False) == 0.0


def test_fields_for_known_and_unknown_sets() -> None:
    assert fields_for("minimal") is MINIMAL_FIELDS
    assert fields_for("full") is FULL_FIELDS
    with pytest.raises(ValueError):
        fields_for("everything")


def test_isolated_sets_have_independent_registries() -> None:
    first = MetricSet(FULL_FIELDS, isolated=True)
    second = MetricSet(FULL_FIELDS, isolated=True)

    first.observe("A1", "bikes_available", 3)

    assert first.registry is not second.registry
    assert b'station_id="A1"' in first.render()
    assert b'station_id="A1"' not in second.render()


def test_populate_renders_full_field_set(single_station_body: bytes) -> None:
    metric_set = MetricSet(FULL_FIELDS)

    count = metric_set.populate(station_status_data(single_station_body))
    output = metric_set.render().decode()

    assert count == 1
    assert 'gbfs_bikes_available{station_id="7001"} 4.0' in output
    assert 'gbfs_bikes_disabled{station_id="7001"} 0.0' in output
    assert 'gbfs_docks_available{station_id="7001"} 11.0' in output
    assert 'gbfs_docks_disabled{station_id="7001"} 0.0' in output
    assert 'gbfs_installed{station_id="7001"} 1.0' in output
    assert 'gbfs_renting{station_id="7001"} 1.0' in output
    assert 'gbfs_returning{station_id="7001"} 0.0' in output
    assert 'gbfs_last_reported_timestamp_seconds{station_id="7001"} 1.6e+09' in output


def test_minimal_field_set_registers_three_gauges(single_station_body: bytes) -> None:
    metric_set = MetricSet(MINIMAL_FIELDS)

    metric_set.populate(station_status_data(single_station_body))
    output = metric_set.render().decode()

    assert metric_set.field_names == ["bikes_available", "bikes_disabled", "docks_available"]
    assert "gbfs_bikes_available" in output
    assert "gbfs_renting" not in output
    assert "gbfs_last_reported_timestamp_seconds" not in output


def test_shared_set_uses_given_registry_and_drops_vanished_stations(
    make_station, make_feed
) -> None:
    registry = CollectorRegistry()
    metric_set = MetricSet(FULL_FIELDS, isolated=False, registry=registry)

    metric_set.populate(station_status_data(make_feed(make_station("A"), make_station("B"))))
    metric_set.populate(
        station_status_data(make_feed(make_station("B", num_bikes_available=9)))
    )

    assert metric_set.registry is registry
    assert registry.get_sample_value("gbfs_bikes_available", {"station_id": "A"}) is None
    assert registry.get_sample_value("gbfs_bikes_available", {"station_id": "B"}) == 9.0
