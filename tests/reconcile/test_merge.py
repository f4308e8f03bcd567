"""Tests for the merge engine."""

from __future__ import annotations

import copy
from typing import Any

from festmap.contracts.document import Location, MapDocument
from festmap.reconcile.merge import MERGE_FORMAT_VERSION, MergeEngine, merge_location
from tests.conftest import FIXED_NOW


def _engine() -> MergeEngine:
    return MergeEngine(clock=lambda: FIXED_NOW)


def _doc(payload: dict[str, Any]) -> MapDocument:
    return MapDocument.from_payload(payload)


def test_matching_record_gains_new_fields() -> None:
    canonical = _doc({"locations": {"stages": [{"name": "Main Stage", "lat": 52.0, "lng": 15.0}]}})
    incoming = _doc({"locations": {"stages": [{"name": "main stage", "lat": 52.0, "lng": 15.0, "capacity": 5000}]}})

    result = _engine().merge(canonical, incoming)

    stage = result.document.locations["stages"][0]
    assert stage.extra_fields == {"capacity": 5000}
    assert stage.lat == 52.0
    assert result.stats.new_locations == 0
    assert result.stats.updated_locations == 1


def test_update_overwrites_only_incoming_fields(canonical_payload: dict[str, Any]) -> None:
    incoming = _doc({"locations": {"stages": [{"name": "Main Stage", "lat": 52.0, "lng": 15.0, "capacity": 4500}]}})

    result = _engine().merge(_doc(canonical_payload), incoming)

    stage = result.document.locations["stages"][0].to_payload()
    assert stage == {
        "name": "Main Stage",
        "lat": 52.0,
        "lng": 15.0,
        "capacity": 4500,
        "description": "Open air",
    }
    assert result.stats.updated_locations == 1
    assert result.stats.new_locations == 0


def test_unmatched_record_is_appended(canonical_payload: dict[str, Any]) -> None:
    incoming = _doc({"locations": {"stages": [{"name": "Techno Barn", "lat": 52.01, "lng": 15.01}]}})

    result = _engine().merge(_doc(canonical_payload), incoming)

    names = [location.name for location in result.document.locations["stages"]]
    assert names == ["Main Stage", "Forest Stage", "Techno Barn"]
    assert result.stats.new_locations == 1
    assert result.stats.updated_locations == 0


def test_unknown_category_is_created(canonical_payload: dict[str, Any]) -> None:
    incoming = _doc({"locations": {"toilets": [{"name": "WC North", "lat": 52.02, "lng": 15.02}]}})

    result = _engine().merge(_doc(canonical_payload), incoming)

    assert [loc.name for loc in result.document.locations["toilets"]] == ["WC North"]
    assert result.document.categories == ["stages", "foodVendors", "toilets"]
    assert result.stats.new_locations == 1


def test_categories_absent_from_incoming_are_untouched(canonical_payload: dict[str, Any]) -> None:
    canonical = _doc(canonical_payload)
    incoming = _doc({"locations": {"stages": [{"name": "Main Stage", "lat": 52.0, "lng": 15.0}]}})

    result = _engine().merge(canonical, incoming)

    assert result.document.locations["foodVendors"] == canonical.locations["foodVendors"]


def test_inputs_are_not_mutated(canonical_payload: dict[str, Any]) -> None:
    canonical = _doc(canonical_payload)
    incoming = _doc(
        {
            "locations": {
                "stages": [{"name": "MAIN STAGE", "lat": 52.0, "lng": 15.0, "capacity": 1}],
                "bars": [{"name": "Beach Bar", "lat": 52.03, "lng": 15.03}],
            }
        }
    )
    canonical_before = copy.deepcopy(canonical.to_payload())
    incoming_before = copy.deepcopy(incoming.to_payload())

    _engine().merge(canonical, incoming)

    assert canonical.to_payload() == canonical_before
    assert incoming.to_payload() == incoming_before


def test_bookkeeping_fields_are_refreshed(canonical_payload: dict[str, Any]) -> None:
    incoming = _doc(
        {
            "version": "0.1",
            "metadata": {"totalLocations": 999},
            "locations": {
                "stages": [{"name": "Techno Barn", "lat": 52.01, "lng": 15.01}],
                "bars": [{"name": "Beach Bar", "lat": 52.03, "lng": 15.03}],
            },
        }
    )

    result = _engine().merge(_doc(canonical_payload), incoming)

    payload = result.document.to_payload()
    assert payload["version"] == MERGE_FORMAT_VERSION
    assert payload["lastUpdated"] == "2025-07-20T12:00:00+00:00"
    assert payload["metadata"] == {"totalLocations": 5, "festival": "Garbicz"}
    assert payload["metadata"]["totalLocations"] == sum(len(v) for v in payload["locations"].values())


def test_total_locations_is_set_when_canonical_has_no_metadata() -> None:
    canonical = _doc({"locations": {"stages": []}})
    incoming = _doc({"locations": {"stages": [{"name": "A", "lat": 1, "lng": 1}, {"name": "B", "lat": 2, "lng": 2}]}})

    result = _engine().merge(canonical, incoming)

    assert result.document.metadata == {"totalLocations": 2}
    assert result.document.to_payload()["metadata"] == {"totalLocations": 2}


def test_first_match_wins() -> None:
    canonical = _doc(
        {
            "locations": {
                "bars": [
                    {"name": "Beach Bar", "lat": 10.0, "lng": 10.0, "tag": "first"},
                    {"name": "Other", "lat": 52.0, "lng": 15.0, "tag": "second"},
                ]
            }
        }
    )
    incoming = _doc({"locations": {"bars": [{"name": "beach bar", "lat": 52.0, "lng": 15.0, "open": True}]}})

    result = _engine().merge(canonical, incoming)

    first, second = result.document.locations["bars"]
    assert first.to_payload() == {"name": "beach bar", "lat": 52.0, "lng": 15.0, "tag": "first", "open": True}
    assert second.to_payload() == {"name": "Other", "lat": 52.0, "lng": 15.0, "tag": "second"}
    assert result.stats.updated_locations == 1


def test_records_appended_earlier_in_the_same_merge_can_be_matched() -> None:
    canonical = _doc({"locations": {}})
    incoming = _doc(
        {
            "locations": {
                "bars": [
                    {"name": "Beach Bar", "lat": 52.0, "lng": 15.0},
                    {"name": "BEACH BAR", "lat": 52.0, "lng": 15.0, "open": "24h"},
                ]
            }
        }
    )

    result = _engine().merge(canonical, incoming)

    assert len(result.document.locations["bars"]) == 1
    assert result.document.locations["bars"][0].extra_fields == {"open": "24h"}
    assert result.stats.new_locations == 1
    assert result.stats.updated_locations == 1


def test_proximity_match_takes_incoming_name() -> None:
    canonical = _doc({"locations": {"stages": [{"name": "Main Stage", "lat": 52.0, "lng": 15.0}]}})
    incoming = _doc({"locations": {"stages": [{"name": "Big Top", "lat": 52.00001, "lng": 15.00001}]}})

    result = _engine().merge(canonical, incoming)

    assert [loc.name for loc in result.document.locations["stages"]] == ["Big Top"]
    assert result.stats.updated_locations == 1


def test_unknown_top_level_fields_survive() -> None:
    canonical = _doc({"locations": {}, "festival": {"name": "Garbicz", "year": 2025}})

    result = _engine().merge(canonical, _doc({"locations": {}}))

    assert result.document.to_payload()["festival"] == {"name": "Garbicz", "year": 2025}


def test_merge_location_is_shallow() -> None:
    existing = Location(name="Main Stage", lat=52, lng=15, hours={"fri": "18-06", "sat": "18-06"})
    incoming = Location(name="Main Stage", lat=52, lng=15, hours={"sun": "12-20"})

    merged = merge_location(existing, incoming)

    assert merged.extra_fields == {"hours": {"sun": "12-20"}}
    assert isinstance(merged.lat, int)


def test_on_record_is_called_once_per_incoming_record(canonical_payload: dict[str, Any]) -> None:
    calls: list[None] = []
    incoming = _doc(
        {
            "locations": {
                "stages": [{"name": "Main Stage", "lat": 52.0, "lng": 15.0}],
                "bars": [{"name": "A", "lat": 1, "lng": 1}, {"name": "B", "lat": 2, "lng": 2}],
            }
        }
    )

    _engine().merge(_doc(canonical_payload), incoming, on_record=lambda: calls.append(None))

    assert len(calls) == 3


def test_merge_keeps_existing_key_order_and_appends_new_keys() -> None:
    canonical = _doc(
        {
            "locations": {
                "stages": [{"id": 7, "name": "Main Stage", "capacity": 3000, "lat": 52.0, "lng": 15.0}],
            },
            "version": "1.0",
            "metadata": {"totalLocations": 1},
        }
    )
    incoming = _doc(
        {"locations": {"stages": [{"open": True, "name": "main stage", "lat": 52.0, "lng": 15.0, "capacity": 5000}]}}
    )

    result = _engine().merge(canonical, incoming)

    stage = result.document.locations["stages"][0].to_payload()
    assert list(stage) == ["id", "name", "capacity", "lat", "lng", "open"]
    assert stage["capacity"] == 5000
    assert list(result.document.to_payload()) == ["locations", "version", "metadata", "lastUpdated"]
