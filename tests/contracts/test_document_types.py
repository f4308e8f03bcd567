import json
from typing import Any

import pytest
from pydantic import ValidationError

from festmap.contracts.document import (
    Location,
    MapDocument,
    ValidationResult,
    canonical_json,
    count_locations,
    render_document,
)


def test_location_keeps_extra_fields_verbatim() -> None:
    location = Location.model_validate(
        {"name": "Main Stage", "lat": 52, "lng": 15.5, "capacity": 3000, "tags": ["loud", "outdoor"]}
    )

    assert location.extra_fields == {"capacity": 3000, "tags": ["loud", "outdoor"]}
    assert location.to_payload() == {
        "name": "Main Stage",
        "lat": 52,
        "lng": 15.5,
        "capacity": 3000,
        "tags": ["loud", "outdoor"],
    }


def test_location_requires_identity_fields() -> None:
    with pytest.raises(ValidationError):
        Location.model_validate({"name": "Main Stage", "lat": 52})


def test_map_document_round_trips_payload(canonical_payload: dict[str, Any]) -> None:
    document = MapDocument.from_payload(canonical_payload)

    assert document.to_payload() == canonical_payload
    assert document.last_updated == "2025-07-01T10:00:00+00:00"
    assert document.categories == ["stages", "foodVendors"]
    assert document.total_locations() == 3


def test_map_document_omits_bookkeeping_fields_it_never_had() -> None:
    document = MapDocument.from_payload({"locations": {"bars": []}})

    assert document.to_payload() == {"locations": {"bars": []}}


def test_map_document_keeps_unknown_top_level_fields() -> None:
    document = MapDocument.from_payload({"locations": {}, "schema": "festival-map"})

    assert document.to_payload()["schema"] == "festival-map"


def test_count_locations_accepts_documents_and_payloads(canonical_payload: dict[str, Any]) -> None:
    assert count_locations(canonical_payload) == 3
    assert count_locations(MapDocument.from_payload(canonical_payload)) == 3
    assert count_locations({"locations": {"a": [{}], "b": "skipped"}}) == 1
    assert count_locations({}) == 0


def test_canonical_json_ignores_key_order() -> None:
    first = {"locations": {"bars": [{"name": "A", "lat": 1, "lng": 2}]}, "version": "2.0"}
    second = {"version": "2.0", "locations": {"bars": [{"lng": 2, "lat": 1, "name": "A"}]}}

    assert canonical_json(first) == canonical_json(second)
    assert canonical_json(MapDocument.from_payload(first)) == canonical_json(second)


def test_canonical_json_detects_value_changes() -> None:
    before = {"locations": {"bars": [{"name": "A", "lat": 1, "lng": 2}]}}
    after = {"locations": {"bars": [{"name": "A", "lat": 1, "lng": 3}]}}

    assert canonical_json(before) != canonical_json(after)


def test_render_document_is_indented_utf8() -> None:
    document = MapDocument.from_payload({"locations": {"bars": [{"name": "Café Łąka", "lat": 1, "lng": 2}]}})

    rendered = render_document(document)

    assert rendered.endswith(b"\n")
    assert "Café Łąka" in rendered.decode("utf-8")
    assert json.loads(rendered) == document.to_payload()


def test_validation_result_constructors() -> None:
    assert ValidationResult.ok() == ValidationResult(valid=True, error=None)
    failed = ValidationResult.fail("Missing 'locations' object")
    assert failed.valid is False
    assert failed.error == "Missing 'locations' object"


@pytest.mark.parametrize(
    ("extra", "expected"),
    [
        ({"lastUpdated": 1719000000}, {"lastUpdated": 1719000000}),
        ({"version": 2, "lastUpdated": None}, {"version": 2, "lastUpdated": None}),
        ({"metadata": None}, {"metadata": {}}),
        ({"metadata": []}, {"metadata": {}}),
    ],
)
def test_map_document_tolerates_loose_bookkeeping_fields(extra: dict[str, Any], expected: dict[str, Any]) -> None:
    payload = {"locations": {"stages": [{"name": "Main Stage", "lat": 52.0, "lng": 15.0}]}, **extra}

    document = MapDocument.from_payload(payload)

    assert document.to_payload() == {"locations": payload["locations"], **expected}


def test_location_payload_keeps_source_key_order() -> None:
    source = {"id": 7, "name": "Main Stage", "capacity": 3000, "lat": 52.0, "lng": 15.0}

    location = Location.model_validate(source)

    assert list(location.to_payload()) == ["id", "name", "capacity", "lat", "lng"]


def test_map_document_payload_keeps_source_key_order() -> None:
    source = {"metadata": {"festival": "Garbicz"}, "locations": {}, "schema": "festival-map", "version": "1.0"}

    document = MapDocument.from_payload(source)

    assert list(document.to_payload()) == ["metadata", "locations", "schema", "version"]


def test_locations_constructed_in_code_use_declaration_order() -> None:
    location = Location(name="Beach Bar", lat=52.03, lng=15.03, open=True)

    assert list(location.to_payload()) == ["name", "lat", "lng", "open"]
