"""Structural validation of map documents and individual locations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from festmap.contracts.document import ValidationResult

REQUIRED_FIELDS = ("name", "lat", "lng")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class LocationValidator:
    """Checks a single location record.

    Rules run in a fixed order and stop at the first failure: required fields,
    numeric coordinates, coordinate ranges, then the name type.
    """

    def validate(self, location: Any, path: str = "") -> ValidationResult:
        if not isinstance(location, Mapping):
            return ValidationResult.fail(f"Location at {path} must be an object")

        for field in REQUIRED_FIELDS:
            if location.get(field) is None:
                return ValidationResult.fail(f"Missing required field '{field}' in {path}")

        lat = location["lat"]
        lng = location["lng"]
        for field, value in (("lat", lat), ("lng", lng)):
            if not _is_number(value):
                return ValidationResult.fail(f"Invalid coordinates in {path}: '{field}' must be a number")

        # Written as "not within" so NaN fails the range check too.
        if not -90 <= lat <= 90:
            return ValidationResult.fail(f"Invalid latitude in {path}: 'lat' must be between -90 and 90")
        if not -180 <= lng <= 180:
            return ValidationResult.fail(f"Invalid longitude in {path}: 'lng' must be between -180 and 180")

        if not isinstance(location["name"], str):
            return ValidationResult.fail(f"Invalid name in {path}: 'name' must be text")

        return ValidationResult.ok()


class MapStructureValidator:
    """Checks a whole document: a ``locations`` mapping of category to location list."""

    def __init__(self, *, location_validator: LocationValidator | None = None) -> None:
        self._location_validator = location_validator or LocationValidator()

    def validate(self, document: Any) -> ValidationResult:
        if not isinstance(document, Mapping):
            return ValidationResult.fail("Data must be an object")

        if "locations" not in document:
            return ValidationResult.fail("Missing 'locations' object")

        locations = document["locations"]
        if not isinstance(locations, Mapping):
            return ValidationResult.fail("'locations' must be an object mapping category names to location lists")

        for category, entries in locations.items():
            if not isinstance(entries, list):
                return ValidationResult.fail(f"Category '{category}' must be an array")
            for index, location in enumerate(entries):
                result = self._location_validator.validate(location, f"{category}[{index}]")
                if not result.valid:
                    return result

        return ValidationResult.ok()
