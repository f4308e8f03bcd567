"""Decide whether two location records denote the same point of interest."""

from __future__ import annotations

import math

from festmap.contracts.document import Location

# Roughly 10 metres, measured in raw degrees rather than geodesically. A degree
# of longitude shrinks towards the poles, so the effective radius is narrower
# east-west than north-south away from the equator.
SAME_LOCATION_THRESHOLD = 0.00009


def normalize_name(name: str) -> str:
    return name.strip().casefold()


def coordinate_distance(a: Location, b: Location) -> float:
    """Euclidean distance between two coordinate pairs, in degrees."""
    return math.sqrt((b.lat - a.lat) ** 2 + (b.lng - a.lng) ** 2)


class GeoMatcher:
    """Matches locations by normalized name or by near-identical coordinates.

    No fields other than ``name``, ``lat`` and ``lng`` take part in matching.
    """

    def __init__(self, *, threshold: float = SAME_LOCATION_THRESHOLD) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def is_same_location(self, a: Location, b: Location) -> bool:
        if normalize_name(a.name) == normalize_name(b.name):
            return True
        return coordinate_distance(a, b) < self._threshold


def is_same_location(a: Location, b: Location) -> bool:
    return GeoMatcher().is_same_location(a, b)
