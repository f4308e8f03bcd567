"""Reconciliation engine exports."""

from festmap.reconcile.matcher import SAME_LOCATION_THRESHOLD, GeoMatcher, coordinate_distance, is_same_location
from festmap.reconcile.merge import MERGE_FORMAT_VERSION, MergeEngine, merge_location
from festmap.reconcile.validator import LocationValidator, MapStructureValidator

__all__ = [
    "MERGE_FORMAT_VERSION",
    "SAME_LOCATION_THRESHOLD",
    "GeoMatcher",
    "LocationValidator",
    "MapStructureValidator",
    "MergeEngine",
    "coordinate_distance",
    "is_same_location",
    "merge_location",
]
