"""Merge an incoming map document into the canonical one."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from festmap.contracts.document import Location, MapDocument, MergeResult, MergeStats
from festmap.reconcile.matcher import GeoMatcher

_LOG = logging.getLogger(__name__)

MERGE_FORMAT_VERSION = "2.0"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def merge_location(existing: Location, incoming: Location) -> Location:
    """Shallow merge: incoming fields win, fields it does not carry are kept."""
    return Location.model_validate({**existing.to_payload(), **incoming.to_payload()})


class MergeEngine:
    """Reconciles an incoming document against the canonical document.

    Every incoming record either updates the first canonical record in its
    category that the matcher considers the same location, or is appended to
    that category. Neither input document is modified.

    First match wins. If two canonical records would both match one incoming
    record, the earlier one is updated and the ambiguity is not reported.
    """

    def __init__(
        self,
        *,
        matcher: GeoMatcher | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._matcher = matcher or GeoMatcher()
        self._clock = clock or _utcnow

    def merge(
        self,
        canonical: MapDocument,
        incoming: MapDocument,
        *,
        on_record: Callable[[], None] | None = None,
    ) -> MergeResult:
        """Merge *incoming* into a copy of *canonical*.

        *on_record* is called once per incoming record after it has been placed.
        """
        merged_locations = {category: list(entries) for category, entries in canonical.locations.items()}
        new_locations = 0
        updated_locations = 0

        for category, incoming_entries in incoming.locations.items():
            entries, added, updated = self._merge_category(
                merged_locations.get(category, []), incoming_entries, on_record=on_record
            )
            merged_locations[category] = entries
            new_locations += added
            updated_locations += updated
            _LOG.debug("Merged category %s: +%d new, ~%d updated", category, added, updated)

        total = sum(len(entries) for entries in merged_locations.values())
        merged = canonical.model_copy(
            update={
                "version": MERGE_FORMAT_VERSION,
                "last_updated": self._clock().isoformat(timespec="seconds"),
                "locations": merged_locations,
                "metadata": {**canonical.metadata, "totalLocations": total},
            }
        )
        return MergeResult(
            document=merged,
            stats=MergeStats(new_locations=new_locations, updated_locations=updated_locations),
        )

    def _merge_category(
        self,
        existing: list[Location],
        incoming: list[Location],
        *,
        on_record: Callable[[], None] | None = None,
    ) -> tuple[list[Location], int, int]:
        entries = list(existing)
        added = 0
        updated = 0
        for candidate in incoming:
            index = self._find_match(entries, candidate)
            if index is None:
                entries.append(candidate)
                added += 1
            else:
                entries[index] = merge_location(entries[index], candidate)
                updated += 1
            if on_record is not None:
                on_record()
        return entries, added, updated

    def _find_match(self, entries: list[Location], candidate: Location) -> int | None:
        for index, entry in enumerate(entries):
            if self._matcher.is_same_location(candidate, entry):
                return index
        return None
