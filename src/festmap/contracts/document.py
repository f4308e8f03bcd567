"""Map document contracts."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    field_validator,
    model_validator,
)

_OPTIONAL_FIELDS = ("version", "last_updated", "metadata")


class _SourceOrderedModel(BaseModel):
    """Dumps its keys in the order of the payload it was validated from.

    Keys the source payload did not have follow in declaration order, so a
    committed document only changes where its content changed.
    """

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler: ModelWrapValidatorHandler[Any]) -> Any:
        model = handler(data)
        if isinstance(data, Mapping) and isinstance(model, _SourceOrderedModel):
            model._key_order = tuple(data)
        return model

    def _in_source_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        head = {key: payload[key] for key in self._key_order if key in payload}
        return {**head, **payload}


class Location(_SourceOrderedModel):
    """A single point of interest.

    ``name``, ``lat`` and ``lng`` are the only fields the reconciliation engine
    looks at. Everything else (capacity, description, opening hours, ...) is
    kept in the extra-field bag and round-trips verbatim.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    lat: int | float
    lng: int | float

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_payload(self) -> dict[str, Any]:
        return self._in_source_order(self.model_dump(mode="json"))


class MapDocument(_SourceOrderedModel):
    """The festival map: locations grouped by category plus bookkeeping fields.

    Only ``locations`` is structurally checked. ``version`` and ``lastUpdated``
    are kept as whatever the source carried, since every merge rewrites them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: Any = None
    last_updated: Any = Field(default=None, alias="lastUpdated")
    locations: dict[str, list[Location]] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_as_mapping(cls, value: Any) -> Any:
        # An empty PHP associative array is encoded as [].
        return value if isinstance(value, Mapping) else {}

    @classmethod
    def from_payload(cls, payload: Any) -> MapDocument:
        return cls.model_validate(payload)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        # Bookkeeping fields the source document never carried stay absent.
        for name in _OPTIONAL_FIELDS:
            if name not in self.model_fields_set:
                payload.pop(MapDocument.model_fields[name].alias or name, None)
        return self._in_source_order(payload)

    @property
    def categories(self) -> list[str]:
        return list(self.locations)

    def total_locations(self) -> int:
        return sum(len(entries) for entries in self.locations.values())


class MergeStats(BaseModel):
    new_locations: int = Field(default=0, ge=0)
    updated_locations: int = Field(default=0, ge=0)


class MergeResult(BaseModel):
    document: MapDocument
    stats: MergeStats


class ValidationResult(BaseModel):
    """Outcome of a structural check; ``error`` is only set when ``valid`` is false."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


def count_locations(document: MapDocument | dict[str, Any]) -> int:
    """Count locations across all categories of a document or raw payload."""
    if isinstance(document, MapDocument):
        return document.total_locations()
    locations = document.get("locations") or {}
    return sum(len(entries) for entries in locations.values() if isinstance(entries, list))


def canonical_json(document: MapDocument | dict[str, Any]) -> str:
    """Serialize a document deterministically for change detection."""
    payload = document.to_payload() if isinstance(document, MapDocument) else document
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def render_document(document: MapDocument) -> bytes:
    """Serialize a document the way it is committed to the store."""
    return (json.dumps(document.to_payload(), indent=2, ensure_ascii=False) + "\n").encode("utf-8")
