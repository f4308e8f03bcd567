"""Shared test fixtures for festmap tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from festmap.contracts.config import FestMapConfig, StoreConfig

FIXED_NOW = datetime(2025, 7, 20, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """A clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def canonical_payload() -> dict[str, Any]:
    """A small valid canonical map with two categories."""
    return {
        "version": "1.0",
        "lastUpdated": "2025-07-01T10:00:00+00:00",
        "locations": {
            "stages": [
                {"name": "Main Stage", "lat": 52.0, "lng": 15.0, "capacity": 3000, "description": "Open air"},
                {"name": "Forest Stage", "lat": 52.004, "lng": 15.006},
            ],
            "foodVendors": [
                {"name": "Pierogi Hut", "lat": 52.001, "lng": 15.002, "openingHours": "12:00-04:00"},
            ],
        },
        "metadata": {"totalLocations": 3, "festival": "Garbicz"},
    }


@pytest.fixture
def canonical_bytes(canonical_payload: dict[str, Any]) -> bytes:
    return json.dumps(canonical_payload, indent=2).encode("utf-8")


@pytest.fixture
def sample_config(tmp_path: Path) -> FestMapConfig:
    """A minimal valid FestMapConfig rooted in tmp_path."""
    return FestMapConfig(
        store=StoreConfig(owner="festival", repo="map-data", file_path="festival-map.json"),
        backup_dir=tmp_path / "backups",
        cache_path=tmp_path / "backups" / "current.json",
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A festmap.json on disk using relative paths."""
    path = tmp_path / "festmap.json"
    path.write_text(
        json.dumps(
            {
                "store": {"owner": "festival", "repo": "map-data"},
                "backup_dir": "backups",
                "cache_path": "backups/current.json",
            }
        ),
        encoding="utf-8",
    )
    return path
