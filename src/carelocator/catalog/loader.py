"""
Facility catalog loader.

The facility list is a local JSON array of facility records. We validate it into
typed Pydantic models so the ranker and renderer can assume a consistent shape.
Without a configured path, the sample catalog bundled with the package is used.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from carelocator.config.settings import Settings
from carelocator.core.env import resolve_project_path
from carelocator.domain.models import Facility

logger = logging.getLogger(__name__)

_FACILITIES_ADAPTER = TypeAdapter(list[Facility])

SAMPLE_CATALOG = "sample_facilities.json"


def parse_facilities(payload: Any, *, source: str = "<payload>") -> list[Facility]:
    """Validate a decoded JSON payload; facility ids must be unique."""
    facilities = _FACILITIES_ADAPTER.validate_python(payload)
    seen: set[str] = set()
    for f in facilities:
        if f.id in seen:
            raise ValueError(f"Duplicate facility id '{f.id}' in {source}")
        seen.add(f.id)
    return facilities


def load_facilities(path: str | Path) -> list[Facility]:
    """Load and validate a facility catalog JSON file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    facilities = parse_facilities(payload, source=str(resolved))
    logger.debug("Loaded %d facilities from %s", len(facilities), resolved)
    return facilities


def load_sample_facilities() -> list[Facility]:
    text = resources.files("carelocator.catalog").joinpath(SAMPLE_CATALOG).read_text(encoding="utf-8")
    return parse_facilities(json.loads(text), source=SAMPLE_CATALOG)


def load_catalog(settings: Settings, *, path: str | Path | None = None) -> list[Facility]:
    """Load the facility list: explicit `path`, else `settings.catalog.path`, else the sample."""
    chosen = path or settings.catalog.path
    if chosen:
        return load_facilities(chosen)
    return load_sample_facilities()
