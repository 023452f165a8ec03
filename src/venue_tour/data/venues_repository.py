"""Venue data loader for CSV and Excel sources."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from openpyxl import load_workbook

from ..config import settings
from ..errors import InvalidInputError
from ..models.domain import Venue

_COLUMN_ALIASES = {
    "venue_id": ("id", "venue_id", "venueid", "#"),
    "name": ("name", "venue", "venue_name", "venuename"),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lon", "lng", "long"),
}


def _normalize_header(name: Any) -> str:
    return str(name or "").strip().lower().replace(" ", "_")


def _resolve_columns(header: Iterable[Any], source: Path) -> dict[str, str]:
    available = {_normalize_header(name): name for name in header if name is not None}
    resolved: dict[str, str] = {}
    for field_name, aliases in _COLUMN_ALIASES.items():
        match = next((available[alias] for alias in aliases if alias in available), None)
        if match is not None:
            resolved[field_name] = match
    missing = set(_COLUMN_ALIASES) - set(resolved)
    if missing:
        raise InvalidInputError(f"Venue file '{source}' missing columns: {', '.join(sorted(missing))}")
    return resolved


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError as exc:
        raise InvalidInputError(f"Unable to parse float from value '{value}'") from exc


def _coerce_id(value: Any) -> int:
    try:
        number = float(str(value).strip())
    except ValueError as exc:
        raise InvalidInputError(f"Unable to parse venue id from value '{value}'") from exc
    if not number.is_integer():
        raise InvalidInputError(f"Venue id must be an integer, got '{value}'")
    return int(number)


def _row_to_venue(row: Mapping[str, Any], columns: Mapping[str, str]) -> Venue | None:
    raw_id = row.get(columns["venue_id"])
    if raw_id is None or str(raw_id).strip() == "":
        return None
    lat = _coerce_float(row.get(columns["latitude"]))
    lon = _coerce_float(row.get(columns["longitude"]))
    if lat is None or lon is None:
        logging.warning(f"Skipping venue row without coordinates: id={raw_id}")
        return None
    return Venue(
        venue_id=_coerce_id(raw_id),
        name=str(row.get(columns["name"]) or "").strip(),
        latitude=lat,
        longitude=lon,
    )


def _load_from_csv(path: Path) -> tuple[Venue, ...]:
    venues: list[Venue] = []
    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise InvalidInputError(f"Venue file '{path}' is missing a header row.")
        columns = _resolve_columns(reader.fieldnames, path)
        for row in reader:
            venue = _row_to_venue(row, columns)
            if venue is not None:
                venues.append(venue)
    return tuple(venues)


def _load_from_workbook(path: Path) -> tuple[Venue, ...]:
    wb = load_workbook(path, data_only=True, read_only=True)
    try:
        sheet = wb.active
        rows = sheet.iter_rows(min_row=1, values_only=True)
        header = next(rows, None)
        if header is None:
            raise InvalidInputError(f"Venue workbook '{path}' is empty.")
        columns = _resolve_columns(header, path)
        venues: list[Venue] = []
        for values in rows:
            row = dict(zip(header, values))
            venue = _row_to_venue(row, columns)
            if venue is not None:
                venues.append(venue)
        return tuple(venues)
    finally:
        wb.close()


@functools.lru_cache(maxsize=4)
def load_venues(source: Optional[Path] = None) -> tuple[Venue, ...]:
    """Load venues from the configured CSV or XLSX file."""

    path = source or settings.venue_file
    if not path.exists():
        raise FileNotFoundError(f"Venue file not found: {path}")

    if path.suffix.lower() in (".xlsx", ".xlsm"):
        venues = _load_from_workbook(path)
    else:
        venues = _load_from_csv(path)
    logging.info(f"Loaded {len(venues)} venues from {path}")
    return venues
