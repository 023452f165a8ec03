"""Manifest of persisted tour runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from ...persistence.filesystem import FileStorage


def _build_run_summary(storage: FileStorage, run_dir: Path) -> Optional[dict]:
    summary_path = run_dir / "summary.json"
    if not summary_path.exists():
        return None
    try:
        summary = storage.read_json(summary_path)
    except (OSError, json.JSONDecodeError) as exc:
        logging.warning(f"Skipping unreadable run summary {summary_path}: {exc}")
        return None

    metadata = summary.get("metadata") or {}
    return {
        "id": run_dir.name,
        "objective": summary.get("objective"),
        "venue_count": summary.get("venue_count"),
        "total_distance_km": summary.get("total_distance_km"),
        "run_label": metadata.get("run_label"),
        "author": metadata.get("author"),
        "tags": metadata.get("tags") or [],
        "files": sorted(path.name for path in run_dir.iterdir() if path.is_file()),
    }


def list_runs(*, limit: Optional[int] = None, storage: FileStorage | None = None) -> List[dict]:
    """Persisted runs, newest first."""
    storage = storage or FileStorage()

    runs: List[dict] = []
    for run_dir in storage.run_directories():
        run_info = _build_run_summary(storage, run_dir)
        if not run_info:
            continue
        runs.append(run_info)
        if limit and len(runs) >= limit:
            break
    return runs
