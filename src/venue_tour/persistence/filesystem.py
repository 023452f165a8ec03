"""Run directories for persisted tour plans."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Mapping

from ..config import settings

_JSON_SUFFIXES = {".json", ".geojson"}


class FileStorage:
    """One directory per solved tour under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "tour") -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        path = self.output_root / f"{prefix}_{timestamp}"
        suffix = 1
        while path.exists():
            suffix += 1
            path = self.output_root / f"{prefix}_{timestamp}_{suffix}"
        path.mkdir(parents=True)
        return path

    def write_artifacts(self, run_dir: Path, artifacts: Mapping[str, Any]) -> list[Path]:
        """Write each named artifact into ``run_dir``.

        ``.json``/``.geojson`` values are serialised as JSON; anything else must
        already be rendered text (CSV tables).
        """
        written: list[Path] = []
        for filename, payload in artifacts.items():
            path = run_dir / filename
            if path.suffix in _JSON_SUFFIXES:
                self.write_json(path, payload)
            elif isinstance(payload, str):
                self.write_csv(path, payload)
            else:
                raise TypeError(f"Artifact {filename} must be rendered text, got {type(payload).__name__}.")
            written.append(path)
        return written

    def run_directories(self) -> Iterator[Path]:
        """Run directories in reverse name order, so runs sharing a prefix come newest first."""
        if not self.output_root.exists():
            return iter(())
        return iter(sorted((p for p in self.output_root.iterdir() if p.is_dir()), key=lambda p: p.name, reverse=True))

    def read_json(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
