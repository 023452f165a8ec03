import json
from pathlib import Path

import pytest

from src.venue_tour.persistence.filesystem import FileStorage
from src.venue_tour.services.reports.manifest import list_runs


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="tour_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "outputs"


def test_file_storage_does_not_reuse_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    first = storage.make_run_directory(prefix="tour_test")
    second = storage.make_run_directory(prefix="tour_test")

    assert first != second


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="tour_test")

    summary_path = run_dir / "summary.json"
    tour_path = run_dir / "tour.csv"

    storage.write_json(summary_path, {"hello": "world"})
    storage.write_csv(tour_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert tour_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_list_runs_reads_summaries(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="tour")
    storage.write_json(
        run_dir / "summary.json",
        {"objective": "minimize", "venue_count": 4, "total_distance_km": 12.5, "metadata": {"run_label": "demo"}},
    )
    storage.make_run_directory(prefix="empty")

    runs = list_runs(storage=storage)

    assert len(runs) == 1
    assert runs[0]["id"] == run_dir.name
    assert runs[0]["run_label"] == "demo"
    assert runs[0]["files"] == ["summary.json"]


def test_write_artifacts_dispatches_on_suffix(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory()

    written = storage.write_artifacts(
        run_dir,
        {
            "summary.json": {"order": [1, 2, 3]},
            "tour.geojson": {"type": "FeatureCollection", "features": []},
            "tour.csv": "sequence,venue_id\r\n1,1\r\n",
        },
    )

    assert [path.name for path in written] == ["summary.json", "tour.geojson", "tour.csv"]
    assert json.loads((run_dir / "summary.json").read_text(encoding="utf-8")) == {"order": [1, 2, 3]}
    assert storage.read_json(run_dir / "tour.geojson")["type"] == "FeatureCollection"
    assert (run_dir / "tour.csv").read_bytes() == b"sequence,venue_id\r\n1,1\r\n"


def test_write_artifacts_rejects_unrendered_tables(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory()

    with pytest.raises(TypeError):
        storage.write_artifacts(run_dir, {"tour.csv": [[1, 2]]})


def test_run_directories_newest_first(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    (storage.output_root / "tour_20240101T000000Z").mkdir()
    (storage.output_root / "tour_20240301T000000Z").mkdir()
    (storage.output_root / "notes.txt").write_text("ignored", encoding="utf-8")

    assert [path.name for path in storage.run_directories()] == [
        "tour_20240301T000000Z",
        "tour_20240101T000000Z",
    ]


def test_list_runs_skips_unreadable_summary(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    broken = storage.output_root / "tour_20240101T000000Z"
    broken.mkdir()
    (broken / "summary.json").write_text("{not json", encoding="utf-8")

    assert list_runs(storage=storage) == []
