from pathlib import Path

import pytest
from openpyxl import Workbook

from src.venue_tour.data.venues_repository import load_venues
from src.venue_tour.errors import InvalidInputError
from src.venue_tour.models.domain import Venue


@pytest.fixture(autouse=True)
def clear_venue_cache():
    load_venues.cache_clear()
    yield
    load_venues.cache_clear()


def test_load_venues_from_csv(tmp_path: Path):
    source = tmp_path / "venues.csv"
    source.write_text(
        "id,name,latitude,longitude\n"
        "1,British Museum,51.5194,-0.1270\n"
        "2,Tower of London,51.5081,-0.0759\n",
        encoding="utf-8",
    )

    venues = load_venues(source)

    assert venues == (
        Venue(venue_id=1, name="British Museum", latitude=51.5194, longitude=-0.1270),
        Venue(venue_id=2, name="Tower of London", latitude=51.5081, longitude=-0.0759),
    )


def test_load_venues_accepts_header_aliases_and_skips_rows_without_coordinates(tmp_path: Path):
    source = tmp_path / "venues.csv"
    source.write_text(
        "\ufeffVenue ID,Venue,Lat,Lng\n"
        "1, Camden Market ,51.5413,-0.1466\n"
        "2,Unknown,,\n"
        ",,,\n"
        "3,Borough Market,51.5055,-0.0910\n",
        encoding="utf-8",
    )

    venues = load_venues(source)

    assert [venue.venue_id for venue in venues] == [1, 3]
    assert venues[0].name == "Camden Market"


def test_load_venues_missing_columns(tmp_path: Path):
    source = tmp_path / "venues.csv"
    source.write_text("id,name,latitude\n1,Somewhere,51.5\n", encoding="utf-8")

    with pytest.raises(InvalidInputError, match="longitude"):
        load_venues(source)


def test_load_venues_rejects_non_integer_id(tmp_path: Path):
    source = tmp_path / "venues.csv"
    source.write_text("id,name,latitude,longitude\n1.5,Half,51.5,-0.1\n", encoding="utf-8")

    with pytest.raises(InvalidInputError, match="integer"):
        load_venues(source)


def test_load_venues_from_workbook(tmp_path: Path):
    source = tmp_path / "venues.xlsx"
    wb = Workbook()
    sheet = wb.active
    sheet.append(["ID", "Name", "Latitude", "Longitude"])
    sheet.append([1, "Tate Modern", 51.5076, -0.0994])
    sheet.append([2, "London Eye", 51.5033, -0.1196])
    wb.save(source)

    venues = load_venues(source)

    assert [venue.name for venue in venues] == ["Tate Modern", "London Eye"]
    assert venues[1].coordinates == (51.5033, -0.1196)


def test_load_venues_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_venues(tmp_path / "missing.csv")


def test_bundled_sample_has_seventeen_venues():
    sample = Path(__file__).resolve().parents[1] / "data" / "venues.csv"

    venues = load_venues(sample)

    assert len(venues) == 17
    assert sorted(venue.venue_id for venue in venues) == list(range(1, 18))
