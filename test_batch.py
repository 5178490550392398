from datetime import datetime

from workshopcal.batch import generate_calendar_files, plan_calendar_files
from workshopcal.core.dataset import dataset_from_dict
from workshopcal.core.filtering import WorkshopFilter
from workshopcal.utils.paths import calendar_filename

GENERATED_AT = datetime(2025, 1, 1, 0, 0, 0)

EXPECTED_FILES = [
    "all.ics",
    "area-area-data-science.ics",
    "area-area-social-sciences.ics",
    "area-area-research-computing.ics",
    "audience-aud-grad.ics",
    "audience-aud-undergrad.ics",
    "audience-aud-faculty.ics",
    "format-fmt-online.ics",
    "format-fmt-in-person.ics",
    "format-fmt-hybrid.ics",
    "department-dept-library.ics",
    "department-dept-stats.ics",
    "online-grad.ics",
    "in-person-grad.ics",
]


def test_plan_filenames_are_deterministic(dataset) -> None:
    planned = plan_calendar_files(dataset)

    assert [p.filename for p in planned] == EXPECTED_FILES
    assert [p.filename for p in plan_calendar_files(dataset)] == EXPECTED_FILES


def test_plan_groups_hold_matching_workshops(dataset) -> None:
    planned = {p.filename: p for p in plan_calendar_files(dataset)}

    assert [w.id for w in planned["all.ics"].workshops] == ["ws-python-intro", "ws-r-viz", "ws-git"]
    assert [w.id for w in planned["area-area-social-sciences.ics"].workshops] == ["ws-r-viz"]
    assert planned["online-grad.ics"].filters == WorkshopFilter(format="fmt-online", audience="aud-grad")
    assert [w.id for w in planned["online-grad.ics"].workshops] == ["ws-python-intro"]


def test_empty_groups_are_skipped_but_all_is_kept() -> None:
    dataset = dataset_from_dict({
        "workshops": [],
        "areas": [{"id": "area-empty", "label": "Nobody"}],
    })

    planned = plan_calendar_files(dataset, combinations=[("nothing", {"format": "fmt-x"})])

    assert [p.filename for p in planned] == ["all.ics"]
    assert planned[0].workshops == ()


def test_generate_writes_files(dataset, tmp_path) -> None:
    out_dir = tmp_path / "calendars"

    written = generate_calendar_files(dataset, out_dir, generated_at=GENERATED_AT)

    assert [p.filename for p in written] == EXPECTED_FILES
    assert sorted(p.name for p in out_dir.iterdir()) == sorted(EXPECTED_FILES)

    all_ics = (out_dir / "all.ics").read_bytes().decode("utf-8")
    assert all_ics.startswith("BEGIN:VCALENDAR\r\n")
    assert all_ics.endswith("END:VCALENDAR\r\n")
    assert all_ics.count("BEGIN:VEVENT") == 3

    hybrid = (out_dir / "format-fmt-hybrid.ics").read_text(encoding="utf-8")
    assert "BEGIN:VEVENT" not in hybrid


def test_generate_is_repeatable(dataset, tmp_path) -> None:
    generate_calendar_files(dataset, tmp_path / "first", generated_at=GENERATED_AT)
    generate_calendar_files(dataset, tmp_path / "second", generated_at=GENERATED_AT)

    for filename in EXPECTED_FILES:
        first = (tmp_path / "first" / filename).read_bytes()
        second = (tmp_path / "second" / filename).read_bytes()
        assert first == second, filename


def test_calendar_filename() -> None:
    assert calendar_filename("area", "area-gis") == "area-area-gis.ics"
    assert calendar_filename(None, "online-grad") == "online-grad.ics"
    assert calendar_filename("department", "Math & Stats/2") == "department-Math_Stats_2.ics"
