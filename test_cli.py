import json

import pytest

from workshopcal.__main__ import main

from conftest import DATA_PATH


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("TIMEZONE", "DATA_PATH", "OUTPUT_DIR", "UID_DOMAIN"):
        monkeypatch.delenv(f"WORKSHOPCAL_{key}", raising=False)


def test_generate_writes_calendars(tmp_path) -> None:
    out_dir = tmp_path / "calendars"

    assert main(["generate", "--data", str(DATA_PATH), "--output", str(out_dir)]) == 0

    assert (out_dir / "all.ics").exists()
    assert (out_dir / "online-grad.ics").exists()


def test_export_filters_to_stdout(capsys) -> None:
    assert main(["export", "--data", str(DATA_PATH), "--format", "fmt-online"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("BEGIN:VCALENDAR")
    assert "UID:off-1@rds-workshops.ucsb.edu" in out
    assert "off-2@" not in out


def test_export_to_file(tmp_path) -> None:
    target = tmp_path / "viz.ics"

    assert main(["export", "--data", str(DATA_PATH), "--search", "ggplot", "--output", str(target)]) == 0

    content = target.read_bytes().decode("utf-8")
    assert content.count("BEGIN:VEVENT") == 2
    assert "\r\n" in content


def test_links_as_json(capsys) -> None:
    assert main(["links", "off-1", "--data", str(DATA_PATH), "--json"]) == 0

    links = json.loads(capsys.readouterr().out)
    assert set(links) == {"google", "outlook", "office365", "yahoo", "ics"}
    assert links["google"].startswith("https://calendar.google.com/calendar/render?action=TEMPLATE")


def test_links_for_unknown_offering() -> None:
    assert main(["links", "off-404", "--data", str(DATA_PATH)]) == 1


def test_missing_dataset_fails_cleanly(tmp_path) -> None:
    assert main(["generate", "--data", str(tmp_path / "nope.json"), "--output", str(tmp_path)]) == 1
