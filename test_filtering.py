import pytest

from workshopcal.core.filtering import WorkshopFilter, filter_workshops, sort_workshops


def _ids(workshops):
    return [w.id for w in workshops]


def test_no_filters_keeps_active_workshops(dataset) -> None:
    assert _ids(filter_workshops(dataset.workshops)) == ["ws-python-intro", "ws-r-viz", "ws-git"]


def test_search_is_case_insensitive_over_text_fields(dataset) -> None:
    by_title = filter_workshops(dataset.workshops, WorkshopFilter(search="PYTHON"))
    by_summary = filter_workshops(dataset.workshops, WorkshopFilter(search="ggplot2"))
    by_description = filter_workshops(dataset.workshops, WorkshopFilter(search="laptop"))

    assert _ids(by_title) == ["ws-python-intro"]
    assert _ids(by_summary) == ["ws-r-viz"]
    assert _ids(by_description) == ["ws-r-viz"]


def test_inactive_workshops_never_match(dataset) -> None:
    assert filter_workshops(dataset.workshops, WorkshopFilter(search="SPSS")) == []


@pytest.mark.parametrize(
    "filters, expected",
    [
        (WorkshopFilter(area="area-data-science"), ["ws-python-intro", "ws-r-viz"]),
        (WorkshopFilter(audience="aud-faculty"), ["ws-git"]),
        (WorkshopFilter(format="fmt-in-person"), ["ws-r-viz"]),
        (WorkshopFilter(department="dept-stats"), ["ws-r-viz"]),
        (WorkshopFilter(instructor="inst-jdoe"), ["ws-python-intro", "ws-git"]),
        (WorkshopFilter(format="fmt-online", audience="aud-grad"), ["ws-python-intro"]),
        (WorkshopFilter(area="area-unknown"), []),
    ],
)
def test_lookup_filters(dataset, filters, expected) -> None:
    assert _ids(filter_workshops(dataset.workshops, filters)) == expected


def test_filter_from_mapping_ignores_blank_and_unknown_keys() -> None:
    filters = WorkshopFilter.from_mapping({"area": "a1", "format": "", "page": "2"})
    assert filters == WorkshopFilter(area="a1")
    assert filters.active() == {"area": "a1"}


def test_sort_by_first_offering_date(dataset) -> None:
    ordered = sort_workshops(filter_workshops(dataset.workshops), dataset, "date")
    # ws-git has no valid offerings and goes last
    assert _ids(ordered) == ["ws-r-viz", "ws-python-intro", "ws-git"]


def test_sort_by_title(dataset) -> None:
    ordered = sort_workshops(dataset.workshops, dataset, "title")
    assert _ids(ordered) == ["ws-r-viz", "ws-python-intro", "ws-archived", "ws-git"]


def test_sort_rejects_unknown_key(dataset) -> None:
    with pytest.raises(ValueError):
        sort_workshops(dataset.workshops, dataset, "popularity")
