"""
Tests for project search, filtering and sorting
"""
import pytest

from showcase.listing import PinnedFilter, SortOption, filter_projects, sort_projects


def project(pid, name, date_started, is_pinned=False, tags=(), tech=()):
    return {
        "id": pid,
        "name": name,
        "date_started": date_started,
        "is_pinned": is_pinned,
        "tags": [{"id": i, "name": t, "color": None} for i, t in enumerate(tags)],
        "tech_stack": [{"name": t, "display_order": i} for i, t in enumerate(tech)],
    }


@pytest.fixture
def projects():
    return [
        project(1, "Chess AI", "2020-03-01", tech=["Rust"]),
        project(2, "Blog", "2023-01-15", tags=["writing"]),
        project(3, "Pinned Tool", "2019-06-01", is_pinned=True, tags=["tools"]),
        project(4, "analytics", "2023-01-15", tech=["Python"]),
        project(5, "Zeta", "2021-07-01", is_pinned=True),
    ]


def ids(items):
    return [p["id"] for p in items]


def test_newest_puts_pinned_first():
    a = project(1, "A", "2020-01-01", is_pinned=True)
    b = project(2, "B", "2023-01-01")
    assert ids(sort_projects([b, a], SortOption.DATE_NEWEST)) == [1, 2]


def test_newest_orders_by_date_within_groups(projects):
    # 2 and 4 share a start date and keep their input order
    assert ids(sort_projects(projects, "date-newest")) == [5, 3, 2, 4, 1]


def test_oldest(projects):
    assert ids(sort_projects(projects, SortOption.DATE_OLDEST)) == [3, 1, 5, 2, 4]


def test_name_sorts_ignore_case(projects):
    assert ids(sort_projects(projects, SortOption.NAME_ASC)) == [4, 2, 1, 3, 5]
    assert ids(sort_projects(projects, SortOption.NAME_DESC)) == [5, 3, 1, 2, 4]


def test_name_sort_is_stable_for_equal_names():
    items = [project(1, "Same", "2020-01-01"), project(2, "same", "2021-01-01"), project(3, "SAME", "2019-01-01")]
    assert ids(sort_projects(items, SortOption.NAME_ASC)) == [1, 2, 3]
    assert ids(sort_projects(items, SortOption.NAME_DESC)) == [1, 2, 3]


@pytest.mark.parametrize("option", list(SortOption))
def test_sort_is_idempotent(option, projects):
    once = sort_projects(projects, option)
    assert sort_projects(once, option) == once


def test_sort_accepts_datetimes_and_missing_dates():
    items = [
        project(1, "No date", None),
        project(2, "Timestamp", "2022-05-01T10:00:00Z"),
        project(3, "Date", "2021-01-01"),
    ]
    assert ids(sort_projects(items, SortOption.DATE_NEWEST)) == [2, 3, 1]


def test_unknown_sort_option_raises(projects):
    with pytest.raises(ValueError):
        sort_projects(projects, "popularity")


def test_search_matches_tech_case_insensitively():
    items = [
        project(1, "Chess AI", "2020-01-01", tech=["Rust"]),
        project(2, "Blog", "2021-01-01", tags=["writing"]),
    ]
    assert ids(filter_projects(items, query="rust")) == [1]
    assert ids(filter_projects(items, query="WRITING")) == [2]


def test_search_matches_name_substring(projects):
    assert ids(filter_projects(projects, query="ana")) == [4]
    assert ids(filter_projects(projects, query="  ")) == ids(projects)


def test_search_accepts_plain_string_tags():
    items = [{"id": 1, "name": "Old", "tags": ["legacy"], "tech_stack": []}]
    assert ids(filter_projects(items, query="LEG")) == [1]


def test_pinned_filter(projects):
    assert ids(filter_projects(projects, pinned=PinnedFilter.PINNED)) == [3, 5]
    assert ids(filter_projects(projects, pinned="unpinned")) == [1, 2, 4]
    assert ids(filter_projects(projects, pinned="all")) == [1, 2, 3, 4, 5]


def test_tag_filter_is_exact_name(projects):
    assert ids(filter_projects(projects, tag="Writing")) == [2]
    assert ids(filter_projects(projects, tag="writ")) == []


def test_filters_combine(projects):
    assert ids(filter_projects(projects, query="t", pinned="pinned", tag="tools")) == [3]
