"""Search, filter and sort for the projects browser.

Works on wire-shaped project dicts so the same functions serve the list
endpoint and any client holding the JSON. Every sort is stable: projects
with equal keys keep their input order.
"""

import datetime
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from django.utils.dateparse import parse_date, parse_datetime


class SortOption(str, Enum):
    DATE_NEWEST = "date-newest"
    DATE_OLDEST = "date-oldest"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


class PinnedFilter(str, Enum):
    ALL = "all"
    PINNED = "pinned"
    UNPINNED = "unpinned"


def _name(item: Any) -> str:
    if isinstance(item, Mapping):
        return str(item.get("name") or "")
    return str(item or "")


def _start_date(project: Mapping[str, Any]) -> datetime.date:
    value = project.get("date_started")
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and value:
        try:
            parsed = parse_datetime(value)
            if parsed:
                return parsed.date()
            return parse_date(value) or datetime.date.min
        except ValueError:
            return datetime.date.min
    return datetime.date.min


def matches_query(project: Mapping[str, Any], query: str) -> bool:
    """Case-insensitive substring match on name, tag names or tech names."""
    needle = (query or "").strip().casefold()
    if not needle:
        return True
    haystack = [_name(project)]
    haystack.extend(_name(t) for t in project.get("tags") or [])
    haystack.extend(_name(t) for t in project.get("tech_stack") or [])
    return any(needle in h.casefold() for h in haystack)


def filter_projects(
    projects: Iterable[Mapping[str, Any]],
    query: str = "",
    tag: Optional[str] = None,
    pinned: PinnedFilter | str = PinnedFilter.ALL,
) -> List[Mapping[str, Any]]:
    pinned = PinnedFilter(pinned)
    wanted_tag = (tag or "").strip().casefold()
    out = []
    for project in projects:
        if pinned is PinnedFilter.PINNED and not project.get("is_pinned"):
            continue
        if pinned is PinnedFilter.UNPINNED and project.get("is_pinned"):
            continue
        if wanted_tag and wanted_tag not in {_name(t).casefold() for t in project.get("tags") or []}:
            continue
        if not matches_query(project, query):
            continue
        out.append(project)
    return out


def sort_projects(projects: Iterable[Mapping[str, Any]], option: SortOption | str = SortOption.DATE_NEWEST) -> List[Mapping[str, Any]]:
    option = SortOption(option)
    items = list(projects)
    if option is SortOption.DATE_NEWEST:
        # Pinned projects first, newest start date first within each group
        return sorted(items, key=lambda p: (not p.get("is_pinned"), -_start_date(p).toordinal()))
    if option is SortOption.DATE_OLDEST:
        return sorted(items, key=_start_date)
    if option is SortOption.NAME_ASC:
        return sorted(items, key=lambda p: _name(p).casefold())
    return sorted(items, key=lambda p: _name(p).casefold(), reverse=True)
