from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple

ALL = "all"


@dataclass(frozen=True)
class DirectoryFilters:
    """Free-text search plus exact city/state selections ("all" disables one)."""

    search: str = ""
    city: str = ALL
    state: str = ALL


def _matches_search(school: Mapping[str, Any], search: str) -> bool:
    term = search.lower()
    return any(term in str(school.get(field) or "").lower() for field in ("name", "city", "state"))


def filter_schools(schools: Iterable[Mapping[str, Any]], filters: DirectoryFilters) -> List[Mapping[str, Any]]:
    """Return the schools that pass all three filters, keeping input order."""
    filtered = list(schools)

    if filters.search:
        filtered = [school for school in filtered if _matches_search(school, filters.search)]

    if filters.city != ALL:
        filtered = [school for school in filtered if school.get("city") == filters.city]

    if filters.state != ALL:
        filtered = [school for school in filtered if school.get("state") == filters.state]

    return filtered


def _distinct(values: Iterable[Any]) -> List[Any]:
    return list(dict.fromkeys(values))


def filter_options(schools: Iterable[Mapping[str, Any]]) -> Tuple[List[str], List[str]]:
    """Distinct cities and states of the full, unfiltered collection."""
    schools = list(schools)
    cities = _distinct(school.get("city") for school in schools)
    states = _distinct(school.get("state") for school in schools)
    return cities, states
