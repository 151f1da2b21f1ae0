from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from src.transforms.countries import CountryRecord


DEFAULT_TOP_LIMIT = 10
DEFAULT_NAMES_LIMIT = 10
DEFAULT_NAME_PREFIX = "P"


@dataclass(frozen=True)
class RegionCount:
    region: str
    count: int


@dataclass(frozen=True)
class CountryViews:
    top_by_population: list[CountryRecord]
    first_names: list[str]
    regions: list[RegionCount]
    prefixed: list[CountryRecord]


def top_by_population(records: Sequence[CountryRecord], limit: int = DEFAULT_TOP_LIMIT) -> list[CountryRecord]:
    # sorted() is stable: equal populations keep their input order.
    return sorted(records, key=lambda r: r.population, reverse=True)[:limit]


def first_names(records: Sequence[CountryRecord], limit: int = DEFAULT_NAMES_LIMIT) -> list[str]:
    return [r.name for r in records[:limit]]


def group_by_region(records: Sequence[CountryRecord]) -> list[RegionCount]:
    """Count records per region, in the order each region first appears."""
    counts: dict[str, int] = {}
    for r in records:
        counts[r.region] = counts.get(r.region, 0) + 1
    return [RegionCount(region=region, count=count) for region, count in counts.items()]


def names_starting_with(records: Sequence[CountryRecord], prefix: str = DEFAULT_NAME_PREFIX) -> list[CountryRecord]:
    return [r for r in records if r.name.startswith(prefix)]


def build_views(
    records: Sequence[CountryRecord],
    *,
    top_limit: int = DEFAULT_TOP_LIMIT,
    names_limit: int = DEFAULT_NAMES_LIMIT,
    name_prefix: str = DEFAULT_NAME_PREFIX,
) -> CountryViews:
    return CountryViews(
        top_by_population=top_by_population(records, top_limit),
        first_names=first_names(records, names_limit),
        regions=group_by_region(records),
        prefixed=names_starting_with(records, name_prefix),
    )
