from __future__ import annotations

from collections.abc import Iterable, Sequence
from html import escape

from src.report.views import (
    DEFAULT_NAME_PREFIX,
    DEFAULT_NAMES_LIMIT,
    DEFAULT_TOP_LIMIT,
    CountryViews,
    build_views,
)
from src.transforms.countries import CountryRecord


TITLE = "Datos de Países"
HEADING = "Información de Países"

STYLESHEET = (
    "body { font-family: Arial, sans-serif; margin: 20px; padding: 10px; background-color: #f4f4f4; }"
    "h1, h2 { color: #333; }"
    "ul { background: white; padding: 15px; border-radius: 8px; box-shadow: 2px 2px 10px rgba(0,0,0,0.1); }"
    "li { margin-bottom: 5px; }"
)


def _section(section_id: str, heading: str, items: Iterable[str]) -> str:
    lis = "".join(f"<li>{escape(item)}</li>" for item in items)
    return f'<section class="{section_id}"><h2>{escape(heading)}</h2><ul>{lis}</ul></section>'


def render_views(views: CountryViews, *, top_limit: int, names_limit: int, name_prefix: str) -> str:
    """
    Render the four views as a complete HTML document.

    Section order is fixed: top population, first names, regions, prefix filter.
    Every interpolated string is HTML-escaped.
    """
    sections = [
        _section(
            "top-population",
            f"Top {top_limit} países por población",
            (f"{r.name} - {r.population} habitantes" for r in views.top_by_population),
        ),
        _section(
            "country-names",
            f"Lista de {names_limit} nombres de países",
            views.first_names,
        ),
        _section(
            "regions",
            "Países agrupados por región",
            (f"{g.region}: {g.count} países" for g in views.regions),
        ),
        _section(
            "countries-p",
            f"Países que empiezan con '{name_prefix}'",
            (r.name for r in views.prefixed),
        ),
    ]

    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8">'
        f"<title>{escape(TITLE)}</title>"
        f"<style>{STYLESHEET}</style>"
        "</head><body>"
        f"<h1>{escape(HEADING)}</h1>"
        + "".join(sections)
        + "</body></html>"
    )


def render_report(
    records: Sequence[CountryRecord],
    *,
    top_limit: int = DEFAULT_TOP_LIMIT,
    names_limit: int = DEFAULT_NAMES_LIMIT,
    name_prefix: str = DEFAULT_NAME_PREFIX,
) -> str:
    views = build_views(records, top_limit=top_limit, names_limit=names_limit, name_prefix=name_prefix)
    return render_views(views, top_limit=top_limit, names_limit=names_limit, name_prefix=name_prefix)
