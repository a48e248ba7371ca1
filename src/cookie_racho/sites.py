"""Known recipe sites: source metadata, host suffixes and search URLs.

The table is static for the lifetime of the process. Search and the
normalizer look sites up by id or by host; nothing here performs I/O.
"""

from __future__ import annotations

from urllib.parse import quote

from cookie_racho.models.sites import Site, SourceMeta
from cookie_racho.url import get_host, host_matches_suffix

DUCKDUCKGO_HTML_URL = "https://duckduckgo.com/html/?q={query}"

SITES: tuple[Site, ...] = (
    Site(
        id="marmiton",
        source_name="Marmiton",
        source_license="proprietary",
        source_attribution="Marmiton",
        host_suffixes=("marmiton.org",),
        search_url_template="https://www.marmiton.org/recettes/recherche.aspx?aqt={query}",
    ),
    Site(
        id="750g",
        source_name="750g",
        source_license="proprietary",
        source_attribution="750g",
        host_suffixes=("750g.com",),
        search_url_template="https://www.750g.com/recherche/?q={query}",
        client_rendered=True,
    ),
    Site(
        id="cuisineaz",
        source_name="CuisineAZ",
        source_license="proprietary",
        source_attribution="CuisineAZ",
        host_suffixes=("cuisineaz.com",),
        search_url_template=(
            "https://www.cuisineaz.com/recettes/recherche_terme.aspx?recherche={query}"
        ),
        client_rendered=True,
    ),
    Site(
        id="ptitchef",
        source_name="Ptitchef",
        source_license="proprietary",
        source_attribution="Ptitchef",
        host_suffixes=("ptitchef.com",),
        search_url_template=DUCKDUCKGO_HTML_URL,
        search_query_prefix="site:ptitchef.com recette ",
    ),
    Site(
        id="cuisineactuelle",
        source_name="Cuisine Actuelle",
        source_license="proprietary",
        source_attribution="Cuisine Actuelle",
        host_suffixes=("cuisineactuelle.fr",),
        search_url_template=DUCKDUCKGO_HTML_URL,
        search_query_prefix="site:cuisineactuelle.fr recette ",
    ),
    Site(
        id="journaldesfemmes",
        source_name="Journal des Femmes",
        source_license="proprietary",
        source_attribution="Journal des Femmes",
        host_suffixes=("journaldesfemmes.fr",),
        search_url_template=DUCKDUCKGO_HTML_URL,
        search_query_prefix="site:cuisine.journaldesfemmes.fr recette ",
    ),
)

_BY_ID: dict[str, Site] = {site.id: site for site in SITES}


def encode_query_component(value: str) -> str:
    """Percent-encode *value* for use inside a query string parameter."""
    return quote(value, safe="-_.!~*'()")


def list_sites() -> list[Site]:
    return list(SITES)


def default_site_ids() -> list[str]:
    return [site.id for site in SITES]


def get_site_by_id(site_id: str) -> Site | None:
    return _BY_ID.get(site_id)


def get_site_by_host(host: str) -> Site | None:
    for site in SITES:
        if host_matches_suffix(host, site.host_suffixes):
            return site
    return None


def get_site_by_url(url: str) -> Site | None:
    return get_site_by_host(get_host(url))


def build_search_url(site: Site, query: str) -> str | None:
    """Search page URL for *query* on *site*, or ``None`` when it has no search."""
    if site.search_url_template is None:
        return None
    return site.search_url_template.format(
        query=encode_query_component(f"{site.search_query_prefix}{query}")
    )


def infer_source_meta(url: str) -> SourceMeta:
    """Source metadata for the site serving *url*; unknown hosts describe themselves."""
    host = get_host(url)
    site = get_site_by_host(host)
    if site is None:
        return SourceMeta(source_name=host, source_license="unknown", source_attribution=host)
    return site.meta
