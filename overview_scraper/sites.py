"""
Site profiles: everything that differs between supported search engines.
Adding a search engine means adding a SiteProfile value.
"""

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

from overview_scraper.fingerprint import DEFAULT_HEADERS
from overview_scraper.models import SearchOptions
from overview_scraper.selector_catalog import (
    BING_SELECTORS,
    GOOGLE_SELECTORS,
    OVERVIEW_KEYWORDS,
    SelectorRule,
)


def build_google_search_url(query: str, options: Optional[SearchOptions] = None) -> str:
    """
    Build a Google search URL.

    gl/hl/num/start/pws carry geo, language, result count, offset and personalization.
    """
    options = options or SearchOptions()
    params = {
        'q': query,
        'gl': options.geo,
        'hl': options.language,
        'num': str(options.result_count),
        'start': str(options.start),
        'pws': '1' if options.personalization else '0',
    }
    return f"https://www.google.com/search?{urlencode(params)}"


def build_bing_search_url(query: str, options: Optional[SearchOptions] = None) -> str:
    options = options or SearchOptions()
    params = {
        'q': query,
        'cc': options.geo,
        'setLang': options.language,
        'count': str(options.result_count),
    }
    if options.start:
        params['first'] = str(options.start + 1)
    return f"https://www.bing.com/search?{urlencode(params)}"


@dataclass(frozen=True)
class SiteProfile:
    name: str
    home_url: str
    build_url: Callable[[str, Optional[SearchOptions]], str]
    catalog: Sequence[SelectorRule]
    keywords: Tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


GOOGLE = SiteProfile(
    name='Google',
    home_url='https://www.google.com',
    build_url=build_google_search_url,
    catalog=GOOGLE_SELECTORS,
    keywords=OVERVIEW_KEYWORDS,
)

BING = SiteProfile(
    name='Bing',
    home_url='https://www.bing.com',
    build_url=build_bing_search_url,
    catalog=BING_SELECTORS,
)

SITES = {'google': GOOGLE, 'bing': BING}


def get_site(name: str) -> SiteProfile:
    try:
        return SITES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown site '{name}'. Available: {', '.join(SITES)}")
