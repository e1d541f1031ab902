"""
Ordered content-location rules for the AI overview panel.
Search engines change their markup often; catalog order is the only tie-break.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SelectorRule:
    """A CSS selector and the minimum stripped text length a match must exceed."""

    selector: str
    min_length: int = 50


def build_catalog(selectors, min_length: int) -> Tuple[SelectorRule, ...]:
    """Build an ordered catalog sharing one minimum text length."""
    return tuple(SelectorRule(selector, min_length) for selector in selectors)


GOOGLE_SELECTORS = build_catalog([
    '[data-attrid="FeaturedSnippet"]',
    '[data-attrid="SGTOverview"]',
    '[jsname="xQjRM"]',
    '[data-async-context="query:"]',
    '.aCOpRe',
    '.kp-wholepage-osrp',
    '.g-blk',
    '.TzHB6b',
    '.BNeawe',
    '.IZ6rdc',
    '.hgKElc',
    '.LTKOO',
    '.sATSHe',
    '.UCInVb',
    '.yXK7lf',
    '.MjjYud',
    '.VwiC3b',
    '.yXK7lf em',
    '.hgKElc .BNeawe',
], min_length=50)

# Bing answer cards are shorter than Google overviews
BING_SELECTORS = build_catalog([
    '.b_cards',
    '.b_ans',
    '.b_entityTP',
    '.b_pag',
    '.b_factrow',
    '.ans_nws',
    '.b_xlText',
    '.rms_rnk',
], min_length=30)

# Marker phrases for the keyword fallback pass
OVERVIEW_KEYWORDS = (
    'AI-generated',
    'Generative AI',
    'Overview',
    'Sources include',
)

KEYWORD_MIN_LENGTH = 100
KEYWORD_SELECTOR = 'keyword-based'
