"""
Content extraction for the AI overview panel.
Walks a selector catalog in order, then falls back to marker-phrase search.
"""

import logging
from typing import Iterable, Optional, Sequence

from bs4 import BeautifulSoup, Comment

from overview_scraper.models import ExtractionResult
from overview_scraper.selector_catalog import (
    GOOGLE_SELECTORS,
    KEYWORD_MIN_LENGTH,
    KEYWORD_SELECTOR,
    OVERVIEW_KEYWORDS,
    SelectorRule,
)

logger = logging.getLogger(__name__)

_SKIPPED_PARENTS = {'script', 'style', 'noscript', 'template'}


def _match_catalog(soup: BeautifulSoup, catalog: Sequence[SelectorRule]) -> Optional[ExtractionResult]:
    for rule in catalog:
        element = soup.select_one(rule.selector)
        if element is None:
            continue
        text = element.get_text().strip()
        if len(text) > rule.min_length:
            logger.debug(f"Selector {rule.selector} matched ({len(text)} chars)")
            return ExtractionResult(text=text, html=element.decode_contents(), selector=rule.selector)
    return None


def _match_keywords(soup: BeautifulSoup, keywords: Iterable[str],
                    min_length: int) -> Optional[ExtractionResult]:
    """
    Find the closest element around a marker phrase that carries enough text.

    For each phrase in order, text nodes inside ``<body>`` containing it are
    visited in document order and their ancestors climbed, below ``<body>``,
    until one exceeds ``min_length``.
    """
    body = soup.body
    if body is None:
        return None

    for keyword in keywords:
        for node in body.find_all(string=lambda s: s is not None and keyword in s):
            if isinstance(node, Comment) or node.parent is None or node.parent.name in _SKIPPED_PARENTS:
                continue
            for element in node.parents:
                if element is body:
                    break
                text = element.get_text().strip()
                if len(text) > min_length:
                    logger.debug(f"Keyword '{keyword}' matched inside <{element.name}> ({len(text)} chars)")
                    return ExtractionResult(
                        text=text,
                        html=element.decode_contents(),
                        selector=KEYWORD_SELECTOR,
                        keyword=keyword,
                    )
    return None


def extract(markup: str,
            catalog: Sequence[SelectorRule] = GOOGLE_SELECTORS,
            keywords: Iterable[str] = OVERVIEW_KEYWORDS,
            keyword_min_length: int = KEYWORD_MIN_LENGTH) -> Optional[ExtractionResult]:
    """
    Locate the overview fragment in rendered markup.

    Args:
        markup: Full page HTML
        catalog: Ordered selector rules; the first sufficiently long match wins
        keywords: Marker phrases for the fallback pass (empty disables it)
        keyword_min_length: Text length a fallback element must exceed

    Returns:
        ExtractionResult, or None when the page has no overview
    """
    if not markup:
        return None

    soup = BeautifulSoup(markup, 'lxml')

    result = _match_catalog(soup, catalog)
    if result is None:
        result = _match_keywords(soup, keywords, keyword_min_length)

    if result is None:
        logger.debug("No overview content found in markup")
    return result
