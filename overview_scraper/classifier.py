"""
Block detection for rendered search result pages.
Hard blocks are recognised from the final URL host and path alone; soft blocks from the visible page text.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Visible text beyond this prefix is not inspected for suspicion phrases
SOFT_BLOCK_SCAN_LENGTH = 500


class BlockVerdict(Enum):
    NONE = "none"
    HARD_BLOCK = "hard_block"
    SOFT_BLOCK = "soft_block"


@dataclass(frozen=True)
class BlockRules:
    """Trigger lists for both tiers. These evolve with the search engines and are configurable."""

    hard_url_patterns: Tuple[str, ...] = ('sorry/index', 'captcha', 'blocked')
    soft_text_phrases: Tuple[str, ...] = ('unusual traffic', 'automated queries')


DEFAULT_BLOCK_RULES = BlockRules()


def classify(final_url: str, body_text: str, rules: BlockRules = DEFAULT_BLOCK_RULES) -> BlockVerdict:
    """
    Classify a navigation result.

    Args:
        final_url: URL the tab ended on after the search navigation
        body_text: Visible body text of the page (may be empty)
        rules: Trigger lists

    Returns:
        BlockVerdict; the URL check runs before the text scan
    """
    # Query strings echo the search terms and are not inspected
    parsed = urlparse(final_url or '')
    url = parsed.netloc + parsed.path
    for pattern in rules.hard_url_patterns:
        if pattern in url:
            logger.debug(f"Hard block pattern '{pattern}' found in {url}")
            return BlockVerdict.HARD_BLOCK

    head = (body_text or '')[:SOFT_BLOCK_SCAN_LENGTH]
    for phrase in rules.soft_text_phrases:
        if phrase in head:
            logger.debug(f"Soft block phrase '{phrase}' found in page text")
            return BlockVerdict.SOFT_BLOCK

    return BlockVerdict.NONE
