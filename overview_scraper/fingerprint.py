"""
Stealth profile generation for anti-detection.
Picks a realistic user agent and viewport per request and defines the
pre-navigation overrides that hide automation markers.
"""

import random
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


# Realistic Chrome user agents
CHROME_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]

# Realistic Safari user agents
SAFARI_USER_AGENTS = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
]

# Realistic Firefox user agents
FIREFOX_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
]

USER_AGENTS = CHROME_USER_AGENTS + SAFARI_USER_AGENTS + FIREFOX_USER_AGENTS

# Common desktop viewport sizes (width, height)
COMMON_VIEWPORTS = [
    (1920, 1080),  # Full HD
    (1366, 768),  # Common laptop
    (1440, 900),  # MacBook
    (1536, 864),  # Common laptop
    (1280, 720),  # HD
]

# Header set of a browser performing a top-level navigation
DEFAULT_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept-Encoding': 'gzip, deflate, br',
    'Cache-Control': 'max-age=0',
    'Sec-Fetch-Dest': 'document',
    'Sec-Fetch-Mode': 'navigate',
    'Sec-Fetch-Site': 'none',
    'Sec-Fetch-User': '?1',
    'Upgrade-Insecure-Requests': '1',
}

# Runs before any page script in every new document of a tab
STEALTH_INIT_SCRIPT = """
(() => {
    Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
    try { delete Object.getPrototypeOf(navigator).webdriver; } catch (e) {}

    window.chrome = window.chrome || {};
    window.chrome.runtime = window.chrome.runtime || {};

    Object.defineProperty(navigator, 'permissions', {
        get: () => ({
            query: () => Promise.resolve({ state: 'granted' })
        })
    });

    Object.defineProperty(navigator, 'plugins', {
        get: () => [
            {
                0: {
                    type: 'application/x-google-chrome-pdf',
                    suffixes: 'pdf',
                    description: 'Portable Document Format'
                },
                description: 'Portable Document Format',
                filename: 'internal-pdf-viewer',
                length: 1,
                name: 'Chrome PDF Plugin'
            }
        ]
    });
})();
"""


@dataclass(frozen=True)
class StealthProfile:
    """Fingerprint attributes applied to one tab before it navigates anywhere."""

    user_agent: str
    viewport: Mapping[str, int]
    extra_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_HEADERS)))
    init_script: str = STEALTH_INIT_SCRIPT


class FingerprintGenerator:
    """Generates randomized stealth profiles."""

    def __init__(self, user_agents=None, viewports=None, rng: Optional[random.Random] = None):
        self.user_agents = list(user_agents or USER_AGENTS)
        self.viewports = list(viewports or COMMON_VIEWPORTS)
        self.rng = rng or random.Random()

    def generate_user_agent(self) -> str:
        return self.rng.choice(self.user_agents)

    def generate_viewport(self) -> Dict[str, int]:
        """
        Generate a random realistic viewport size.

        Returns:
            Dictionary with 'width' and 'height' keys
        """
        width, height = self.rng.choice(self.viewports)
        return {'width': width, 'height': height}

    def generate_profile(self, headers: Optional[Mapping[str, str]] = None) -> StealthProfile:
        """
        Generate a complete stealth profile for one request.

        Args:
            headers: Site header set (defaults to DEFAULT_HEADERS)

        Returns:
            Immutable StealthProfile
        """
        profile = StealthProfile(
            user_agent=self.generate_user_agent(),
            viewport=MappingProxyType(self.generate_viewport()),
            extra_headers=MappingProxyType(dict(headers if headers is not None else DEFAULT_HEADERS)),
        )

        logger.debug(f"Generated profile: UA={profile.user_agent[:50]}..., "
                     f"viewport={profile.viewport['width']}x{profile.viewport['height']}")

        return profile


# Global instance for easy access
_fingerprint_generator = FingerprintGenerator()


def generate_profile(headers: Optional[Mapping[str, str]] = None) -> StealthProfile:
    """Convenience function to get a random stealth profile."""
    return _fingerprint_generator.generate_profile(headers)
