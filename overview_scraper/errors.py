"""
Error taxonomy for the extraction pipeline.
Every failure inside a single query is converted into a Failure outcome at the query boundary.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable failure category carried by Failure outcomes."""

    LAUNCH_FAILURE = "launch_failure"
    TRANSIENT_NAVIGATION = "transient_navigation"
    HARD_BLOCK = "hard_block"
    SOFT_BLOCK = "soft_block"
    UNEXPECTED = "unexpected"


class ScraperError(Exception):
    """Base class for pipeline errors."""

    kind = ErrorKind.UNEXPECTED


class LaunchFailure(ScraperError):
    """The browser process could not be started."""

    kind = ErrorKind.LAUNCH_FAILURE


class TransientNavigationError(ScraperError):
    """Timeout or network failure during one of the navigation hops."""

    kind = ErrorKind.TRANSIENT_NAVIGATION


class HardBlockError(ScraperError):
    """The search engine redirected to a block/CAPTCHA page."""

    kind = ErrorKind.HARD_BLOCK

    def __init__(self, site_name: str = "Search engine"):
        super().__init__(
            f"🚫 BLOCKED: {site_name} detected automation. Solutions: "
            "1) Wait 10+ minutes 2) Change IP/VPN 3) Use different browser profile "
            "4) Try simpler queries first"
        )


class SoftBlockError(ScraperError):
    """The result page rendered but carries automated-traffic suspicion text."""

    kind = ErrorKind.SOFT_BLOCK

    def __init__(self, site_name: str = "Search engine"):
        super().__init__(
            f"🚫 SOFT BLOCK: {site_name} detected unusual traffic. "
            "Wait and try again with different patterns."
        )
