"""
Two-hop navigation against a fresh, stealth-configured browser tab.
Visits the search engine home page first, then the query page, pausing like a reader would.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright_stealth import Stealth

from overview_scraper.classifier import SOFT_BLOCK_SCAN_LENGTH
from overview_scraper.config import PacingPolicy
from overview_scraper.errors import TransientNavigationError
from overview_scraper.fingerprint import StealthProfile
from overview_scraper.human_behavior import random_mouse_movement
from overview_scraper.models import SearchOptions
from overview_scraper.rate_limiter import Sleep, jittered_delay
from overview_scraper.sites import SiteProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationResult:
    search_url: str
    final_url: str
    markup: str
    body_text: str


class Navigator:
    """Opens stealth tabs and drives the home page -> query page sequence."""

    def __init__(self, site: SiteProfile, pacing: PacingPolicy, page_load_timeout: float = 20,
                 enable_stealth: bool = False, sleep: Sleep = asyncio.sleep):
        self.site = site
        self.pacing = pacing
        self.page_load_timeout = page_load_timeout
        self.enable_stealth = enable_stealth
        self._sleep = sleep

    @asynccontextmanager
    async def open_page(self, browser: Browser, profile: StealthProfile) -> AsyncIterator[Page]:
        """
        Open a tab configured with ``profile``; the tab and its context are closed on exit.
        """
        context = await browser.new_context(
            user_agent=profile.user_agent,
            viewport=dict(profile.viewport),
            extra_http_headers=dict(profile.extra_headers),
        )
        page = None
        try:
            page = await context.new_page()
            await page.add_init_script(script=profile.init_script)
            if self.enable_stealth:
                await self._apply_stealth(page)
            logger.info(f"Using User Agent: {profile.user_agent[:50]}...")
            logger.info(f"Using viewport: {profile.viewport['width']}x{profile.viewport['height']}")
            yield page
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.error(f"Error closing page: {e}")
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Error closing context: {e}")

    async def _apply_stealth(self, page: Page) -> None:
        try:
            await Stealth().apply_stealth_async(page)
            logger.debug("Applied stealth plugin to page")
        except Exception as e:
            logger.warning(f"Failed to apply stealth plugin (non-critical): {e}")

    async def _goto(self, page: Page, url: str) -> None:
        try:
            await page.goto(url, wait_until='domcontentloaded', timeout=self.page_load_timeout * 1000)
        except PlaywrightTimeoutError as e:
            raise TransientNavigationError(f"Timed out after {self.page_load_timeout}s loading {url}") from e
        except PlaywrightError as e:
            raise TransientNavigationError(f"Navigation to {url} failed: {e.message}") from e

    async def navigate(self, page: Page, query: str, options: Optional[SearchOptions] = None) -> NavigationResult:
        """
        Run the two-hop navigation and read back the rendered page.

        Raises:
            TransientNavigationError: Timeout or network failure on either hop
        """
        search_url = self.site.build_url(query, options)

        await jittered_delay(self.pacing.pre_navigation_delay, self._sleep, "Initial delay")

        logger.info(f"ℹ️ Step 1: Visiting {self.site.name} homepage...")
        await self._goto(page, self.site.home_url)
        await random_mouse_movement(page, max_x=100, max_y=100)
        await jittered_delay(self.pacing.homepage_delay, self._sleep, "Homepage delay")

        logger.info(f"ℹ️ Step 2: Performing search: {search_url}")
        await self._goto(page, search_url)
        await jittered_delay(self.pacing.content_delay, self._sleep, "Content loading delay")
        await random_mouse_movement(page, max_x=200, max_y=200)

        final_url = page.url
        logger.info(f"✅ Current URL: {final_url}")

        try:
            markup = await page.content()
        except PlaywrightError as e:
            raise TransientNavigationError(f"Could not read page content: {e.message}") from e

        return NavigationResult(
            search_url=search_url,
            final_url=final_url,
            markup=markup,
            body_text=await self._read_body_text(page),
        )

    async def _read_body_text(self, page: Page) -> str:
        try:
            text = await page.inner_text('body', timeout=5000)
        except Exception as e:
            logger.debug(f"Could not read body text: {e}")
            return ''
        return text[:SOFT_BLOCK_SCAN_LENGTH]
