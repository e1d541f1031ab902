"""
Browser session management.
Owns one long-lived Chromium process, launched lazily and replaced when it disconnects.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from playwright.async_api import Browser, async_playwright

from overview_scraper.errors import LaunchFailure
from overview_scraper.fingerprint import STEALTH_INIT_SCRIPT

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    Exclusive handle to a single running browser.

    ``acquire_browser`` returns the live browser or launches a new one;
    ``release`` tears everything down and may be called any number of times.
    """

    def __init__(self, headless: bool = True, args: Optional[List[str]] = None, launch_timeout: float = 60,
                 playwright_factory: Callable[[], Any] = async_playwright):
        """
        Args:
            headless: Run Chromium without a window
            args: Chromium command-line flags
            launch_timeout: Seconds to wait for the browser process to start
            playwright_factory: Returns an object whose ``start()`` yields a Playwright driver
        """
        self.headless = headless
        self.args = list(args or [])
        self.launch_timeout = launch_timeout
        self._playwright_factory = playwright_factory
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config) -> "BrowserSession":
        return cls(
            headless=config.browser_headless,
            args=config.browser_args,
            launch_timeout=config.launch_timeout,
        )

    @property
    def is_alive(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def acquire_browser(self) -> Browser:
        """
        Return the live browser, launching a replacement if needed.

        Raises:
            LaunchFailure: The browser process could not be started
        """
        async with self._lock:
            if self.is_alive:
                return self._browser

            if self._browser is not None:
                logger.warning("Browser disconnected, relaunching")
                await self._close_browser()

            self._browser = await self._launch()
            return self._browser

    async def _launch(self) -> Browser:
        try:
            if self._playwright is None:
                self._playwright = await self._playwright_factory().start()

            logger.info(f"🚀 Launching Chromium (headless={self.headless})")
            browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=self.args,
                timeout=self.launch_timeout * 1000,
            )
        except Exception as e:
            logger.error(f"Browser launch failed: {e}")
            raise LaunchFailure(f"Failed to launch browser: {e}") from e

        # A plain chromium.launch() has no contexts yet; this covers drivers that
        # start with a default tab open. Per-request tabs get the script in Navigator.open_page.
        for context in browser.contexts:
            try:
                await context.add_init_script(script=STEALTH_INIT_SCRIPT)
            except Exception as e:
                logger.debug(f"Could not install stealth script on existing context: {e}")

        return browser

    async def _close_browser(self) -> None:
        browser, self._browser = self._browser, None
        if browser is None:
            return
        try:
            await browser.close()
        except Exception as e:
            logger.debug(f"Browser already closed: {e}")

    async def release(self) -> None:
        """Close the browser and stop the Playwright driver. Safe to call when already closed."""
        async with self._lock:
            await self._close_browser()
            playwright, self._playwright = self._playwright, None
            if playwright is not None:
                try:
                    await playwright.stop()
                except Exception as e:
                    logger.debug(f"Playwright already stopped: {e}")
            logger.info("Browser session released")
