"""
Core scraper module using Playwright for AI overview extraction.
Composes pacing, browser session, stealth profile, navigation, block
classification and content extraction into one per-query pipeline.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import aiofiles
from playwright.async_api import Page

from overview_scraper.classifier import BlockRules, BlockVerdict, classify
from overview_scraper.config import PacingPolicy
from overview_scraper.errors import ErrorKind, HardBlockError, ScraperError, SoftBlockError
from overview_scraper.extractor import extract
from overview_scraper.fingerprint import FingerprintGenerator
from overview_scraper.models import Failure, Outcome, SearchOptions, Success, utc_timestamp
from overview_scraper.navigator import Navigator
from overview_scraper.rate_limiter import PacingController, Sleep
from overview_scraper.session import BrowserSession
from overview_scraper.sites import GOOGLE, SiteProfile, get_site

logger = logging.getLogger(__name__)


class OverviewScraper:
    """
    Extracts the AI overview panel for one query or a batch of queries.

    The browser session and pacing state are owned by this object and
    shared by every query it runs; pipelines are serialized.
    """

    def __init__(self, session: BrowserSession, site: SiteProfile = GOOGLE,
                 pacing: Optional[PacingPolicy] = None,
                 pacing_controller: Optional[PacingController] = None,
                 block_rules: Optional[BlockRules] = None,
                 page_load_timeout: float = 20,
                 enable_stealth: bool = False,
                 diagnostics_dir: str = 'diagnostics',
                 save_block_html: bool = True,
                 fingerprints: Optional[FingerprintGenerator] = None,
                 sleep: Sleep = asyncio.sleep):
        self.session = session
        self.site = site
        self.pacing = pacing or PacingPolicy()
        self.pacing_controller = pacing_controller or PacingController(self.pacing.min_request_interval, sleep=sleep)
        self.block_rules = block_rules or BlockRules()
        self.navigator = Navigator(site, self.pacing, page_load_timeout, enable_stealth, sleep=sleep)
        self.diagnostics_dir = Path(diagnostics_dir)
        self.save_block_html = save_block_html
        self.fingerprints = fingerprints or FingerprintGenerator()
        self._sleep = sleep
        self._pipeline_lock = asyncio.Lock()
        logger.info(f"OverviewScraper initialized for {site.name}")

    @classmethod
    def from_config(cls, config, session: Optional[BrowserSession] = None) -> "OverviewScraper":
        return cls(
            session=session or BrowserSession.from_config(config),
            site=get_site(config.site),
            pacing=config.pacing_policy(),
            block_rules=config.block_rules(),
            page_load_timeout=config.page_load_timeout,
            enable_stealth=config.enable_stealth,
            diagnostics_dir=config.diagnostics_dir,
            save_block_html=config.save_block_html,
        )

    async def scrape_one(self, query: str, options: Optional[SearchOptions] = None) -> Outcome:
        """
        Run the full pipeline for one query.

        Never raises for pipeline failures: they come back as a Failure outcome.
        """
        async with self._pipeline_lock:
            try:
                return await self._run_pipeline(query, options or SearchOptions())
            except ScraperError as e:
                logger.error(f"Error scraping AI Overview for '{query}': {e}")
                return self._failure(query, e.kind, str(e))
            except Exception as e:
                logger.error(f"Unexpected error scraping AI Overview for '{query}': {e}", exc_info=True)
                return self._failure(query, ErrorKind.UNEXPECTED, str(e) or type(e).__name__)

    async def _run_pipeline(self, query: str, options: SearchOptions) -> Success:
        await self.pacing_controller.gate()
        try:
            browser = await self.session.acquire_browser()
            profile = self.fingerprints.generate_profile(self.site.headers)

            async with self.navigator.open_page(browser, profile) as page:
                result = await self.navigator.navigate(page, query, options)

                verdict = classify(result.final_url, result.body_text, self.block_rules)
                if verdict is BlockVerdict.HARD_BLOCK:
                    logger.warning("🚫 Detected blocking page")
                    await self._capture_block_diagnostics(page, result.markup)
                    raise HardBlockError(self.site.name)
                if verdict is BlockVerdict.SOFT_BLOCK:
                    logger.warning("🚫 Detected unusual-traffic warning")
                    raise SoftBlockError(self.site.name)

                extraction = extract(result.markup, self.site.catalog, self.site.keywords)
        finally:
            self.pacing_controller.record()

        if extraction:
            logger.info(f"✅ AI overview found via {extraction.selector} ({len(extraction.text)} chars)")
        else:
            logger.info(f"ℹ️ No AI overview present for '{query}'")

        return Success(
            query=query,
            search_url=result.search_url,
            extraction=extraction,
            source=self.site.name,
            timestamp=utc_timestamp(),
        )

    async def _capture_block_diagnostics(self, page: Page, markup: str) -> None:
        """Best-effort screenshot, HTML snapshot and title read of a block page."""
        stamp = datetime.now().strftime('%Y%m%dT%H%M%S%f')
        base = self.diagnostics_dir / f"blocked-{stamp}"

        try:
            self.diagnostics_dir.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path=str(base.with_suffix('.png')))
            logger.info(f"📸 Screenshot saved as {base.with_suffix('.png')}")
        except Exception as e:
            logger.error(f"Failed to take screenshot: {e}")

        if self.save_block_html and markup:
            try:
                async with aiofiles.open(base.with_suffix('.html'), 'w', encoding='utf-8') as f:
                    await f.write(markup)
            except Exception as e:
                logger.error(f"Failed to save block page HTML: {e}")

        try:
            title = await page.title()
            logger.info(f"Page title: {title}")
        except Exception:
            logger.info("Could not get page title")

    async def scrape_batch(self, queries: Sequence[str], options: Optional[SearchOptions] = None,
                           delay: Optional[float] = None) -> List[Outcome]:
        """
        Run queries one after another, waiting ``delay`` seconds between them.

        Failures are recorded and do not stop the batch.
        """
        delay = self.pacing.inter_query_delay if delay is None else delay
        results = []

        for i, query in enumerate(queries):
            logger.info(f"Processing query {i + 1}/{len(queries)}: {query}")
            results.append(await self.scrape_one(query, options))

            if i < len(queries) - 1 and delay > 0:
                await self._sleep(delay)

        return results

    async def close(self) -> None:
        await self.session.release()

    def _failure(self, query: str, kind: ErrorKind, message: str) -> Failure:
        return Failure(
            query=query,
            error_kind=kind,
            message=message,
            source=self.site.name,
            timestamp=utc_timestamp(),
        )
