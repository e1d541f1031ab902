"""Shared fakes standing in for Playwright objects and wall-clock time."""

import pytest

from overview_scraper.config import PacingPolicy

NO_DELAYS = PacingPolicy(
    min_request_interval=0.0,
    pre_navigation_delay=(0.0, 0.0),
    homepage_delay=(0.0, 0.0),
    content_delay=(0.0, 0.0),
    inter_query_delay=0.0,
)


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def time(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeMouse:
    def __init__(self):
        self.moves = []

    async def move(self, x, y):
        self.moves.append((x, y))


class FakePage:
    """
    Minimal async Page.

    ``redirects`` maps a requested URL to the URL the tab ends up on;
    ``goto_errors`` maps a requested URL to the exception raised for it.
    """

    def __init__(self, markup="<html><body></body></html>", body_text="", redirects=None,
                 goto_errors=None, screenshot_error=None, title="Google"):
        self.url = "about:blank"
        self.markup = markup
        self.body_text = body_text
        self.redirects = redirects or {}
        self.goto_errors = goto_errors or {}
        self.screenshot_error = screenshot_error
        self._title = title
        self.viewport_size = {"width": 1280, "height": 720}
        self.mouse = FakeMouse()
        self.visits = []
        self.init_scripts = []
        self.screenshots = []
        self.close_count = 0

    async def add_init_script(self, script=None, path=None):
        self.init_scripts.append(script)

    async def goto(self, url, wait_until=None, timeout=None):
        self.visits.append((url, wait_until, timeout))
        if url in self.goto_errors:
            raise self.goto_errors[url]
        self.url = self.redirects.get(url, url)

    async def content(self):
        return self.markup

    async def inner_text(self, selector, timeout=None):
        return self.body_text

    async def screenshot(self, path=None, **kwargs):
        if self.screenshot_error:
            raise self.screenshot_error
        self.screenshots.append(path)
        with open(path, "wb") as f:
            f.write(b"\x89PNG")

    async def title(self):
        return self._title

    async def close(self):
        self.close_count += 1


class FakeContext:
    def __init__(self, page, options):
        self.page = page
        self.options = options
        self.close_count = 0

    async def new_page(self):
        return self.page

    async def add_init_script(self, script=None, path=None):
        pass

    async def close(self):
        self.close_count += 1


class FakeBrowser:
    """Hands out the queued pages in order, one per new context."""

    def __init__(self, pages=None, clock=None):
        self.pages = list(pages or [])
        self.clock = clock
        self.contexts_opened = []
        self.context_times = []
        self.contexts = []
        self.connected = True
        self.close_count = 0

    def is_connected(self):
        return self.connected

    async def new_context(self, **options):
        page = self.pages.pop(0) if self.pages else FakePage()
        context = FakeContext(page, options)
        self.contexts_opened.append(context)
        if self.clock is not None:
            self.context_times.append(self.clock.now)
        return context

    async def close(self):
        self.close_count += 1
        self.connected = False


class FakeSession:
    """BrowserSession replacement that always returns the same browser."""

    def __init__(self, browser=None, launch_error=None):
        self.browser = browser or FakeBrowser()
        self.launch_error = launch_error
        self.acquire_count = 0
        self.release_count = 0

    @property
    def is_alive(self):
        return self.browser.connected

    async def acquire_browser(self):
        self.acquire_count += 1
        if self.launch_error:
            raise self.launch_error
        return self.browser

    async def release(self):
        self.release_count += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def no_delays():
    return NO_DELAYS
