# =============================================================================
# Profile Scraper - Browser Session Tests
# =============================================================================
"""
Unit tests for browser session lifecycle and resource blocking.
"""

from types import SimpleNamespace

import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError

from profile_scraper_pkg import config
from profile_scraper_pkg.browser import BrowserSessionManager, block_heavy_resources
from profile_scraper_pkg.errors import LaunchError
from profile_scraper_pkg.models import ScrapeOptions


class FakeRoute:
    def __init__(self, resource_type: str) -> None:
        self.request = SimpleNamespace(resource_type=resource_type)
        self.outcome = None

    async def abort(self) -> None:
        self.outcome = "abort"

    async def continue_(self) -> None:
        self.outcome = "continue"


class FakeBrowserPage:
    def __init__(self) -> None:
        self.routes = []
        self.closed = False
        self.close_error = None

    async def route(self, pattern, handler) -> None:
        self.routes.append((pattern, handler))

    async def close(self) -> None:
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class FakeContext:
    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.page = FakeBrowserPage()
        self.closed = False

    async def new_page(self) -> FakeBrowserPage:
        return self.page

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, context_error=None) -> None:
        self.context_error = context_error
        self.context = None
        self.closed = False

    async def new_context(self, **kwargs) -> FakeContext:
        if self.context_error is not None:
            raise self.context_error
        self.context = FakeContext(**kwargs)
        return self.context

    async def close(self) -> None:
        self.closed = True


class FakeDriver:
    """Plays the part of both `async_playwright()` and the started driver."""

    def __init__(self, launch_error=None, context_error=None, start_error=None) -> None:
        self.launch_error = launch_error
        self.start_error = start_error
        self.browser = FakeBrowser(context_error)
        self.launch_kwargs = None
        self.stopped = 0
        self.chromium = self

    async def start(self) -> "FakeDriver":
        if self.start_error is not None:
            raise self.start_error
        return self

    async def launch(self, **kwargs) -> FakeBrowser:
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser

    async def stop(self) -> None:
        self.stopped += 1


class TestBlockHeavyResources:
    """Tests for the request router."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("resource_type", ["image", "stylesheet", "font"])
    async def test_blocks_presentational_resources(self, resource_type: str) -> None:
        route = FakeRoute(resource_type)

        await block_heavy_resources(route)

        assert route.outcome == "abort"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("resource_type", ["document", "script", "xhr", "fetch"])
    async def test_allows_rendering_traffic(self, resource_type: str) -> None:
        route = FakeRoute(resource_type)

        await block_heavy_resources(route)

        assert route.outcome == "continue"


class TestBrowserSessionManager:
    """Tests for acquire/release."""

    @pytest.mark.asyncio
    async def test_acquire_configures_fixed_fingerprint(self) -> None:
        driver = FakeDriver()
        manager = BrowserSessionManager(ScrapeOptions(), driver_factory=lambda: driver)

        session = await manager.acquire()

        assert driver.launch_kwargs["args"] == config.LAUNCH_ARGS
        assert session.context.kwargs["viewport"] == {"width": 1366, "height": 768}
        assert session.context.kwargs["user_agent"] == config.USER_AGENT
        assert session.page.routes[0][0] == "**/*"
        assert session.page.routes[0][1] is block_heavy_resources

    @pytest.mark.asyncio
    async def test_blocking_can_be_disabled(self) -> None:
        driver = FakeDriver()
        manager = BrowserSessionManager(
            ScrapeOptions(block_resources=False), driver_factory=lambda: driver
        )

        session = await manager.acquire()

        assert session.page.routes == []

    @pytest.mark.asyncio
    async def test_launch_failure_raises_launch_error(self) -> None:
        driver = FakeDriver(launch_error=PlaywrightError("Executable doesn't exist"))
        manager = BrowserSessionManager(driver_factory=lambda: driver)

        with pytest.raises(LaunchError):
            await manager.acquire()

        assert driver.stopped == 1

    @pytest.mark.asyncio
    async def test_partial_launch_is_torn_down(self) -> None:
        driver = FakeDriver(context_error=PlaywrightError("Browser closed"))
        manager = BrowserSessionManager(driver_factory=lambda: driver)

        with pytest.raises(LaunchError):
            await manager.acquire()

        assert driver.browser.closed is True
        assert driver.stopped == 1

    @pytest.mark.asyncio
    async def test_release_closes_everything_once(self) -> None:
        driver = FakeDriver()
        manager = BrowserSessionManager(driver_factory=lambda: driver)
        session = await manager.acquire()

        await manager.release(session)
        await manager.release(session)

        assert session.page.closed is True
        assert session.context.closed is True
        assert driver.browser.closed is True
        assert driver.stopped == 1

    @pytest.mark.asyncio
    async def test_scoped_session_releases_on_error(self) -> None:
        driver = FakeDriver()
        manager = BrowserSessionManager(driver_factory=lambda: driver)

        with pytest.raises(RuntimeError):
            async with manager.session():
                raise RuntimeError("boom")

        assert driver.browser.closed is True
        assert driver.stopped == 1

    @pytest.mark.asyncio
    async def test_driver_start_failure_raises_launch_error(self) -> None:
        driver = FakeDriver(start_error=RuntimeError("driver crashed on start"))
        manager = BrowserSessionManager(driver_factory=lambda: driver)

        with pytest.raises(LaunchError) as exc_info:
            await manager.acquire()

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_release_continues_after_unexpected_close_error(self) -> None:
        driver = FakeDriver()
        manager = BrowserSessionManager(driver_factory=lambda: driver)
        session = await manager.acquire()
        session.page.close_error = RuntimeError("page already detached")

        await manager.release(session)

        assert session.context.closed is True
        assert driver.browser.closed is True
        assert driver.stopped == 1

    @pytest.mark.asyncio
    async def test_release_stops_browser_even_when_cancelled(self) -> None:
        driver = FakeDriver()
        manager = BrowserSessionManager(driver_factory=lambda: driver)
        session = await manager.acquire()
        session.page.close_error = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await manager.release(session)

        assert driver.browser.closed is True
        assert driver.stopped == 1
