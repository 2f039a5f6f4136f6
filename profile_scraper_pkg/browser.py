import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, Route
from playwright.async_api import async_playwright

from . import config
from .errors import LaunchError
from .models import ScrapeOptions

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """One isolated browser process owned by exactly one scrape job."""
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    released: bool = False


async def block_heavy_resources(route: Route) -> None:
    """Abort image, stylesheet and font requests; let everything else through.

    Markup, scripts and XHR/fetch are needed for the page to render its lazy
    sections, so only purely presentational traffic is dropped.
    """
    if route.request.resource_type in config.BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class BrowserSessionManager:
    """Launches a fresh Chromium per job and tears it down afterwards.

    Sessions are never reused: each job gets its own driver, browser and
    context so cookies and fingerprints cannot leak between jobs.
    """

    def __init__(self, options: Optional[ScrapeOptions] = None, driver_factory=async_playwright):
        self.options = options or ScrapeOptions()
        self._driver_factory = driver_factory

    async def acquire(self) -> BrowserSession:
        playwright = None
        browser = None
        try:
            playwright = await self._driver_factory().start()
            browser = await playwright.chromium.launch(
                headless=self.options.headless,
                slow_mo=config.SLOW_MO_MS if config.SLOW_MO_MS > 0 else None,
                args=config.LAUNCH_ARGS,
            )
            context = await browser.new_context(
                user_agent=config.USER_AGENT,
                viewport=config.VIEWPORT,
                locale="en-US",
            )
            page = await context.new_page()
            if self.options.block_resources:
                await page.route("**/*", block_heavy_resources)
        except Exception as e:
            await _quiet_close(browser, playwright)
            raise LaunchError(f"Browser launch failed: {e}") from e
        logger.debug("Browser session started (headless=%s)", self.options.headless)
        return BrowserSession(playwright=playwright, browser=browser, context=context, page=page)

    async def release(self, session: BrowserSession) -> None:
        """Terminate the session's browser process. Safe to call twice."""
        if session.released:
            return
        session.released = True
        await _close_chain(
            [
                ("page", session.page.close),
                ("context", session.context.close),
                ("browser", session.browser.close),
                ("driver", session.playwright.stop),
            ]
        )
        logger.debug("Browser session released")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[BrowserSession]:
        """Scoped acquisition: the session is released on every exit path."""
        session = await self.acquire()
        try:
            yield session
        finally:
            await self.release(session)


async def _quiet_close(browser, playwright) -> None:
    if browser is not None:
        try:
            await browser.close()
        except Exception as e:
            logger.warning("Failed to close browser after launch error: %s", e)
    if playwright is not None:
        try:
            await playwright.stop()
        except Exception as e:
            logger.warning("Failed to stop driver after launch error: %s", e)


async def _close_chain(closers) -> None:
    """Run every closer in order, even if an earlier one fails or is cancelled."""
    if not closers:
        return
    (name, closer), rest = closers[0], closers[1:]
    try:
        await closer()
    except Exception as e:
        logger.warning("Failed to close %s: %s", name, e)
    finally:
        await _close_chain(rest)
