import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import NavigationError
from .models import ScrapeOptions

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

SCROLL_STEP_SCRIPT = "(step) => { window.scrollBy(0, step); return document.body.scrollHeight; }"
SCROLL_TOP_SCRIPT = "() => window.scrollTo(0, 0)"


class NavigationController:
    """Brings a profile page to a state where its lazy sections are rendered.

    Steps run strictly in order: load the DOM, pause for a randomized
    human-like delay, scroll down in small steps to trigger lazy rendering,
    then return to the top and let trailing renders settle.
    """

    def __init__(
        self,
        options: Optional[ScrapeOptions] = None,
        sleep: Sleep = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.options = options or ScrapeOptions()
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def load(self, session, url: str) -> None:
        page = session.page
        await self.goto(page, url)
        try:
            await self.random_delay()
            scrolled = await self.auto_scroll(page)
            await page.evaluate(SCROLL_TOP_SCRIPT)
            await self._sleep(self.options.settle_ms / 1000)
        except PlaywrightError as e:
            raise NavigationError(f"Page became unusable while loading {url}: {e}") from e
        logger.debug("Page ready after scrolling %dpx: %s", scrolled, url)

    async def goto(self, page: Page, url: str) -> None:
        """Wait for DOM construction only.

        Profile pages keep long-lived connections open, so waiting for network
        idle would stall until the timeout.
        """
        timeout_ms = self.options.navigation_timeout_ms
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationError(f"Navigation to {url} timed out after {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

    async def random_delay(self) -> float:
        """Sleep for a random duration within the configured bounds, in seconds."""
        delay = self._rng.uniform(self.options.min_delay_ms, self.options.max_delay_ms) / 1000
        await self._sleep(delay)
        return delay

    async def auto_scroll(self, page: Page) -> int:
        """Scroll down one step per interval until the bottom or the cap.

        Returns the distance scrolled in pixels.
        """
        step = self.options.scroll_step_px
        cap = self.options.scroll_cap_px
        total = 0
        while total < cap:
            await self._sleep(self.options.scroll_interval_ms / 1000)
            scroll_height = await page.evaluate(SCROLL_STEP_SCRIPT, step)
            total += step
            if total >= scroll_height:
                break
        return total
