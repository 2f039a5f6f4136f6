# =============================================================================
# Profile Scraper - Shared Test Fakes
# =============================================================================
"""
Stand-ins for Playwright objects so engine tests run without a browser.
"""

from typing import Dict, List, Optional

import pytest

from profile_scraper_pkg.browser import BrowserSession, BrowserSessionManager
from profile_scraper_pkg.models import ScrapeOptions


class FakeElement:
    def __init__(self, text: str = "", **attrs: str) -> None:
        self.text = text
        self._attrs = attrs

    def get_attribute(self, name: str) -> Optional[str]:
        return self._attrs.get(name)


class FakeDom:
    """Minimal `DomQuery`: a selector -> elements table."""

    def __init__(self, table: Dict[str, List[FakeElement]]) -> None:
        self.table = table
        self.queried: List[str] = []

    def query_selector(self, selector: str) -> Optional[FakeElement]:
        self.queried.append(selector)
        items = self.table.get(selector, [])
        return items[0] if items else None

    def query_selector_all(self, selector: str) -> List[FakeElement]:
        self.queried.append(selector)
        return list(self.table.get(selector, []))


class FakePage:
    """Records calls; `evaluate` answers scroll steps and snapshot queries."""

    def __init__(
        self,
        scroll_height: int = 10_000,
        snapshot: Optional[dict] = None,
        goto_error: Optional[Exception] = None,
        evaluate_error: Optional[Exception] = None,
        screenshot_error: Optional[Exception] = None,
    ) -> None:
        self.scroll_height = scroll_height
        self.snapshot = snapshot or {}
        self.goto_error = goto_error
        self.evaluate_error = evaluate_error
        self.screenshot_error = screenshot_error
        self.screenshots_while_open = 0
        self.goto_calls: List[tuple] = []
        self.scroll_steps = 0
        self.scrolled_to_top = False
        self.closed = 0

    async def goto(self, url: str, wait_until: str, timeout: int) -> None:
        self.goto_calls.append((url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error

    async def evaluate(self, script: str, arg=None):
        if self.evaluate_error is not None:
            raise self.evaluate_error
        if "scrollBy" in script:
            self.scroll_steps += 1
            return self.scroll_height
        if "scrollTo" in script:
            self.scrolled_to_top = True
            return None
        return self.snapshot

    async def screenshot(self, path: str, full_page: bool = False) -> None:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        if not self.closed:
            self.screenshots_while_open += 1
        with open(path, "wb") as f:
            f.write(b"\x89PNG")

    async def content(self) -> str:
        return "<html><body><h1>Jane Doe</h1></body></html>"

    async def close(self) -> None:
        self.closed += 1


class _Closable:
    def __init__(self) -> None:
        self.closed = 0

    async def close(self) -> None:
        self.closed += 1

    async def stop(self) -> None:
        self.closed += 1


class FakeSessionManager(BrowserSessionManager):
    """Hands out a session around a `FakePage` and counts releases."""

    def __init__(self, page: FakePage, launch_error: Optional[Exception] = None) -> None:
        super().__init__(ScrapeOptions.zero_jitter())
        self.page = page
        self.launch_error = launch_error
        self.acquired = 0
        self.released = 0

    async def acquire(self) -> BrowserSession:
        if self.launch_error is not None:
            raise self.launch_error
        self.acquired += 1
        return BrowserSession(
            playwright=_Closable(), browser=_Closable(), context=_Closable(), page=self.page
        )

    async def release(self, session: BrowserSession) -> None:
        self.released += 1
        await super().release(session)


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def options() -> ScrapeOptions:
    return ScrapeOptions.zero_jitter()
