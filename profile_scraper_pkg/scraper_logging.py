import logging
import os
import time
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError, Page

from . import config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the package logger.

    The level defaults to `SCRAPER_LOG_LEVEL`. Calling this twice does not
    duplicate handlers.
    """
    pkg_logger = logging.getLogger("profile_scraper_pkg")
    pkg_logger.setLevel((level or config.LOG_LEVEL).upper())
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        pkg_logger.addHandler(handler)


def add_debug(debug_list: Optional[List[str]], tag: str) -> None:
    """Append a debug tag to the in-flight list, if the caller supplied one.

    Small structured tags trace which steps ran without exposing page data.
    """
    if debug_list is not None:
        debug_list.append(tag)


async def save_debug_files(page: Page, prefix: str = "debug") -> Optional[dict]:
    """Save a full-page screenshot and the HTML content for diagnostics.

    Returns a map with file paths, or None if the page could not be captured
    (typically because the browser already died). Only used in debug mode.
    """
    ts = int(time.time() * 1000)
    screenshot_path = os.path.join(config.DEBUG_DIR, f"{prefix}_{ts}.png")
    html_path = os.path.join(config.DEBUG_DIR, f"{prefix}_{ts}.html")
    try:
        await page.screenshot(path=screenshot_path, full_page=True)
        content = await page.content()
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(content)
    except (PlaywrightError, OSError) as e:
        logger.warning("Could not save debug files: %s", e)
        return None
    logger.info("Saved debug files %s, %s", screenshot_path, html_path)
    return {"screenshot": screenshot_path, "html": html_path}
