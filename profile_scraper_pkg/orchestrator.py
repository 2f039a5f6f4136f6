import logging
from typing import List, Optional
from urllib.parse import urlparse

from .browser import BrowserSessionManager
from .errors import ScrapeError
from .extraction import FieldExtractor
from .models import ScrapedProfile, ScrapeOptions
from .navigation import NavigationController
from .scraper_logging import add_debug, save_debug_files

logger = logging.getLogger(__name__)


def validate_profile_url(profile_url: str) -> str:
    url = (profile_url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ScrapeError(f"Invalid profile URL: {profile_url!r}")
    return url


async def scrape_profile(
    profile_url: str,
    options: Optional[ScrapeOptions] = None,
    *,
    session_manager: Optional[BrowserSessionManager] = None,
    navigator: Optional[NavigationController] = None,
    extractor: Optional[FieldExtractor] = None,
    debug_msgs: Optional[List[str]] = None,
) -> ScrapedProfile:
    """Scrape one profile page into a `ScrapedProfile`.

    Acquires a fresh browser session, loads and scrolls the page, extracts
    every field, and releases the session exactly once on every path. Any
    failure is re-raised as `ScrapeError` after the session is gone; no
    partial profile is ever returned.

    Args:
        profile_url: Public profile page to load.
        options: Timing and browser knobs; defaults come from the environment.
        session_manager, navigator, extractor: Collaborator overrides, mainly
            for tests.
        debug_msgs: Optional list that receives step tags for diagnostics.
    """
    url = validate_profile_url(profile_url)
    options = options or ScrapeOptions()
    session_manager = session_manager or BrowserSessionManager(options)
    navigator = navigator or NavigationController(options)
    extractor = extractor or FieldExtractor()

    try:
        async with session_manager.session() as session:
            add_debug(debug_msgs, "SessionAcquired")
            try:
                await navigator.load(session, url)
                add_debug(debug_msgs, "PageLoaded")
                profile = await extractor.extract_all(session)
                add_debug(debug_msgs, "FieldsExtracted")
            except Exception:
                if options.debug:
                    await save_debug_files(session.page, "scrape_failed")
                raise
    except Exception as e:
        add_debug(debug_msgs, f"Failed:{type(e).__name__}")
        logger.error("Scraping %s failed: %s", url, e)
        raise ScrapeError(f"Scraping failed: {e}") from e

    if profile.is_empty():
        # Still a success: every section can legitimately be absent.
        logger.warning("No profile fields found on %s", url)
        add_debug(debug_msgs, "EmptyProfile")
    else:
        logger.info("Scraped %s (%d skills)", url, len(profile.skills))
    return profile
