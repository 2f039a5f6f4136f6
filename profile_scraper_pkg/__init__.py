"""Scraper package providing modular components for the profile scraper.

The browser session, navigation, extraction and scheduling concerns live in
small modules so each can be exercised without a real browser.
"""
from .errors import ExtractionError, LaunchError, NavigationError, ScrapeError
from .models import ScrapedProfile, ScrapeOptions
from .orchestrator import scrape_profile
from .scheduler import RateLimitedScheduler, create_scheduler

__all__ = [
    "ExtractionError",
    "LaunchError",
    "NavigationError",
    "RateLimitedScheduler",
    "ScrapeError",
    "ScrapeOptions",
    "ScrapedProfile",
    "create_scheduler",
    "scrape_profile",
]
