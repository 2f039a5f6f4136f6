class ScrapeEngineError(Exception):
    """Base exception for scraper engine errors."""


class LaunchError(ScrapeEngineError):
    """Browser process could not be started."""


class NavigationError(ScrapeEngineError):
    """Page did not reach an extractable state (timeout or network failure)."""


class ExtractionError(ScrapeEngineError):
    """In-page query could not be executed, e.g. the session went away."""


class ScrapeError(ScrapeEngineError):
    """Public failure of a scrape job.

    Wraps the originating error with a consistent message; the cause is kept
    on `__cause__`.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
