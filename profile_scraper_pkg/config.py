import os


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


SLOW_MO_MS = _env_int("SCRAPER_SLOW_MO_MS", 0)
HEADLESS = os.environ.get("SCRAPER_HEADLESS", "true").lower() != "false"
BLOCK_RESOURCES = os.environ.get("SCRAPER_BLOCK_RESOURCES", "true").lower() != "false"
LOG_LEVEL = os.environ.get("SCRAPER_LOG_LEVEL", "INFO").upper()
DEBUG_DIR = os.environ.get("SCRAPER_DEBUG_DIR", "/tmp")

NAVIGATION_TIMEOUT_MS = _env_int("SCRAPER_NAVIGATION_TIMEOUT_MS", 30000)
MIN_DELAY_MS = _env_int("SCRAPER_MIN_DELAY_MS", 2000)
MAX_DELAY_MS = _env_int("SCRAPER_MAX_DELAY_MS", 5000)
SCROLL_STEP_PX = _env_int("SCRAPER_SCROLL_STEP_PX", 100)
SCROLL_INTERVAL_MS = _env_int("SCRAPER_SCROLL_INTERVAL_MS", 100)
SCROLL_CAP_PX = _env_int("SCRAPER_SCROLL_CAP_PX", 3000)
SETTLE_MS = _env_int("SCRAPER_SETTLE_MS", 3000)

REQUESTS_PER_MINUTE = _env_int("SCRAPER_REQUESTS_PER_MINUTE", 10)

VIEWPORT = {"width": 1366, "height": 768}
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Aborted by the session's request router; markup, script and XHR pass.
BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font"})

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
    "--disable-extensions",
]
