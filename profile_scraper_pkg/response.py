from typing import Any, Dict, List, Optional

from .models import ScrapedProfile


def build_response(url: str, profile: ScrapedProfile, debug_msgs: List[str]) -> Dict[str, Any]:
    """Compose the JSON document for one successful scrape.

    `found` is False when the page yielded no field at all; the scrape itself
    still succeeded.
    """
    return {
        "url": url,
        "found": not profile.is_empty(),
        "profile": profile.to_json_dict(),
        "debug": " | ".join(debug_msgs),
    }


def build_error(url: str, error: str, debug_msgs: Optional[List[str]] = None) -> Dict[str, Any]:
    """Build a consistent error document; `profile` is always None."""
    return {
        "url": url,
        "found": False,
        "error": error,
        "profile": None,
        "debug": " | ".join(debug_msgs or []),
    }
