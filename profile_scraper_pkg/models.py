from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from . import config


class ScrapeOptions(BaseModel):
    """Per-job knobs for the browser session and page navigation.

    Defaults come from `config` (and therefore from `SCRAPER_*` environment
    variables). Tests pass zero delays to get deterministic, jitter-free runs.
    """
    headless: bool = config.HEADLESS
    block_resources: bool = config.BLOCK_RESOURCES
    debug: bool = False
    navigation_timeout_ms: int = Field(default=config.NAVIGATION_TIMEOUT_MS, gt=0)
    min_delay_ms: int = Field(default=config.MIN_DELAY_MS, ge=0)
    max_delay_ms: int = Field(default=config.MAX_DELAY_MS, ge=0)
    scroll_step_px: int = Field(default=config.SCROLL_STEP_PX, gt=0)
    scroll_interval_ms: int = Field(default=config.SCROLL_INTERVAL_MS, ge=0)
    scroll_cap_px: int = Field(default=config.SCROLL_CAP_PX, ge=0)
    settle_ms: int = Field(default=config.SETTLE_MS, ge=0)

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> "ScrapeOptions":
        if self.min_delay_ms > self.max_delay_ms:
            raise ValueError("min_delay_ms must not exceed max_delay_ms")
        return self

    @classmethod
    def zero_jitter(cls, **overrides: Any) -> "ScrapeOptions":
        """Options with every wait set to zero, for tests and dry runs."""
        values: Dict[str, Any] = {
            "min_delay_ms": 0,
            "max_delay_ms": 0,
            "scroll_interval_ms": 0,
            "settle_ms": 0,
        }
        values.update(overrides)
        return cls(**values)


class ScrapedProfile(BaseModel):
    """Structured record produced by one successful scrape job.

    Multi-value fields are deduplicated by exact text and keep discovery
    order. Absent sections are None or an empty list, never an error.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)
    education: List[str] = Field(default_factory=list)
    profile_picture_url: Optional[str] = Field(default=None, alias="profilePictureUrl")
    connections: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(
            [
                self.name,
                self.title,
                self.location,
                self.skills,
                self.certifications,
                self.companies,
                self.education,
                self.profile_picture_url,
                self.connections,
            ]
        )

    def to_json_dict(self) -> Dict[str, Any]:
        """Flat JSON-compatible dict using the public field names."""
        return self.model_dump(by_alias=True)
