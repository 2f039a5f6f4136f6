import asyncio
import enum
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Deque, Optional

from .models import ScrapedProfile
from .orchestrator import scrape_profile

logger = logging.getLogger(__name__)

ScrapeJobFn = Callable[[str], Awaitable[ScrapedProfile]]


class JobState(enum.Enum):
    QUEUED = "queued"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ScrapeJob:
    profile_url: str
    enqueued_at: float
    result_handle: "asyncio.Future[ScrapedProfile]"
    state: JobState = field(default=JobState.QUEUED)


class RateLimitedScheduler:
    """Single-consumer FIFO queue that throttles scrape jobs.

    Exactly one job runs at a time. After a job settles, successfully or not,
    the worker waits `60 / requests_per_minute` seconds before taking the next
    one, so spacing holds no matter how long individual jobs take.

    Instances share nothing: two schedulers run with separate budgets. The
    queue and running flag are only touched on the event loop, so no lock is
    needed. Queued or running jobs cannot be cancelled.
    """

    def __init__(
        self,
        requests_per_minute: float,
        job: Optional[ScrapeJobFn] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be positive")
        self.requests_per_minute = requests_per_minute
        self.interval = 60.0 / requests_per_minute
        self._job = job or scrape_profile
        self._clock = clock
        self._sleep = sleep
        self._queue: Deque[ScrapeJob] = deque()
        self._running = False
        self._worker: Optional[asyncio.Task] = None

    @property
    def pending(self) -> int:
        """Jobs waiting in the queue, excluding the one running."""
        return len(self._queue)

    @property
    def running(self) -> bool:
        return self._running

    def enqueue(self, profile_url: str) -> "asyncio.Future[ScrapedProfile]":
        """Queue a job and return its result handle without waiting.

        Must be called from inside a running event loop.
        """
        loop = asyncio.get_running_loop()
        job = ScrapeJob(
            profile_url=profile_url,
            enqueued_at=self._clock(),
            result_handle=loop.create_future(),
        )
        self._queue.append(job)
        logger.debug("Queued %s (%d pending)", profile_url, len(self._queue))
        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain())
        return job.result_handle

    async def __call__(self, profile_url: str) -> ScrapedProfile:
        return await self.enqueue(profile_url)

    async def join(self) -> None:
        """Wait until the queue is empty and the last cooldown has elapsed."""
        while self._worker is not None and not self._worker.done():
            await asyncio.shield(self._worker)

    async def _drain(self) -> None:
        while self._queue:
            job = self._queue.popleft()
            await self._run(job)
            # Spacing is measured from settlement, not from dispatch.
            await self._sleep(self.interval)

    async def _run(self, job: ScrapeJob) -> None:
        self._running = True
        job.state = JobState.RUNNING
        waited = self._clock() - job.enqueued_at
        logger.info("Dispatching %s after %.1fs in queue", job.profile_url, waited)
        try:
            result = await self._job(job.profile_url)
        except Exception as e:
            job.state = JobState.FAILED
            logger.warning("Job for %s failed: %s", job.profile_url, e)
            if not job.result_handle.done():
                job.result_handle.set_exception(e)
        else:
            job.state = JobState.DONE
            if not job.result_handle.done():
                job.result_handle.set_result(result)
        finally:
            self._running = False


def create_scheduler(requests_per_minute: float, **kwargs) -> RateLimitedScheduler:
    """Wrap `scrape_profile` behind a throttled FIFO queue.

    The returned scheduler is awaitable per URL, so it can be used in place of
    calling `scrape_profile` directly when several callers share one budget:

        scrape = create_scheduler(5)
        profile = await scrape("https://www.linkedin.com/in/someone/")
    """
    return RateLimitedScheduler(requests_per_minute, **kwargs)
