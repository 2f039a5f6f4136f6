#!/usr/bin/env python3
"""
Profile Scraper - CLI Standalone Version

A command-line tool to scrape a structured professional profile (name,
headline, skills, experience, ...) from one or more public profile URLs.
Multiple URLs are run one at a time through a rate-limited queue.

Usage:
    python scraper.py <PROFILE_URL> [<PROFILE_URL> ...] [OPTIONS]

Example:
    python scraper.py https://www.linkedin.com/in/johndoe/ --debug
    python scraper.py URL1 URL2 URL3 --requests-per-minute 4 -o results.json
"""

import argparse
import asyncio
import json
import sys
from typing import List

from profile_scraper_pkg import config
from profile_scraper_pkg.errors import ScrapeError
from profile_scraper_pkg.models import ScrapeOptions
from profile_scraper_pkg.orchestrator import scrape_profile
from profile_scraper_pkg.response import build_error, build_response
from profile_scraper_pkg.scheduler import create_scheduler
from profile_scraper_pkg.scraper_logging import configure_logging


async def scrape_many(urls: List[str], options: ScrapeOptions, requests_per_minute: float) -> List[dict]:
    """Scrape every URL through one shared scheduler, preserving input order."""
    debug_lists: List[List[str]] = [[] for _ in urls]
    # Jobs are dispatched in enqueue order, so the n-th run owns the n-th list.
    next_debug = iter(debug_lists)

    async def job(url: str):
        return await scrape_profile(url, options, debug_msgs=next(next_debug))

    scheduler = create_scheduler(requests_per_minute, job=job)
    handles = [scheduler.enqueue(url) for url in urls]

    results = []
    for url, handle, debug_msgs in zip(urls, handles, debug_lists):
        try:
            profile = await handle
        except ScrapeError as e:
            print(f"❌ {url}: {e.message}", file=sys.stderr)
            results.append(build_error(url, e.message, debug_msgs))
        else:
            print(f"✅ {url}: {profile.name or 'unnamed profile'}", file=sys.stderr)
            results.append(build_response(url, profile, debug_msgs))
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape structured profile data from public profile pages",
    )
    parser.add_argument("urls", nargs="+", metavar="URL", help="Profile URL(s) to scrape")
    parser.add_argument(
        "--requests-per-minute",
        type=float,
        default=config.REQUESTS_PER_MINUTE,
        help=f"Maximum scrape jobs started per minute (default: {config.REQUESTS_PER_MINUTE})",
    )
    parser.add_argument(
        "--headless",
        type=lambda x: x.lower() in ("true", "1", "yes"),
        default=config.HEADLESS,
        help="Run browser in headless mode (default: true)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=config.NAVIGATION_TIMEOUT_MS,
        help=f"Navigation timeout in milliseconds (default: {config.NAVIGATION_TIMEOUT_MS})",
    )
    parser.add_argument("--min-delay", type=int, default=config.MIN_DELAY_MS, help="Minimum pre-scroll delay (ms)")
    parser.add_argument("--max-delay", type=int, default=config.MAX_DELAY_MS, help="Maximum pre-scroll delay (ms)")
    parser.add_argument("--scroll-step", type=int, default=config.SCROLL_STEP_PX, help="Pixels per scroll step")
    parser.add_argument("--scroll-cap", type=int, default=config.SCROLL_CAP_PX, help="Maximum pixels to scroll")
    parser.add_argument("--settle", type=int, default=config.SETTLE_MS, help="Wait after scrolling (ms)")
    parser.add_argument(
        "--no-block",
        action="store_true",
        help="Load images, stylesheets and fonts instead of blocking them",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and screenshot/HTML snapshots on failure",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Output file path (JSON format). If not specified, prints to stdout",
    )
    return parser


def main(argv: List[str] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.debug else None)

    urls = [u if u.startswith("http") else f"https://{u}" for u in args.urls]

    try:
        options = ScrapeOptions(
            headless=args.headless,
            block_resources=not args.no_block,
            debug=args.debug,
            navigation_timeout_ms=args.timeout,
            min_delay_ms=args.min_delay,
            max_delay_ms=args.max_delay,
            scroll_step_px=args.scroll_step,
            scroll_cap_px=args.scroll_cap,
            settle_ms=args.settle,
        )
    except ValueError as e:
        print(f"❌ Invalid options: {e}", file=sys.stderr)
        return 2
    if args.requests_per_minute <= 0:
        print("❌ --requests-per-minute must be positive", file=sys.stderr)
        return 2

    try:
        results = asyncio.run(scrape_many(urls, options, args.requests_per_minute))
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted by user", file=sys.stderr)
        return 130

    payload = results[0] if len(results) == 1 else results
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        print(f"📁 Results saved to: {args.output}", file=sys.stderr)
    else:
        print(json.dumps(payload, indent=2))

    return 0 if any("error" not in r for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
