"""Page fetching with basic bot-block detection."""

import logging
from urllib.parse import urlparse

import httpx

from whisk.app.core.config import get_settings
from whisk.app.services.recipe_extraction.models import FetchResult

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE = "Website blocked the request. This site uses anti-bot protection."
INVALID_URL_MESSAGE = "Failed to fetch: Invalid URL"


def _browser_headers(user_agent: str) -> dict:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Cache-Control": "max-age=0",
    }


def find_block_marker(html: str, markers) -> str | None:
    for marker in markers:
        if marker and marker in html:
            return marker
    return None


async def fetch_page(url: str) -> FetchResult:
    """Fetch a page's HTML. Never raises; failures come back as ``blocked``."""
    try:
        parsed_url = urlparse(url)
        valid = parsed_url.scheme in {"http", "https"} and bool(parsed_url.hostname)
    except ValueError:
        valid = False
    if not valid:
        logger.warning("Refusing to fetch invalid URL %s", url)
        return FetchResult(blocked=True, error=INVALID_URL_MESSAGE)

    settings = get_settings()
    timeout = httpx.Timeout(settings.scraper_timeout_seconds, connect=5.0)
    logger.info("Fetching %s", url)
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=_browser_headers(settings.scraper_user_agent),
        ) as client:
            response = await client.get(url)
        html = response.text
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Fetch failed for %s: %s", url, exc)
        return FetchResult(blocked=True, error=f"Failed to fetch: {exc}")

    if not 200 <= response.status_code < 300:
        logger.warning("Fetch for %s returned status %s", url, response.status_code)
        return FetchResult(
            blocked=True,
            status_code=response.status_code,
            error=f"Failed to fetch: HTTP {response.status_code}",
        )

    marker = find_block_marker(html, settings.scraper_block_markers)
    if marker or len(html) < settings.scraper_min_html_length:
        logger.warning(
            "Request to %s blocked by firewall or bot detection (marker=%s, length=%d)",
            url,
            marker,
            len(html),
        )
        return FetchResult(blocked=True, status_code=response.status_code, error=BLOCKED_MESSAGE)

    return FetchResult(blocked=False, html=html, status_code=response.status_code)
