import logging
import time
from functools import wraps
from logging import Logger
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from exceptions import RateLimitExceeded
from main_config import DEFAULT_CONFIG

"""
Wikipedia Agent

This module fetches page data from Wikipedia at game time. It is only used as a
fallback when the bundled people catalog lacks a person's section headings or
hints; it does no caching and leaves persistence to the caller.

Services:
- Page summary (REST API): title, description and a plain-text extract.
- Page sections (Action API, action=parse&prop=sections): the table of contents.

Network and HTTP failures are logged and returned as None. HTTP 429 raises
RateLimitExceeded so callers can back off.
"""

logger = logging.getLogger("wikipedia_agent")

WIKIPEDIA_CONFIG: Dict[str, Any] = dict(DEFAULT_CONFIG["wikipedia"])


def configure_agent(settings: Optional[Dict[str, Any]]):
    """Override endpoint, timeout, User-Agent or rate limit settings."""
    if settings:
        WIKIPEDIA_CONFIG.update(settings)
        logger.debug("Wikipedia agent configured", extra={"settings": dict(WIKIPEDIA_CONFIG)})


def rate_limit(func):
    """Decorator enforcing WIKIPEDIA_CONFIG['rate_limit_delay'] seconds between calls"""
    last_call = {}  # Dictionary to track last call time per function

    @wraps(func)
    def wrapper(*args, **kwargs):
        delay = float(WIKIPEDIA_CONFIG.get("rate_limit_delay", 0) or 0)
        current_time = time.time()

        if func.__name__ in last_call:
            elapsed = current_time - last_call[func.__name__]
            if elapsed < delay:
                time.sleep(delay - elapsed)

        last_call[func.__name__] = time.time()
        return func(*args, **kwargs)

    return wrapper


def _headers() -> Dict[str, str]:
    return {"User-Agent": WIKIPEDIA_CONFIG["user_agent"], "Accept": "application/json"}


def _get_json(url: str, title: str, params: Optional[Dict[str, Any]] = None,
              logger: Logger = logger) -> Optional[Any]:
    response = None
    try:
        response = requests.get(url, params=params, headers=_headers(),
                                timeout=WIKIPEDIA_CONFIG["timeout"])
        response.raise_for_status()
        return response.json()
    except requests.exceptions.HTTPError as e:
        status_code = response.status_code if response is not None else None
        if status_code == 429:
            logger.error("Rate limit exceeded", extra={"title": title})
            raise RateLimitExceeded(f"Wikipedia rate limit exceeded while fetching '{title}'.")
        logger.error("HTTP error during fetch",
                     extra={"title": title, "error": str(e), "status_code": status_code})
        return None
    except requests.exceptions.RequestException as e:
        logger.error("Request error during fetch", extra={"title": title, "error": str(e)})
        return None
    except ValueError as e:
        logger.error("Invalid JSON in response", extra={"title": title, "error": str(e)})
        return None


@rate_limit
def fetch_page_summary(title: str, logger: Logger = logger) -> Optional[Dict[str, Any]]:
    """
    Fetches the REST summary of a Wikipedia page.

    Args:
        title (str): Page title, e.g. "Ada Lovelace".
        logger (Logger): Logger instance for structured logging. Defaults to module logger.

    Returns:
        Optional[Dict]: The summary object ("title", "description", "extract",
                        "content_urls", ...) or None if the fetch fails.

    Raises:
        RateLimitExceeded: If Wikipedia answers with HTTP 429.
    """
    if not title or not isinstance(title, str):
        logger.error("Invalid page title", extra={"title": title})
        return None

    url = f"{WIKIPEDIA_CONFIG['rest_url']}/page/summary/{quote(title.replace(' ', '_'), safe='')}"
    logger.info("Fetching Wikipedia summary", extra={"title": title})
    data = _get_json(url, title, logger=logger)
    if data is not None and not isinstance(data, dict):
        logger.error("Unexpected summary payload", extra={"title": title})
        return None
    return data


@rate_limit
def fetch_page_sections(title: str, logger: Logger = logger) -> Optional[List[Dict[str, Any]]]:
    """
    Fetches the section listing of a Wikipedia page via the Action API.

    Returns:
        Optional[List[Dict]]: Section dicts with "toclevel", "line", "number"
                              and "index" keys, or None if the fetch fails.

    Raises:
        RateLimitExceeded: If Wikipedia answers with HTTP 429.
    """
    if not title or not isinstance(title, str):
        logger.error("Invalid page title", extra={"title": title})
        return None

    params = {
        "action": "parse",
        "page": title,
        "prop": "sections",
        "format": "json",
        "formatversion": "2",
        "redirects": "1",
    }
    logger.info("Fetching Wikipedia sections", extra={"title": title})
    data = _get_json(WIKIPEDIA_CONFIG["action_url"], title, params=params, logger=logger)
    if not isinstance(data, dict):
        return None
    if "error" in data:
        error = data["error"]
        info = error.get("info") if isinstance(error, dict) else error
        logger.error("Wikipedia API error", extra={"title": title, "error": info})
        return None
    return data.get("parse", {}).get("sections")
