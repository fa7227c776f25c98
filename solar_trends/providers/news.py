"""News feed adapter.

Fetches one fixed RSS feed and keeps the entries whose title or description
mentions a keyword of the requested category (case-insensitive substring).
An empty filtered list is a valid result, not a failure.
"""

from datetime import datetime
from typing import List, Optional

import feedparser
import requests

from solar_trends.core.errors import ParseFailure, TransportFailure
from solar_trends.core.logger import logger
from solar_trends.models.datatypes import AnalysisParams, FeedItem
from solar_trends.pipeline.classifier import contains_solar_keywords, get_category_keywords
from solar_trends.providers.base import SourceAdapter
from solar_trends.providers.fallback import mock_feed_items

DEFAULT_FEED_URL = "https://feeds.feedburner.com/oreilly/radar"
_MAX_ITEMS = 10


class FeedAdapter(SourceAdapter):
    """RSS feed provider filtered by the category keyword set."""

    name = "feed"

    def __init__(self, feed_url: str = DEFAULT_FEED_URL, timeout: float = 10) -> None:
        """Args:
            feed_url: RSS/Atom feed to read.
            timeout: Request timeout in seconds.
        """
        self.feed_url = feed_url
        self.timeout = timeout

    def fetch(self, params: AnalysisParams) -> List[FeedItem]:
        keywords = get_category_keywords(params.category)
        logger.info(f"FeedAdapter: fetching {self.feed_url} (category={params.category})")

        try:
            resp = requests.get(self.feed_url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportFailure(self.name, str(exc)) from exc

        feed = feedparser.parse(resp.content)
        if feed.bozo and not feed.entries:
            raise ParseFailure(self.name, f"unreadable feed: {getattr(feed, 'bozo_exception', '')}")
        if feed.bozo:
            logger.warning(f"FeedAdapter: RSS parse warning: {feed.bozo_exception}")

        items = []
        for entry in feed.entries[:_MAX_ITEMS]:
            title = getattr(entry, "title", "").strip()
            description = getattr(entry, "summary", "") or getattr(entry, "description", "")
            if not (
                contains_solar_keywords(title, keywords)
                or contains_solar_keywords(description, keywords)
            ):
                continue
            items.append(FeedItem(
                title=title,
                description=description,
                published=_published(entry),
                link=getattr(entry, "link", ""),
            ))

        logger.info(f"FeedAdapter: kept {len(items)} of {len(feed.entries)} entries")
        return items

    def fallback(self, params: AnalysisParams) -> List[FeedItem]:
        return mock_feed_items()


def _published(entry) -> Optional[datetime]:
    """Publication time of a feed entry, ``None`` when the feed omits it."""
    parsed = getattr(entry, "published_parsed", None) or getattr(entry, "updated_parsed", None)
    if not parsed:
        return None
    return datetime(*parsed[:6])
