"""Reddit community adapter (r/solar, public JSON listing, no API key)."""

from datetime import datetime
from typing import List

import requests

from solar_trends.core.errors import ParseFailure, TransportFailure
from solar_trends.core.logger import logger
from solar_trends.models.datatypes import AnalysisParams, SocialPost
from solar_trends.pipeline import classifier
from solar_trends.providers.base import SourceAdapter
from solar_trends.providers.fallback import mock_social_posts

DEFAULT_REDDIT_URL = "https://www.reddit.com/r/solar.json"
_USER_AGENT = "SolarMarketAnalyzer/1.0"


class RedditAdapter(SourceAdapter):
    """Recent posts from one subreddit, scored for sentiment at fetch time."""

    name = "social"

    def __init__(self, url: str = DEFAULT_REDDIT_URL, timeout: float = 10) -> None:
        self.url = url
        self.timeout = timeout

    def fetch(self, params: AnalysisParams) -> List[SocialPost]:
        logger.info(f"RedditAdapter: fetching {self.url}")
        try:
            resp = requests.get(
                self.url,
                headers={"User-Agent": _USER_AGENT},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportFailure(self.name, str(exc)) from exc

        try:
            children = resp.json()["data"]["children"]
            posts = [_to_post(child["data"]) for child in children]
        except (ValueError, KeyError, TypeError) as exc:
            raise ParseFailure(self.name, f"unexpected listing shape: {exc}") from exc

        return posts

    def fallback(self, params: AnalysisParams) -> List[SocialPost]:
        return mock_social_posts()


def _to_post(data: dict) -> SocialPost:
    title = data["title"]
    created_utc = data.get("created_utc")
    return SocialPost(
        title=title,
        score=data.get("score", 0),
        comments=data.get("num_comments", 0),
        created=datetime.fromtimestamp(created_utc) if created_utc is not None else None,
        url=f"https://reddit.com{data.get('permalink', '')}",
        sentiment=classifier.score(title),
    )
