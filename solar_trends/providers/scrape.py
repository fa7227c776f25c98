"""Industry page scraper.

Pulls heading-like elements from a few public pages and keeps the ones that
mention a solar keyword. A page that cannot be fetched or parsed is logged
and skipped; the other pages are unaffected.
"""

from datetime import datetime
from typing import List, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from solar_trends.core.logger import logger
from solar_trends.models.datatypes import AnalysisParams, ScrapedItem
from solar_trends.pipeline.classifier import contains_solar_keywords
from solar_trends.providers.base import SourceAdapter
from solar_trends.providers.fallback import mock_scraped_items

DEFAULT_SCRAPE_URLS = [
    "https://www.energy.gov/eere/solar/solar-news",
    "https://www.seia.org/news",
    "https://www.renewableenergyworld.com/solar/",
]
SCRAPE_TIMEOUT = 5
_HEADLINE_SELECTOR = "h1, h2, h3, .title, .headline"
_BROWSER_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class ScrapeAdapter(SourceAdapter):
    name = "scrape"

    def __init__(self, urls: Optional[List[str]] = None, timeout: float = SCRAPE_TIMEOUT) -> None:
        self.urls = list(urls) if urls else list(DEFAULT_SCRAPE_URLS)
        self.timeout = timeout

    def fetch(self, params: AnalysisParams) -> List[ScrapedItem]:
        items: List[ScrapedItem] = []
        for url in self.urls:
            try:
                items.extend(self.scrape_page(url))
            except Exception as exc:
                logger.error(f"ScrapeAdapter: scraping failed for {url}: {exc}")
        return items

    def scrape_page(self, url: str) -> List[ScrapedItem]:
        """Return keyword-matching headings of one page, tagged with its hostname."""
        logger.info(f"ScrapeAdapter: fetching {url}")
        resp = requests.get(url, timeout=self.timeout, headers={"User-Agent": _BROWSER_UA})
        resp.raise_for_status()

        soup = BeautifulSoup(resp.text, "lxml")
        hostname = urlparse(url).hostname or url
        scraped = datetime.now()

        items = []
        for element in soup.select(_HEADLINE_SELECTOR):
            title = element.get_text().strip()
            if title and contains_solar_keywords(title):
                items.append(ScrapedItem(title=title, source=hostname, url=url, scraped=scraped))
        return items

    def fallback(self, params: AnalysisParams) -> List[ScrapedItem]:
        return mock_scraped_items()
