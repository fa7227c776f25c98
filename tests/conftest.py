"""Shared pytest fixtures for the solar trends test suite.

All fixtures are independent of external services: adapters are stubs that
return fixed intermediate records, and randomness is seeded.
"""

import random
import time
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from solar_trends.models.datatypes import (
    FeedItem, MarketDataPoint, Quote, ScrapedItem, SocialPost, WeatherReading,
)
from solar_trends.pipeline.engine import MarketAnalyzer
from solar_trends.pipeline.trends import TrendSynthesizer
from solar_trends.providers.base import SourceAdapter


class StubAdapter(SourceAdapter):
    """Adapter returning fixed records, optionally failing or stalling."""

    def __init__(self, name, records=None, error=None, fallback_records=None,
                 fallback_error=None, delay=0.0):
        self.name = name
        self.records = records or []
        self.error = error
        self.fallback_records = fallback_records or []
        self.fallback_error = fallback_error
        self.delay = delay

    def fetch(self, params):
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.records)

    def fallback(self, params):
        if self.fallback_error:
            raise self.fallback_error
        return list(self.fallback_records)


def make_response(json_data=None, content=b"", text="", status_error=None):
    """Fake ``requests.Response`` with the attributes adapters read."""
    resp = MagicMock()
    resp.json.return_value = json_data
    resp.content = content
    resp.text = text
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    return resp


# ---------------------------------------------------------------------------
# Intermediate records
# ---------------------------------------------------------------------------

@pytest.fixture
def feed_item():
    return FeedItem(
        title="New inverter released with improved efficiency",
        description="",
        published=datetime(2025, 1, 3, 9, 30),
    )


@pytest.fixture
def social_post():
    return SocialPost(
        title="Battery storage shortage again",
        score=12,
        comments=1234,
        created=datetime(2025, 1, 5, 18, 0),
        sentiment="Negative",
    )


@pytest.fixture
def quote():
    return Quote(symbol="ENPH", price=101.5, change=1.257, volume=2_500_000)


@pytest.fixture
def scraped_item():
    return ScrapedItem(
        title="Photovoltaic panel breakthrough",
        source="www.seia.org",
        url="https://www.seia.org/news",
        scraped=datetime(2025, 1, 4, 12, 0),
    )


@pytest.fixture
def readings():
    return [
        WeatherReading("New York", 30.0, 60.0, 50.0, 7.5),
        WeatherReading("London", 12.0, 80.0, 90.0, 12.5),
    ]


# ---------------------------------------------------------------------------
# Adapters + analyzer
# ---------------------------------------------------------------------------

@pytest.fixture
def stub_adapters(feed_item, social_post, quote, scraped_item, readings):
    return [
        StubAdapter("feed", records=[feed_item]),
        StubAdapter("social", records=[social_post]),
        StubAdapter("quote", records=[quote]),
        StubAdapter("environment", records=readings),
        StubAdapter("scrape", records=[scraped_item]),
    ]


@pytest.fixture
def analyzer(stub_adapters):
    return MarketAnalyzer(
        config={},
        adapters=stub_adapters,
        synthesizer=TrendSynthesizer(rng=random.Random(7)),
    )


@pytest.fixture
def sample_points():
    return [
        MarketDataPoint("2025-01-05", "Inverter", "N/A", "Positive", "N/A", "News Feed"),
        MarketDataPoint("2025-01-04", "ENPH Stock", "+1.26%", "Positive", "2,500,000", "Stock Market"),
        MarketDataPoint("2025-01-03", "Battery System", "N/A", "Negative", "1,234", "Reddit"),
    ]
