"""Synthetic substitutes used when a live source cannot be reached.

Feed, social and scrape fallbacks are fixed illustrative records. Quote and
weather fallbacks are randomized per item in plausible ranges; pass a seeded
``random.Random`` for reproducible output.
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional

from solar_trends.models.datatypes import (
    FeedItem, MarketDataPoint, Quote, ScrapedItem, SocialPost, WeatherReading,
)


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng or random.Random()


def mock_feed_items() -> List[FeedItem]:
    return [
        FeedItem(
            title="Solar Panel Efficiency Reaches New Heights",
            description="Latest breakthrough in photovoltaic technology...",
            published=datetime.now(),
            link="",
        )
    ]


def mock_social_posts() -> List[SocialPost]:
    # The fixed sentiment is part of the fallback record, not a classifier output.
    return [
        SocialPost(
            title="Best inverter for home solar system?",
            score=45,
            comments=23,
            created=datetime.now(),
            sentiment="Positive",
        )
    ]


def mock_scraped_items() -> List[ScrapedItem]:
    return [
        ScrapedItem(
            title="Solar Industry Growth Continues",
            source="energy.gov",
            url="https://energy.gov/news",
            scraped=datetime.now(),
        )
    ]


def synthetic_quote(symbol: str, rng: Optional[random.Random] = None) -> Quote:
    """Random quote: price in [50, 150], change in [-5, 5] percent, volume in [0, 1e6)."""
    r = _rng(rng)
    return Quote(
        symbol=symbol,
        price=r.uniform(50.0, 150.0),
        change=r.uniform(-5.0, 5.0),
        volume=r.randrange(0, 1_000_000),
    )


def synthetic_reading(city: str, rng: Optional[random.Random] = None) -> WeatherReading:
    """Random conditions: temp 5-40 C, humidity/cloudiness 0-100 %, efficiency 15-40 %."""
    r = _rng(rng)
    return WeatherReading(
        city=city,
        temperature=r.uniform(5.0, 40.0),
        humidity=r.uniform(0.0, 100.0),
        cloudiness=r.uniform(0.0, 100.0),
        solar_efficiency=r.uniform(15.0, 40.0),
    )


def mock_market_data(category: str = "all") -> List[MarketDataPoint]:
    """Top-level fallback rows returned when the whole analysis fails.

    ``category`` is accepted for interface symmetry; the rows are the same for
    every category.
    """
    today = datetime.now().date()
    return [
        MarketDataPoint(
            date=today.isoformat(),
            product="Monocrystalline Solar Panel",
            price_trend="+5.2%",
            sentiment="Positive",
            volume="1,247",
            source="Industry Analysis",
        ),
        MarketDataPoint(
            date=(today - timedelta(days=1)).isoformat(),
            product="String Inverter",
            price_trend="-2.1%",
            sentiment="Stable",
            volume="892",
            source="Market Research",
        ),
        MarketDataPoint(
            date=(today - timedelta(days=2)).isoformat(),
            product="Lithium Battery Pack",
            price_trend="+8.7%",
            sentiment="Very Positive",
            volume="2,156",
            source="Price Tracking",
        ),
    ]
