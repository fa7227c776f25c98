"""Normalizer: maps every intermediate record to a :class:`MarketDataPoint`.

Mapping per source type:
  FeedItem     → classifier category/sentiment of the title, source "News Feed"
  SocialPost   → fetch-time sentiment, comment count as volume, source "Reddit"
  Quote        → "<SYMBOL> Stock", signed % change, sentiment by sign
  ScrapedItem  → classifier category/sentiment of the title, source = hostname
  WeatherReading is context only and yields no data point.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional

from solar_trends.models.datatypes import (
    FeedItem, MarketDataPoint, Quote, ScrapedItem, SocialPost, WeatherReading,
)
from solar_trends.pipeline import classifier

NOT_AVAILABLE = "N/A"


def iso_date(timestamp: Optional[datetime]) -> str:
    """Calendar date of ``timestamp`` (ingestion time when absent) as YYYY-MM-DD."""
    return (timestamp or datetime.now()).date().isoformat()


def format_volume(value: Optional[int]) -> Optional[str]:
    """Thousands-separated magnitude, or None for a missing/zero value."""
    if not value:
        return None
    return f"{value:,}"


def normalize_feed_item(item: FeedItem) -> MarketDataPoint:
    return MarketDataPoint(
        date=iso_date(item.published),
        product=classifier.categorize(item.title),
        price_trend=NOT_AVAILABLE,
        sentiment=classifier.score(item.title),
        volume=NOT_AVAILABLE,
        source="News Feed",
    )


def normalize_social_post(post: SocialPost) -> MarketDataPoint:
    return MarketDataPoint(
        date=iso_date(post.created),
        product=classifier.categorize(post.title),
        price_trend=NOT_AVAILABLE,
        sentiment=post.sentiment,
        volume=format_volume(post.comments) or "0",
        source="Reddit",
    )


def normalize_quote(quote: Quote) -> MarketDataPoint:
    if quote.change > 0:
        sentiment = "Positive"
    elif quote.change < 0:
        sentiment = "Negative"
    else:
        sentiment = "Neutral"

    return MarketDataPoint(
        date=iso_date(None),
        product=f"{quote.symbol} Stock",
        price_trend=f"{quote.change:+.2f}%",
        sentiment=sentiment,
        volume=format_volume(quote.volume) or NOT_AVAILABLE,
        source="Stock Market",
    )


def normalize_scraped_item(item: ScrapedItem) -> MarketDataPoint:
    return MarketDataPoint(
        date=iso_date(item.scraped),
        product=classifier.categorize(item.title),
        price_trend=NOT_AVAILABLE,
        sentiment=classifier.score(item.title),
        volume=NOT_AVAILABLE,
        source=item.source,
    )


_NORMALIZERS = {
    FeedItem: normalize_feed_item,
    SocialPost: normalize_social_post,
    Quote: normalize_quote,
    ScrapedItem: normalize_scraped_item,
}


def normalize_record(record: Any) -> Optional[MarketDataPoint]:
    """
    Normalize one intermediate record.

    Args:
        record: Any intermediate record produced by a source adapter.

    Returns:
        Optional[MarketDataPoint]: The canonical point, or None for records
        that are not market data (weather readings).

    Raises:
        TypeError: For a record type no adapter produces.
    """
    if isinstance(record, WeatherReading):
        return None
    normalizer = _NORMALIZERS.get(type(record))
    if normalizer is None:
        raise TypeError(f"No normalizer for record type {type(record).__name__}")
    return normalizer(record)


def normalize_records(records: Iterable[Any]) -> List[MarketDataPoint]:
    """Normalize a batch, dropping records that yield no data point."""
    points = []
    for record in records:
        point = normalize_record(record)
        if point is not None:
            points.append(point)
    return points


def sort_by_date_desc(points: Iterable[MarketDataPoint]) -> List[MarketDataPoint]:
    """Newest first; ``sorted`` is stable so same-day points keep arrival order."""
    return sorted(points, key=lambda p: p.date, reverse=True)
