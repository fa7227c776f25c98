"""One-screen digest of an analysis run."""

from datetime import datetime, timezone
from typing import Optional, Sequence

from solar_trends.models.datatypes import MarketDataPoint, Summary, TrendReport

DEFAULT_DIRECTION = "stable"
DEFAULT_SENTIMENT = "Neutral"
DEFAULT_KEYWORD = "solar panels"


def build_summary(
    data: Optional[Sequence[MarketDataPoint]],
    trends: Optional[TrendReport],
) -> Summary:
    """Reduce data + trends to a :class:`Summary`; missing parts get defaults."""
    direction = DEFAULT_DIRECTION
    sentiment = DEFAULT_SENTIMENT
    top_keyword = DEFAULT_KEYWORD

    if trends is not None:
        if trends.price_movement and trends.price_movement.overall:
            direction = trends.price_movement.overall
        if trends.sentiment and trends.sentiment.label:
            sentiment = trends.sentiment.label
        if trends.keywords and trends.keywords[0].keyword:
            top_keyword = trends.keywords[0].keyword

    return Summary(
        total_data_points=len(data) if data else 0,
        market_direction=direction,
        sentiment=sentiment,
        top_keyword=top_keyword,
        last_updated=datetime.now(timezone.utc).isoformat(),
    )
