"""Data structures for the solar market trend pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


# ── Request parameters ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AnalysisParams:
    """Parameters of one analysis run, shared read-only by every adapter."""
    category: str = "all"
    timeframe: str = "7d"
    region: str = "global"


# ── Intermediate records (one per source type) ───────────────────────────────

@dataclass
class FeedItem:
    """An article kept from the news feed."""
    title: str
    description: str
    published: Optional[datetime] = None
    link: str = ""


@dataclass
class SocialPost:
    """A community post; sentiment is computed when the post is fetched."""
    title: str
    score: int
    comments: int
    created: Optional[datetime]
    sentiment: str
    url: str = ""


@dataclass
class Quote:
    symbol: str
    price: float
    change: float  # percent
    volume: Optional[int]


@dataclass
class WeatherReading:
    """Conditions at one location plus the derived solar efficiency (%)."""
    city: str
    temperature: float
    humidity: float
    cloudiness: float
    solar_efficiency: float


@dataclass
class ScrapedItem:
    title: str
    source: str  # hostname of the scraped page
    url: str
    scraped: datetime


# ── Canonical record ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MarketDataPoint:
    """
    The canonical record every source type is normalized into.

    ``date`` is an ISO calendar date (YYYY-MM-DD) so string ordering is
    chronological ordering.
    """
    date: str
    product: str
    price_trend: str
    sentiment: str
    volume: str
    source: str

    def to_dict(self) -> Dict[str, str]:
        """Flat, CSV-serializable representation using the public field names."""
        return {
            "date": self.date,
            "product": self.product,
            "priceTrend": self.price_trend,
            "sentiment": self.sentiment,
            "volume": self.volume,
            "source": self.source,
        }


# ── Trend report ──────────────────────────────────────────────────────────────

@dataclass
class PriceMovement:
    solar: str
    inverters: str
    batteries: str
    overall: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "solar": self.solar,
            "inverters": self.inverters,
            "batteries": self.batteries,
            "overall": self.overall,
        }


@dataclass
class SentimentScore:
    score: float  # in [-1.0, 1.0]
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "label": self.label}


@dataclass
class VolumeReport:
    news: int
    social: int
    trading: int

    def to_dict(self) -> Dict[str, int]:
        return {"news": self.news, "social": self.social, "trading": self.trading}


@dataclass
class KeywordMention:
    keyword: str
    mentions: int

    def to_dict(self) -> Dict[str, Any]:
        return {"keyword": self.keyword, "mentions": self.mentions}


@dataclass
class Forecast:
    next_week: str
    next_month: str
    confidence: float  # in [0.6, 1.0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nextWeek": self.next_week,
            "nextMonth": self.next_month,
            "confidence": self.confidence,
        }


@dataclass
class SolarConditions:
    """Average and per-city solar efficiency taken from weather readings."""
    average_efficiency: Optional[float]
    by_city: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "averageEfficiency": self.average_efficiency,
            "byCity": dict(self.by_city),
        }


@dataclass
class TrendReport:
    """
    Derived summary of an aggregated data set. Recomputed on every call.

    Every field is optional so that partially built reports can still be
    summarized; see :func:`solar_trends.pipeline.summary.build_summary`.
    """
    price_movement: Optional[PriceMovement] = None
    sentiment: Optional[SentimentScore] = None
    volume: Optional[VolumeReport] = None
    keywords: List[KeywordMention] = field(default_factory=list)
    forecast: Optional[Forecast] = None
    conditions: Optional[SolarConditions] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priceMovement": self.price_movement.to_dict() if self.price_movement else None,
            "sentiment": self.sentiment.to_dict() if self.sentiment else None,
            "volume": self.volume.to_dict() if self.volume else None,
            "keywords": [k.to_dict() for k in self.keywords],
            "forecast": self.forecast.to_dict() if self.forecast else None,
            "conditions": self.conditions.to_dict() if self.conditions else None,
        }


# ── Summary + result ──────────────────────────────────────────────────────────

@dataclass
class Summary:
    total_data_points: int
    market_direction: str
    sentiment: str
    top_keyword: str
    last_updated: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalDataPoints": self.total_data_points,
            "marketDirection": self.market_direction,
            "sentiment": self.sentiment,
            "topKeyword": self.top_keyword,
            "lastUpdated": self.last_updated,
        }


@dataclass
class AnalysisResult:
    """
    Outcome of ``analyze_market``.

    On success ``trends``, ``summary`` and ``last_updated`` are set; on
    failure only ``error`` and the fallback ``data`` are.
    """
    success: bool
    data: List[MarketDataPoint]
    trends: Optional[TrendReport] = None
    last_updated: Optional[str] = None
    summary: Optional[Summary] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "data": [p.to_dict() for p in self.data],
            }
        return {
            "success": True,
            "data": [p.to_dict() for p in self.data],
            "trends": self.trends.to_dict() if self.trends else None,
            "lastUpdated": self.last_updated,
            "summary": self.summary.to_dict() if self.summary else None,
        }
