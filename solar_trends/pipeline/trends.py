"""Trend synthesis over an aggregated data set.

The report is illustrative rather than predictive: price movement, volume,
keyword mentions and the forecast are randomized heuristics in fixed ranges.
Only the ``conditions`` block is computed from input (weather readings).
Pass a seeded ``random.Random`` to make a report reproducible.
"""

import random
from typing import List, Optional, Sequence

from solar_trends.core.logger import logger
from solar_trends.models.datatypes import (
    Forecast, KeywordMention, MarketDataPoint, PriceMovement, SentimentScore,
    SolarConditions, TrendReport, VolumeReport, WeatherReading,
)

SENTIMENT_SCALE = ["Very Negative", "Negative", "Neutral", "Positive", "Very Positive"]

# (keyword, minimum mentions, spread)
TRENDING_KEYWORDS = [
    ("solar efficiency", 50, 100),
    ("battery storage", 40, 80),
    ("grid modernization", 30, 60),
    ("inverter technology", 25, 50),
]

MIN_CONFIDENCE = 0.6
MAX_CONFIDENCE = 1.0


def sentiment_label(score: float) -> str:
    """Bin a score in [-1, 1] into five equal-width bands of ``SENTIMENT_SCALE``."""
    clamped = max(-1.0, min(1.0, score))
    index = int((clamped + 1.0) / 2.0 * len(SENTIMENT_SCALE))
    return SENTIMENT_SCALE[min(index, len(SENTIMENT_SCALE) - 1)]


class TrendSynthesizer:
    """Builds a :class:`TrendReport` from the current data set.

    Args:
        rng: Random source; a fresh unseeded one is used when omitted.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def analyze(
        self,
        data: Sequence[MarketDataPoint],
        readings: Optional[Sequence[WeatherReading]] = None,
    ) -> TrendReport:
        logger.info(f"TrendSynthesizer: analyzing {len(data)} data points")
        return TrendReport(
            price_movement=self.price_movement(data),
            sentiment=self.overall_sentiment(data),
            volume=self.volume_changes(data),
            keywords=self.trending_keywords(data),
            forecast=self.forecast(data),
            conditions=solar_conditions(readings or []),
        )

    def _coin(self) -> bool:
        return self.rng.random() > 0.5

    def price_movement(self, data: Sequence[MarketDataPoint]) -> PriceMovement:
        return PriceMovement(
            solar="up" if self._coin() else "down",
            inverters="up" if self._coin() else "down",
            batteries="up" if self._coin() else "down",
            overall="bullish" if self._coin() else "bearish",
        )

    def overall_sentiment(self, data: Sequence[MarketDataPoint]) -> SentimentScore:
        score = self.rng.uniform(-1.0, 1.0)
        return SentimentScore(score=score, label=sentiment_label(score))

    def volume_changes(self, data: Sequence[MarketDataPoint]) -> VolumeReport:
        return VolumeReport(
            news=self.rng.randrange(500, 1500),
            social=self.rng.randrange(1000, 6000),
            trading=self.rng.randrange(500_000, 1_500_000),
        )

    def trending_keywords(self, data: Sequence[MarketDataPoint]) -> List[KeywordMention]:
        mentions = [
            KeywordMention(keyword=keyword, mentions=base + self.rng.randrange(spread))
            for keyword, base, spread in TRENDING_KEYWORDS
        ]
        return sorted(mentions, key=lambda k: k.mentions, reverse=True)

    def forecast(self, data: Sequence[MarketDataPoint]) -> Forecast:
        confidence = self.rng.uniform(MIN_CONFIDENCE, MAX_CONFIDENCE)
        return Forecast(
            next_week="positive" if self._coin() else "stable",
            next_month="growth" if self._coin() else "consolidation",
            confidence=max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence)),
        )


def solar_conditions(readings: Sequence[WeatherReading]) -> Optional[SolarConditions]:
    """Average and per-city efficiency, or None when there are no readings."""
    if not readings:
        return None
    by_city = {r.city: round(r.solar_efficiency, 2) for r in readings}
    average = sum(r.solar_efficiency for r in readings) / len(readings)
    return SolarConditions(average_efficiency=round(average, 2), by_city=by_city)
