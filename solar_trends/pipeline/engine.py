"""Analysis engine: fans out to every source adapter and builds the result.

Flow per call:
  1. Launch feed, social, quote, environment and scrape adapters concurrently
  2. Wait until all of them settle (bounded by the analysis deadline)
  3. Normalize non-weather records, concatenate in launch order, sort by date desc
  4. Trend synthesis (weather readings feed the conditions block)
  5. Summary

Adapters recover from their own failures through fallback data. A branch
that still raises, or misses the deadline, contributes nothing; the others
are unaffected. Only a failure of the orchestration itself turns into an
unsuccessful result carrying mock data.
"""

import asyncio
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from solar_trends.core.config import (
    analysis_deadline, http_timeout, source_setting, weather_api_key,
)
from solar_trends.core.errors import UnhandledAnalysisFailure
from solar_trends.core.logger import logger
from solar_trends.models.datatypes import (
    AnalysisParams, AnalysisResult, MarketDataPoint, TrendReport, WeatherReading,
)
from solar_trends.pipeline.normalizer import normalize_records, sort_by_date_desc
from solar_trends.pipeline.summary import build_summary
from solar_trends.pipeline.trends import TrendSynthesizer
from solar_trends.providers.base import SourceAdapter
from solar_trends.providers.fallback import mock_market_data
from solar_trends.providers.market import QuoteAdapter
from solar_trends.providers.news import DEFAULT_FEED_URL, FeedAdapter
from solar_trends.providers.scrape import SCRAPE_TIMEOUT, ScrapeAdapter
from solar_trends.providers.social import DEFAULT_REDDIT_URL, RedditAdapter
from solar_trends.providers.weather import DEFAULT_WEATHER_URL, WeatherAdapter


@dataclass
class Aggregation:
    """Outcome of one fan-out: sorted data points plus weather context."""
    data: List[MarketDataPoint] = field(default_factory=list)
    readings: List[WeatherReading] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def build_adapters(config: dict, rng: Optional[random.Random] = None) -> List[SourceAdapter]:
    """Instantiate the five source adapters from config, in launch order."""
    timeout = http_timeout(config)
    return [
        FeedAdapter(
            feed_url=source_setting(config, "feed_url", DEFAULT_FEED_URL),
            timeout=timeout,
        ),
        RedditAdapter(
            url=source_setting(config, "reddit_url", DEFAULT_REDDIT_URL),
            timeout=timeout,
        ),
        QuoteAdapter(symbols=source_setting(config, "quote_symbols"), rng=rng),
        WeatherAdapter(
            api_key=weather_api_key(),
            url=source_setting(config, "weather_url", DEFAULT_WEATHER_URL),
            timeout=timeout,
            rng=rng,
        ),
        ScrapeAdapter(
            urls=source_setting(config, "scrape_urls"),
            timeout=SCRAPE_TIMEOUT,
        ),
    ]


class MarketAnalyzer:
    """Orchestrates one market analysis per call. Holds no per-call state.

    Args:
        config: Parsed config.yaml dict (may be empty; every key has a default).
        adapters: Source adapters to fan out to (built from config if omitted).
        synthesizer: Trend synthesizer (a fresh unseeded one if omitted).
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        adapters: Optional[Sequence[SourceAdapter]] = None,
        synthesizer: Optional[TrendSynthesizer] = None,
    ) -> None:
        self.config = config or {}
        self.adapters = list(adapters) if adapters is not None else build_adapters(self.config)
        self.synthesizer = synthesizer or TrendSynthesizer()
        self.deadline = analysis_deadline(self.config)

    # ── public ────────────────────────────────────────────────────────────────

    async def analyze_market(
        self,
        category: str = "all",
        timeframe: str = "7d",
        region: str = "global",
    ) -> AnalysisResult:
        """Run a full analysis.

        Args:
            category: ``solar``, ``inverters``, ``batteries`` or ``all``.
            timeframe: Accepted for API compatibility; only logged.
            region: ``global``, ``us``, ``eu`` or ``asia``.

        Returns:
            A successful :class:`AnalysisResult`, or an unsuccessful one with
            mock data when orchestration itself failed.
        """
        params = AnalysisParams(category=category, timeframe=timeframe, region=region)
        logger.info(f"MarketAnalyzer: starting analysis for {category} in {region} ({timeframe})")

        try:
            aggregation = await self.aggregate(params)
            trends = self.synthesizer.analyze(aggregation.data, aggregation.readings)
            summary = build_summary(aggregation.data, trends)
        except Exception as exc:
            failure = exc if isinstance(exc, UnhandledAnalysisFailure) else UnhandledAnalysisFailure(str(exc))
            logger.error(f"MarketAnalyzer: analysis failed: {failure.message}", exc_info=True)
            return AnalysisResult(
                success=False,
                error=failure.message,
                data=mock_market_data(category),
            )

        return AnalysisResult(
            success=True,
            data=aggregation.data,
            trends=trends,
            last_updated=datetime.now(timezone.utc).isoformat(),
            summary=summary,
        )

    async def aggregate(self, params: AnalysisParams) -> Aggregation:
        """Fan out to every adapter and join all outcomes."""
        tasks = [
            asyncio.create_task(adapter.collect(params), name=adapter.name)
            for adapter in self.adapters
        ]
        if not tasks:
            logger.warning("MarketAnalyzer: no source adapters configured")
            return Aggregation()
        done, pending = await asyncio.wait(tasks, timeout=self.deadline)

        for task in pending:
            logger.error(
                f"MarketAnalyzer: {task.get_name()} missed the {self.deadline:g}s deadline, dropped"
            )
            task.cancel()

        aggregation = Aggregation()
        records: List[Any] = []
        # Iterate in launch order so same-day points keep source order.
        for adapter, task in zip(self.adapters, tasks):
            if task not in done:
                aggregation.failed.append(adapter.name)
                continue
            exc = task.exception()
            if exc is not None:
                logger.error(f"MarketAnalyzer: {adapter.name} raised past its boundary: {exc}")
                aggregation.failed.append(adapter.name)
                continue
            for record in task.result():
                if isinstance(record, WeatherReading):
                    aggregation.readings.append(record)
                else:
                    records.append(record)

        aggregation.data = sort_by_date_desc(normalize_records(records))
        logger.info(
            f"MarketAnalyzer: processed {len(aggregation.data)} total data points "
            f"({len(aggregation.readings)} weather readings, failed={aggregation.failed or 'none'})"
        )
        return aggregation

    def analyze_trends(self, data: Optional[Sequence[MarketDataPoint]] = None) -> TrendReport:
        """Trend report over ``data`` alone, without fetching any source."""
        return self.synthesizer.analyze(list(data or []))


def analyze_market(
    category: str = "all",
    timeframe: str = "7d",
    region: str = "global",
    config: Optional[Dict[str, Any]] = None,
) -> AnalysisResult:
    """Blocking convenience wrapper: build an analyzer from config and run it."""
    analyzer = MarketAnalyzer(config or {})
    return asyncio.run(analyzer.analyze_market(category, timeframe, region))
