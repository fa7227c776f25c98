"""Tests for solar_trends.providers -- every source adapter with mocked transports."""

import asyncio
import random
from datetime import datetime
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest
import requests

from conftest import StubAdapter, make_response
from solar_trends.core.errors import ParseFailure, TransportFailure
from solar_trends.models.datatypes import AnalysisParams, FeedItem, SocialPost
from solar_trends.pipeline.normalizer import normalize_quote
from solar_trends.providers import fallback
from solar_trends.providers.market import SOLAR_SYMBOLS, QuoteAdapter
from solar_trends.providers.news import FeedAdapter
from solar_trends.providers.scrape import DEFAULT_SCRAPE_URLS, ScrapeAdapter
from solar_trends.providers.social import RedditAdapter
from solar_trends.providers.weather import (
    REGION_CITIES,
    WeatherAdapter,
    calculate_solar_efficiency,
    cities_for_region,
)

RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Radar</title>
<item><title>New inverter released</title><description>Grid hardware</description>
<pubDate>Mon, 06 Jan 2025 10:00:00 GMT</pubDate><link>https://example.com/a</link></item>
<item><title>Cooking tips</title><description>Nothing relevant here</description>
<pubDate>Mon, 06 Jan 2025 11:00:00 GMT</pubDate></item>
<item><title>Market notes</title><description>Advances in photovoltaic cells</description></item>
</channel></rss>
"""

REDDIT_LISTING = {
    "data": {
        "children": [
            {"data": {
                "title": "Efficient growth in panel installs",
                "score": 10,
                "num_comments": 1234,
                "created_utc": 1736157600,
                "permalink": "/r/solar/comments/abc",
            }},
            {"data": {"title": "Which inverter?", "score": 3, "num_comments": 0, "created_utc": 1736157600}},
        ]
    }
}

PAGE = """<html><body>
<h1>Solar panel prices fall</h1>
<h3>About us</h3>
<div class="headline">  New battery storage plant opens  </div>
<p>solar panel mention outside a heading</p>
</body></html>"""


def _params(**kwargs):
    return AnalysisParams(**kwargs)


# ---------------------------------------------------------------------------
# Base adapter boundary
# ---------------------------------------------------------------------------

class TestCollectBoundary:

    def test_live_records_returned(self):
        adapter = StubAdapter("stub", records=[1, 2])
        assert asyncio.run(adapter.collect(_params())) == [1, 2]

    def test_failure_returns_fallback(self):
        adapter = StubAdapter("stub", error=TransportFailure("stub", "down"), fallback_records=["fb"])
        assert asyncio.run(adapter.collect(_params())) == ["fb"]

    def test_unexpected_error_returns_fallback(self):
        adapter = StubAdapter("stub", error=RuntimeError("bug"), fallback_records=["fb"])
        assert asyncio.run(adapter.collect(_params())) == ["fb"]


# ---------------------------------------------------------------------------
# Feed adapter
# ---------------------------------------------------------------------------

class TestFeedAdapter:

    @patch("solar_trends.providers.news.requests.get")
    def test_filters_by_all_keywords(self, mock_get):
        mock_get.return_value = make_response(content=RSS)
        items = FeedAdapter().fetch(_params(category="all"))
        assert [i.title for i in items] == ["New inverter released", "Market notes"]
        assert items[0].published == datetime(2025, 1, 6, 10, 0)
        assert items[1].published is None

    @patch("solar_trends.providers.news.requests.get")
    def test_filters_by_category(self, mock_get):
        mock_get.return_value = make_response(content=RSS)
        items = FeedAdapter().fetch(_params(category="inverters"))
        assert [i.title for i in items] == ["New inverter released"]

    @patch("solar_trends.providers.news.requests.get")
    def test_empty_result_is_not_failure(self, mock_get):
        mock_get.return_value = make_response(content=RSS)
        items = asyncio.run(FeedAdapter().collect(_params(category="batteries")))
        assert items == []

    @patch("solar_trends.providers.news.requests.get")
    def test_transport_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("offline")
        with pytest.raises(TransportFailure):
            FeedAdapter().fetch(_params())

    @patch("solar_trends.providers.news.requests.get")
    def test_collect_falls_back(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        items = asyncio.run(FeedAdapter().collect(_params()))
        assert len(items) == 1
        assert items[0].title == "Solar Panel Efficiency Reaches New Heights"


# ---------------------------------------------------------------------------
# Social adapter
# ---------------------------------------------------------------------------

class TestRedditAdapter:

    @patch("solar_trends.providers.social.requests.get")
    def test_maps_posts_with_sentiment(self, mock_get):
        mock_get.return_value = make_response(json_data=REDDIT_LISTING)
        posts = RedditAdapter().fetch(_params())

        assert len(posts) == 2
        assert posts[0].sentiment == "Positive"
        assert posts[0].comments == 1234
        assert posts[0].url == "https://reddit.com/r/solar/comments/abc"
        assert posts[1].sentiment == "Neutral"
        assert mock_get.call_args.kwargs["headers"] == {"User-Agent": "SolarMarketAnalyzer/1.0"}

    @patch("solar_trends.providers.social.requests.get")
    def test_malformed_listing(self, mock_get):
        mock_get.return_value = make_response(json_data={"unexpected": True})
        with pytest.raises(ParseFailure):
            RedditAdapter().fetch(_params())

    @patch("solar_trends.providers.social.requests.get")
    def test_http_error_falls_back(self, mock_get):
        mock_get.return_value = make_response(status_error=requests.HTTPError("429"))
        posts = asyncio.run(RedditAdapter().collect(_params()))
        assert posts[0].title == "Best inverter for home solar system?"
        assert posts[0].sentiment == "Positive"


# ---------------------------------------------------------------------------
# Quote adapter
# ---------------------------------------------------------------------------

def _history(open_, close, volume):
    return pd.DataFrame({"Open": [open_ - 1, open_], "Close": [close - 1, close], "Volume": [1, volume]})


class TestQuoteAdapter:

    @patch("solar_trends.providers.market.yf.Ticker")
    def test_per_symbol_isolation(self, mock_ticker):
        def ticker(symbol):
            if symbol == "SEDG":
                raise requests.ConnectionError("offline")
            t = MagicMock()
            if symbol == "SPWR":
                t.history.return_value = pd.DataFrame()
            else:
                t.history.return_value = _history(100.0, 103.5, 42_000)
            return t

        mock_ticker.side_effect = ticker
        quotes = QuoteAdapter(rng=random.Random(1)).fetch(_params())

        assert [q.symbol for q in quotes] == ["ENPH", "SEDG", "FSLR"]
        enph = quotes[0]
        assert enph.price == pytest.approx(103.5)
        assert enph.change == pytest.approx(3.5)
        assert enph.volume == 42_000

        synthetic = quotes[1]
        assert 50 <= synthetic.price <= 150
        assert -5 <= synthetic.change <= 5
        assert 0 <= synthetic.volume < 1_000_000

    @patch("solar_trends.providers.market.yf.Ticker")
    def test_unpriced_last_row_uses_previous_session(self, mock_ticker):
        hist = pd.DataFrame({
            "Open": [100.0, 200.0, float("nan")],
            "Close": [98.0, 210.0, float("nan")],
            "Volume": [5, 7_000, 0],
        })
        mock_ticker.return_value.history.return_value = hist

        quote = QuoteAdapter(["ENPH"]).fetch(_params())[0]
        point = normalize_quote(quote)

        assert quote.price == pytest.approx(210.0)
        assert quote.change == pytest.approx(5.0)
        assert point.price_trend == "+5.00%"
        assert point.sentiment == "Positive"
        assert "nan" not in point.price_trend

    @patch("solar_trends.providers.market.yf.Ticker")
    def test_symbol_with_no_priced_rows_is_skipped(self, mock_ticker):
        hist = pd.DataFrame({"Open": [float("nan")], "Close": [float("nan")], "Volume": [0]})
        mock_ticker.return_value.history.return_value = hist
        assert QuoteAdapter(["ENPH"]).fetch(_params()) == []

    @patch("solar_trends.providers.market.yf.Ticker")
    def test_change_is_percent_of_open(self, mock_ticker):
        mock_ticker.return_value.history.return_value = _history(50.0, 49.0, 10)
        quote = QuoteAdapter(["SEDG"]).fetch(_params())[0]
        assert quote.change == pytest.approx(-2.0)
        assert normalize_quote(quote).price_trend == "-2.00%"

    @patch("solar_trends.providers.market.yf.Ticker")
    def test_all_symbols_failing_still_returns_quotes(self, mock_ticker):
        mock_ticker.side_effect = RuntimeError("provider down")
        quotes = asyncio.run(QuoteAdapter().collect(_params()))
        assert [q.symbol for q in quotes] == SOLAR_SYMBOLS


# ---------------------------------------------------------------------------
# Weather adapter
# ---------------------------------------------------------------------------

class TestWeather:

    def test_efficiency_formula(self):
        assert calculate_solar_efficiency(30, 50, 60) == pytest.approx(7.5)

    def test_efficiency_no_temp_penalty_below_25(self):
        assert calculate_solar_efficiency(20, 0, 0) == 20

    def test_efficiency_floor(self):
        assert calculate_solar_efficiency(45, 100, 100) == 5

    def test_unknown_region_is_global(self):
        assert cities_for_region("atlantis") == cities_for_region("global")
        assert cities_for_region("eu") == REGION_CITIES["eu"]

    @patch("solar_trends.providers.weather.requests.get")
    def test_per_city_fallback(self, mock_get):
        def get(url, params, timeout):
            if params["q"] == "London":
                raise requests.ConnectionError("offline")
            return make_response(json_data={"main": {"temp": 30, "humidity": 60}, "clouds": {"all": 50}})

        mock_get.side_effect = get
        readings = WeatherAdapter(api_key="key", rng=random.Random(3)).fetch(_params(region="global"))

        assert [r.city for r in readings] == REGION_CITIES["global"]
        assert readings[0].solar_efficiency == pytest.approx(7.5)
        london = readings[1]
        assert 5 <= london.temperature <= 40
        assert 15 <= london.solar_efficiency <= 40

    def test_missing_key_gives_synthetic_readings(self):
        readings = WeatherAdapter(api_key=None).fetch(_params(region="atlantis"))
        assert [r.city for r in readings] == REGION_CITIES["global"]

    @patch("solar_trends.providers.weather.requests.get")
    def test_malformed_body(self, mock_get):
        mock_get.return_value = make_response(json_data={"main": {}})
        with pytest.raises(ParseFailure):
            WeatherAdapter(api_key="key").fetch_city("Rome")


# ---------------------------------------------------------------------------
# Scrape adapter
# ---------------------------------------------------------------------------

class TestScrapeAdapter:

    @patch("solar_trends.providers.scrape.requests.get")
    def test_keeps_keyword_headings_and_skips_failed_pages(self, mock_get):
        def get(url, timeout, headers):
            assert timeout == 5
            assert headers["User-Agent"].startswith("Mozilla/5.0")
            if url == DEFAULT_SCRAPE_URLS[0]:
                return make_response(text=PAGE)
            if url == DEFAULT_SCRAPE_URLS[1]:
                raise requests.Timeout("slow")
            return make_response(text="<html><h2>Weekly digest</h2></html>")

        mock_get.side_effect = get
        items = ScrapeAdapter().fetch(_params())

        assert [i.title for i in items] == ["Solar panel prices fall", "New battery storage plant opens"]
        assert {i.source for i in items} == {"www.energy.gov"}
        assert all(i.url == DEFAULT_SCRAPE_URLS[0] for i in items)

    @patch("solar_trends.providers.scrape.requests.get")
    def test_all_pages_failing_is_empty_not_fallback(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("offline")
        assert asyncio.run(ScrapeAdapter().collect(_params())) == []


# ---------------------------------------------------------------------------
# Fallback generator
# ---------------------------------------------------------------------------

class TestFallback:

    def test_fixed_records(self):
        assert isinstance(fallback.mock_feed_items()[0], FeedItem)
        assert isinstance(fallback.mock_social_posts()[0], SocialPost)
        assert fallback.mock_scraped_items()[0].source == "energy.gov"

    def test_seeded_synthetic_quotes_repeat(self):
        a = fallback.synthetic_quote("ENPH", random.Random(5))
        b = fallback.synthetic_quote("ENPH", random.Random(5))
        assert a == b

    def test_mock_market_data(self):
        rows = fallback.mock_market_data()
        assert len(rows) == 3
        assert [r.date for r in rows] == sorted((r.date for r in rows), reverse=True)
