"""Solar equity quotes via yfinance.

Failure isolation is per symbol: a symbol whose lookup raises gets a
synthetic quote and the remaining symbols are still fetched live.
"""

import random
from typing import List, Optional

import pandas as pd
import yfinance as yf

from solar_trends.core.logger import logger
from solar_trends.models.datatypes import AnalysisParams, Quote
from solar_trends.providers.base import SourceAdapter
from solar_trends.providers.fallback import synthetic_quote

SOLAR_SYMBOLS = ["ENPH", "SEDG", "SPWR", "FSLR"]


class QuoteAdapter(SourceAdapter):
    """Latest session quote for a fixed list of solar tickers."""

    name = "quote"

    def __init__(
        self,
        symbols: Optional[List[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Args:
            symbols: Ticker symbols to quote (defaults to ``SOLAR_SYMBOLS``).
            rng: Random source for synthetic quotes.
        """
        self.symbols = list(symbols) if symbols else list(SOLAR_SYMBOLS)
        self.rng = rng

    def fetch(self, params: AnalysisParams) -> List[Quote]:
        quotes: List[Quote] = []
        for symbol in self.symbols:
            try:
                quote = self.fetch_quote(symbol)
            except Exception as exc:
                logger.warning(f"QuoteAdapter: {symbol} failed ({exc}), using synthetic quote")
                quotes.append(synthetic_quote(symbol, self.rng))
                continue
            if quote is None:
                logger.warning(f"QuoteAdapter: no session data for {symbol}, skipped")
                continue
            quotes.append(quote)
        return quotes

    def fetch_quote(self, symbol: str) -> Optional[Quote]:
        """
        Fetch the most recent session for ``symbol``.

        Args:
            symbol (str): The ticker symbol.

        Returns:
            Optional[Quote]: Close price, open-to-close change in percent and
            volume, or None when the provider returns no priced rows.
        """
        logger.info(f"QuoteAdapter: fetching {symbol}")
        hist = yf.Ticker(symbol).history(period="5d")
        if hist is None or hist.empty:
            return None

        # Rows with a missing open or close (halted or partial sessions) carry no price.
        prices = hist[["Open", "Close"]].apply(pd.to_numeric, errors="coerce")
        hist = hist[prices.notna().all(axis=1) & (prices["Open"] != 0)]
        if hist.empty:
            return None

        last = hist.iloc[-1]
        close = float(pd.to_numeric(last["Close"], errors="coerce"))
        open_ = float(pd.to_numeric(last["Open"], errors="coerce"))
        volume = pd.to_numeric(last.get("Volume"), errors="coerce")

        return Quote(
            symbol=symbol,
            price=close,
            change=(close - open_) / open_ * 100,
            volume=None if pd.isna(volume) else int(volume),
        )

    def fallback(self, params: AnalysisParams) -> List[Quote]:
        return [synthetic_quote(symbol, self.rng) for symbol in self.symbols]
