"""Abstract base class for source adapters and their failure boundary."""

import asyncio
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any, Callable, List

from solar_trends.core.logger import logger
from solar_trends.models.datatypes import AnalysisParams


def run_detached(fn: Callable[..., Any], *args: Any, name: str = "source") -> Future:
    """Run ``fn(*args)`` on a daemon thread and return a future for its outcome.

    Nothing joins the thread: a call abandoned by its caller keeps running in
    the background without holding up event loop or interpreter shutdown.
    """
    future: Future = Future()

    def worker() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    threading.Thread(target=worker, name=f"fetch-{name}", daemon=True).start()
    return future


class SourceAdapter(ABC):
    """Fetches raw data from one external source type.

    Subclasses implement :meth:`fetch` (live, blocking I/O that may raise) and
    :meth:`fallback` (synthetic records of the same shape). Callers use
    :meth:`collect`, which never lets an adapter failure escape.
    """

    #: Short name used in logs and as the aggregator's branch key.
    name: str = "source"

    @abstractmethod
    def fetch(self, params: AnalysisParams) -> List[Any]:
        """
        Fetch live intermediate records.

        Args:
            params (AnalysisParams): Category / timeframe / region of the run.

        Returns:
            List[Any]: Source-specific intermediate records.

        Raises:
            AdapterFailure: On transport or parse errors.
        """
        pass

    @abstractmethod
    def fallback(self, params: AnalysisParams) -> List[Any]:
        """Return synthetic records used when :meth:`fetch` fails."""
        pass

    async def collect(self, params: AnalysisParams) -> List[Any]:
        """Run :meth:`fetch` on a detached worker thread, falling back on any failure."""
        try:
            records = await asyncio.wrap_future(run_detached(self.fetch, params, name=self.name))
        except Exception as exc:
            logger.warning(f"{self.name}: live fetch failed ({exc}), using fallback data")
            return self.fallback(params)

        logger.info(f"{self.name}: {len(records)} live records")
        return records
