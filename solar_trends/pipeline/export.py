"""CSV serialization of market data points."""

import csv
import io
import os
from typing import Sequence

from solar_trends.core.logger import logger
from solar_trends.models.datatypes import MarketDataPoint

CSV_FILENAME = "market_data.csv"


def to_csv(points: Sequence[MarketDataPoint]) -> str:
    """Render points as CSV text; commas inside values become spaces.

    Returns an empty string when there is nothing to export.
    """
    if not points:
        return ""

    rows = [p.to_dict() for p in points]
    header = list(rows[0].keys())

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=header, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: str(row[key]).replace(",", " ") for key in header})
    return buffer.getvalue().rstrip("\n")


def write_csv(points: Sequence[MarketDataPoint], output_dir: str = "output") -> str:
    """Write ``market_data.csv`` into ``output_dir`` (overwrites) and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, CSV_FILENAME)
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(to_csv(points))
    logger.info(f"export: wrote {len(points)} rows to {path}")
    return path
