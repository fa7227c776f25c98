"""Output validator: checks an exported market_data.csv.

Checks:
  1. Required columns present
  2. Every date is an ISO calendar date and dates never increase
  3. Sentiment is Positive / Negative / Neutral
  4. Product and source are non-empty

Usage:
    python -m solar_trends.pipeline.validator output/market_data.csv
"""

import csv
import sys
from datetime import date
from typing import List, Tuple

from solar_trends.pipeline.classifier import SENTIMENT_LABELS

_REQUIRED_COLS = ["date", "product", "priceTrend", "sentiment", "volume", "source"]


def validate(csv_path: str) -> Tuple[bool, List[str]]:
    """Run all validation checks against csv_path.

    Args:
        csv_path: Absolute or relative path to ``market_data.csv``.

    Returns:
        Tuple of ``(passed: bool, messages: list[str])``.
        ``messages`` contains PASS/FAIL lines for each check.
    """
    messages: List[str] = []
    passed = True

    # ── load ──────────────────────────────────────────────────────────────────
    try:
        with open(csv_path, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
    except FileNotFoundError:
        return False, [f"FAIL  file not found: {csv_path}"]
    except (OSError, csv.Error) as exc:
        return False, [f"FAIL  could not read CSV: {exc}"]

    # ── column presence ───────────────────────────────────────────────────────
    if not rows:
        return False, ["FAIL  CSV is empty"]
    missing = [c for c in _REQUIRED_COLS if c not in rows[0]]
    if missing:
        return False, [f"FAIL  missing columns: {missing}"]
    messages.append(f"PASS  {len(rows)} rows with all required columns")

    # ── check 2: ISO dates, newest first ──────────────────────────────────────
    bad_dates = []
    for i, row in enumerate(rows, start=2):
        try:
            date.fromisoformat(row["date"])
        except ValueError:
            bad_dates.append((i, row["date"]))
    if bad_dates:
        messages.append(f"FAIL  invalid dates in {len(bad_dates)} rows: {bad_dates[:3]}")
        passed = False
    else:
        messages.append("PASS  all dates are ISO calendar dates")
        out_of_order = [
            i + 3 for i, (a, b) in enumerate(zip(rows, rows[1:]))
            if b["date"] > a["date"]
        ]
        if out_of_order:
            messages.append(f"FAIL  dates increase at rows {out_of_order[:5]}")
            passed = False
        else:
            messages.append("PASS  rows sorted by date descending")

    # ── check 3: sentiment labels ─────────────────────────────────────────────
    bad_sentiment = [
        (i, r["sentiment"]) for i, r in enumerate(rows, start=2)
        if r["sentiment"] not in SENTIMENT_LABELS
    ]
    if bad_sentiment:
        messages.append(f"FAIL  unknown sentiment in {len(bad_sentiment)} rows: {bad_sentiment[:3]}")
        passed = False
    else:
        messages.append("PASS  sentiment ∈ {Positive, Negative, Neutral}")

    # ── check 4: non-empty product / source ───────────────────────────────────
    for col in ("product", "source"):
        empty_rows = [i + 2 for i, r in enumerate(rows) if not (r.get(col) or "").strip()]
        if empty_rows:
            messages.append(f"FAIL  {col}: empty at rows {empty_rows}")
            passed = False
        else:
            messages.append(f"PASS  {col}: no empty values")

    return passed, messages


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: python -m solar_trends.pipeline.validator <path_to_csv>")
        return 1
    passed, messages = validate(sys.argv[1])
    for msg in messages:
        print(msg)
    if passed:
        print("\nVALIDATION PASSED ✓")
        return 0
    print("\nVALIDATION FAILED ✗")
    return 1


if __name__ == "__main__":
    sys.exit(main())
