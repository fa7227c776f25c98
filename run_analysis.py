"""Solar market analysis entry point.

Usage:
    python run_analysis.py [--category all] [--timeframe 7d] [--region global]

Loads config.yaml, runs one analysis, writes market_data.csv to the output
directory, validates it and prints the summary.
"""

import argparse
import sys

from dotenv import load_dotenv

load_dotenv()  # must precede solar_trends imports so env vars are available at module load

from solar_trends.core.config import load_config  # noqa: E402
from solar_trends.core.logger import logger, use_output_dir  # noqa: E402
from solar_trends.pipeline.engine import analyze_market  # noqa: E402
from solar_trends.pipeline.export import write_csv  # noqa: E402
from solar_trends.pipeline.validator import validate  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one solar market analysis.")
    parser.add_argument("--category", default="all", help="solar | inverters | batteries | all")
    parser.add_argument("--timeframe", default="7d")
    parser.add_argument("--region", default="global", help="global | us | eu | asia")
    parser.add_argument("--config", default="config.yaml")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the analysis. Returns 0 on success, 1 on failure."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        logger.error(f"run_analysis: failed to load config: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    output_dir = config.get("output_dir", "output")
    use_output_dir(output_dir)

    result = analyze_market(args.category, args.timeframe, args.region, config=config)
    if not result.success:
        print(f"ERROR: analysis failed: {result.error}", file=sys.stderr)
        return 1

    csv_path = write_csv(result.data, output_dir)
    passed, messages = validate(csv_path)
    for msg in messages:
        logger.info(f"run_analysis: {msg}")

    summary = result.summary
    print(f"SUCCESS: {summary.total_data_points} data points written to {csv_path}")
    print(f"  market direction : {summary.market_direction}")
    print(f"  sentiment        : {summary.sentiment}")
    print(f"  top keyword      : {summary.top_keyword}")
    print(f"  validation       : {'passed' if passed else 'FAILED'}")
    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())
