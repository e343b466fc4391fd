"""Compute indicators for one column of an options-chain CSV export.

Samples are averaged per period key, then every configured indicator,
demand/supply zone and summary is computed for the resulting series.

Usage:
    optiscope chain.csv                                   # underlying_price per imported_date
    optiscope chain.csv --value open_interest             # Another value column
    optiscope chain.csv --config config/indicators.yaml   # Calculators from YAML
    optiscope chain.csv --output indicators.csv           # Also write the indicator table
"""

import argparse
import logging
from pathlib import Path

import pandas as pd

from config.settings import get_settings
from optiscope.data.aggregation import aggregate_frame
from optiscope.indicators.pipeline import IndicatorPipeline
from optiscope.utils.logging import setup_logging_from_config

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Compute technical indicators for an options-chain CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("csv", type=Path, help="CSV file with one option-chain sample per row")
    parser.add_argument(
        "--key", "-k",
        default="imported_date",
        help="Period key column (default: imported_date)"
    )
    parser.add_argument(
        "--value", "-v",
        default="underlying_price",
        help="Value column to aggregate (default: underlying_price)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="YAML indicator config (default: calculators from settings)"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write the indicator table to this CSV file"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    settings = get_settings()

    logging_config = settings.logging
    if args.log_level:
        logging_config = logging_config.model_copy(update={"level": args.log_level})
    setup_logging_from_config(logging_config)

    if not args.csv.exists():
        logger.error("Input file not found: %s", args.csv)
        return 1

    samples = pd.read_csv(args.csv)
    series = aggregate_frame(samples, args.key, args.value)
    if series.empty:
        logger.error("No usable %s values keyed by %s in %s", args.value, args.key, args.csv)
        return 1
    logger.info("Aggregated %d samples into %d periods", len(samples), len(series))

    if args.config:
        pipeline = IndicatorPipeline.from_config(args.config)
    else:
        pipeline = IndicatorPipeline.default(settings)
    report = pipeline.analyze(series)

    for name, text in report.summaries.items():
        print(f"{name}: {text}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        report.frame.to_csv(args.output)
        logger.info("Wrote %d rows to %s", len(report.frame), args.output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
