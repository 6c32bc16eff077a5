"""Command-line entry point: annotate a recorded trace and print the step summary."""

import argparse
import logging
import sys
from typing import List, Optional

import polars as pl

from .config import AlgoConfig
from .data_loader import SensorTraceLoader, annotate_trace, write_annotated_trace
from .metrics_display import format_summary
from .step_pipeline import StepCounterPipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pedometer',
        description="Count steps and classify motion from a recorded accelerometer trace.",
    )
    parser.add_argument('input', help="Input trace (CSV, two header lines)")
    parser.add_argument('output', help="Annotated output CSV")
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    config = AlgoConfig()
    loader = SensorTraceLoader('.', config)
    try:
        df = loader.load_trace(args.input)
    except (FileNotFoundError, ValueError, pl.exceptions.PolarsError) as e:
        logger.error(f"Cannot read input trace {args.input}: {e}")
        print(f"Cannot open input file: {args.input}", file=sys.stderr)
        return 1

    logger.info(f"Loaded {len(df)} records from {args.input}")
    pipeline = StepCounterPipeline(config)
    annotated = annotate_trace(df, pipeline)

    try:
        write_annotated_trace(annotated, args.output)
    except (OSError, pl.exceptions.PolarsError) as e:
        logger.error(f"Cannot write output file {args.output}: {e}")
        print(f"Cannot open output file: {args.output}", file=sys.stderr)
        return 1
    logger.info(f"Wrote annotated trace to {args.output}")

    print(format_summary(pipeline.summary()))
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
