"""Entry point for running PoolSense as a module.

Usage:
    python -m poolsense --ph 7.0 --chlorine 0.5          # Env vars or defaults
    python -m poolsense -c /path/to/config.yaml --appearance green
    python -m poolsense --help
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import (
    create_default_config,
    load_config,
    load_config_from_env,
    print_env_help,
)
from .engine import calculate_treatment
from .models import Measurements, TreatmentResult, VisualState, WaterAppearance
from .share import format_share_text
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="poolsense",
        description="Pool and spa water treatment calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Environment variables (no config file needed):
  POOL_VOLUME=30000 poolsense --ph 7.9 --alkalinity 140

  # Config file with custom products:
  poolsense -c config.yaml --ph 7.0 --chlorine 0.2 --appearance cloudy
  poolsense --generate-config > config.yaml

  # Compare with the previous analysis:
  poolsense --ph 7.0 --previous-ph 6.9 --share
        """,
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (optional if using env vars)",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Print default configuration and exit",
    )
    parser.add_argument(
        "--env-help",
        action="store_true",
        help="Print environment variable help and exit",
    )
    parser.add_argument(
        "--volume",
        type=float,
        default=None,
        help="Override the configured pool volume (liters)",
    )

    readings = parser.add_argument_group("readings")
    readings.add_argument("--ph", type=float, help="pH")
    readings.add_argument("--chlorine", type=float, help="Free chlorine (ppm)")
    readings.add_argument("--alkalinity", type=float, help="Total alkalinity (ppm)")
    readings.add_argument("--hardness", type=float, help="Calcium hardness (ppm)")
    readings.add_argument("--cyanuric", type=float, help="Cyanuric acid (ppm)")
    readings.add_argument(
        "--appearance",
        choices=[a.value for a in WaterAppearance],
        default=WaterAppearance.CLEAR.value,
        help="Water appearance (default: clear)",
    )
    readings.add_argument("--strong-smell", action="store_true", help="Strong odor noticed")
    readings.add_argument("--heavy-usage", action="store_true", help="Heavy recent usage")

    previous = parser.add_argument_group("previous analysis")
    previous.add_argument("--previous-ph", type=float, help="pH at the last analysis")
    previous.add_argument(
        "--previous-chlorine", type=float, help="Free chlorine at the last analysis"
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print the result as JSON")
    output.add_argument("--share", action="store_true", help="Print a shareable summary")

    return parser


def format_result(result: TreatmentResult) -> str:
    """Render a result for the terminal."""
    lines = [f"Status: {str(result.status).upper()} - {result.summary}"]

    for step in result.steps:
        lines.append("")
        if step.dose > 0:
            lines.append(f"{step.order}. {step.title}: {step.dose} {step.unit} of {step.product}")
        else:
            lines.append(f"{step.order}. {step.title} ({step.product})")
        lines.append(f"   {step.instruction}")
        if step.wait_duration and step.wait_duration != "-":
            lines.append(f"   Wait: {step.wait_duration}")

    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.generate_config:
        print(create_default_config())
        return 0

    if args.env_help:
        print(print_env_help())
        return 0

    try:
        # An explicit config path must exist; otherwise env vars and defaults apply.
        if args.config:
            config = load_config(args.config)
        else:
            config = load_config_from_env()
        setup_logging(
            level=config.logging.level,
            log_file=config.logging.file,
            format_string=config.logging.format,
        )
        if args.config:
            logger.info(f"Using configuration file: {args.config}")

        pool_config = config.pool
        if args.volume is not None:
            pool_config = pool_config.model_copy(update={"volume": args.volume})
        pool = pool_config.to_pool()

        measurements = Measurements(
            ph=args.ph,
            chlorine=args.chlorine,
            alkalinity=args.alkalinity,
            hardness=args.hardness,
            cyanuric=args.cyanuric,
        )
        visual = VisualState(
            appearance=args.appearance,
            strong_smell=args.strong_smell,
            heavy_usage=args.heavy_usage,
        )

        previous = None
        if args.previous_ph is not None or args.previous_chlorine is not None:
            previous = Measurements(ph=args.previous_ph, chlorine=args.previous_chlorine)

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Includes pydantic validation errors
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = calculate_treatment(
        pool,
        measurements,
        visual,
        catalog=config.catalog(),
        previous_measurements=previous,
    )
    logger.info(f"Calculated treatment {result.id}: {result.status}")

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif args.share:
        print(format_share_text(result))
    else:
        print(format_result(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
