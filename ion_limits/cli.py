"""
Command line entry point for the Limits of Ions stage sizer.

Usage:
    python -m ion_limits
    python -m ion_limits --preset legacy
    python -m ion_limits --dead-weight 0 --dead-weight 250 --output-dir out
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import SweepConfig, format_weight, load_part_data
from .constants import DAWN_STAGE, StageParts
from .report import report_scenarios
from .sweep import run_scenarios

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ion-limits",
        description="Size the batteries of an ion stage for single-burn delta-v targets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    ion-limits
    ion-limits --preset legacy
    ion-limits --config sweep.json --parts parts.json --stdout
        """,
    )

    # Sweep settings
    parser.add_argument(
        "--preset",
        choices=["reference", "legacy"],
        default=None,
        help="Built-in sweep domains (default: reference)",
    )
    parser.add_argument(
        "--config",
        help="JSON sweep configuration (overrides --preset)",
    )
    parser.add_argument(
        "--dead-weight",
        type=float,
        action="append",
        dest="dead_weights",
        metavar="KG",
        help="Dead-weight scenario in kg, repeatable (replaces the configured set)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Solver iteration cap per cell",
    )

    # Parts
    parser.add_argument(
        "--parts",
        help="JSON part data file (default: built-in Dawn stage)",
    )
    parser.add_argument("--engine", default="dawn", help="Engine key in the part data")
    parser.add_argument("--tank", default="pb_x50r", help="Tank key in the part data")
    parser.add_argument("--battery", default="z_100", help="Battery key in the part data")

    # Output
    parser.add_argument(
        "--output-dir",
        help="Directory for results files",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print tables instead of writing files",
    )

    # Logging
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every solver trial",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def load_config(args: argparse.Namespace) -> SweepConfig:
    """Build the sweep configuration from parsed arguments."""
    if args.config:
        config = SweepConfig.from_json(args.config)
    else:
        config = SweepConfig.preset(args.preset or "reference")

    if args.dead_weights:
        config.dead_weights = args.dead_weights
    if args.max_iterations is not None:
        config.max_iterations = args.max_iterations
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.stdout:
        config.write_files = False
        config.print_tables = True
    return config.validate()


def load_parts(args: argparse.Namespace) -> StageParts:
    """Select the stage parts from parsed arguments."""
    if not args.parts:
        return DAWN_STAGE
    return StageParts.from_part_data(
        load_part_data(args.parts),
        engine=args.engine,
        tank=args.tank,
        battery=args.battery,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
        parts = load_parts(args)
    except (ValueError, KeyError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    scenarios = run_scenarios(config, parts)
    written = report_scenarios(scenarios, config)

    for scenario in scenarios:
        s = scenario.summary
        print(
            f"{format_weight(scenario.dead_weight_kg)} kg dead weight: "
            f"{s['converged']} sized, {s['capacity_infeasible']} over capacity, "
            f"{s['non_convergence']} not converged",
            file=sys.stderr,
        )
    for path in written:
        print(f"Wrote {path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
