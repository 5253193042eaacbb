"""
Command line interface for the SymCurve curvature tool.

The main arguments are the input FASTA and output track paths, given as
positional arguments.  The other arguments are optional, constrained, and
default to CURVATURE_CONFIG.

Usage::

    symcurve genome.fa.gz curvature.bedgraph --curve-step 15 --workers 4
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from Curvature import __version__
from Curvature.matrices import NucleotideLookupError
from Utilities.config.curvature import (
    CURVATURE_CONFIG,
    CurvatureConfigError,
    build_curvature_config,
    load_matrices_json,
)
from Utilities.curvature_runner import run_curvature

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"invalid value '{value}': must be >= 1")
    return number


def _unit_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("Value must be a floating-point number")
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError("The value must be between 0 and 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symcurve",
        description="Symmetry of DNA curvature: per-base curvature track from a FASTA file.",
    )
    parser.add_argument("input", help="FASTA input file path (plain or gzip)")
    parser.add_argument("output", help="bedGraph output file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose logging")
    parser.add_argument("-m", "--matrices", metavar="JSON",
                        help="optional parameter-table JSON file")
    parser.add_argument("--roll-type", choices=("simple", "active"),
                        default=CURVATURE_CONFIG['roll_type'],
                        help="roll table (default: %(default)s)")
    parser.add_argument("--curve-step", type=_positive_int, metavar="INT",
                        default=CURVATURE_CONFIG['curve_step'],
                        help="curve step (default: %(default)s)")
    parser.add_argument("--curve-scale", type=_unit_float, metavar="FLOAT",
                        default=CURVATURE_CONFIG['curve_scale'],
                        help="curve scale, between 0 and 1 (default: %(default)s)")
    parser.add_argument("--curve-step-one", type=_positive_int, metavar="INT",
                        default=CURVATURE_CONFIG['curve_step_one'],
                        help="curve step one (default: %(default)s)")
    parser.add_argument("--curve-step-two", type=_positive_int, metavar="INT",
                        default=CURVATURE_CONFIG['curve_step_two'],
                        help="curve step two (default: %(default)s)")
    parser.add_argument("--symcurv-win", type=_positive_int, metavar="INT",
                        default=CURVATURE_CONFIG['symcurv_win'],
                        help="symcurve window (default: %(default)s)")
    parser.add_argument("--symcurv-step", type=_positive_int, metavar="INT",
                        default=CURVATURE_CONFIG['symcurv_step'],
                        help="symcurve step (default: %(default)s)")
    parser.add_argument("--min-linker-size", type=_positive_int, metavar="INT",
                        default=CURVATURE_CONFIG['min_linker_size'],
                        help="minimum linker size (default: %(default)s)")
    parser.add_argument("--workers", type=_positive_int, metavar="INT", default=1,
                        help="worker processes (default: %(default)s)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        config = build_curvature_config(
            roll_type=args.roll_type,
            curve_step=args.curve_step,
            curve_scale=args.curve_scale,
            curve_step_one=args.curve_step_one,
            curve_step_two=args.curve_step_two,
            symcurv_win=args.symcurv_win,
            symcurv_step=args.symcurv_step,
            min_linker_size=args.min_linker_size,
        )
        parameters = load_matrices_json(args.matrices)
        run_curvature(args.input, args.output, config, parameters,
                      max_workers=args.workers)
    except (CurvatureConfigError, NucleotideLookupError) as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
