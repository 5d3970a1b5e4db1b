"""
Allow running the package directly: python -m termbrot
"""
import argparse
import logging

from .app import run
from .view import HOME_DEPTH, HOME_RADIUS, MIN_DEPTH


def positive_float(text):
    value = float(text)
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


def depth_type(text):
    value = int(text)
    if value < MIN_DEPTH:
        raise argparse.ArgumentTypeError(f"must be at least {MIN_DEPTH}, got {text}")
    return value


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="termbrot",
        description="Explore the Mandelbrot set in a kitty graphics terminal.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--center",
        type=float,
        nargs=2,
        metavar=("RE", "IM"),
        default=[0.0, 0.0],
        help="starting center of the view",
    )
    parser.add_argument(
        "--radius",
        type=positive_float,
        default=HOME_RADIUS,
        help="starting half-extent of the shorter side of the view",
    )
    parser.add_argument(
        "--depth",
        type=depth_type,
        default=HOME_DEPTH,
        help="starting maximum iteration count",
    )
    parser.add_argument(
        "--decompose",
        action="store_true",
        help="start with binary decomposition colouring on",
    )
    parser.add_argument("--no-help", action="store_true", help="hide the key help")
    parser.add_argument("--no-info", action="store_true", help="hide the info panel")
    parser.add_argument(
        "--log-file",
        help="write log records to this file (the terminal itself is used for drawing)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for --log-file",
    )

    args = parser.parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        )

    run(
        center=complex(*args.center),
        radius=args.radius,
        depth=args.depth,
        decompose=args.decompose,
        show_help=not args.no_help,
        show_info=not args.no_info,
    )


if __name__ == "__main__":
    main()
