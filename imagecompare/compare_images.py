#!/usr/bin/env python3
"""
Compare a test image against one or more baseline images.
Usage: imagecompare [--tolerance T] <test_image> <baseline_image> [<baseline_image> ...]

The test passes if any baseline matches. The closest baseline is compared a
second time to print a summary, or, when nothing matched, to write diff
images and dashboard tags next to the test image.
"""

import argparse
import sys

from .errors import (
    EXIT_SUCCESS,
    INTERNAL_ERROR_STATUS,
    NO_MATCH_STATUS,
    InternalError,
    UsageError,
)
from .imaging import DEFAULT_TOLERANCE
from .regression import regression_test_image

HELP_FLAGS = ("-h", "--help")


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = ArgumentParser(
        prog="imagecompare",
        description='Compare a test image with baseline images',
        epilog='Note that if you supply more than one baseline image, this test will pass '
               'if any of them match the test image.',
        add_help=False,
    )
    parser.add_argument(
        'images',
        nargs='*',
        help='Test image followed by one or more baseline images'
    )
    parser.add_argument(
        '--tolerance',
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f'Per-pixel differences up to this value are ignored (default: {DEFAULT_TOLERANCE})'
    )
    parser.add_argument(
        '-h', '--help',
        action='store_true',
        help='Show this message and exit (only as the first argument)'
    )
    return parser


def find_best_baseline(test_image, baselines, tolerance=DEFAULT_TOLERANCE):
    """
    Compare the test image with each baseline until one matches.

    Args:
        test_image: Path to the test image
        baselines: Baseline image paths, tried in order
        tolerance: Per-pixel tolerance passed to the comparison

    Returns:
        Tuple of (index, status) for the baseline with the lowest status.
        Ties keep the earlier baseline.
    """
    best_index, best_status = 0, NO_MATCH_STATUS
    for index, baseline in enumerate(baselines):
        status = regression_test_image(test_image, baseline, tolerance=tolerance)
        if status < best_status:
            best_index, best_status = index, status
        if best_status == EXIT_SUCCESS:
            break
    return best_index, best_status


def image_compare(args):
    """
    Run the comparison for a list of command line arguments.

    Args:
        args: Arguments without the program name, e.g.
              ["out.png", "baseline.png", "baseline.1.png"]

    Returns:
        int: 0 if a baseline matched, 1 on mismatch or usage error,
             1000 if images could not be loaded, -1 on an unexpected error
    """
    args = list(args)
    parser = build_parser()
    try:
        options = parser.parse_intermixed_args(args)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return e.status

    # Help only counts as the first argument of an otherwise incomplete call
    if args and args[0] in HELP_FLAGS and len(options.images) < 2:
        parser.print_help()
        return EXIT_SUCCESS

    if len(options.images) < 2:
        print("Error: Provide a test image and at least one baseline image", file=sys.stderr)
        parser.print_help(sys.stderr)
        return UsageError.status

    test_image, baselines = options.images[0], options.images[1:]

    try:
        best_index, best_status = find_best_baseline(test_image, baselines, options.tolerance)

        # Report on the closest match; write diff images only if it failed
        regression_test_image(
            test_image,
            baselines[best_index],
            report=True,
            differences=best_status != EXIT_SUCCESS,
            tolerance=options.tolerance,
        )
    except Exception as e:
        error = InternalError(f"{type(e).__name__}: {e}")
        print("image compare caught an exception:")
        print(error)
        best_status = INTERNAL_ERROR_STATUS

    print(best_status)
    return best_status


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    sys.exit(image_compare(argv))


if __name__ == "__main__":
    main()
