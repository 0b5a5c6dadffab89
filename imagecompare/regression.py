"""
Compare a test image against a single baseline image.
"""

from . import dashboard
from .errors import EXIT_FAILURE, EXIT_SUCCESS, DimensionMismatchError, LoadError
from .imaging import (
    DEFAULT_TOLERANCE,
    check_sizes,
    compare_arrays,
    extract_slice,
    load_image,
    rescale_intensity,
    write_image,
)

# (suffix, dashboard tag name) for each diagnostic artifact, in write order
DIFF_ARTIFACT = (".diff.png", "DifferenceImage")
BASELINE_ARTIFACT = (".base.png", "BaselineImage")
TEST_ARTIFACT = (".test.png", "TestImage")


def regression_test_image(test_path, baseline_path, report=False, differences=False,
                          tolerance=DEFAULT_TOLERANCE):
    """
    Compare a test image with one baseline image.

    Args:
        test_path: Path to the image produced by the test
        baseline_path: Path to the reference image
        report: Print a summary after comparing
        differences: With ``report``, also write the diff/base/test PNGs
                     next to the test image and print dashboard tags
        tolerance: Per-pixel differences up to this value are ignored

    Returns:
        int: 0 on match, 1 on difference or size mismatch, 1000 if either
             image could not be loaded
    """
    try:
        baseline = load_image(baseline_path)
    except LoadError as e:
        print(e)
        return e.status

    try:
        test = load_image(test_path)
    except LoadError as e:
        print(e)
        return e.status

    try:
        check_sizes(baseline, test)
    except DimensionMismatchError as e:
        print("The size of the Baseline image and Test image do not match!")
        print(f"Baseline image: {baseline_path} has size {list(e.baseline_size)}")
        print(f"Test image:     {test_path} has size {list(e.test_size)}")
        return e.status

    result = compare_arrays(baseline, test, tolerance)

    if report:
        if differences:
            write_diagnostics(test_path, result, baseline, test)
        else:
            print_summary(result, tolerance)

    return EXIT_SUCCESS if result.passed else EXIT_FAILURE


def print_summary(result, tolerance):
    print(f"Results (tolerance: {tolerance}):")
    print(f"  Total pixels:        {result.total_pixels:,}")
    print(f"  Different pixels:    {result.differing_pixels:,}")
    print(f"  Total difference:    {result.total_difference:g}")
    if result.passed:
        print("✓ Images are IDENTICAL!")
    else:
        print("✗ Images are DIFFERENT")


def write_diagnostics(test_path, result, baseline, test):
    """
    Write the difference, baseline and test images as 8-bit PNG slices.

    Each artifact is attempted on its own; a failure is printed and the
    remaining artifacts are still written.

    Returns:
        list: paths of the artifacts that were written
    """
    dashboard.measurement("ImageError", result.total_difference)

    written = []
    for (suffix, tag), image in ((DIFF_ARTIFACT, result.difference),
                                 (BASELINE_ARTIFACT, baseline),
                                 (TEST_ARTIFACT, test)):
        path = f"{test_path}{suffix}"
        if write_artifact(image, path):
            dashboard.measurement_file(tag, path)
            written.append(path)
    return written


def write_artifact(image, path):
    try:
        plane = extract_slice(rescale_intensity(image))
    except (ValueError, TypeError) as e:
        print(f"Error during rescale of {path}: {e}")
        return False

    try:
        write_image(plane, path)
    except (OSError, ValueError) as e:
        print(f"Error during write of {path}: {e}")
        return False
    return True
