"""
Error types and status codes for image regression comparisons.
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
LOAD_ERROR_STATUS = 1000
INTERNAL_ERROR_STATUS = -1

# Worse than any status a comparison can return
NO_MATCH_STATUS = 2001


class ImageCompareError(Exception):
    """Base class for all comparison errors."""

    status = EXIT_FAILURE


class UsageError(ImageCompareError):
    """Wrong number of arguments or an unknown option."""

    status = EXIT_FAILURE


class LoadError(ImageCompareError):
    """An image file could not be read or decoded."""

    status = LOAD_ERROR_STATUS

    def __init__(self, path, reason):
        super().__init__(f"Exception detected while reading {path} : {reason}")
        self.path = path
        self.reason = reason


class DimensionMismatchError(ImageCompareError):
    """Baseline and test images do not have the same extents."""

    status = EXIT_FAILURE

    def __init__(self, baseline_size, test_size):
        super().__init__(f"size mismatch: {list(baseline_size)} vs {list(test_size)}")
        self.baseline_size = baseline_size
        self.test_size = test_size


class InternalError(ImageCompareError):
    """Any unexpected failure caught at the top of a comparison run."""

    status = INTERNAL_ERROR_STATUS
