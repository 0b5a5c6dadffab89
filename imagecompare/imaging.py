"""
Thin wrappers around Pillow and numpy for the image operations a
regression comparison needs: load, size, difference, rescale, slice, write.

Images are float64 numpy arrays. Files Pillow can decode come back as 2-D
(rows, cols) luminance arrays; raw ``.npy`` arrays keep their own shape.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from .errors import DimensionMismatchError, LoadError

MAX_DIMENSION = 6
DEFAULT_TOLERANCE = 2.0

# Modes that already hold a single scalar channel
SCALAR_MODES = ("F", "I", "L", "I;16", "I;16B", "I;16L", "I;16N")


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of a tolerance-gated pixel-wise comparison."""

    total_difference: float
    differing_pixels: int
    total_pixels: int
    difference: np.ndarray

    @property
    def passed(self):
        return self.total_difference == 0


def load_image(path):
    """
    Load an image file into a float64 array.

    Args:
        path: Path to any file Pillow can decode, or a ``.npy`` array

    Returns:
        np.ndarray: the samples, converted to float64

    Raises:
        LoadError: if the file is missing, unreadable, too large or not an image
    """
    path = Path(path)
    try:
        if path.suffix.lower() == ".npy":
            array = np.load(path, allow_pickle=False)
        else:
            with Image.open(path) as img:
                img.load()
                if img.mode not in SCALAR_MODES:
                    img = img.convert("RGB").convert("F")
                array = np.asarray(img)
        array = np.asarray(array, dtype=np.float64)
    except (OSError, UnidentifiedImageError, DecompressionBombError, ValueError, TypeError) as e:
        raise LoadError(path, e) from e

    if array.ndim > MAX_DIMENSION:
        raise LoadError(path, f"{array.ndim}-D images are not supported (max {MAX_DIMENSION})")
    return array


def image_size(image):
    """Extent along every axis, fastest-varying first (width, height, ...)."""
    return tuple(int(n) for n in reversed(image.shape))


def check_sizes(baseline, test):
    """Raise DimensionMismatchError unless both images have identical extents."""
    baseline_size = image_size(baseline)
    test_size = image_size(test)
    if baseline_size != test_size:
        raise DimensionMismatchError(baseline_size, test_size)


def compare_arrays(baseline, test, tolerance=DEFAULT_TOLERANCE):
    """
    Compare two same-sized images pixel by pixel.

    Differences of at most ``tolerance`` intensity units are ignored; the
    rest are summed into the total difference.

    Returns:
        ComparisonResult
    """
    check_sizes(baseline, test)

    diff = np.abs(test - baseline)
    mask = diff > tolerance
    difference = np.where(mask, diff, 0.0)

    return ComparisonResult(
        total_difference=float(np.sum(difference)),
        differing_pixels=int(np.count_nonzero(mask)),
        total_pixels=int(difference.size),
        difference=difference,
    )


def rescale_intensity(image, out_min=0, out_max=255):
    """Linearly map the image's [min, max] onto [out_min, out_max] as uint8."""
    low = float(np.min(image))
    high = float(np.max(image))

    if high != low:
        scale = (out_max - out_min) / (high - low)
    elif high != 0:
        scale = (out_max - out_min) / high
    else:
        scale = 0.0
    shift = out_min - low * scale

    scaled = image * scale + shift
    return np.clip(scaled, out_min, out_max).astype(np.uint8)


def extract_slice(image):
    """
    Return the 2-D plane at index 0 of every axis past the first two.

    Axes are counted in image_size order, so the plane is made of the last
    two numpy axes and the leading numpy axes are fixed at 0.
    """
    if image.ndim < 2:
        return np.atleast_2d(image)
    index = (0,) * (image.ndim - 2) + (slice(None), slice(None))
    return image[index]


def write_image(image, path):
    """Write a 2-D uint8 array as an 8-bit grayscale PNG."""
    Image.fromarray(np.ascontiguousarray(image)).save(path, format="PNG")
