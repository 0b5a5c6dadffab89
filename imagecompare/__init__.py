"""Image regression comparison against one or more baseline images."""

from .compare_images import image_compare, main
from .regression import regression_test_image

__version__ = "1.0.0"
