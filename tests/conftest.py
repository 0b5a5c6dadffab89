import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def make_png(tmp_path):
    """Factory writing a grayscale PNG filled with ``value``; returns its path as str."""
    def _make(name, width=5, height=5, value=10, array=None):
        if array is None:
            array = np.full((height, width), value, dtype=np.uint8)
        path = tmp_path / name
        Image.fromarray(array).save(path)
        return str(path)
    return _make


@pytest.fixture
def make_npy(tmp_path):
    def _make(name, array):
        path = tmp_path / name
        np.save(path, array)
        return str(path)
    return _make


@pytest.fixture
def not_an_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_text("this is not an image")
    return str(path)
